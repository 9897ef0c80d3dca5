# core/exceptions.py

"""
Custom exceptions for MedBridge application
Provides specific error types for better error handling and user experience
"""

class MedBridgeException(Exception):
    """Base exception for MedBridge application"""
    def __init__(self, message: str, error_code: str = None):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)

class DatabaseError(MedBridgeException):
    """Database operation errors"""
    pass

class SessionNotFoundError(DatabaseError):
    """Requested consultation session does not exist"""
    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Session not found: {session_id}", "SESSION_NOT_FOUND")

class TranslationError(MedBridgeException):
    """Translation service errors"""
    def __init__(self, message: str, provider: str = None):
        self.provider = provider
        super().__init__(message, "TRANSLATION_ERROR")

class ValidationError(MedBridgeException):
    """Input validation errors"""
    pass

class UnsupportedLanguageError(ValidationError):
    """Language is not in the supported patient language set"""
    def __init__(self, language: str):
        self.language = language
        super().__init__(f"Unsupported language: {language}", "UNSUPPORTED_LANGUAGE")

class PhraseBookBusyError(MedBridgeException):
    """A phrase translation is already in flight"""
    def __init__(self, phrase: str):
        self.phrase = phrase
        super().__init__(f"Phrase book is busy with: {phrase}", "PHRASE_BOOK_BUSY")

class ConfigurationError(MedBridgeException):
    """Configuration and setup errors"""
    pass
