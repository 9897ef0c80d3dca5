# core/__init__.py

"""
Core Configuration and Utilities Package

Provides application-wide configuration, logging, and exception handling:
- Environment-based configuration management
- Console and rotating-file logging
- Custom exceptions for better error handling
"""

from .config import settings, Settings
from .logging_config import setup_logging
from .exceptions import (
    MedBridgeException,
    DatabaseError,
    SessionNotFoundError,
    TranslationError,
    ValidationError,
    UnsupportedLanguageError,
    PhraseBookBusyError,
    ConfigurationError
)

__all__ = [
    "settings",
    "Settings",
    "setup_logging",
    "MedBridgeException",
    "DatabaseError",
    "SessionNotFoundError",
    "TranslationError",
    "ValidationError",
    "UnsupportedLanguageError",
    "PhraseBookBusyError",
    "ConfigurationError"
]
