# =============================================================================
# models/languages.py
# =============================================================================

from enum import Enum
from typing import Dict, List

from core.exceptions import UnsupportedLanguageError

ENGLISH = "English"
ENGLISH_CODE = "en"

class SupportedLanguage(Enum):
    """Patient languages offered when beginning a session"""
    POLISH = ("Polish", "🇵🇱", "pl")
    PUNJABI = ("Punjabi", "🇮🇳", "pa")
    URDU = ("Urdu", "🇵🇰", "ur")
    ROMANIAN = ("Romanian", "🇷🇴", "ro")
    ARABIC = ("Arabic", "🇸🇦", "ar")

    def __init__(self, display_name: str, flag: str, code: str):
        self.display_name = display_name
        self.flag = flag
        self.code = code

    @classmethod
    def from_name(cls, name: str) -> "SupportedLanguage":
        """Resolve a language by display name (case-insensitive)"""
        if name:
            wanted = name.strip().lower()
            for language in cls:
                if language.display_name.lower() == wanted:
                    return language
        raise UnsupportedLanguageError(name)

    def to_dict(self) -> Dict:
        return {
            "name": self.display_name,
            "flag": self.flag,
            "code": self.code
        }

def language_code(name: str) -> str:
    """Locale code for English or any supported patient language"""
    if name and name.strip().lower() == ENGLISH.lower():
        return ENGLISH_CODE
    return SupportedLanguage.from_name(name).code

def list_languages() -> List[Dict]:
    return [language.to_dict() for language in SupportedLanguage]
