# models/__init__.py

"""
MedBridge Models Package

Data models and reference data:
- Database models with SQLAlchemy
- Supported patient languages
"""

# Import database models for easy access
from .database import (
    Base,
    engine,
    SessionLocal,
    Session,
    SESSION_ACTIVE,
    SESSION_ENDED
)
from .languages import SupportedLanguage, ENGLISH, language_code, list_languages

__all__ = [
    "Base",
    "engine",
    "SessionLocal",
    "Session",
    "SESSION_ACTIVE",
    "SESSION_ENDED",
    "SupportedLanguage",
    "ENGLISH",
    "language_code",
    "list_languages"
]
