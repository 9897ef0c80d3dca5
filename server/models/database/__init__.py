# models/database/__init__.py

"""
Database Models Package

SQLAlchemy models for the MedBridge translator:
- Consultation sessions and their lifecycle status
"""

from .base import Base, engine, SessionLocal, build_engine
from .models import Session, SESSION_ACTIVE, SESSION_ENDED

__all__ = [
    "Base",
    "engine",
    "SessionLocal",
    "build_engine",
    "Session",
    "SESSION_ACTIVE",
    "SESSION_ENDED"
]
