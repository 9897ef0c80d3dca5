# models/database/models.py

from sqlalchemy import Column, String, DateTime, Index
from datetime import datetime, timezone
from .base import Base
import uuid

SESSION_ACTIVE = "active"
SESSION_ENDED = "ended"

def _utcnow():
    return datetime.now(timezone.utc)

class Session(Base):
    """Clinician/patient consultation sessions"""
    __tablename__ = "sessions"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    clinician_id = Column(String(64), nullable=False)
    patient_language = Column(String(32), nullable=False)  # SupportedLanguage display name
    session_status = Column(String(16), nullable=False, default=SESSION_ACTIVE)  # active, ended

    start_time = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    end_time = Column(DateTime(timezone=True))
    created_date = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    __table_args__ = (
        Index("ix_sessions_clinician_created", "clinician_id", "created_date"),
    )
