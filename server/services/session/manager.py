# =============================================================================
# services/session/manager.py - Consultation session persistence
# =============================================================================

import logging
from typing import Callable, Dict, List, Optional
from datetime import datetime, timezone
from sqlalchemy.orm import Session as DBSession

from models.database import SessionLocal, Session, SESSION_ACTIVE, SESSION_ENDED
from models.languages import SupportedLanguage
from core.exceptions import DatabaseError, SessionNotFoundError, ValidationError

logger = logging.getLogger(__name__)

# Columns a caller may patch through update_session
UPDATABLE_FIELDS = {"session_status", "end_time", "patient_language"}
SESSION_STATUSES = {SESSION_ACTIVE, SESSION_ENDED}

def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None

def serialize_session(session: Session) -> Dict:
    """Plain dict view of a session row"""
    return {
        "id": session.id,
        "clinician_id": session.clinician_id,
        "patient_language": session.patient_language,
        "session_status": session.session_status,
        "start_time": _isoformat(session.start_time),
        "end_time": _isoformat(session.end_time),
        "created_date": _isoformat(session.created_date)
    }

class SessionService:
    """Session management service with database persistence"""

    def __init__(self, session_factory: Callable[[], DBSession] = SessionLocal):
        self.session_factory = session_factory
        self.db_session = None

    def _get_db(self) -> DBSession:
        """Get database session"""
        if not self.db_session:
            self.db_session = self.session_factory()
        return self.db_session

    def _close_db(self):
        """Close database session"""
        if self.db_session:
            self.db_session.close()
            self.db_session = None

    def _load(self, db: DBSession, session_id: str) -> Session:
        session = db.query(Session).filter(Session.id == session_id).first()
        if not session:
            raise SessionNotFoundError(session_id)
        return session

    async def create_session(self, clinician_id: str, language: str) -> Dict:
        """Begin a new consultation session for a clinician"""
        if not clinician_id:
            raise ValidationError("Clinician id is required", "MISSING_CLINICIAN")
        patient_language = SupportedLanguage.from_name(language)

        db = self._get_db()
        try:
            now = datetime.now(timezone.utc)
            session = Session(
                clinician_id=clinician_id,
                patient_language=patient_language.display_name,
                session_status=SESSION_ACTIVE,
                start_time=now,
                created_date=now
            )

            db.add(session)
            db.commit()
            db.refresh(session)

            logger.info(f"💾 Created session {session.id} ({patient_language.display_name}) for clinician {clinician_id}")
            return serialize_session(session)

        except Exception as e:
            db.rollback()
            logger.error(f"❌ Failed to create session: {e}")
            raise DatabaseError(f"Failed to create session: {e}")
        finally:
            self._close_db()

    async def get_session(self, session_id: str) -> Dict:
        """Retrieve a single session"""
        db = self._get_db()
        try:
            session = self._load(db, session_id)
            logger.info(f"📖 Retrieved session {session_id}")
            return serialize_session(session)

        except SessionNotFoundError:
            logger.warning(f"⚠️ Session {session_id} not found")
            raise
        except Exception as e:
            logger.error(f"❌ Failed to get session: {e}")
            raise DatabaseError(f"Failed to get session: {e}")
        finally:
            self._close_db()

    async def update_session(self, session_id: str, patch: Dict) -> Dict:
        """Apply a partial update to a session"""
        unknown = set(patch) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot update fields: {sorted(unknown)}", "INVALID_PATCH")
        if "session_status" in patch and patch["session_status"] not in SESSION_STATUSES:
            raise ValidationError(f"Invalid session status: {patch['session_status']}", "INVALID_STATUS")

        values = dict(patch)
        if isinstance(values.get("end_time"), str):
            try:
                values["end_time"] = datetime.fromisoformat(values["end_time"])
            except ValueError:
                raise ValidationError(f"Invalid end_time: {values['end_time']}", "INVALID_PATCH")
        if "patient_language" in values:
            values["patient_language"] = SupportedLanguage.from_name(values["patient_language"]).display_name

        db = self._get_db()
        try:
            session = self._load(db, session_id)
            for field, value in values.items():
                setattr(session, field, value)

            db.commit()
            db.refresh(session)

            logger.info(f"💾 Updated session {session_id}: {sorted(values)}")
            return serialize_session(session)

        except SessionNotFoundError:
            db.rollback()
            raise
        except Exception as e:
            db.rollback()
            logger.error(f"❌ Failed to update session: {e}")
            raise DatabaseError(f"Failed to update session: {e}")
        finally:
            self._close_db()

    async def list_recent_sessions(self, clinician_id: str, limit: int = 5) -> List[Dict]:
        """Most recent sessions for a clinician, newest first"""
        db = self._get_db()
        try:
            sessions = (
                db.query(Session)
                .filter(Session.clinician_id == clinician_id)
                .order_by(Session.created_date.desc())
                .limit(limit)
                .all()
            )
            return [serialize_session(s) for s in sessions]

        except Exception as e:
            logger.error(f"❌ Failed to get recent sessions: {e}")
            raise DatabaseError(f"Failed to get recent sessions: {e}")
        finally:
            self._close_db()
