# =============================================================================
# routers/session_router.py
# =============================================================================

import logging
from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Header, Query
from pydantic import BaseModel

from core.config import settings
from models.languages import list_languages
from services.session.manager import SessionService
from .dependencies import get_clinician_id, get_session_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Sessions"])

class BeginSessionRequest(BaseModel):
    language: str

def translation_url(session_id: str, language: str) -> str:
    return "/translation?" + urlencode({"sessionId": session_id, "language": language})

@router.get("/languages")
async def get_languages():
    """Patient languages a session can be started in"""
    return {"languages": list_languages()}

@router.get("/dashboard")
async def get_dashboard(
    clinician_id: str = Depends(get_clinician_id),
    x_clinician_name: Optional[str] = Header(default=None),
    session_service: SessionService = Depends(get_session_service)
):
    """Landing view: greeting, language picker and recent sessions"""
    recent_sessions = await session_service.list_recent_sessions(
        clinician_id, settings.recent_sessions_limit
    )
    return {
        "greeting": f"Welcome back, Dr. {x_clinician_name or clinician_id}",
        "clinician_id": clinician_id,
        "languages": list_languages(),
        "recent_sessions": recent_sessions
    }

@router.post("/sessions", status_code=201)
async def begin_session(
    request: BeginSessionRequest,
    clinician_id: str = Depends(get_clinician_id),
    session_service: SessionService = Depends(get_session_service)
):
    """Begin a consultation session in the chosen patient language"""
    session = await session_service.create_session(clinician_id, request.language)
    return {
        "session": session,
        "translation_url": translation_url(session["id"], session["patient_language"])
    }

@router.get("/sessions")
async def list_sessions(
    limit: int = Query(default=5, ge=1, le=100),
    clinician_id: str = Depends(get_clinician_id),
    session_service: SessionService = Depends(get_session_service)
):
    sessions = await session_service.list_recent_sessions(clinician_id, limit)
    return {"sessions": sessions}

@router.get("/sessions/{session_id}")
async def get_session(
    session_id: str,
    session_service: SessionService = Depends(get_session_service)
):
    """Retrieve a session"""
    return await session_service.get_session(session_id)
