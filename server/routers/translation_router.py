# =============================================================================
# routers/translation_router.py
# =============================================================================

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import RedirectResponse
from pydantic import BaseModel

from core.exceptions import DatabaseError, UnsupportedLanguageError
from services.conversation import OrchestratorRegistry, TranslationOrchestrator
from .dependencies import get_live_view, get_registry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/translation", tags=["Live Translation"])

DASHBOARD_URL = "/dashboard"

class FinishCaptureRequest(BaseModel):
    text: str = ""

class ReleaseRequest(BaseModel):
    held_ms: float

@router.get("")
async def open_translation_view(
    session_id: Optional[str] = Query(default=None, alias="sessionId"),
    language: Optional[str] = Query(default=None),
    registry: OrchestratorRegistry = Depends(get_registry)
):
    """Load the live translation view; unknown sessions go back to the dashboard"""
    if not session_id:
        return RedirectResponse(DASHBOARD_URL, status_code=303)

    try:
        session = await registry.session_service.get_session(session_id)
        orchestrator = registry.open(session, language)
    except (DatabaseError, UnsupportedLanguageError) as e:
        logger.warning(f"⚠️ Cannot open translation view for {session_id}: {e}")
        return RedirectResponse(DASHBOARD_URL, status_code=303)

    return {
        "session": session,
        **orchestrator.snapshot(),
        "phrase_book": orchestrator.open_phrase_book()
    }

@router.get("/{session_id}/state")
async def get_turn_state(orchestrator: TranslationOrchestrator = Depends(get_live_view)):
    return orchestrator.snapshot()

@router.post("/{session_id}/{speaker}/start")
async def start_capture(speaker: str, orchestrator: TranslationOrchestrator = Depends(get_live_view)):
    """Press: claim the floor for a speaker"""
    accepted = orchestrator.begin_capture(speaker)
    return {"accepted": accepted, **orchestrator.snapshot()}

@router.post("/{session_id}/{speaker}/finish")
async def finish_capture(
    speaker: str,
    request: FinishCaptureRequest,
    orchestrator: TranslationOrchestrator = Depends(get_live_view)
):
    """Deliver captured text and wait for its translation"""
    await orchestrator.end_capture(speaker, request.text)
    return orchestrator.snapshot()

@router.post("/{session_id}/{speaker}/capture", status_code=202)
async def simulated_capture(speaker: str, orchestrator: TranslationOrchestrator = Depends(get_live_view)):
    """Run a whole turn through the simulated capture device in the background"""
    accepted = orchestrator.spawn_capture_turn(speaker)
    return {"accepted": accepted, **orchestrator.snapshot()}

@router.post("/{session_id}/{speaker}/release")
async def release_capture(
    speaker: str,
    request: ReleaseRequest,
    orchestrator: TranslationOrchestrator = Depends(get_live_view)
):
    """Release: a press shorter than the minimum cancels the capture"""
    cancelled = orchestrator.cancel_capture(speaker, request.held_ms)
    return {"cancelled": cancelled, **orchestrator.snapshot()}

@router.post("/{session_id}/end")
async def end_session(
    orchestrator: TranslationOrchestrator = Depends(get_live_view),
    registry: OrchestratorRegistry = Depends(get_registry)
):
    snapshot = await registry.end_session(orchestrator)
    return {**snapshot, "redirect": DASHBOARD_URL}

@router.get("/{session_id}/phrases")
async def open_phrase_book(orchestrator: TranslationOrchestrator = Depends(get_live_view)):
    return orchestrator.open_phrase_book()
