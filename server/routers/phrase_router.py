# =============================================================================
# routers/phrase_router.py
# =============================================================================

import logging
from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict, Field

from services.conversation import OrchestratorRegistry
from services.phrases.phrase_book import filter_phrases
from .dependencies import get_registry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/phrases", tags=["Phrase Library"])

class SpeakPhraseRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(alias="sessionId")
    language: Optional[str] = None
    phrase: str

@router.get("")
async def search_phrases(
    q: str = Query(default=""),
    session_id: Optional[str] = Query(default=None, alias="sessionId"),
    language: Optional[str] = Query(default=None),
    registry: OrchestratorRegistry = Depends(get_registry)
):
    """Common medical phrases, filtered by category or phrase text"""
    categories = filter_phrases(q)
    response = {
        "query": q,
        "categories": categories,
        "session_id": session_id,
        "language": language
    }
    if session_id:
        session = await registry.session_service.get_session(session_id)
        book = registry.phrase_book(session, language)
        response["language"] = book.language
        response["status"] = book.status()
        response["back_url"] = "/translation?" + urlencode({"sessionId": session_id, "language": book.language})
    return response

@router.post("/speak")
async def speak_phrase(
    request: SpeakPhraseRequest,
    registry: OrchestratorRegistry = Depends(get_registry)
):
    """Translate a phrase into the patient's language and play it"""
    session = await registry.session_service.get_session(request.session_id)
    book = registry.phrase_book(session, request.language)
    translation = await book.translate_and_speak(request.phrase)
    return {
        "phrase": request.phrase,
        "language": book.language,
        "translation": translation,
        "status": "speaking" if translation is not None else "failed"
    }
