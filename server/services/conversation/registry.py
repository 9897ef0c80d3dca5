# =============================================================================
# services/conversation/registry.py
# =============================================================================

import logging
from typing import Dict, Optional

from core.config import Settings, settings as default_settings
from core.exceptions import DatabaseError
from models.database import SESSION_ACTIVE, SESSION_ENDED
from models.languages import SupportedLanguage
from ..audio.speech import SimulatedSpeechCapture, SimulatedSpeechPlayback
from ..phrases.phrase_book import PhraseBookService
from ..session.manager import SessionService
from ..translation.translator import TranslationService
from .orchestrator import Speaker, TranslationOrchestrator

logger = logging.getLogger(__name__)

class OrchestratorRegistry:
    """
    In-memory home for the live views of each session
    One orchestrator and one phrase book per session id
    """

    def __init__(self, translation_service: TranslationService = None,
                 session_service: SessionService = None,
                 playback: SimulatedSpeechPlayback = None,
                 capture: SimulatedSpeechCapture = None,
                 app_settings: Settings = None):
        self.settings = app_settings or default_settings
        self.translation_service = translation_service or TranslationService(self.settings)
        self.session_service = session_service or SessionService()
        self.playback = playback or SimulatedSpeechPlayback(self.settings.playback_history_size)
        self.capture = capture or SimulatedSpeechCapture(self.settings.capture_delay_seconds)

        self.orchestrators: Dict[str, TranslationOrchestrator] = {}
        self.phrase_books: Dict[str, PhraseBookService] = {}

    def open(self, session: Dict, language: Optional[str] = None) -> TranslationOrchestrator:
        """Get the live view for a session, creating it on first open"""
        session_id = session["id"]
        wanted_language = SupportedLanguage.from_name(language or session["patient_language"]).display_name

        orchestrator = self.orchestrators.get(session_id)
        if orchestrator is not None:
            if orchestrator.language != wanted_language:
                self._switch_language(orchestrator, wanted_language)
            return orchestrator

        orchestrator = TranslationOrchestrator(
            session,
            translation_service=self.translation_service,
            session_service=self.session_service,
            playback=self.playback,
            capture=self.capture,
            language=wanted_language,
            app_settings=self.settings
        )
        # Ended sessions are read-only; their views are not kept
        if not orchestrator.is_active:
            return orchestrator

        self.orchestrators[session_id] = orchestrator
        logger.info(f"🏥 Opened translation view for session {session_id}: English ↔ {wanted_language}")
        return orchestrator

    def _switch_language(self, orchestrator: TranslationOrchestrator, language: str):
        # The turn in flight keeps the language it started with
        if orchestrator.state.active_speaker != Speaker.NONE:
            logger.warning(
                f"⚠️ Session {orchestrator.session_id} is mid-turn "
                f"({orchestrator.state.phase.value}), staying in {orchestrator.language}"
            )
            return
        logger.info(f"🌐 Session {orchestrator.session_id} switched {orchestrator.language} → {language}")
        orchestrator.language = language

    def get(self, session_id: str) -> Optional[TranslationOrchestrator]:
        return self.orchestrators.get(session_id)

    def phrase_book(self, session: Dict, language: Optional[str] = None) -> PhraseBookService:
        """Phrase book for a stored session, kept while the session is active"""
        session_id = session["id"]
        wanted_language = SupportedLanguage.from_name(language or session["patient_language"]).display_name

        book = self.phrase_books.get(session_id)
        if book is not None:
            if book.language != wanted_language and not book.is_translating:
                book.language = wanted_language
            return book

        book = PhraseBookService(
            self.translation_service,
            self.playback,
            wanted_language,
            playback_seconds=self.settings.playback_seconds
        )
        if session.get("session_status", SESSION_ACTIVE) == SESSION_ACTIVE:
            self.phrase_books[session_id] = book
        return book

    async def end_session(self, orchestrator: TranslationOrchestrator) -> Dict:
        """End a session and drop its live views once storage records the end"""
        snapshot = await orchestrator.end_session()
        try:
            stored = await self.session_service.get_session(orchestrator.session_id)
        except DatabaseError as e:
            logger.warning(f"⚠️ Keeping live view for {orchestrator.session_id}: {e}")
            return snapshot

        if stored["session_status"] == SESSION_ENDED:
            self.close(orchestrator.session_id)
        return snapshot

    def close(self, session_id: str):
        self.orchestrators.pop(session_id, None)
        self.phrase_books.pop(session_id, None)
        logger.info(f"🔌 Closed live views for session {session_id}")
