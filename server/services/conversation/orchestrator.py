# =============================================================================
# services/conversation/orchestrator.py
# =============================================================================

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Optional, Set, Union
from urllib.parse import urlencode

from core.config import Settings, settings as default_settings
from core.exceptions import ValidationError
from models.database import SESSION_ACTIVE, SESSION_ENDED
from models.languages import ENGLISH, SupportedLanguage

logger = logging.getLogger(__name__)

class Speaker(Enum):
    NONE = "none"
    CLINICIAN = "clinician"
    PATIENT = "patient"

class TurnPhase(Enum):
    IDLE = "idle"
    LISTENING_AS_CLINICIAN = "listening_as_clinician"
    LISTENING_AS_PATIENT = "listening_as_patient"
    TRANSLATING_CLINICIAN_TO_PATIENT = "translating_clinician_to_patient"
    TRANSLATING_PATIENT_TO_CLINICIAN = "translating_patient_to_clinician"

@dataclass
class TurnState:
    """Who is speaking right now and the last text shown on each side"""
    active_speaker: Speaker = Speaker.NONE
    is_listening: bool = False
    is_translating: bool = False
    clinician_text: str = ""
    patient_text: str = ""

    @property
    def phase(self) -> TurnPhase:
        if self.active_speaker == Speaker.CLINICIAN:
            if self.is_listening:
                return TurnPhase.LISTENING_AS_CLINICIAN
            if self.is_translating:
                return TurnPhase.TRANSLATING_CLINICIAN_TO_PATIENT
        elif self.active_speaker == Speaker.PATIENT:
            if self.is_listening:
                return TurnPhase.LISTENING_AS_PATIENT
            if self.is_translating:
                return TurnPhase.TRANSLATING_PATIENT_TO_CLINICIAN
        return TurnPhase.IDLE

    def reset_turn(self):
        self.active_speaker = Speaker.NONE
        self.is_listening = False
        self.is_translating = False

    def to_dict(self) -> Dict:
        return {
            "active_speaker": self.active_speaker.value,
            "is_listening": self.is_listening,
            "is_translating": self.is_translating,
            "clinician_text": self.clinician_text,
            "patient_text": self.patient_text,
            "phase": self.phase.value
        }

def _as_speaker(speaker: Union[str, Speaker]) -> Speaker:
    try:
        resolved = speaker if isinstance(speaker, Speaker) else Speaker(speaker)
    except ValueError:
        raise ValidationError(f"Unknown speaker: {speaker}", "INVALID_SPEAKER")
    if resolved == Speaker.NONE:
        raise ValidationError("A turn needs a clinician or patient speaker", "INVALID_SPEAKER")
    return resolved

class TranslationOrchestrator:
    """
    Turn-taking for one live translation view

    Only one side may hold the floor at a time. A turn runs
    capture -> translate -> speak, then the floor returns to idle.
    Every turn carries a generation number; results arriving for a
    generation that has since been reset are dropped.
    """

    def __init__(self, session: Dict, translation_service, session_service, playback,
                 capture=None, language: Optional[str] = None, app_settings: Settings = None):
        self.settings = app_settings or default_settings
        self.session_id = session["id"]
        self.language = SupportedLanguage.from_name(language or session["patient_language"]).display_name
        self.session_status = session.get("session_status", SESSION_ACTIVE)

        self.translation_service = translation_service
        self.session_service = session_service
        self.playback = playback
        self.capture = capture

        self.state = TurnState()
        self._generation = 0
        self._tasks: Set[asyncio.Task] = set()

    @property
    def is_active(self) -> bool:
        return self.session_status == SESSION_ACTIVE

    def _languages_for(self, speaker: Speaker):
        """(source, target) language names for a speaker's turn"""
        if speaker == Speaker.CLINICIAN:
            return ENGLISH, self.language
        return self.language, ENGLISH

    def _abort_turn(self):
        self._generation += 1
        self.state.reset_turn()

    # ------------------------------------------------------------------
    # Turn operations
    # ------------------------------------------------------------------

    def begin_capture(self, speaker: Union[str, Speaker]) -> bool:
        """Claim the floor; ignored when someone else already holds it"""
        speaker = _as_speaker(speaker)

        if not self.is_active:
            logger.info(f"⏹️ Session {self.session_id} has ended, ignoring capture from {speaker.value}")
            return False

        if self.state.active_speaker != Speaker.NONE:
            logger.info(
                f"⏸️ {speaker.value} tried to speak while {self.state.active_speaker.value} "
                f"holds the floor ({self.state.phase.value})"
            )
            return False

        self._generation += 1
        self.state.active_speaker = speaker
        self.state.is_listening = True
        logger.info(f"🎤 Listening to {speaker.value} (session {self.session_id}, turn {self._generation})")
        return True

    async def end_capture(self, speaker: Union[str, Speaker], captured_text: str) -> TurnState:
        """Finish a capture and run the translation for it"""
        speaker = _as_speaker(speaker)

        if self.state.active_speaker != speaker or not self.state.is_listening:
            logger.info(f"⏸️ Ignoring capture result from {speaker.value}: not listening to them")
            return self.state

        if not captured_text or not captured_text.strip():
            logger.info(f"🔇 Empty capture from {speaker.value}, turn cancelled")
            self._abort_turn()
            return self.state

        generation = self._generation
        source_language, target_language = self._languages_for(speaker)

        self.state.is_listening = False
        self.state.is_translating = True
        if speaker == Speaker.CLINICIAN:
            self.state.clinician_text = captured_text
        else:
            self.state.patient_text = captured_text

        translated = None
        try:
            translated = await self.translation_service.translate(
                captured_text, source_language, target_language
            )
        except Exception as e:
            logger.warning(f"⚠️ Translation failed for {speaker.value} turn in session {self.session_id}: {e}")

        if generation != self._generation:
            logger.info(f"🗑️ Discarding stale translation for turn {generation} in session {self.session_id}")
            return self.state

        self.state.reset_turn()
        output_text = translated if translated is not None else self.settings.translation_fallback_text

        if speaker == Speaker.CLINICIAN:
            self.state.patient_text = output_text
        else:
            self.state.clinician_text = output_text

        if translated is not None:
            self._speak(translated, target_language)

        logger.info(f"✅ Turn {generation} complete: {source_language} → {target_language}")
        return self.state

    def cancel_capture(self, speaker: Union[str, Speaker], held_ms: float) -> bool:
        """Release of a press held too briefly to count as speech"""
        speaker = _as_speaker(speaker)

        if held_ms >= self.settings.min_press_ms:
            return False
        if self.state.active_speaker != speaker or not self.state.is_listening:
            return False

        logger.info(f"↩️ {speaker.value} released after {held_ms:.0f}ms, capture cancelled")
        self._abort_turn()
        return True

    async def capture_turn(self, speaker: Union[str, Speaker]) -> bool:
        """Begin a capture and drive the capture device through to translation"""
        if not self.begin_capture(speaker):
            return False
        await self._run_capture(_as_speaker(speaker), self._generation)
        return True

    def spawn_capture_turn(self, speaker: Union[str, Speaker]) -> bool:
        """Like capture_turn, but the device runs in the background"""
        if not self.begin_capture(speaker):
            return False

        task = asyncio.create_task(self._run_capture(_as_speaker(speaker), self._generation))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return True

    async def _run_capture(self, speaker: Speaker, generation: int):
        if self.capture is None:
            logger.error("❌ No speech capture device configured")
            self._abort_turn()
            return

        async def on_result(text: str):
            if generation != self._generation:
                logger.info(f"🗑️ Capture for turn {generation} arrived after the turn was reset")
                return
            await self.end_capture(speaker, text)

        try:
            await self.capture.start_capture(speaker.value, on_result)
        except Exception as e:
            logger.error(f"❌ Speech capture failed for {speaker.value}: {e}")
            if generation == self._generation:
                self._abort_turn()

    def _speak(self, text: str, language: str):
        try:
            self.playback.speak(text, language)
        except Exception as e:
            logger.warning(f"⚠️ Playback failed: {e}")

    # ------------------------------------------------------------------
    # Session operations
    # ------------------------------------------------------------------

    async def end_session(self) -> Dict:
        """Mark the session ended; persistence is best effort"""
        if not self.is_active:
            logger.info(f"⏹️ Session {self.session_id} already ended")
            return self.snapshot()

        try:
            await self.session_service.update_session(self.session_id, {
                "session_status": SESSION_ENDED,
                "end_time": datetime.now(timezone.utc)
            })
        except Exception as e:
            logger.error(f"❌ Error ending session {self.session_id}: {e}")

        self.session_status = SESSION_ENDED
        self._abort_turn()
        logger.info(f"🏁 Session {self.session_id} ended")
        return self.snapshot()

    def open_phrase_book(self) -> Dict:
        """Navigation target for the phrase library of this session"""
        return {
            "view": "phrases",
            "session_id": self.session_id,
            "language": self.language,
            "url": "/phrases?" + urlencode({"sessionId": self.session_id, "language": self.language})
        }

    def snapshot(self) -> Dict:
        return {
            "session_id": self.session_id,
            "language": self.language,
            "session_status": self.session_status,
            "turn": self.state.to_dict()
        }
