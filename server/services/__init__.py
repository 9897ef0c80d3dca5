# =============================================================================
# services/__init__.py
# =============================================================================
"""
MedBridge Services Package
- conversation/: turn-taking orchestrator and per-session registry
- translation/: English <-> patient language translation
- audio/: simulated speech capture and playback
- session/: session persistence
- phrases/: canned phrase library
"""

from .translation.translator import TranslationService
from .session.manager import SessionService
from .audio.speech import SimulatedSpeechCapture, SimulatedSpeechPlayback
from .phrases.phrase_book import PhraseBookService
from .conversation import TranslationOrchestrator, OrchestratorRegistry

__all__ = [
    "TranslationService",
    "SessionService",
    "SimulatedSpeechCapture",
    "SimulatedSpeechPlayback",
    "PhraseBookService",
    "TranslationOrchestrator",
    "OrchestratorRegistry"
]
