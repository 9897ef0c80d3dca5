# =============================================================================
# services/audio/__init__.py
# =============================================================================

"""
Audio Processing Services

Simulated speech devices for the proof of concept:
- Speech capture returning canned utterances after a fixed delay
- Speech playback that logs what would be spoken
"""

from .speech import SimulatedSpeechCapture, SimulatedSpeechPlayback, CANNED_UTTERANCES

__all__ = ["SimulatedSpeechCapture", "SimulatedSpeechPlayback", "CANNED_UTTERANCES"]
