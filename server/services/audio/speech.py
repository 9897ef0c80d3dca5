# =============================================================================
# services/audio/speech.py
# =============================================================================

import asyncio
import inspect
import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Awaitable, Callable, Deque, Dict, Union

logger = logging.getLogger(__name__)

CANNED_UTTERANCES = {
    "clinician": "Hello, I'm Dr. Smith. What brings you in today?",
    "patient": "I have been experiencing chest pain since yesterday.",
}

CaptureCallback = Callable[[str], Union[None, Awaitable[None]]]

class SimulatedSpeechCapture:
    """
    Stand-in for speech recognition
    Waits a fixed delay, then reports a canned utterance for the speaker
    """

    def __init__(self, delay_seconds: float = 2.0, utterances: Dict[str, str] = None):
        self.delay_seconds = delay_seconds
        self.utterances = dict(utterances or CANNED_UTTERANCES)

    async def start_capture(self, speaker: str, on_result: CaptureCallback) -> str:
        logger.info(f"🎤 Capturing speech from {speaker} ({self.delay_seconds}s simulated)")
        await asyncio.sleep(self.delay_seconds)

        text = self.utterances.get(speaker, "")
        result = on_result(text)
        if inspect.isawaitable(result):
            await result
        return text

@dataclass
class SpokenUtterance:
    text: str
    language: str
    spoken_at: datetime = field(default_factory=datetime.now)

class SimulatedSpeechPlayback:
    """Stand-in for text-to-speech: logs the utterance and keeps a short history"""

    def __init__(self, history_size: int = 50):
        self.history: Deque[SpokenUtterance] = deque(maxlen=history_size)

    def speak(self, text: str, language: str) -> None:
        logger.info(f"🔊 Speaking in {language}: {text}")
        self.history.append(SpokenUtterance(text=text, language=language))
