# =============================================================================
# services/phrases/phrase_book.py
# =============================================================================

import asyncio
import logging
from typing import Dict, Iterator, List, Optional, Set, Tuple

from core.exceptions import PhraseBookBusyError, ValidationError
from models.languages import SupportedLanguage

logger = logging.getLogger(__name__)

PHRASE_CATEGORIES: Dict[str, List[str]] = {
    "Greeting & Intake": [
        "Hello, my name is Dr. [Name]",
        "How are you feeling today?",
        "What brings you in today?",
        "Can you tell me about your symptoms?",
        "When did this start?"
    ],
    "Symptoms": [
        "Can you point to where it hurts?",
        "How would you rate your pain from 1 to 10?",
        "Is the pain sharp or dull?",
        "Does the pain come and go?",
        "Are you experiencing any nausea?"
    ],
    "Medical History": [
        "Are you taking any medications?",
        "Do you have any allergies?",
        "Have you had this problem before?",
        "Do you have any chronic conditions?",
        "Have you had any surgeries?"
    ],
    "Examination": [
        "I need to examine you now",
        "Please take a deep breath",
        "Can you open your mouth?",
        "I'm going to check your blood pressure",
        "Please roll up your sleeve"
    ],
    "Next Steps": [
        "We need to run some tests",
        "I'm going to prescribe some medication",
        "You should follow up in one week",
        "Please rest and drink plenty of fluids",
        "Call if your symptoms get worse"
    ]
}

def filter_phrases(query: str = "", categories: Dict[str, List[str]] = None) -> Dict[str, List[str]]:
    """
    Case-insensitive search over categories and phrases.

    A category name match keeps all of its phrases. Category order and
    in-category order are preserved; categories left empty are dropped.
    """
    categories = PHRASE_CATEGORIES if categories is None else categories
    needle = (query or "").lower()

    filtered = {}
    for category, phrases in categories.items():
        category_match = needle in category.lower()
        matches = [p for p in phrases if category_match or needle in p.lower()]
        if matches:
            filtered[category] = matches
    return filtered

def iter_phrase_pairs(query: str = "", categories: Dict[str, List[str]] = None) -> Iterator[Tuple[str, str]]:
    for category, phrases in filter_phrases(query, categories).items():
        for phrase in phrases:
            yield category, phrase

class PhraseBookService:
    """One-tap translation of canned phrases into the patient's language"""

    def __init__(self, translation_service, playback, language: str, playback_seconds: float = 2.0):
        self.translation_service = translation_service
        self.playback = playback
        self.language = SupportedLanguage.from_name(language).display_name
        self.playback_seconds = playback_seconds

        self.is_translating = False
        self.playing_phrase: Optional[str] = None
        self._play_token = 0
        self._tasks: Set[asyncio.Task] = set()

    async def translate_and_speak(self, phrase: str) -> Optional[str]:
        if not phrase or not phrase.strip():
            raise ValidationError("Phrase cannot be empty", "EMPTY_PHRASE")
        if self.is_translating or self.playing_phrase == phrase:
            raise PhraseBookBusyError(self.playing_phrase or phrase)

        self._play_token += 1
        token = self._play_token
        self.playing_phrase = phrase
        self.is_translating = True

        try:
            translation = await self.translation_service.translate_phrase(phrase, self.language)
        except Exception as e:
            logger.error(f"❌ Phrase translation failed: {e}")
            self.playing_phrase = None
            return None
        finally:
            self.is_translating = False

        self.playback.speak(translation, self.language)
        self._schedule_playback_end(token)
        return translation

    def _schedule_playback_end(self, token: int):
        if self.playback_seconds <= 0:
            self._finish_playback(token)
            return

        async def finish_later():
            await asyncio.sleep(self.playback_seconds)
            self._finish_playback(token)

        task = asyncio.create_task(finish_later())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _finish_playback(self, token: int):
        # A newer phrase owns the marker now
        if token == self._play_token:
            self.playing_phrase = None

    def status(self) -> Dict:
        return {
            "language": self.language,
            "is_translating": self.is_translating,
            "playing_phrase": self.playing_phrase
        }
