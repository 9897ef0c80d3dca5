"""Phrase library search and one-tap phrase translation."""
import asyncio
from unittest.mock import AsyncMock, Mock

import pytest

from core.exceptions import PhraseBookBusyError, TranslationError, UnsupportedLanguageError
from services.phrases.phrase_book import (
    PHRASE_CATEGORIES,
    PhraseBookService,
    filter_phrases,
    iter_phrase_pairs,
)


def test_pain_query_matches_symptom_phrases():
    assert filter_phrases("pain") == {
        "Symptoms": [
            "How would you rate your pain from 1 to 10?",
            "Is the pain sharp or dull?",
            "Does the pain come and go?",
        ]
    }


def test_filter_is_case_insensitive():
    assert filter_phrases("PAIN") == filter_phrases("pain")


def test_category_match_keeps_whole_category():
    assert filter_phrases("medical history") == {
        "Medical History": PHRASE_CATEGORIES["Medical History"]
    }


def test_empty_query_returns_everything():
    assert filter_phrases("") == PHRASE_CATEGORIES


def test_no_match_returns_empty():
    assert filter_phrases("xylophone") == {}


def test_filter_preserves_category_and_phrase_order():
    result = filter_phrases("you")

    expected_categories = [c for c in PHRASE_CATEGORIES if c in result]
    assert list(result) == expected_categories
    for category, phrases in result.items():
        original = PHRASE_CATEGORIES[category]
        assert phrases == [p for p in original if p in phrases]


def test_iter_phrase_pairs_flattens_in_order():
    pairs = list(iter_phrase_pairs("breath"))

    assert pairs == [("Examination", "Please take a deep breath")]


@pytest.fixture
def phrase_translator():
    translator = Mock()
    translator.translate_phrase = AsyncMock(return_value="Proszę głęboko odetchnąć")
    return translator


@pytest.mark.asyncio
async def test_translate_and_speak(phrase_translator):
    playback = Mock()
    book = PhraseBookService(phrase_translator, playback, "polish", playback_seconds=0)

    translation = await book.translate_and_speak("Please take a deep breath")

    assert translation == "Proszę głęboko odetchnąć"
    phrase_translator.translate_phrase.assert_awaited_once_with("Please take a deep breath", "Polish")
    playback.speak.assert_called_once_with("Proszę głęboko odetchnąć", "Polish")
    assert book.status() == {"language": "Polish", "is_translating": False, "playing_phrase": None}


@pytest.mark.asyncio
async def test_failed_phrase_translation_resets(phrase_translator):
    phrase_translator.translate_phrase.side_effect = TranslationError("offline")
    playback = Mock()
    book = PhraseBookService(phrase_translator, playback, "Urdu", playback_seconds=0)

    assert await book.translate_and_speak("Do you have any allergies?") is None
    assert book.playing_phrase is None
    assert book.is_translating is False
    playback.speak.assert_not_called()


@pytest.mark.asyncio
async def test_one_phrase_translation_at_a_time(phrase_translator):
    release = asyncio.Event()

    async def slow(phrase, language):
        await release.wait()
        return "tłumaczenie"

    phrase_translator.translate_phrase.side_effect = slow
    book = PhraseBookService(phrase_translator, Mock(), "Polish", playback_seconds=0)

    first = asyncio.create_task(book.translate_and_speak("Please take a deep breath"))
    await asyncio.sleep(0)

    with pytest.raises(PhraseBookBusyError):
        await book.translate_and_speak("Can you open your mouth?")

    release.set()
    assert await first == "tłumaczenie"


@pytest.mark.asyncio
async def test_playing_marker_clears_after_playback(phrase_translator):
    book = PhraseBookService(phrase_translator, Mock(), "Polish", playback_seconds=0.05)

    await book.translate_and_speak("Please take a deep breath")
    assert book.playing_phrase == "Please take a deep breath"

    with pytest.raises(PhraseBookBusyError):
        await book.translate_and_speak("Please take a deep breath")

    await asyncio.sleep(0.1)
    assert book.playing_phrase is None


def test_phrase_book_requires_supported_language(phrase_translator):
    with pytest.raises(UnsupportedLanguageError):
        PhraseBookService(phrase_translator, Mock(), "Klingon")
