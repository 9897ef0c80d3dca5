"""Shared pytest fixtures and configuration."""
import os

# Keep tests off the development database file
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from unittest.mock import AsyncMock, Mock
from sqlalchemy.orm import sessionmaker

from core.config import Settings
from models.database import Base, build_engine
from services.audio.speech import SimulatedSpeechCapture, SimulatedSpeechPlayback
from services.conversation import OrchestratorRegistry, TranslationOrchestrator
from services.session.manager import SessionService


class FakeTranslationService:
    """Deterministic translator: looks up canned answers, else tags the text."""

    def __init__(self, responses=None, error=None):
        self.responses = responses or {}
        self.error = error
        self.calls = []

    async def translate(self, text, source_language, target_language):
        self.calls.append((text, source_language, target_language))
        if self.error:
            raise self.error
        return self.responses.get(text, f"[{target_language}] {text}")

    async def translate_phrase(self, phrase, target_language):
        return await self.translate(phrase, "English", target_language)


@pytest.fixture
def test_settings():
    return Settings(
        database_url="sqlite:///:memory:",
        capture_delay_seconds=0.0,
        playback_seconds=0.0,
        min_press_ms=500,
    )


@pytest.fixture
def session_factory():
    engine = build_engine("sqlite:///:memory:")
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def session_service(session_factory):
    return SessionService(session_factory=session_factory)


@pytest.fixture
def polish_session():
    return {
        "id": "session-123",
        "clinician_id": "clin-1",
        "patient_language": "Polish",
        "session_status": "active",
    }


@pytest.fixture
def translator():
    return AsyncMock()


@pytest.fixture
def playback():
    return Mock(spec=SimulatedSpeechPlayback)


@pytest.fixture
def store():
    return AsyncMock(spec=SessionService)


@pytest.fixture
def orchestrator(polish_session, translator, store, playback, test_settings):
    return TranslationOrchestrator(
        polish_session,
        translation_service=translator,
        session_service=store,
        playback=playback,
        capture=SimulatedSpeechCapture(delay_seconds=0.0),
        app_settings=test_settings,
    )


@pytest.fixture
def fake_translator():
    return FakeTranslationService(responses={"Hello": "Cześć"})


@pytest.fixture
def registry(session_service, fake_translator, test_settings):
    return OrchestratorRegistry(
        translation_service=fake_translator,
        session_service=session_service,
        playback=SimulatedSpeechPlayback(),
        capture=SimulatedSpeechCapture(delay_seconds=0.0),
        app_settings=test_settings,
    )
