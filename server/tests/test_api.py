"""HTTP API exercised through FastAPI's TestClient."""
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from core.exceptions import DatabaseError
from main import app
from routers.dependencies import get_registry

CLINICIAN = {"X-Clinician-Id": "clin-1", "X-Clinician-Name": "Okafor"}


@pytest.fixture
def client(registry):
    app.dependency_overrides[get_registry] = lambda: registry
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def session_id(client):
    response = client.post("/sessions", json={"language": "Polish"}, headers=CLINICIAN)
    assert response.status_code == 201
    return response.json()["session"]["id"]


def test_health(client):
    assert client.get("/health").json()["status"] == "healthy"


def test_languages(client):
    names = [lang["name"] for lang in client.get("/languages").json()["languages"]]
    assert names == ["Polish", "Punjabi", "Urdu", "Romanian", "Arabic"]


def test_begin_session_requires_clinician(client):
    assert client.post("/sessions", json={"language": "Polish"}).status_code == 401


def test_begin_session_rejects_unsupported_language(client):
    response = client.post("/sessions", json={"language": "Klingon"}, headers=CLINICIAN)

    assert response.status_code == 400
    assert response.json()["error_code"] == "UNSUPPORTED_LANGUAGE"


def test_begin_session_links_translation_view(client):
    body = client.post("/sessions", json={"language": "urdu"}, headers=CLINICIAN).json()

    session = body["session"]
    assert session["session_status"] == "active"
    assert body["translation_url"] == f"/translation?sessionId={session['id']}&language=Urdu"


def test_dashboard_lists_recent_sessions(client, session_id):
    body = client.get("/dashboard", headers=CLINICIAN).json()

    assert body["greeting"] == "Welcome back, Dr. Okafor"
    assert [s["id"] for s in body["recent_sessions"]] == [session_id]


def test_unknown_session_is_404(client):
    assert client.get("/sessions/missing").status_code == 404
    assert client.get("/translation/missing/state").status_code == 404


def test_translation_view_redirects_unknown_session(client):
    response = client.get("/translation", params={"sessionId": "missing"}, follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/dashboard"


def test_translation_view_redirects_without_session(client):
    response = client.get("/translation", follow_redirects=False)

    assert response.status_code == 303


def test_translation_view_loads_session(client, session_id):
    body = client.get("/translation", params={"sessionId": session_id, "language": "Polish"}).json()

    assert body["session_id"] == session_id
    assert body["language"] == "Polish"
    assert body["turn"]["phase"] == "idle"
    assert body["phrase_book"]["url"] == f"/phrases?sessionId={session_id}&language=Polish"


def test_clinician_turn(client, session_id, fake_translator):
    start = client.post(f"/translation/{session_id}/clinician/start").json()
    assert start["accepted"] is True
    assert start["turn"]["phase"] == "listening_as_clinician"

    blocked = client.post(f"/translation/{session_id}/patient/start").json()
    assert blocked["accepted"] is False

    finished = client.post(f"/translation/{session_id}/clinician/finish", json={"text": "Hello"}).json()

    assert finished["turn"]["clinician_text"] == "Hello"
    assert finished["turn"]["patient_text"] == "Cześć"
    assert finished["turn"]["phase"] == "idle"
    assert fake_translator.calls == [("Hello", "English", "Polish")]


def test_empty_capture_resets(client, session_id, fake_translator):
    client.post(f"/translation/{session_id}/patient/start")

    body = client.post(f"/translation/{session_id}/patient/finish", json={"text": "  "}).json()

    assert body["turn"]["phase"] == "idle"
    assert body["turn"]["patient_text"] == ""
    assert fake_translator.calls == []


def test_short_release_cancels(client, session_id):
    client.post(f"/translation/{session_id}/patient/start")

    body = client.post(f"/translation/{session_id}/patient/release", json={"held_ms": 200}).json()

    assert body["cancelled"] is True
    assert body["turn"]["phase"] == "idle"


def test_simulated_capture_is_accepted(client, session_id):
    response = client.post(f"/translation/{session_id}/patient/capture")

    assert response.status_code == 202
    assert response.json()["accepted"] is True


def test_invalid_speaker(client, session_id):
    assert client.post(f"/translation/{session_id}/nurse/start").status_code == 400


def test_end_session(client, session_id):
    body = client.post(f"/translation/{session_id}/end").json()

    assert body["session_status"] == "ended"
    assert body["redirect"] == "/dashboard"

    stored = client.get(f"/sessions/{session_id}").json()
    assert stored["session_status"] == "ended"
    assert stored["end_time"] is not None

    refused = client.post(f"/translation/{session_id}/clinician/start").json()
    assert refused["accepted"] is False


def test_phrase_search(client):
    body = client.get("/phrases", params={"q": "pain"}).json()

    assert list(body["categories"]) == ["Symptoms"]
    assert len(body["categories"]["Symptoms"]) == 3


def test_phrase_search_for_session(client, session_id):
    body = client.get("/phrases", params={"sessionId": session_id, "language": "Polish"}).json()

    assert body["status"]["playing_phrase"] is None
    assert body["back_url"] == f"/translation?sessionId={session_id}&language=Polish"


def test_speak_phrase(client, session_id, fake_translator):
    body = client.post("/phrases/speak", json={
        "sessionId": session_id,
        "language": "Polish",
        "phrase": "Please take a deep breath"
    }).json()

    assert body["translation"] == "[Polish] Please take a deep breath"
    assert body["status"] == "speaking"
    assert fake_translator.calls == [("Please take a deep breath", "English", "Polish")]


def test_speak_phrase_accepts_field_name(client, session_id):
    body = client.post("/phrases/speak", json={
        "session_id": session_id,
        "phrase": "Please take a deep breath"
    }).json()

    assert body["language"] == "Polish"
    assert body["status"] == "speaking"


def test_speak_phrase_for_unknown_session(client, registry):
    response = client.post("/phrases/speak", json={
        "sessionId": "no-such",
        "language": "Polish",
        "phrase": "Please take a deep breath"
    })

    assert response.status_code == 404
    assert registry.phrase_books == {}


def test_phrase_search_for_unknown_session(client, registry):
    response = client.get("/phrases", params={"sessionId": "no-such", "language": "Polish"})

    assert response.status_code == 404
    assert registry.phrase_books == {}


def test_speak_phrase_while_playing_is_409(client, registry, session_id, fake_translator):
    session = client.get(f"/sessions/{session_id}").json()
    registry.phrase_book(session, "Polish").playing_phrase = "Please take a deep breath"

    response = client.post("/phrases/speak", json={
        "sessionId": session_id,
        "language": "Polish",
        "phrase": "Please take a deep breath"
    })

    assert response.status_code == 409
    assert response.json()["error_code"] == "PHRASE_BOOK_BUSY"
    assert fake_translator.calls == []


def test_reopening_mid_turn_keeps_single_speaker(client, registry, session_id):
    client.get("/translation", params={"sessionId": session_id, "language": "Polish"})
    client.post(f"/translation/{session_id}/clinician/start")

    reopened = client.get("/translation", params={"sessionId": session_id, "language": "Arabic"}).json()
    assert reopened["language"] == "Polish"
    assert reopened["turn"]["phase"] == "listening_as_clinician"

    blocked = client.post(f"/translation/{session_id}/patient/start").json()
    assert blocked["accepted"] is False
    assert blocked["turn"]["phase"] == "listening_as_clinician"
    assert list(registry.orchestrators) == [session_id]


def test_reopening_idle_view_switches_language(client, registry, session_id, fake_translator):
    client.get("/translation", params={"sessionId": session_id, "language": "Polish"})
    view = registry.get(session_id)

    reopened = client.get("/translation", params={"sessionId": session_id, "language": "Arabic"}).json()
    assert reopened["language"] == "Arabic"
    assert registry.get(session_id) is view

    client.post(f"/translation/{session_id}/patient/start")
    client.post(f"/translation/{session_id}/patient/finish", json={"text": "Marhaba"})
    assert fake_translator.calls == [("Marhaba", "Arabic", "English")]


def test_end_session_releases_live_views(client, registry, session_id):
    client.get("/phrases", params={"sessionId": session_id, "language": "Polish"})
    client.post(f"/translation/{session_id}/clinician/start")
    assert session_id in registry.orchestrators
    assert session_id in registry.phrase_books

    client.post(f"/translation/{session_id}/end")

    assert registry.orchestrators == {}
    assert registry.phrase_books == {}
    state = client.get(f"/translation/{session_id}/state").json()
    assert state["session_status"] == "ended"
    assert session_id not in registry.orchestrators


def test_end_session_keeps_view_when_storage_fails(client, registry, session_id):
    client.post(f"/translation/{session_id}/clinician/start")
    registry.session_service.update_session = AsyncMock(side_effect=DatabaseError("database is down"))

    body = client.post(f"/translation/{session_id}/end").json()

    assert body["session_status"] == "ended"
    assert registry.get(session_id).session_status == "ended"
    assert client.get(f"/sessions/{session_id}").json()["session_status"] == "active"
