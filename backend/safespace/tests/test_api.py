import json

import pytest
from httpx import ASGITransport, AsyncClient

from safespace.main import app, init_state
from safespace.services.state import STORAGE_KEY, PreferencesStore


def _client() -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


def _onboarding_payload(**overrides) -> dict:
    payload = {
        "consent": {"data_processing": True, "anonymous_chat": True, "counselor_contact": False},
        "phq9_answers": {str(i): 2 for i in range(9)},
        "gad7_answers": {str(i): 1 for i in range(7)},
        "concerns": "exam pressure and family",
        "sleep_issue_frequency": 1,
    }
    payload.update(overrides)
    return payload


@pytest.mark.anyio
async def test_root() -> None:
    async with _client() as client:
        res = await client.get("/")
        assert res.status_code == 200
        assert "not a diagnosis" in res.json()["disclaimer"]


@pytest.mark.anyio
async def test_score_endpoints_are_permissive() -> None:
    async with _client() as client:
        res = await client.post(
            "/screenings/phq9",
            json={"responses": [{"question_id": "phq9_0", "answer": 3}, {"question_id": "phq9_1", "answer": "2"},
                                {"question_id": "phq9_2", "answer": "n/a"}, {"question_id": "phq9_3"}]},
        )
        assert res.status_code == 200
        assert res.json() == {"score": 5, "severity": "mild"}

        res = await client.post("/screenings/gad7", json={"responses": [{"question_id": "gad7_0", "answer": 15}]})
        assert res.json() == {"score": 15, "severity": "severe"}


@pytest.mark.anyio
async def test_triage_preview_precedence() -> None:
    gad7 = [{"question_id": f"gad7_{i}", "answer": 2} for i in range(6)]
    async with _client() as client:
        res = await client.post("/screenings/triage", json={"gad7": gad7, "keywords": ["career", "exam"]})
        assert res.status_code == 200
        body = res.json()
        assert body["gad7"] == {"score": 12, "severity": "moderate"}
        assert body["problem_id"] == "placement_career_anxiety"
        assert body["priority"] == "medium"
        assert body["redirect_to"] == "/problems/placement_career_anxiety"

        res = await client.post(
            "/screenings/triage",
            json={"concerns": "exam week", "auxiliary": {"sleep_issue_frequency": 4}},
        )
        assert res.json()["problem_id"] == "sleep_burnout"

        res = await client.post("/screenings/triage", json={})
        assert res.json()["problem_id"] == "other_mixed"
        assert res.json()["priority"] == "low"


@pytest.mark.anyio
async def test_full_onboarding_flow(state_file) -> None:
    async with _client() as client:
        steps = (await client.get("/onboarding/consent-steps")).json()
        assert [s["id"] for s in steps if s["required"]] == ["data_processing", "anonymous_chat"]

        res = await client.post("/onboarding", json=_onboarding_payload())
        assert res.status_code == 200
        body = res.json()
        assert body["ephemeral_handle"].startswith("Guest-")
        result = body["result"]
        assert result["phq9"] == {"score": 18, "severity": "moderately_severe"}
        assert result["gad7"] == {"score": 7, "severity": "mild"}
        assert result["problem_id"] == "academic_stress"
        assert result["priority"] == "high"
        assert result["redirect_to"] == "/problems/academic_stress"

        state = (await client.get("/state")).json()
        assert state["onboarding_completed"] is True
        assert state["current_problem_id"] == "academic_stress"
        assert [r["tool"] for r in state["screening_results"]] == ["PHQ9", "GAD7"]
        assert state["screening_results"][0]["problem_tags"] == ["academic_stress"]
        assert state["student"]["consent_flags"]["anonymous_chat"] is True

        problem = (await client.get("/problems/academic_stress")).json()
        assert problem["is_current"] is True
        assert problem["title"] == "Academic Stress"

    persisted = json.loads(state_file.read_text(encoding="utf-8"))
    assert persisted == {STORAGE_KEY: {"currentLanguage": "en", "onboardingCompleted": True}}


@pytest.mark.anyio
async def test_onboarding_errors() -> None:
    async with _client() as client:
        res = await client.post("/onboarding", json=_onboarding_payload(consent={"data_processing": True}))
        assert res.status_code == 400

        res = await client.post("/onboarding", json=_onboarding_payload(gad7_answers={"0": 1}))
        assert res.status_code == 400

        res = await client.post("/onboarding", json=_onboarding_payload(phq9_answers={str(i): 4 for i in range(9)}))
        assert res.status_code == 422

        res = await client.post("/onboarding", json=_onboarding_payload(sleep_issue_frequency=2))
        assert res.status_code == 422

        assert (await client.get("/state")).json()["onboarding_completed"] is False


@pytest.mark.anyio
async def test_simple_onboarding_and_institution_search() -> None:
    async with _client() as client:
        res = await client.get("/onboarding/institutions", params={"search": "srinagar"})
        assert res.json()["total"] == 2

        res = await client.post("/onboarding/simple", json={"institution": "Delhi University", "role": "counsellor"})
        assert res.status_code == 200
        assert res.json()["redirect_to"] == "/counsellor-dashboard"

        res = await client.post("/onboarding/simple", json={"institution": "Nowhere", "role": "student"})
        assert res.status_code == 400


@pytest.mark.anyio
async def test_language_and_clear_state(state_file) -> None:
    async with _client() as client:
        languages = (await client.get("/state/languages")).json()
        assert [lang["code"] for lang in languages] == ["en", "hi", "ks"]

        res = await client.put("/state/language", json={"language": "hi"})
        assert res.status_code == 200
        assert res.json()["current_language"] == "hi"

        res = await client.put("/state/language", json={"language": "de"})
        assert res.status_code == 400

        await client.post("/onboarding", json=_onboarding_payload())
        res = await client.delete("/state")
        body = res.json()
        assert body["student"] is None
        assert body["screening_results"] == []
        assert body["current_language"] == "hi"

    persisted = json.loads(state_file.read_text(encoding="utf-8"))
    assert persisted[STORAGE_KEY] == {"currentLanguage": "hi", "onboardingCompleted": False}


@pytest.mark.anyio
async def test_catalog_routes() -> None:
    async with _client() as client:
        assert (await client.get("/problems/not_a_problem")).status_code == 404
        assert (await client.get("/problems/other_mixed")).json()["is_current"] is False

        counsellors = (await client.get("/dashboard/counsellors")).json()
        assert [c["id"] for c in counsellors] == ["c1", "c2", "c3"]

        tracks = (await client.get("/relaxation/tracks", params={"category": "meditation"})).json()
        assert [t["id"] for t in tracks] == ["meditation"]
        assert len((await client.get("/relaxation/tracks")).json()) == 5

        games = (await client.get("/games")).json()
        assert games["points"] == 0
        assert games["total"] == 3

        res = await client.post("/games/breathing/complete")
        assert res.json()["points"] == 10
        assert res.json()["completed_count"] == 1
        assert (await client.post("/games/chess/complete")).status_code == 404


@pytest.mark.anyio
async def test_counsellor_requests() -> None:
    async with _client() as client:
        body = (await client.get("/counsellor/requests")).json()
        assert body["urgent_count"] == 1
        assert body["pending_count"] == 2
        assert body["items"][0]["time_ago"] == "30m ago"

        res = await client.post("/counsellor/requests/2/accept")
        assert res.json()["status"] == "active"
        assert (await client.get("/counsellor/requests")).json()["pending_count"] == 1

        assert (await client.post("/counsellor/requests/42/accept")).status_code == 404


@pytest.mark.anyio
async def test_infinite_answers_score_as_zero() -> None:
    async with _client() as client:
        res = await client.post(
            "/screenings/phq9",
            json={"responses": [{"question_id": "phq9_0", "answer": "inf"}, {"question_id": "phq9_1", "answer": "-inf"},
                                {"question_id": "phq9_2", "answer": "1_0"}]},
        )
        assert res.status_code == 200
        assert res.json() == {"score": 0, "severity": "minimal"}


@pytest.mark.anyio
async def test_language_change_survives_unwritable_preferences(tmp_path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    init_state(app, PreferencesStore(blocker / "state.json"))

    async with _client() as client:
        res = await client.put("/state/language", json={"language": "hi"})
        assert res.status_code == 200
        assert res.json()["current_language"] == "hi"
        assert (await client.get("/state")).json()["current_language"] == "hi"
