"""End-to-end tests of the HTTP surface with the database and clock overridden."""

import datetime

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from app.api.dependencies import get_clock
from app.db.session import get_db, get_engine
from app.main import app

PRE = {"sleep_quality": 7, "fatigue_level": 3, "stress_level": 2, "muscle_soreness": 4, "mood": 8, "readiness": 8}


@pytest.fixture
def client(engine, clock, squad):
    def _get_db():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_engine] = lambda: engine
    app.dependency_overrides[get_clock] = lambda: clock
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _url(squad, kind: str = "pre", suffix: str = "") -> str:
    session_id, athlete_id = squad["session"].id, squad["athletes"][0].id
    return f"/api/v1/wellness/{kind}/sessions/{session_id}/athletes/{athlete_id}{suffix}"


class TestHealth:
    def test_root(self, client):
        assert client.get("/").json()["status"] == "healthy"

    def test_health(self, client):
        assert client.get("/health").json()["status"] == "healthy"


class TestWellnessEndpoints:
    def test_submit_and_conflict(self, client, squad):
        response = client.post(_url(squad), json=PRE)
        assert response.status_code == 201
        assert response.json()["ratings"]["mood"] == 8

        response = client.post(_url(squad), json=PRE)
        assert response.status_code == 409
        body = response.json()
        assert body["error"] == "conflict"
        assert body["existing"]["ratings"]["mood"] == 8

    def test_window(self, client, squad):
        body = client.get(_url(squad, suffix="/window")).json()
        assert body["is_open"] is True
        assert body["remaining_minutes"] == 120

    def test_invalid_payload(self, client, squad):
        response = client.post(_url(squad), json={**PRE, "mood": 42})
        assert response.status_code == 422
        assert response.json()["error"] == "validation_error"

    def test_unknown_session(self, client, squad):
        response = client.post(f"/api/v1/wellness/pre/sessions/999/athletes/{squad['athletes'][0].id}", json=PRE)
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    def test_expired_then_unlocked(self, client, squad, clock):
        clock.advance(hours=3)
        response = client.post(_url(squad), json=PRE)
        assert response.status_code == 409
        body = response.json()
        assert body["error"] == "window_expired"
        assert body["can_request_unlock"] is True

        response = client.post(body["unlock_request"], json={"reason": "Phone died"})
        assert response.status_code == 200
        assert response.json()["state"] == "unlock_requested"

        response = client.post(_url(squad, suffix="/unlock-decision"),
                               json={"decision": "approve", "resolved_by": "coach"})
        assert response.json()["state"] == "unlocked"

        assert client.post(_url(squad), json=PRE).status_code == 201

    def test_decision_without_request(self, client, squad, clock):
        clock.advance(hours=3)
        response = client.post(_url(squad, suffix="/unlock-decision"), json={"decision": "deny"})
        assert response.status_code == 409
        assert response.json()["error"] == "invalid_transition"

    def test_session_status(self, client, squad):
        client.post(_url(squad), json=PRE)
        body = client.get(f"/api/v1/wellness/sessions/{squad['session'].id}/status").json()
        assert body["responded_pre"] == 1
        assert body["total_athletes"] == 3


class TestAthleteEndpoints:
    def test_load(self, client, squad):
        body = client.get(f"/api/v1/athletes/{squad['athletes'][0].id}/load",
                          params={"as_of": "2026-10-15"}).json()
        assert body["acwr"] is None
        assert body["days_of_data"] == 0

    def test_eligibility(self, client, squad):
        body = client.get(f"/api/v1/athletes/{squad['athletes'][1].id}/eligibility").json()
        assert body["can_play_today"] is False
        assert body["badge"] == "red"

    def test_unknown_athlete(self, client, squad):
        assert client.get("/api/v1/athletes/999/load").status_code == 404

    def test_wellness_summary(self, client, squad, clock):
        client.post(_url(squad), json=PRE)
        clock.advance(hours=4)
        response = client.get(f"/api/v1/athletes/{squad['athletes'][0].id}/wellness-summary", params={"days": 7})
        assert response.status_code == 200
        body = response.json()
        assert body["period_days"] == 7
        assert body["total_sessions"] == 1
        assert body["responded_pre"] == 1
        assert body["avg_mood"] == 8.0
        assert body["avg_session_rpe"] is None

    def test_wellness_summary_rejects_bad_period(self, client, squad):
        response = client.get(f"/api/v1/athletes/{squad['athletes'][0].id}/wellness-summary", params={"days": 0})
        assert response.status_code == 422


class TestSnapshotEndpoint:
    def test_snapshot(self, client, squad, clock):
        clock.advance(hours=4)
        response = client.get(f"/api/v1/sessions/{squad['session'].id}/snapshot")
        assert response.status_code == 200
        body = response.json()
        assert body["data_incomplete"] is False
        assert body["context"]["status"] == "completed"
        assert body["athletes"][0]["overall_status"] == "critical"
        assert datetime.datetime.fromisoformat(body["generated_at"]) == clock()

    def test_unknown_session(self, client, squad):
        response = client.get("/api/v1/sessions/999/snapshot")
        assert response.status_code == 404
