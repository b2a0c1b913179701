"""Tests for the web API."""

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from symptom_diary.web import run
from symptom_diary.web.app import app
from symptom_diary.web.dependencies import get_correlation_service, get_storage
from tests.factories import frozen_service


@pytest.fixture
def client(storage):
    """TestClient backed by a temporary store and a frozen clock."""
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_correlation_service] = lambda: frozen_service()
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def seeded(storage, bread_entries):
    storage.save_entries(bread_entries, validate=False)
    return bread_entries


def symptom_payload(**overrides) -> dict:
    payload = {
        "user_id": "user1",
        "timestamp": (datetime.now().astimezone() - timedelta(hours=1)).isoformat(),
        "type": "symptom",
        "data": {"symptom_type": "bloating", "severity": 6},
    }
    payload.update(overrides)
    return payload


class TestEntriesApi:
    """Tests for /entries."""

    def test_create_and_list(self, client):
        response = client.post("/entries/", json=symptom_payload(id="s-1"))

        assert response.status_code == 201
        assert response.json()["id"] == "s-1"

        listed = client.get("/entries/").json()
        assert [e["id"] for e in listed] == ["s-1"]

    def test_create_rejects_invalid_payload(self, client):
        response = client.post(
            "/entries/",
            json=symptom_payload(data={"symptom_type": "bloating", "severity": 11}),
        )

        assert response.status_code == 422
        assert response.json()["detail"] == ["Severity must be between 1 and 10"]

    def test_create_rejects_unknown_type(self, client):
        response = client.post("/entries/", json=symptom_payload(type="meditation"))

        assert response.status_code == 422

    def test_get_and_delete(self, client):
        client.post("/entries/", json=symptom_payload(id="s-1"))

        assert client.get("/entries/s-1").status_code == 200
        assert client.delete("/entries/s-1").status_code == 204
        assert client.get("/entries/s-1").status_code == 404
        assert client.delete("/entries/s-1").status_code == 404

    def test_list_by_user(self, client):
        client.post("/entries/", json=symptom_payload(user_id="a"))
        client.post("/entries/", json=symptom_payload(user_id="b"))

        listed = client.get("/entries/", params={"user_id": "a"}).json()

        assert [e["user_id"] for e in listed] == ["a"]


class TestAnalysisApi:
    """Tests for /analysis."""

    def test_correlations(self, client, seeded):
        data = client.get("/analysis/correlations").json()

        assert data["total_entries"] == 10
        assert data["symptom_episodes"] == 5
        assert data["triggers"][0]["item"] == "White Bread"
        assert data["triggers"][0]["correlation_percentage"] == 100
        assert "start" in data["timeframe"]

    def test_correlations_filtered(self, client, seeded):
        data = client.get("/analysis/correlations", params={"symptom_type": "pain"}).json()

        assert data["symptom_episodes"] == 0
        assert data["triggers"][0]["correlation_percentage"] == 0

    def test_correlations_by_symptom(self, client, seeded):
        data = client.get("/analysis/correlations/by-symptom").json()

        assert list(data) == ["bloating"]
        assert data["bloating"]["triggers"][0]["symptom"] == "bloating"

    def test_trends(self, client, seeded):
        response = client.get(
            "/analysis/trends",
            params={"item": "White Bread", "symptom_type": "bloating", "weeks": 2},
        )

        points = response.json()
        assert len(points) == 2
        assert points[0]["label"] == "Week 1"
        assert sum(p["item_count"] for p in points) == 5

    def test_trends_requires_item(self, client):
        assert client.get("/analysis/trends", params={"symptom_type": "gas"}).status_code == 422

    def test_summary(self, client, seeded):
        data = client.get("/analysis/summary").json()

        assert data["total_entries"] == 10
        assert data["tracked_days"] == 5
        assert data["potential_triggers"] == 1
        assert data["data_completeness"] == 50

    def test_summary_empty(self, client):
        data = client.get("/analysis/summary").json()

        assert data["total_entries"] == 0
        assert data["data_completeness"] == 0

    def test_high_risk_hours(self, client, seeded):
        assert client.get("/analysis/high-risk-hours").json() == {"hours": [15]}

    def test_report(self, client, seeded):
        data = client.get("/analysis/report", params={"days": 30}).json()

        assert data["summary"]["symptom_episodes"] == 5
        assert data["triggers"][0]["item"] == "White Bread"
        assert data["period"] is not None
        assert data["recommendations"]

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}


class TestRun:
    """Tests for the diary-web entry point."""

    def test_run_uses_configured_address(self, env_data_dir, monkeypatch):
        calls = []
        monkeypatch.setenv("WEB_HOST", "0.0.0.0")
        monkeypatch.setenv("WEB_PORT", "9100")
        monkeypatch.setattr("uvicorn.run", lambda target, **kw: calls.append((target, kw)))

        run()

        assert calls == [(
            "symptom_diary.web.app:app",
            {"host": "0.0.0.0", "port": 9100, "log_level": "warning"},
        )]
