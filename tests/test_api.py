"""
API Endpoint Tests

Exercises the FastAPI routes against an in-memory store via TestClient.

Run:
----
    pytest tests/test_api.py -v
"""

import pytest
from fastapi.testclient import TestClient

from conftest import make_store
from signal_scoring.server.app import app
from signal_scoring.server.config import ServerConfig
from signal_scoring.server.state import AppState, get_state, set_state

USER = "user-1"


@pytest.fixture
def client():
    set_state(AppState(ServerConfig(random_seed=1), store=make_store(USER, saved=12, skipped=2)))
    yield TestClient(app)
    set_state(None)


class TestRootEndpoint:
    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Signal Scoring API"
        assert data["learned_phase_min_saved"] == 10
        assert data["confidence_thresholds"] == {"low_max": 0.4, "medium_max": 0.65}


class TestScoringEndpoints:
    def test_score_candidate(self, client):
        response = client.get(f"/api/users/{USER}/candidates/on-topic/score")
        assert response.status_code == 200
        data = response.json()
        assert data["chunk_id"] == "on-topic"
        assert data["phase"] == "learned"
        assert data["confidence"] == "high"

    def test_score_candidate_missing_embedding(self, client):
        response = client.get(f"/api/users/{USER}/candidates/no-embedding/score")
        assert response.status_code == 422

    def test_batch_score(self, client):
        response = client.post(
            f"/api/users/{USER}/candidates/score",
            json={"chunk_ids": ["on-topic", "no-embedding", "corpus-1"]},
        )
        assert response.status_code == 200
        data = response.json()
        assert len(data["scores"]) == 2
        assert data["missing_embedding_ids"] == ["no-embedding"]

    def test_dimension_mismatch_is_logged_500(self, client, caplog):
        get_state().store.add_chunk({"id": "short", "embedding": [1.0, 0.0]})
        with caplog.at_level("ERROR"):
            response = client.get(f"/api/users/{USER}/candidates/short/score")
        assert response.status_code == 500
        assert "DIMENSION_MISMATCH" in caplog.text

    def test_batch_dimension_mismatch(self, client):
        get_state().store.add_chunk({"id": "short", "embedding": [1.0, 0.0]})
        response = client.post(f"/api/users/{USER}/candidates/score", json={"chunk_ids": ["short"]})
        assert response.status_code == 500

    def test_novelty(self, client):
        response = client.get(f"/api/users/{USER}/candidates/on-topic/novelty")
        assert response.status_code == 200
        data = response.json()
        assert data["adjustment"] == -20
        assert data["is_duplicate"] is True
        assert data["cluster_size"] == 12

    def test_novelty_missing_embedding(self, client):
        response = client.get(f"/api/users/{USER}/candidates/no-embedding/novelty")
        assert response.status_code == 422

    def test_cold_start_user(self, client):
        response = client.get("/api/users/new-user/candidates/on-topic/score")
        assert response.status_code == 200
        data = response.json()
        assert data["phase"] == "cold_start"
        assert 0.0 <= data["score"] <= 1.0


class TestFeedbackEndpoints:
    def test_save_then_conflict_then_undo(self, client):
        url = f"/api/users/{USER}/feedback"
        response = client.post(url, json={"chunk_id": "corpus-3", "label": "saved"})
        assert response.status_code == 200
        assert response.json() == {"success": True, "chunk_id": "corpus-3", "label": "saved"}

        response = client.post(url, json={"chunk_id": "corpus-3", "label": "skipped"})
        assert response.status_code == 409

        response = client.delete(f"{url}/corpus-3")
        assert response.status_code == 200

        response = client.post(url, json={"chunk_id": "corpus-3", "label": "skipped"})
        assert response.status_code == 200

    def test_bad_label(self, client):
        response = client.post(f"/api/users/{USER}/feedback", json={"chunk_id": "corpus-3", "label": "liked"})
        assert response.status_code == 400

    def test_unlabeled_rejected(self, client):
        response = client.post(f"/api/users/{USER}/feedback", json={"chunk_id": "corpus-3", "label": "unlabeled"})
        assert response.status_code == 400

    def test_unknown_chunk(self, client):
        response = client.post(f"/api/users/{USER}/feedback", json={"chunk_id": "nope", "label": "saved"})
        assert response.status_code == 404

    def test_undo_nothing(self, client):
        response = client.delete(f"/api/users/{USER}/feedback/corpus-9")
        assert response.status_code == 404


class TestReportEndpoints:
    def test_validation(self, client):
        response = client.get(f"/api/users/{USER}/validation")
        assert response.status_code == 200
        data = response.json()
        assert data["has_saved_chunks"] is True
        assert data["verdict"] == "working_well"
        assert data["centroid_contrast"]["skipped_count"] == 2

    def test_validation_new_user(self, client):
        response = client.get("/api/users/new-user/validation")
        assert response.status_code == 200
        assert response.json()["has_saved_chunks"] is False

    def test_status(self, client):
        response = client.get(f"/api/users/{USER}/status")
        assert response.status_code == 200
        data = response.json()
        assert data["phase"] == "learned"
        assert data["saved_count"] == 12
        assert data["skipped_count"] == 2

    def test_distribution(self, client):
        response = client.post("/api/distribution", json={"scores": [0.05, 0.55, 0.95, 0.96]})
        assert response.status_code == 200
        data = response.json()
        assert len(data) == 10
        assert data[0] == {"label": "0-10%", "count": 1}
        assert data[5]["count"] == 1
        assert data[9]["count"] == 2
