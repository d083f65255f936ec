"""
Tests for API authentication.

Tests X-API-Key header authentication when API_AUTH_ENABLED=true.
"""

import importlib
import os
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from question_similarity.api.dependencies.engine import get_engine
from question_similarity.dedup import SimilarityEngine

TEST_API_KEY = "test-secret-key-12345"
SIMILAR_URL = "/questionnaires/similar-questions"
SIMILAR_PARAMS = {"organizationId": "org-1", "questionText": "Do you encrypt data at rest?"}


def build_app(env, memory_corpus):
    """Reload auth and main so the app picks up the environment."""
    with patch.dict(os.environ, env, clear=False):
        import question_similarity.api.dependencies.auth as auth_module
        import question_similarity.api.main as main_module

        importlib.reload(auth_module)
        importlib.reload(main_module)

    main_module.app.dependency_overrides[get_engine] = lambda: SimilarityEngine(memory_corpus)
    return main_module.app


class TestAuthDisabled:
    """Tests when authentication is disabled (default)."""

    def test_no_key_required(self, memory_corpus):
        app = build_app({"API_AUTH_ENABLED": "false"}, memory_corpus)
        client = TestClient(app)

        response = client.get(SIMILAR_URL, params=SIMILAR_PARAMS)

        assert response.status_code == 200


class TestAuthEnabled:
    """Tests when authentication is enabled."""

    @pytest.fixture
    def client(self, memory_corpus):
        app = build_app({"API_AUTH_ENABLED": "true", "API_KEY": TEST_API_KEY}, memory_corpus)
        return TestClient(app)

    def test_health_no_auth_required(self, client):
        assert client.get("/health").status_code == 200

    def test_missing_key(self, client):
        response = client.get(SIMILAR_URL, params=SIMILAR_PARAMS)

        assert response.status_code == 401
        assert "Missing API key" in response.json()["detail"]

    def test_invalid_key(self, client):
        response = client.get(SIMILAR_URL, params=SIMILAR_PARAMS, headers={"X-API-Key": "wrong"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid API key"

    def test_valid_key(self, client):
        response = client.get(SIMILAR_URL, params=SIMILAR_PARAMS, headers={"X-API-Key": TEST_API_KEY})

        assert response.status_code == 200
        assert [d["id"] for d in response.json()] == ["q-1"]

    def test_duplicates_protected(self, client):
        assert client.get("/questionnaires/qn-1/duplicates").status_code == 401
