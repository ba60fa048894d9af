# tests\adapters\test_api_endpoints.py
import json
import sys

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from learn_circassian.adapters.api.main import create_app
from learn_circassian.core.domain.exceptions import HttpStatusError, StoreUnavailableError
from tests.conftest import word_record


@pytest.fixture
def client(container):
    """
    Returns a FastAPI TestClient.

    The 'container' fixture (from conftest.py) has already overridden
    the store and fetcher with Mocks.
    """
    app = create_app()
    with TestClient(app) as c:
        yield c


def _events(response):
    return [json.loads(line) for line in response.text.splitlines() if line]


def _fetch_yielding(*fractions, error=None):
    async def fetch(url, destination):
        for fraction in fractions:
            yield fraction
        if error is not None:
            raise error
    return fetch


class TestSearchEndpoint:

    def test_search_success(self, client, mock_store):
        """
        Scenario: 3 prefix matches.
        Expected: 200 OK with one page and the camel-cased page count.
        """
        # Arrange
        mock_store.count_words.return_value = 3
        mock_store.find_words.return_value = ["ab", "abc", "abd"]

        # Act
        response = client.post("/api/v1/search", json={"query": "ab", "mode": "starts_with", "page": 1})

        # Assert
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"data": ["ab", "abc", "abd"], "page": 1, "totalPages": 1}
        mock_store.find_words.assert_awaited_once_with("ab%", 50, 0)

    def test_search_validation_error(self, client):
        response = client.post("/api/v1/search", json={"query": "ab", "page": 0})
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_search_without_store(self, client, mock_store):
        """
        Scenario: The store file has not been downloaded yet.
        Expected: 503 with the standard error envelope.
        """
        mock_store.count_words.side_effect = StoreUnavailableError(mock_store.path)

        response = client.post("/api/v1/search", json={"query": "ab"})

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        body = response.json()
        assert body["status"] == "error"
        assert body["code"] == 503


class TestWordEndpoints:

    def test_get_word(self, client, mock_store):
        mock_store.get_word.return_value = word_record("адыгэ")

        response = client.get("/api/v1/words/адыгэ")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["word"] == "адыгэ"
        assert [e["id"] for e in data["entries"]] == [1, 2]
        assert data["entries"][0]["html"] == "<b>адыгэ</b> <i>черкес</i>"
        assert data["entries"][1]["dictionary"]["from_lang"] == "Kbd"

    def test_get_word_not_found(self, client):
        response = client.get("/api/v1/words/nothing")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() is None

    def test_get_word_integrity_fault(self, client, mock_store):
        mock_store.get_word.return_value = word_record("broken")

        response = client.get("/api/v1/words/broken")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json()["message"] == "The dictionary data for this word is malformed."

    def test_filtered_word(self, client, mock_store):
        mock_store.get_word.return_value = word_record("адыгэ")

        response = client.get("/api/v1/words/адыгэ/filtered", params={"from_lang": "Kbd"})

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert [e["id"] for e in data["entries"]] == [2]
        assert [e["id"] for e in data["filtered"]] == [1]
        assert data["fromOptions"] == ["Ady", "Kbd"]
        assert data["toOptions"] == ["Ru", "En"]
        assert data["fromLang"] == "Kbd"
        assert data["languageNames"] == {
            "Ady": "West Circassian",
            "Kbd": "East Circassian",
            "Ru": "Russian",
            "En": "English",
        }


class TestStoreEndpoints:

    def test_status_needs_setup(self, client, mock_store):
        mock_store.is_ready.return_value = False

        response = client.get("/api/v1/store/status")

        assert response.json() == {"needsSetup": True}

    def test_path(self, client, mock_store):
        response = client.get("/api/v1/store/path")
        assert response.json() == {"path": mock_store.path}

    def test_fetch_streams_progress(self, client, mock_store, mock_fetcher):
        """
        Scenario: The store is missing and the download succeeds.
        Expected: NDJSON progress events followed by a single 'done'.
        """
        mock_store.is_ready.return_value = False
        mock_fetcher.fetch = _fetch_yielding(0.5, 0.5, 1.0)

        response = client.post("/api/v1/store/fetch")

        assert response.status_code == status.HTTP_200_OK
        assert response.headers["content-type"].startswith("application/x-ndjson")
        assert _events(response) == [
            {"event": "progress", "fraction": 0.5},
            {"event": "progress", "fraction": 1.0},
            {"event": "done"},
        ]

    def test_fetch_when_present(self, client, mock_fetcher):
        response = client.post("/api/v1/store/fetch")

        assert _events(response) == [{"event": "done"}]

    def test_fetch_reports_errors_in_band(self, client, mock_store, mock_fetcher):
        mock_store.is_ready.return_value = False
        mock_fetcher.fetch = _fetch_yielding(
            error=HttpStatusError("https://example.org/db", 404, "Not Found")
        )

        response = client.post("/api/v1/store/fetch")

        events = _events(response)
        assert events[-1]["event"] == "error"
        assert events[-1]["kind"] == "HttpStatusError"
        assert events[-1]["status"] == 404
        assert events[-1]["retryable"] is True

    def test_fetch_unexpected_error_still_ends_the_stream(self, client, mock_store, mock_fetcher):
        """
        Scenario: The download fails with a non-domain exception (bad URL setting).
        Expected: The stream still ends with a single, non-retryable error event.
        """
        mock_store.is_ready.return_value = False
        mock_fetcher.fetch = _fetch_yielding(0.5, error=RuntimeError("Invalid URL 'htp:/x'"))

        response = client.post("/api/v1/store/fetch")

        events = _events(response)
        assert events[0] == {"event": "progress", "fraction": 0.5}
        assert events[-1] == {
            "event": "error",
            "kind": "RuntimeError",
            "message": "Invalid URL 'htp:/x'",
            "retryable": False,
        }
        assert [e["event"] for e in events].count("error") == 1
        assert "done" not in [e["event"] for e in events]

    def test_fetch_conflict(self, client, container):
        container.setup_store_use_case()._running = True

        response = client.post("/api/v1/store/fetch")

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_reveal(self, client, mock_store, monkeypatch):
        opened = []
        monkeypatch.setattr(
            "learn_circassian.adapters.api.routers.store.reveal_in_file_manager",
            opened.append,
        )

        response = client.post("/api/v1/store/reveal")

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert opened == [mock_store.path]

    def test_platform(self, client):
        assert client.get("/api/v1/platform").json() == {"platform": sys.platform}


class TestHealthEndpoints:

    def test_liveness(self, client):
        response = client.get("/health/live")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "ok"

    def test_readiness_healthy(self, client):
        response = client.get("/health/ready")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["store"] == "up"

    def test_readiness_unhealthy(self, client, mock_store):
        """
        Scenario: The store cannot be queried.
        Expected: 503 Service Unavailable.
        """
        mock_store.health_check.side_effect = StoreUnavailableError(mock_store.path)

        response = client.get("/health/ready")

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.json()["store"] == "down"
