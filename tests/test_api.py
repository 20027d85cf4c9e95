import logging

import pytest
from unittest.mock import patch
from fastapi.testclient import TestClient

from api.main import app
from meta_fetcher.errors import DisallowedError, HttpStatusError, InvalidUrlError, NetworkError
from meta_fetcher.models import Metadata

client = TestClient(app)

MOCK_RESULT = Metadata(
    title="Example Article Title",
    description="An example article about link previews.",
    image="https://example.com/cover.png",
)


# --- /health ---

def test_health_returns_ok():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


# --- /metadata ---

def test_metadata_success():
    with patch("api.routes.fetch_metadata", return_value=MOCK_RESULT):
        response = client.post("/metadata", json={"url": "https://example.com/article"})

    assert response.status_code == 200
    assert response.json() == {
        "url": "https://example.com/article",
        "title": "Example Article Title",
        "description": "An example article about link previews.",
        "image": "https://example.com/cover.png",
    }


def test_missing_fields_are_null():
    with patch("api.routes.fetch_metadata", return_value=Metadata(title="Only a title")):
        response = client.post("/metadata", json={"url": "https://example.com/"})

    data = response.json()
    assert data["title"] == "Only a title"
    assert data["description"] is None
    assert data["image"] is None


def test_invalid_url_rejected():
    response = client.post("/metadata", json={"url": "not-a-url"})
    assert response.status_code == 422


def test_missing_url_rejected():
    response = client.post("/metadata", json={})
    assert response.status_code == 422


def test_respect_robots_defaults_true():
    with patch("api.routes.fetch_metadata", return_value=MOCK_RESULT) as mock_fetch:
        client.post("/metadata", json={"url": "https://example.com/article"})

    mock_fetch.assert_called_once_with("https://example.com/article", respect_robots=True)


def test_respect_robots_false_passes_through():
    with patch("api.routes.fetch_metadata", return_value=MOCK_RESULT) as mock_fetch:
        client.post("/metadata", json={"url": "https://example.com/article", "respect_robots": False})

    mock_fetch.assert_called_once_with("https://example.com/article", respect_robots=False)


@pytest.mark.parametrize("error, status, code", [
    (InvalidUrlError("not an absolute http(s) URL: 'http://'"), 422, "invalid_url"),
    (DisallowedError("robots.txt disallows fetching https://example.com/private"), 403, "disallowed"),
    (NetworkError("Connection timeout"), 502, "network_error"),
    (HttpStatusError(404, url="https://example.com/gone"), 502, "upstream_status"),
])
def test_fetch_errors_map_to_http(error, status, code):
    with patch("api.routes.fetch_metadata", side_effect=error):
        response = client.post("/metadata", json={"url": "https://example.com/x"})

    assert response.status_code == status
    assert response.json()["code"] == code


def test_network_failure_detail():
    with patch("api.routes.fetch_metadata", side_effect=NetworkError("Connection timeout")):
        response = client.post("/metadata", json={"url": "https://dead.example.com"})

    assert "Failed to reach URL" in response.json()["detail"]


def test_upstream_status_is_reported():
    with patch("api.routes.fetch_metadata", side_effect=HttpStatusError(404, url="https://example.com/gone")):
        response = client.post("/metadata", json={"url": "https://example.com/gone"})

    data = response.json()
    assert data["upstream_status"] == 404
    assert "404" in data["detail"]


def test_robots_block_has_no_upstream_status():
    with patch("api.routes.fetch_metadata", side_effect=DisallowedError("robots.txt disallows fetching x")):
        response = client.post("/metadata", json={"url": "https://example.com/private"})

    assert "upstream_status" not in response.json()
    assert "robots" in response.json()["detail"].lower()


def test_success_carries_ok_outcome():
    with patch("api.routes.fetch_metadata", return_value=MOCK_RESULT):
        response = client.post("/metadata", json={"url": "https://example.com/article"})

    assert response.headers["X-Fetch-Outcome"] == "ok"


@pytest.mark.parametrize("error, code", [
    (DisallowedError("robots.txt disallows fetching x"), "disallowed"),
    (NetworkError("Connection timeout"), "network_error"),
    (HttpStatusError(500, url="https://example.com/x"), "upstream_status"),
])
def test_error_carries_outcome_header(error, code):
    with patch("api.routes.fetch_metadata", side_effect=error):
        response = client.post("/metadata", json={"url": "https://example.com/x"})

    assert response.headers["X-Fetch-Outcome"] == code


@pytest.mark.parametrize("url", [
    "http://example.com:abc/",
    "http://example.com:99999/",
    "http://exa mple.com/",
])
def test_malformed_url_is_422_without_network(url):
    # passes the schema's scheme check, rejected by the pipeline before any request
    with patch("meta_fetcher.transport.requests.get") as mock_get:
        response = client.post("/metadata", json={"url": url})

    assert response.status_code == 422
    assert response.json()["code"] == "invalid_url"
    mock_get.assert_not_called()


def test_request_log_includes_outcome(caplog):
    with caplog.at_level(logging.INFO, logger="api.middleware"):
        with patch("api.routes.fetch_metadata", side_effect=DisallowedError("robots.txt disallows fetching x")):
            client.post("/metadata", json={"url": "https://example.com/private"})

    assert "POST /metadata -> 403 disallowed" in caplog.text


def test_health_log_has_no_outcome(caplog):
    with caplog.at_level(logging.INFO, logger="api.middleware"):
        client.get("/health")

    assert "GET /health -> 200 (" in caplog.text
