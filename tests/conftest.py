from unittest.mock import MagicMock, patch

import pytest


def _response(url, text, status_code, content_type):
    response = MagicMock()
    response.url = url
    response.status_code = status_code
    response.text = text
    response.headers = {"Content-Type": content_type} if content_type else {}
    return response


class FakeWeb:
    """Canned responses for the transport's requests.get. Unknown URLs answer 404."""

    def __init__(self, mock_get: MagicMock):
        self.get = mock_get
        self._routes = {}

    def add(self, url, text="", status_code=200, content_type="text/html; charset=utf-8"):
        self._routes[url] = _response(url, text, status_code, content_type)

    def fail(self, url, exc):
        self._routes[url] = exc

    def respond(self, url, **kwargs):
        target = self._routes.get(url)
        if target is None:
            return _response(url, "Not Found", 404, "text/html")
        if isinstance(target, Exception):
            raise target
        return target

    @property
    def requested(self) -> list:
        return [c.args[0] for c in self.get.call_args_list]


@pytest.fixture
def fake_web():
    with patch("meta_fetcher.transport.requests.get") as mock_get:
        web = FakeWeb(mock_get)
        mock_get.side_effect = web.respond
        yield web
