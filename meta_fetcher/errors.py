from typing import Optional


class FetchError(Exception):
    """Base class for every reason fetch_metadata can fail to produce a record."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class InvalidUrlError(FetchError, ValueError):
    """The input is not an absolute http(s) URL."""


class DisallowedError(FetchError, PermissionError):
    """The site's robots.txt forbids fetching the path. No request was made."""


class NetworkError(FetchError):
    """DNS, connection or timeout failure while reaching the host."""


class HttpStatusError(FetchError):
    """The target page answered with a non-success status."""

    def __init__(self, status_code: int, url: Optional[str] = None):
        super().__init__(f"HTTP {status_code} for {url}", url=url)
        self.status_code = status_code
