import logging
from typing import Optional

from .errors import DisallowedError, HttpStatusError
from .models import FetchedPage
from .robots import check_allowed
from .transport import http_get

logger = logging.getLogger(__name__)

MAX_CONTENT_CHARS = 5 * 1024 * 1024  # ceiling to avoid runaway pages


def _mime_type(header: Optional[str]) -> Optional[str]:
    # "text/html; charset=utf-8" -> "text/html"
    if not header:
        return None
    return header.split(";", 1)[0].strip().lower() or None


def fetch_page(url: str, respect_robots: bool = True) -> FetchedPage:
    """
    Fetch the body of a URL with a single GET.

    robots.txt is consulted first when respect_robots is set; a denied page is
    never requested. Raises DisallowedError, NetworkError or HttpStatusError.
    """
    if respect_robots and not check_allowed(url):
        raise DisallowedError(f"robots.txt disallows fetching {url}", url=url)

    response = http_get(url)
    if not 200 <= response.status_code < 300:
        raise HttpStatusError(response.status_code, url=url)

    return FetchedPage(
        url=url,
        final_url=response.url or url,
        status_code=response.status_code,
        content_type=_mime_type(response.headers.get("Content-Type")),
        text=response.text[:MAX_CONTENT_CHARS],
    )
