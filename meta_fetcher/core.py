import logging
from urllib.parse import urlparse

import requests

from .errors import DisallowedError, FetchError, InvalidUrlError
from .extractor import extract
from .fetcher import fetch_page
from .models import Metadata

logger = logging.getLogger(__name__)


def validate_url(url: str) -> str:
    """Return url unchanged if it is an absolute http(s) URL with a valid host and port."""
    try:
        parsed = urlparse(url)
        parsed.port  # raises ValueError for non-numeric or out-of-range ports
    except (TypeError, ValueError) as exc:
        raise InvalidUrlError(f"not a valid URL: {url!r}", url=url) from exc
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        raise InvalidUrlError(f"not an absolute http(s) URL: {url!r}", url=url)

    # let requests reject what it would refuse to send (whitespace in the host etc.)
    try:
        requests.Request("GET", url).prepare()
    except (requests.RequestException, ValueError) as exc:
        raise InvalidUrlError(f"not a valid URL: {url!r}", url=url) from exc
    return url


def fetch_metadata(url: str, respect_robots: bool = True) -> Metadata:
    """
    Top-level entry point. Checks robots.txt, fetches the page once and
    extracts title, description and preview image.

    Raises a FetchError subclass when no record can be produced. Pass
    respect_robots=False to skip the robots.txt check.
    """
    validate_url(url)

    try:
        page = fetch_page(url, respect_robots=respect_robots)
    except DisallowedError:
        logger.warning("Robots disallow: %s", url)
        raise
    except FetchError as exc:
        logger.error("Fetch failed for %s: %s", url, exc)
        raise

    if page.content_type and "html" not in page.content_type:
        logger.debug("Extracting from non-html content (%s) at %s", page.content_type, page.final_url)

    return extract(page.text)
