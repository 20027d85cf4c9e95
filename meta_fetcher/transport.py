import logging
import os

import requests

from .errors import NetworkError

logger = logging.getLogger(__name__)

# product token "MetaFetcher" is what robots.txt groups are matched against
USER_AGENT = os.getenv("META_FETCHER_USER_AGENT", "MetaFetcher/1.0")

DEFAULT_TIMEOUT = float(os.getenv("META_FETCHER_TIMEOUT", "15"))  # seconds


def http_get(url: str) -> requests.Response:
    """
    Single GET shared by the robots check and the page fetch.
    Redirects are followed by requests. Transport failures surface as NetworkError;
    the status code is left for the caller to judge.
    """
    headers = {
        "User-Agent": USER_AGENT,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.5",
    }
    try:
        return requests.get(url, headers=headers, timeout=DEFAULT_TIMEOUT, allow_redirects=True)
    except requests.RequestException as exc:
        logger.debug("GET %s failed: %s", url, exc)
        raise NetworkError(str(exc), url=url) from exc
