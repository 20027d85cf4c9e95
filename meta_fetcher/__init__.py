from .core import fetch_metadata
from .errors import DisallowedError, FetchError, HttpStatusError, InvalidUrlError, NetworkError
from .extractor import extract
from .fetcher import fetch_page
from .models import FetchedPage, Metadata
from .robots import RobotsPolicy, check_allowed

__all__ = [
    "fetch_metadata",
    "fetch_page",
    "check_allowed",
    "extract",
    "Metadata",
    "FetchedPage",
    "RobotsPolicy",
    "FetchError",
    "InvalidUrlError",
    "DisallowedError",
    "NetworkError",
    "HttpStatusError",
]
