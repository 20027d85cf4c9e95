import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from meta_fetcher.errors import (
    DisallowedError,
    FetchError,
    HttpStatusError,
    InvalidUrlError,
    NetworkError,
)
from .middleware import OUTCOME_HEADER, FetchLoggingMiddleware
from .routes import router
from .schemas import ErrorResponse

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Meta Fetcher",
    description=(
        "Given any URL, returns link-preview metadata (title, description, image), "
        "read from Open Graph tags first and standard HTML tags as a fallback. "
        "Honours the site's robots.txt."
    ),
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(FetchLoggingMiddleware)

# checked in order; the first matching class decides status and outcome code
_FETCH_ERRORS = (
    (InvalidUrlError, 422, "invalid_url"),
    (DisallowedError, 403, "disallowed"),
    (HttpStatusError, 502, "upstream_status"),
    (NetworkError, 502, "network_error"),
)


def fetch_error_response(exc: FetchError) -> JSONResponse:
    status_code, code = 502, "fetch_error"
    for error_class, error_status, error_code in _FETCH_ERRORS:
        if isinstance(exc, error_class):
            status_code, code = error_status, error_code
            break

    detail = str(exc)
    upstream_status: Optional[int] = None
    if isinstance(exc, HttpStatusError):
        upstream_status = exc.status_code
        detail = f"Upstream returned HTTP {exc.status_code}"
    elif isinstance(exc, NetworkError):
        detail = f"Failed to reach URL: {exc}"

    body = ErrorResponse(detail=detail, code=code, upstream_status=upstream_status)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers={OUTCOME_HEADER: code},
    )


@app.exception_handler(FetchError)
async def fetch_error_handler(request: Request, exc: FetchError):
    logger.info("No metadata for %s: %s", exc.url, exc)
    return fetch_error_response(exc)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled error: %s", exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "An unexpected error occurred.", "code": "internal_error"},
    )


app.include_router(router)
