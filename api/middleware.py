import time
import logging

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

# set by the route on success and by the FetchError handler on failure
OUTCOME_HEADER = "X-Fetch-Outcome"


class FetchLoggingMiddleware(BaseHTTPMiddleware):
    """One log line per request, carrying the fetch outcome (ok, disallowed, network_error, ...)."""

    async def dispatch(self, request: Request, call_next):
        start = time.monotonic()
        response = await call_next(request)
        duration_ms = int((time.monotonic() - start) * 1000)

        outcome = response.headers.get(OUTCOME_HEADER)
        if outcome is None:
            # /health, /docs and pydantic rejections never reach the pipeline
            logger.info("%s %s -> %d (%dms)", request.method, request.url.path, response.status_code, duration_ms)
        else:
            log = logger.info if outcome == "ok" else logger.warning
            log(
                "%s %s -> %d %s (%dms)",
                request.method,
                request.url.path,
                response.status_code,
                outcome,
                duration_ms,
            )
        return response
