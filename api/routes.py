import asyncio
from functools import partial

from fastapi import APIRouter, Response

from meta_fetcher.core import fetch_metadata
from .middleware import OUTCOME_HEADER
from .schemas import ErrorResponse, HealthResponse, MetadataRequest, MetadataResponse

router = APIRouter()


@router.post(
    "/metadata",
    response_model=MetadataResponse,
    responses={
        403: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
    summary="Fetch a URL and extract link-preview metadata",
)
async def get_metadata(request: MetadataRequest, response: Response) -> MetadataResponse:
    """
    Accepts a URL and returns its title, description and preview image.

    - Open Graph tags are preferred; <title> and <meta name="description"> are the fallback.
    - Respects robots.txt by default (`respect_robots: true`).
    - Fetch failures are turned into error responses by the FetchError handler in api.main.
    """
    # fetch_metadata blocks on network I/O; keep it off the event loop
    loop = asyncio.get_event_loop()
    metadata = await loop.run_in_executor(
        None, partial(fetch_metadata, request.url, respect_robots=request.respect_robots)
    )

    response.headers[OUTCOME_HEADER] = "ok"
    return MetadataResponse(url=request.url, **metadata.to_dict())


@router.get("/health", response_model=HealthResponse, summary="Service health check")
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok")
