"""
Unauthenticated informational endpoints.

GET /v2/info identifies the API to humans and devices; GET /health is for
container health checks and internal monitoring. Neither touches state.

CHANGELOG:
- 2026-10-15: Add /v2/info
- 2026-10-14: Initial creation (STORY-015)

TODO:
- None
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

API_IDENTITY = "solar api v2"

router = APIRouter(tags=["info"])


@router.get("/v2/info", response_class=PlainTextResponse)
async def info() -> str:
    """Return the static API identity string."""
    return API_IDENTITY


@router.get("/health")
async def health() -> dict[str, str]:
    """Return a simple health status.

    Returns:
        dict: ``{"status": "ok"}`` indicating the service is alive.
    """
    return {"status": "ok"}
