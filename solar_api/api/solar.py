"""
POST /v2/solar/reading and POST /v2/solar/event ingestion endpoints.

Both endpoints require the X-Token header, enforce the request body limit,
hand the raw body to the ingestion service, and acknowledge with an empty
200. Error statuses and bodies come from the IngestError handler; headers
are reduced to ``content-type: x`` by MinimalHeadersMiddleware.

CHANGELOG:
- 2026-10-17: Add optional legacy POST /v2/solar route for older firmware
- 2026-10-15: Add /event endpoint (STORY-004)
- 2026-10-14: Initial creation (STORY-010)

TODO:
- None
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from solar_api.api.deps import get_repository, verify_token
from solar_api.db.repository import ReadingRepository
from solar_api.errors import InvalidContentLength, PayloadTooLarge
from solar_api.services.ingestion import ingest_reading_batch, ingest_system_event

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/v2/solar",
    tags=["solar"],
    dependencies=[Depends(verify_token)],
)

legacy_router = APIRouter(tags=["solar-legacy"], dependencies=[Depends(verify_token)])

Repository = Annotated[ReadingRepository, Depends(get_repository)]


async def read_body(request: Request) -> bytes:
    """Read the request body, enforcing MAX_REQUEST_BYTES.

    Content-Length is checked before buffering; the buffered length is
    checked again for chunked uploads.

    Args:
        request: The incoming FastAPI request.

    Returns:
        bytes: The raw body.

    Raises:
        InvalidContentLength: If Content-Length is not an integer.
        PayloadTooLarge: If the body exceeds the configured limit.
    """
    max_request_bytes = request.app.state.settings.max_request_bytes

    content_length = request.headers.get("content-length")
    if content_length is not None:
        try:
            content_length_int = int(content_length)
        except ValueError:
            raise InvalidContentLength(f"Content-Length {content_length!r}") from None
        if content_length_int > max_request_bytes:
            raise PayloadTooLarge(
                f"Content-Length {content_length_int} exceeds {max_request_bytes}"
            )

    body = await request.body()
    if len(body) > max_request_bytes:
        raise PayloadTooLarge(f"body of {len(body)} bytes exceeds {max_request_bytes}")
    return body


@router.post("/reading")
async def reading(request: Request, repository: Repository) -> Response:
    """Ingest a binary upload batch of charge-controller readings.

    Args:
        request: The incoming FastAPI request.
        repository: Request-scoped reading storage.

    Returns:
        Response: Empty 200 once every reading is committed.
    """
    body = await read_body(request)
    await ingest_reading_batch(repository, body)
    return Response(status_code=200)


@router.post("/event")
async def event(request: Request, repository: Repository) -> Response:
    """Ingest one binary system event.

    Args:
        request: The incoming FastAPI request.
        repository: Request-scoped event storage.

    Returns:
        Response: Empty 200 once the event is committed.
    """
    body = await read_body(request)
    await ingest_system_event(repository, body)
    return Response(status_code=200)


@legacy_router.post("/v2/solar")
async def legacy_upload(request: Request, repository: Repository) -> Response:
    """Combined upload endpoint used by early firmware; readings only."""
    logger.info("Upload received on legacy endpoint %s", request.url.path)
    return await reading(request, repository)
