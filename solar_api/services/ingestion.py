"""
Ingestion service for reading batches and system events.

Each entry point runs decode -> (normalize) -> persist -> commit for one
request. A request is all-or-nothing: rows are staged in one transaction
and committed once at the end; if any save fails the transaction is rolled
back and PersistenceFailure propagates. There are no retries.

Decode errors are raised before the repository is touched.

CHANGELOG:
- 2026-10-18: Keep the original failure when rollback itself fails
- 2026-10-16: Roll back the whole batch on any persistence failure
- 2026-10-15: Add ingest_system_event (STORY-004)
- 2026-10-14: Initial creation (STORY-010)

TODO:
- None
"""

import logging

from solar_api.db.repository import ReadingRepository
from solar_api.errors import PersistenceFailure
from solar_api.models import NormalizedReading, SystemEvent
from solar_api.services.normalizer import normalize
from solar_api.wire import decode_event, decode_upload

logger = logging.getLogger(__name__)


async def _rollback(repository: ReadingRepository) -> None:
    # A failing rollback is logged; the caller re-raises the original failure.
    try:
        await repository.rollback()
    except Exception:
        logger.exception("Rollback failed")


async def ingest_reading_batch(
    repository: ReadingRepository,
    body: bytes,
) -> list[NormalizedReading]:
    """Decode, normalize and store every reading of an upload.

    Readings are saved in entry order. An empty batch makes no repository
    calls at all.

    Args:
        repository: Storage for the normalized readings.
        body: Raw request body (binary Upload message).

    Returns:
        list[NormalizedReading]: The readings that were stored.

    Raises:
        MalformedPayload: If the body does not decode.
        PersistenceFailure: If any save or the commit fails.
    """
    batch = decode_upload(body)
    readings = normalize(batch)

    if not readings:
        logger.info("Received empty upload (start=%d)", batch.start_timestamp)
        return readings

    try:
        for reading in readings:
            await repository.save_reading(reading)
        await repository.commit()
    except PersistenceFailure:
        logger.exception(
            "Failed to store upload of %d readings (start=%d); rolled back",
            len(readings),
            batch.start_timestamp,
        )
        await _rollback(repository)
        raise

    logger.info(
        "Stored %d readings (%d..%d)",
        len(readings),
        readings[0].recorded_at,
        readings[-1].recorded_at,
    )
    return readings


async def ingest_system_event(
    repository: ReadingRepository,
    body: bytes,
) -> SystemEvent:
    """Decode, log and store one system event.

    The canonical text is rendered once and used for both the log line and
    the stored row, so the two always match.

    Args:
        repository: Storage for the event.
        body: Raw request body (binary SystemEvent message).

    Returns:
        SystemEvent: The decoded event.

    Raises:
        MalformedPayload: If the body does not decode.
        PersistenceFailure: If the save or the commit fails.
    """
    event = decode_event(body)
    text = event.render()
    logger.info("System event: %s", text, extra={"fields": {"kind": event.kind}})

    try:
        await repository.save_event(event, text)
        await repository.commit()
    except PersistenceFailure:
        logger.exception("Failed to store system event at %d", event.timestamp)
        await _rollback(repository)
        raise

    return event
