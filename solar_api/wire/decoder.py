"""
Decoders for binary uploads and system events.

Parses protobuf-encoded request bodies into the pydantic domain models.
Both decoders are pure functions: no I/O, no clock, no logging side effects
beyond debug output. Any parse failure is raised as MalformedPayload.

Unknown fields are skipped by the protobuf runtime, so newer firmware that
adds fields keeps working against this server.

CHANGELOG:
- 2026-10-16: Reject entries whose absolute time leaves the datetime range
- 2026-10-15: Add decode_event (STORY-004)
- 2026-10-14: Initial creation (STORY-003)

TODO:
- None
"""

from __future__ import annotations

import logging

from google.protobuf.json_format import MessageToDict
from google.protobuf.message import DecodeError

from solar_api.errors import MalformedPayload
from solar_api.models import RawReading, SystemEvent, UploadBatch, UploadEntry
from solar_api.wire import schema

logger = logging.getLogger(__name__)

# 9999-12-31T23:59:59Z, the last second a datetime can hold.
MAX_EPOCH_SECONDS = 253402300799


def _parse(message_cls: type, data: bytes):
    message = message_cls()
    try:
        message.ParseFromString(bytes(data))
    except DecodeError as exc:
        raise MalformedPayload(
            f"{message_cls.DESCRIPTOR.name} does not parse: {exc}"
        ) from exc
    return message


def _check_epoch(value: int, what: str) -> None:
    if value < 0 or value > MAX_EPOCH_SECONDS:
        raise MalformedPayload(f"{what} {value} is out of range")


def decode_upload(data: bytes) -> UploadBatch:
    """Decode a binary ``Upload`` message into an UploadBatch.

    An empty body, or an upload with no entries, is a valid zero-entry batch.

    Args:
        data: Raw request body.

    Returns:
        UploadBatch: Start timestamp and entries in transmission order.

    Raises:
        MalformedPayload: If the bytes are not a valid Upload, an entry has
            no reading or a negative offset, or a timestamp is out of range.
    """
    upload = _parse(schema.Upload, data)
    start = upload.start_timestamp
    _check_epoch(start, "start_timestamp")

    entries: list[UploadEntry] = []
    for index, entry in enumerate(upload.entries):
        if not entry.HasField("reading"):
            raise MalformedPayload(f"entry {index} has no reading")
        if entry.offset_in_seconds < 0:
            raise MalformedPayload(
                f"entry {index} has negative offset {entry.offset_in_seconds}"
            )
        _check_epoch(start + entry.offset_in_seconds, f"entry {index} timestamp")

        reading = entry.reading
        entries.append(
            UploadEntry(
                offset_seconds=entry.offset_in_seconds,
                reading=RawReading(
                    battery_voltage_mv=reading.battery_voltage,
                    battery_current_ma=reading.battery_current,
                    panel_voltage_mv=reading.panel_voltage,
                    panel_power_w=reading.panel_power,
                    load_current_ma=reading.load_current,
                ),
            )
        )

    logger.debug("Decoded upload: start=%d entries=%d", start, len(entries))
    return UploadBatch(start_timestamp=start, entries=tuple(entries))


def decode_event(data: bytes) -> SystemEvent:
    """Decode a binary ``SystemEvent`` message.

    Args:
        data: Raw request body.

    Returns:
        SystemEvent: Timestamp, event variant, and the full decoded body.

    Raises:
        MalformedPayload: If the bytes are not a valid SystemEvent or the
            timestamp is out of range.
    """
    message = _parse(schema.SystemEvent, data)
    _check_epoch(message.timestamp, "timestamp")

    kind = message.WhichOneof("event")
    uptime = getattr(message, kind).uptime_seconds if kind else None

    return SystemEvent(
        timestamp=message.timestamp,
        kind=kind,
        uptime_seconds=uptime,
        body=MessageToDict(message, preserving_proto_field_name=True),
    )
