"""
Builders for binary request bodies, encoded with the bt.solar schema.
"""

from solar_api.wire import schema

START_TS = 1700000000


def reading_message(
    battery_voltage: int = 12850,
    battery_current: int = 1500,
    panel_voltage: int = 18200,
    panel_power: int = 45,
    load_current: int = 300,
):
    """Build a wire Reading with realistic milli-unit defaults."""
    return schema.Reading(
        battery_voltage=battery_voltage,
        battery_current=battery_current,
        panel_voltage=panel_voltage,
        panel_power=panel_power,
        load_current=load_current,
    )


def upload_bytes(start_timestamp: int = START_TS, entries=()) -> bytes:
    """Encode an Upload from ``(offset_seconds, Reading)`` pairs."""
    upload = schema.Upload(start_timestamp=start_timestamp)
    for offset, reading in entries:
        upload.entries.add(offset_in_seconds=offset, reading=reading)
    return upload.SerializeToString()


def minute_batch(count: int, start_timestamp: int = START_TS) -> bytes:
    """Encode ``count`` readings one minute apart with distinct voltages."""
    return upload_bytes(
        start_timestamp,
        [
            (60 * i, reading_message(battery_voltage=12000 + i))
            for i in range(count)
        ],
    )


def event_bytes(
    timestamp: int = START_TS,
    variant: str | None = "startup_event",
    uptime_seconds: int = 123,
) -> bytes:
    """Encode a SystemEvent with the given oneof variant (or none)."""
    event = schema.SystemEvent(timestamp=timestamp)
    if variant is not None:
        getattr(event, variant).uptime_seconds = uptime_seconds
    return event.SerializeToString()
