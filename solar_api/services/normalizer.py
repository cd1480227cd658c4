"""
Pure normalizer that converts a decoded UploadBatch into NormalizedReadings.

Milli-unit voltages and currents are divided by 1000.0; panel power is
already in watts and passes through unchanged. Each entry's absolute time is
the batch start timestamp plus the entry offset, in seconds since the epoch
(UTC, no timezone conversion).

This is a pure function: no side effects, no I/O, no clock. It never drops,
reorders or deduplicates entries.

CHANGELOG:
- 2026-10-14: Initial creation (STORY-005)

TODO:
- None
"""

from __future__ import annotations

from solar_api.models import NormalizedReading, RawReading, UploadBatch

MILLI_FACTOR = 1000.0
"""Divisor from milli-units (mV, mA) to base units (V, A)."""


def _from_milli(raw: int) -> float:
    return raw / MILLI_FACTOR


def normalize_reading(reading: RawReading, recorded_at: int) -> NormalizedReading:
    """Convert one raw reading to engineering units.

    Args:
        reading: Raw reading as decoded from the wire.
        recorded_at: Absolute capture time in epoch seconds.

    Returns:
        NormalizedReading: Volts/amps as floats, watts as int.
    """
    return NormalizedReading(
        battery_voltage_v=_from_milli(reading.battery_voltage_mv),
        battery_current_a=_from_milli(reading.battery_current_ma),
        panel_voltage_v=_from_milli(reading.panel_voltage_mv),
        panel_power_w=reading.panel_power_w,
        load_current_a=_from_milli(reading.load_current_ma),
        recorded_at=recorded_at,
    )


def normalize(batch: UploadBatch) -> list[NormalizedReading]:
    """Normalize every entry of a batch, preserving order.

    Args:
        batch: Decoded upload batch.

    Returns:
        list[NormalizedReading]: Exactly one reading per entry, in entry order.
    """
    return [
        normalize_reading(entry.reading, batch.start_timestamp + entry.offset_seconds)
        for entry in batch.entries
    ]
