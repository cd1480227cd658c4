"""
Pydantic models for decoded and normalized solar telemetry.

RawReading / UploadEntry / UploadBatch mirror the binary upload as sent by
the monitor (integer milli-units, relative offsets). NormalizedReading is
the persisted form in volts, amps and watts with an absolute timestamp.
SystemEvent is a decoded discrete event from the monitor.

All models are frozen: decoded records are never mutated after creation.

CHANGELOG:
- 2026-10-15: Add SystemEvent with canonical JSON rendering (STORY-004)
- 2026-10-14: Initial creation (STORY-003)

TODO:
- None
"""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict


class RawReading(BaseModel):
    """A single charge-controller reading exactly as transmitted.

    Attributes:
        battery_voltage_mv: Battery voltage in millivolts.
        battery_current_ma: Battery current in milliamps.
            Positive = charging, negative = discharging.
        panel_voltage_mv: PV panel voltage in millivolts.
        panel_power_w: PV panel power in whole watts (not scaled).
        load_current_ma: Load output current in milliamps.
    """

    model_config = ConfigDict(frozen=True)

    battery_voltage_mv: int
    battery_current_ma: int
    panel_voltage_mv: int
    panel_power_w: int
    load_current_ma: int


class UploadEntry(BaseModel):
    """One reading plus its offset from the batch start timestamp."""

    model_config = ConfigDict(frozen=True)

    offset_seconds: int
    reading: RawReading


class UploadBatch(BaseModel):
    """A decoded upload: one reference timestamp and ordered entries."""

    model_config = ConfigDict(frozen=True)

    start_timestamp: int
    entries: tuple[UploadEntry, ...] = ()


class NormalizedReading(BaseModel):
    """A reading in engineering units, ready for persistence.

    Attributes:
        battery_voltage_v: Battery voltage in volts.
        battery_current_a: Battery current in amps.
        panel_voltage_v: PV panel voltage in volts.
        panel_power_w: PV panel power in watts.
        load_current_a: Load output current in amps.
        recorded_at: Absolute capture time, seconds since the Unix epoch.
    """

    model_config = ConfigDict(frozen=True)

    battery_voltage_v: float
    battery_current_a: float
    panel_voltage_v: float
    panel_power_w: int
    load_current_a: float
    recorded_at: int

    @property
    def recorded_at_utc(self) -> datetime:
        """Capture time as a timezone-aware UTC datetime."""
        return datetime.fromtimestamp(self.recorded_at, tz=UTC)


class SystemEvent(BaseModel):
    """A decoded system event (startup, online, offline).

    Attributes:
        timestamp: Event time, seconds since the Unix epoch.
        kind: Name of the event variant that was set, or None when the
            device sent a variant this server does not know.
        uptime_seconds: Device uptime carried by the variant, if any.
        body: The full decoded message as a plain mapping.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: int
    kind: str | None = None
    uptime_seconds: int | None = None
    body: dict[str, Any]

    @property
    def timestamp_utc(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp, tz=UTC)

    def render(self) -> str:
        """Return the canonical text form used for storage and logging.

        Keys are sorted and separators fixed, so the same decoded event
        always renders to the same string.
        """
        return json.dumps(self.body, sort_keys=True, separators=(",", ":"))
