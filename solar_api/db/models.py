"""
SQLAlchemy ORM models for the solar API database.

Defines SolarReading (one row per normalized reading) and SolarEvent (one
row per system event). Both tables use an auto-assigned integer id; rows are
written once and never updated.

CHANGELOG:
- 2026-10-15: Add SolarEvent (STORY-004)
- 2026-10-14: Initial creation (STORY-008)

TODO:
- None
"""

import datetime

from sqlalchemy import DateTime, Double, Integer, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """SQLAlchemy declarative base for all solar API ORM models."""

    pass


class SolarReading(Base):
    """Charge-controller reading in engineering units.

    Attributes:
        id: Auto-assigned primary key.
        battery_voltage: Battery voltage in volts.
        battery_current: Battery current in amps.
        panel_voltage: PV panel voltage in volts.
        panel_power: PV panel power in watts.
        load_current: Load output current in amps.
        recorded_at: Capture time in UTC.
    """

    __tablename__ = "solar_readings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    battery_voltage: Mapped[float] = mapped_column(Double, nullable=False)
    battery_current: Mapped[float] = mapped_column(Double, nullable=False)
    panel_voltage: Mapped[float] = mapped_column(Double, nullable=False)
    panel_power: Mapped[int] = mapped_column(Integer, nullable=False)
    load_current: Mapped[float] = mapped_column(Double, nullable=False)
    recorded_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        """Return string representation of the SolarReading."""
        return (
            f"SolarReading(id={self.id!r}, recorded_at={self.recorded_at!r}, "
            f"battery_voltage={self.battery_voltage!r})"
        )


class SolarEvent(Base):
    """System event reported by the monitor.

    Attributes:
        id: Auto-assigned primary key.
        timestamp: Event time in UTC.
        event: Canonical JSON rendering of the decoded event.
    """

    __tablename__ = "solar_events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    timestamp: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )
    event: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"SolarEvent(id={self.id!r}, timestamp={self.timestamp!r})"
