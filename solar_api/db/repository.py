"""
Persistence interface for normalized readings and system events.

The ingestion service depends only on the ReadingRepository protocol. The
SQLAlchemy implementation adds one ORM row per save call inside the
request's session; nothing is durable until commit(). Database and
connection errors are re-raised as PersistenceFailure so the API answers
500 without leaking driver details.

CHANGELOG:
- 2026-10-18: Treat connection errors as persistence failures
- 2026-10-15: Add save_event (STORY-004)
- 2026-10-14: Initial creation (STORY-008)

TODO:
- None
"""

from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from solar_api.db.models import SolarEvent, SolarReading
from solar_api.errors import PersistenceFailure
from solar_api.models import NormalizedReading, SystemEvent

# asyncpg raises OSError (ConnectionRefusedError, TimeoutError) on connect
# failures; SQLAlchemy does not wrap those.
DRIVER_ERRORS = (SQLAlchemyError, OSError)


class ReadingRepository(Protocol):
    """Storage used by the ingestion service."""

    async def save_reading(self, reading: NormalizedReading) -> None: ...

    async def save_event(self, event: SystemEvent, text: str) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class SqlAlchemyRepository:
    """ReadingRepository backed by an SQLAlchemy AsyncSession.

    Attributes:
        session: The request-scoped async session.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def save_reading(self, reading: NormalizedReading) -> None:
        """Stage one reading row and flush it to the database.

        Raises:
            PersistenceFailure: If the flush fails.
        """
        self.session.add(
            SolarReading(
                battery_voltage=reading.battery_voltage_v,
                battery_current=reading.battery_current_a,
                panel_voltage=reading.panel_voltage_v,
                panel_power=reading.panel_power_w,
                load_current=reading.load_current_a,
                recorded_at=reading.recorded_at_utc,
            )
        )
        await self._flush()

    async def save_event(self, event: SystemEvent, text: str) -> None:
        """Stage one event row holding its canonical text.

        Raises:
            PersistenceFailure: If the flush fails.
        """
        self.session.add(SolarEvent(timestamp=event.timestamp_utc, event=text))
        await self._flush()

    async def commit(self) -> None:
        try:
            await self.session.commit()
        except DRIVER_ERRORS as exc:
            raise PersistenceFailure(f"commit failed: {exc!r}") from exc

    async def rollback(self) -> None:
        try:
            await self.session.rollback()
        except DRIVER_ERRORS as exc:
            raise PersistenceFailure(f"rollback failed: {exc!r}") from exc

    async def _flush(self) -> None:
        try:
            await self.session.flush()
        except DRIVER_ERRORS as exc:
            raise PersistenceFailure(f"flush failed: {exc!r}") from exc
