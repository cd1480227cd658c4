"""
FastAPI dependency injection providers.

Provides the token gate and the request-scoped repository for use with
FastAPI's Depends() mechanism. Both read what the application factory
stored on app.state.

CHANGELOG:
- 2026-10-15: Add verify_token wrapper around app.state.auth (STORY-007)
- 2026-10-14: Initial creation (STORY-008)
"""

from collections.abc import AsyncGenerator

from fastapi import Request

from solar_api.db.repository import ReadingRepository, SqlAlchemyRepository
from solar_api.errors import PersistenceFailure


async def verify_token(request: Request) -> None:
    """Run the X-Token gate stored on app.state.auth.

    This thin wrapper exists so that FastAPI's Depends() mechanism
    can call the TokenAuth.verify method configured at start-up.

    Args:
        request: The incoming FastAPI request.
    """
    await request.app.state.auth.verify(request)


async def get_repository(request: Request) -> AsyncGenerator[ReadingRepository, None]:
    """Yield a repository bound to a fresh async database session.

    The session is closed after the request completes.

    Raises:
        PersistenceFailure: If no database is configured.
    """
    session_factory = getattr(request.app.state, "session_factory", None)
    if session_factory is None:
        raise PersistenceFailure("DATABASE_URL is not configured")
    async with session_factory() as session:
        yield SqlAlchemyRepository(session)
