"""
Async database engine and session factory.

Uses SQLAlchemy 2.x async engine (asyncpg driver for PostgreSQL in
production). The engine and session factory are created once by the
application lifespan from Settings.database_url and kept on app.state.

CHANGELOG:
- 2026-10-15: Take the URL from Settings instead of reading the environment
- 2026-10-14: Initial creation (STORY-008)
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)


def create_engine(database_url: str) -> AsyncEngine:
    """Create an async SQLAlchemy engine.

    Args:
        database_url: SQLAlchemy async URL.

    Returns:
        AsyncEngine: Configured async engine.
    """
    return create_async_engine(database_url, echo=False)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory bound to ``engine``.

    Args:
        engine: Async engine.

    Returns:
        async_sessionmaker: Factory for creating AsyncSession instances.
    """
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
