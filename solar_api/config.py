"""
API configuration loaded from environment variables.

Uses Pydantic BaseSettings for automatic env var loading and validation.
A single Settings instance is built at process start and handed explicitly
to the components that need it (token gate, session factory, limits).

CHANGELOG:
- 2026-10-17: Add LEGACY_ROUTES_ENABLED for the combined /v2/solar endpoint
- 2026-10-14: Initial creation (STORY-001)

TODO:
- None
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Solar API configuration.

    Attributes:
        solar_backend_token: Shared secret expected in the X-Token header.
            Unset (or empty) makes every ingestion request answer 500
            ``server misconfiguration``.
        database_url: SQLAlchemy async URL, e.g.
            ``postgresql+asyncpg://user:pass@db/solar``.
        max_request_bytes: Upper bound on an ingestion request body.
        legacy_routes_enabled: Also accept reading batches on ``POST /v2/solar``.
        log_level: Root logger level name.
        host: Bind address for the uvicorn server.
        port: Bind port for the uvicorn server.
    """

    solar_backend_token: str | None = None
    database_url: str | None = None
    max_request_bytes: int = 65536
    legacy_routes_enabled: bool = False
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    @field_validator("solar_backend_token")
    @classmethod
    def empty_token_means_unset(cls, v: str | None) -> str | None:
        """Treat an empty SOLAR_BACKEND_TOKEN as not configured.

        An empty secret would otherwise authorise requests that send an
        empty X-Token header.
        """
        if v is not None and not v.strip():
            return None
        return v

    @field_validator("max_request_bytes")
    @classmethod
    def max_request_bytes_must_be_positive(cls, v: int) -> int:
        """Validate the body size limit is at least one byte."""
        if v < 1:
            raise ValueError("MAX_REQUEST_BYTES must be >= 1")
        return v

    @field_validator("log_level")
    @classmethod
    def log_level_upper(cls, v: str) -> str:
        return v.upper()

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}
