"""
Entry point for the solar telemetry API server.

Loads Settings once, configures JSON logging and runs uvicorn with the
server and date headers disabled, so ingestion responses carry nothing but
the opaque content-type and the content-length that frames the body.

Usage:
    python -m solar_api
    solar-api --port 8080

CHANGELOG:
- 2026-10-14: Initial creation (STORY-001)
"""

import argparse
import logging

import uvicorn

from solar_api.api.main import create_app
from solar_api.config import Settings
from solar_api.logging_config import configure_logging

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Solar telemetry ingestion API")
    parser.add_argument("--host", default=None, help="Bind address (overrides HOST)")
    parser.add_argument("--port", type=int, default=None, help="Bind port (overrides PORT)")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Run the API server until interrupted."""
    args = _parse_args(argv)
    settings = Settings()
    configure_logging(settings.log_level)

    host = args.host or settings.host
    port = args.port or settings.port
    logger.info(
        "Starting solar API on %s:%d (token %s, database %s)",
        host,
        port,
        "configured" if settings.solar_backend_token else "MISSING",
        "configured" if settings.database_url else "MISSING",
    )
    uvicorn.run(
        create_app(settings),
        host=host,
        port=port,
        server_header=False,
        date_header=False,
        log_config=None,
    )


if __name__ == "__main__":
    main()
