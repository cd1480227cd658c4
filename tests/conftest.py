"""
Shared test fixtures for solar API tests.

Provides settings, an in-memory repository and a configured TestClient.
Configuration environment variables are cleared so a developer's shell or
.env never leaks into a test.

CHANGELOG:
- 2026-10-15: Override get_repository with InMemoryRepository
- 2026-10-14: Initial creation (STORY-001)
"""

import sys
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Ensure the repository root is on sys.path so ``import solar_api`` resolves
# without an editable install.
_ROOT = str(Path(__file__).resolve().parent.parent)
if _ROOT not in sys.path:
    sys.path.insert(0, _ROOT)

from fakes import TEST_TOKEN, InMemoryRepository, make_client  # noqa: E402

from solar_api.config import Settings  # noqa: E402


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove configuration variables from the environment."""
    for key in (
        "SOLAR_BACKEND_TOKEN",
        "DATABASE_URL",
        "MAX_REQUEST_BYTES",
        "LEGACY_ROUTES_ENABLED",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture()
def settings() -> Settings:
    """Settings with the test token and no database."""
    return Settings(solar_backend_token=TEST_TOKEN, _env_file=None)


@pytest.fixture()
def repository() -> InMemoryRepository:
    return InMemoryRepository()


@pytest.fixture()
def client(
    settings: Settings, repository: InMemoryRepository
) -> Generator[TestClient, None, None]:
    """TestClient with lifespan events run and the in-memory repository.

    Yields:
        TestClient: Configured test client.
    """
    with make_client(settings, repository) as test_client:
        yield test_client


@pytest.fixture()
def client_factory(
    repository: InMemoryRepository,
) -> Callable[[Settings], TestClient]:
    """Return a callable building a TestClient for custom Settings.

    Use the result as a context manager so lifespan events run.
    """

    def _factory(custom: Settings) -> TestClient:
        return make_client(custom, repository)

    return _factory
