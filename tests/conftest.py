"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure test environment (local storage, no .env)
  - Provide a JsonFileStore rooted in tmp_path with a deterministic clock
  - Provide file-backed repositories wired the same way the container does
  - Provide JWT helpers for API tests

Collaborators:
  - pytest: Test framework
  - takopi.infrastructure.storage: JsonFileStore
  - takopi.infrastructure.repositories.file: File* repositories
  - takopi.identity.auth: create_access_token

Notes:
  - Fixtures are auto-discovered by pytest
  - Every test gets its own store directory (scope="function")
"""

import os
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from takopi.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("STORAGE_MODE", "local")
os.environ.setdefault("JWT_SECRET", "test-secret")

from takopi.container import Repositories  # noqa: E402
from takopi.identity.auth import create_access_token  # noqa: E402
from takopi.infrastructure.repositories.file import (  # noqa: E402
    FileCollectionRepository,
    FileFollowRepository,
    FileLikeRepository,
    FilePinRepository,
)
from takopi.infrastructure.storage import JsonFileStore  # noqa: E402

BASE_TIME = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (require PostgreSQL)"
    )


class TickingClock:
    """Reloj determinista: cada llamada avanza `step` segundos."""

    def __init__(self, start: datetime = BASE_TIME, step: float = 1.0):
        self._now = start
        self._step = timedelta(seconds=step)

    def __call__(self) -> datetime:
        current = self._now
        self._now = self._now + self._step
        return current


# ============================================================================
# Storage Fixtures
# ============================================================================


@pytest.fixture
def clock() -> TickingClock:
    """R: Clock that advances one second per call (stable newest-first order)."""
    return TickingClock()


@pytest.fixture
def store_root(tmp_path: Path) -> Path:
    """R: Root directory of the file store for this test."""
    return tmp_path / "storage"


@pytest.fixture
def file_store(store_root: Path, clock: TickingClock) -> JsonFileStore:
    """R: JsonFileStore rooted in tmp_path with deterministic timestamps."""
    return JsonFileStore(store_root, clock=clock)


@pytest.fixture
def repos(file_store: JsonFileStore, clock: TickingClock) -> Repositories:
    """R: Bundle of file-backed repositories sharing a single store."""
    return Repositories(
        follows=FileFollowRepository(file_store),
        likes=FileLikeRepository(file_store),
        pins=FilePinRepository(file_store),
        collections=FileCollectionRepository(file_store, clock=clock),
    )


# ============================================================================
# Auth Fixtures
# ============================================================================


@pytest.fixture
def auth_headers():
    """R: Build Authorization headers for a user id (signed with JWT_SECRET)."""

    def _headers(user_id: str) -> dict[str, str]:
        token = create_access_token(user_id, secret=os.environ["JWT_SECRET"])
        return {"Authorization": f"Bearer {token}"}

    return _headers
