"""
Name: Integration Test DB Setup

Responsibilities:
  - Ensure database schema exists before integration tests run
  - Run Alembic migrations once per test session
  - Provide the initialized pool and a clean slate per test

Notes:
  - Only runs when RUN_INTEGRATION=1
  - Uses DATABASE_URL from environment (see alembic/env.py)
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

DB_USER = os.getenv("POSTGRES_USER", "postgres")
DB_PASSWORD = os.getenv("POSTGRES_PASSWORD", "postgres")
DB_HOST = os.getenv("POSTGRES_HOST", "localhost")
DB_PORT = os.getenv("POSTGRES_HOST_PORT", "5432")
DB_NAME = os.getenv("POSTGRES_DB", "takopi")
DEFAULT_DATABASE_URL = (
    f"postgresql://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
)

ROOT_DIR = Path(__file__).resolve().parents[2]

_TABLES = ("collection_items", "collections", "pins", "likes", "follows")


@pytest.fixture(scope="session")
def database_url() -> str:
    url = os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL
    os.environ["DATABASE_URL"] = url
    return url


@pytest.fixture(scope="session")
def migrated_db(database_url: str) -> str:
    """R: Apply Alembic migrations (head) once per session."""
    from alembic import command
    from alembic.config import Config

    config = Config(str(ROOT_DIR / "alembic.ini"))
    config.set_main_option("script_location", str(ROOT_DIR / "alembic"))
    command.upgrade(config, "head")
    return database_url


@pytest.fixture(scope="session")
def db_pool(migrated_db: str):
    """R: Initialized instrumented pool shared by the session."""
    from takopi.infrastructure.db.pool import close_pool, init_pool, reset_pool

    reset_pool()
    pool = init_pool(migrated_db, min_size=1, max_size=4)
    yield pool
    close_pool()


@pytest.fixture
def clean_db(db_pool):
    """R: Truncate Takopi tables before each test."""
    with db_pool.connection() as conn:
        conn.execute(f"TRUNCATE {', '.join(_TABLES)}")
    yield db_pool
