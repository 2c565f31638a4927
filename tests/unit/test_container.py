"""
Name: Container / Storage Wiring Tests

Responsibilities:
  - StorageMode parsing ("local" vs anything else)
  - build_repositories for both backends
  - Fail-fast validation (incomplete registry, missing DATABASE_URL)
  - Settings validators
"""

from types import SimpleNamespace

import pytest
from pydantic import ValidationError as PydanticValidationError

from takopi.container import (
    BACKEND_REGISTRY,
    ENTITY_KINDS,
    StorageMode,
    build_repositories,
    validate_storage_config,
)
from takopi.crosscutting.config import Settings
from takopi.infrastructure.repositories import (
    FileCollectionRepository,
    FileFollowRepository,
    PostgresFollowRepository,
    PostgresPinRepository,
)
from takopi.infrastructure.storage import StorageConfigurationError

pytestmark = pytest.mark.unit


class TestStorageMode:
    @pytest.mark.parametrize("raw", ["local", "LOCAL", "  Local "])
    def test_local_variants(self, raw):
        assert StorageMode.parse(raw) is StorageMode.LOCAL

    @pytest.mark.parametrize("raw", ["remote", "postgres", "", None, "locale"])
    def test_everything_else_is_remote(self, raw):
        assert StorageMode.parse(raw) is StorageMode.REMOTE


class TestBuildRepositories:
    def test_local_bundle_shares_one_store(self, tmp_path):
        repos = build_repositories("local", storage_root=tmp_path)

        assert isinstance(repos.follows, FileFollowRepository)
        assert isinstance(repos.collections, FileCollectionRepository)
        assert repos.follows._store is repos.collections._store

    def test_local_requires_storage_root(self):
        with pytest.raises(StorageConfigurationError):
            build_repositories(StorageMode.LOCAL)

    def test_remote_bundle_uses_given_pool(self):
        pool = object()

        repos = build_repositories("remote", pool=pool)

        assert isinstance(repos.follows, PostgresFollowRepository)
        assert isinstance(repos.pins, PostgresPinRepository)
        assert repos.likes._get_pool() is pool

    def test_incomplete_registry_fails_fast(self, tmp_path):
        registry = {
            StorageMode.LOCAL: {
                kind: factory
                for kind, factory in BACKEND_REGISTRY[StorageMode.LOCAL].items()
                if kind != "pin"
            }
        }

        with pytest.raises(StorageConfigurationError, match="pin"):
            build_repositories("local", storage_root=tmp_path, registry=registry)

    def test_every_backend_covers_every_kind(self):
        for mode in StorageMode:
            assert set(ENTITY_KINDS) <= set(BACKEND_REGISTRY[mode])


class TestValidateStorageConfig:
    def test_remote_without_database_url(self):
        settings = SimpleNamespace(database_url="  ", storage_path="unused")

        with pytest.raises(StorageConfigurationError, match="DATABASE_URL"):
            validate_storage_config(StorageMode.REMOTE, settings)

    def test_remote_with_database_url(self):
        settings = SimpleNamespace(database_url="postgresql://x", storage_path="unused")

        validate_storage_config(StorageMode.REMOTE, settings)

    def test_local_creates_root(self, tmp_path):
        root = tmp_path / "data"
        settings = SimpleNamespace(database_url="", storage_path=str(root))

        validate_storage_config("local", settings)

        assert root.is_dir()

    def test_missing_backend_for_mode(self, tmp_path):
        settings = SimpleNamespace(database_url="", storage_path=str(tmp_path))

        with pytest.raises(StorageConfigurationError):
            validate_storage_config("local", settings, registry={})


class TestSettings:
    def test_local_mode_does_not_need_database_url(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)

        settings = Settings(storage_mode=" LOCAL ")

        assert settings.storage_mode == "local"
        assert settings.is_local_storage() is True

    def test_remote_mode_requires_database_url(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)

        with pytest.raises(PydanticValidationError):
            Settings(storage_mode="remote", database_url="")

    def test_pool_bounds(self):
        with pytest.raises(PydanticValidationError):
            Settings(
                storage_mode="remote",
                database_url="postgresql://x",
                db_pool_min_size=5,
                db_pool_max_size=2,
            )

    def test_production_rejects_default_jwt_secret(self):
        with pytest.raises(PydanticValidationError):
            Settings(app_env="production", storage_mode="local", jwt_secret="dev-secret")

    def test_collection_limits_must_be_positive(self):
        with pytest.raises(PydanticValidationError):
            Settings(storage_mode="local", collection_title_max_chars=0)

    def test_allowed_origins_list(self):
        settings = Settings(
            storage_mode="local", allowed_origins="http://a.test, ,http://b.test"
        )

        assert settings.get_allowed_origins_list() == ["http://a.test", "http://b.test"]
