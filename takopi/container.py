"""
===============================================================================
TARJETA CRC — takopi/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Elegir el backend de storage con un StorageMode EXPLÍCITO.
  - Mantener el registry entidad -> implementación por modo y validarlo al
    arranque (fail-fast, sin fallback silencioso).
  - Construir el bundle de repositorios (build_repositories).
  - Exponer factories para FastAPI (Depends) con singletons vía lru_cache.

Colaboradores:
  - takopi.crosscutting.config.get_settings (solo en las factories cacheadas)
  - takopi.infrastructure.repositories.* (implementaciones)
  - takopi.infrastructure.storage.JsonFileStore
  - takopi.application.usecases.* (casos de uso)

Patrones aplicados:
  - Composition Root
  - Dependency Inversion (use cases dependen de puertos)
  - Lazy singletons con lru_cache

Notas:
  - build_repositories / validate_storage_config NO leen estado ambiente:
    el modo y los recursos llegan por argumento.
  - Este archivo NO contiene lógica de negocio ni depende de FastAPI.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any, Callable, Mapping, Optional

from .application.usecases import (
    AddItemToCollectionUseCase,
    CreateCollectionUseCase,
    DeleteCollectionUseCase,
    GetCollectionUseCase,
    GetFollowStatusUseCase,
    GetLikeStatusUseCase,
    GetPinStatusUseCase,
    ListContentLikesUseCase,
    ListFollowsUseCase,
    ListUserCollectionsUseCase,
    ListUserLikesUseCase,
    ListUserPinsUseCase,
    RemoveItemFromCollectionUseCase,
    ToggleFollowUseCase,
    ToggleLikeUseCase,
    TogglePinUseCase,
    UpdateCollectionUseCase,
)
from .crosscutting.config import LOCAL_STORAGE_MODE, Settings, get_settings
from .crosscutting.logger import logger
from .domain.repositories import (
    CollectionRepository,
    FollowRepository,
    LikeRepository,
    PinRepository,
)
from .infrastructure.repositories import (
    FileCollectionRepository,
    FileFollowRepository,
    FileLikeRepository,
    FilePinRepository,
    PostgresCollectionRepository,
    PostgresFollowRepository,
    PostgresLikeRepository,
    PostgresPinRepository,
)
from .infrastructure.storage import JsonFileStore, StorageConfigurationError

# =============================================================================
# Modo de storage
# =============================================================================


class StorageMode(str, Enum):
    """
    Backend de persistencia.

      - LOCAL: file store JSON (desarrollo single-node)
      - REMOTE: PostgreSQL
    """

    LOCAL = LOCAL_STORAGE_MODE
    REMOTE = "remote"

    @classmethod
    def parse(cls, value: Any) -> "StorageMode":
        """'local' (sin importar mayúsculas/espacios) -> LOCAL; cualquier otro -> REMOTE."""
        if isinstance(value, StorageMode):
            return value
        normalized = str(value or "").strip().lower()
        return cls.LOCAL if normalized == LOCAL_STORAGE_MODE else cls.REMOTE


@dataclass(frozen=True)
class Repositories:
    """Bundle de repositorios de un mismo backend."""

    follows: FollowRepository
    likes: LikeRepository
    pins: PinRepository
    collections: CollectionRepository


# =============================================================================
# Registry entidad -> implementación
# =============================================================================
# Cada factory recibe el "handle" del backend: JsonFileStore (LOCAL) o el pool
# (REMOTE; None => pool global lazy).

RepositoryFactory = Callable[[Any], Any]
BackendRegistry = Mapping[StorageMode, Mapping[str, RepositoryFactory]]

ENTITY_KINDS: tuple[str, ...] = ("follow", "like", "pin", "collection")

_BUNDLE_FIELDS = {
    "follow": "follows",
    "like": "likes",
    "pin": "pins",
    "collection": "collections",
}

BACKEND_REGISTRY: BackendRegistry = {
    StorageMode.LOCAL: {
        "follow": FileFollowRepository,
        "like": FileLikeRepository,
        "pin": FilePinRepository,
        "collection": FileCollectionRepository,
    },
    StorageMode.REMOTE: {
        "follow": lambda pool: PostgresFollowRepository(pool=pool),
        "like": lambda pool: PostgresLikeRepository(pool=pool),
        "pin": lambda pool: PostgresPinRepository(pool=pool),
        "collection": lambda pool: PostgresCollectionRepository(pool=pool),
    },
}


def _missing_kinds(mode: StorageMode, registry: BackendRegistry) -> list[str]:
    wired = registry.get(mode, {})
    return [kind for kind in ENTITY_KINDS if kind not in wired]


def _require_complete(mode: StorageMode, registry: BackendRegistry) -> None:
    missing = _missing_kinds(mode, registry)
    if missing:
        raise StorageConfigurationError(
            f"Backend '{mode.value}' sin implementación para: {', '.join(missing)}"
        )


def build_repositories(
    mode: StorageMode | str,
    *,
    storage_root: Optional[str | Path] = None,
    pool: Any = None,
    registry: Optional[BackendRegistry] = None,
) -> Repositories:
    """
    Construye el bundle para el modo dado.

    - LOCAL: requiere storage_root; un único JsonFileStore compartido.
    - REMOTE: pool opcional (None => cada repo usa el pool global).
    """
    mode = StorageMode.parse(mode)
    registry = BACKEND_REGISTRY if registry is None else registry
    _require_complete(mode, registry)

    if mode is StorageMode.LOCAL:
        if storage_root is None:
            raise StorageConfigurationError("storage_root es requerido en modo local")
        handle: Any = JsonFileStore(storage_root)
    else:
        handle = pool

    factories = registry[mode]
    return Repositories(
        **{_BUNDLE_FIELDS[kind]: factories[kind](handle) for kind in ENTITY_KINDS}
    )


def validate_storage_config(
    mode: StorageMode | str,
    settings: Settings,
    *,
    registry: Optional[BackendRegistry] = None,
) -> None:
    """
    Validación de arranque (lifespan).

    Lanza StorageConfigurationError si:
      - alguna entidad no tiene implementación para el modo
      - REMOTE sin DATABASE_URL
      - LOCAL con un directorio raíz que no se puede crear/escribir
    """
    mode = StorageMode.parse(mode)
    _require_complete(mode, BACKEND_REGISTRY if registry is None else registry)

    if mode is StorageMode.REMOTE:
        if not (settings.database_url or "").strip():
            raise StorageConfigurationError(
                "DATABASE_URL es requerido cuando STORAGE_MODE no es 'local'"
            )
    else:
        JsonFileStore(settings.storage_path).ensure_root()

    logger.info(
        "Storage config validated",
        extra={"storage_mode": mode.value},
    )


# =============================================================================
# Repositorios (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_storage_mode() -> StorageMode:
    """Modo derivado una sola vez de Settings."""
    return StorageMode.parse(get_settings().storage_mode)


@lru_cache(maxsize=1)
def get_repositories() -> Repositories:
    settings = get_settings()
    mode = get_storage_mode()
    return build_repositories(
        mode,
        storage_root=settings.storage_path if mode is StorageMode.LOCAL else None,
    )


def get_follow_repository() -> FollowRepository:
    return get_repositories().follows


def get_like_repository() -> LikeRepository:
    return get_repositories().likes


def get_pin_repository() -> PinRepository:
    return get_repositories().pins


def get_collection_repository() -> CollectionRepository:
    return get_repositories().collections


def reset_container() -> None:
    """Limpia singletons (tests / cambio de Settings)."""
    get_storage_mode.cache_clear()
    get_repositories.cache_clear()


# =============================================================================
# Use cases (factories; baratos de construir)
# =============================================================================


def get_toggle_follow_use_case() -> ToggleFollowUseCase:
    return ToggleFollowUseCase(get_follow_repository())


def get_follow_status_use_case() -> GetFollowStatusUseCase:
    return GetFollowStatusUseCase(get_follow_repository())


def get_list_follows_use_case() -> ListFollowsUseCase:
    return ListFollowsUseCase(get_follow_repository())


def get_toggle_like_use_case() -> ToggleLikeUseCase:
    return ToggleLikeUseCase(get_like_repository())


def get_like_status_use_case() -> GetLikeStatusUseCase:
    return GetLikeStatusUseCase(get_like_repository())


def get_list_user_likes_use_case() -> ListUserLikesUseCase:
    return ListUserLikesUseCase(get_like_repository())


def get_list_content_likes_use_case() -> ListContentLikesUseCase:
    return ListContentLikesUseCase(get_like_repository())


def get_toggle_pin_use_case() -> TogglePinUseCase:
    return TogglePinUseCase(get_pin_repository())


def get_pin_status_use_case() -> GetPinStatusUseCase:
    return GetPinStatusUseCase(get_pin_repository())


def get_list_user_pins_use_case() -> ListUserPinsUseCase:
    return ListUserPinsUseCase(get_pin_repository())


def get_create_collection_use_case() -> CreateCollectionUseCase:
    settings = get_settings()
    return CreateCollectionUseCase(
        get_collection_repository(),
        title_max_chars=settings.collection_title_max_chars,
        description_max_chars=settings.collection_description_max_chars,
    )


def get_update_collection_use_case() -> UpdateCollectionUseCase:
    settings = get_settings()
    return UpdateCollectionUseCase(
        get_collection_repository(),
        title_max_chars=settings.collection_title_max_chars,
        description_max_chars=settings.collection_description_max_chars,
    )


def get_delete_collection_use_case() -> DeleteCollectionUseCase:
    return DeleteCollectionUseCase(get_collection_repository())


def get_add_item_use_case() -> AddItemToCollectionUseCase:
    return AddItemToCollectionUseCase(get_collection_repository())


def get_remove_item_use_case() -> RemoveItemFromCollectionUseCase:
    return RemoveItemFromCollectionUseCase(get_collection_repository())


def get_get_collection_use_case() -> GetCollectionUseCase:
    return GetCollectionUseCase(get_collection_repository())


def get_list_user_collections_use_case() -> ListUserCollectionsUseCase:
    return ListUserCollectionsUseCase(get_collection_repository())
