"""
===============================================================================
TARJETA CRC — domain/__init__.py
===============================================================================

Módulo:
    Exportaciones de la Capa de Dominio

Responsabilidades:
    - Centralizar exports (entidades + puertos) para imports limpios.

Reglas:
    - Solo re-exporta contratos/entidades del dominio.
    - No importar infraestructura aquí.
===============================================================================
"""

from .entities import (
    COLLECTION_DESCRIPTION_MAX_CHARS,
    COLLECTION_TITLE_MAX_CHARS,
    Collection,
    CollectionChanges,
    CollectionItem,
    Follow,
    Like,
    Pin,
)
from .repositories import (
    CollectionRepository,
    FollowRepository,
    LikeRepository,
    PinRepository,
)

__all__ = [
    # Entities
    "Follow",
    "Like",
    "Pin",
    "Collection",
    "CollectionItem",
    "CollectionChanges",
    "COLLECTION_TITLE_MAX_CHARS",
    "COLLECTION_DESCRIPTION_MAX_CHARS",
    # Repositories
    "FollowRepository",
    "LikeRepository",
    "PinRepository",
    "CollectionRepository",
]
