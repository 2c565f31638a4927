"""
===============================================================================
COLLECTION USE CASES PACKAGE (Public API / Exports)
===============================================================================

Component:
    collections usecases package (__init__.py)

Responsibilities:
    - Re-exportar casos de uso de colecciones, DTOs y helpers de acceso.
===============================================================================
"""

from __future__ import annotations

# -----------------------------------------------------------------------------
# Use Cases
# -----------------------------------------------------------------------------
from .add_item_to_collection import AddItemToCollectionUseCase
from .create_collection import CreateCollectionInput, CreateCollectionUseCase
from .delete_collection import DeleteCollectionUseCase
from .get_collection import GetCollectionUseCase
from .list_user_collections import ListUserCollectionsUseCase
from .remove_item_from_collection import RemoveItemFromCollectionUseCase
from .update_collection import UpdateCollectionUseCase

# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------
from .collection_access import (
    load_owned_collection,
    normalize_description,
    normalize_title,
)

# -----------------------------------------------------------------------------
# DTOs / Result models
# -----------------------------------------------------------------------------
from .collection_results import CollectionDetail, UpdateCollectionInput

__all__ = [
    # Use Cases
    "CreateCollectionInput",
    "CreateCollectionUseCase",
    "UpdateCollectionUseCase",
    "DeleteCollectionUseCase",
    "AddItemToCollectionUseCase",
    "RemoveItemFromCollectionUseCase",
    "GetCollectionUseCase",
    "ListUserCollectionsUseCase",
    # Helpers
    "load_owned_collection",
    "normalize_title",
    "normalize_description",
    # DTOs / Result models
    "CollectionDetail",
    "UpdateCollectionInput",
]
