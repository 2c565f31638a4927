"""
===============================================================================
COLLECTION USE CASE RESULTS
===============================================================================

Component:
    collection_results models (module)

Responsibilities:
    - CollectionDetail: colección + items (vista de detalle).
    - UpdateCollectionInput: cambios parciales pedidos por el caller.

Collaborators:
    - domain.entities (Collection, CollectionItem)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from ....domain.entities import Collection, CollectionItem


@dataclass(frozen=True)
class CollectionDetail:
    collection: Collection
    items: List[CollectionItem] = field(default_factory=list)


@dataclass(frozen=True)
class UpdateCollectionInput:
    """
    DTO de entrada de UpdateCollection.

    Notas:
      - None = "no tocar el campo".
      - description="" (o solo espacios) limpia la descripción.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    is_public: Optional[bool] = None
