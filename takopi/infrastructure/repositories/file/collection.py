"""
============================================================
TARJETA CRC — infrastructure/repositories/file/collection.py
============================================================
Class: FileCollectionRepository

Responsibilities:
- Persistir colecciones ("collections") y sus items ("collection_items").
- Calcular item_count desde collection_items (no se persiste).
- Encadenar mutación de item + bump de updatedAt del padre bajo el lock
  del store (se ven juntas para otros escritores del proceso).
- Borrado de colección en cascada sobre sus items.

Collaborators:
- infrastructure/storage/file_store.JsonFileStore
- domain.entities (Collection, CollectionItem, CollectionChanges)

Constraints / Notes:
- Clave natural de items (collectionId, contentId) validada por el store.
============================================================
"""

from __future__ import annotations

from collections import Counter
from datetime import datetime
from typing import Callable, List, Optional

from ....domain.entities import Collection, CollectionChanges, CollectionItem, utcnow
from ...storage.file_store import UPDATED_AT_FIELD, Record
from .base import FileRepository, parse_timestamp, record_id

ITEMS_COLLECTION = "collection_items"


class FileCollectionRepository(FileRepository):
    """R: CollectionRepository sobre JsonFileStore."""

    COLLECTION = "collections"

    def __init__(self, store, *, clock: Callable[[], datetime] = utcnow):
        super().__init__(store)
        self._clock = clock

    # =========================================================
    # Mapping
    # =========================================================
    def _to_entity(self, record: Record, item_count: int) -> Collection:
        return Collection(
            id=record_id(record),
            user_id=record["userId"],
            title=record.get("title", ""),
            description=record.get("description"),
            is_public=bool(record.get("isPublic", True)),
            item_count=item_count,
            created_at=self._ts(record),
            updated_at=self._ts(record, UPDATED_AT_FIELD),
        )

    @staticmethod
    def _item_to_entity(record: Record) -> CollectionItem:
        return CollectionItem(
            id=record_id(record),
            collection_id=record["collectionId"],
            content_id=record["contentId"],
            added_at=parse_timestamp(
                record.get("addedAt", record.get("createdAt")),
                collection=ITEMS_COLLECTION,
            ),
        )

    def _items_where(self, criteria: dict) -> list[Record]:
        return self._store.find(ITEMS_COLLECTION, criteria).unwrap()

    def _item_count(self, collection_id: str) -> int:
        return self._store.count(
            ITEMS_COLLECTION, {"collectionId": collection_id}
        ).unwrap()

    def _touch(self, collection_id: str) -> None:
        # update() sin campos = solo bump de updatedAt.
        self._store.update(self.COLLECTION, collection_id, {})

    # =========================================================
    # Collections
    # =========================================================
    def create(
        self,
        user_id: str,
        title: str,
        description: Optional[str],
        is_public: bool,
    ) -> Collection:
        record = self._store.create(
            self.COLLECTION,
            {
                "userId": user_id,
                "title": title,
                "description": description,
                "isPublic": bool(is_public),
            },
            id_prefix="collection",
        )
        return self._to_entity(record, item_count=0)

    def find_by_id(self, collection_id: str) -> Optional[Collection]:
        record = self._get(collection_id)
        if record is None:
            return None
        return self._to_entity(record, self._item_count(collection_id))

    def find_by_user(self, user_id: str) -> List[Collection]:
        records = self._newest_first(self._where({"userId": user_id}), UPDATED_AT_FIELD)
        if not records:
            return []
        counts = Counter(
            item.get("collectionId")
            for item in self._store.find_all(ITEMS_COLLECTION).unwrap()
        )
        return [self._to_entity(r, counts.get(record_id(r), 0)) for r in records]

    def update(
        self, collection_id: str, changes: CollectionChanges
    ) -> Optional[Collection]:
        partial: dict = {}
        if changes.title is not None:
            partial["title"] = changes.title
        if changes.clear_description:
            partial["description"] = None
        elif changes.description is not None:
            partial["description"] = changes.description
        if changes.is_public is not None:
            partial["isPublic"] = bool(changes.is_public)

        with self._store.locked():
            record = self._store.update(self.COLLECTION, collection_id, partial)
            if record is None:
                return None
            return self._to_entity(record, self._item_count(collection_id))

    def delete(self, collection_id: str) -> bool:
        with self._store.locked():
            if self._get(collection_id) is None:
                return False
            self._store.delete_where(ITEMS_COLLECTION, {"collectionId": collection_id})
            return self._store.delete(self.COLLECTION, collection_id)

    def count_by_user(self, user_id: str) -> int:
        return self._count({"userId": user_id})

    # =========================================================
    # Items
    # =========================================================
    def add_item(self, collection_id: str, content_id: str) -> CollectionItem:
        with self._store.locked():
            record = self._store.create(
                ITEMS_COLLECTION,
                {
                    "collectionId": collection_id,
                    "contentId": content_id,
                    "addedAt": self._clock().isoformat(),
                },
                unique_on=("collectionId", "contentId"),
                id_prefix="item",
            )
            self._touch(collection_id)
        return self._item_to_entity(record)

    def remove_item(self, collection_id: str, content_id: str) -> bool:
        with self._store.locked():
            removed = self._store.delete_where(
                ITEMS_COLLECTION,
                {"collectionId": collection_id, "contentId": content_id},
            )
            self._touch(collection_id)
        return removed > 0

    def get_items(self, collection_id: str) -> List[CollectionItem]:
        records = self._items_where({"collectionId": collection_id})
        ordered = sorted(
            reversed(records),
            key=lambda r: self._item_to_entity(r).added_at,
            reverse=True,
        )
        return [self._item_to_entity(r) for r in ordered]

    def is_item_in_collection(self, collection_id: str, content_id: str) -> bool:
        return bool(
            self._items_where({"collectionId": collection_id, "contentId": content_id})
        )
