"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/collection.py
============================================================
Class: PostgresCollectionRepository

Responsibilities:
- CRUD de `collections` y de sus items (`collection_items`).
- item_count derivado con subquery (nunca persistido).
- Alta/baja de item + bump de updated_at en la MISMA transacción.
- Borrado en cascada vía FK ON DELETE CASCADE.

Collaborators:
- domain.entities (Collection, CollectionItem, CollectionChanges)
- postgres.base.PostgresRepository

Constraints / Notes:
- Unicidad (collection_id, content_id) por
  uq_collection_items_collection_id_content_id -> ConflictError.
- update arma el SET solo con los campos presentes (allowlist fija).
============================================================
"""

from __future__ import annotations

from typing import List, Optional

from ....domain.entities import Collection, CollectionChanges, CollectionItem
from .base import PostgresRepository, new_id

_SELECT_COLLECTION = """
    SELECT c.id, c.user_id, c.title, c.description, c.is_public,
           (SELECT COUNT(*) FROM collection_items ci WHERE ci.collection_id = c.id)
               AS item_count,
           c.created_at, c.updated_at
    FROM collections c
"""

_ITEM_COLUMNS = "id, collection_id, content_id, added_at"

_DUPLICATE_ITEM_MSG = "Este producto ya está en la colección"


class PostgresCollectionRepository(PostgresRepository):
    """R: Implementación PostgreSQL de CollectionRepository."""

    @staticmethod
    def _row_to_collection(row: tuple) -> Collection:
        (
            collection_id,
            user_id,
            title,
            description,
            is_public,
            item_count,
            created_at,
            updated_at,
        ) = row
        return Collection(
            id=str(collection_id),
            user_id=user_id,
            title=title,
            description=description,
            is_public=bool(is_public),
            item_count=int(item_count or 0),
            created_at=created_at,
            updated_at=updated_at,
        )

    @staticmethod
    def _row_to_item(row: tuple) -> CollectionItem:
        item_id, collection_id, content_id, added_at = row
        return CollectionItem(
            id=str(item_id),
            collection_id=str(collection_id),
            content_id=content_id,
            added_at=added_at,
        )

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
        row = self._fetchone(
            query="""
                INSERT INTO collections (id, user_id, title, description, is_public)
                VALUES (%s, %s, %s, %s, %s)
                RETURNING id, user_id, title, description, is_public,
                          0 AS item_count, created_at, updated_at
            """,
            params=[new_id(), user_id, title, description, is_public],
            context_msg="PostgresCollectionRepository: Failed to create collection",
            extra={"user_id": user_id},
        )
        return self._row_to_collection(row)

    def find_by_id(self, collection_id: str) -> Optional[Collection]:
        row = self._fetchone(
            query=f"{_SELECT_COLLECTION} WHERE c.id = %s",
            params=[collection_id],
            context_msg="PostgresCollectionRepository: Failed to get collection",
            extra={"collection_id": collection_id},
        )
        return self._row_to_collection(row) if row else None

    def find_by_user(self, user_id: str) -> List[Collection]:
        rows = self._fetchall(
            query=f"""
                {_SELECT_COLLECTION}
                WHERE c.user_id = %s
                ORDER BY c.updated_at DESC, c.id DESC
            """,
            params=[user_id],
            context_msg="PostgresCollectionRepository: Failed to list collections",
            extra={"user_id": user_id},
        )
        return [self._row_to_collection(r) for r in rows]

    def update(
        self, collection_id: str, changes: CollectionChanges
    ) -> Optional[Collection]:
        sets: list[str] = []
        params: list[object] = []
        if changes.title is not None:
            sets.append("title = %s")
            params.append(changes.title)
        if changes.clear_description:
            sets.append("description = NULL")
        elif changes.description is not None:
            sets.append("description = %s")
            params.append(changes.description)
        if changes.is_public is not None:
            sets.append("is_public = %s")
            params.append(changes.is_public)
        sets.append("updated_at = now()")

        row = self._fetchone(
            query=f"""
                UPDATE collections SET {", ".join(sets)}
                WHERE id = %s
                RETURNING id
            """,
            params=[*params, collection_id],
            context_msg="PostgresCollectionRepository: Failed to update collection",
            extra={"collection_id": collection_id},
        )
        if row is None:
            return None
        return self.find_by_id(collection_id)

    def delete(self, collection_id: str) -> bool:
        # Items se borran por ON DELETE CASCADE.
        deleted = self._execute(
            query="DELETE FROM collections WHERE id = %s",
            params=[collection_id],
            context_msg="PostgresCollectionRepository: Failed to delete collection",
            extra={"collection_id": collection_id},
        )
        return deleted > 0

    def count_by_user(self, user_id: str) -> int:
        return self._count(
            query="SELECT COUNT(*) FROM collections WHERE user_id = %s",
            params=[user_id],
            context_msg="PostgresCollectionRepository: Failed to count collections",
            extra={"user_id": user_id},
        )

    # =========================================================
    # Items
    # =========================================================
    def add_item(self, collection_id: str, content_id: str) -> CollectionItem:
        def _insert(conn) -> tuple:
            row = conn.execute(
                f"""
                INSERT INTO collection_items (id, collection_id, content_id)
                VALUES (%s, %s, %s)
                RETURNING {_ITEM_COLUMNS}
                """,
                (new_id(), collection_id, content_id),
            ).fetchone()
            conn.execute(
                "UPDATE collections SET updated_at = now() WHERE id = %s",
                (collection_id,),
            )
            return row

        row = self._run(
            _insert,
            context_msg="PostgresCollectionRepository: Failed to add item",
            extra={"collection_id": collection_id, "content_id": content_id},
            conflict_msg=_DUPLICATE_ITEM_MSG,
        )
        return self._row_to_item(row)

    def remove_item(self, collection_id: str, content_id: str) -> bool:
        def _remove(conn) -> int:
            removed = conn.execute(
                """
                DELETE FROM collection_items
                WHERE collection_id = %s AND content_id = %s
                """,
                (collection_id, content_id),
            ).rowcount
            conn.execute(
                "UPDATE collections SET updated_at = now() WHERE id = %s",
                (collection_id,),
            )
            return removed

        removed = self._run(
            _remove,
            context_msg="PostgresCollectionRepository: Failed to remove item",
            extra={"collection_id": collection_id, "content_id": content_id},
        )
        return removed > 0

    def get_items(self, collection_id: str) -> List[CollectionItem]:
        rows = self._fetchall(
            query=f"""
                SELECT {_ITEM_COLUMNS} FROM collection_items
                WHERE collection_id = %s
                ORDER BY added_at DESC, id DESC
            """,
            params=[collection_id],
            context_msg="PostgresCollectionRepository: Failed to list items",
            extra={"collection_id": collection_id},
        )
        return [self._row_to_item(r) for r in rows]

    def is_item_in_collection(self, collection_id: str, content_id: str) -> bool:
        row = self._fetchone(
            query="""
                SELECT 1 FROM collection_items
                WHERE collection_id = %s AND content_id = %s
                LIMIT 1
            """,
            params=[collection_id, content_id],
            context_msg="PostgresCollectionRepository: Failed to check item",
            extra={"collection_id": collection_id, "content_id": content_id},
        )
        return row is not None
