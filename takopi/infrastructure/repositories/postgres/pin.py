"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/pin.py
============================================================
Class: PostgresPinRepository

Responsibilities:
- Persistir pins en la tabla `pins` (is_public por pin).
- Unicidad (user_id, content_id) por uq_pins_user_id_content_id.
- Borrado por clave natural (no por id).

Collaborators:
- domain.entities.Pin
- postgres.base.PostgresRepository
============================================================
"""

from __future__ import annotations

from typing import List, Optional

from ....domain.entities import Pin
from .base import PostgresRepository, new_id

_COLUMNS = "id, user_id, content_id, is_public, created_at"


class PostgresPinRepository(PostgresRepository):
    """R: Implementación PostgreSQL de PinRepository."""

    @staticmethod
    def _row_to_pin(row: tuple) -> Pin:
        pin_id, user_id, content_id, is_public, created_at = row
        return Pin(
            id=str(pin_id),
            user_id=user_id,
            content_id=content_id,
            is_public=bool(is_public),
            created_at=created_at,
        )

    @staticmethod
    def _user_filter(user_id: str, public_only: bool) -> tuple[str, list[object]]:
        if public_only:
            return "user_id = %s AND is_public = TRUE", [user_id]
        return "user_id = %s", [user_id]

    def find_by_user_and_content(self, user_id: str, content_id: str) -> Optional[Pin]:
        row = self._fetchone(
            query=f"""
                SELECT {_COLUMNS} FROM pins
                WHERE user_id = %s AND content_id = %s
            """,
            params=[user_id, content_id],
            context_msg="PostgresPinRepository: Failed to get pin",
            extra={"user_id": user_id, "content_id": content_id},
        )
        return self._row_to_pin(row) if row else None

    def count_by_content(self, content_id: str) -> int:
        return self._count(
            query="SELECT COUNT(*) FROM pins WHERE content_id = %s",
            params=[content_id],
            context_msg="PostgresPinRepository: Failed to count pins by content",
            extra={"content_id": content_id},
        )

    def count_by_user(self, user_id: str, *, public_only: bool = False) -> int:
        where_sql, params = self._user_filter(user_id, public_only)
        return self._count(
            query=f"SELECT COUNT(*) FROM pins WHERE {where_sql}",
            params=params,
            context_msg="PostgresPinRepository: Failed to count pins by user",
            extra={"user_id": user_id, "public_only": public_only},
        )

    def create(self, user_id: str, content_id: str, is_public: bool) -> Pin:
        row = self._fetchone(
            query=f"""
                INSERT INTO pins (id, user_id, content_id, is_public)
                VALUES (%s, %s, %s, %s)
                RETURNING {_COLUMNS}
            """,
            params=[new_id(), user_id, content_id, is_public],
            context_msg="PostgresPinRepository: Failed to create pin",
            extra={"user_id": user_id, "content_id": content_id},
            conflict_msg="Este contenido ya está guardado",
        )
        return self._row_to_pin(row)

    def delete(self, user_id: str, content_id: str) -> bool:
        deleted = self._execute(
            query="DELETE FROM pins WHERE user_id = %s AND content_id = %s",
            params=[user_id, content_id],
            context_msg="PostgresPinRepository: Failed to delete pin",
            extra={"user_id": user_id, "content_id": content_id},
        )
        return deleted > 0

    def find_by_user(self, user_id: str, *, public_only: bool = False) -> List[Pin]:
        where_sql, params = self._user_filter(user_id, public_only)
        rows = self._fetchall(
            query=f"""
                SELECT {_COLUMNS} FROM pins
                WHERE {where_sql}
                ORDER BY created_at DESC, id DESC
            """,
            params=params,
            context_msg="PostgresPinRepository: Failed to list pins by user",
            extra={"user_id": user_id, "public_only": public_only},
        )
        return [self._row_to_pin(r) for r in rows]
