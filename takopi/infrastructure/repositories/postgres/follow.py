"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/follow.py
============================================================
Class: PostgresFollowRepository

Responsibilities:
- Persistir el grafo de follows en la tabla `follows`.
- Delegar unicidad (follower_id, following_id) al constraint
  uq_follows_follower_id_following_id (duplicado -> ConflictError).
- Conteos con COUNT(*) en la DB (nunca cargando filas en memoria).

Collaborators:
- domain.entities.Follow
- postgres.base.PostgresRepository
============================================================
"""

from __future__ import annotations

from typing import List, Optional

from ....domain.entities import Follow
from .base import PostgresRepository, new_id

_COLUMNS = "id, follower_id, following_id, created_at"
_ORDER_BY = "ORDER BY created_at DESC, id DESC"


class PostgresFollowRepository(PostgresRepository):
    """R: Implementación PostgreSQL de FollowRepository."""

    @staticmethod
    def _row_to_follow(row: tuple) -> Follow:
        follow_id, follower_id, following_id, created_at = row
        return Follow(
            id=str(follow_id),
            follower_id=follower_id,
            following_id=following_id,
            created_at=created_at,
        )

    def create(self, follower_id: str, following_id: str) -> Follow:
        row = self._fetchone(
            query=f"""
                INSERT INTO follows (id, follower_id, following_id)
                VALUES (%s, %s, %s)
                RETURNING {_COLUMNS}
            """,
            params=[new_id(), follower_id, following_id],
            context_msg="PostgresFollowRepository: Failed to create follow",
            extra={"follower_id": follower_id, "following_id": following_id},
            conflict_msg="Ya sigues a este usuario",
        )
        return self._row_to_follow(row)

    def find_by_id(self, follow_id: str) -> Optional[Follow]:
        row = self._fetchone(
            query=f"SELECT {_COLUMNS} FROM follows WHERE id = %s",
            params=[follow_id],
            context_msg="PostgresFollowRepository: Failed to get follow",
            extra={"follow_id": follow_id},
        )
        return self._row_to_follow(row) if row else None

    def find_by_users(self, follower_id: str, following_id: str) -> Optional[Follow]:
        row = self._fetchone(
            query=f"""
                SELECT {_COLUMNS} FROM follows
                WHERE follower_id = %s AND following_id = %s
            """,
            params=[follower_id, following_id],
            context_msg="PostgresFollowRepository: Failed to get follow by users",
            extra={"follower_id": follower_id, "following_id": following_id},
        )
        return self._row_to_follow(row) if row else None

    def find_by_follower(self, follower_id: str) -> List[Follow]:
        rows = self._fetchall(
            query=f"SELECT {_COLUMNS} FROM follows WHERE follower_id = %s {_ORDER_BY}",
            params=[follower_id],
            context_msg="PostgresFollowRepository: Failed to list following",
            extra={"follower_id": follower_id},
        )
        return [self._row_to_follow(r) for r in rows]

    def find_by_following(self, following_id: str) -> List[Follow]:
        rows = self._fetchall(
            query=f"SELECT {_COLUMNS} FROM follows WHERE following_id = %s {_ORDER_BY}",
            params=[following_id],
            context_msg="PostgresFollowRepository: Failed to list followers",
            extra={"following_id": following_id},
        )
        return [self._row_to_follow(r) for r in rows]

    def delete(self, follow_id: str) -> bool:
        deleted = self._execute(
            query="DELETE FROM follows WHERE id = %s",
            params=[follow_id],
            context_msg="PostgresFollowRepository: Failed to delete follow",
            extra={"follow_id": follow_id},
        )
        return deleted > 0

    def count_by_follower(self, follower_id: str) -> int:
        return self._count(
            query="SELECT COUNT(*) FROM follows WHERE follower_id = %s",
            params=[follower_id],
            context_msg="PostgresFollowRepository: Failed to count following",
            extra={"follower_id": follower_id},
        )

    def count_by_following(self, following_id: str) -> int:
        return self._count(
            query="SELECT COUNT(*) FROM follows WHERE following_id = %s",
            params=[following_id],
            context_msg="PostgresFollowRepository: Failed to count followers",
            extra={"following_id": following_id},
        )
