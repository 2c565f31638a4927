"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/like.py
============================================================
Class: PostgresLikeRepository

Responsibilities:
- Persistir likes en la tabla `likes`.
- Unicidad (content_id, user_id) por uq_likes_content_id_user_id.
- count_by_content con COUNT(*) (el caso de uso siempre re-lee el conteo).

Collaborators:
- domain.entities.Like
- postgres.base.PostgresRepository
============================================================
"""

from __future__ import annotations

from typing import List, Optional

from ....domain.entities import Like
from .base import PostgresRepository, new_id

_COLUMNS = "id, user_id, content_id, created_at"
_ORDER_BY = "ORDER BY created_at DESC, id DESC"


class PostgresLikeRepository(PostgresRepository):
    """R: Implementación PostgreSQL de LikeRepository."""

    @staticmethod
    def _row_to_like(row: tuple) -> Like:
        like_id, user_id, content_id, created_at = row
        return Like(
            id=str(like_id),
            user_id=user_id,
            content_id=content_id,
            created_at=created_at,
        )

    def _select(self, where_sql: str, params: list[object], context_msg: str) -> List[Like]:
        rows = self._fetchall(
            query=f"SELECT {_COLUMNS} FROM likes {where_sql} {_ORDER_BY}",
            params=params,
            context_msg=context_msg,
            extra={"where_sql": where_sql},
        )
        return [self._row_to_like(r) for r in rows]

    def find_by_id(self, like_id: str) -> Optional[Like]:
        row = self._fetchone(
            query=f"SELECT {_COLUMNS} FROM likes WHERE id = %s",
            params=[like_id],
            context_msg="PostgresLikeRepository: Failed to get like",
            extra={"like_id": like_id},
        )
        return self._row_to_like(row) if row else None

    def find_by_user(self, user_id: str) -> List[Like]:
        return self._select(
            "WHERE user_id = %s",
            [user_id],
            "PostgresLikeRepository: Failed to list likes by user",
        )

    def find_by_content(self, content_id: str) -> List[Like]:
        return self._select(
            "WHERE content_id = %s",
            [content_id],
            "PostgresLikeRepository: Failed to list likes by content",
        )

    def find_by_user_and_content(self, user_id: str, content_id: str) -> Optional[Like]:
        row = self._fetchone(
            query=f"""
                SELECT {_COLUMNS} FROM likes
                WHERE user_id = %s AND content_id = %s
            """,
            params=[user_id, content_id],
            context_msg="PostgresLikeRepository: Failed to get like by user/content",
            extra={"user_id": user_id, "content_id": content_id},
        )
        return self._row_to_like(row) if row else None

    def create(self, user_id: str, content_id: str) -> Like:
        row = self._fetchone(
            query=f"""
                INSERT INTO likes (id, user_id, content_id)
                VALUES (%s, %s, %s)
                RETURNING {_COLUMNS}
            """,
            params=[new_id(), user_id, content_id],
            context_msg="PostgresLikeRepository: Failed to create like",
            extra={"user_id": user_id, "content_id": content_id},
            conflict_msg="Ya diste like a este contenido",
        )
        return self._row_to_like(row)

    def delete(self, like_id: str) -> bool:
        deleted = self._execute(
            query="DELETE FROM likes WHERE id = %s",
            params=[like_id],
            context_msg="PostgresLikeRepository: Failed to delete like",
            extra={"like_id": like_id},
        )
        return deleted > 0

    def count_by_content(self, content_id: str) -> int:
        return self._count(
            query="SELECT COUNT(*) FROM likes WHERE content_id = %s",
            params=[content_id],
            context_msg="PostgresLikeRepository: Failed to count likes",
            extra={"content_id": content_id},
        )
