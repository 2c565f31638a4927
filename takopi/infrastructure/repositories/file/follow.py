"""
============================================================
TARJETA CRC — infrastructure/repositories/file/follow.py
============================================================
Class: FileFollowRepository

Responsibilities:
- Persistir follows en la colección "follows" del file store.
- Clave natural (followerId, followingId) validada por el store
  (unique_on) -> DuplicateRecordError (ConflictError).
- Ids con prefijo "follow_".
============================================================
"""

from __future__ import annotations

from typing import List, Optional

from ....domain.entities import Follow
from ...storage.file_store import Record
from .base import FileRepository, record_id


class FileFollowRepository(FileRepository):
    """R: FollowRepository sobre JsonFileStore."""

    COLLECTION = "follows"

    def _to_entity(self, record: Record) -> Follow:
        return Follow(
            id=record_id(record),
            follower_id=record["followerId"],
            following_id=record["followingId"],
            created_at=self._ts(record),
        )

    def create(self, follower_id: str, following_id: str) -> Follow:
        record = self._store.create(
            self.COLLECTION,
            {"followerId": follower_id, "followingId": following_id},
            unique_on=("followerId", "followingId"),
            id_prefix="follow",
        )
        return self._to_entity(record)

    def find_by_id(self, follow_id: str) -> Optional[Follow]:
        record = self._get(follow_id)
        return self._to_entity(record) if record else None

    def find_by_users(self, follower_id: str, following_id: str) -> Optional[Follow]:
        record = self._first({"followerId": follower_id, "followingId": following_id})
        return self._to_entity(record) if record else None

    def find_by_follower(self, follower_id: str) -> List[Follow]:
        records = self._where({"followerId": follower_id})
        return [self._to_entity(r) for r in self._newest_first(records)]

    def find_by_following(self, following_id: str) -> List[Follow]:
        records = self._where({"followingId": following_id})
        return [self._to_entity(r) for r in self._newest_first(records)]

    def delete(self, follow_id: str) -> bool:
        with self._store.locked():
            if self._get(follow_id) is None:
                return False
            return self._store.delete(self.COLLECTION, follow_id)

    def count_by_follower(self, follower_id: str) -> int:
        return self._count({"followerId": follower_id})

    def count_by_following(self, following_id: str) -> int:
        return self._count({"followingId": following_id})
