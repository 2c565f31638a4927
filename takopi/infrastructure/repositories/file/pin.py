"""
============================================================
TARJETA CRC — infrastructure/repositories/file/pin.py
============================================================
Class: FilePinRepository

Responsibilities:
- Persistir pins en la colección "pins" del file store.
- Clave natural (userId, contentId); borrado por clave natural.
============================================================
"""

from __future__ import annotations

from typing import List, Optional

from ....domain.entities import Pin
from ...storage.file_store import Record
from .base import FileRepository, record_id


class FilePinRepository(FileRepository):
    """R: PinRepository sobre JsonFileStore."""

    COLLECTION = "pins"

    def _to_entity(self, record: Record) -> Pin:
        return Pin(
            id=record_id(record),
            user_id=record["userId"],
            content_id=record["contentId"],
            is_public=bool(record.get("isPublic", True)),
            created_at=self._ts(record),
        )

    @staticmethod
    def _user_criteria(user_id: str, public_only: bool) -> dict:
        criteria: dict = {"userId": user_id}
        if public_only:
            criteria["isPublic"] = True
        return criteria

    def find_by_user_and_content(self, user_id: str, content_id: str) -> Optional[Pin]:
        record = self._first({"userId": user_id, "contentId": content_id})
        return self._to_entity(record) if record else None

    def count_by_content(self, content_id: str) -> int:
        return self._count({"contentId": content_id})

    def count_by_user(self, user_id: str, *, public_only: bool = False) -> int:
        return self._count(self._user_criteria(user_id, public_only))

    def create(self, user_id: str, content_id: str, is_public: bool) -> Pin:
        record = self._store.create(
            self.COLLECTION,
            {"userId": user_id, "contentId": content_id, "isPublic": bool(is_public)},
            unique_on=("userId", "contentId"),
            id_prefix="pin",
        )
        return self._to_entity(record)

    def delete(self, user_id: str, content_id: str) -> bool:
        removed = self._store.delete_where(
            self.COLLECTION, {"userId": user_id, "contentId": content_id}
        )
        return removed > 0

    def find_by_user(self, user_id: str, *, public_only: bool = False) -> List[Pin]:
        records = self._where(self._user_criteria(user_id, public_only))
        return [self._to_entity(r) for r in self._newest_first(records)]
