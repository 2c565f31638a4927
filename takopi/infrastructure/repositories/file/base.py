"""
============================================================
TARJETA CRC — infrastructure/repositories/file/base.py
============================================================
Class: FileRepository (base de repositorios sobre JsonFileStore)

Responsibilities:
- Guardar la referencia al store compartido.
- Leer con unwrap(): una falla de disco es StorageReadError, nunca "[]".
- Parsear timestamps ISO-8601 de los registros (acepta sufijo "Z").
- Ordenar "más nuevo primero" de forma estable.

Collaborators:
- infrastructure/storage/file_store.JsonFileStore
- infrastructure/storage/errors.StorageReadError
============================================================
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Iterable, Mapping, Optional

from ...storage.errors import StorageReadError
from ...storage.file_store import CREATED_AT_FIELD, ID_FIELD, JsonFileStore, Record

_EPOCH = datetime.fromtimestamp(0, tz=timezone.utc)


def parse_timestamp(value: Any, *, collection: str) -> datetime:
    """ISO-8601 -> datetime aware (UTC si viene naive)."""
    if value is None:
        return _EPOCH
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as exc:
            raise StorageReadError(collection, f"fecha inválida: {value!r}", exc) from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def record_id(record: Mapping[str, Any]) -> str:
    return str(record.get(ID_FIELD, record.get("id", "")))


class FileRepository:
    """R: Base común; cada subclase define COLLECTION."""

    COLLECTION: str = ""

    def __init__(self, store: JsonFileStore):
        self._store = store

    # -----------------------------------------------------------------
    # Lecturas (propagan StorageReadError)
    # -----------------------------------------------------------------
    def _where(self, criteria: Mapping[str, Any]) -> list[Record]:
        return self._store.find(self.COLLECTION, criteria).unwrap()

    def _first(self, criteria: Mapping[str, Any]) -> Optional[Record]:
        matches = self._where(criteria)
        return matches[0] if matches else None

    def _get(self, key: str) -> Optional[Record]:
        return self._store.find_by_id(self.COLLECTION, key).unwrap()

    def _count(self, criteria: Mapping[str, Any]) -> int:
        return self._store.count(self.COLLECTION, criteria).unwrap()

    def _ts(self, record: Mapping[str, Any], field: str = CREATED_AT_FIELD) -> datetime:
        return parse_timestamp(record.get(field), collection=self.COLLECTION)

    def _newest_first(
        self, records: Iterable[Record], field: str = CREATED_AT_FIELD
    ) -> list[Record]:
        # Empates: el último insertado en el índice va primero.
        return sorted(
            reversed(list(records)),
            key=lambda r: self._ts(r, field),
            reverse=True,
        )
