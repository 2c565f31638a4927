"""
===============================================================================
CRC CARD — infrastructure/storage/file_store.py
===============================================================================

Clase:
  JsonFileStore (Backend A: document store sobre disco)

Responsabilidades:
  - Persistir registros JSON arbitrarios agrupados por "colección":
        <root>/<collection>/index.json   (array con TODOS los registros)
        <root>/<collection>/<id>.json    (un archivo por registro)
  - Lecturas: find_all / find_by_id / find / count / paginate -> StorageResult.
  - Escrituras: create / update / delete / delete_where.
  - Generar ids (prefijo temporal + sufijo aleatorio base36).

Colaboradores:
  - infrastructure/storage/results.StorageResult (Ok/Err explícito)
  - infrastructure/storage/errors (StorageReadError / StorageWriteError /
    DuplicateRecordError)
  - crosscutting.logger

Decisiones de diseño:
  - index.json es la fuente de verdad para find_all/find/count/paginate; los
    archivos por id existen para lookups directos y se mantienen en sync en
    cada mutación.
  - Single writer: todas las mutaciones pasan por un único RLock del store.
  - Escritura atómica: tmp en el mismo directorio + fsync + os.replace.
  - create(..., unique_on=...) chequea la clave natural bajo el mismo lock.
  - Una falla entre la escritura del archivo y la del índice puede dejarlos
    desincronizados; el índice manda.
===============================================================================
"""

from __future__ import annotations

import json
import math
import os
import secrets
import string
import tempfile
import threading
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping, Optional

from ...crosscutting.logger import logger
from ...domain.entities import utcnow
from .errors import (
    DuplicateRecordError,
    StorageConfigurationError,
    StorageReadError,
    StorageWriteError,
)
from .results import StorageResult

Record = dict[str, Any]

ID_FIELD = "_id"
FALLBACK_ID_FIELD = "id"
CREATED_AT_FIELD = "createdAt"
UPDATED_AT_FIELD = "updatedAt"

_BASE36_ALPHABET = string.digits + string.ascii_lowercase
_RANDOM_SUFFIX_LEN = 9


def generate_id(prefix: str = "") -> str:
    """
    Id "único en este proceso": epoch-ms + 9 chars base36 aleatorios.

    Con prefijo: "<prefix>_<ms>_<random>" (ej: follow_1718000000000_k3j9x0a1b).
    """
    millis = int(time.time() * 1000)
    suffix = "".join(
        secrets.choice(_BASE36_ALPHABET) for _ in range(_RANDOM_SUFFIX_LEN)
    )
    if prefix:
        return f"{prefix}_{millis}_{suffix}"
    return f"{millis}{suffix}"


def _record_id(record: Mapping[str, Any]) -> Any:
    return record.get(ID_FIELD, record.get(FALLBACK_ID_FIELD))


def _matches(record: Mapping[str, Any], criteria: Mapping[str, Any]) -> bool:
    """Igualdad exacta en TODAS las claves (una clave ausente no matchea None)."""
    return all(key in record and record[key] == value for key, value in criteria.items())


@dataclass(frozen=True)
class PaginationMeta:
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int


@dataclass(frozen=True)
class FilePage:
    data: list[Record]
    pagination: PaginationMeta


class JsonFileStore:
    """
    Document store JSON sobre disco, thread-safe para escritores del proceso.

    Modelo mental:
      - Cada colección es un directorio.
      - El índice es la "tabla"; los archivos por id son un espejo.
      - Lecturas no toman lock: os.replace garantiza que nunca se lee un
        archivo a medio escribir.
    """

    INDEX_FILE = "index.json"

    def __init__(
        self,
        root: str | os.PathLike[str],
        *,
        clock: Callable[[], datetime] = utcnow,
        id_factory: Callable[[str], str] = generate_id,
    ) -> None:
        self._root = Path(root)
        self._lock = threading.RLock()
        self._clock = clock
        self._id_factory = id_factory

    @property
    def root(self) -> Path:
        return self._root

    def ensure_root(self) -> None:
        """Crea el directorio raíz (fail-fast en validación de arranque)."""
        try:
            self._root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageConfigurationError(
                f"No se pudo crear el directorio de storage: {self._root}",
                original_error=exc,
            ) from exc
        if not os.access(self._root, os.W_OK):
            raise StorageConfigurationError(
                f"El directorio de storage no es escribible: {self._root}"
            )

    # =========================================================
    # Paths
    # =========================================================
    @staticmethod
    def _safe_segment(value: str, *, kind: str) -> str:
        segment = str(value or "")
        if (
            not segment
            or segment.startswith(".")
            or "/" in segment
            or "\\" in segment
            or "\x00" in segment
        ):
            raise ValueError(f"{kind} inválido para el file store: {value!r}")
        return segment

    def _collection_dir(self, collection: str) -> Path:
        return self._root / self._safe_segment(collection, kind="collection")

    def _index_path(self, collection: str) -> Path:
        return self._collection_dir(collection) / self.INDEX_FILE

    def _record_path(self, collection: str, record_id: str) -> Path:
        return self._collection_dir(collection) / (
            f"{self._safe_segment(record_id, kind='id')}.json"
        )

    def _record_path_or_none(self, collection: str, record_id: str) -> Optional[Path]:
        """Ids que no son nombres de archivo válidos solo viven en el índice."""
        try:
            return self._record_path(collection, record_id)
        except ValueError:
            return None

    def _now_iso(self) -> str:
        return self._clock().isoformat()

    # =========================================================
    # I/O de bajo nivel
    # =========================================================
    @staticmethod
    def _read_json(path: Path) -> Any:
        try:
            with path.open("r", encoding="utf-8") as fh:
                return json.load(fh)
        except json.JSONDecodeError as exc:
            raise StorageReadError(str(path), "JSON inválido", exc) from exc
        except OSError as exc:
            raise StorageReadError(str(path), "error de I/O", exc) from exc

    @staticmethod
    def _write_json_atomic(path: Path, payload: Any) -> None:
        tmp_name: Optional[str] = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=path.parent,
                prefix=f".{path.stem}.",
                suffix=".tmp",
                delete=False,
            ) as fh:
                tmp_name = fh.name
                json.dump(payload, fh, indent=2, ensure_ascii=False, default=str)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, path)
        except (OSError, TypeError, ValueError) as exc:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            logger.exception(
                "JsonFileStore: escritura fallida", extra={"path": str(path)}
            )
            raise StorageWriteError(str(path), original_error=exc) from exc

    def _load_index(self, collection: str) -> list[Record]:
        """Índice completo; [] si la colección nunca fue escrita."""
        path = self._index_path(collection)
        if not path.exists():
            return []
        data = self._read_json(path)
        if not isinstance(data, list):
            raise StorageReadError(str(path), "el índice no es una lista")
        return [r for r in data if isinstance(r, dict)]

    def _save_index(self, collection: str, records: list[Record]) -> None:
        self._write_json_atomic(self._index_path(collection), records)

    @staticmethod
    def _read_result(
        collection: str, fn: Callable[[], Any]
    ) -> StorageResult[Any]:
        try:
            return StorageResult.ok(fn())
        except StorageReadError as exc:
            logger.warning(
                "JsonFileStore: lectura fallida",
                extra={"collection": collection, "reason": exc.reason},
            )
            return StorageResult.err(exc)

    # =========================================================
    # Lecturas (StorageResult)
    # =========================================================
    def find_all(self, collection: str) -> StorageResult[list[Record]]:
        return self._read_result(collection, lambda: self._load_index(collection))

    def find_by_id(self, collection: str, record_id: str) -> StorageResult[Optional[Record]]:
        def _lookup() -> Optional[Record]:
            path = self._record_path_or_none(collection, record_id)
            if path is not None and path.exists():
                data = self._read_json(path)
                if not isinstance(data, dict):
                    raise StorageReadError(str(path), "el registro no es un objeto")
                return data
            # Sin archivo dedicado: scan del índice.
            for record in self._load_index(collection):
                if _record_id(record) == record_id:
                    return record
            return None

        return self._read_result(collection, _lookup)

    def find(
        self, collection: str, criteria: Mapping[str, Any]
    ) -> StorageResult[list[Record]]:
        return self.find_all(collection).map(
            lambda records: [r for r in records if _matches(r, criteria)]
        )

    def count(
        self, collection: str, criteria: Optional[Mapping[str, Any]] = None
    ) -> StorageResult[int]:
        source = self.find(collection, criteria) if criteria else self.find_all(collection)
        return source.map(len)

    def paginate(
        self,
        collection: str,
        page: int = 1,
        limit: int = 10,
        criteria: Optional[Mapping[str, Any]] = None,
    ) -> StorageResult[FilePage]:
        """Slice [(page-1)*limit, page*limit) sobre find/find_all."""
        if page < 1:
            raise ValueError("page debe ser >= 1")
        if limit < 1:
            raise ValueError("limit debe ser >= 1")

        def _slice(records: list[Record]) -> FilePage:
            start = (page - 1) * limit
            total = len(records)
            return FilePage(
                data=records[start : start + limit],
                pagination=PaginationMeta(
                    current_page=page,
                    total_pages=math.ceil(total / limit),
                    total_items=total,
                    items_per_page=limit,
                ),
            )

        source = self.find(collection, criteria) if criteria else self.find_all(collection)
        return source.map(_slice)

    # =========================================================
    # Escrituras (propagan StorageError)
    # =========================================================
    def create(
        self,
        collection: str,
        data: Mapping[str, Any],
        *,
        unique_on: Iterable[str] = (),
        id_prefix: str = "",
    ) -> Record:
        """
        Inserta un registro nuevo.

        - Asigna _id, createdAt y updatedAt.
        - unique_on: campos de clave natural; si otro registro del índice
          coincide en todos, lanza DuplicateRecordError sin escribir nada.
        """
        unique_fields = tuple(unique_on)
        with self._lock:
            index = self._load_index(collection)

            if unique_fields:
                key = {field: data.get(field) for field in unique_fields}
                if any(_matches(r, key) for r in index):
                    raise DuplicateRecordError(collection, key)

            now = self._now_iso()
            record: Record = {
                **data,
                ID_FIELD: self._id_factory(id_prefix),
                CREATED_AT_FIELD: now,
                UPDATED_AT_FIELD: now,
            }

            self._write_json_atomic(self._record_path(collection, record[ID_FIELD]), record)
            index.append(record)
            self._save_index(collection, index)

        return dict(record)

    def update(
        self, collection: str, record_id: str, partial: Mapping[str, Any]
    ) -> Optional[Record]:
        """Merge de campos + bump de updatedAt. None si el id no existe."""
        with self._lock:
            existing = self.find_by_id(collection, record_id).unwrap()
            if existing is None:
                return None

            updated: Record = {
                **existing,
                **partial,
                ID_FIELD: _record_id(existing),
                UPDATED_AT_FIELD: self._now_iso(),
            }

            path = self._record_path_or_none(collection, record_id)
            if path is not None:
                self._write_json_atomic(path, updated)

            index = self._load_index(collection)
            for pos, record in enumerate(index):
                if _record_id(record) == record_id:
                    index[pos] = updated
                    break
            else:
                index.append(updated)
            self._save_index(collection, index)

        return dict(updated)

    def delete(self, collection: str, record_id: str) -> bool:
        """
        Borra archivo (si existe) + entrada del índice.

        True aunque el archivo individual ya no existiera.
        """
        with self._lock:
            path = self._record_path_or_none(collection, record_id)
            if path is not None:
                try:
                    path.unlink(missing_ok=True)
                except OSError as exc:
                    raise StorageWriteError(str(path), original_error=exc) from exc

            index = self._load_index(collection)
            remaining = [r for r in index if _record_id(r) != record_id]
            if len(remaining) != len(index):
                self._save_index(collection, remaining)
        return True

    def delete_where(self, collection: str, criteria: Mapping[str, Any]) -> int:
        """Borra todos los registros que matchean criteria; devuelve cuántos."""
        with self._lock:
            index = self._load_index(collection)
            doomed = [r for r in index if _matches(r, criteria)]
            if not doomed:
                return 0

            for record in doomed:
                rid = _record_id(record)
                path = (
                    self._record_path_or_none(collection, str(rid))
                    if rid is not None
                    else None
                )
                if path is None:
                    continue
                try:
                    path.unlink(missing_ok=True)
                except OSError as exc:
                    raise StorageWriteError(str(path), original_error=exc) from exc

            self._save_index(collection, [r for r in index if not _matches(r, criteria)])
        return len(doomed)

    def locked(self) -> threading.RLock:
        """
        Lock de escritura del store (reentrante).

        Lo usan repositorios que encadenan varias mutaciones que deben verse
        juntas (ej: add_item + bump de updated_at de la colección).
        """
        return self._lock
