"""
===============================================================================
CRC CARD — infrastructure/storage/errors.py
===============================================================================

Componente:
  Errores tipados del file store (JSON en disco)

Responsabilidades:
  - Definir un lenguaje común de fallas del almacenamiento local.
  - Evitar que OSError / JSONDecodeError se filtren a capas superiores.
  - Encajar en la taxonomía de crosscutting.exceptions:
      StorageError           -> OperationalError (falla opaca)
      DuplicateRecordError   -> ConflictError (clave natural repetida)

Colaboradores:
  - infrastructure/storage/file_store.py
  - infrastructure/storage/results.py (StorageResult transporta StorageReadError)
  - container.py (StorageConfigurationError en validación de arranque)
===============================================================================
"""

from __future__ import annotations

from ...crosscutting.exceptions import ConflictError, OperationalError


class StorageError(OperationalError):
    """Base de errores del subsistema de storage."""

    error_code: str = "STORAGE_ERROR"


class StorageReadError(StorageError):
    """No se pudo leer/parsear un archivo del store."""

    def __init__(self, path: str, reason: str, original_error: Exception | None = None):
        super().__init__(
            f"No se pudo leer el storage ({reason}). path={path}",
            original_error=original_error,
        )
        self.path = path
        self.reason = reason


class StorageWriteError(StorageError):
    """No se pudo escribir un archivo del store."""

    def __init__(self, path: str, original_error: Exception | None = None):
        super().__init__(
            f"No se pudo escribir el storage. path={path}",
            original_error=original_error,
        )
        self.path = path


class StorageConfigurationError(StorageError):
    """Configuración inválida o incompleta del backend de storage."""


class DuplicateRecordError(ConflictError):
    """Ya existe un registro con la misma clave natural."""

    def __init__(self, collection: str, key: dict):
        super().__init__(f"Registro duplicado en '{collection}': {key}")
        self.collection = collection
        self.key = key
