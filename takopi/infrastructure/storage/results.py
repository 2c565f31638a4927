"""
===============================================================================
CRC CARD — infrastructure/storage/results.py
===============================================================================

Clase:
  StorageResult[T] (resultado explícito de lecturas)

Responsabilidades:
  - Distinguir "Ok(valor)" de "Err(motivo)" en las lecturas del file store.
  - Que "colección vacía" y "disco roto" NO se vean iguales para el caller.
  - Permitir elegir: inspeccionar (is_ok / error) o propagar (unwrap()).

Colaboradores:
  - infrastructure/storage/file_store.py (productor)
  - infrastructure/repositories/file/* (consumidores: unwrap())
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from .errors import StorageReadError

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class StorageResult(Generic[T]):
    """
    Contrato:
      - error is None  => value es el resultado (puede ser [] / None legítimos)
      - error not None => la lectura falló; value no tiene significado
    """

    value: Optional[T] = None
    error: Optional[StorageReadError] = None

    @classmethod
    def ok(cls, value: T) -> "StorageResult[T]":
        return cls(value=value)

    @classmethod
    def err(cls, error: StorageReadError) -> "StorageResult[T]":
        return cls(error=error)

    @property
    def is_ok(self) -> bool:
        return self.error is None

    @property
    def reason(self) -> Optional[str]:
        return self.error.reason if self.error is not None else None

    def unwrap(self) -> T:
        """Devuelve el valor o relanza el StorageReadError transportado."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]

    def unwrap_or(self, default: T) -> T:
        return default if self.error is not None else self.value  # type: ignore[return-value]

    def map(self, fn) -> "StorageResult[U]":
        """Transforma el valor si es Ok; propaga Err sin tocarlo."""
        if self.error is not None:
            return StorageResult(error=self.error)
        return StorageResult(value=fn(self.value))
