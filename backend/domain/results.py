from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

V = TypeVar("V")


@dataclass(frozen=True)
class ImportResult(Generic[V]):
    """Success value or failure message for one row of a bulk operation."""

    value: Optional[V] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, value: V) -> "ImportResult[V]":
        return cls(value=value)

    @classmethod
    def failure(cls, message: str) -> "ImportResult[V]":
        return cls(error=message)

    @property
    def ok(self) -> bool:
        return self.error is None
