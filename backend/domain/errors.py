"""Errors raised by the data-access layer.

Authorization denials are not errors here: policies answer ``False`` and the
caller decides what to do with it.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class NotFoundError(LookupError):
    """Raised by ``find_or_raise`` when no row matches the id."""

    def __init__(self, record_name: str, record_id: Any) -> None:
        super().__init__(f"{record_name} with id={record_id!r} not found")
        self.record_name = record_name
        self.record_id = record_id


class RecordInvalid(ValueError):
    """Raised by model validators when an attribute fails a presence or domain check."""

    def __init__(self, record_name: str, field: str, message: str) -> None:
        super().__init__(f"{record_name}.{field} {message}")
        self.record_name = record_name
        self.field = field
        self.message = message


class InvalidTransition(ValueError):
    """Raised when a lifecycle change is requested from a state that does not allow it."""

    def __init__(self, record_name: str, current: str, requested: str) -> None:
        super().__init__(f"{record_name} cannot move from {current!r} to {requested!r}")
        self.current = current
        self.requested = requested


class OperationFailed(ValueError):
    """A service-level operation was refused as a whole (bad input, missing race...)."""

    def __init__(self, message: str, errors: Optional[Dict[str, List[str]]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.errors = errors or {}
