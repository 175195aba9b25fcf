from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import DateTime, Integer
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from domain.clock import utcnow
from domain.errors import RecordInvalid


class Base(DeclarativeBase):
    """Canonical SQLAlchemy base for the race logger schema."""

    pass


class IdTimestampMixin:
    """Integer primary key plus created_at/updated_at maintained by the ORM."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow, onupdate=utcnow
    )


def require_present(record: Any, key: str, value: Any) -> Any:
    """Validator helper: reject None and blank strings."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise RecordInvalid(type(record).__name__, key, "can't be blank")
    return value


def require_member(record: Any, key: str, value: Any, enum_cls: Any) -> str:
    """Validator helper: coerce to the enum's stored string value or reject."""
    try:
        return enum_cls(value).value
    except ValueError:
        raise RecordInvalid(
            type(record).__name__, key, f"is not included in the list ({value!r})"
        ) from None


def blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value
