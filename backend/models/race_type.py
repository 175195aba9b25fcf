from __future__ import annotations

from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, validates

from .base import Base, IdTimestampMixin, require_present


class RaceType(IdTimestampMixin, Base):
    """Reference data: Individual, Team, Sprint, Vertical, Mixed Relay."""

    __tablename__ = "race_types"

    name: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    @validates("name")
    def _validate_name(self, key: str, value: str) -> str:
        return require_present(self, key, value)
