from __future__ import annotations

from typing import Optional

from sqlalchemy import Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, validates

from domain.errors import RecordInvalid
from .base import Base, IdTimestampMixin, blank_to_none, require_present


class Penalty(IdTimestampMixin, Base):
    """ISMF rule book entry; severity is stored per race-type family."""

    __tablename__ = "penalties"

    category: Mapped[str] = mapped_column(String(1), nullable=False)
    category_title: Mapped[str] = mapped_column(String(255), nullable=False)
    category_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    penalty_number: Mapped[str] = mapped_column(String(16), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    team_individual: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    vertical: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    sprint_relay: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    __table_args__ = (Index("ix_penalties_category", "category"),)

    @validates("category")
    def _validate_category(self, key: str, value: str) -> str:
        value = require_present(self, key, value).strip().upper()
        if len(value) != 1 or value not in "ABCDEF":
            raise RecordInvalid("Penalty", key, "must be a letter A-F")
        return value

    @validates("category_title", "penalty_number", "name")
    def _validate_required(self, key: str, value: str) -> str:
        return require_present(self, key, value)

    @validates("team_individual", "vertical", "sprint_relay", "notes", "category_description")
    def _normalize_optional(self, key: str, value: Optional[str]) -> Optional[str]:
        return blank_to_none(value)
