from __future__ import annotations

from typing import Optional

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column, validates

from domain.types import Gender
from .base import Base, IdTimestampMixin, blank_to_none, require_member, require_present


class Athlete(IdTimestampMixin, Base):
    """Competitor, deduplicated on name, gender and country during imports."""

    __tablename__ = "athletes"

    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    country: Mapped[str] = mapped_column(String(3), nullable=False)
    gender: Mapped[str] = mapped_column(String(1), nullable=False)
    # NULLs never collide under a UNIQUE index.
    license_number: Mapped[Optional[str]] = mapped_column(
        String(64), nullable=True, unique=True
    )

    __table_args__ = (
        Index(
            "ix_athletes_identity", "first_name", "last_name", "gender", "country"
        ),
        Index("ix_athletes_country", "country"),
    )

    @validates("first_name", "last_name")
    def _validate_names(self, key: str, value: str) -> str:
        return require_present(self, key, value).strip()

    @validates("country")
    def _normalize_country(self, key: str, value: str) -> str:
        return require_present(self, key, value).strip().upper()

    @validates("gender")
    def _validate_gender(self, key: str, value: str) -> str:
        return require_member(self, key, value, Gender)

    @validates("license_number")
    def _normalize_license(self, key: str, value: Optional[str]) -> Optional[str]:
        return blank_to_none(value)
