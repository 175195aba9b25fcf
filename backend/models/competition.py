from __future__ import annotations

from datetime import date
from typing import Optional

from sqlalchemy import CheckConstraint, Date, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, validates

from .base import Base, IdTimestampMixin, blank_to_none, require_present


class Competition(IdTimestampMixin, Base):
    """Multi-day ski mountaineering event hosting races."""

    __tablename__ = "competitions"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(255), nullable=False)
    place: Mapped[str] = mapped_column(String(255), nullable=False)
    country: Mapped[str] = mapped_column(String(3), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    webpage_url: Mapped[str] = mapped_column(String(512), nullable=False)
    logo_url: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)

    __table_args__ = (
        CheckConstraint("end_date >= start_date", name="ck_competitions_date_order"),
        Index("ix_competitions_start_date", "start_date"),
        Index("ix_competitions_country", "country"),
    )

    @validates("name", "city", "place", "description", "webpage_url", "start_date", "end_date")
    def _validate_required(self, key, value):
        return require_present(self, key, value)

    @validates("country")
    def _normalize_country(self, key: str, value: str) -> str:
        return require_present(self, key, value).strip().upper()

    @validates("logo_url")
    def _normalize_logo(self, key: str, value: Optional[str]) -> Optional[str]:
        return blank_to_none(value)
