from __future__ import annotations

from typing import Optional

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, validates

from domain.types import ColorCode, CourseSegment, SegmentPosition
from .base import Base, IdTimestampMixin, blank_to_none, require_member, require_present


class _LocationColumns(IdTimestampMixin):
    """Columns shared by per-race-type templates and per-race locations."""

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    course_segment: Mapped[str] = mapped_column(String(32), nullable=False)
    segment_position: Mapped[str] = mapped_column(String(16), nullable=False)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_standard: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    color_code: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    @validates("name")
    def _validate_name(self, key: str, value: str) -> str:
        return require_present(self, key, value)

    @validates("course_segment")
    def _validate_segment(self, key: str, value: str) -> str:
        return require_member(self, key, value, CourseSegment)

    @validates("segment_position")
    def _validate_position(self, key: str, value: str) -> str:
        return require_member(self, key, value, SegmentPosition)

    @validates("color_code")
    def _validate_color(self, key: str, value: Optional[str]) -> Optional[str]:
        value = blank_to_none(value)
        if value is None:
            return None
        return require_member(self, key, value, ColorCode)

    @validates("description")
    def _normalize_description(self, key: str, value: Optional[str]) -> Optional[str]:
        return blank_to_none(value)


class RaceTypeLocationTemplate(_LocationColumns, Base):
    """Default camera/observer location for every race of a race type."""

    __tablename__ = "race_type_location_templates"

    race_type_id: Mapped[int] = mapped_column(
        ForeignKey("race_types.id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (
        Index("ix_location_templates_race_type_order", "race_type_id", "display_order"),
    )


class RaceLocation(_LocationColumns, Base):
    """Camera/observer location of one race, copied from a template or custom."""

    __tablename__ = "race_locations"

    race_id: Mapped[int] = mapped_column(
        ForeignKey("races.id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (
        Index("ix_race_locations_race_order", "race_id", "display_order"),
    )
