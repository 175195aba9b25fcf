from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from domain.types import ColorCode, CourseSegment, SegmentPosition
from .base import Struct, titleize


def segment_label(segment: CourseSegment) -> str:
    """``transition_1to2`` -> ``"Transition → 1to2"``."""
    return " → ".join(part.capitalize() for part in segment.value.split("_"))


class _LocationFields(Struct):
    id: int
    name: str
    course_segment: CourseSegment
    segment_position: SegmentPosition
    display_order: int
    is_standard: bool
    color_code: Optional[ColorCode] = None
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @property
    def display_name_with_segment(self) -> str:
        return f"{self.name} ({titleize(self.course_segment.value)})"

    @property
    def is_custom(self) -> bool:
        return not self.is_standard

    @property
    def segment_display(self) -> str:
        return segment_label(self.course_segment)

    @property
    def position_display(self) -> str:
        return titleize(self.segment_position.value)


class RaceTypeLocationTemplate(_LocationFields):
    race_type_id: int


class RaceLocation(_LocationFields):
    race_id: int


@dataclass(frozen=True)
class RaceLocationSummary:
    """List row for location pickers and admin tables."""

    id: int
    race_id: int
    name: str
    course_segment: CourseSegment
    segment_position: SegmentPosition
    display_order: int
    color_code: Optional[ColorCode]
    is_standard: bool

    @property
    def segment_display(self) -> str:
        return segment_label(self.course_segment)
