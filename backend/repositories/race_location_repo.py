from __future__ import annotations

import logging
from typing import List

from sqlalchemy import func, select

from domain.results import ImportResult
from domain.types import ColorCode, CourseSegment, SegmentPosition
from models.locations import RaceLocation, RaceTypeLocationTemplate
from structs.locations import RaceLocation as RaceLocationStruct
from structs.locations import RaceLocationSummary
from .base import WRITE_REJECTIONS, BaseRepository, plain

logger = logging.getLogger(__name__)

_COPIED_COLUMNS = (
    "name",
    "course_segment",
    "segment_position",
    "display_order",
    "is_standard",
    "color_code",
    "description",
)


class RaceLocationRepository(BaseRepository[RaceLocation]):
    """Repository for the camera/observer locations of a race."""

    record_class = RaceLocation
    struct_class = RaceLocationStruct
    summary_class = RaceLocationSummary
    ordering = ("race_id", "display_order")

    returns_many = ("for_race", "for_touch_selector", "standard", "custom", "by_segment")

    async def for_race(self, race_id: int) -> List[RaceLocationSummary]:
        return await self.where(race_id=race_id)

    async def for_touch_selector(self, race_id: int) -> List[RaceLocationSummary]:
        """Locations shown as buttons on the touch reporting screen."""
        return await self.where(race_id=race_id)

    async def standard(self, race_id: int) -> List[RaceLocationSummary]:
        return await self.where(race_id=race_id, is_standard=True)

    async def custom(self, race_id: int) -> List[RaceLocationSummary]:
        return await self.where(race_id=race_id, is_standard=False)

    async def by_segment(
        self, race_id: int, course_segment: CourseSegment | str
    ) -> List[RaceLocationSummary]:
        return await self.where(race_id=race_id, course_segment=plain(course_segment))

    async def max_display_order(self, race_id: int) -> int:
        result = await self.session.execute(
            select(func.max(RaceLocation.display_order)).where(RaceLocation.race_id == race_id)
        )
        return result.scalar_one() or 0

    async def populate_from_templates(
        self, race_id: int, race_type_id: int
    ) -> ImportResult[List[RaceLocationStruct]]:
        """Copy every template of the race type into the race, all or nothing."""
        result = await self.session.execute(
            select(RaceTypeLocationTemplate)
            .where(RaceTypeLocationTemplate.race_type_id == race_type_id)
            .order_by(RaceTypeLocationTemplate.display_order, RaceTypeLocationTemplate.id)
        )
        templates = list(result.scalars().all())
        if not templates:
            return ImportResult.failure(
                f"No location templates found for race type {race_type_id}"
            )

        records: List[RaceLocation] = []
        try:
            async with self.session.begin_nested():
                for template in templates:
                    record = RaceLocation(
                        race_id=race_id,
                        **{column: getattr(template, column) for column in _COPIED_COLUMNS},
                    )
                    self.session.add(record)
                    records.append(record)
        except WRITE_REJECTIONS as exc:
            logger.warning("Populating locations for race %s failed: %s", race_id, exc)
            return ImportResult.failure(str(exc))

        logger.info("Populated %d locations for race %s", len(records), race_id)
        return ImportResult.success([self.build_struct(record) for record in records])

    def build_struct(self, record: RaceLocation) -> RaceLocationStruct:
        return RaceLocationStruct(
            id=record.id,
            race_id=record.race_id,
            name=record.name,
            course_segment=record.course_segment,
            segment_position=record.segment_position,
            display_order=record.display_order,
            is_standard=record.is_standard,
            color_code=record.color_code,
            description=record.description,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    def build_summary(self, record: RaceLocation) -> RaceLocationSummary:
        return RaceLocationSummary(
            id=record.id,
            race_id=record.race_id,
            name=record.name,
            course_segment=CourseSegment(record.course_segment),
            segment_position=SegmentPosition(record.segment_position),
            display_order=record.display_order,
            color_code=ColorCode(record.color_code) if record.color_code else None,
            is_standard=record.is_standard,
        )
