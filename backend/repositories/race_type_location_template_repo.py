from __future__ import annotations

from typing import List

from models.locations import RaceTypeLocationTemplate
from structs.locations import RaceTypeLocationTemplate as TemplateStruct
from .base import BaseRepository


class RaceTypeLocationTemplateRepository(BaseRepository[RaceTypeLocationTemplate]):
    """Repository for per-race-type location templates.

    Templates are small reference rows; lists return the full struct.
    """

    record_class = RaceTypeLocationTemplate
    struct_class = TemplateStruct
    summary_class = TemplateStruct
    ordering = ("race_type_id", "display_order")

    returns_many = ("for_race_type", "standard", "custom")

    async def for_race_type(self, race_type_id: int) -> List[TemplateStruct]:
        return await self.where(race_type_id=race_type_id)

    async def standard(self, race_type_id: int) -> List[TemplateStruct]:
        return await self.where(race_type_id=race_type_id, is_standard=True)

    async def custom(self, race_type_id: int) -> List[TemplateStruct]:
        return await self.where(race_type_id=race_type_id, is_standard=False)

    def build_struct(self, record: RaceTypeLocationTemplate) -> TemplateStruct:
        return TemplateStruct(
            id=record.id,
            race_type_id=record.race_type_id,
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

    def build_summary(self, record: RaceTypeLocationTemplate) -> TemplateStruct:
        return self.build_struct(record)
