from __future__ import annotations

from typing import Optional

from models.race_type import RaceType
from structs.races import RaceType as RaceTypeStruct
from structs.races import RaceTypeSummary
from .base import BaseRepository


class RaceTypeRepository(BaseRepository[RaceType]):
    """Repository for race type reference data, alphabetical."""

    record_class = RaceType
    struct_class = RaceTypeStruct
    summary_class = RaceTypeSummary
    ordering = ("name",)

    returns_one = ("find_by_name",)

    async def find_by_name(self, name: str) -> Optional[RaceTypeStruct]:
        return await self.find_by(name=name)

    def build_struct(self, record: RaceType) -> RaceTypeStruct:
        return RaceTypeStruct(
            id=record.id,
            name=record.name,
            description=record.description,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    def build_summary(self, record: RaceType) -> RaceTypeSummary:
        return RaceTypeSummary(id=record.id, name=record.name, description=record.description)
