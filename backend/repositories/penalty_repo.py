from __future__ import annotations

from typing import List, Optional

from models.penalty import Penalty
from structs.penalties import Penalty as PenaltyStruct
from structs.penalties import PenaltySummary
from .base import BaseRepository


class PenaltyRepository(BaseRepository[Penalty]):
    """Repository for the ISMF penalty catalogue, by category then number."""

    record_class = Penalty
    struct_class = PenaltyStruct
    summary_class = PenaltySummary
    ordering = ("category", "penalty_number")

    returns_one = ("find_by_number",)
    returns_many = ("by_category",)

    async def find_by_number(self, penalty_number: str) -> Optional[PenaltyStruct]:
        return await self.find_by(penalty_number=penalty_number)

    async def by_category(self, category: str) -> List[PenaltySummary]:
        return await self.where(category=category.strip().upper())

    def build_struct(self, record: Penalty) -> PenaltyStruct:
        return PenaltyStruct(
            id=record.id,
            category=record.category,
            category_title=record.category_title,
            category_description=record.category_description,
            penalty_number=record.penalty_number,
            name=record.name,
            team_individual=record.team_individual,
            vertical=record.vertical,
            sprint_relay=record.sprint_relay,
            notes=record.notes,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    def build_summary(self, record: Penalty) -> PenaltySummary:
        return PenaltySummary(
            id=record.id,
            category=record.category,
            category_title=record.category_title,
            penalty_number=record.penalty_number,
            name=record.name,
            team_individual=record.team_individual,
            vertical=record.vertical,
            sprint_relay=record.sprint_relay,
        )
