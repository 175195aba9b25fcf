from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, List, Mapping, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import joinedload

from domain.clock import today as current_day
from domain.clock import utcnow
from domain.types import GenderCategory, RaceStatus
from models.competition import Competition
from models.race import Race
from structs.races import Race as RaceStruct
from structs.races import RaceSummary
from .base import BaseRepository

logger = logging.getLogger(__name__)


class RaceRepository(BaseRepository[Race]):
    """Repository for races, with race type and competition eagerly joined.

    Status changes are monotonic (see ``RaceStatus.can_transition_to``);
    an update requesting an invalid transition is rejected with None.
    """

    record_class = Race
    struct_class = RaceStruct
    summary_class = RaceSummary
    ordering = ("competition_id", "position")

    returns_one = ("start", "complete", "cancel")
    returns_many = (
        "for_competition",
        "by_race_type",
        "scheduled",
        "in_progress",
        "completed",
        "auto_startable",
        "auto_completable",
    )

    def eager_load(self):
        return (joinedload(Race.race_type), joinedload(Race.competition))

    async def for_competition(self, competition_id: int) -> List[RaceSummary]:
        stmt = (
            self.base_scope()
            .where(Race.competition_id == competition_id)
            .order_by(None)
            .order_by(Race.race_type_id, Race.position, Race.scheduled_at, Race.id)
        )
        return await self._many(stmt)

    async def by_race_type(self, competition_id: int, race_type_id: int) -> List[RaceSummary]:
        stmt = (
            self.base_scope()
            .where(Race.competition_id == competition_id)
            .where(Race.race_type_id == race_type_id)
            .order_by(None)
            .order_by(Race.position, Race.scheduled_at, Race.id)
        )
        return await self._many(stmt)

    async def scheduled(self) -> List[RaceSummary]:
        return await self._with_status(RaceStatus.SCHEDULED, Race.scheduled_at.asc())

    async def in_progress(self) -> List[RaceSummary]:
        return await self._with_status(RaceStatus.IN_PROGRESS, Race.scheduled_at.asc())

    async def completed(self) -> List[RaceSummary]:
        return await self._with_status(RaceStatus.COMPLETED, Race.scheduled_at.desc())

    async def auto_startable(self, now: Optional[datetime] = None) -> List[RaceSummary]:
        """Scheduled races whose scheduled_at is at or before ``now``."""
        stmt = (
            self.base_scope()
            .where(Race.status == RaceStatus.SCHEDULED.value)
            .where(Race.scheduled_at.is_not(None))
            .where(Race.scheduled_at <= (now or utcnow()))
        )
        return await self._many(stmt)

    async def auto_completable(self, today: Optional[date] = None) -> List[RaceSummary]:
        """In-progress races whose competition ended strictly before ``today``."""
        stmt = (
            self.base_scope()
            .join(Race.competition)
            .where(Race.status == RaceStatus.IN_PROGRESS.value)
            .where(Competition.end_date < (today or current_day()))
        )
        return await self._many(stmt)

    async def start(self, id: int) -> Optional[RaceStruct]:
        return await self.update(id, {"status": RaceStatus.IN_PROGRESS})

    async def complete(self, id: int) -> Optional[RaceStruct]:
        return await self.update(id, {"status": RaceStatus.COMPLETED})

    async def cancel(self, id: int) -> Optional[RaceStruct]:
        return await self.update(id, {"status": RaceStatus.CANCELLED})

    async def next_position(self, competition_id: int) -> int:
        result = await self.session.execute(
            select(func.max(Race.position)).where(Race.competition_id == competition_id)
        )
        return (result.scalar_one() or 0) + 1

    async def create(self, attrs: Mapping[str, Any]) -> Optional[RaceStruct]:
        """Create a race; a missing position is appended after the competition's last."""
        prepared = dict(attrs)
        if prepared.get("position") is None and prepared.get("competition_id") is not None:
            prepared["position"] = await self.next_position(prepared["competition_id"])
        return await super().create(prepared)

    async def _with_status(self, status: RaceStatus, order: Any) -> List[RaceSummary]:
        stmt = (
            self.base_scope()
            .where(Race.status == status.value)
            .order_by(None)
            .order_by(order, Race.id)
        )
        return await self._many(stmt)

    def build_struct(self, record: Race) -> RaceStruct:
        return RaceStruct(
            id=record.id,
            competition_id=record.competition_id,
            race_type_id=record.race_type_id,
            name=record.name,
            stage_type=record.stage_type,
            stage_name=record.stage_name,
            heat_number=record.heat_number,
            position=record.position,
            status=record.status,
            scheduled_at=record.scheduled_at,
            gender_category=record.gender_category,
            race_type_name=record.race_type.name if record.race_type else None,
            competition_name=record.competition.name if record.competition else None,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    def build_summary(self, record: Race) -> RaceSummary:
        return RaceSummary(
            id=record.id,
            competition_id=record.competition_id,
            race_type_id=record.race_type_id,
            name=record.name,
            stage_type=record.stage_type,
            heat_number=record.heat_number,
            position=record.position,
            status=RaceStatus(record.status),
            scheduled_at=record.scheduled_at,
            gender_category=GenderCategory(record.gender_category),
            race_type_name=record.race_type.name if record.race_type else None,
        )
