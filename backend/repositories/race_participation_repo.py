from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.orm import joinedload

from domain.results import ImportResult
from domain.types import ParticipationStatus
from models.race_participation import RaceParticipation
from structs.athletes import Athlete as AthleteStruct
from structs.athletes import RaceParticipation as RaceParticipationStruct
from .base import BaseRepository, plain

logger = logging.getLogger(__name__)

ATHLETE_TAKEN = "Athlete already assigned to this race"
BIB_TAKEN = "Bib number {bib_number} already assigned"

_NOT_REPORTABLE = (ParticipationStatus.DNS.value, ParticipationStatus.FINISHED.value)


class RaceParticipationRepository(BaseRepository[RaceParticipation]):
    """Repository for race participations, ordered by bib.

    Lists return the full participation struct (with the athlete embedded),
    so ``summary_class`` is the struct itself.
    """

    record_class = RaceParticipation
    struct_class = RaceParticipationStruct
    summary_class = RaceParticipationStruct
    ordering = ("race_id", "bib_number")

    returns_one = ("find_by_bib", "find_by_athlete")
    returns_many = ("for_race", "active", "by_status")

    def eager_load(self):
        return (joinedload(RaceParticipation.athlete),)

    async def find_by_bib(self, race_id: int, bib_number: int) -> Optional[RaceParticipationStruct]:
        return await self.find_by(race_id=race_id, bib_number=bib_number)

    async def find_by_athlete(
        self, race_id: int, athlete_id: int
    ) -> Optional[RaceParticipationStruct]:
        return await self.find_by(race_id=race_id, athlete_id=athlete_id)

    async def create_for_import(
        self, race_id: int, athlete_id: int, bib_number: int
    ) -> ImportResult[RaceParticipationStruct]:
        """Register an athlete under a bib, reporting conflicts as failure messages.

        The lookups are a fast path; the unique constraints on
        (race_id, athlete_id) and (race_id, bib_number) are authoritative and
        a violation is classified into the same messages.
        """
        conflict = await self._conflict(race_id, athlete_id, bib_number)
        if conflict:
            return ImportResult.failure(conflict)

        created = await self.create(
            {
                "race_id": race_id,
                "athlete_id": athlete_id,
                "bib_number": bib_number,
                "status": ParticipationStatus.REGISTERED,
                "active_in_heat": True,
            }
        )
        if created is not None:
            return ImportResult.success(created)

        conflict = await self._conflict(race_id, athlete_id, bib_number)
        if conflict:
            logger.info("Concurrent import conflict in race %s: %s", race_id, conflict)
            return ImportResult.failure(conflict)
        return ImportResult.failure("Participation could not be saved")

    async def for_race(self, race_id: int) -> List[RaceParticipationStruct]:
        return await self.where(race_id=race_id)

    async def active(self, race_id: int) -> List[RaceParticipationStruct]:
        """Participants still reportable: active in heat, not DNS, not finished."""
        stmt = (
            self.base_scope()
            .where(RaceParticipation.race_id == race_id)
            .where(RaceParticipation.active_in_heat.is_(True))
            .where(RaceParticipation.status.not_in(_NOT_REPORTABLE))
        )
        return await self._many(stmt)

    async def by_status(
        self, race_id: int, status: ParticipationStatus | str
    ) -> List[RaceParticipationStruct]:
        return await self.where(race_id=race_id, status=plain(status))

    async def _conflict(self, race_id: int, athlete_id: int, bib_number: int) -> Optional[str]:
        if await self.exists(race_id=race_id, athlete_id=athlete_id):
            return ATHLETE_TAKEN
        if await self.exists(race_id=race_id, bib_number=bib_number):
            return BIB_TAKEN.format(bib_number=bib_number)
        return None

    def build_struct(self, record: RaceParticipation) -> RaceParticipationStruct:
        athlete = record.athlete
        return RaceParticipationStruct(
            id=record.id,
            race_id=record.race_id,
            athlete_id=record.athlete_id,
            team_id=record.team_id,
            bib_number=record.bib_number,
            heat=record.heat,
            active_in_heat=record.active_in_heat,
            status=record.status,
            start_time=record.start_time,
            finish_time=record.finish_time,
            rank=record.rank,
            athlete=(
                AthleteStruct(
                    id=athlete.id,
                    first_name=athlete.first_name,
                    last_name=athlete.last_name,
                    country=athlete.country,
                    gender=athlete.gender,
                    license_number=athlete.license_number,
                    created_at=athlete.created_at,
                    updated_at=athlete.updated_at,
                )
                if athlete is not None
                else None
            ),
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    def build_summary(self, record: RaceParticipation) -> RaceParticipationStruct:
        return self.build_struct(record)
