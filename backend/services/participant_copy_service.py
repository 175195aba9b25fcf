"""Copy a start list from one race to another of the same gender category."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from domain.errors import OperationFailed
from domain.types import ParticipationStatus
from repositories.race_participation_repo import RaceParticipationRepository
from repositories.race_repo import RaceRepository
from structs.athletes import RaceParticipation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CopyResult:
    copied_count: int
    skipped_count: int
    total_count: int
    errors: List[str] = field(default_factory=list)


async def copy_participants(
    session: AsyncSession, target_race_id: int, source_race_id: int
) -> CopyResult:
    """Register every source participant in the target race under the same bib.

    Participants whose bib or athlete is already in the target race are
    skipped. Raises OperationFailed when the races are unknown, their gender
    categories differ, or nothing could be copied.
    """
    race_repo = RaceRepository(session)
    participation_repo = RaceParticipationRepository(session)

    target = await race_repo.find(target_race_id)
    source = await race_repo.find(source_race_id)
    if target is None:
        raise OperationFailed("Target race not found")
    if source is None:
        raise OperationFailed("Source race not found")
    if target.gender_category != source.gender_category:
        raise OperationFailed(
            "Cannot copy participants: gender categories must match "
            f"(source: {source.gender_category_display}, target: {target.gender_category_display})"
        )

    participants = await participation_repo.for_race(source_race_id)
    if not participants:
        raise OperationFailed("Source race has no participants to copy")

    copied = 0
    errors: List[str] = []
    for participant in participants:
        reason = await _copy_one(participation_repo, target_race_id, participant)
        if reason is None:
            copied += 1
        else:
            errors.append(f"Bib {participant.bib_display}: {reason}")

    if copied == 0:
        raise OperationFailed("Failed to copy any participants: " + ", ".join(errors))

    logger.info(
        "Copied %d of %d participants from race %s to race %s",
        copied,
        len(participants),
        source_race_id,
        target_race_id,
    )
    return CopyResult(
        copied_count=copied,
        skipped_count=len(participants) - copied,
        total_count=len(participants),
        errors=errors,
    )


async def _copy_one(
    repo: RaceParticipationRepository, target_race_id: int, participant: RaceParticipation
):
    if await repo.exists(race_id=target_race_id, bib_number=participant.bib_number):
        return "Bib number already taken"
    if await repo.exists(race_id=target_race_id, athlete_id=participant.athlete_id):
        return "Athlete already in race"
    created = await repo.create(
        {
            "race_id": target_race_id,
            "athlete_id": participant.athlete_id,
            "bib_number": participant.bib_number,
            "status": ParticipationStatus.REGISTERED,
            "active_in_heat": True,
        }
    )
    return None if created is not None else "Participation could not be saved"
