"""Race creation: validate input, derive stage name and position, seed locations."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from domain.errors import OperationFailed
from domain.types import GenderCategory, RaceStatus, StageType
from repositories.competition_repo import CompetitionRepository
from repositories.race_location_repo import RaceLocationRepository
from repositories.race_repo import RaceRepository
from repositories.race_type_repo import RaceTypeRepository
from structs.races import Race
from .validation import error_map

logger = logging.getLogger(__name__)


class RaceCreate(BaseModel):
    competition_id: int
    race_type_id: int
    name: str = Field(..., min_length=3, max_length=255)
    stage_type: StageType
    gender_category: GenderCategory
    heat_number: Optional[int] = Field(default=None, ge=1, le=10)
    scheduled_at: Optional[datetime] = None


def stage_name_for(stage_type: StageType, heat_number: Optional[int]) -> str:
    return f"{stage_type.value} {heat_number}" if heat_number else stage_type.value


async def create_race(session: AsyncSession, params: Mapping[str, Any]) -> Race:
    """Create a scheduled race and copy its race type's location templates.

    A race type without templates still gets its race; the missing locations
    are logged.
    """
    try:
        data = RaceCreate.model_validate(dict(params))
    except ValidationError as exc:
        raise OperationFailed("Invalid race", error_map(exc)) from exc

    errors = {}
    if not await CompetitionRepository(session).exists(id=data.competition_id):
        errors["competition_id"] = ["competition not found"]
    if not await RaceTypeRepository(session).exists(id=data.race_type_id):
        errors["race_type_id"] = ["race type not found"]
    if errors:
        raise OperationFailed("Invalid race", errors)

    race_repo = RaceRepository(session)
    race = await race_repo.create(
        {
            **data.model_dump(),
            "stage_name": stage_name_for(data.stage_type, data.heat_number),
            "status": RaceStatus.SCHEDULED,
        }
    )
    if race is None:
        raise OperationFailed("Race could not be saved")

    populated = await RaceLocationRepository(session).populate_from_templates(
        race_id=race.id, race_type_id=race.race_type_id
    )
    if not populated.ok:
        logger.warning("Failed to populate locations for race %s: %s", race.id, populated.error)
    return race
