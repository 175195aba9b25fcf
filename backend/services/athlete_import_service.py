"""Bulk import of a race start list: find-or-create athletes, then register bibs."""

from __future__ import annotations

import json
import logging
from typing import Any, List, Optional, Union

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator
from sqlalchemy.ext.asyncio import AsyncSession

from domain.errors import OperationFailed
from domain.types import Gender
from repositories.athlete_repo import AthleteRepository
from repositories.race_participation_repo import RaceParticipationRepository
from repositories.race_repo import RaceRepository
from structs.athletes import AthleteImportResult
from .validation import error_map

logger = logging.getLogger(__name__)

MAX_BIB_NUMBER = 9999


class AthleteRow(BaseModel):
    bib_number: int = Field(..., ge=1, le=MAX_BIB_NUMBER)
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    gender: Gender
    country: str = Field(..., pattern=r"^[A-Z]{3}$")
    license_number: Optional[str] = None

    @field_validator("first_name", "last_name")
    @classmethod
    def _strip(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must be filled")
        return value


class AthleteImportRequest(BaseModel):
    race_id: int
    athletes: List[AthleteRow] = Field(..., min_length=1)

    @model_validator(mode="after")
    def _unique_bibs(self) -> "AthleteImportRequest":
        seen = set()
        duplicates = []
        for row in self.athletes:
            if row.bib_number in seen and row.bib_number not in duplicates:
                duplicates.append(row.bib_number)
            seen.add(row.bib_number)
        if duplicates:
            raise ValueError(
                "duplicate bib numbers found: " + ", ".join(str(bib) for bib in duplicates)
            )
        return self


def parse_rows(athletes: Union[str, bytes, List[Any]]) -> List[Any]:
    if isinstance(athletes, (str, bytes)):
        try:
            return json.loads(athletes)
        except json.JSONDecodeError as exc:
            raise OperationFailed(f"Invalid JSON format: {exc.msg}") from exc
    return athletes


async def bulk_import(
    session: AsyncSession,
    race_id: int,
    athletes: Union[str, bytes, List[Any]],
) -> AthleteImportResult:
    """Import athletes into a race.

    The whole request is validated first (OperationFailed on bad input or an
    unknown race); afterwards each row succeeds or fails on its own and
    failures are reported as ``"Bib N (First Last): reason"``.
    """
    try:
        request = AthleteImportRequest(race_id=race_id, athletes=parse_rows(athletes))
    except ValidationError as exc:
        raise OperationFailed("Invalid athlete list", error_map(exc)) from exc

    if not await RaceRepository(session).exists(id=request.race_id):
        raise OperationFailed("race not found", {"race_id": ["race not found"]})

    athlete_repo = AthleteRepository(session)
    participation_repo = RaceParticipationRepository(session)

    new_count = 0
    existing_count = 0
    created = 0
    errors: List[str] = []

    for row in request.athletes:
        athlete, is_new = await athlete_repo.find_or_create_by(
            first_name=row.first_name,
            last_name=row.last_name,
            gender=row.gender,
            country=row.country,
            license_number=row.license_number,
        )
        if athlete is None:
            errors.append(_row_error(row, "Athlete could not be saved"))
            continue

        result = await participation_repo.create_for_import(
            race_id=request.race_id, athlete_id=athlete.id, bib_number=row.bib_number
        )
        if not result.ok:
            errors.append(_row_error(row, result.error))
            continue

        created += 1
        if is_new:
            new_count += 1
        else:
            existing_count += 1

    logger.info(
        "Imported %d/%d athletes into race %s (%d errors)",
        created,
        len(request.athletes),
        request.race_id,
        len(errors),
    )
    return AthleteImportResult(
        total_count=created,
        new_athletes_count=new_count,
        existing_athletes_count=existing_count,
        participations_created=created,
        errors=errors,
    )


def _row_error(row: AthleteRow, reason: Optional[str]) -> str:
    return f"Bib {row.bib_number} ({row.first_name} {row.last_name}): {reason}"
