"""Seed helpers shared by repository and service tests."""

from __future__ import annotations

from datetime import date, datetime
from itertools import count
from typing import Any

from domain.types import GenderCategory, RoleName, StageType
from repositories import (
    AthleteRepository,
    CompetitionRepository,
    RaceParticipationRepository,
    RaceRepository,
    RaceTypeRepository,
    RoleRepository,
    UserRepository,
)

_seq = count(1)


async def make_role(session, name: RoleName = RoleName.VAR_OPERATOR):
    existing = await RoleRepository(session).find_by_name(name)
    return existing or await RoleRepository(session).create({"name": name})


async def make_user(session, role: RoleName | None = None, **attrs: Any):
    if role is not None:
        await make_role(session, role)
        attrs.setdefault("role_name", role)
    attrs.setdefault("email_address", f"user{next(_seq)}@example.com")
    attrs.setdefault("name", "Test User")
    return await UserRepository(session).create(attrs)


async def make_competition(session, **attrs: Any):
    attrs.setdefault("name", f"World Cup {next(_seq)}")
    attrs.setdefault("city", "Verbier")
    attrs.setdefault("place", "Place Centrale")
    attrs.setdefault("country", "SUI")
    attrs.setdefault("description", "Season opener")
    attrs.setdefault("start_date", date(2025, 1, 10))
    attrs.setdefault("end_date", date(2025, 1, 12))
    attrs.setdefault("webpage_url", "https://example.com/race")
    return await CompetitionRepository(session).create(attrs)


async def make_race_type(session, name: str = "Sprint"):
    existing = await RaceTypeRepository(session).find_by_name(name)
    return existing or await RaceTypeRepository(session).create({"name": name})


async def make_race(session, competition=None, race_type=None, **attrs: Any):
    competition = competition or await make_competition(session)
    race_type = race_type or await make_race_type(session)
    attrs.setdefault("name", "Sprint Men Qualification")
    attrs.setdefault("stage_type", StageType.QUALIFICATION)
    attrs.setdefault("stage_name", "Qualification")
    attrs.setdefault("gender_category", GenderCategory.MEN)
    attrs.setdefault("scheduled_at", datetime(2025, 1, 10, 9, 0))
    return await RaceRepository(session).create(
        {"competition_id": competition.id, "race_type_id": race_type.id, **attrs}
    )


async def make_athlete(session, first_name: str = "Anna", last_name: str = "Keller", **attrs: Any):
    attrs.setdefault("country", "SUI")
    attrs.setdefault("gender", "M")
    return await AthleteRepository(session).create(
        {"first_name": first_name, "last_name": last_name, **attrs}
    )


async def register(session, race, athlete, bib_number: int):
    result = await RaceParticipationRepository(session).create_for_import(
        race_id=race.id, athlete_id=athlete.id, bib_number=bib_number
    )
    assert result.ok, result.error
    return result.value
