"""Behaviour every repository shares: missing ids, return shapes, create/find round-trips."""

from __future__ import annotations

import pytest

import repositories
from domain.errors import NotFoundError
from domain.types import CourseSegment, RoleName, SegmentPosition
from repositories import (
    AthleteRepository,
    CompetitionRepository,
    IncidentRepository,
    MagicLinkRepository,
    PenaltyRepository,
    RaceLocationRepository,
    RaceParticipationRepository,
    RaceRepository,
    RaceTypeLocationTemplateRepository,
    RaceTypeRepository,
    ReportRepository,
    RoleRepository,
    SessionRepository,
    UserRepository,
)

from factories import (
    make_athlete,
    make_competition,
    make_race,
    make_race_type,
    make_role,
    make_user,
    register,
)

MISSING_ID = 987654


async def _session_row(session):
    user = await make_user(session)
    return await SessionRepository(session).create_for_user(user.id, "10.0.0.1", "pytest")


async def _magic_link(session):
    user = await make_user(session)
    return await MagicLinkRepository(session).create_for_user(user.id)


async def _participation(session):
    race = await make_race(session)
    athlete = await make_athlete(session)
    return await register(session, race, athlete, bib_number=7)


async def _penalty(session):
    return await PenaltyRepository(session).create(
        {
            "category": "c",
            "category_title": "Course",
            "penalty_number": "C.2",
            "name": "Missed gate",
            "team_individual": "3 minutes",
            "vertical": "3 minutes",
            "sprint_relay": "1 minute",
        }
    )


async def _race_location(session):
    race = await make_race(session)
    return await RaceLocationRepository(session).create(
        {
            "race_id": race.id,
            "name": "Start",
            "course_segment": CourseSegment.UPHILL1,
            "segment_position": SegmentPosition.BOTTOM,
            "display_order": 1,
        }
    )


async def _template(session):
    race_type = await make_race_type(session)
    return await RaceTypeLocationTemplateRepository(session).create(
        {
            "race_type_id": race_type.id,
            "name": "Finish",
            "course_segment": CourseSegment.UPHILL1,
            "segment_position": SegmentPosition.TOP,
            "display_order": 1,
        }
    )


async def _incident(session):
    race = await make_race(session)
    return await IncidentRepository(session).create({"race_id": race.id})


async def _report(session):
    race = await make_race(session)
    user = await make_user(session, RoleName.NATIONAL_REFEREE)
    return await ReportRepository(session).create(
        {"race_id": race.id, "user_id": user.id, "bib_number": 21, "description": "Dropped a pole"}
    )


BUILDERS = {
    AthleteRepository: make_athlete,
    CompetitionRepository: make_competition,
    IncidentRepository: _incident,
    MagicLinkRepository: _magic_link,
    PenaltyRepository: _penalty,
    RaceLocationRepository: _race_location,
    RaceParticipationRepository: _participation,
    RaceRepository: make_race,
    RaceTypeLocationTemplateRepository: _template,
    RaceTypeRepository: make_race_type,
    ReportRepository: _report,
    RoleRepository: make_role,
    SessionRepository: _session_row,
    UserRepository: make_user,
}

ENTITY_REPOSITORIES = [
    getattr(repositories, name) for name in repositories.__all__ if name != "BaseRepository"
]


def test_every_entity_repository_has_a_builder():
    assert set(BUILDERS) == set(ENTITY_REPOSITORIES)


@pytest.mark.asyncio
@pytest.mark.parametrize("repo_class", ENTITY_REPOSITORIES, ids=lambda cls: cls.__name__)
async def test_missing_id_is_none_and_raising_lookup_fails(session, repo_class):
    repo = repo_class(session)
    assert await repo.find(MISSING_ID) is None
    assert await repo.find(None) is None
    with pytest.raises(NotFoundError):
        await repo.find_or_raise(MISSING_ID)
    assert await repo.update(MISSING_ID, {}) is None
    assert await repo.delete(MISSING_ID) is None
    assert await repo.many([MISSING_ID]) == []


@pytest.mark.asyncio
@pytest.mark.parametrize("repo_class", ENTITY_REPOSITORIES, ids=lambda cls: cls.__name__)
async def test_single_reads_are_full_structs_and_lists_are_summaries(session, repo_class):
    created = await BUILDERS[repo_class](session)
    repo = repo_class(session)

    assert type(created) is repo.struct_class
    assert type(await repo.find(created.id)) is repo.struct_class
    assert type(await repo.first()) is repo.struct_class
    for rows in (await repo.all(), await repo.where(id=created.id), await repo.many([created.id])):
        assert rows
        assert all(type(row) is repo.summary_class for row in rows)


@pytest.mark.asyncio
@pytest.mark.parametrize("repo_class", ENTITY_REPOSITORIES, ids=lambda cls: cls.__name__)
async def test_created_struct_equals_found_struct(session, repo_class):
    created = await BUILDERS[repo_class](session)
    assert created is not None
    assert await repo_class(session).find(created.id) == created
