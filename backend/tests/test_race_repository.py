"""Races: positions, status lifecycle, scheduler sweep queries."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from domain.types import GenderCategory, RaceStatus, StageType
from repositories import CompetitionRepository, RaceParticipationRepository, RaceRepository
from structs.races import Race, RaceSummary

from factories import make_athlete, make_competition, make_race, make_race_type, register


@pytest.mark.asyncio
async def test_create_assigns_next_position_per_competition(session):
    competition = await make_competition(session)
    other = await make_competition(session)

    first = await make_race(session, competition)
    second = await make_race(session, competition, name="Sprint Women Qualification",
                             gender_category=GenderCategory.WOMEN)
    elsewhere = await make_race(session, other)

    assert (first.position, second.position, elsewhere.position) == (1, 2, 1)
    assert await RaceRepository(session).next_position(competition.id) == 3


@pytest.mark.asyncio
async def test_full_struct_carries_joined_names(session):
    competition = await make_competition(session, name="Verbier Cup")
    race_type = await make_race_type(session, "Vertical")
    race = await make_race(session, competition, race_type, stage_type=StageType.FINAL, stage_name="Final")

    assert isinstance(race, Race)
    assert race.status == RaceStatus.SCHEDULED
    assert race.race_type_name == "Vertical"
    assert race.competition_name == "Verbier Cup"
    assert race.short_name == "Vertical F"
    assert race.gender_category_display == "Men"

    listed = await RaceRepository(session).for_competition(competition.id)
    assert len(listed) == 1
    assert isinstance(listed[0], RaceSummary)
    assert listed[0].display_name == "Vertical - Final"


@pytest.mark.asyncio
async def test_status_moves_forward_only(session):
    race = await make_race(session)
    repo = RaceRepository(session)

    assert await repo.complete(race.id) is None
    started = await repo.start(race.id)
    assert started.is_in_progress
    completed = await repo.complete(race.id)
    assert completed.is_completed
    assert await repo.start(race.id) is None
    assert await repo.cancel(race.id) is None
    assert (await repo.find(race.id)).status == RaceStatus.COMPLETED


@pytest.mark.asyncio
async def test_cancel_from_scheduled_or_in_progress(session):
    scheduled = await make_race(session)
    running = await make_race(session, name="Sprint Men Final")
    repo = RaceRepository(session)
    await repo.start(running.id)

    assert (await repo.cancel(scheduled.id)).is_cancelled
    assert (await repo.cancel(running.id)).is_cancelled
    assert await repo.start(scheduled.id) is None


@pytest.mark.asyncio
async def test_invalid_enum_values_are_rejected(session):
    assert await make_race(session, gender_category="X") is None
    assert await make_race(session, stage_type="Warmup") is None
    race = await make_race(session)
    assert await RaceRepository(session).update(race.id, {"status": "paused"}) is None


@pytest.mark.asyncio
async def test_status_lists(session):
    scheduled = await make_race(session)
    running = await make_race(session, name="Second")
    repo = RaceRepository(session)
    await repo.start(running.id)

    assert [r.id for r in await repo.scheduled()] == [scheduled.id]
    assert [r.id for r in await repo.in_progress()] == [running.id]
    assert await repo.completed() == []


@pytest.mark.asyncio
async def test_auto_startable_includes_races_scheduled_up_to_now(session):
    now = datetime(2025, 1, 10, 9, 0)
    due = await make_race(session, scheduled_at=now)
    later = await make_race(session, name="Later", scheduled_at=datetime(2025, 1, 10, 9, 1))
    await make_race(session, name="Unscheduled", scheduled_at=None)
    repo = RaceRepository(session)

    startable = await repo.auto_startable(now=now)
    assert [r.id for r in startable] == [due.id]
    assert all(isinstance(r, RaceSummary) for r in startable)
    assert due.can_start(now=now) and not later.can_start(now=now)

    await repo.start(due.id)
    assert await repo.auto_startable(now=now) == []


@pytest.mark.asyncio
async def test_auto_completable_requires_competition_to_have_ended(session):
    competition = await make_competition(session, start_date=date(2025, 1, 10), end_date=date(2025, 1, 12))
    race = await make_race(session, competition)
    repo = RaceRepository(session)
    await repo.start(race.id)

    # Still running on the last competition day.
    assert await repo.auto_completable(today=date(2025, 1, 12)) == []
    assert [r.id for r in await repo.auto_completable(today=date(2025, 1, 13))] == [race.id]

    await repo.complete(race.id)
    assert await repo.auto_completable(today=date(2025, 1, 13)) == []


@pytest.mark.asyncio
async def test_deleting_competition_cascades_to_races_and_start_lists(session):
    competition = await make_competition(session)
    race = await make_race(session, competition)
    await register(session, race, await make_athlete(session), 1)

    assert await CompetitionRepository(session).delete(competition.id) is True
    assert await RaceRepository(session).find(race.id) is None
    assert await RaceParticipationRepository(session).count(race_id=race.id) == 0
