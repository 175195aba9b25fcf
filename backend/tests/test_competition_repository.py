"""Competition date filters and listing helpers, evaluated against a fixed day."""

from __future__ import annotations

from datetime import date

import pytest

from domain.types import CompetitionStatus
from repositories import CompetitionRepository
from structs.competitions import Competition, CompetitionSummary

from factories import make_competition

TODAY = date(2025, 2, 15)


async def _seed_three(session):
    past = await make_competition(
        session, name="Past Cup", city="Andorra", country="AND",
        start_date=date(2025, 1, 1), end_date=date(2025, 1, 3),
    )
    ongoing = await make_competition(
        session, name="Ongoing Cup", city="Verbier",
        start_date=date(2025, 2, 14), end_date=date(2025, 2, 15),
    )
    upcoming = await make_competition(
        session, name="Upcoming Cup", city="Bormio", country="ITA",
        start_date=date(2025, 3, 1), end_date=date(2025, 3, 4),
    )
    return past, ongoing, upcoming


@pytest.mark.asyncio
async def test_status_queries_are_relative_to_today(session):
    past, ongoing, upcoming = await _seed_three(session)
    repo = CompetitionRepository(session)

    assert [c.id for c in await repo.past(today=TODAY)] == [past.id]
    assert [c.id for c in await repo.ongoing(today=TODAY)] == [ongoing.id]
    assert [c.id for c in await repo.upcoming(today=TODAY)] == [upcoming.id]
    assert await repo.count_by_status(today=TODAY) == {"upcoming": 1, "ongoing": 1, "past": 1}

    # The end date itself still counts as ongoing; the day after is past.
    assert ongoing.status(today=TODAY) == CompetitionStatus.ONGOING
    assert ongoing.status(today=date(2025, 2, 16)) == CompetitionStatus.PAST
    assert upcoming.status(today=TODAY) == CompetitionStatus.UPCOMING


@pytest.mark.asyncio
async def test_upcoming_lists_soonest_first(session):
    later = await make_competition(session, start_date=date(2025, 4, 1), end_date=date(2025, 4, 2))
    sooner = await make_competition(session, start_date=date(2025, 3, 1), end_date=date(2025, 3, 2))
    upcoming = await CompetitionRepository(session).upcoming(today=TODAY)
    assert [c.id for c in upcoming] == [sooner.id, later.id]


@pytest.mark.asyncio
async def test_filtered_by_status_and_sort(session):
    past, ongoing, upcoming = await _seed_three(session)
    repo = CompetitionRepository(session)

    assert [c.id for c in await repo.filtered(today=TODAY)] == [upcoming.id, ongoing.id, past.id]
    assert [c.id for c in await repo.filtered(sort="oldest", today=TODAY)] == [past.id, ongoing.id, upcoming.id]
    assert [c.name for c in await repo.filtered(sort="name", today=TODAY)] == [
        "Ongoing Cup",
        "Past Cup",
        "Upcoming Cup",
    ]
    assert [c.id for c in await repo.filtered(status="past", today=TODAY)] == [past.id]
    # Unknown statuses and sorts fall back to the unfiltered, recent-first list.
    assert len(await repo.filtered(status="archived", sort="random", today=TODAY)) == 3


@pytest.mark.asyncio
async def test_lookup_helpers(session):
    past, ongoing, upcoming = await _seed_three(session)
    repo = CompetitionRepository(session)

    found = await repo.find_by_name("Past Cup")
    assert isinstance(found, Competition) and found.id == past.id
    assert [c.id for c in await repo.by_country("ita")] == [upcoming.id]
    assert [c.id for c in await repo.by_city("verbier")] == [ongoing.id]
    assert [c.id for c in await repo.search("upcom")] == [upcoming.id]
    assert await repo.search("") == []
    in_range = await repo.by_date_range(date(2025, 2, 1), date(2025, 3, 31))
    assert [c.id for c in in_range] == [ongoing.id, upcoming.id]
    assert all(isinstance(c, CompetitionSummary) for c in in_range)


@pytest.mark.asyncio
async def test_name_exists_can_exclude_the_record_being_edited(session):
    competition = await make_competition(session, name="Unique Cup")
    repo = CompetitionRepository(session)
    assert await repo.name_exists("Unique Cup")
    assert not await repo.name_exists("Unique Cup", exclude_id=competition.id)


@pytest.mark.asyncio
async def test_invalid_competitions_are_rejected(session):
    assert await make_competition(session, start_date=date(2025, 3, 2), end_date=date(2025, 3, 1)) is None
    assert await make_competition(session, city="  ") is None
    assert await CompetitionRepository(session).count() == 0


def test_date_range_formatting():
    summary = CompetitionSummary(
        id=1,
        name="Verbier",
        city="Verbier",
        place="Centre",
        country="SUI",
        start_date=date(2025, 1, 10),
        end_date=date(2025, 1, 12),
        created_at=None,
    )
    assert summary.display_name == "Verbier 2025"
    assert summary.short_date_range == "Jan 10-12, 2025"
    assert summary.date_range == "Jan 10 - Jan 12, 2025"
    assert summary.duration_days == 3
    assert summary.days_until_start(today=date(2025, 1, 1)) == 9


@pytest.mark.asyncio
async def test_city_lookup_matches_whole_name_only(session):
    verbier = await make_competition(session, city="Verbier")
    await make_competition(session, city="Val d'Isere")
    repo = CompetitionRepository(session)

    assert [c.id for c in await repo.by_city(" VERBIER ")] == [verbier.id]
    assert await repo.by_city("Verb%") == []
    assert await repo.by_city("Verbie_") == []
    assert await repo.by_city("%") == []
