from datetime import date, datetime, timedelta

import pytest
from pydantic import ValidationError

from domain.types import GenderCategory, RaceStatus, RoleName, StageType
from structs.athletes import AthleteImportResult
from structs.competitions import CompetitionSummary
from structs.races import RaceSummary
from structs.users import MagicLinkSummary, Role, UserSummary


def _race(**overrides):
    values = dict(
        id=1,
        competition_id=1,
        race_type_id=1,
        name="Sprint Men Heat 3",
        stage_type=StageType.HEAT.value,
        heat_number=3,
        position=1,
        status=RaceStatus.SCHEDULED,
        scheduled_at=datetime(2025, 1, 10, 9, 30),
        gender_category=GenderCategory.MEN,
        race_type_name="sprint",
    )
    values.update(overrides)
    return RaceSummary(**values)


def test_race_naming_helpers():
    race = _race()
    assert race.stage_abbrev == "H3"
    assert race.short_name == "Sprint H3"
    assert race.full_stage_name == "Heat 3"
    assert race.formatted_scheduled_time == "09:30"
    assert _race(scheduled_at=None).formatted_scheduled_time == "Not scheduled"
    assert _race(stage_type="Prologue", heat_number=None).stage_abbrev == "P"


def test_race_start_window():
    race = _race()
    assert race.can_start(now=datetime(2025, 1, 10, 9, 30))
    assert not race.can_start(now=datetime(2025, 1, 10, 9, 29))
    assert race.is_upcoming(now=datetime(2025, 1, 10, 9, 0))
    assert not _race(status=RaceStatus.IN_PROGRESS).can_start(now=datetime(2025, 1, 11))
    assert _race(status=RaceStatus.COMPLETED).is_completed
    assert not _race(status=RaceStatus.COMPLETED).can_edit


def test_team_categories():
    assert _race(gender_category=GenderCategory.MIXED_TEAM).is_team_race
    assert _race().is_individual_race
    assert GenderCategory("WW").display == "Women's Team"


def test_race_status_transitions():
    assert RaceStatus.SCHEDULED.can_transition_to(RaceStatus.IN_PROGRESS)
    assert RaceStatus.IN_PROGRESS.can_transition_to(RaceStatus.CANCELLED)
    assert not RaceStatus.COMPLETED.can_transition_to(RaceStatus.IN_PROGRESS)
    assert not RaceStatus.SCHEDULED.can_transition_to(RaceStatus.COMPLETED)
    assert RaceStatus.COMPLETED.can_transition_to(RaceStatus.COMPLETED)


def test_magic_link_validity():
    now = datetime(2025, 1, 10, 12, 0)
    link = MagicLinkSummary(id=1, user_id=1, expires_at=now + timedelta(hours=1), used_at=None, created_at=now)
    assert link.is_valid_for_use(now=now)
    assert not link.is_valid_for_use(now=now + timedelta(hours=1))
    used = MagicLinkSummary(id=2, user_id=1, expires_at=now + timedelta(hours=1), used_at=now, created_at=now)
    assert used.is_used and not used.is_valid_for_use(now=now)


def test_competition_status_boundaries():
    competition = CompetitionSummary(
        id=1, name="Cup", city="Bormio", place="Centro", country="ITA",
        start_date=date(2025, 3, 1), end_date=date(2025, 3, 3), created_at=None,
    )
    assert competition.is_upcoming(today=date(2025, 2, 28))
    assert competition.is_ongoing(today=date(2025, 3, 1))
    assert competition.is_ongoing(today=date(2025, 3, 3))
    assert competition.is_past(today=date(2025, 3, 4))
    assert competition.days_since_end(today=date(2025, 3, 5)) == 2


def test_user_role_queries():
    user = UserSummary(
        id=1, email_address="ops@example.com", name=None, admin=False,
        role_name=RoleName.VAR_OPERATOR, country=None, created_at=None,
    )
    assert user.display_name == "ops"
    assert user.has_role("var_operator")
    assert not user.has_role("wizard")
    assert user.is_var_operator and not user.is_referee


def test_full_structs_are_frozen_and_strict():
    role = Role(id=1, name="var_operator", created_at=datetime(2025, 1, 1), updated_at=datetime(2025, 1, 1))
    assert role.is_persisted and role.to_param() == "1"
    with pytest.raises(ValidationError):
        role.name = "other"
    with pytest.raises(ValidationError):
        Role(id=1, name="var_operator", created_at=datetime(2025, 1, 1), updated_at=datetime(2025, 1, 1), extra=True)


def test_import_result_summary():
    single = AthleteImportResult(total_count=1, new_athletes_count=1)
    assert single.summary_message == "1 athlete imported: 1 new, 0 existing"
    failed = AthleteImportResult(errors=["Bib 1 (A B): Bib number 1 already assigned"])
    assert not failed.is_success and failed.failed_count == 1
