"""Role/state decision tables for every policy, nil actors and scopes."""

from __future__ import annotations

from datetime import datetime
from types import SimpleNamespace

import pytest
from sqlalchemy import select

from domain.types import IncidentStatus, RaceStatus, ReportStatus, RoleName
from models.incident import Incident
from models.race import Race
from models.report import Report
from policies import (
    ActorRoles,
    ApplicationPolicy,
    CompetitionPolicy,
    IncidentPolicy,
    PenaltyPolicy,
    RaceLocationPolicy,
    RaceParticipationPolicy,
    RacePolicy,
    RaceTypeLocationTemplatePolicy,
    RaceTypePolicy,
    ReportPolicy,
)
from structs.users import UserSummary

ALL_POLICIES = [
    CompetitionPolicy,
    IncidentPolicy,
    PenaltyPolicy,
    RaceLocationPolicy,
    RaceParticipationPolicy,
    RacePolicy,
    RaceTypeLocationTemplatePolicy,
    RaceTypePolicy,
    ReportPolicy,
]

_ids = iter(range(1, 10_000))


def actor(role=None, admin=False, country=None):
    return UserSummary(
        id=next(_ids),
        email_address="someone@example.com",
        name=None,
        admin=admin,
        role_name=role,
        country=country,
        created_at=datetime(2025, 1, 1),
    )


ADMIN = actor(admin=True)
OPERATOR = actor(RoleName.VAR_OPERATOR)
NATIONAL = actor(RoleName.NATIONAL_REFEREE, country="SUI")
INTERNATIONAL = actor(RoleName.INTERNATIONAL_REFEREE)
JURY = actor(RoleName.JURY_PRESIDENT)
MANAGER = actor(RoleName.REFEREE_MANAGER)
VIEWER = actor(RoleName.BROADCAST_VIEWER)
NO_ROLE = actor()

ACTORS = {
    "admin": ADMIN,
    "var_operator": OPERATOR,
    "national_referee": NATIONAL,
    "international_referee": INTERNATIONAL,
    "jury_president": JURY,
    "referee_manager": MANAGER,
    "broadcast_viewer": VIEWER,
    "no_role": NO_ROLE,
}


def allowed(policy_class, action, record=None):
    """Actor names for which ``action`` is permitted."""
    return {name for name, user in ACTORS.items() if policy_class(user, record).permits(action)}


def test_actor_roles_are_derived_once():
    roles = ActorRoles.of(NATIONAL)
    assert roles.is_authenticated and roles.is_referee and roles.is_national_referee
    assert roles.country == "SUI"
    assert roles.can_report and not roles.can_manage
    assert ActorRoles.of(None) == ActorRoles()
    assert ActorRoles.of(SimpleNamespace(id=1, admin=False, role_name="wizard", country="")).country is None


def test_race_policy_table():
    scheduled = SimpleNamespace(is_completed=False, status=RaceStatus.SCHEDULED)
    completed = SimpleNamespace(is_completed=True, status=RaceStatus.COMPLETED)
    viewers = {"admin", "var_operator", "national_referee", "international_referee", "jury_president", "referee_manager"}

    assert allowed(RacePolicy, "index") == viewers
    assert allowed(RacePolicy, "show", scheduled) == viewers
    assert allowed(RacePolicy, "create") == {"admin", "var_operator"}
    assert allowed(RacePolicy, "new") == {"admin", "var_operator"}
    assert allowed(RacePolicy, "update", scheduled) == {"admin", "var_operator"}
    assert allowed(RacePolicy, "edit", scheduled) == {"admin", "var_operator"}
    assert allowed(RacePolicy, "update", completed) == set()
    assert allowed(RacePolicy, "destroy", completed) == {"admin", "var_operator"}


def test_competition_policy_table():
    everyone = set(ACTORS)
    managers = {"admin", "jury_president", "referee_manager"}
    assert allowed(CompetitionPolicy, "index") == everyone
    assert allowed(CompetitionPolicy, "show") == everyone
    assert allowed(CompetitionPolicy, "create") == managers
    assert allowed(CompetitionPolicy, "update") == managers
    assert allowed(CompetitionPolicy, "duplicate") == managers
    assert allowed(CompetitionPolicy, "destroy") == {"referee_manager"}


def test_incident_policy_table():
    unofficial = SimpleNamespace(is_unofficial=True, status=IncidentStatus.UNOFFICIAL)
    official = SimpleNamespace(is_unofficial=False, status=IncidentStatus.OFFICIAL)
    reporters = {"admin", "var_operator", "national_referee", "international_referee", "jury_president", "referee_manager"}
    managers = {"admin", "jury_president", "referee_manager"}

    assert allowed(IncidentPolicy, "create") == reporters
    assert allowed(IncidentPolicy, "update", unofficial) == reporters
    assert allowed(IncidentPolicy, "update", official) == managers
    assert allowed(IncidentPolicy, "destroy", official) == {"admin", "referee_manager"}
    for action in ("officialize", "apply", "apply_penalty", "decline", "reject", "no_action"):
        assert allowed(IncidentPolicy, action, official) == {"jury_president"}


def test_participation_policy_table():
    assert allowed(RaceParticipationPolicy, "show") == set(ACTORS)
    for action in ("index", "create", "update", "destroy", "copy", "import_athletes"):
        assert allowed(RaceParticipationPolicy, action) == {"admin", "var_operator"}


def test_reference_data_policies():
    managers = {"admin", "jury_president", "referee_manager"}
    for policy_class in (RaceTypePolicy, PenaltyPolicy):
        assert allowed(policy_class, "index") == set(ACTORS)
        assert allowed(policy_class, "create") == managers
        assert allowed(policy_class, "destroy") == {"referee_manager"}
    assert allowed(PenaltyPolicy, "import_rules") == managers
    for action in ("index", "show", "create", "update", "destroy", "reorder"):
        assert allowed(RaceTypeLocationTemplatePolicy, action) == {"admin"}


def test_location_policy_protects_standard_locations():
    standard = SimpleNamespace(is_standard=True)
    custom = SimpleNamespace(is_standard=False)
    assert allowed(RaceLocationPolicy, "destroy", standard) == set()
    assert allowed(RaceLocationPolicy, "destroy", custom) == {"admin", "referee_manager"}
    assert allowed(RaceLocationPolicy, "destroy", None) == set()
    assert allowed(RaceLocationPolicy, "update", custom) == {"admin", "jury_president", "referee_manager"}


def _report(owner, status):
    return SimpleNamespace(
        user_id=owner.id,
        status=status,
        is_draft=status == ReportStatus.DRAFT,
        is_submitted=status == ReportStatus.SUBMITTED,
    )


def test_report_ownership_is_isolated():
    alice = actor(RoleName.NATIONAL_REFEREE)
    bob = actor(RoleName.NATIONAL_REFEREE)
    alices_draft = _report(alice, ReportStatus.DRAFT)

    assert ReportPolicy(alice, alices_draft).update() is True
    assert ReportPolicy(bob, alices_draft).update() is False
    assert ReportPolicy(alice, alices_draft).destroy() is True
    assert ReportPolicy(bob, alices_draft).destroy() is False
    assert ReportPolicy(alice, alices_draft).submit() is True
    assert ReportPolicy(bob, alices_draft).attach_video() is False


def test_report_state_limits_owner_but_not_managers():
    alice = actor(RoleName.VAR_OPERATOR)
    submitted = _report(alice, ReportStatus.SUBMITTED)
    finalized = _report(alice, ReportStatus.FINALIZED)

    assert ReportPolicy(alice, submitted).update() is True
    assert ReportPolicy(alice, submitted).destroy() is False
    assert ReportPolicy(alice, submitted).submit() is False
    assert ReportPolicy(alice, finalized).update() is False
    assert ReportPolicy(alice, finalized).attach_video() is True
    for manager in (ADMIN, JURY, MANAGER):
        assert ReportPolicy(manager, finalized).update() is True
        assert ReportPolicy(manager, finalized).destroy() is True


def test_report_without_owner_attribute_is_not_owned():
    alice = actor(RoleName.NATIONAL_REFEREE)
    assert ReportPolicy(alice, SimpleNamespace(is_draft=True)).update() is False
    assert ReportPolicy(alice, None).submit() is False


def test_state_checks_tolerate_records_without_capabilities():
    assert RacePolicy(ADMIN, object()).update() is True
    assert IncidentPolicy(OPERATOR, object()).update() is False


@pytest.mark.parametrize("policy_class", ALL_POLICIES)
def test_nil_actor_is_denied_everything(policy_class):
    record = SimpleNamespace(
        user_id=None, is_completed=False, is_unofficial=True, is_standard=False,
        is_draft=True, is_submitted=False,
    )
    policy = policy_class(None, record)
    actions = {
        name
        for name in dir(policy_class)
        if not name.startswith("_") and name not in ("permits", "record_has", "Scope")
        and callable(getattr(policy_class, name))
    }
    assert {"index", "show", "create", "update", "destroy"} <= actions
    assert {action for action in actions if policy.permits(action)} == set()


def test_unknown_and_private_actions_are_denied():
    policy = RacePolicy(ADMIN, None)
    assert policy.permits("launch") is False
    assert policy.permits("_owns_record") is False
    assert policy.permits("permits") is False
    assert policy.permits("roles") is False


def test_base_policy_denies_and_base_scope_must_be_overridden():
    assert not any(ApplicationPolicy(ADMIN).permits(a) for a in ("index", "show", "create", "update", "destroy"))
    with pytest.raises(NotImplementedError):
        ApplicationPolicy.Scope(ADMIN, select(Race)).resolve()


def test_scopes_for_signed_in_actors():
    stmt = select(Report)
    assert ReportPolicy.Scope(OPERATOR, stmt).resolve() is stmt
    assert ReportPolicy.Scope(VIEWER, stmt).resolve() is not stmt
    assert RacePolicy.Scope(INTERNATIONAL, select(Race)).resolve() is not None
    assert CompetitionPolicy.Scope(VIEWER, stmt).resolve() is stmt


def test_national_referee_incident_scope_joins_competition_country():
    resolved = IncidentPolicy.Scope(NATIONAL, select(Incident)).resolve()
    sql = str(resolved.compile(compile_kwargs={"literal_binds": True}))
    assert "JOIN competitions" in sql
    assert "competitions.country = 'SUI'" in sql
    assert IncidentPolicy.Scope(INTERNATIONAL, select(Incident)).resolve().whereclause is None
