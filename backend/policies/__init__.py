"""Role-based authorization policies.

Construct a policy per (actor, resource) and ask it a question; pass a
repository's ``base_scope()`` through ``Policy.Scope(actor, stmt).resolve()``
to filter collections.
"""

from .base import ActorRoles, ApplicationPolicy, AuthenticatedReadPolicy
from .competition_policy import CompetitionPolicy
from .incident_policy import IncidentPolicy
from .race_location_policy import RaceLocationPolicy
from .race_participation_policy import RaceParticipationPolicy
from .race_policy import RacePolicy
from .race_type_location_template_policy import RaceTypeLocationTemplatePolicy
from .race_type_policy import PenaltyPolicy, RaceTypePolicy
from .report_policy import ReportPolicy

__all__ = [
    "ActorRoles",
    "ApplicationPolicy",
    "AuthenticatedReadPolicy",
    "CompetitionPolicy",
    "IncidentPolicy",
    "PenaltyPolicy",
    "RaceLocationPolicy",
    "RaceParticipationPolicy",
    "RacePolicy",
    "RaceTypeLocationTemplatePolicy",
    "RaceTypePolicy",
    "ReportPolicy",
]
