"""Immutable value snapshots returned by repositories.

Each entity has a full struct (pydantic, coerced and validated) and a lighter
summary (frozen dataclass) used by collection queries.
"""

from .athletes import Athlete, AthleteImportResult, AthleteSummary, RaceParticipation
from .base import Struct
from .capabilities import (
    IncidentStateful,
    Owned,
    RaceStateful,
    ReportStateful,
    TemplateDerived,
)
from .competitions import Competition, CompetitionSummary
from .incidents import Incident, IncidentSummary, Report, ReportSummary
from .locations import RaceLocation, RaceLocationSummary, RaceTypeLocationTemplate
from .penalties import Penalty, PenaltySummary
from .races import Race, RaceSummary, RaceType, RaceTypeSummary
from .users import (
    MagicLink,
    MagicLinkSummary,
    Role,
    RoleSummary,
    Session,
    SessionSummary,
    User,
    UserSummary,
)

__all__ = [
    "Struct",
    "Owned",
    "RaceStateful",
    "IncidentStateful",
    "ReportStateful",
    "TemplateDerived",
    "Athlete",
    "AthleteSummary",
    "AthleteImportResult",
    "RaceParticipation",
    "Competition",
    "CompetitionSummary",
    "Incident",
    "IncidentSummary",
    "Report",
    "ReportSummary",
    "RaceLocation",
    "RaceLocationSummary",
    "RaceTypeLocationTemplate",
    "Penalty",
    "PenaltySummary",
    "Race",
    "RaceSummary",
    "RaceType",
    "RaceTypeSummary",
    "MagicLink",
    "MagicLinkSummary",
    "Role",
    "RoleSummary",
    "Session",
    "SessionSummary",
    "User",
    "UserSummary",
]
