"""
Closed enumerations for the race logger domain.
Stored as their string values; compared as enum members everywhere else.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, FrozenSet


class RoleName(str, Enum):
    """Named permission level assigned to a user."""

    VAR_OPERATOR = "var_operator"
    NATIONAL_REFEREE = "national_referee"
    INTERNATIONAL_REFEREE = "international_referee"
    JURY_PRESIDENT = "jury_president"
    REFEREE_MANAGER = "referee_manager"
    BROADCAST_VIEWER = "broadcast_viewer"

    @classmethod
    def parse(cls, value: object) -> "RoleName | None":
        """Return the matching member, or None for unknown/blank values."""
        if value is None or value == "":
            return None
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value))
        except ValueError:
            return None


class RaceStatus(str, Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    def can_transition_to(self, new_status: "RaceStatus") -> bool:
        """Monotonic lifecycle; cancelled is a side exit before completion."""
        if new_status == self:
            return True
        return new_status in _RACE_TRANSITIONS[self]


_RACE_TRANSITIONS: Dict[RaceStatus, FrozenSet[RaceStatus]] = {
    RaceStatus.SCHEDULED: frozenset({RaceStatus.IN_PROGRESS, RaceStatus.CANCELLED}),
    RaceStatus.IN_PROGRESS: frozenset({RaceStatus.COMPLETED, RaceStatus.CANCELLED}),
    RaceStatus.COMPLETED: frozenset(),
    RaceStatus.CANCELLED: frozenset(),
}


class ParticipationStatus(str, Enum):
    REGISTERED = "registered"
    DNS = "dns"
    DNF = "dnf"
    DSQ = "dsq"
    FINISHED = "finished"


class IncidentStatus(str, Enum):
    UNOFFICIAL = "unofficial"
    OFFICIAL = "official"


class IncidentDecision(str, Enum):
    PENDING = "pending"
    PENALTY_APPLIED = "penalty_applied"
    REJECTED = "rejected"
    NO_ACTION = "no_action"


class ReportStatus(str, Enum):
    DRAFT = "draft"
    SUBMITTED = "submitted"
    FINALIZED = "finalized"


class Gender(str, Enum):
    MALE = "M"
    FEMALE = "F"


class GenderCategory(str, Enum):
    MEN = "M"
    WOMEN = "W"
    MEN_TEAM = "MM"
    WOMEN_TEAM = "WW"
    MIXED_TEAM = "MW"

    @property
    def display(self) -> str:
        return _GENDER_CATEGORY_LABELS[self]

    @property
    def is_team(self) -> bool:
        return self in (GenderCategory.MEN_TEAM, GenderCategory.WOMEN_TEAM, GenderCategory.MIXED_TEAM)


_GENDER_CATEGORY_LABELS = {
    GenderCategory.MEN: "Men",
    GenderCategory.WOMEN: "Women",
    GenderCategory.MEN_TEAM: "Men's Team",
    GenderCategory.WOMEN_TEAM: "Women's Team",
    GenderCategory.MIXED_TEAM: "Mixed Team",
}


class StageType(str, Enum):
    QUALIFICATION = "Qualification"
    HEAT = "Heat"
    QUARTERFINAL = "Quarterfinal"
    SEMIFINAL = "Semifinal"
    FINAL = "Final"


STAGE_ABBREVIATIONS = {
    "qualification": "Q",
    "heat": "H",
    "quarterfinal": "QF",
    "semifinal": "SF",
    "final": "F",
}


class CourseSegment(str, Enum):
    UPHILL1 = "uphill1"
    UPHILL2 = "uphill2"
    UPHILL3 = "uphill3"
    TRANSITION_1TO2 = "transition_1to2"
    TRANSITION_2TO1 = "transition_2to1"
    DESCENT = "descent"
    FOOTPART = "footpart"
    START_AREA = "start_area"
    FINISH_AREA = "finish_area"


class SegmentPosition(str, Enum):
    START = "start"
    MIDDLE = "middle"
    TOP = "top"
    BOTTOM = "bottom"
    END = "end"
    FULL = "full"


class ColorCode(str, Enum):
    GREEN = "green"
    RED = "red"
    YELLOW = "yellow"
    BLUE = "blue"
    GRAY = "gray"


class CompetitionStatus(str, Enum):
    UPCOMING = "upcoming"
    ONGOING = "ongoing"
    PAST = "past"


class TeamType(str, Enum):
    TEAM = "team"
    RELAY = "relay"


# Penalty severity values stored per race-type column
DISQUALIFICATION = "disqualification"
NOT_APPLICABLE = "N/A"

DESCRIPTION_MAX_LEN = 5000


def enum_values(enum_cls) -> list[str]:
    """String values of an enum, in declaration order."""
    return [member.value for member in enum_cls]
