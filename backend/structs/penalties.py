from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from domain.types import DISQUALIFICATION, NOT_APPLICABLE
from .base import Struct

_TEAM_INDIVIDUAL_TYPES = ("individual", "team")
_SPRINT_RELAY_TYPES = ("sprint", "relay", "mixed relay")


class _PenaltySeverity:
    @property
    def display_name(self) -> str:
        return f"{self.penalty_number} - {self.name}"

    @property
    def category_letter(self) -> str:
        return self.category

    @property
    def is_disqualification(self) -> bool:
        return DISQUALIFICATION in (self.team_individual, self.vertical, self.sprint_relay)

    @property
    def is_time_penalty(self) -> bool:
        return not self.is_disqualification and any(
            (self.team_individual, self.vertical, self.sprint_relay)
        )

    def penalty_for_race_type(self, race_type: str) -> Optional[str]:
        """Severity column for a race type name; unknown types are ``"N/A"``."""
        key = str(race_type).lower()
        if key in _TEAM_INDIVIDUAL_TYPES:
            return self.team_individual
        if key == "vertical":
            return self.vertical
        if key in _SPRINT_RELAY_TYPES:
            return self.sprint_relay
        return NOT_APPLICABLE


class Penalty(_PenaltySeverity, Struct):
    id: int
    category: str
    category_title: str
    category_description: Optional[str] = None
    penalty_number: str
    name: str
    team_individual: Optional[str] = None
    vertical: Optional[str] = None
    sprint_relay: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class PenaltySummary(_PenaltySeverity):
    id: int
    category: str
    category_title: str
    penalty_number: str
    name: str
    team_individual: Optional[str]
    vertical: Optional[str]
    sprint_relay: Optional[str]
