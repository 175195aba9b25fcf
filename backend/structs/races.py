from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from domain.clock import utcnow
from domain.types import STAGE_ABBREVIATIONS, GenderCategory, RaceStatus
from .base import Struct, titleize


class _RaceTypeNames:
    @property
    def display_name(self) -> str:
        return self.name

    @property
    def is_sprint(self) -> bool:
        return self.name == "Sprint"

    @property
    def is_individual(self) -> bool:
        return self.name == "Individual"

    @property
    def is_team(self) -> bool:
        return self.name == "Team"

    @property
    def is_vertical(self) -> bool:
        return self.name == "Vertical"

    @property
    def is_relay(self) -> bool:
        return self.name == "Mixed Relay"


class RaceType(_RaceTypeNames, Struct):
    id: int
    name: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class RaceTypeSummary(_RaceTypeNames):
    id: int
    name: str
    description: Optional[str]


class _RaceState:
    """Status and naming helpers shared by the full and summary race structs."""

    @property
    def is_scheduled(self) -> bool:
        return self.status == RaceStatus.SCHEDULED

    @property
    def is_in_progress(self) -> bool:
        return self.status == RaceStatus.IN_PROGRESS

    @property
    def is_completed(self) -> bool:
        return self.status == RaceStatus.COMPLETED

    @property
    def is_cancelled(self) -> bool:
        return self.status == RaceStatus.CANCELLED

    @property
    def is_started(self) -> bool:
        return not self.is_scheduled

    @property
    def can_edit(self) -> bool:
        return not self.is_completed

    @property
    def accepts_reports(self) -> bool:
        return self.is_in_progress

    def can_start(self, now: Optional[datetime] = None) -> bool:
        return (
            self.is_scheduled
            and self.scheduled_at is not None
            and self.scheduled_at <= (now or utcnow())
        )

    def is_upcoming(self, now: Optional[datetime] = None) -> bool:
        return (
            self.is_scheduled
            and self.scheduled_at is not None
            and self.scheduled_at > (now or utcnow())
        )

    @property
    def stage_abbrev(self) -> str:
        stage = str(self.stage_type)
        abbrev = STAGE_ABBREVIATIONS.get(stage.lower())
        if abbrev is None:
            return stage[:1].upper()
        return f"{abbrev}{self.heat_number}" if self.heat_number else abbrev

    @property
    def short_name(self) -> str:
        race_type = titleize(self.race_type_name) if self.race_type_name else "Race"
        return f"{race_type} {self.stage_abbrev}"

    @property
    def full_stage_name(self) -> str:
        stage = titleize(str(self.stage_type))
        return f"{stage} {self.heat_number}" if self.heat_number else stage

    @property
    def gender_category_display(self) -> str:
        return GenderCategory(self.gender_category).display

    @property
    def is_team_race(self) -> bool:
        return GenderCategory(self.gender_category).is_team

    @property
    def is_individual_race(self) -> bool:
        return not self.is_team_race

    @property
    def formatted_scheduled_time(self) -> str:
        if self.scheduled_at is None:
            return "Not scheduled"
        return f"{self.scheduled_at:%H:%M}"


class Race(_RaceState, Struct):
    id: int
    competition_id: int
    race_type_id: int
    name: str
    stage_type: str
    stage_name: str
    heat_number: Optional[int] = None
    position: int
    status: RaceStatus
    scheduled_at: Optional[datetime] = None
    gender_category: GenderCategory
    race_type_name: Optional[str] = None
    competition_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @property
    def display_name(self) -> str:
        return self.name

    def minutes_until_start(self, now: Optional[datetime] = None) -> int:
        if self.scheduled_at is None or self.is_started:
            return 0
        return int((self.scheduled_at - (now or utcnow())).total_seconds() // 60)


@dataclass(frozen=True)
class RaceSummary(_RaceState):
    id: int
    competition_id: int
    race_type_id: int
    name: str
    stage_type: str
    heat_number: Optional[int]
    position: int
    status: RaceStatus
    scheduled_at: Optional[datetime]
    gender_category: GenderCategory
    race_type_name: Optional[str]

    @property
    def display_name(self) -> str:
        race_type = titleize(self.race_type_name) if self.race_type_name else "Race"
        return f"{race_type} - {titleize(self.stage_type)}"
