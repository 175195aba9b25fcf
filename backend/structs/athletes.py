from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from domain.types import Gender, ParticipationStatus
from .base import Struct


class _AthleteNames:
    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name.upper()} ({self.country})"

    @property
    def is_male(self) -> bool:
        return self.gender == Gender.MALE

    @property
    def is_female(self) -> bool:
        return self.gender == Gender.FEMALE


class Athlete(_AthleteNames, Struct):
    id: int
    first_name: str
    last_name: str
    country: str
    gender: Gender
    license_number: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class AthleteSummary(_AthleteNames):
    id: int
    first_name: str
    last_name: str
    country: str
    gender: Gender
    license_number: Optional[str]


class RaceParticipation(Struct):
    """Participation snapshot; list queries return it too, with the athlete embedded."""

    id: int
    race_id: int
    athlete_id: int
    team_id: Optional[int] = None
    bib_number: int
    heat: Optional[str] = None
    active_in_heat: bool
    status: ParticipationStatus
    start_time: Optional[datetime] = None
    finish_time: Optional[datetime] = None
    rank: Optional[int] = None
    athlete: Optional[Athlete] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def bib_display(self) -> str:
        return str(self.bib_number).rjust(3, "0")

    @property
    def display_name(self) -> str:
        if self.athlete is None:
            return self.bib_display
        return f"{self.bib_display} - {self.athlete.display_name}"

    @property
    def country(self) -> Optional[str]:
        return self.athlete.country if self.athlete else None

    @property
    def is_team_race(self) -> bool:
        return self.team_id is not None

    @property
    def can_be_reported(self) -> bool:
        return self.active_in_heat and self.status not in (
            ParticipationStatus.FINISHED,
            ParticipationStatus.DNS,
        )

    @property
    def is_started(self) -> bool:
        return self.start_time is not None

    @property
    def is_finished(self) -> bool:
        return self.status == ParticipationStatus.FINISHED and self.finish_time is not None

    @property
    def is_dns(self) -> bool:
        return self.status == ParticipationStatus.DNS

    @property
    def is_dnf(self) -> bool:
        return self.status == ParticipationStatus.DNF

    @property
    def is_disqualified(self) -> bool:
        return self.status == ParticipationStatus.DSQ


@dataclass(frozen=True)
class AthleteImportResult:
    """Aggregate outcome of a bulk athlete import into one race."""

    total_count: int = 0
    new_athletes_count: int = 0
    existing_athletes_count: int = 0
    participations_created: int = 0
    errors: List[str] = field(default_factory=list)

    @property
    def is_success(self) -> bool:
        return not self.errors

    @property
    def failed_count(self) -> int:
        return len(self.errors)

    @property
    def summary_message(self) -> str:
        plural = "" if self.total_count == 1 else "s"
        return (
            f"{self.total_count} athlete{plural} imported: "
            f"{self.new_athletes_count} new, {self.existing_athletes_count} existing"
        )
