from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from domain.clock import today as current_day
from domain.types import CompetitionStatus
from .base import Struct


class _CompetitionDates:
    """Date-derived helpers; ``today`` defaults to the current UTC date."""

    @property
    def display_name(self) -> str:
        return f"{self.city} {self.start_date.year}"

    @property
    def date_range(self) -> str:
        return f"{self.start_date:%b %d} - {self.end_date:%b %d, %Y}"

    @property
    def short_date_range(self) -> str:
        if self.start_date.month == self.end_date.month:
            return f"{self.start_date:%b %d}-{self.end_date.day}, {self.end_date.year}"
        return self.date_range

    def is_ongoing(self, today: Optional[date] = None) -> bool:
        today = today or current_day()
        return self.start_date <= today <= self.end_date

    def is_upcoming(self, today: Optional[date] = None) -> bool:
        return self.start_date > (today or current_day())

    def is_past(self, today: Optional[date] = None) -> bool:
        return self.end_date < (today or current_day())

    def status(self, today: Optional[date] = None) -> CompetitionStatus:
        today = today or current_day()
        if self.is_ongoing(today):
            return CompetitionStatus.ONGOING
        if self.is_upcoming(today):
            return CompetitionStatus.UPCOMING
        return CompetitionStatus.PAST

    @property
    def duration_days(self) -> int:
        return (self.end_date - self.start_date).days + 1

    def days_until_start(self, today: Optional[date] = None) -> int:
        return (self.start_date - (today or current_day())).days

    def days_since_end(self, today: Optional[date] = None) -> int:
        return ((today or current_day()) - self.end_date).days


class Competition(_CompetitionDates, Struct):
    id: int
    name: str
    city: str
    place: str
    country: str
    description: str
    start_date: date
    end_date: date
    webpage_url: str
    logo_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class CompetitionSummary(_CompetitionDates):
    id: int
    name: str
    city: str
    place: str
    country: str
    start_date: date
    end_date: date
    created_at: datetime
