from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from domain.types import IncidentDecision, IncidentStatus, ReportStatus
from .base import Struct


class _IncidentState:
    @property
    def is_unofficial(self) -> bool:
        return self.status == IncidentStatus.UNOFFICIAL

    @property
    def is_official(self) -> bool:
        return self.status == IncidentStatus.OFFICIAL

    @property
    def is_pending(self) -> bool:
        return self.decision == IncidentDecision.PENDING

    @property
    def can_officialize(self) -> bool:
        return self.is_unofficial

    @property
    def can_decide(self) -> bool:
        return self.is_official and self.is_pending


class Incident(_IncidentState, Struct):
    id: int
    race_id: int
    race_location_id: Optional[int] = None
    penalty_id: Optional[int] = None
    status: IncidentStatus
    decision: IncidentDecision
    description: Optional[str] = None
    officialized_by_user_id: Optional[int] = None
    officialized_at: Optional[datetime] = None
    decided_by_user_id: Optional[int] = None
    decided_at: Optional[datetime] = None
    decision_notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class IncidentSummary(_IncidentState):
    id: int
    race_id: int
    race_location_id: Optional[int]
    status: IncidentStatus
    decision: IncidentDecision
    created_at: datetime


class _ReportState:
    @property
    def is_draft(self) -> bool:
        return self.status == ReportStatus.DRAFT

    @property
    def is_submitted(self) -> bool:
        return self.status == ReportStatus.SUBMITTED

    @property
    def is_finalized(self) -> bool:
        return self.status == ReportStatus.FINALIZED

    @property
    def has_video(self) -> bool:
        return bool(self.video_url)

    def is_owned_by(self, user_id: Optional[int]) -> bool:
        return user_id is not None and self.user_id == user_id


class Report(_ReportState, Struct):
    id: int
    client_uuid: Optional[str] = None
    race_id: int
    user_id: int
    incident_id: Optional[int] = None
    race_location_id: Optional[int] = None
    bib_number: int
    athlete_name: Optional[str] = None
    description: str
    status: ReportStatus
    video_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class ReportSummary(_ReportState):
    id: int
    race_id: int
    user_id: int
    incident_id: Optional[int]
    bib_number: int
    status: ReportStatus
    video_url: Optional[str]
    created_at: datetime
