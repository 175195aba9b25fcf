from __future__ import annotations

from typing import List, Optional

from domain.types import ReportStatus
from models.report import Report
from structs.incidents import Report as ReportStruct
from structs.incidents import ReportSummary
from .base import BaseRepository


class ReportRepository(BaseRepository[Report]):
    """Repository for referee reports (draft -> submitted -> finalized)."""

    record_class = Report
    struct_class = ReportStruct
    summary_class = ReportSummary

    returns_one = ("find_by_client_uuid", "submit", "finalize", "attach_video")
    returns_many = ("for_race", "for_user", "for_incident", "drafts", "pending", "submitted")

    async def find_by_client_uuid(self, client_uuid: str) -> Optional[ReportStruct]:
        if not client_uuid:
            return None
        return await self.find_by(client_uuid=client_uuid)

    async def for_race(self, race_id: int) -> List[ReportSummary]:
        return await self.where(race_id=race_id)

    async def for_user(self, user_id: int) -> List[ReportSummary]:
        return await self.where(user_id=user_id)

    async def for_incident(self, incident_id: int) -> List[ReportSummary]:
        return await self.where(incident_id=incident_id)

    async def drafts(self, user_id: Optional[int] = None) -> List[ReportSummary]:
        criteria = {"status": ReportStatus.DRAFT}
        if user_id is not None:
            criteria["user_id"] = user_id
        return await self.where(**criteria)

    async def pending(self, race_id: Optional[int] = None) -> List[ReportSummary]:
        """Reports not yet finalized (draft or submitted)."""
        criteria = {"status": [ReportStatus.DRAFT, ReportStatus.SUBMITTED]}
        if race_id is not None:
            criteria["race_id"] = race_id
        return await self.where(**criteria)

    async def submitted(self, race_id: Optional[int] = None) -> List[ReportSummary]:
        criteria = {"status": ReportStatus.SUBMITTED}
        if race_id is not None:
            criteria["race_id"] = race_id
        return await self.where(**criteria)

    async def submit(self, id: int) -> Optional[ReportStruct]:
        return await self._advance(id, ReportStatus.DRAFT, ReportStatus.SUBMITTED)

    async def finalize(self, id: int) -> Optional[ReportStruct]:
        return await self._advance(id, ReportStatus.SUBMITTED, ReportStatus.FINALIZED)

    async def attach_video(self, id: int, video_url: str) -> Optional[ReportStruct]:
        return await self.update(id, {"video_url": video_url})

    async def _advance(
        self, id: int, expected: ReportStatus, target: ReportStatus
    ) -> Optional[ReportStruct]:
        report = await self.find(id)
        if report is None or report.status != expected:
            return None
        return await self.update(id, {"status": target})

    def build_struct(self, record: Report) -> ReportStruct:
        return ReportStruct(
            id=record.id,
            client_uuid=record.client_uuid,
            race_id=record.race_id,
            user_id=record.user_id,
            incident_id=record.incident_id,
            race_location_id=record.race_location_id,
            bib_number=record.bib_number,
            athlete_name=record.athlete_name,
            description=record.description,
            status=record.status,
            video_url=record.video_url,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    def build_summary(self, record: Report) -> ReportSummary:
        return ReportSummary(
            id=record.id,
            race_id=record.race_id,
            user_id=record.user_id,
            incident_id=record.incident_id,
            bib_number=record.bib_number,
            status=ReportStatus(record.status),
            video_url=record.video_url,
            created_at=record.created_at,
        )
