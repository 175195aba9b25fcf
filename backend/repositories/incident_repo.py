from __future__ import annotations

import logging
from typing import List, Optional

from domain.clock import utcnow
from domain.types import IncidentDecision, IncidentStatus
from models.incident import Incident
from structs.incidents import Incident as IncidentStruct
from structs.incidents import IncidentSummary
from .base import BaseRepository

logger = logging.getLogger(__name__)


class IncidentRepository(BaseRepository[Incident]):
    """Repository for incidents and their officialize/decide workflow."""

    record_class = Incident
    struct_class = IncidentStruct
    summary_class = IncidentSummary

    returns_one = ("officialize", "decide")
    returns_many = ("for_race", "pending", "official", "unofficial")

    async def for_race(self, race_id: int) -> List[IncidentSummary]:
        return await self.where(race_id=race_id)

    async def pending(self, race_id: Optional[int] = None) -> List[IncidentSummary]:
        """Official incidents still awaiting a decision."""
        return await self._in_race(
            race_id, status=IncidentStatus.OFFICIAL, decision=IncidentDecision.PENDING
        )

    async def official(self, race_id: Optional[int] = None) -> List[IncidentSummary]:
        return await self._in_race(race_id, status=IncidentStatus.OFFICIAL)

    async def unofficial(self, race_id: Optional[int] = None) -> List[IncidentSummary]:
        return await self._in_race(race_id, status=IncidentStatus.UNOFFICIAL)

    async def officialize(self, id: int, user_id: int) -> Optional[IncidentStruct]:
        """Mark an unofficial incident official; None if missing or already official."""
        incident = await self.find(id)
        if incident is None or not incident.can_officialize:
            return None
        return await self.update(
            id,
            {
                "status": IncidentStatus.OFFICIAL,
                "officialized_by_user_id": user_id,
                "officialized_at": utcnow(),
            },
        )

    async def decide(
        self,
        id: int,
        user_id: int,
        decision: IncidentDecision | str,
        notes: Optional[str] = None,
        penalty_id: Optional[int] = None,
    ) -> Optional[IncidentStruct]:
        """Record the jury decision on an official, pending incident."""
        try:
            decision = IncidentDecision(decision)
        except ValueError:
            logger.warning("Incident %s: unknown decision %r", id, decision)
            return None
        if decision == IncidentDecision.PENDING:
            return None
        incident = await self.find(id)
        if incident is None or not incident.can_decide:
            logger.info("Incident %s is not awaiting a decision", id)
            return None
        attrs = {
            "decision": decision,
            "decided_by_user_id": user_id,
            "decided_at": utcnow(),
            "decision_notes": notes,
        }
        if decision == IncidentDecision.PENALTY_APPLIED:
            attrs["penalty_id"] = penalty_id
        return await self.update(id, attrs)

    async def _in_race(self, race_id: Optional[int], **criteria) -> List[IncidentSummary]:
        if race_id is not None:
            criteria["race_id"] = race_id
        return await self.where(**criteria)

    def build_struct(self, record: Incident) -> IncidentStruct:
        return IncidentStruct(
            id=record.id,
            race_id=record.race_id,
            race_location_id=record.race_location_id,
            penalty_id=record.penalty_id,
            status=record.status,
            decision=record.decision,
            description=record.description,
            officialized_by_user_id=record.officialized_by_user_id,
            officialized_at=record.officialized_at,
            decided_by_user_id=record.decided_by_user_id,
            decided_at=record.decided_at,
            decision_notes=record.decision_notes,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    def build_summary(self, record: Incident) -> IncidentSummary:
        return IncidentSummary(
            id=record.id,
            race_id=record.race_id,
            race_location_id=record.race_location_id,
            status=IncidentStatus(record.status),
            decision=IncidentDecision(record.decision),
            created_at=record.created_at,
        )
