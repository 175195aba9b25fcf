from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from domain.errors import InvalidTransition, RecordInvalid
from domain.types import DESCRIPTION_MAX_LEN, IncidentDecision, IncidentStatus
from .base import Base, IdTimestampMixin, blank_to_none, require_member
from .race import Race


class Incident(IdTimestampMixin, Base):
    """Rule infringement under review; groups one or more reports."""

    __tablename__ = "incidents"

    race_id: Mapped[int] = mapped_column(
        ForeignKey("races.id", ondelete="CASCADE"), nullable=False
    )
    race_location_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("race_locations.id", ondelete="SET NULL"), nullable=True
    )
    penalty_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("penalties.id", ondelete="SET NULL"), nullable=True
    )
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=IncidentStatus.UNOFFICIAL.value
    )
    decision: Mapped[str] = mapped_column(
        String(32), nullable=False, default=IncidentDecision.PENDING.value
    )
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    officialized_by_user_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    officialized_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    decided_by_user_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    decided_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    decision_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    race: Mapped[Race] = relationship(Race, lazy="raise")

    __table_args__ = (
        CheckConstraint(
            "status IN ('unofficial', 'official')", name="ck_incidents_status"
        ),
        CheckConstraint(
            "decision IN ('pending', 'penalty_applied', 'rejected', 'no_action')",
            name="ck_incidents_decision",
        ),
        Index("ix_incidents_race_status", "race_id", "status"),
    )

    @validates("status")
    def _validate_status(self, key: str, value: str) -> str:
        new_status = require_member(self, key, value, IncidentStatus)
        if self.status == IncidentStatus.OFFICIAL.value and new_status != self.status:
            raise InvalidTransition("Incident", self.status, new_status)
        return new_status

    @validates("decision")
    def _validate_decision(self, key: str, value: str) -> str:
        return require_member(self, key, value, IncidentDecision)

    @validates("decision_notes", "description")
    def _validate_text(self, key: str, value: Optional[str]) -> Optional[str]:
        value = blank_to_none(value)
        if value is not None and len(value) > DESCRIPTION_MAX_LEN:
            raise RecordInvalid(
                "Incident", key, f"is too long (maximum is {DESCRIPTION_MAX_LEN} characters)"
            )
        return value
