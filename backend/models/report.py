from __future__ import annotations

from typing import Optional

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, validates

from domain.errors import InvalidTransition, RecordInvalid
from domain.types import DESCRIPTION_MAX_LEN, ReportStatus
from .base import Base, IdTimestampMixin, blank_to_none, require_member, require_present

_REPORT_ORDER = [status.value for status in ReportStatus]


class Report(IdTimestampMixin, Base):
    """Observation filed by a referee or operator about a bib during a race."""

    __tablename__ = "reports"

    # Generated offline by the touch client; makes re-sends idempotent.
    client_uuid: Mapped[Optional[str]] = mapped_column(
        String(36), nullable=True, unique=True
    )
    race_id: Mapped[int] = mapped_column(
        ForeignKey("races.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    incident_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("incidents.id", ondelete="SET NULL"), nullable=True
    )
    race_location_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("race_locations.id", ondelete="SET NULL"), nullable=True
    )
    bib_number: Mapped[int] = mapped_column(Integer, nullable=False)
    athlete_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=ReportStatus.DRAFT.value
    )
    video_url: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)

    __table_args__ = (
        CheckConstraint(
            "status IN ('draft', 'submitted', 'finalized')", name="ck_reports_status"
        ),
        Index("ix_reports_race_id", "race_id"),
        Index("ix_reports_user_id", "user_id"),
    )

    @validates("description")
    def _validate_description(self, key: str, value: str) -> str:
        value = require_present(self, key, value)
        if len(value) > DESCRIPTION_MAX_LEN:
            raise RecordInvalid(
                "Report", key, f"is too long (maximum is {DESCRIPTION_MAX_LEN} characters)"
            )
        return value

    @validates("bib_number")
    def _validate_bib(self, key: str, value: int) -> int:
        if value is None or int(value) <= 0:
            raise RecordInvalid("Report", key, "must be a positive integer")
        return int(value)

    @validates("status")
    def _validate_status(self, key: str, value: str) -> str:
        new_status = require_member(self, key, value, ReportStatus)
        if self.status is not None and _REPORT_ORDER.index(new_status) < _REPORT_ORDER.index(self.status):
            raise InvalidTransition("Report", self.status, new_status)
        return new_status

    @validates("athlete_name", "video_url", "client_uuid")
    def _normalize_optional(self, key: str, value: Optional[str]) -> Optional[str]:
        return blank_to_none(value)
