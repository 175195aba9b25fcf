from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from domain.errors import InvalidTransition
from domain.types import GenderCategory, RaceStatus, StageType, enum_values
from .base import Base, IdTimestampMixin, require_member, require_present
from .competition import Competition
from .race_type import RaceType


def _in_clause(column: str, enum_cls) -> str:
    values = ", ".join(f"'{v}'" for v in enum_values(enum_cls))
    return f"{column} IN ({values})"


class Race(IdTimestampMixin, Base):
    """Single race (one stage/heat) within a competition."""

    __tablename__ = "races"

    competition_id: Mapped[int] = mapped_column(
        ForeignKey("competitions.id", ondelete="CASCADE"), nullable=False
    )
    race_type_id: Mapped[int] = mapped_column(
        ForeignKey("race_types.id"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    stage_type: Mapped[str] = mapped_column(String(32), nullable=False)
    stage_name: Mapped[str] = mapped_column(String(255), nullable=False)
    heat_number: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default=RaceStatus.SCHEDULED.value
    )
    scheduled_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    gender_category: Mapped[str] = mapped_column(String(2), nullable=False)

    competition: Mapped[Competition] = relationship(Competition, lazy="raise")
    race_type: Mapped[RaceType] = relationship(RaceType, lazy="raise")

    __table_args__ = (
        UniqueConstraint("competition_id", "position", name="uq_races_competition_position"),
        CheckConstraint(_in_clause("status", RaceStatus), name="ck_races_status"),
        CheckConstraint(
            _in_clause("gender_category", GenderCategory), name="ck_races_gender_category"
        ),
        Index("ix_races_status_scheduled_at", "status", "scheduled_at"),
        Index("ix_races_race_type_id", "race_type_id"),
    )

    @validates("name", "stage_name")
    def _validate_required(self, key: str, value: str) -> str:
        return require_present(self, key, value)

    @validates("stage_type")
    def _validate_stage_type(self, key: str, value: str) -> str:
        return require_member(self, key, value, StageType)

    @validates("gender_category")
    def _validate_gender_category(self, key: str, value: str) -> str:
        return require_member(self, key, value, GenderCategory)

    @validates("status")
    def _validate_status(self, key: str, value: str) -> str:
        new_status = RaceStatus(require_member(self, key, value, RaceStatus))
        # On assignment self.status still holds the persisted value.
        if self.status is not None:
            current = RaceStatus(self.status)
            if not current.can_transition_to(new_status):
                raise InvalidTransition("Race", current.value, new_status.value)
        return new_status.value
