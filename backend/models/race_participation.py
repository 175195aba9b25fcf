from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from domain.errors import RecordInvalid
from domain.types import ParticipationStatus
from .athlete import Athlete
from .base import Base, IdTimestampMixin, require_member
from .team import Team


class RaceParticipation(IdTimestampMixin, Base):
    """Athlete registered in a race under a bib number."""

    __tablename__ = "race_participations"

    race_id: Mapped[int] = mapped_column(
        ForeignKey("races.id", ondelete="CASCADE"), nullable=False
    )
    athlete_id: Mapped[int] = mapped_column(
        ForeignKey("athletes.id", ondelete="CASCADE"), nullable=False
    )
    team_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("teams.id", ondelete="SET NULL"), nullable=True
    )
    bib_number: Mapped[int] = mapped_column(Integer, nullable=False)
    heat: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    active_in_heat: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=ParticipationStatus.REGISTERED.value
    )
    start_time: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    finish_time: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    rank: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    athlete: Mapped[Athlete] = relationship(Athlete, lazy="raise")
    team: Mapped[Optional[Team]] = relationship(Team, lazy="raise")

    __table_args__ = (
        UniqueConstraint("race_id", "athlete_id", name="uq_race_participations_race_athlete"),
        UniqueConstraint("race_id", "bib_number", name="uq_race_participations_race_bib"),
        Index("ix_race_participations_status", "race_id", "status"),
    )

    @validates("bib_number")
    def _validate_bib(self, key: str, value: int) -> int:
        if value is None or int(value) <= 0:
            raise RecordInvalid("RaceParticipation", key, "must be a positive integer")
        return int(value)

    @validates("status")
    def _validate_status(self, key: str, value: str) -> str:
        return require_member(self, key, value, ParticipationStatus)
