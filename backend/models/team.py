from __future__ import annotations

from typing import Optional

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, IdTimestampMixin


class Team(IdTimestampMixin, Base):
    """Pair of athletes sharing a bib in team and relay races."""

    __tablename__ = "teams"

    race_id: Mapped[int] = mapped_column(
        ForeignKey("races.id", ondelete="CASCADE"), nullable=False
    )
    bib_number: Mapped[int] = mapped_column(Integer, nullable=False)
    team_type: Mapped[str] = mapped_column(String(16), nullable=False)
    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    athlete_1_id: Mapped[int] = mapped_column(ForeignKey("athletes.id"), nullable=False)
    athlete_2_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("athletes.id"), nullable=True
    )

    __table_args__ = (
        UniqueConstraint("race_id", "bib_number", name="uq_teams_race_bib"),
    )
