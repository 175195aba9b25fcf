from __future__ import annotations

from datetime import date
from typing import Dict, List, Optional

from sqlalchemy import Select, func, or_, select

from domain.clock import today as current_day
from domain.types import CompetitionStatus
from models.competition import Competition
from structs.competitions import Competition as CompetitionStruct
from structs.competitions import CompetitionSummary
from .base import BaseRepository, contains_pattern, plain

SORT_ORDERS = {
    "recent": (Competition.start_date.desc(),),
    "oldest": (Competition.start_date.asc(),),
    "name": (Competition.name.asc(),),
}


_STATUS_VALUES = frozenset(s.value for s in CompetitionStatus)


def status_clause(status: CompetitionStatus, today: date):
    """WHERE clause selecting competitions in ``status`` on ``today``."""
    if status == CompetitionStatus.UPCOMING:
        return Competition.start_date > today
    if status == CompetitionStatus.ONGOING:
        return (Competition.start_date <= today) & (Competition.end_date >= today)
    return Competition.end_date < today


class CompetitionRepository(BaseRepository[Competition]):
    """Repository for competitions; newest first by start date.

    Date-relative queries take an optional ``today`` (defaults to the current
    UTC date).
    """

    record_class = Competition
    struct_class = CompetitionStruct
    summary_class = CompetitionSummary
    ordering = ("-start_date",)

    returns_one = ("find_by_name",)
    returns_many = (
        "upcoming",
        "ongoing",
        "past",
        "search",
        "by_country",
        "by_city",
        "by_date_range",
        "filtered",
    )

    async def find_by_name(self, name: str) -> Optional[CompetitionStruct]:
        return await self.find_by(name=name)

    async def upcoming(self, today: Optional[date] = None) -> List[CompetitionSummary]:
        stmt = (
            self.base_scope()
            .where(status_clause(CompetitionStatus.UPCOMING, today or current_day()))
            .order_by(None)
            .order_by(Competition.start_date.asc(), Competition.id.asc())
        )
        return await self._many(stmt)

    async def ongoing(self, today: Optional[date] = None) -> List[CompetitionSummary]:
        return await self._many(
            self._in_status(CompetitionStatus.ONGOING, today or current_day())
        )

    async def past(self, today: Optional[date] = None) -> List[CompetitionSummary]:
        return await self._many(self._in_status(CompetitionStatus.PAST, today or current_day()))

    async def search(self, query: Optional[str]) -> List[CompetitionSummary]:
        if not query or not query.strip():
            return []
        pattern = contains_pattern(query.strip())
        stmt = self.base_scope().where(
            or_(
                Competition.name.ilike(pattern, escape="\\"),
                Competition.city.ilike(pattern, escape="\\"),
                Competition.place.ilike(pattern, escape="\\"),
            )
        )
        return await self._many(stmt)

    async def by_country(self, country_code: str) -> List[CompetitionSummary]:
        return await self.where(country=country_code.strip().upper())

    async def by_city(self, city: str) -> List[CompetitionSummary]:
        """Case-insensitive exact city match."""
        return await self._many(
            self.base_scope().where(func.lower(Competition.city) == city.strip().lower())
        )

    async def by_date_range(self, start_date: date, end_date: date) -> List[CompetitionSummary]:
        """Competitions lying entirely within [start_date, end_date], oldest first."""
        stmt = (
            self.base_scope()
            .where(Competition.start_date >= start_date)
            .where(Competition.end_date <= end_date)
            .order_by(None)
            .order_by(Competition.start_date.asc(), Competition.id.asc())
        )
        return await self._many(stmt)

    async def filtered(
        self,
        status: Optional[CompetitionStatus | str] = None,
        sort: str = "recent",
        today: Optional[date] = None,
    ) -> List[CompetitionSummary]:
        """Listing filter; unknown statuses are ignored, sort is recent/oldest/name."""
        stmt = self.base_scope().order_by(None)
        if plain(status) in _STATUS_VALUES:
            stmt = stmt.where(status_clause(CompetitionStatus(status), today or current_day()))
        stmt = stmt.order_by(*SORT_ORDERS.get(sort, SORT_ORDERS["recent"]), Competition.id.asc())
        return await self._many(stmt)

    async def name_exists(self, name: str, exclude_id: Optional[int] = None) -> bool:
        stmt = select(Competition.id).where(Competition.name == name)
        if exclude_id is not None:
            stmt = stmt.where(Competition.id != exclude_id)
        result = await self.session.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None

    async def count_by_status(self, today: Optional[date] = None) -> Dict[str, int]:
        today = today or current_day()
        counts: Dict[str, int] = {}
        for status in CompetitionStatus:
            stmt = select(func.count()).select_from(Competition).where(status_clause(status, today))
            counts[status.value] = int((await self.session.execute(stmt)).scalar_one())
        return counts

    def _in_status(self, status: CompetitionStatus, today: date) -> Select:
        return self.base_scope().where(status_clause(status, today))

    def build_struct(self, record: Competition) -> CompetitionStruct:
        return CompetitionStruct(
            id=record.id,
            name=record.name,
            city=record.city,
            place=record.place,
            country=record.country,
            description=record.description or "",
            start_date=record.start_date,
            end_date=record.end_date,
            webpage_url=record.webpage_url,
            logo_url=record.logo_url,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    def build_summary(self, record: Competition) -> CompetitionSummary:
        return CompetitionSummary(
            id=record.id,
            name=record.name,
            city=record.city,
            place=record.place,
            country=record.country,
            start_date=record.start_date,
            end_date=record.end_date,
            created_at=record.created_at,
        )
