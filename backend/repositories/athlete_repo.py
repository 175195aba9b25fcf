from __future__ import annotations

from typing import List, Optional, Tuple

from sqlalchemy import or_

from domain.types import Gender
from models.athlete import Athlete
from structs.athletes import Athlete as AthleteStruct
from structs.athletes import AthleteSummary
from .base import BaseRepository, contains_pattern


class AthleteRepository(BaseRepository[Athlete]):
    """Repository for athletes, alphabetical by last then first name."""

    record_class = Athlete
    struct_class = AthleteStruct
    summary_class = AthleteSummary
    ordering = ("last_name", "first_name")

    returns_one = ("find_by_license", "find_by_name")
    returns_many = ("search", "by_country")

    async def find_by_license(self, license_number: Optional[str]) -> Optional[AthleteStruct]:
        if not license_number:
            return None
        return await self.find_by(license_number=license_number)

    async def find_by_name(
        self, first_name: str, last_name: str, gender: Gender | str, country: str
    ) -> Optional[AthleteStruct]:
        return await self.find_by(
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            gender=gender,
            country=country.strip().upper(),
        )

    async def find_or_create_by(
        self,
        first_name: str,
        last_name: str,
        gender: Gender | str,
        country: str,
        license_number: Optional[str] = None,
    ) -> Tuple[Optional[AthleteStruct], bool]:
        """Return ``(athlete, created)`` keyed by name, gender and country.

        A rejected insert yields ``(None, False)``.
        """
        existing = await self.find_by_name(first_name, last_name, gender, country)
        if existing is not None:
            return existing, False
        created = await self.create(
            {
                "first_name": first_name,
                "last_name": last_name,
                "gender": gender,
                "country": country,
                "license_number": license_number,
            }
        )
        return created, created is not None

    async def search(self, query: Optional[str]) -> List[AthleteSummary]:
        if not query or not query.strip():
            return []
        pattern = contains_pattern(query.strip())
        stmt = self.base_scope().where(
            or_(
                Athlete.first_name.ilike(pattern, escape="\\"),
                Athlete.last_name.ilike(pattern, escape="\\"),
            )
        )
        return await self._many(stmt)

    async def by_country(self, country_code: str) -> List[AthleteSummary]:
        return await self.where(country=country_code.strip().upper())

    def build_struct(self, record: Athlete) -> AthleteStruct:
        return AthleteStruct(
            id=record.id,
            first_name=record.first_name,
            last_name=record.last_name,
            country=record.country,
            gender=record.gender,
            license_number=record.license_number,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    def build_summary(self, record: Athlete) -> AthleteSummary:
        return AthleteSummary(
            id=record.id,
            first_name=record.first_name,
            last_name=record.last_name,
            country=record.country,
            gender=Gender(record.gender),
            license_number=record.license_number,
        )
