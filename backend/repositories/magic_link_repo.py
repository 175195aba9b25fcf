from __future__ import annotations

import secrets
from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy import delete, select

from core.config import get_settings
from domain.clock import utcnow
from models.magic_link import MagicLink
from structs.users import MagicLink as MagicLinkStruct
from structs.users import MagicLinkSummary
from .base import BaseRepository


def generate_token() -> str:
    return secrets.token_urlsafe(32)


class MagicLinkRepository(BaseRepository[MagicLink]):
    """Repository for single-use login links.

    ``now`` parameters default to the current UTC time and exist so callers
    and tests can pin the clock.
    """

    record_class = MagicLink
    struct_class = MagicLinkStruct
    summary_class = MagicLinkSummary

    returns_one = ("find_by_token", "find_valid_by_token", "create_for_user", "mark_as_used")
    returns_many = ("for_user", "active_for_user", "expired", "used")

    async def find_by_token(self, token: str) -> Optional[MagicLinkStruct]:
        if not token:
            return None
        return await self.find_by(token=token)

    async def find_valid_by_token(
        self, token: str, now: Optional[datetime] = None
    ) -> Optional[MagicLinkStruct]:
        if not token:
            return None
        stmt = self._active(self.base_scope(), now).where(MagicLink.token == token)
        return await self._one(stmt)

    async def create_for_user(
        self, user_id: int, expires_in: Optional[timedelta] = None
    ) -> Optional[MagicLinkStruct]:
        if expires_in is None:
            expires_in = timedelta(hours=get_settings().magic_link_ttl_hours)
        return await self.create(
            {
                "user_id": user_id,
                "token": generate_token(),
                "expires_at": utcnow() + expires_in,
            }
        )

    async def mark_as_used(
        self, id: int, now: Optional[datetime] = None
    ) -> Optional[MagicLinkStruct]:
        return await self.update(id, {"used_at": now or utcnow()})

    async def for_user(self, user_id: int) -> List[MagicLinkSummary]:
        return await self.where(user_id=user_id)

    async def active_for_user(
        self, user_id: int, now: Optional[datetime] = None
    ) -> List[MagicLinkSummary]:
        stmt = self._active(self.base_scope(), now).where(MagicLink.user_id == user_id)
        return await self._many(stmt)

    async def expired(self, now: Optional[datetime] = None) -> List[MagicLinkSummary]:
        stmt = self.base_scope().where(MagicLink.expires_at <= (now or utcnow()))
        return await self._many(stmt)

    async def used(self) -> List[MagicLinkSummary]:
        return await self._many(self.base_scope().where(MagicLink.used_at.is_not(None)))

    async def delete_expired(self, now: Optional[datetime] = None) -> bool:
        await self.session.execute(
            delete(MagicLink).where(MagicLink.expires_at <= (now or utcnow()))
        )
        return True

    async def delete_all_for_user(self, user_id: int) -> bool:
        await self.session.execute(delete(MagicLink).where(MagicLink.user_id == user_id))
        return True

    async def has_active_link(self, user_id: int, now: Optional[datetime] = None) -> bool:
        stmt = self._active(select(MagicLink.id), now).where(MagicLink.user_id == user_id)
        result = await self.session.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None

    @staticmethod
    def _active(stmt, now: Optional[datetime]):
        return stmt.where(MagicLink.expires_at > (now or utcnow())).where(
            MagicLink.used_at.is_(None)
        )

    def build_struct(self, record: MagicLink) -> MagicLinkStruct:
        return MagicLinkStruct(
            id=record.id,
            user_id=record.user_id,
            token=record.token,
            expires_at=record.expires_at,
            used_at=record.used_at,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    def build_summary(self, record: MagicLink) -> MagicLinkSummary:
        return MagicLinkSummary(
            id=record.id,
            user_id=record.user_id,
            expires_at=record.expires_at,
            used_at=record.used_at,
            created_at=record.created_at,
        )
