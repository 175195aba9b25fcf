from __future__ import annotations

from typing import List, Optional

from sqlalchemy import delete

from models.session import UserSession
from structs.users import Session, SessionSummary
from .base import BaseRepository


class SessionRepository(BaseRepository[UserSession]):
    """Repository for login sessions."""

    record_class = UserSession
    struct_class = Session
    summary_class = SessionSummary

    returns_one = ("create_for_user",)
    returns_many = ("for_user",)

    async def create_for_user(
        self,
        user_id: int,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Optional[Session]:
        return await self.create(
            {"user_id": user_id, "ip_address": ip_address, "user_agent": user_agent}
        )

    async def for_user(self, user_id: int) -> List[SessionSummary]:
        return await self.where(user_id=user_id)

    async def delete_all_for_user(self, user_id: int) -> bool:
        await self.session.execute(delete(UserSession).where(UserSession.user_id == user_id))
        return True

    def build_struct(self, record: UserSession) -> Session:
        return Session(
            id=record.id,
            user_id=record.user_id,
            ip_address=record.ip_address,
            user_agent=record.user_agent,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    def build_summary(self, record: UserSession) -> SessionSummary:
        return SessionSummary(
            id=record.id,
            user_id=record.user_id,
            ip_address=record.ip_address,
            created_at=record.created_at,
        )
