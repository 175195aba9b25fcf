from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from sqlalchemy import or_, select
from sqlalchemy.orm import joinedload

from core.security import hash_password, verify_password
from domain.types import RoleName
from models.role import Role
from models.user import User
from structs.users import User as UserStruct
from structs.users import UserSummary
from .base import BaseRepository, contains_pattern

logger = logging.getLogger(__name__)

REFEREE_ROLES = (RoleName.NATIONAL_REFEREE, RoleName.INTERNATIONAL_REFEREE)

_UNKNOWN_ROLE = object()


class UserRepository(BaseRepository[User]):
    """Repository for users, with role name resolution and password hashing.

    ``create``/``update`` accept ``role_name`` (resolved to ``role_id``; an
    unknown role rejects the write) and a plain ``password`` (stored hashed).
    """

    record_class = User
    struct_class = UserStruct
    summary_class = UserSummary

    returns_one = ("find_by_email", "authenticate")
    returns_many = ("admins", "referees", "with_role", "search")

    def eager_load(self):
        return (joinedload(User.role),)

    async def find_by_email(self, email: str) -> Optional[UserStruct]:
        if not email:
            return None
        return await self.find_by(email_address=email.strip().lower())

    async def authenticate(self, email: str, password: str) -> Optional[UserStruct]:
        """Return the user when the password matches, otherwise None."""
        if not email:
            return None
        stmt = self.base_scope().where(User.email_address == email.strip().lower())
        result = await self.session.execute(stmt.limit(1))
        record = result.scalars().first()
        if record is None or not verify_password(password, record.password_digest):
            logger.info("Authentication failed for %s", email)
            return None
        return self.build_struct(record)

    async def admins(self) -> List[UserSummary]:
        return await self.where(admin=True)

    async def referees(self) -> List[UserSummary]:
        stmt = self.base_scope().join(User.role).where(
            Role.name.in_([role.value for role in REFEREE_ROLES])
        )
        return await self._many(stmt)

    async def with_role(self, role_name: RoleName | str) -> List[UserSummary]:
        role = RoleName.parse(role_name)
        if role is None:
            return []
        stmt = self.base_scope().join(User.role).where(Role.name == role.value)
        return await self._many(stmt)

    async def search(self, query: Optional[str]) -> List[UserSummary]:
        if not query or not query.strip():
            return []
        pattern = contains_pattern(query.strip())
        stmt = self.base_scope().where(
            or_(
                User.email_address.ilike(pattern, escape="\\"),
                User.name.ilike(pattern, escape="\\"),
            )
        )
        return await self._many(stmt)

    async def email_exists(self, email: str) -> bool:
        return bool(email) and await self.exists(email_address=email.strip().lower())

    async def create(self, attrs: Mapping[str, Any]) -> Optional[UserStruct]:
        prepared = await self._prepare_user_attrs(attrs)
        if prepared is None:
            return None
        return await super().create(prepared)

    async def update(self, id: Optional[int], attrs: Mapping[str, Any]) -> Optional[UserStruct]:
        prepared = await self._prepare_user_attrs(attrs)
        if prepared is None:
            return None
        return await super().update(id, prepared)

    async def _prepare_user_attrs(self, attrs: Mapping[str, Any]) -> Optional[dict]:
        prepared = dict(attrs)
        if "role_name" in prepared:
            role_id = await self._role_id(prepared.pop("role_name"))
            if role_id is _UNKNOWN_ROLE:
                logger.warning("Unknown role %r in user attributes", attrs.get("role_name"))
                return None
            prepared["role_id"] = role_id
        if "password" in prepared:
            password = prepared.pop("password")
            if password:
                prepared["password_digest"] = hash_password(password)
        return prepared

    async def _role_id(self, role_name: Any) -> Any:
        if role_name is None or role_name == "":
            return None
        role = RoleName.parse(role_name)
        if role is None:
            return _UNKNOWN_ROLE
        result = await self.session.execute(select(Role.id).where(Role.name == role.value))
        role_id = result.scalar_one_or_none()
        return _UNKNOWN_ROLE if role_id is None else role_id

    def build_struct(self, record: User) -> UserStruct:
        return UserStruct(
            id=record.id,
            email_address=record.email_address,
            name=record.name,
            admin=record.admin,
            role_name=record.role.name if record.role else None,
            country=record.country,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    def build_summary(self, record: User) -> UserSummary:
        return UserSummary(
            id=record.id,
            email_address=record.email_address,
            name=record.name,
            admin=record.admin,
            role_name=RoleName(record.role.name) if record.role else None,
            country=record.country,
            created_at=record.created_at,
        )
