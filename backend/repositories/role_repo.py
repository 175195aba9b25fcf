from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select

from domain.types import RoleName
from models.role import Role
from structs.users import Role as RoleStruct
from structs.users import RoleSummary
from .base import BaseRepository


class RoleRepository(BaseRepository[Role]):
    """Repository for Role lookup rows."""

    record_class = Role
    struct_class = RoleStruct
    summary_class = RoleSummary
    ordering = ("name",)

    returns_one = ("find_by_name",)
    returns_many = ("all_names",)

    async def find_by_name(self, name: RoleName | str) -> Optional[RoleStruct]:
        role_name = RoleName.parse(name)
        if role_name is None:
            return None
        return await self.find_by(name=role_name)

    async def name_exists(self, name: RoleName | str) -> bool:
        role_name = RoleName.parse(name)
        return role_name is not None and await self.exists(name=role_name)

    async def all_names(self) -> List[str]:
        result = await self.session.execute(select(Role.name).order_by(Role.name))
        return list(result.scalars().all())

    def build_struct(self, record: Role) -> RoleStruct:
        return RoleStruct(
            id=record.id,
            name=record.name,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    def build_summary(self, record: Role) -> RoleSummary:
        return RoleSummary(id=record.id, name=RoleName(record.name))
