from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from domain.clock import utcnow
from domain.types import RoleName
from .base import Struct


class _RoleQueries:
    """Role predicates shared by the full and summary user structs."""

    @property
    def display_name(self) -> str:
        return self.name or self.email_address.split("@")[0]

    @property
    def is_admin(self) -> bool:
        return self.admin is True

    def has_role(self, role: RoleName | str) -> bool:
        return self.role_name is not None and self.role_name == RoleName.parse(role)

    @property
    def is_var_operator(self) -> bool:
        return self.role_name == RoleName.VAR_OPERATOR

    @property
    def is_national_referee(self) -> bool:
        return self.role_name == RoleName.NATIONAL_REFEREE

    @property
    def is_international_referee(self) -> bool:
        return self.role_name == RoleName.INTERNATIONAL_REFEREE

    @property
    def is_referee(self) -> bool:
        return self.is_national_referee or self.is_international_referee

    @property
    def is_jury_president(self) -> bool:
        return self.role_name == RoleName.JURY_PRESIDENT

    @property
    def is_referee_manager(self) -> bool:
        return self.role_name == RoleName.REFEREE_MANAGER

    @property
    def is_broadcast_viewer(self) -> bool:
        return self.role_name == RoleName.BROADCAST_VIEWER


class User(_RoleQueries, Struct):
    id: int
    email_address: str
    name: Optional[str] = None
    admin: bool = False
    role_name: Optional[RoleName] = None
    country: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @property
    def can_manage_users(self) -> bool:
        return self.is_admin


@dataclass(frozen=True)
class UserSummary(_RoleQueries):
    id: int
    email_address: str
    name: Optional[str]
    admin: bool
    role_name: Optional[RoleName]
    country: Optional[str]
    created_at: datetime


class Role(Struct):
    id: int
    name: RoleName
    created_at: datetime
    updated_at: datetime

    @property
    def display_name(self) -> str:
        return self.name.value.replace("_", " ").title()


@dataclass(frozen=True)
class RoleSummary:
    id: int
    name: RoleName


class Session(Struct):
    id: int
    user_id: int
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class SessionSummary:
    id: int
    user_id: int
    ip_address: Optional[str]
    created_at: datetime


class _LinkState:
    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return self.expires_at <= (now or utcnow())

    @property
    def is_used(self) -> bool:
        return self.used_at is not None

    def is_valid_for_use(self, now: Optional[datetime] = None) -> bool:
        return not self.is_used and not self.is_expired(now)


class MagicLink(_LinkState, Struct):
    id: int
    user_id: int
    token: str
    expires_at: datetime
    used_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class MagicLinkSummary(_LinkState):
    id: int
    user_id: int
    expires_at: datetime
    used_at: Optional[datetime]
    created_at: datetime
