"""Authorization base: per-(actor, resource) boolean predicates plus Scope.

Predicates never raise and never query storage; they read role data from the
actor and state from the resource through the capability protocols in
``structs.capabilities``. A missing actor denies everything.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol

from sqlalchemy import Select, false

from domain.types import RoleName

logger = logging.getLogger(__name__)

DEFAULT_ACTIONS = ("index", "show", "create", "new", "update", "edit", "destroy")


class Actor(Protocol):
    """What policies read from the acting user (full or summary struct)."""

    id: int
    admin: bool
    role_name: Optional[RoleName]
    country: Optional[str]


@dataclass(frozen=True)
class ActorRoles:
    """Role facts about one actor, computed once per policy instance."""

    user_id: Optional[int] = None
    country: Optional[str] = None
    is_authenticated: bool = False
    is_admin: bool = False
    is_var_operator: bool = False
    is_national_referee: bool = False
    is_international_referee: bool = False
    is_jury_president: bool = False
    is_referee_manager: bool = False
    is_broadcast_viewer: bool = False

    @classmethod
    def of(cls, user: Optional[Actor]) -> "ActorRoles":
        if user is None:
            return cls()
        role = RoleName.parse(getattr(user, "role_name", None))
        return cls(
            user_id=user.id,
            country=getattr(user, "country", None) or None,
            is_authenticated=True,
            is_admin=bool(getattr(user, "admin", False)),
            is_var_operator=role == RoleName.VAR_OPERATOR,
            is_national_referee=role == RoleName.NATIONAL_REFEREE,
            is_international_referee=role == RoleName.INTERNATIONAL_REFEREE,
            is_jury_president=role == RoleName.JURY_PRESIDENT,
            is_referee_manager=role == RoleName.REFEREE_MANAGER,
            is_broadcast_viewer=role == RoleName.BROADCAST_VIEWER,
        )

    @property
    def is_referee(self) -> bool:
        return self.is_national_referee or self.is_international_referee

    @property
    def can_manage(self) -> bool:
        return self.is_admin or self.is_jury_president or self.is_referee_manager

    @property
    def can_report(self) -> bool:
        return self.is_referee or self.is_var_operator or self.can_manage


class ApplicationPolicy:
    """Deny-everything base; subclasses open up individual actions."""

    def __init__(self, user: Optional[Actor], record: Any = None) -> None:
        self.user = user
        self.record = record
        self.roles = ActorRoles.of(user)

    def index(self) -> bool:
        return False

    def show(self) -> bool:
        return False

    def create(self) -> bool:
        return False

    def new(self) -> bool:
        return self.create()

    def update(self) -> bool:
        return False

    def edit(self) -> bool:
        return self.update()

    def destroy(self) -> bool:
        return False

    def record_has(self, capability: type) -> bool:
        """True when the record exposes the capability protocol's attributes."""
        return self.record is not None and isinstance(self.record, capability)

    def permits(self, action: str) -> bool:
        """Dispatch by action name; unknown actions are denied."""
        predicate = getattr(self, action, None)
        if action.startswith("_") or action == "permits" or not inspect.ismethod(predicate):
            logger.debug("%s has no action %r", type(self).__name__, action)
            return False
        return bool(predicate())

    class Scope:
        """Narrows a collection statement to what the actor may see."""

        def __init__(self, user: Optional[Actor], statement: Select) -> None:
            self.user = user
            self.statement = statement
            self.roles = ActorRoles.of(user)

        def resolve(self) -> Select:
            raise NotImplementedError(f"{type(self).__qualname__}.resolve is not implemented")

        def all(self) -> Select:
            return self.statement

        def none(self) -> Select:
            return self.statement.where(false())


class AuthenticatedReadPolicy(ApplicationPolicy):
    """Reference data: any signed-in actor may list and view."""

    def index(self) -> bool:
        return self.roles.is_authenticated

    def show(self) -> bool:
        return self.roles.is_authenticated

    class Scope(ApplicationPolicy.Scope):
        def resolve(self) -> Select:
            return self.all() if self.roles.is_authenticated else self.none()
