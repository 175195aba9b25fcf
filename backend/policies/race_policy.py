from __future__ import annotations

from sqlalchemy import Select

from structs.capabilities import RaceStateful
from .base import ActorRoles, ApplicationPolicy


def _can_view_races(roles: ActorRoles) -> bool:
    return roles.is_admin or roles.is_var_operator or roles.is_referee or roles.can_manage


class RacePolicy(ApplicationPolicy):
    """Operators run races; referees and managers read them.

    Completed races are frozen for edits but may still be destroyed.
    """

    record: RaceStateful

    def index(self) -> bool:
        return _can_view_races(self.roles)

    def show(self) -> bool:
        return _can_view_races(self.roles)

    def create(self) -> bool:
        return self.roles.is_admin or self.roles.is_var_operator

    def update(self) -> bool:
        if not (self.roles.is_admin or self.roles.is_var_operator):
            return False
        return not (self.record_has(RaceStateful) and self.record.is_completed)

    def destroy(self) -> bool:
        return self.roles.is_admin or self.roles.is_var_operator

    class Scope(ApplicationPolicy.Scope):
        def resolve(self) -> Select:
            return self.all() if _can_view_races(self.roles) else self.none()
