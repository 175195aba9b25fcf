from __future__ import annotations

from sqlalchemy import Select

from .base import ActorRoles, ApplicationPolicy


def _is_operator(roles: ActorRoles) -> bool:
    return roles.is_admin or roles.is_var_operator


class RaceParticipationPolicy(ApplicationPolicy):
    """Start lists are maintained by admins and VAR operators."""

    def index(self) -> bool:
        return _is_operator(self.roles)

    def show(self) -> bool:
        return self.roles.is_authenticated

    def create(self) -> bool:
        return _is_operator(self.roles)

    def update(self) -> bool:
        return _is_operator(self.roles)

    def destroy(self) -> bool:
        return _is_operator(self.roles)

    def copy(self) -> bool:
        return _is_operator(self.roles)

    def import_athletes(self) -> bool:
        return _is_operator(self.roles)

    class Scope(ApplicationPolicy.Scope):
        def resolve(self) -> Select:
            return self.all() if _is_operator(self.roles) else self.none()
