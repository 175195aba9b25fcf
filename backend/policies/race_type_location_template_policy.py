from __future__ import annotations

from sqlalchemy import Select

from .base import ApplicationPolicy


class RaceTypeLocationTemplatePolicy(ApplicationPolicy):
    """Templates shape every future race; admins only."""

    def index(self) -> bool:
        return self.roles.is_admin

    def show(self) -> bool:
        return self.roles.is_admin

    def create(self) -> bool:
        return self.roles.is_admin

    def update(self) -> bool:
        return self.roles.is_admin

    def destroy(self) -> bool:
        return self.roles.is_admin

    def reorder(self) -> bool:
        return self.roles.is_admin

    class Scope(ApplicationPolicy.Scope):
        def resolve(self) -> Select:
            return self.all() if self.roles.is_admin else self.none()
