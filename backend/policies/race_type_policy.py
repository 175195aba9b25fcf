from __future__ import annotations

from .base import AuthenticatedReadPolicy


class RaceTypePolicy(AuthenticatedReadPolicy):
    def create(self) -> bool:
        return self.roles.can_manage

    def update(self) -> bool:
        return self.roles.can_manage

    def destroy(self) -> bool:
        return self.roles.is_referee_manager

    def manage_templates(self) -> bool:
        return self.roles.can_manage


class PenaltyPolicy(AuthenticatedReadPolicy):
    """Rule book entries; managers maintain them."""

    def create(self) -> bool:
        return self.roles.can_manage

    def update(self) -> bool:
        return self.roles.can_manage

    def destroy(self) -> bool:
        return self.roles.is_referee_manager

    def import_rules(self) -> bool:
        return self.roles.can_manage

    def export(self) -> bool:
        return self.roles.can_manage
