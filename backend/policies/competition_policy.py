from __future__ import annotations

from .base import AuthenticatedReadPolicy


class CompetitionPolicy(AuthenticatedReadPolicy):
    def create(self) -> bool:
        return self.roles.can_manage

    def update(self) -> bool:
        return self.roles.can_manage

    def destroy(self) -> bool:
        return self.roles.is_referee_manager

    def duplicate(self) -> bool:
        return self.roles.can_manage

    def archive(self) -> bool:
        return self.roles.can_manage
