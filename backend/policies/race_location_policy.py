from __future__ import annotations

from structs.capabilities import TemplateDerived
from .base import AuthenticatedReadPolicy


class RaceLocationPolicy(AuthenticatedReadPolicy):
    """Locations copied from a race type template cannot be deleted per race."""

    record: TemplateDerived

    def create(self) -> bool:
        return self.roles.can_manage

    def update(self) -> bool:
        return self.roles.can_manage

    def destroy(self) -> bool:
        if not (self.roles.is_admin or self.roles.is_referee_manager):
            return False
        return self.record_has(TemplateDerived) and not self.record.is_standard
