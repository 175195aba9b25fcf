from __future__ import annotations

from sqlalchemy import Select

from structs.capabilities import Owned, ReportStateful
from .base import ApplicationPolicy


class ReportPolicy(ApplicationPolicy):
    """Owners edit their own reports while open; managers may edit any.

    Ownership compares ``record.user_id`` with the actor id in memory.
    """

    record: ReportStateful

    def index(self) -> bool:
        return self.roles.is_authenticated

    def show(self) -> bool:
        return self.roles.is_authenticated

    def create(self) -> bool:
        return self.roles.can_report

    def update(self) -> bool:
        if self.roles.can_manage:
            return True
        return self._owns_record() and self._is_open()

    def destroy(self) -> bool:
        if self.roles.can_manage:
            return True
        return self._owns_record() and self._is_draft()

    def submit(self) -> bool:
        return self._owns_record() and self._is_draft()

    def attach_video(self) -> bool:
        return self.roles.can_manage or self._owns_record()

    def _owns_record(self) -> bool:
        return (
            self.roles.user_id is not None
            and self.record_has(Owned)
            and self.record.user_id == self.roles.user_id
        )

    def _is_draft(self) -> bool:
        return self.record_has(ReportStateful) and self.record.is_draft

    def _is_open(self) -> bool:
        return self.record_has(ReportStateful) and (self.record.is_draft or self.record.is_submitted)

    class Scope(ApplicationPolicy.Scope):
        def resolve(self) -> Select:
            return self.all() if self.roles.can_report else self.none()
