from __future__ import annotations

from sqlalchemy import Select

from models.competition import Competition
from models.race import Race
from models.incident import Incident
from structs.capabilities import IncidentStateful
from .base import ApplicationPolicy


class IncidentPolicy(ApplicationPolicy):
    """Reporters edit incidents until officialized; the jury president decides."""

    record: IncidentStateful

    def index(self) -> bool:
        return self.roles.is_authenticated

    def show(self) -> bool:
        return self.roles.is_authenticated

    def create(self) -> bool:
        return self.roles.can_report

    def update(self) -> bool:
        if self.roles.can_manage:
            return True
        if not (self.roles.is_referee or self.roles.is_var_operator):
            return False
        return self.record_has(IncidentStateful) and self.record.is_unofficial

    def destroy(self) -> bool:
        return self.roles.is_admin or self.roles.is_referee_manager

    def officialize(self) -> bool:
        return self.roles.is_jury_president

    def apply(self) -> bool:
        return self.roles.is_jury_president

    def apply_penalty(self) -> bool:
        return self.apply()

    def decline(self) -> bool:
        return self.roles.is_jury_president

    def reject(self) -> bool:
        return self.decline()

    def no_action(self) -> bool:
        return self.roles.is_jury_president

    class Scope(ApplicationPolicy.Scope):
        """National referees with a country only see incidents of competitions held there."""

        def resolve(self) -> Select:
            roles = self.roles
            if not roles.is_authenticated:
                return self.none()
            if roles.is_national_referee and roles.country:
                return (
                    self.statement.join(Race, Incident.race_id == Race.id)
                    .join(Competition, Race.competition_id == Competition.id)
                    .where(Competition.country == roles.country)
                )
            if roles.can_manage or roles.is_referee or roles.is_var_operator:
                return self.all()
            return self.none()
