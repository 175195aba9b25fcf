"""Canonical SQLAlchemy models for the race logger.

Models carry columns, constraints and attribute validators only; query logic
lives in ``repositories`` and authorization in ``policies``.
"""

from .base import Base
from .athlete import Athlete
from .competition import Competition
from .incident import Incident
from .locations import RaceLocation, RaceTypeLocationTemplate
from .magic_link import MagicLink
from .penalty import Penalty
from .race import Race
from .race_participation import RaceParticipation
from .race_type import RaceType
from .report import Report
from .role import Role
from .session import UserSession
from .team import Team
from .user import User

__all__ = [
    "Base",
    "Athlete",
    "Competition",
    "Incident",
    "MagicLink",
    "Penalty",
    "Race",
    "RaceLocation",
    "RaceParticipation",
    "RaceType",
    "RaceTypeLocationTemplate",
    "Report",
    "Role",
    "Team",
    "User",
    "UserSession",
]
