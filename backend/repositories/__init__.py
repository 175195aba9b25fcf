"""Repository layer for DB access only (queries + struct mapping).

Repositories operate on canonical models from backend/models/ and return
immutable structs from backend/structs/. They accept an AsyncSession
explicitly and never commit; the session owner decides the transaction.
"""

from .base import BaseRepository
from .athlete_repo import AthleteRepository
from .competition_repo import CompetitionRepository
from .incident_repo import IncidentRepository
from .magic_link_repo import MagicLinkRepository
from .penalty_repo import PenaltyRepository
from .race_location_repo import RaceLocationRepository
from .race_participation_repo import RaceParticipationRepository
from .race_repo import RaceRepository
from .race_type_location_template_repo import RaceTypeLocationTemplateRepository
from .race_type_repo import RaceTypeRepository
from .report_repo import ReportRepository
from .role_repo import RoleRepository
from .session_repo import SessionRepository
from .user_repo import UserRepository

__all__ = [
    "BaseRepository",
    "AthleteRepository",
    "CompetitionRepository",
    "IncidentRepository",
    "MagicLinkRepository",
    "PenaltyRepository",
    "RaceLocationRepository",
    "RaceParticipationRepository",
    "RaceRepository",
    "RaceTypeLocationTemplateRepository",
    "RaceTypeRepository",
    "ReportRepository",
    "RoleRepository",
    "SessionRepository",
    "UserRepository",
]
