"""Services: multi-repository operations (imports, copies, race setup)."""

from .athlete_import_service import bulk_import
from .participant_copy_service import copy_participants
from .race_service import create_race

__all__ = [
    "bulk_import",
    "copy_participants",
    "create_race",
]
