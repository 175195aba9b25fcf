from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Struct(BaseModel):
    """Frozen full-record snapshot; unknown keys are rejected."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    @property
    def is_persisted(self) -> bool:
        return getattr(self, "id", None) is not None

    def to_param(self) -> str:
        return str(getattr(self, "id", ""))


def titleize(value: str) -> str:
    """``"in_progress"`` -> ``"In Progress"``."""
    return value.replace("_", " ").strip().title()
