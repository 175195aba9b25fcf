from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, validates

from domain.types import RoleName
from .base import Base, IdTimestampMixin, require_member


class Role(IdTimestampMixin, Base):
    """Permission level lookup row; name is one of ``RoleName``."""

    __tablename__ = "roles"

    name: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)

    @validates("name")
    def _validate_name(self, key: str, value: str) -> str:
        return require_member(self, key, value, RoleName)
