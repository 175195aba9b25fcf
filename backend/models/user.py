from __future__ import annotations

from typing import Optional

from sqlalchemy import Boolean, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from .base import Base, IdTimestampMixin, blank_to_none, require_present
from .role import Role


class User(IdTimestampMixin, Base):
    """Application user; role is optional, admin is an independent flag."""

    __tablename__ = "users"

    email_address: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    password_digest: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    role_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("roles.id", ondelete="SET NULL"), nullable=True
    )
    # ISO alpha-3 code; drives national referee incident visibility.
    country: Mapped[Optional[str]] = mapped_column(String(3), nullable=True)

    role: Mapped[Optional[Role]] = relationship(Role, lazy="raise")

    @validates("email_address")
    def _normalize_email(self, key: str, value: str) -> str:
        require_present(self, key, value)
        return value.strip().lower()

    @validates("name", "country")
    def _normalize_optional(self, key: str, value: Optional[str]) -> Optional[str]:
        value = blank_to_none(value)
        if key == "country" and value is not None:
            return value.strip().upper()
        return value
