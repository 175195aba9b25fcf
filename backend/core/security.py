from __future__ import annotations

from typing import Optional

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, password_digest: Optional[str]) -> bool:
    """Check a plain password against a stored digest; a missing digest never matches."""
    if not password_digest:
        return False
    return pwd_context.verify(plain_password, password_digest)
