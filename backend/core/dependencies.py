from typing import AsyncGenerator, TypeVar

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from policies.base import ApplicationPolicy

from .database import get_database_manager

P = TypeVar("P", bound=ApplicationPolicy)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding an AsyncSession from the DatabaseManager."""
    manager = get_database_manager()
    async with manager.session() as session:
        yield session


def authorize(policy: P, action: str) -> P:
    """Return the policy when it permits ``action``; otherwise raise 403."""
    if not policy.permits(action):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Not authorized to {action} {type(policy).__name__.removesuffix('Policy').lower()}",
        )
    return policy
