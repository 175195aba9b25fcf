# Ensure backend is at sys.path[0] when pytest runs (from repo root or from backend dir)
import sys
from pathlib import Path

import pytest_asyncio

_tests_dir = Path(__file__).resolve().parent
_backend = _tests_dir.parent
_str_backend = str(_backend)
if sys.path[0:1] != [_str_backend]:
    sys.path.insert(0, _str_backend)

from core.database import create_schema, dispose_database, get_database_manager, init_database  # noqa: E402


@pytest_asyncio.fixture
async def database():
    """Fresh in-memory SQLite schema per test."""
    await init_database("sqlite+aiosqlite:///:memory:")
    await create_schema()
    try:
        yield get_database_manager()
    finally:
        await dispose_database()


@pytest_asyncio.fixture
async def session(database):
    """Session that commits on exit, like a request-scoped unit of work."""
    async with database.session() as db_session:
        yield db_session
