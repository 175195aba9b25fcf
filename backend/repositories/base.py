from __future__ import annotations

import logging
from enum import Enum
from typing import (
    Any,
    ClassVar,
    Generic,
    Iterable,
    List,
    Mapping,
    Optional,
    Tuple,
    Type,
    TypeVar,
)

from sqlalchemy import Select, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from domain.errors import InvalidTransition, NotFoundError, RecordInvalid
from models.base import Base

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Base)

# Exceptions a write may raise for bad data; they become a None result.
WRITE_REJECTIONS = (IntegrityError, RecordInvalid, InvalidTransition)


def plain(value: Any) -> Any:
    """Enum members are stored as their string values."""
    if isinstance(value, Enum):
        return value.value
    return value


class BaseRepository(Generic[T]):
    """Base repository mapping rows to immutable structs.

    Single-row reads return the full struct (``build_struct``), collection
    reads return summaries (``build_summary``). No commits are performed
    here - commit responsibility is left to the caller owning the session.
    Each write runs in a SAVEPOINT so a rejected write leaves the rest of
    the unit of work intact.
    """

    record_class: ClassVar[Optional[Type[Base]]] = None
    struct_class: ClassVar[Optional[type]] = None
    summary_class: ClassVar[Optional[type]] = None

    # Django-style column names; a leading "-" means descending.
    ordering: ClassVar[Tuple[str, ...]] = ("-created_at",)

    returns_one: ClassVar[Tuple[str, ...]] = (
        "find",
        "find_or_raise",
        "find_by",
        "first",
        "last",
        "create",
        "update",
    )
    returns_many: ClassVar[Tuple[str, ...]] = ("all", "where", "many", "many_from")

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        one = set(cls.__dict__.get("returns_one", ()))
        many = set(cls.__dict__.get("returns_many", ()))
        overlap = one & many
        if overlap:
            raise TypeError(
                f"{cls.__name__} declares {sorted(overlap)} as both single and collection"
            )
        missing = sorted(name for name in one | many if not hasattr(cls, name))
        if missing:
            raise TypeError(f"{cls.__name__} declares unknown methods {missing}")

    @classmethod
    def one_methods(cls) -> List[str]:
        """Method names documented as returning a single full struct."""
        return cls._declared("returns_one")

    @classmethod
    def many_methods(cls) -> List[str]:
        """Method names documented as returning a list of summaries."""
        return cls._declared("returns_many")

    @classmethod
    def _declared(cls, attr: str) -> List[str]:
        names: List[str] = []
        for klass in reversed(cls.__mro__):
            for name in klass.__dict__.get(attr, ()):
                if name not in names:
                    names.append(name)
        return names

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with an async session."""
        self.session = session

    # ------------------------------------------------------------------
    # Subclass contract
    # ------------------------------------------------------------------

    def build_struct(self, record: T) -> Any:
        raise NotImplementedError(f"{type(self).__name__}.build_struct is not implemented")

    def build_summary(self, record: T) -> Any:
        raise NotImplementedError(f"{type(self).__name__}.build_summary is not implemented")

    def eager_load(self) -> Tuple[Any, ...]:
        """Loader options applied to every read (avoids lazy loads while mapping)."""
        return ()

    def base_scope(self) -> Select:
        """Default query every read starts from: eager loads plus ordering."""
        return (
            select(self._record())
            .options(*self.eager_load())
            .order_by(*self._order_by())
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def find(self, id: Optional[int]) -> Optional[Any]:
        if id is None:
            return None
        return await self._one(self.base_scope().where(self._record().id == id))

    async def find_or_raise(self, id: Optional[int]) -> Any:
        struct = await self.find(id)
        if struct is None:
            raise NotFoundError(self._record().__name__, id)
        return struct

    async def find_by(self, **criteria: Any) -> Optional[Any]:
        return await self._one(self._filter(self.base_scope(), criteria))

    async def first(self) -> Optional[Any]:
        return await self._one(self.base_scope())

    async def last(self) -> Optional[Any]:
        stmt = self.base_scope().order_by(None).order_by(*self._order_by(reverse=True))
        return await self._one(stmt)

    async def all(self) -> List[Any]:
        return await self._many(self.base_scope())

    async def where(self, **criteria: Any) -> List[Any]:
        return await self._many(self._filter(self.base_scope(), criteria))

    async def many(self, ids: Iterable[int]) -> List[Any]:
        ids = list(ids)
        if not ids:
            return []
        return await self._many(self.base_scope().where(self._record().id.in_(ids)))

    async def many_from(self, stmt: Select) -> List[Any]:
        """Map an externally built statement (e.g. a policy scope) to summaries."""
        return await self._many(stmt)

    async def count(self, **criteria: Any) -> int:
        stmt = self._filter(select(func.count()).select_from(self._record()), criteria)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def exists(self, **criteria: Any) -> bool:
        record = self._record()
        stmt = self._filter(select(record.id), criteria).limit(1)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def pluck(self, *fields: str) -> List[Any]:
        """Column values in base ordering; tuples when more than one field."""
        if not fields:
            raise ValueError("pluck requires at least one field")
        record = self._record()
        columns = [getattr(record, name) for name in fields]
        stmt = select(*columns).order_by(*self._order_by())
        result = await self.session.execute(stmt)
        if len(fields) == 1:
            return list(result.scalars().all())
        return [tuple(row) for row in result.all()]

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def create(self, attrs: Mapping[str, Any]) -> Optional[Any]:
        """Insert a row and return its full struct, or None when rejected."""
        record_class = self._record()
        try:
            async with self.session.begin_nested():
                record = record_class(**self._prepare(attrs))
                self.session.add(record)
        except WRITE_REJECTIONS as exc:
            logger.warning("%s create rejected: %s", record_class.__name__, exc)
            return None
        logger.debug("%s created id=%s", record_class.__name__, record.id)
        return await self._reload(record.id)

    async def update(self, id: Optional[int], attrs: Mapping[str, Any]) -> Optional[Any]:
        """Update a row and return its fresh struct; None when missing or rejected."""
        record = await self._load_record(id)
        if record is None:
            return None
        record_class = type(record)
        try:
            async with self.session.begin_nested():
                for key, value in self._prepare(attrs).items():
                    setattr(record, key, value)
        except WRITE_REJECTIONS as exc:
            logger.warning("%s id=%s update rejected: %s", record_class.__name__, id, exc)
            return None
        logger.debug("%s updated id=%s", record_class.__name__, id)
        return await self._reload(id)

    async def delete(self, id: Optional[int]) -> Optional[bool]:
        """Delete a row; None when missing. Constraint violations propagate."""
        record = await self._load_record(id)
        if record is None:
            return None
        await self.session.delete(record)
        await self.session.flush()
        logger.debug("%s deleted id=%s", type(record).__name__, id)
        return True

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _record(self) -> Type[Base]:
        if self.record_class is None:
            raise NotImplementedError(f"{type(self).__name__}.record_class is not configured")
        return self.record_class

    def _order_by(self, reverse: bool = False) -> List[Any]:
        record = self._record()
        clauses = []
        for spec in self.ordering:
            descending = spec.startswith("-")
            column = getattr(record, spec.lstrip("-"))
            if reverse:
                descending = not descending
            clauses.append(column.desc() if descending else column.asc())
        # Stable ordering among equal timestamps/positions.
        clauses.append(record.id.asc() if not reverse else record.id.desc())
        return clauses

    def _filter(self, stmt: Select, criteria: Mapping[str, Any]) -> Select:
        record = self._record()
        for key, value in criteria.items():
            column = getattr(record, key)
            if isinstance(value, (list, tuple, set, frozenset)):
                stmt = stmt.where(column.in_([plain(v) for v in value]))
            elif value is None:
                stmt = stmt.where(column.is_(None))
            else:
                stmt = stmt.where(column == plain(value))
        return stmt

    @staticmethod
    def _prepare(attrs: Mapping[str, Any]) -> dict:
        return {key: plain(value) for key, value in attrs.items()}

    async def _load_record(self, id: Optional[int]) -> Optional[T]:
        if id is None:
            return None
        record = self._record()
        stmt = (
            select(record)
            .where(record.id == id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def _reload(self, id: int) -> Optional[Any]:
        stmt = (
            self.base_scope()
            .where(self._record().id == id)
            .execution_options(populate_existing=True)
        )
        return await self._one(stmt)

    async def _one(self, stmt: Select) -> Optional[Any]:
        result = await self.session.execute(stmt.limit(1))
        record = result.scalars().first()
        if record is None:
            return None
        return self.build_struct(record)

    async def _many(self, stmt: Select) -> List[Any]:
        result = await self.session.execute(stmt)
        return [self.build_summary(record) for record in result.scalars().all()]


def contains_pattern(query: str) -> str:
    """ILIKE pattern matching ``query`` anywhere, with wildcards escaped."""
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"
