"""SQL Store — SQLAlchemy implementation of the Repository / Store protocols.

Invariants:
    - Repositories flush but never commit; SqlAlchemyStore.commit ends the unit of work
    - Records leave this module as dicts of column attributes (no ORM objects escape)
    - Unique columns are checked before flush; a racing IntegrityError is still
      reported as DuplicateFieldError
    - QuerySpec filters map 1:1 onto WHERE clauses (same semantics as
      core.advanced_query.record_matches)
"""

import logging
import operator
from typing import Any
from uuid import UUID

from sqlalchemy import delete, func, inspect, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tasker_api.core.advanced_query import FieldFilter, QuerySpec
from tasker_api.core.errors import DuplicateFieldError
from tasker_api.db.base import Base
from tasker_api.models import Payment, Profile, Task, User

logger = logging.getLogger(__name__)

_OPERATORS = {
    "eq": operator.eq,
    "gt": operator.gt,
    "gte": operator.ge,
    "lt": operator.lt,
    "lte": operator.le,
}


class SqlAlchemyRepository:
    """One table behind the generic Repository contract."""

    def __init__(
        self, session: AsyncSession, model: type[Base],
        unique_fields: tuple[str, ...] = (),
    ):
        self.session = session
        self.model = model
        self.unique_fields = unique_fields
        self._columns = tuple(attr.key for attr in inspect(model).column_attrs)

    def _to_record(self, obj: Base) -> dict:
        return {key: getattr(obj, key) for key in self._columns}

    def _clause(self, f: FieldFilter):
        column = getattr(self.model, f.field)
        if f.op == "in":
            return column.in_(list(f.value))
        return _OPERATORS[f.op](column, f.value)

    async def _ensure_unique(self, fields: dict, exclude_id: UUID | None = None) -> None:
        for name in self.unique_fields:
            if fields.get(name) is None:
                continue
            stmt = select(self.model.id).where(getattr(self.model, name) == fields[name])
            if exclude_id is not None:
                stmt = stmt.where(self.model.id != exclude_id)
            if (await self.session.execute(stmt.limit(1))).first() is not None:
                raise DuplicateFieldError(name)

    async def _flush(self) -> None:
        try:
            await self.session.flush()
        except IntegrityError as e:
            logger.warning(f"Integrity error on {self.model.__tablename__}: {e.orig}")
            if self.unique_fields:
                raise DuplicateFieldError(self.unique_fields[0]) from e
            raise

    async def get(self, record_id: UUID) -> dict | None:
        obj = await self.session.get(self.model, record_id)
        return self._to_record(obj) if obj is not None else None

    async def find(self, **filters: Any) -> list[dict]:
        stmt = (
            select(self.model)
            .filter_by(**filters)
            .order_by(self.model.created_at.asc())
        )
        result = await self.session.execute(stmt)
        return [self._to_record(obj) for obj in result.scalars().all()]

    async def create(self, fields: dict) -> dict:
        await self._ensure_unique(fields)
        obj = self.model(**fields)
        self.session.add(obj)
        await self._flush()
        return self._to_record(obj)

    async def update(self, record_id: UUID, fields: dict) -> dict | None:
        obj = await self.session.get(self.model, record_id)
        if obj is None:
            return None
        await self._ensure_unique(fields, exclude_id=record_id)
        for key, value in fields.items():
            setattr(obj, key, value)
        await self._flush()
        return self._to_record(obj)

    async def delete(self, record_id: UUID) -> bool:
        result = await self.session.execute(
            delete(self.model).where(self.model.id == record_id),
        )
        return result.rowcount > 0

    async def delete_where(self, **filters: Any) -> int:
        result = await self.session.execute(
            delete(self.model).filter_by(**filters),
        )
        return result.rowcount

    async def query(self, spec: QuerySpec) -> tuple[list[dict], int]:
        clauses = [self._clause(f) for f in spec.filters]
        total = await self.session.scalar(
            select(func.count()).select_from(self.model).where(*clauses),
        )
        order = [
            getattr(self.model, name).desc() if descending
            else getattr(self.model, name).asc()
            for name, descending in spec.sort
        ]
        result = await self.session.execute(
            select(self.model).where(*clauses).order_by(*order)
            .offset(spec.offset).limit(spec.limit),
        )
        return [self._to_record(obj) for obj in result.scalars().all()], int(total or 0)


class SqlAlchemyStore:
    """All four collections over one AsyncSession (one unit of work)."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.users = SqlAlchemyRepository(session, User, unique_fields=("email",))
        self.profiles = SqlAlchemyRepository(session, Profile, unique_fields=("name",))
        self.tasks = SqlAlchemyRepository(session, Task)
        self.payments = SqlAlchemyRepository(session, Payment)

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()
