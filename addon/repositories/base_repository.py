from abc import ABC
from typing import Any, Generic, TypeVar, cast
from uuid import UUID

from sqlalchemy import exists, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.expression import ColumnElement, Select
from sqlmodel import SQLModel

from addon.core.error import DomainError, DomainErrorCode

T = TypeVar("T", bound=SQLModel)


class BaseRepository(Generic[T], ABC):
    """Async data access for one SQLModel table.

    Keyword filters are column equality checks; an unknown column name is a
    programming error and raises ``AttributeError`` instead of being ignored.
    Writes are flushed but never committed here, the calling service owns the
    transaction.
    """

    def __init__(
        self,
        session: AsyncSession,
        model_class: type[T],
        not_found_error_code: DomainErrorCode,
    ):
        self.session = session
        self.model_class = model_class
        self.not_found_error_code = not_found_error_code

    async def get_by_uuid(self, uuid: UUID) -> T | None:
        return await self.session.get(self.model_class, uuid)

    async def create(self, entity: T) -> T:
        self.session.add(entity)
        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    async def update(self, entity: T) -> T:
        return await self.create(entity)

    async def delete(self, uuid: UUID) -> bool:
        entity = await self.get_by_uuid(uuid)
        if entity is None:
            return False
        await self.session.delete(entity)
        await self.session.flush()
        return True

    async def compare_and_swap(
        self,
        uuid: UUID,
        expected: dict[str, Any],
        values: dict[str, Any],
    ) -> T | None:
        """Update one row only if its current column values match ``expected``.

        Returns the refreshed entity, or ``None`` when the row is missing or
        any expected value has changed since the caller read it.
        """
        stmt = update(self.model_class).where(
            *self._conditions((self.model_class.id == uuid,), expected)
        )
        stmt = stmt.values(**values).execution_options(synchronize_session=False)

        result = await self.session.execute(stmt)
        if result.rowcount != 1:
            return None

        await self.session.flush()
        return await self.session.get(self.model_class, uuid, populate_existing=True)

    def _conditions(
        self, filters: tuple[ColumnElement, ...], columns: dict[str, Any]
    ) -> list[ColumnElement]:
        conditions = list(filters)
        for key, value in columns.items():
            conditions.append(getattr(self.model_class, key) == value)
        return conditions

    def _build_query(self, *filters: ColumnElement, **kwargs: Any) -> Select:
        return select(self.model_class).where(*self._conditions(filters, kwargs))

    async def filter(
        self,
        *filters: ColumnElement,
        order_by: Any | None = None,
        offset: int | None = None,
        limit: int | None = None,
        **kwargs: Any,
    ) -> list[T]:
        query = self._build_query(*filters, **kwargs)

        if order_by is not None:
            query = query.order_by(order_by)
        if offset is not None:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def filter_one(self, *filters: ColumnElement, **kwargs: Any) -> T | None:
        result = await self.session.execute(
            self._build_query(*filters, **kwargs).limit(1)
        )
        return cast(T | None, result.scalars().first())

    async def filter_one_or_raise(self, *filters: ColumnElement, **kwargs: Any) -> T:
        entity = await self.filter_one(*filters, **kwargs)
        if entity is None:
            raise DomainError(
                code=self.not_found_error_code,
                message=f"{self.model_class.__name__} not found",
                details={
                    "model": self.model_class.__name__,
                    "conditions": {key: str(value) for key, value in kwargs.items()},
                },
            )
        return entity

    async def exists(self, *filters: ColumnElement, **kwargs: Any) -> bool:
        query = select(exists().where(*self._conditions(filters, kwargs)))
        result = await self.session.execute(query)
        return bool(result.scalar())

    async def count(self, *filters: ColumnElement, **kwargs: Any) -> int:
        query = (
            select(func.count())
            .select_from(self.model_class)
            .where(*self._conditions(filters, kwargs))
        )
        result = await self.session.execute(query)
        return cast(int, result.scalar_one())
