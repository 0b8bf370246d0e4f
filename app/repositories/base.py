"""Generic async CRUD repository shared by the resource repositories."""

import logging
from typing import Any, Generic, TypeVar

from fastapi_filter.contrib.sqlalchemy import Filter
from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.interfaces import LoaderOption

from app.models.base import Base
from app.schemas.common import PageParams

ModelT = TypeVar("ModelT", bound=Base)

logger = logging.getLogger(__name__)


class DuplicateRecordError(Exception):
    """Raised when a write violates a uniqueness constraint."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class RelatedRecordNotFoundError(Exception):
    """Raised when a write references a parent record that does not exist."""

    def __init__(self, entity: str, record_id: str):
        self.entity = entity
        self.record_id = record_id
        super().__init__(f"{entity} with id '{record_id}' not found")


class BaseRepository(Generic[ModelT]):
    """CRUD for one model over a request-scoped session.

    Subclasses set ``model``, a ``duplicate_message`` for unique-constraint
    violations and the loader options their responses need in
    ``list_options`` / ``detail_options``.
    """

    model: type[ModelT]
    duplicate_message = "Record already exists"
    list_options: tuple[LoaderOption, ...] = ()
    detail_options: tuple[LoaderOption, ...] = ()

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_all(
        self,
        filters: Filter | None,
        params: PageParams,
        *criteria: Any,
    ) -> tuple[list[ModelT], int]:
        """Get one page of records, newest first unless ``order_by`` is given.

        Extra *criteria* narrow both the page and the total.
        """
        query = select(self.model)
        count_query = select(func.count()).select_from(self.model)
        if filters is not None:
            query = filters.filter(query)
            count_query = filters.filter(count_query)
        if criteria:
            query = query.where(*criteria)
            count_query = count_query.where(*criteria)

        total = await self.session.scalar(count_query) or 0

        if filters is not None and filters.order_by:
            query = filters.sort(query)
        else:
            query = query.order_by(self.model.created_at.desc(), self.model.id)
        query = query.options(*self.list_options).offset(params.offset).limit(params.size)

        result = await self.session.execute(query)
        return list(result.scalars().all()), total

    async def get_by_id(self, record_id: str, *options: LoaderOption) -> ModelT | None:
        query = select(self.model).where(self.model.id == record_id)
        if options:
            query = query.options(*options).execution_options(populate_existing=True)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_detail(self, record_id: str) -> ModelT | None:
        """Get a record with the relations its detail response embeds."""
        return await self.get_by_id(record_id, *self.detail_options)

    async def create(self, values: dict[str, Any]) -> ModelT:
        """Insert a record.

        Raises:
            DuplicateRecordError: On a unique-constraint violation.
        """
        record = self.model(**values)
        self.session.add(record)
        await self._flush()
        await self.session.refresh(record)
        logger.info("%s created id=%s", self.model.__name__, record.id)
        return record

    async def update(self, record_id: str, data: BaseModel) -> ModelT | None:
        """Update only the fields the client sent.

        ``null`` for a column that cannot be null is ignored.

        Raises:
            DuplicateRecordError: On a unique-constraint violation.
        """
        record = await self.get_by_id(record_id)
        if record is None:
            return None

        return await self.apply_changes(record, self._changes(data))

    async def apply_changes(self, record: ModelT, values: dict[str, Any]) -> ModelT:
        """Set *values* on *record* and flush.

        Raises:
            DuplicateRecordError: On a unique-constraint violation.
        """
        for field, value in values.items():
            setattr(record, field, value)

        await self._flush()
        await self.session.refresh(record)
        return record

    async def delete(self, record_id: str) -> bool:
        """Delete a record and, through ORM cascades, its dependants."""
        record = await self.get_by_id(record_id)
        if record is None:
            return False
        await self.session.delete(record)
        await self.session.flush()
        logger.info("%s deleted id=%s", self.model.__name__, record_id)
        return True

    def _changes(self, data: BaseModel) -> dict[str, Any]:
        columns = self.model.__table__.columns
        return {
            field: value
            for field, value in data.model_dump(exclude_unset=True).items()
            if value is not None or columns[field].nullable
        }

    async def _flush(self) -> None:
        try:
            await self.session.flush()
        except IntegrityError as exc:
            await self.session.rollback()
            raise DuplicateRecordError(self.duplicate_message) from exc

    async def ensure_exists(self, model: type[Base], record_id: str) -> None:
        """Raise ``RelatedRecordNotFoundError`` unless *model* has *record_id*."""
        if await self.session.get(model, record_id) is None:
            raise RelatedRecordNotFoundError(model.__name__, record_id)
