"""
Happy Thoughts API — Resource Service (shared CRUD logic)
==========================================================

What:  List / get / create / update / delete / like for one model.
How:   ThoughtService and DogService subclass ResourceService and declare the
       model, response schema, counter column and recognized filters. Every
       method performs one store operation on the session it is given; the
       request's session dependency commits or rolls back afterwards.

Error Handling:
    Own exceptions (NotFoundError, ValidationError, ...) propagate unchanged.
    Anything else raised by SQLAlchemy or the driver is logged with its full
    message and re-raised as DatabaseError, so the client sees a generic 500.

Concurrency:
    like() is a single `UPDATE ... SET counter = counter + 1` statement; the
    database serializes concurrent likes. update() loads the row, assigns the
    supplied fields and flushes (last write wins).
"""

import logging
import uuid
from typing import Any, ClassVar, Dict, Generic, List, Mapping, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy import desc, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from happythoughts.exceptions import (
    DatabaseError,
    HappyThoughtsError,
    NoMatchesError,
    NotFoundError,
)
from happythoughts.services.filters import FieldFilter, QueryFilterBuilder

logger = logging.getLogger(__name__)

ResponseT = TypeVar("ResponseT", bound=BaseModel)


class ResourceService(Generic[ResponseT]):
    """
    Base class for the per-entity services.

    Subclasses set:
        resource         singular name used in messages ("thought")
        resource_plural  plural name used in messages ("thoughts")
        model            SQLAlchemy model class
        response_schema  Pydantic model built from a row (from_attributes)
        counter_field    integer column incremented by like()
        filter_fields    FieldFilter declarations for list()
    """

    resource: ClassVar[str] = "record"
    resource_plural: ClassVar[str] = "records"
    model: ClassVar[Any] = None
    response_schema: ClassVar[Type[BaseModel]] = BaseModel
    counter_field: ClassVar[str] = ""
    filter_fields: ClassVar[Sequence[FieldFilter]] = ()

    def __init__(self):
        self.filters = QueryFilterBuilder(self.model, self.filter_fields)

    # ── Helpers ───────────────────────────────────────────────────────────

    def _to_response(self, record: Any) -> ResponseT:
        return self.response_schema.model_validate(record)

    def _parse_id(self, resource_id: str) -> uuid.UUID:
        """Malformed ids are a store error (500), not a 404."""
        try:
            return uuid.UUID(str(resource_id))
        except ValueError:
            raise DatabaseError(
                message=f"Invalid {self.resource} id '{resource_id}'",
                context={"resource_id": str(resource_id)},
            )

    def _wrap(self, operation: str, error: Exception, **context: Any) -> HappyThoughtsError:
        if isinstance(error, HappyThoughtsError):
            return error
        logger.error(
            "Database error during %s %s: %s", operation, self.resource, str(error), exc_info=True
        )
        return DatabaseError(
            message=f"Could not {operation} {self.resource}. Please try again.",
            context={"error_type": type(error).__name__, **context},
        )

    async def _fetch(self, db: AsyncSession, record_id: uuid.UUID) -> Any:
        result = await db.execute(
            select(self.model)
            .where(self.model.id == record_id)
            .execution_options(populate_existing=True)
        )
        record = result.scalar_one_or_none()
        if record is None:
            raise NotFoundError(resource=self.resource, resource_id=str(record_id))
        return record

    # ── Operations ────────────────────────────────────────────────────────

    async def list(
        self,
        db: AsyncSession,
        params: Mapping[str, Optional[str]],
        limit: Optional[int] = None,
    ) -> List[ResponseT]:
        """
        Newest-first records matching every supplied filter, all of them
        unless the client asked for at most `limit`.

        Raises:
            NoMatchesError: nothing matched (→ 404 with an empty list)
            ValidationError: a filter value could not be parsed
        """
        try:
            query = self.filters.apply(select(self.model), params)
            query = query.order_by(desc(self.model.created_at))
            if limit is not None:
                query = query.limit(limit)
            result = await db.execute(query)
            records = list(result.scalars().all())
        except Exception as e:
            raise self._wrap("list", e)

        if not records:
            applied = {k: v for k, v in params.items() if k in self.filters.params and v}
            raise NoMatchesError(resource=self.resource_plural, context={"filters": applied})
        return [self._to_response(record) for record in records]

    async def get(self, db: AsyncSession, resource_id: str) -> ResponseT:
        record_id = self._parse_id(resource_id)
        try:
            record = await self._fetch(db, record_id)
        except Exception as e:
            raise self._wrap("retrieve", e, resource_id=str(record_id))
        return self._to_response(record)

    async def create(
        self,
        db: AsyncSession,
        payload: BaseModel,
        user_id: Optional[uuid.UUID] = None,
    ) -> ResponseT:
        values: Dict[str, Any] = payload.model_dump(mode="json")
        values[self.counter_field] = 0
        values["user_id"] = user_id
        try:
            record = self.model(**values)
            db.add(record)
            await db.flush()
        except Exception as e:
            raise self._wrap("create", e)
        logger.info("Created %s %s", self.resource, record.id)
        return self._to_response(record)

    async def update(self, db: AsyncSession, resource_id: str, payload: BaseModel) -> ResponseT:
        """Assign only the fields present in the PATCH body; others keep their values."""
        record_id = self._parse_id(resource_id)
        changes = payload.model_dump(mode="json", exclude_unset=True, exclude_none=True)
        try:
            record = await self._fetch(db, record_id)
            for field, value in changes.items():
                setattr(record, field, value)
            await db.flush()
        except Exception as e:
            raise self._wrap("update", e, resource_id=str(record_id))
        logger.info("Updated %s %s: %s", self.resource, record_id, sorted(changes))
        return self._to_response(record)

    async def delete(self, db: AsyncSession, resource_id: str) -> ResponseT:
        """Delete the record and return how it looked just before deletion."""
        record_id = self._parse_id(resource_id)
        try:
            record = await self._fetch(db, record_id)
            snapshot = self._to_response(record)
            await db.delete(record)
            await db.flush()
        except Exception as e:
            raise self._wrap("delete", e, resource_id=str(record_id))
        logger.info("Deleted %s %s", self.resource, record_id)
        return snapshot

    async def like(self, db: AsyncSession, resource_id: str) -> ResponseT:
        """Increment the counter by exactly one in a single UPDATE and return the row."""
        record_id = self._parse_id(resource_id)
        counter = getattr(self.model, self.counter_field)
        try:
            result = await db.execute(
                update(self.model)
                .where(self.model.id == record_id)
                .values({self.counter_field: counter + 1})
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise NotFoundError(resource=self.resource, resource_id=str(record_id))
            record = await self._fetch(db, record_id)
        except Exception as e:
            raise self._wrap("like", e, resource_id=str(record_id))
        return self._to_response(record)
