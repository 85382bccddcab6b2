"""
Acaia Club Backend — Generic CRUD Service (Persistence Gateway)
================================================================

What:  One reusable service exposing list / get / create / update / delete
       for a single ORM model, with eager-loaded relations and a fixed
       default order.
Why:   Every resource endpoint follows the same validate → one database
       operation → envelope pattern. Writing that operation once keeps the
       error translation identical across resources.
How:   Each resource instantiates CrudService with its model, a resource
       name (used in error messages), its default ORDER BY and the
       selectinload options its response schema needs.
Who:   Resource services (subclasses or plain instances) and route handlers.
When:  Once per request; the AsyncSession comes from get_db_session.

Error Translation:
    ┌───────────────────────────────┬──────────────────────────────────┐
    │ Store outcome                 │ Raised                           │
    ├───────────────────────────────┼──────────────────────────────────┤
    │ no row for the id             │ NotFoundError      (→ 404)       │
    │ unique violation              │ ConflictError      (→ 409)       │
    │ FK violation on create/update │ NotFoundError      (→ 404)       │
    │ FK violation on delete        │ ConflictError      (→ 409)       │
    │ any other SQLAlchemyError     │ DatabaseError      (→ 500)       │
    └───────────────────────────────┴──────────────────────────────────┘

    Writes are flushed inside the service (not at commit) so constraint
    violations surface here, where they can be classified, instead of in
    the session dependency after the handler has returned.

Eager Loading:
    AsyncSession cannot lazy-load, so every relation a response schema
    touches must be listed in `load_options`. After create/update the row
    is re-selected with populate_existing so those relations are fresh.
"""

import logging
import uuid
from typing import Any, Dict, Generic, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from acaiaclub.database import Base
from acaiaclub.exceptions import ConflictError, DatabaseError, NotFoundError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

# SQLSTATE codes (PostgreSQL) and message fragments (SQLite)
_UNIQUE_VIOLATION = ("23505", "UNIQUE constraint failed")
_FOREIGN_KEY_VIOLATION = ("23503", "FOREIGN KEY constraint failed")


def _violation_matches(exc: IntegrityError, signature: tuple) -> bool:
    code, text = signature
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate:
        return sqlstate == code
    return text in str(orig)


def is_unique_violation(exc: IntegrityError) -> bool:
    return _violation_matches(exc, _UNIQUE_VIOLATION)


def is_foreign_key_violation(exc: IntegrityError) -> bool:
    return _violation_matches(exc, _FOREIGN_KEY_VIOLATION)


class CrudService(Generic[ModelT]):
    """
    Persistence gateway for one model.

    Args:
        model:         ORM class
        resource:      Human name used in messages ("floor plan")
        order_by:      Default ORDER BY for list()
        load_options:  Loader options (selectinload chains) applied to every read
        conflict_message: Message for unique violations on this resource
    """

    def __init__(
        self,
        model: Type[ModelT],
        resource: str,
        order_by: Sequence[Any] = (),
        load_options: Sequence[Any] = (),
        conflict_message: Optional[str] = None,
    ):
        self.model = model
        self.resource = resource
        self.order_by = tuple(order_by)
        self.load_options = tuple(load_options)
        self.conflict_message = conflict_message or f"A {resource} with these values already exists"

    # ── Reads ─────────────────────────────────────────────────────────────

    def _select(self):
        return select(self.model).options(*self.load_options)

    async def list(self, db: AsyncSession, *criteria: Any) -> List[ModelT]:
        """All rows matching `criteria`, in the resource's default order."""
        stmt = self._select().where(*criteria).order_by(*self.order_by)
        try:
            result = await db.execute(stmt)
        except SQLAlchemyError as e:
            logger.error("Database error listing %s: %s", self.resource, str(e), exc_info=True)
            raise DatabaseError(context={"resource": self.resource, "error_type": type(e).__name__})
        return list(result.scalars().all())

    async def first(self, db: AsyncSession, *criteria: Any) -> Optional[ModelT]:
        """First row (default order) matching `criteria`, or None."""
        stmt = self._select().where(*criteria).order_by(*self.order_by).limit(1)
        try:
            result = await db.execute(stmt)
        except SQLAlchemyError as e:
            logger.error("Database error querying %s: %s", self.resource, str(e), exc_info=True)
            raise DatabaseError(context={"resource": self.resource, "error_type": type(e).__name__})
        return result.scalars().first()

    async def get(self, db: AsyncSession, obj_id: uuid.UUID, refresh: bool = False) -> ModelT:
        """
        Fetch one row by primary key with its relations.

        Raises:
            NotFoundError: No row with that id (→ 404)
        """
        stmt = self._select().where(self.model.id == obj_id)
        if refresh:
            stmt = stmt.execution_options(populate_existing=True)
        try:
            result = await db.execute(stmt)
        except SQLAlchemyError as e:
            logger.error("Database error fetching %s %s: %s", self.resource, obj_id, str(e))
            raise DatabaseError(context={"resource": self.resource, "id": str(obj_id)})

        obj = result.scalar_one_or_none()
        if obj is None:
            raise NotFoundError(resource=self.resource, resource_id=str(obj_id))
        return obj

    # ── Writes ────────────────────────────────────────────────────────────

    async def create(self, db: AsyncSession, values: Dict[str, Any]) -> ModelT:
        """Insert one row from `values` and return it with relations loaded."""
        obj = self.model(**values)
        db.add(obj)
        await self.flush(db, action="create")
        logger.info("%s created: %s", self.resource.capitalize(), obj.id)
        return await self.get(db, obj.id, refresh=True)

    async def update(
        self, db: AsyncSession, obj_id: uuid.UUID, values: Dict[str, Any]
    ) -> ModelT:
        """
        Write only the supplied fields.

        `values` is normally `payload.model_dump(exclude_unset=True)`, so a
        field the client did not send never reaches this method.
        """
        obj = await self.get(db, obj_id)
        self.apply(obj, values)
        await self.flush(db, action="update")
        return await self.get(db, obj_id, refresh=True)

    async def delete(self, db: AsyncSession, obj_id: uuid.UUID) -> uuid.UUID:
        obj = await self.get(db, obj_id)
        await db.delete(obj)
        await self.flush(db, action="delete")
        logger.info("%s deleted: %s", self.resource.capitalize(), obj_id)
        return obj_id

    @staticmethod
    def apply(obj: ModelT, values: Dict[str, Any]) -> None:
        for field, value in values.items():
            setattr(obj, field, value)

    async def flush(self, db: AsyncSession, action: str) -> None:
        """
        Flush pending writes and translate constraint failures.

        The caller never sees an IntegrityError: uniqueness maps to
        ConflictError, a dangling reference to NotFoundError (or, when
        deleting, to ConflictError because something still points here).
        """
        try:
            await db.flush()
        except IntegrityError as e:
            logger.warning("Integrity error on %s %s: %s", self.resource, action, str(e.orig))
            if is_unique_violation(e):
                raise ConflictError(
                    message=self.conflict_message,
                    context={"resource": self.resource, "action": action},
                )
            if is_foreign_key_violation(e):
                if action == "delete":
                    raise ConflictError(
                        message=f"This {self.resource} is still in use and cannot be deleted",
                        context={"resource": self.resource},
                    )
                raise NotFoundError(
                    resource="referenced record",
                    context={"resource": self.resource, "action": action},
                )
            raise DatabaseError(context={"resource": self.resource, "action": action})
        except SQLAlchemyError as e:
            logger.error(
                "Database error on %s %s: %s", self.resource, action, str(e), exc_info=True
            )
            raise DatabaseError(
                context={"resource": self.resource, "action": action, "error_type": type(e).__name__}
            )
