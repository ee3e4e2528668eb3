"""
Inkwell Backend — Generic Entity Service
==========================================

What:  Column-selectable CRUD for one ORM model: create, query, get_by_id,
       update_by_id, delete_by_id.
How:   Builds SQLAlchemy Core statements over the model's columns, runs each
       one through `run_with_retry`, and returns plain dicts for projected
       reads so callers only ever see the fields they asked for.
Who:   Subclassed once per resource (CategoryService, PostService).

Projection:
    Every read takes `fields`, a sequence of attribute names drawn from the
    subclass's `fields` tuple. Subclasses also declare named presets:

        default_fields   full row; used by query/get_by_id/delete_by_id
        identity_fields  what update_by_id's existence check reads
        update_fields    what update_by_id returns unless told otherwise

    Unknown names raise ValidationError before any statement is built.

Existence checks:
    update_by_id and delete_by_id read the row first and raise NotFoundError
    when it is absent. The read and the write are separate round trips, so a
    concurrent delete can slip between them; the write therefore uses
    RETURNING and raises NotFoundError as well when it touched no row.
"""

import logging
from typing import Any, Dict, Generic, List, Mapping, Optional, Sequence, Tuple, Type, TypeVar

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import Base, is_storable_id, run_with_retry
from app.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

SORT_TYPES = ("asc", "desc")


class EntityService(Generic[ModelT]):
    """
    CRUD operations for a single ORM model.

    Subclasses set:
        model:            the mapped class
        resource:         name used in errors and logs ("post", "category")
        fields:           every selectable/sortable attribute
        default_fields:   projection preset for reads
        identity_fields:  projection preset for the update existence check
        update_fields:    projection preset returned by updates
        writable_fields:  attributes an update body may change
    """

    model: Type[ModelT]
    resource: str = "resource"
    fields: Tuple[str, ...] = ()
    default_fields: Tuple[str, ...] = ()
    identity_fields: Tuple[str, ...] = ("id",)
    update_fields: Tuple[str, ...] = ("id",)
    writable_fields: Tuple[str, ...] = ()

    # ── Statement helpers ─────────────────────────────────────────────────
    def _columns(self, fields: Optional[Sequence[str]]) -> list:
        selected = tuple(fields) if fields else self.default_fields
        unknown = [name for name in selected if name not in self.fields]
        if unknown:
            raise ValidationError(
                message=f"Unknown {self.resource} field(s): {', '.join(unknown)}",
                field="fields",
                context={"allowed": list(self.fields)},
            )
        return [getattr(self.model, name) for name in selected]

    def _order_by(self, sort_by: Optional[str], sort_type: str):
        if sort_type not in SORT_TYPES:
            raise ValidationError(
                message=f"Invalid sortType '{sort_type}'. Must be 'asc' or 'desc'",
                field="sortType",
            )
        if sort_by is None:
            # No explicit field: newest rows first (ids are monotonically generated)
            sort_by = "id"
        if sort_by not in self.fields:
            raise ValidationError(
                message=f"Unknown sort field '{sort_by}'",
                field="sortBy",
                context={"allowed": list(self.fields)},
            )
        column = getattr(self.model, sort_by)
        return column.asc() if sort_type == "asc" else column.desc()

    def _update_values(self, update_body: Mapping[str, Any]) -> Dict[str, Any]:
        values = dict(update_body)
        if not values:
            raise ValidationError(
                message=f"Update body for {self.resource} must contain at least one field",
                field="body",
            )
        unknown = [name for name in values if name not in self.writable_fields]
        if unknown:
            raise ValidationError(
                message=f"{self.resource.capitalize()} field(s) cannot be updated: {', '.join(unknown)}",
                field="body",
                context={"writable": list(self.writable_fields)},
            )
        return values

    # ── Operations ────────────────────────────────────────────────────────
    async def create(self, db: AsyncSession, **values: Any) -> ModelT:
        """
        Persist a new row and return the fully populated entity.

        The id and timestamps are assigned during flush; the transaction is
        committed by the request's session dependency.
        """

        async def insert() -> ModelT:
            entity = self.model(**values)
            db.add(entity)
            await db.flush()
            return entity

        entity = await run_with_retry(db, insert, f"create {self.resource}")
        logger.info("Created %s %s", self.resource, entity.id)
        return entity

    async def query(
        self,
        db: AsyncSession,
        sort_by: Optional[str] = None,
        sort_type: str = "desc",
        fields: Optional[Sequence[str]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Return every row projected to `fields`, ordered by `sort_by`.

        No filtering or pagination is applied. Without `sort_by` rows come
        back by id in `sort_type` direction (newest first by default).
        """
        stmt = select(*self._columns(fields)).order_by(self._order_by(sort_by, sort_type))
        result = await run_with_retry(db, lambda: db.execute(stmt), f"query {self.resource}")
        return [dict(row._mapping) for row in result]

    async def get_by_id(
        self,
        db: AsyncSession,
        entity_id: int,
        fields: Optional[Sequence[str]] = None,
    ) -> Optional[Dict[str, Any]]:
        """Return the row with `entity_id` projected to `fields`, or None when absent."""
        columns = self._columns(fields)
        if not is_storable_id(entity_id):
            # Out-of-range ids overflow the driver instead of matching nothing
            return None
        stmt = select(*columns).where(self.model.id == entity_id)
        result = await run_with_retry(
            db, lambda: db.execute(stmt), f"get {self.resource} {entity_id}"
        )
        row = result.one_or_none()
        return dict(row._mapping) if row is not None else None

    async def update_by_id(
        self,
        db: AsyncSession,
        entity_id: int,
        update_body: Mapping[str, Any],
        fields: Optional[Sequence[str]] = None,
    ) -> Dict[str, Any]:
        """
        Apply `update_body` as a partial patch and return the patched row.

        Raises:
            NotFoundError:    the row is absent, or vanished before the write
            ValidationError:  empty body, non-writable or unknown fields
        """
        values = self._update_values(update_body)
        columns = self._columns(fields or self.update_fields)

        existing = await self.get_by_id(db, entity_id, self.identity_fields)
        if existing is None:
            raise NotFoundError(resource=self.resource, resource_id=str(entity_id))

        stmt = (
            update(self.model)
            .where(self.model.id == existing["id"])
            .values(**values)
            .returning(*columns)
            .execution_options(synchronize_session=False)
        )
        result = await run_with_retry(
            db, lambda: db.execute(stmt), f"update {self.resource} {entity_id}"
        )
        row = result.one_or_none()
        if row is None:
            # Deleted between the existence check and the write
            logger.warning("%s %s disappeared before update", self.resource, entity_id)
            raise NotFoundError(resource=self.resource, resource_id=str(entity_id))

        logger.info("Updated %s %s (%s)", self.resource, entity_id, ", ".join(values))
        return dict(row._mapping)

    async def delete_by_id(self, db: AsyncSession, entity_id: int) -> Dict[str, Any]:
        """
        Remove the row and return its snapshot from just before deletion.

        Raises:
            NotFoundError: the row is absent, or was removed concurrently
        """
        existing = await self.get_by_id(db, entity_id)
        if existing is None:
            raise NotFoundError(resource=self.resource, resource_id=str(entity_id))

        stmt = (
            delete(self.model)
            .where(self.model.id == existing["id"])
            .returning(self.model.id)
            .execution_options(synchronize_session=False)
        )
        result = await run_with_retry(
            db, lambda: db.execute(stmt), f"delete {self.resource} {entity_id}"
        )
        if result.one_or_none() is None:
            logger.warning("%s %s disappeared before delete", self.resource, entity_id)
            raise NotFoundError(resource=self.resource, resource_id=str(entity_id))

        logger.info("Deleted %s %s", self.resource, entity_id)
        return existing
