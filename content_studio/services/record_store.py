"""
Record store gateway over the four content tables.

Every call carries the caller's user id as ownership filter: brands match on
user_id directly, angles through their brand, ideas through angle → brand and
generated content through its denormalized brand_id. A row outside the
caller's scope is indistinguishable from a missing row.
"""
from contextlib import asynccontextmanager
from enum import Enum
from typing import Any, AsyncIterator, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple
from uuid import UUID

from sqlalchemy import delete as sa_delete, func, select as sa_select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import DataError, DBAPIError, IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from content_studio.errors import NotFoundError, StoreConnectionError, StoreValidationError
from content_studio.logging_config import get_logger
from content_studio.models import Brand, ContentAngle, ContentIdea, GeneratedContent

logger = get_logger(__name__)


class Collection(str, Enum):
    BRANDS = "brands"
    CONTENT_ANGLES = "content_angles"
    CONTENT_IDEAS = "content_ideas"
    GENERATED_CONTENT = "generated_content"


MODELS = {
    Collection.BRANDS: Brand,
    Collection.CONTENT_ANGLES: ContentAngle,
    Collection.CONTENT_IDEAS: ContentIdea,
    Collection.GENERATED_CONTENT: GeneratedContent,
}

ENTITY_NAMES = {
    Collection.BRANDS: "Brand",
    Collection.CONTENT_ANGLES: "Angle",
    Collection.CONTENT_IDEAS: "Idea",
    Collection.GENERATED_CONTENT: "Content",
}

# Nested shapes: dotted relationship paths, each loaded with one SELECT per level.
BRAND_TREE_SHAPE = ("content_angles.content_ideas.generated_content",)
ANGLE_TREE_SHAPE = ("content_ideas.generated_content",)
IDEA_SHAPE = ("generated_content",)

Filters = Mapping[str, Any]


def _owned_brand_ids(owner_id: UUID):
    return sa_select(Brand.id).where(Brand.user_id == owner_id)


def _ownership_clause(collection: Collection, owner_id: UUID):
    if collection is Collection.BRANDS:
        return Brand.user_id == owner_id
    if collection is Collection.CONTENT_ANGLES:
        return ContentAngle.brand_id.in_(_owned_brand_ids(owner_id))
    if collection is Collection.CONTENT_IDEAS:
        owned_angles = sa_select(ContentAngle.id).where(ContentAngle.brand_id.in_(_owned_brand_ids(owner_id)))
        return ContentIdea.angle_id.in_(owned_angles)
    return GeneratedContent.brand_id.in_(_owned_brand_ids(owner_id))


def _match(column, value):
    if isinstance(value, (list, tuple, set, frozenset)):
        return column.in_(list(value))
    return column == value


def _where(collection: Collection, owner_id: UUID, filters: Optional[Filters]) -> list:
    """
    Column filters; "parent.column" matches on the parent row, evaluated by
    the database in the same statement (e.g. {"idea.angle_id": angle_id}).
    """
    model = MODELS[collection]
    clauses = [_ownership_clause(collection, owner_id)]
    for name, value in (filters or {}).items():
        if "." in name:
            relation, column_name = name.split(".", 1)
            parent = getattr(model, relation).property.mapper.class_
            parent_ids = sa_select(parent.id).where(_match(getattr(parent, column_name), value))
            clauses.append(getattr(model, f"{relation}_id").in_(parent_ids))
        else:
            clauses.append(_match(getattr(model, name), value))
    return clauses


def _load_options(collection: Collection, shape: Iterable[str]) -> list:
    options = []
    for path in shape:
        current = MODELS[collection]
        loader = None
        for name in path.split("."):
            attr = getattr(current, name)
            loader = selectinload(attr) if loader is None else loader.selectinload(attr)
            current = attr.property.mapper.class_
        options.append(loader)
    return options


def _order_by(collection: Collection, order_by: Optional[Sequence[str]]) -> list:
    """"-created_at" sorts descending."""
    model = MODELS[collection]
    columns = []
    for name in order_by or ():
        if name.startswith("-"):
            columns.append(getattr(model, name[1:]).desc())
        else:
            columns.append(getattr(model, name))
    return columns


class RecordStore:
    """Async gateway; one short-lived session per call."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    @asynccontextmanager
    async def _session(self, op: str, collection: Collection) -> AsyncIterator[AsyncSession]:
        async with self._session_factory() as session:
            try:
                yield session
            except (IntegrityError, DataError) as e:
                await session.rollback()
                logger.warning("store.rejected", op=op, collection=collection.value, error=str(e.orig))
                raise StoreValidationError(
                    f"Store rejected {op} on {collection.value}",
                    extra={"collection": collection.value},
                ) from e
            except (DBAPIError, OSError) as e:
                logger.error("store.unavailable", op=op, collection=collection.value, error=str(e))
                raise StoreConnectionError(f"Record store unavailable during {op}") from e

    async def _check_parents(
        self,
        session: AsyncSession,
        collection: Collection,
        rows: Sequence[Dict[str, Any]],
        owner_id: UUID,
    ) -> None:
        """Children may only be attached to parents the caller owns."""
        if collection is Collection.BRANDS:
            for row in rows:
                row.setdefault("user_id", owner_id)
                if row["user_id"] != owner_id:
                    raise NotFoundError("Brand", row.get("id"))
            return
        if collection is Collection.CONTENT_IDEAS:
            parent, key = Collection.CONTENT_ANGLES, "angle_id"
        elif collection is Collection.GENERATED_CONTENT:
            parent, key = Collection.CONTENT_IDEAS, "idea_id"
        else:
            parent, key = Collection.BRANDS, "brand_id"
        wanted = {row[key] for row in rows}
        model = MODELS[parent]
        result = await session.execute(
            sa_select(model.id).where(model.id.in_(wanted), _ownership_clause(parent, owner_id))
        )
        found = set(result.scalars().all())
        missing = wanted - found
        if missing:
            raise NotFoundError(ENTITY_NAMES[parent], next(iter(missing)))

    async def select(
        self,
        collection: Collection,
        *,
        owner_id: UUID,
        filters: Optional[Filters] = None,
        shape: Iterable[str] = (),
        order_by: Optional[Sequence[str]] = None,
    ) -> List[Any]:
        """Rows of `collection` visible to `owner_id`, with `shape` relationships loaded."""
        stmt = (
            sa_select(MODELS[collection])
            .where(*_where(collection, owner_id, filters))
            .options(*_load_options(collection, shape))
            .order_by(*_order_by(collection, order_by))
        )
        async with self._session("select", collection) as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def get(
        self,
        collection: Collection,
        row_id: UUID,
        *,
        owner_id: UUID,
        shape: Iterable[str] = (),
        redirect_to: str = "/dashboard",
    ) -> Any:
        rows = await self.select(collection, owner_id=owner_id, filters={"id": row_id}, shape=shape)
        if not rows:
            raise NotFoundError(ENTITY_NAMES[collection], row_id, redirect_to=redirect_to)
        return rows[0]

    async def count(self, collection: Collection, *, owner_id: UUID, filters: Optional[Filters] = None) -> int:
        stmt = sa_select(func.count()).select_from(MODELS[collection]).where(*_where(collection, owner_id, filters))
        async with self._session("count", collection) as session:
            return int((await session.execute(stmt)).scalar_one())

    async def insert(self, collection: Collection, rows: Sequence[Dict[str, Any]], *, owner_id: UUID) -> List[Any]:
        """Insert a batch in one transaction; all or nothing."""
        if not rows:
            return []
        rows = [dict(r) for r in rows]
        model = MODELS[collection]
        async with self._session("insert", collection) as session:
            await self._check_parents(session, collection, rows, owner_id)
            objs = [model(**row) for row in rows]
            session.add_all(objs)
            await session.commit()
            for obj in objs:
                await session.refresh(obj)
        logger.info("store.inserted", collection=collection.value, count=len(objs))
        return objs

    async def update(self, collection: Collection, row_id: UUID, patch: Dict[str, Any], *, owner_id: UUID) -> Any:
        model = MODELS[collection]
        async with self._session("update", collection) as session:
            result = await session.execute(sa_select(model).where(*_where(collection, owner_id, {"id": row_id})))
            obj = result.scalar_one_or_none()
            if obj is None:
                raise NotFoundError(ENTITY_NAMES[collection], row_id)
            for name, value in patch.items():
                setattr(obj, name, value)
            await session.commit()
            # updated_at is computed by the database on UPDATE.
            await session.refresh(obj)
        return obj

    async def delete(self, collection: Collection, filters: Filters, *, owner_id: UUID) -> int:
        counts = await self.delete_in_order([(collection, filters)], owner_id=owner_id)
        return counts[0]

    async def delete_in_order(
        self,
        steps: Sequence[Tuple[Collection, Filters]],
        *,
        owner_id: UUID,
    ) -> List[int]:
        """Run deletes child-first in one transaction; returns the row count per step."""
        counts: List[int] = []
        async with self._session("delete", steps[0][0]) as session:
            for collection, filters in steps:
                stmt = (
                    sa_delete(MODELS[collection])
                    .where(*_where(collection, owner_id, filters))
                    .execution_options(synchronize_session=False)
                )
                result = await session.execute(stmt)
                counts.append(result.rowcount or 0)
            await session.commit()
        logger.info(
            "store.deleted",
            steps=[c.value for c, _ in steps],
            counts=counts,
        )
        return counts

    async def upsert(
        self,
        collection: Collection,
        row: Dict[str, Any],
        conflict_key: str,
        *,
        owner_id: UUID,
    ) -> Any:
        """INSERT ... ON CONFLICT (conflict_key) DO UPDATE; returns the stored row."""
        model = MODELS[collection]
        row = dict(row)
        async with self._session("upsert", collection) as session:
            await self._check_parents(session, collection, [row], owner_id)
            dialect = session.get_bind().dialect.name
            insert_fn = pg_insert if dialect == "postgresql" else sqlite_insert
            stmt = insert_fn(model).values(**row)
            updates = {name: stmt.excluded[name] for name in row if name not in ("id", conflict_key)}
            if hasattr(model, "updated_at"):
                updates["updated_at"] = func.now()
            stmt = stmt.on_conflict_do_update(index_elements=[conflict_key], set_=updates).returning(model)
            result = await session.scalars(stmt, execution_options={"populate_existing": True})
            obj = result.one()
            await session.commit()
        logger.info("store.upserted", collection=collection.value, conflict_key=conflict_key)
        return obj
