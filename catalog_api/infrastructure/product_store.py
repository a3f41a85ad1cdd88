"""Product Store — SQLAlchemy implementation of the ProductRepository protocol.

Invariants:
    - Each mutating method commits exactly once or rolls back (no partial writes)
    - mark_published and delete are conditional writes checked by rowcount: a row
      that disappeared between read and write yields None, not an exception
    - Violations of the slug index surface as ConflictError; any other
      constraint violation or SQLAlchemy failure surfaces as StoreError
    - Rows never leave this module: callers receive frozen ProductRecord values
    - Name ordering is case-insensitive on every backend
    - Sorted lists put NULLs last in both directions, on every backend
    - An unbounded Page issues no LIMIT

Design Decisions:
    - populate_existing on re-reads: the identity map must not hide a concurrent writer
    - Filter translated to SQL rather than evaluated in Python: the store owns the predicate
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.core.domain_types import (
    NewProduct, OwnerId, Page, ProductFilter, ProductId, ProductRecord,
    ProductSort, Slug, SortField,
)
from catalog_api.core.errors import ConflictError, ErrorContext, StoreError
from catalog_api.models.product import Product

logger = logging.getLogger(__name__)

_SORT_COLUMNS = {
    SortField.NAME: func.lower(Product.name),
    SortField.CREATED_AT: Product.created_at,
    SortField.PUBLISHED_AT: Product.published_at,
}

# Postgres names the index (NAMING_CONVENTION); SQLite names the column
_SLUG_UNIQUE_MARKERS = ("ix_products_slug", "products.slug")


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite drops tzinfo on round-trip; stored values are always UTC
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def to_record(row: Product) -> ProductRecord:
    """Snapshot an ORM row into an immutable domain value."""
    return ProductRecord(
        id=ProductId(row.id),
        slug=Slug(row.slug),
        name=row.name,
        owner_id=OwnerId(row.owner_id),
        published=row.published,
        created_at=_as_utc(row.created_at),
        description=row.description,
        category=row.category,
        image_url=row.image_url,
        published_at=_as_utc(row.published_at),
    )


def _is_slug_collision(error: IntegrityError) -> bool:
    detail = str(error.orig)
    return any(marker in detail for marker in _SLUG_UNIQUE_MARKERS)


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SqlProductRepository:
    """Product persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(
        self, product_id: ProductId, slug: Slug, data: NewProduct, owner_id: OwnerId,
    ) -> ProductRecord:
        row = Product(
            id=product_id,
            slug=slug,
            name=data.name,
            description=data.description,
            category=data.category,
            image_url=data.image_url,
            owner_id=owner_id,
            published=False,
            created_at=datetime.now(timezone.utc),
        )
        self.db.add(row)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            if not _is_slug_collision(e):
                logger.error(f"Constraint violated on insert: {e}", extra={"product_id": product_id})
                raise StoreError("constraint violated", "insert")
            logger.warning(f"Slug collision on insert: {e}", extra={"slug": slug})
            raise ConflictError(
                f"A product with slug '{slug}' already exists",
                ErrorContext(slug=slug, operation="create"),
            )
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError(str(e), "insert")
        return to_record(row)

    async def get_by_id(self, product_id: ProductId) -> ProductRecord | None:
        row = await self._fetch(select(Product).where(Product.id == product_id))
        return to_record(row) if row else None

    async def get_by_slug(self, slug: Slug) -> ProductRecord | None:
        row = await self._fetch(select(Product).where(Product.slug == slug))
        return to_record(row) if row else None

    async def slug_exists(self, slug: Slug) -> bool:
        try:
            result = await self.db.execute(
                select(Product.id).where(Product.slug == slug),
            )
        except SQLAlchemyError as e:
            raise StoreError(str(e), "query")
        return result.scalar_one_or_none() is not None

    async def list_matching(
        self,
        product_filter: ProductFilter,
        sort: ProductSort | None,
        page: Page,
    ) -> list[ProductRecord]:
        query = select(Product)
        if product_filter.published is not None:
            query = query.where(Product.published.is_(product_filter.published))
        if product_filter.owner_id is not None:
            query = query.where(Product.owner_id == product_filter.owner_id)
        if product_filter.category is not None:
            query = query.where(Product.category == product_filter.category)
        if product_filter.name_contains:
            pattern = f"%{_escape_like(product_filter.name_contains)}%"
            query = query.where(Product.name.ilike(pattern, escape="\\"))
        if sort is not None:
            column = _SORT_COLUMNS[sort.field]
            ordering = (column.desc() if sort.descending else column.asc()).nulls_last()
            # id tiebreak keeps pages stable
            query = query.order_by(ordering, Product.id)
        if page.limit is not None:
            query = query.limit(page.limit)
        if page.offset:
            query = query.offset(page.offset)
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            raise StoreError(str(e), "query")
        return [to_record(row) for row in result.scalars().all()]

    async def mark_published(self, product_id: ProductId) -> ProductRecord | None:
        row = await self._fetch(select(Product).where(Product.id == product_id))
        if row is None:
            return None
        if row.published:
            return to_record(row)
        try:
            result = await self.db.execute(
                update(Product)
                .where(Product.id == product_id)
                .where(Product.published.is_(False))
                .values(published=True, published_at=datetime.now(timezone.utc))
                .execution_options(synchronize_session=False),
            )
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError(str(e), "update")
        if result.rowcount == 0:
            # Lost the race: either someone published first or deleted the row
            logger.info("Conditional publish matched no row", extra={"product_id": product_id})
        return await self.get_by_id(product_id)

    async def delete(self, product_id: ProductId) -> ProductRecord | None:
        row = await self._fetch(select(Product).where(Product.id == product_id))
        if row is None:
            return None
        snapshot = to_record(row)
        try:
            result = await self.db.execute(
                delete(Product)
                .where(Product.id == product_id)
                .execution_options(synchronize_session=False),
            )
            if result.rowcount == 0:
                await self.db.rollback()
                return None
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError(str(e), "delete")
        return snapshot

    async def _fetch(self, query) -> Product | None:
        try:
            result = await self.db.execute(
                query.execution_options(populate_existing=True),
            )
        except SQLAlchemyError as e:
            raise StoreError(str(e), "query")
        return result.scalar_one_or_none()
