"""Catalog Service — list, detail, create, delete and publish over a ProductRepository.

Invariants:
    - Every public method returns Ok | Err; CatalogErrors raised by the store become Err
    - productId allocated here (uuid4), slug derived here from name, never from the caller
    - New products are always unpublished and owned by the creating principal
    - publish never reverts; publishing a published product is Ok, not an error
    - A record that vanishes mid-operation is reported as NotFoundError

Design Decisions:
    - Slug checked up-front AND guarded by the store's unique constraint: the
      pre-check gives a clean error, the constraint settles concurrent creates
    - No locking here: the store's conditional writes decide races
"""

import logging
import uuid
from typing import Awaitable, Callable, TypeVar

from catalog_api.core.domain_types import (
    NewProduct, OwnerId, Page, ProductFilter, ProductId, ProductRecord,
    ProductSort, ProductState, Slug,
)
from catalog_api.core.errors import (
    CatalogError, ConflictError, ErrorContext, NotFoundError, ValidationError,
)
from catalog_api.core.lifecycle import check_transition
from catalog_api.core.repository_protocols import ProductRepository
from catalog_api.core.result import Err, Ok, Result
from catalog_api.core.slugs import derive_slug

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def _guard(operation: str, call: Callable[[], Awaitable[T]]) -> Result[T]:
    """Run a store call, converting raised CatalogErrors into Err values."""
    try:
        return Ok(await call())
    except CatalogError as e:
        e.context.operation = e.context.operation or operation
        logger.warning(
            f"{operation} failed: {e.message}",
            extra={"error_code": e.code, "operation": operation},
        )
        return Err(e)


class CatalogService:
    """Domain operations on the product catalog."""

    def __init__(self, repository: ProductRepository):
        self.repository = repository

    async def get_all_products(
        self,
        product_filter: ProductFilter | None = None,
        sort: ProductSort | None = None,
        page: Page | None = None,
    ) -> Result[list[ProductRecord]]:
        return await _guard(
            "list",
            lambda: self.repository.list_matching(
                product_filter or ProductFilter(), sort, page or Page(),
            ),
        )

    async def get_detail_product(self, slug: str) -> Result[ProductRecord]:
        found = await _guard("detail", lambda: self.repository.get_by_slug(Slug(slug)))
        if isinstance(found, Err):
            return found
        if found.value is None:
            return Err(NotFoundError("Product", slug, ErrorContext(slug=slug, operation="detail")))
        return Ok(found.value)

    async def create_product(
        self, data: NewProduct, owner_id: str,
    ) -> Result[ProductRecord]:
        slug = derive_slug(data.name)
        if not slug:
            return Err(ValidationError(
                "Product name must contain at least one letter or digit", "name",
                ErrorContext(operation="create"),
            ))

        exists = await _guard("create", lambda: self.repository.slug_exists(Slug(slug)))
        if isinstance(exists, Err):
            return exists
        if exists.value:
            return Err(ConflictError(
                f"A product with slug '{slug}' already exists",
                ErrorContext(slug=slug, operation="create"),
            ))

        product_id = ProductId(uuid.uuid4())
        created = await _guard(
            "create",
            lambda: self.repository.add(product_id, Slug(slug), data, OwnerId(owner_id)),
        )
        if isinstance(created, Ok):
            logger.info(
                f"Product created: {slug}",
                extra={"product_id": product_id, "slug": slug, "principal_id": owner_id},
            )
        return created

    async def delete_product(self, product_id: ProductId) -> Result[ProductRecord]:
        current = await self._require("delete", product_id)
        if isinstance(current, Err):
            return current
        violation = check_transition(
            current.value.state, ProductState.DELETED, str(product_id),
        )
        if violation:
            return Err(violation)

        deleted = await _guard("delete", lambda: self.repository.delete(product_id))
        if isinstance(deleted, Err):
            return deleted
        if deleted.value is None:
            return Err(self._not_found(product_id, "delete"))
        logger.info("Product deleted", extra={"product_id": product_id})
        return Ok(deleted.value)

    async def publish_product(self, product_id: ProductId) -> Result[ProductRecord]:
        current = await self._require("publish", product_id)
        if isinstance(current, Err):
            return current
        violation = check_transition(
            current.value.state, ProductState.PUBLISHED, str(product_id),
        )
        if violation:
            return Err(violation)

        published = await _guard(
            "publish", lambda: self.repository.mark_published(product_id),
        )
        if isinstance(published, Err):
            return published
        if published.value is None:
            return Err(self._not_found(product_id, "publish"))
        logger.info("Product published", extra={"product_id": product_id})
        return Ok(published.value)

    async def _require(
        self, operation: str, product_id: ProductId,
    ) -> Result[ProductRecord]:
        found = await _guard(operation, lambda: self.repository.get_by_id(product_id))
        if isinstance(found, Err):
            return found
        if found.value is None:
            return Err(self._not_found(product_id, operation))
        return Ok(found.value)

    @staticmethod
    def _not_found(product_id: ProductId, operation: str) -> NotFoundError:
        return NotFoundError(
            "Product", str(product_id),
            ErrorContext(product_id=str(product_id), operation=operation),
        )
