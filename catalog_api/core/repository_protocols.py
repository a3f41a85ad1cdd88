"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - Store methods raise StoreError on provider failure and ConflictError on a
      uniqueness violation; "no such record" is a None return, never an exception

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - mark_published/delete are single conditional writes: a record that vanished
      between read and write comes back as None, which the service reports as not found
"""

from typing import Protocol

from catalog_api.core.domain_types import (
    NewProduct, OwnerId, Page, ProductFilter, ProductId, ProductRecord,
    ProductSort, Slug,
)
from catalog_api.core.permissions import Principal


class ProductRepository(Protocol):
    """Contract for product persistence — implemented by shell."""
    async def add(
        self, product_id: ProductId, slug: Slug, data: NewProduct, owner_id: OwnerId,
    ) -> ProductRecord: ...
    async def get_by_id(self, product_id: ProductId) -> ProductRecord | None: ...
    async def get_by_slug(self, slug: Slug) -> ProductRecord | None: ...
    async def slug_exists(self, slug: Slug) -> bool: ...
    async def list_matching(
        self,
        product_filter: ProductFilter,
        sort: ProductSort | None,
        page: Page,
    ) -> list[ProductRecord]: ...
    async def mark_published(self, product_id: ProductId) -> ProductRecord | None: ...
    async def delete(self, product_id: ProductId) -> ProductRecord | None: ...


class AuthProvider(Protocol):
    """Contract for credential verification — implemented by shell.

    verify_credential raises AuthenticationError on any invalid credential.
    """
    async def verify_credential(self, token: str) -> Principal: ...
    def role_of(self, principal: Principal) -> str | None: ...
