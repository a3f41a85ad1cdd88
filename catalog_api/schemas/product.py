"""Product Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - ProductCreate: name 1-120 chars after strip; unknown fields rejected; no slug field
    - ProductListQuery without limit lists every match; limit, when given, is 1-100
    - ProductListQuery: unknown query parameters rejected; sort is a closed set
    - Path params: slug matches SLUG_PATTERN, product_id is a UUID
    - Responses serialize with camelCase keys (productId, ownerId, ...)

Design Decisions:
    - extra="forbid" on every request model: a typo in a filter must fail, not silently widen the list
    - Responses built explicitly from ProductRecord: the wire shape never follows ORM columns
    - Query model uses snake_case names: FastAPI query models bind by field name
"""

from datetime import datetime
from typing import Annotated, Literal
from uuid import UUID

from fastapi import Path
from pydantic import BaseModel, ConfigDict, Field, HttpUrl, StringConstraints
from pydantic.alias_generators import to_camel

from catalog_api.core.domain_types import (
    NewProduct, OwnerId, Page, ProductFilter, ProductRecord, ProductSort, SortField,
)
from catalog_api.core.slugs import MAX_SLUG_LENGTH, SLUG_PATTERN

SortParam = Literal[
    "name", "-name", "createdAt", "-createdAt", "publishedAt", "-publishedAt",
]

_SORT_FIELDS = {
    "name": SortField.NAME,
    "createdAt": SortField.CREATED_AT,
    "publishedAt": SortField.PUBLISHED_AT,
}

SlugPath = Annotated[
    str, Path(min_length=1, max_length=MAX_SLUG_LENGTH, pattern=SLUG_PATTERN),
]
ProductIdPath = Annotated[UUID, Path()]

# strip first, then measure: "  Widget  " counts as 6 characters
ProductName = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120),
]
CategoryName = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=60),
]


# --- Requests -----------------------------------------------------------------

class ProductCreate(BaseModel):
    """Product creation body."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid",
    )

    name: ProductName
    description: str | None = Field(None, max_length=5000)
    category: CategoryName | None = None
    image_url: HttpUrl | None = None

    def to_domain(self) -> NewProduct:
        return NewProduct(
            name=self.name,
            description=self.description,
            category=self.category,
            image_url=str(self.image_url) if self.image_url else None,
        )


class ProductListQuery(BaseModel):
    """Filter, sort and pagination for the product list."""
    model_config = ConfigDict(extra="forbid")

    published: bool | None = None
    owner_id: str | None = Field(None, min_length=1, max_length=255)
    category: str | None = Field(None, min_length=1, max_length=60)
    q: str | None = Field(None, min_length=1, max_length=120)
    sort: SortParam | None = None
    limit: int | None = Field(None, ge=1, le=100)
    offset: int = Field(0, ge=0)

    def to_filter(self) -> ProductFilter:
        return ProductFilter(
            published=self.published,
            owner_id=OwnerId(self.owner_id) if self.owner_id else None,
            category=self.category,
            name_contains=self.q,
        )

    def to_sort(self) -> ProductSort | None:
        if self.sort is None:
            return None
        descending = self.sort.startswith("-")
        return ProductSort(_SORT_FIELDS[self.sort.lstrip("-")], descending)

    def to_page(self) -> Page:
        return Page(limit=self.limit, offset=self.offset)


# --- Responses ----------------------------------------------------------------

class ProductResponse(BaseModel):
    """Public product representation."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    product_id: UUID
    slug: str
    name: str
    description: str | None = None
    category: str | None = None
    image_url: str | None = None
    published: bool
    owner_id: str
    created_at: datetime
    published_at: datetime | None = None

    @classmethod
    def from_record(cls, record: ProductRecord, **extra) -> "ProductResponse":
        return cls(
            product_id=record.id,
            slug=record.slug,
            name=record.name,
            description=record.description,
            category=record.category,
            image_url=record.image_url,
            published=record.published,
            owner_id=record.owner_id,
            created_at=record.created_at,
            published_at=record.published_at,
            **extra,
        )


class ProductDeletedResponse(ProductResponse):
    """Deleted product snapshot plus a confirmation message."""
    message: str = "Product deleted successfully"
