"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - ProductId wraps UUID — never use bare UUID in domain logic
    - Slug and OwnerId are plain strings at runtime, distinct to the type checker
    - All valid states encoded as Enums — no raw string matching
    - ProductRecord, ProductFilter and ProductSort are frozen: values, not handles
    - The default Page is unbounded: listing returns every match unless a limit is asked for

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
    - ProductRecord decoupled from the ORM row: core never imports from models/
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

ProductId = NewType("ProductId", UUID)
Slug = NewType("Slug", str)
OwnerId = NewType("OwnerId", str)


# ─── Enums ───────────────────────────────────────────────────────

class ProductState(str, Enum):
    """Product lifecycle states. DELETED is terminal."""
    UNPUBLISHED = "unpublished"
    PUBLISHED = "published"
    DELETED = "deleted"


class Permission(str, Enum):
    """Capabilities a role may grant. Checked by set membership only."""
    CREATE = "product:create"
    DELETE = "product:delete"
    PUBLISH = "product:publish"


class SortField(str, Enum):
    """Sortable product attributes."""
    NAME = "name"
    CREATED_AT = "created_at"
    PUBLISHED_AT = "published_at"


# ─── Value Objects ───────────────────────────────────────────────

@dataclass(frozen=True)
class ProductRecord:
    """A stored product as seen by the service layer."""
    id: ProductId
    slug: Slug
    name: str
    owner_id: OwnerId
    published: bool
    created_at: datetime
    description: str | None = None
    category: str | None = None
    image_url: str | None = None
    published_at: datetime | None = None

    @property
    def state(self) -> ProductState:
        # Deleted records are never materialized; absence is the deleted state
        return ProductState.PUBLISHED if self.published else ProductState.UNPUBLISHED


@dataclass(frozen=True)
class NewProduct:
    """Validated creation payload, before identity is assigned."""
    name: str
    description: str | None = None
    category: str | None = None
    image_url: str | None = None


@dataclass(frozen=True)
class ProductFilter:
    """Predicate over product attributes. None fields do not restrict."""
    published: bool | None = None
    owner_id: OwnerId | None = None
    category: str | None = None
    name_contains: str | None = None


@dataclass(frozen=True)
class ProductSort:
    """Single-key ordering."""
    field: SortField
    descending: bool = False


@dataclass(frozen=True)
class Page:
    """Result window. limit=None returns every matching product."""
    limit: int | None = None
    offset: int = 0
