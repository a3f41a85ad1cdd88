"""Product Lifecycle — the per-product state machine.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Return a CatalogError on violation, None on success
    - Unpublished -> Published, Unpublished|Published -> Deleted; nothing leaves Deleted
    - Published -> Published is allowed (publish is idempotent in effect)

Design Decisions:
    - Transition table as a frozenset of pairs: the whole machine is visible at a glance
    - Return errors (not raise): the service wraps them in Err without try/except
"""

from catalog_api.core.domain_types import ProductState
from catalog_api.core.errors import CatalogError, ConflictError, ErrorContext

ALLOWED_TRANSITIONS: frozenset[tuple[ProductState, ProductState]] = frozenset({
    (ProductState.UNPUBLISHED, ProductState.PUBLISHED),
    (ProductState.PUBLISHED, ProductState.PUBLISHED),
    (ProductState.UNPUBLISHED, ProductState.DELETED),
    (ProductState.PUBLISHED, ProductState.DELETED),
})


def check_transition(
    current: ProductState, target: ProductState, product_id: str | None = None,
) -> CatalogError | None:
    """Validate a lifecycle transition."""
    if (current, target) in ALLOWED_TRANSITIONS:
        return None
    return ConflictError(
        f"Product cannot move from {current.value} to {target.value}",
        ErrorContext(product_id=product_id),
    )
