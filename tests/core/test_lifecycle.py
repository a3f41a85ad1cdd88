"""Product Lifecycle — tests for the pure state machine.

Tests cover:
    - publish allowed from unpublished, idempotent from published
    - delete allowed from both live states
    - nothing leaves deleted; published never reverts
"""

import pytest

from catalog_api.core.domain_types import ProductState
from catalog_api.core.errors import ConflictError, ErrorKind
from catalog_api.core.lifecycle import check_transition


@pytest.mark.parametrize("current,target", [
    (ProductState.UNPUBLISHED, ProductState.PUBLISHED),
    (ProductState.PUBLISHED, ProductState.PUBLISHED),
    (ProductState.UNPUBLISHED, ProductState.DELETED),
    (ProductState.PUBLISHED, ProductState.DELETED),
])
def test_allowed_transitions_return_none(current, target):
    assert check_transition(current, target) is None


def test_published_never_reverts():
    error = check_transition(ProductState.PUBLISHED, ProductState.UNPUBLISHED, "p1")
    assert isinstance(error, ConflictError)
    assert error.kind == ErrorKind.CONFLICT
    assert error.context.product_id == "p1"


@pytest.mark.parametrize("target", list(ProductState))
def test_nothing_leaves_deleted(target):
    assert check_transition(ProductState.DELETED, target) is not None
