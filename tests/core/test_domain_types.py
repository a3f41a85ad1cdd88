"""Domain Types — tests for record state and value defaults.

Tests cover:
    - record state follows the published flag
    - the default page is unbounded
"""

import uuid
from datetime import datetime, timezone

from catalog_api.core.domain_types import (
    OwnerId, Page, ProductId, ProductRecord, ProductState, Slug,
)


def _record(**overrides) -> ProductRecord:
    fields = dict(
        id=ProductId(uuid.uuid4()),
        slug=Slug("blue-widget"),
        name="Blue Widget",
        owner_id=OwnerId("u1"),
        published=False,
        created_at=datetime.now(timezone.utc),
        category="tools",
    )
    fields.update(overrides)
    return ProductRecord(**fields)


def test_record_state_follows_published_flag():
    assert _record().state == ProductState.UNPUBLISHED
    assert _record(published=True).state == ProductState.PUBLISHED


def test_default_page_has_no_limit():
    assert Page().limit is None
    assert Page().offset == 0
