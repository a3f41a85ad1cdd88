"""Catalog Service — tests for list/detail/create/delete/publish over the SQL store.

Invariants:
    - Service methods return Ok | Err, never raise for domain outcomes
    - Slug derived from name; duplicate slug -> ConflictError
    - publish idempotent; delete of a deleted product -> NotFoundError
    - Records that vanish between read and write -> NotFoundError
"""

import uuid

from catalog_api.core.domain_types import (
    NewProduct, ProductFilter, ProductId, ProductSort, SortField,
)
from catalog_api.core.errors import ErrorKind, StoreError
from catalog_api.core.result import Err, Ok
from catalog_api.services.catalog_service import CatalogService


async def _create(service, name="Widget", owner="u1", **fields):
    result = await service.create_product(NewProduct(name=name, **fields), owner)
    assert isinstance(result, Ok), result
    return result.value


# ─── create / detail ─────────────────────────────────────────────

async def test_create_then_detail_round_trip(service):
    created = await _create(service, "Widget", "u1", description="A widget")
    assert created.published is False
    assert created.owner_id == "u1"
    assert created.slug == "widget"
    assert created.published_at is None

    detail = await service.get_detail_product("widget")
    assert isinstance(detail, Ok)
    assert detail.value == created


async def test_create_duplicate_slug_is_conflict(service):
    await _create(service, "Blue Widget")
    result = await service.create_product(NewProduct(name="blue  widget!"), "u2")
    assert isinstance(result, Err)
    assert result.error.kind == ErrorKind.CONFLICT


async def test_create_unsluggable_name_is_validation_error(service):
    result = await service.create_product(NewProduct(name="???"), "u1")
    assert isinstance(result, Err)
    assert result.error.kind == ErrorKind.VALIDATION


async def test_created_ids_and_slugs_are_unique(service):
    products = [await _create(service, f"Widget {i}") for i in range(5)]
    assert len({p.id for p in products}) == 5
    assert len({p.slug for p in products}) == 5


async def test_detail_of_unknown_slug_is_not_found(service):
    result = await service.get_detail_product("nonexistent-slug")
    assert isinstance(result, Err)
    assert result.error.kind == ErrorKind.NOT_FOUND


# ─── publish ─────────────────────────────────────────────────────

async def test_publish_sets_flag_and_timestamp(service):
    created = await _create(service)
    result = await service.publish_product(created.id)
    assert isinstance(result, Ok)
    assert result.value.published is True
    assert result.value.published_at is not None


async def test_publish_is_idempotent(service):
    created = await _create(service)
    first = await service.publish_product(created.id)
    second = await service.publish_product(created.id)
    assert isinstance(first, Ok) and isinstance(second, Ok)
    assert second.value.published is True
    assert second.value.published_at == first.value.published_at


async def test_publish_unknown_product_is_not_found(service):
    result = await service.publish_product(ProductId(uuid.uuid4()))
    assert isinstance(result, Err)
    assert result.error.kind == ErrorKind.NOT_FOUND


# ─── delete ──────────────────────────────────────────────────────

async def test_delete_returns_pre_deletion_record(service):
    created = await _create(service)
    await service.publish_product(created.id)
    result = await service.delete_product(created.id)
    assert isinstance(result, Ok)
    assert result.value.id == created.id
    assert result.value.published is True

    gone = await service.get_detail_product("widget")
    assert isinstance(gone, Err)


async def test_delete_twice_is_not_found(service):
    created = await _create(service)
    await service.delete_product(created.id)
    result = await service.delete_product(created.id)
    assert isinstance(result, Err)
    assert result.error.kind == ErrorKind.NOT_FOUND


async def test_deleted_product_cannot_be_published(service):
    created = await _create(service)
    await service.delete_product(created.id)
    result = await service.publish_product(created.id)
    assert isinstance(result, Err)
    assert result.error.kind == ErrorKind.NOT_FOUND


async def test_slug_reusable_after_delete(service):
    created = await _create(service)
    await service.delete_product(created.id)
    again = await _create(service)
    assert again.slug == "widget"
    assert again.id != created.id


# ─── list ────────────────────────────────────────────────────────

async def test_list_filters_by_published(service):
    widget = await _create(service, "Widget")
    await _create(service, "Gadget")
    await service.publish_product(widget.id)

    published = await service.get_all_products(ProductFilter(published=True))
    unpublished = await service.get_all_products(ProductFilter(published=False))
    assert [p.slug for p in published.value] == ["widget"]
    assert [p.slug for p in unpublished.value] == ["gadget"]


async def test_list_without_filter_returns_everything(service):
    await _create(service, "Widget")
    await _create(service, "Gadget")
    result = await service.get_all_products()
    assert isinstance(result, Ok)
    assert {p.slug for p in result.value} == {"widget", "gadget"}


async def test_list_sorts_by_name(service):
    for name in ("Banana", "apple", "Cherry"):
        await _create(service, name)
    asc = await service.get_all_products(sort=ProductSort(SortField.NAME))
    desc = await service.get_all_products(sort=ProductSort(SortField.NAME, descending=True))
    assert [p.name for p in asc.value] == ["apple", "Banana", "Cherry"]
    assert [p.name for p in desc.value] == ["Cherry", "Banana", "apple"]


async def test_list_filters_by_owner_category_and_name(service):
    await _create(service, "Red Widget", "u1", category="tools")
    await _create(service, "Blue Widget", "u2", category="tools")
    await _create(service, "Red Ball", "u1", category="toys")

    by_owner = await service.get_all_products(ProductFilter(owner_id="u1"))
    by_category = await service.get_all_products(ProductFilter(category="tools"))
    by_name = await service.get_all_products(ProductFilter(name_contains="red"))
    assert {p.slug for p in by_owner.value} == {"red-widget", "red-ball"}
    assert {p.slug for p in by_category.value} == {"red-widget", "blue-widget"}
    assert {p.slug for p in by_name.value} == {"red-widget", "red-ball"}


async def test_list_treats_like_wildcards_literally(service):
    await _create(service, "100% Cotton")
    await _create(service, "Cotton Blend")
    result = await service.get_all_products(ProductFilter(name_contains="%"))
    assert [p.slug for p in result.value] == ["100-cotton"]


# ─── store failures and races (fake repository) ──────────────────

class _VanishingRepository:
    """Returns a record on read, then reports the row gone on write."""

    def __init__(self, record):
        self.record = record

    async def get_by_id(self, product_id):
        return self.record

    async def mark_published(self, product_id):
        return None

    async def delete(self, product_id):
        return None


class _BrokenRepository:
    async def list_matching(self, product_filter, sort, page):
        raise StoreError("connection refused", "query")

    async def get_by_slug(self, slug):
        raise StoreError("connection refused", "query")


async def test_publish_of_row_deleted_mid_flight_is_not_found(service):
    record = await _create(service)
    racing = CatalogService(_VanishingRepository(record))
    result = await racing.publish_product(record.id)
    assert isinstance(result, Err)
    assert result.error.kind == ErrorKind.NOT_FOUND


async def test_delete_of_row_deleted_mid_flight_is_not_found(service):
    record = await _create(service)
    racing = CatalogService(_VanishingRepository(record))
    result = await racing.delete_product(record.id)
    assert isinstance(result, Err)
    assert result.error.kind == ErrorKind.NOT_FOUND


async def test_store_failure_becomes_store_error_value():
    broken = CatalogService(_BrokenRepository())
    listed = await broken.get_all_products()
    detail = await broken.get_detail_product("widget")
    assert isinstance(listed, Err) and listed.error.kind == ErrorKind.STORE
    assert isinstance(detail, Err) and detail.error.kind == ErrorKind.STORE
    assert listed.error.context.operation == "list"
