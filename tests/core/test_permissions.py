"""Permissions — tests for role -> capability resolution and membership checks.

Tests cover:
    - default roles resolve to the documented sets
    - unknown role and missing role resolve to the empty set
    - check_permission is set membership, reported as AuthorizationError
"""

from catalog_api.core.domain_types import OwnerId, Permission
from catalog_api.core.errors import AuthorizationError, ErrorKind
from catalog_api.core.permissions import (
    DEFAULT_ROLE_PERMISSIONS, Principal, check_permission, resolve_permissions,
)


def test_seller_gets_every_product_permission():
    perms = resolve_permissions("seller", DEFAULT_ROLE_PERMISSIONS)
    assert perms == frozenset(Permission)


def test_customer_gets_nothing():
    assert resolve_permissions("customer", DEFAULT_ROLE_PERMISSIONS) == frozenset()


def test_unknown_and_missing_roles_get_nothing():
    assert resolve_permissions("pirate", DEFAULT_ROLE_PERMISSIONS) == frozenset()
    assert resolve_permissions(None, DEFAULT_ROLE_PERMISSIONS) == frozenset()


def test_unknown_permission_names_are_ignored():
    mapping = {"editor": ["product:publish", "product:teleport"]}
    assert resolve_permissions("editor", mapping) == frozenset({Permission.PUBLISH})


def test_check_permission_passes_on_membership():
    principal = Principal(
        id=OwnerId("u1"), role="editor",
        permissions=frozenset({Permission.PUBLISH}),
    )
    assert check_permission(principal, Permission.PUBLISH) is None


def test_check_permission_denies_without_membership():
    principal = Principal(
        id=OwnerId("u1"), role="editor",
        permissions=frozenset({Permission.PUBLISH}),
    )
    error = check_permission(principal, Permission.DELETE)
    assert isinstance(error, AuthorizationError)
    assert error.kind == ErrorKind.AUTHORIZATION
    assert error.permission == "product:delete"
    assert error.context.principal_id == "u1"
