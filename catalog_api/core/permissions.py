"""Permissions — flat capability sets attached to authenticated principals.

Invariants:
    - A principal's permissions are resolved once, at authentication time
    - Authorization is set membership only: no role hierarchy, no inheritance
    - Unknown roles (and principals with no role) resolve to an empty set

Design Decisions:
    - Role -> permissions mapping comes from settings, not code: operators can
      grant a new role without a deploy
"""

from dataclasses import dataclass, field
from typing import Mapping, Iterable

from catalog_api.core.domain_types import OwnerId, Permission
from catalog_api.core.errors import AuthorizationError, ErrorContext

DEFAULT_ROLE_PERMISSIONS: dict[str, list[str]] = {
    "admin": [p.value for p in Permission],
    "seller": [p.value for p in Permission],
    "customer": [],
}


@dataclass(frozen=True)
class Principal:
    """The authenticated actor making a request."""
    id: OwnerId
    role: str | None = None
    permissions: frozenset[Permission] = field(default_factory=frozenset)


def resolve_permissions(
    role: str | None, role_permissions: Mapping[str, Iterable[str]],
) -> frozenset[Permission]:
    """Map a role name to its permission set. Unknown permission strings are ignored."""
    if role is None:
        return frozenset()
    known = {p.value: p for p in Permission}
    return frozenset(
        known[name] for name in role_permissions.get(role, ()) if name in known
    )


def check_permission(
    principal: Principal, required: Permission,
) -> AuthorizationError | None:
    """Return an error unless the principal holds the required permission."""
    if required in principal.permissions:
        return None
    return AuthorizationError(
        principal.role, required.value,
        ErrorContext(principal_id=principal.id),
    )
