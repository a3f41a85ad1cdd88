"""Request Pipeline — ordered, composable steps threaded through an immutable context.

Invariants:
    - RequestContext is frozen; steps return a new context via dataclasses.replace
    - A step returns either the next context or a CatalogError; the first error wins
    - authenticate always precedes authorize in a mutating pipeline
    - Authentication failure and authorization failure are distinct error kinds

Design Decisions:
    - Explicit step lists per route over ambient request state: the order of checks
      is readable at the route definition and testable without FastAPI
    - Input validation is not a step: Pydantic rejects bad input at the FastAPI
      boundary before the route body, so it always runs first
"""

import logging
from dataclasses import dataclass, replace
from typing import Awaitable, Callable, Iterable, Mapping, Sequence

from catalog_api.core.domain_types import Permission
from catalog_api.core.errors import AuthenticationError, CatalogError, ErrorContext
from catalog_api.core.permissions import (
    Principal, check_permission, resolve_permissions,
)
from catalog_api.core.repository_protocols import AuthProvider
from catalog_api.core.result import Err, Ok, Result

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestContext:
    """Per-request state passed from step to step."""
    operation: str
    authorization: str | None = None
    principal: Principal | None = None


Step = Callable[[RequestContext], Awaitable[RequestContext | CatalogError]]


def bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an 'Authorization: Bearer <token>' header value."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def authenticate(
    provider: AuthProvider, role_permissions: Mapping[str, Iterable[str]],
) -> Step:
    """Verify the bearer credential and attach the principal with its permissions."""

    async def step(ctx: RequestContext) -> RequestContext | CatalogError:
        token = bearer_token(ctx.authorization)
        if token is None:
            return AuthenticationError(
                "Missing Bearer token", ErrorContext(operation=ctx.operation),
            )
        try:
            principal = await provider.verify_credential(token)
        except AuthenticationError as e:
            e.context.operation = ctx.operation
            return e
        role = provider.role_of(principal)
        principal = replace(
            principal, role=role,
            permissions=resolve_permissions(role, role_permissions),
        )
        return replace(ctx, principal=principal)

    return step


def authorize(required: Permission) -> Step:
    """Require a permission on the already-authenticated principal."""

    async def step(ctx: RequestContext) -> RequestContext | CatalogError:
        if ctx.principal is None:
            return AuthenticationError(
                "Authentication required", ErrorContext(operation=ctx.operation),
            )
        denied = check_permission(ctx.principal, required)
        if denied:
            denied.context.operation = ctx.operation
            logger.info(
                f"Permission {required.value} denied",
                extra={"principal_id": ctx.principal.id, "operation": ctx.operation},
            )
        return denied or ctx

    return step


async def run_pipeline(
    ctx: RequestContext, steps: Sequence[Step],
) -> Result[RequestContext]:
    """Run steps in order, stopping at the first error."""
    for step in steps:
        outcome = await step(ctx)
        if isinstance(outcome, CatalogError):
            return Err(outcome)
        ctx = outcome
    return Ok(ctx)


def mutation_pipeline(
    provider: AuthProvider,
    role_permissions: Mapping[str, Iterable[str]],
    required: Permission,
) -> list[Step]:
    """The standard gate for create/delete/publish."""
    return [authenticate(provider, role_permissions), authorize(required)]
