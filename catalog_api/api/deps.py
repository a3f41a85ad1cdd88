"""API Dependencies — wiring between FastAPI and the service layer.

Invariants:
    - Dependencies never raise for authentication or authorization: those run
      inside the route pipeline, after Pydantic validation
    - One CatalogService per request, bound to that request's AsyncSession

Design Decisions:
    - Auth provider cached per process: it holds only settings, no per-request state
"""

from functools import lru_cache
from typing import Iterable, Mapping

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.config import get_settings
from catalog_api.core.repository_protocols import AuthProvider
from catalog_api.infrastructure.database import get_db
from catalog_api.infrastructure.jwt_auth import JwtAuthProvider
from catalog_api.infrastructure.product_store import SqlProductRepository
from catalog_api.services.catalog_service import CatalogService


def get_catalog_service(db: AsyncSession = Depends(get_db)) -> CatalogService:
    return CatalogService(SqlProductRepository(db))


@lru_cache
def get_auth_provider() -> AuthProvider:
    return JwtAuthProvider.from_settings(get_settings())


def get_role_permissions() -> Mapping[str, Iterable[str]]:
    return get_settings().role_permissions
