"""Product Routes — list, detail, create, delete and publish.

Invariants:
    - Pydantic validates query/path/body before any handler body runs
    - Mutating routes run the auth pipeline (authenticate -> authorize) before the service
    - Every Err is mapped through the route's own status table (api/status_tables.py)
    - Success bodies are the raw product (or list); failure bodies are the error envelope

Design Decisions:
    - Authorization header read as a plain Header param: a missing token must not
      short-circuit body validation, so no raising dependency is used for auth
    - Delete/publish/create answer 201: the status codes are the published contract
"""

import logging
from typing import Annotated, Iterable, Mapping

from fastapi import APIRouter, Depends, Header, Query, Request, status
from fastapi.responses import JSONResponse

from catalog_api.api.deps import (
    get_auth_provider, get_catalog_service, get_role_permissions,
)
from catalog_api.api.status_tables import (
    CREATE_STATUS, DELETE_STATUS, DETAIL_STATUS, LIST_STATUS, PUBLISH_STATUS,
    StatusTable,
)
from catalog_api.core.domain_types import Permission, ProductId
from catalog_api.core.errors import CatalogError
from catalog_api.core.repository_protocols import AuthProvider
from catalog_api.core.result import Err, Ok
from catalog_api.schemas.product import (
    ProductCreate, ProductDeletedResponse, ProductIdPath, ProductListQuery,
    ProductResponse, SlugPath,
)
from catalog_api.services.catalog_service import CatalogService
from catalog_api.services.request_pipeline import (
    RequestContext, mutation_pipeline, run_pipeline,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/products", tags=["products"])

ERROR_RESPONSES = {
    400: {"description": "Invalid input, credential or role"},
    401: {"description": "Missing or invalid bearer token"},
    403: {"description": "Role not allowed"},
    404: {"description": "Product not found"},
    409: {"description": "Product not found or conflict"},
}


def _fail(request: Request, error: CatalogError, table: StatusTable) -> JSONResponse:
    """Map an error value to its route-specific status."""
    status_code = table[error.kind]
    logger.warning(
        f"{request.method} {request.url.path} -> {status_code}: {error.message}",
        extra={"error_code": error.code, "path": request.url.path},
    )
    return JSONResponse(status_code=status_code, content=error.to_response())


async def _gate(
    operation: str,
    authorization: str | None,
    provider: AuthProvider,
    role_permissions: Mapping[str, Iterable[str]],
    required: Permission,
):
    ctx = RequestContext(operation=operation, authorization=authorization)
    return await run_pipeline(
        ctx, mutation_pipeline(provider, role_permissions, required),
    )


@router.get(
    "/", response_model=list[ProductResponse],
    status_code=status.HTTP_200_OK, summary="Get all product list",
    responses={400: ERROR_RESPONSES[400]},
)
async def get_all_products(
    request: Request,
    query: Annotated[ProductListQuery, Query()],
    service: CatalogService = Depends(get_catalog_service),
):
    """List products with optional filter, sort and pagination."""
    result = await service.get_all_products(
        query.to_filter(), query.to_sort(), query.to_page(),
    )
    match result:
        case Ok(value=products):
            return [ProductResponse.from_record(p) for p in products]
        case Err(error=error):
            return _fail(request, error, LIST_STATUS)


@router.post(
    "/create", response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED, summary="Create Product",
    responses={400: ERROR_RESPONSES[400]},
)
async def create_product(
    request: Request,
    body: ProductCreate,
    authorization: Annotated[str | None, Header()] = None,
    service: CatalogService = Depends(get_catalog_service),
    provider: AuthProvider = Depends(get_auth_provider),
    role_permissions: Mapping[str, Iterable[str]] = Depends(get_role_permissions),
):
    """Create an unpublished product owned by the caller."""
    gate = await _gate("create", authorization, provider, role_permissions, Permission.CREATE)
    if isinstance(gate, Err):
        return _fail(request, gate.error, CREATE_STATUS)

    result = await service.create_product(body.to_domain(), gate.value.principal.id)
    match result:
        case Ok(value=product):
            return ProductResponse.from_record(product)
        case Err(error=error):
            return _fail(request, error, CREATE_STATUS)


@router.get(
    "/{slug}", response_model=ProductResponse,
    status_code=status.HTTP_200_OK, summary="Product details",
    responses={400: ERROR_RESPONSES[400]},
)
async def get_detail_product(
    request: Request,
    slug: SlugPath,
    service: CatalogService = Depends(get_catalog_service),
):
    """Get product details by slug."""
    result = await service.get_detail_product(slug)
    match result:
        case Ok(value=product):
            return ProductResponse.from_record(product)
        case Err(error=error):
            return _fail(request, error, DETAIL_STATUS)


@router.delete(
    "/{product_id}", response_model=ProductDeletedResponse,
    status_code=status.HTTP_201_CREATED, summary="Delete Product",
    responses={code: ERROR_RESPONSES[code] for code in (401, 403, 409)},
)
async def delete_product(
    request: Request,
    product_id: ProductIdPath,
    authorization: Annotated[str | None, Header()] = None,
    service: CatalogService = Depends(get_catalog_service),
    provider: AuthProvider = Depends(get_auth_provider),
    role_permissions: Mapping[str, Iterable[str]] = Depends(get_role_permissions),
):
    """Delete a product by id and return what was removed."""
    gate = await _gate("delete", authorization, provider, role_permissions, Permission.DELETE)
    if isinstance(gate, Err):
        return _fail(request, gate.error, DELETE_STATUS)

    result = await service.delete_product(ProductId(product_id))
    match result:
        case Ok(value=product):
            return ProductDeletedResponse.from_record(product)
        case Err(error=error):
            return _fail(request, error, DELETE_STATUS)


@router.patch(
    "/{product_id}", response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED, summary="Publish Product",
    responses={code: ERROR_RESPONSES[code] for code in (401, 403, 404)},
)
async def publish_product(
    request: Request,
    product_id: ProductIdPath,
    authorization: Annotated[str | None, Header()] = None,
    service: CatalogService = Depends(get_catalog_service),
    provider: AuthProvider = Depends(get_auth_provider),
    role_permissions: Mapping[str, Iterable[str]] = Depends(get_role_permissions),
):
    """Publish a product by id. Publishing twice is not an error."""
    gate = await _gate("publish", authorization, provider, role_permissions, Permission.PUBLISH)
    if isinstance(gate, Err):
        return _fail(request, gate.error, PUBLISH_STATUS)

    result = await service.publish_product(ProductId(product_id))
    match result:
        case Ok(value=product):
            return ProductResponse.from_record(product)
        case Err(error=error):
            return _fail(request, error, PUBLISH_STATUS)
