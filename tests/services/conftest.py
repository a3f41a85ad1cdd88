"""Service test fixtures — in-memory store, HTTP client and signed tokens.

Invariants:
    - Every test gets a fresh in-memory SQLite database with the catalog schema
    - The app's get_db and db_manager both point at that database
    - Tokens are minted by the same provider the app verifies with

Design Decisions:
    - A real DatabaseSessionManager on aiosqlite: route tests exercise the same
      session wrapper as production, only the URL differs
"""

import pytest
from httpx import ASGITransport, AsyncClient

import catalog_api.infrastructure.database as db_module
import catalog_api.models  # noqa: F401
from catalog_api.api.deps import get_auth_provider
from catalog_api.db.base import Base
from catalog_api.infrastructure.database import DatabaseSessionManager, get_db
from catalog_api.infrastructure.product_store import SqlProductRepository
from catalog_api.main import app
from catalog_api.services.catalog_service import CatalogService


@pytest.fixture
async def manager():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    async with manager.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield manager
    await manager.dispose()


@pytest.fixture
async def test_db(manager):
    async with manager.session() as session:
        yield session


@pytest.fixture
async def service(test_db):
    """CatalogService over the real SQL store."""
    return CatalogService(SqlProductRepository(test_db))


@pytest.fixture
async def client(manager, monkeypatch):
    """HTTP client against the app, bound to the per-test database."""
    async def override_get_db():
        async with manager.session() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    monkeypatch.setattr(db_module, "db_manager", manager)

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def auth_provider():
    return get_auth_provider()


def _bearer(provider, subject: str, role: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {provider.issue_token(subject, role=role)}"}


@pytest.fixture
def seller_headers(auth_provider):
    return _bearer(auth_provider, "seller-1", "seller")


@pytest.fixture
def customer_headers(auth_provider):
    return _bearer(auth_provider, "customer-1", "customer")


@pytest.fixture
def admin_headers(auth_provider):
    return _bearer(auth_provider, "admin-1", "admin")
