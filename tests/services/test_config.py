"""Settings — URL rewriting and credential policy validation."""

import pytest
from pydantic import ValidationError

from catalog_api.config import Settings

SECRET = "x" * 32


def test_plain_postgres_url_gets_async_driver():
    s = Settings(database_url="postgresql://u:p@host:5432/db", jwt_secret=SECRET)
    assert s.database_url == "postgresql+asyncpg://u:p@host:5432/db"


def test_default_roles_grant_catalog_permissions():
    s = Settings(jwt_secret=SECRET)
    assert "product:publish" in s.role_permissions["seller"]
    assert s.role_permissions["customer"] == []


def test_none_algorithm_rejected():
    with pytest.raises(ValidationError):
        Settings(jwt_secret=SECRET, jwt_algorithms=["none"])


def test_short_hmac_secret_rejected():
    with pytest.raises(ValidationError):
        Settings(jwt_secret="short")


def test_unknown_log_format_rejected():
    with pytest.raises(ValidationError):
        Settings(jwt_secret=SECRET, log_format="xml")
