"""Root conftest — environment for every test run.

Settings are read once (get_settings is cached), so these must be set
before any catalog_api module is imported.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret-key-with-enough-entropy-000")
os.environ.setdefault("LOG_FORMAT", "text")
