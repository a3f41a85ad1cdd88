"""Product ORM — persists catalog entries.

Invariants:
    - id is UUID primary key, assigned by the service (never by the database)
    - slug is unique and immutable; owner_id is immutable
    - published only moves false -> true; published_at is set on that move and never cleared

Design Decisions:
    - Generic Uuid type over the postgresql dialect type: same model runs on
      asyncpg in production and aiosqlite in tests
    - No relationship to users: owner_id is a weak reference into the auth provider
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from catalog_api.db.base import Base


class Product(Base):
    """Catalog product row."""
    __tablename__ = "products"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    slug: Mapped[str] = mapped_column(
        String(140), nullable=False, unique=True, index=True,
    )
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str | None] = mapped_column(
        String(60), nullable=True, index=True,
    )
    image_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    owner_id: Mapped[str] = mapped_column(
        String(255), nullable=False, index=True,
    )
    published: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    published_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
