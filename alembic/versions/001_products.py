"""Products table.

Revision ID: 001_products
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_products"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "products",
        sa.Column("id", sa.Uuid, nullable=False),
        sa.Column("slug", sa.String(140), nullable=False),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("category", sa.String(60), nullable=True),
        sa.Column("image_url", sa.String(2048), nullable=True),
        sa.Column("owner_id", sa.String(255), nullable=False),
        sa.Column("published", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_products"),
    )
    op.create_index("ix_products_slug", "products", ["slug"], unique=True)
    op.create_index("ix_products_owner_id", "products", ["owner_id"])
    op.create_index("ix_products_category", "products", ["category"])
    op.create_index("ix_products_published", "products", ["published"])


def downgrade() -> None:
    op.drop_index("ix_products_published", table_name="products")
    op.drop_index("ix_products_category", table_name="products")
    op.drop_index("ix_products_owner_id", table_name="products")
    op.drop_index("ix_products_slug", table_name="products")
    op.drop_table("products")
