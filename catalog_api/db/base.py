"""SQLAlchemy Declarative Base — metadata shared by every catalog table.

Invariants:
    - All models inherit from Base; alembic/env.py targets Base.metadata
    - Index and constraint names are deterministic (ix_<table>_<column>, pk_<table>, ...)
    - Mapped[datetime] columns are timezone-aware unless a model overrides the type

Design Decisions:
    - Naming convention on MetaData: migrations and create_all produce identical names
    - Separate file for Base: models import it without importing each other
"""

from datetime import datetime

from sqlalchemy import DateTime, MetaData
from sqlalchemy.orm import DeclarativeBase

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Declarative base for catalog ORM models."""
    metadata = MetaData(naming_convention=NAMING_CONVENTION)
    type_annotation_map = {datetime: DateTime(timezone=True)}
