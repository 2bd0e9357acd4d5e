"""SQLAlchemy table metadata for rewrites, categories and their links."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_name)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

url_rewrite_table = Table(
    "url_rewrite",
    metadata,
    Column("url_rewrite_id", Integer, primary_key=True, autoincrement=True),
    Column("entity_type", String(32), nullable=False),
    Column("entity_id", Integer, nullable=False),
    Column("request_path", String(255), nullable=False),
    Column("target_path", String(255), nullable=False),
    Column("redirect_type", Integer, nullable=False, default=0),
    Column("store_id", Integer, nullable=False),
    Column("description", String(255), nullable=True),
    Column("is_autogenerated", Boolean, nullable=False, default=False),
    Column("metadata", Text, nullable=True),
    UniqueConstraint("store_id", "request_path"),
    Index("ix_url_rewrite_entity", "entity_type", "entity_id"),
)

category_table = Table(
    "catalog_category",
    metadata,
    Column("entity_id", Integer, primary_key=True, autoincrement=False),
    Column("parent_id", Integer, nullable=True),
    Column("url_path", String(255), nullable=False, default=""),
    Column("name", String(255), nullable=True),
)

url_rewrite_product_category_table = Table(
    "catalog_url_rewrite_product_category",
    metadata,
    Column(
        "url_rewrite_id",
        Integer,
        ForeignKey("url_rewrite.url_rewrite_id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("category_id", Integer, nullable=False),
    Column("product_id", Integer, nullable=False),
    UniqueConstraint("product_id", "category_id"),
)


def create_all_tables(engine: Engine) -> None:
    """Create database tables without running migrations."""

    log.info("Creating all tables")
    metadata.create_all(engine)
