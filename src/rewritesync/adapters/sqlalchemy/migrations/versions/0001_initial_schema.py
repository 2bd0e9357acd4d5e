"""Initial rewrite schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-17 00:00:00
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "url_rewrite",
        sa.Column("url_rewrite_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("entity_type", sa.String(length=32), nullable=False),
        sa.Column("entity_id", sa.Integer(), nullable=False),
        sa.Column("request_path", sa.String(length=255), nullable=False),
        sa.Column("target_path", sa.String(length=255), nullable=False),
        sa.Column("redirect_type", sa.Integer(), nullable=False),
        sa.Column("store_id", sa.Integer(), nullable=False),
        sa.Column("description", sa.String(length=255), nullable=True),
        sa.Column("is_autogenerated", sa.Boolean(), nullable=False),
        sa.Column("metadata", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("url_rewrite_id", name="pk_url_rewrite"),
        sa.UniqueConstraint("store_id", "request_path", name="uq_url_rewrite_store_id"),
    )
    op.create_index("ix_url_rewrite_entity", "url_rewrite", ["entity_type", "entity_id"])

    op.create_table(
        "catalog_category",
        sa.Column("entity_id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("parent_id", sa.Integer(), nullable=True),
        sa.Column("url_path", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.PrimaryKeyConstraint("entity_id", name="pk_catalog_category"),
    )

    op.create_table(
        "catalog_url_rewrite_product_category",
        sa.Column("url_rewrite_id", sa.Integer(), nullable=False),
        sa.Column("category_id", sa.Integer(), nullable=False),
        sa.Column("product_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["url_rewrite_id"],
            ["url_rewrite.url_rewrite_id"],
            name="fk_catalog_url_rewrite_product_category_url_rewrite_id_url_rewrite",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("url_rewrite_id", name="pk_catalog_url_rewrite_product_category"),
        sa.UniqueConstraint(
            "product_id",
            "category_id",
            name="uq_catalog_url_rewrite_product_category_product_id",
        ),
    )


def downgrade() -> None:
    op.drop_table("catalog_url_rewrite_product_category")
    op.drop_table("catalog_category")
    op.drop_index("ix_url_rewrite_entity", table_name="url_rewrite")
    op.drop_table("url_rewrite")
