"""SQLAlchemy adapter package for rewritesync."""

from __future__ import annotations

from .repositories import (
    SqlAlchemyCategoryRepository,
    SqlAlchemyUrlRewriteProductCategoryRepository,
    SqlAlchemyUrlRewriteRepository,
)
from .tables import (
    category_table,
    create_all_tables,
    metadata,
    url_rewrite_product_category_table,
    url_rewrite_table,
)

__all__ = [
    "SqlAlchemyCategoryRepository",
    "SqlAlchemyUrlRewriteProductCategoryRepository",
    "SqlAlchemyUrlRewriteRepository",
    "category_table",
    "create_all_tables",
    "metadata",
    "url_rewrite_product_category_table",
    "url_rewrite_table",
]
