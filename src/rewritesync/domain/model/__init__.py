"""Public domain model surface."""

from __future__ import annotations

from rewritesync.domain.model.catalog import Category, Product
from rewritesync.domain.model.enums import EntityType, RedirectType
from rewritesync.domain.model.primitives import CategoryId, RequestPath, RewriteKey, StoreId
from rewritesync.domain.model.rewrite import RewriteProductCategory, RewriteRecord

__all__ = [
    "Category",
    "CategoryId",
    "EntityType",
    "Product",
    "RedirectType",
    "RequestPath",
    "RewriteKey",
    "RewriteProductCategory",
    "RewriteRecord",
    "StoreId",
]
