"""JSON Lines feed adapter for products and categories."""

from __future__ import annotations

from .reader import (
    FeedFormatError,
    parse_categories,
    parse_products,
    read_categories,
    read_products,
)
from .schema import CategoryLine, ProductLine

__all__ = [
    "CategoryLine",
    "FeedFormatError",
    "ProductLine",
    "parse_categories",
    "parse_products",
    "read_categories",
    "read_products",
]
