"""Domain port definitions for adapters."""

from __future__ import annotations

from .persistence import (
    CategoryRepository,
    UrlRewriteProductCategoryRepository,
    UrlRewriteRepository,
)
from .unit_of_work import (
    RepositoryCollection,
    RewriteRepositories,
    RewriteUnitOfWork,
    UnitOfWork,
)

__all__ = [
    "CategoryRepository",
    "RepositoryCollection",
    "RewriteRepositories",
    "RewriteUnitOfWork",
    "UnitOfWork",
    "UrlRewriteProductCategoryRepository",
    "UrlRewriteRepository",
]
