"""Ports for persisting rewrites and reading the category tree."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from rewritesync.domain.model import (
        Category,
        EntityType,
        RewriteProductCategory,
        RewriteRecord,
    )


@runtime_checkable
class UrlRewriteRepository(Protocol):
    """Persistence contract for URL rewrites."""

    def get(self, primary_key: int) -> RewriteRecord | None: ...

    def get_existing_rewrites(
        self,
        entity_type: EntityType,
        entity_id: int,
    ) -> Sequence[RewriteRecord]: ...

    def save(self, record: RewriteRecord) -> RewriteRecord:
        """Insert or update ``record`` and return it with ``primary_key`` set."""
        ...


@runtime_checkable
class CategoryRepository(Protocol):
    """Persistence contract for catalog categories."""

    def get(self, category_id: int) -> Category | None: ...

    def get_many(self, category_ids: Iterable[int]) -> dict[int, Category]: ...

    def add(self, category: Category) -> None: ...


@runtime_checkable
class UrlRewriteProductCategoryRepository(Protocol):
    """Persistence contract for product rewrite -> category links."""

    def find(self, product_id: int, category_id: int) -> RewriteProductCategory | None: ...

    def save(self, link: RewriteProductCategory) -> None: ...

    def delete_for_rewrite(self, url_rewrite_id: int) -> None:
        """Drop the link that points at ``url_rewrite_id``, if there is one."""
        ...
