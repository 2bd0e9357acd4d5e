"""Collaborator contracts consumed and fed by the reconciliation engine.

The engine never reaches for storage, the category tree or URL-key generation
directly. Each of those concerns is passed in through one of these protocols so
tests can run the engine against fixed in-memory fixtures.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rewritesync.domain.model import Category, EntityType, RewriteRecord


@runtime_checkable
class ExistingRewriteSource(Protocol):
    """Query interface returning every stored rewrite of one entity."""

    def get_existing_rewrites(
        self,
        entity_type: EntityType,
        entity_id: int,
    ) -> Sequence[RewriteRecord]: ...


@runtime_checkable
class CategoryLookup(Protocol):
    """Read-only category tree access."""

    def get_root_category(self) -> Category: ...

    def get_category(self, category_id: int) -> Category | None: ...


@runtime_checkable
class ReplacementLookup(Protocol):
    """Answers whether the current batch re-pathed a given category."""

    def replacement_for(self, category_id: int) -> RewriteRecord | None: ...


@runtime_checkable
class PathGenerator(Protocol):
    """Computes the entity's request path and metadata within ``category``."""

    def compute_path_and_metadata(self, category: Category) -> tuple[str, dict[str, object]]: ...


@runtime_checkable
class RewriteSink(Protocol):
    """Receives finalized records; upserts by ``primary_key`` when present."""

    def persist(self, record: RewriteRecord) -> None: ...
