"""Catalog entities read during reconciliation."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, kw_only=True)
class Category:
    id: int
    url_path: str
    parent_id: int | None = None
    name: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class Product:
    """One product row of an import batch."""

    entity_id: int
    sku: str
    url_key: str
    store_ids: tuple[int, ...] = ()
    category_ids: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        if not self.url_key.strip():
            raise ValueError(f"Product {self.sku!r} has an empty url_key")
