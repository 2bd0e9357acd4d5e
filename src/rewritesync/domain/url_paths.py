"""Request/target path generation for product rewrites.

A product gets one rewrite per store for the root category (``<url_key><suffix>``)
and one per assigned category (``<category url_path>/<url_key><suffix>``). These
form the candidate set the reconciliation engine matches against storage.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rewritesync.domain.model import EntityType, RedirectType, RewriteRecord
from rewritesync.domain.reconciliation.metadata import (
    CATEGORY_ID_KEY,
    category_id_of,
    decode_metadata,
    encode_metadata,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from rewritesync.domain.model import Category, Product
    from rewritesync.domain.reconciliation.contracts import CategoryLookup

log = logging.getLogger(__name__)

DEFAULT_URL_SUFFIX = ".html"


def product_target_path(
    product: Product,
    category: Category | None = None,
    *,
    root_category_id: int | None = None,
) -> str:
    """Return the internal route a product rewrite resolves to.

    Only the configured root category maps to the bare product route; a category
    without a parent is still scoped like any other.
    """

    path = f"catalog/product/view/id/{product.entity_id}"
    if category is None or category.id == root_category_id:
        return path
    return f"{path}/category/{category.id}"


@dataclass(slots=True, kw_only=True)
class ProductUrlPathGenerator:
    """Computes a product's public path within a category."""

    product: Product
    root_category_id: int
    url_suffix: str = DEFAULT_URL_SUFFIX

    def request_path(self, category: Category) -> str:
        leaf = f"{self.product.url_key.strip().strip('/')}{self.url_suffix}"
        if self._is_root(category):
            return leaf
        prefix = category.url_path.strip().strip("/")
        if not prefix:
            return leaf
        return f"{prefix}/{leaf}"

    def metadata(self, category: Category) -> dict[str, object]:
        return {CATEGORY_ID_KEY: category.id}

    def compute_path_and_metadata(self, category: Category) -> tuple[str, dict[str, object]]:
        return self.request_path(category), self.metadata(category)

    def _is_root(self, category: Category) -> bool:
        return category.id == self.root_category_id


@dataclass(slots=True)
class CandidateSet:
    """Candidates of one product, indexed by the category they were generated for."""

    records: tuple[RewriteRecord, ...] = ()
    _by_category: dict[int, RewriteRecord] = field(
        default_factory=dict["int", "RewriteRecord"], init=False, repr=False
    )

    def __post_init__(self) -> None:
        for record in self.records:
            category_id = category_id_of(decode_metadata(record.metadata))
            if category_id is not None:
                self._by_category.setdefault(category_id, record)

    def replacement_for(self, category_id: int) -> RewriteRecord | None:
        return self._by_category.get(category_id)

    def category_ids(self) -> tuple[int, ...]:
        return tuple(self._by_category)

    def __iter__(self) -> Iterator[RewriteRecord]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)


def build_candidates(
    product: Product,
    categories: CategoryLookup,
    generator: ProductUrlPathGenerator,
) -> CandidateSet:
    """Compute the rewrites ``product`` should own after this import."""

    root = categories.get_root_category()
    scoped = _resolve_categories(product, categories, root=root)
    records: list[RewriteRecord] = []
    for store_id in product.store_ids:
        for category in (root, *scoped):
            request_path, metadata = generator.compute_path_and_metadata(category)
            records.append(
                RewriteRecord(
                    store_id=store_id,
                    request_path=request_path,
                    target_path=product_target_path(
                        product, category, root_category_id=root.id
                    ),
                    entity_type=EntityType.PRODUCT,
                    entity_id=product.entity_id,
                    redirect_type=RedirectType.NONE,
                    is_autogenerated=True,
                    metadata=encode_metadata(metadata),
                )
            )
    return CandidateSet(tuple(records))


def _resolve_categories(
    product: Product,
    categories: CategoryLookup,
    *,
    root: Category,
) -> list[Category]:
    resolved: list[Category] = []
    seen: set[int] = {root.id}
    for category_id in _unique(product.category_ids):
        if category_id in seen:
            continue
        seen.add(category_id)
        category = categories.get_category(category_id)
        if category is None:
            log.warning(
                "Product %s references unknown category %s; skipping its rewrite",
                product.sku,
                category_id,
            )
            continue
        resolved.append(category)
    return resolved


def _unique(values: Iterable[int]) -> list[int]:
    return list(dict.fromkeys(values))
