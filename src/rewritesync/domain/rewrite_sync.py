"""Application services for reconciling product rewrites of an import batch."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rewritesync.domain.errors import RootCategoryNotFoundError
from rewritesync.domain.model import EntityType, RewriteProductCategory
from rewritesync.domain.reconciliation import (
    ExistingRewriteIndex,
    ReconciliationEngine,
    ReconciliationSummary,
    category_id_of,
    decode_metadata,
    persist_emitted,
)
from rewritesync.domain.url_paths import ProductUrlPathGenerator, build_candidates

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from rewritesync.config import RewriteConfig
    from rewritesync.domain.model import Category, Product, RewriteRecord
    from rewritesync.domain.ports import (
        CategoryRepository,
        RewriteRepositories,
        RewriteUnitOfWork,
    )
    from rewritesync.domain.reconciliation import ReconciliationResult

log = logging.getLogger(__name__)


class RepositoryCategoryLookup:
    """Category lookup over a repository, memoizing what it has already read."""

    def __init__(self, repository: CategoryRepository, *, root_category_id: int) -> None:
        self._repository = repository
        self._root_category_id = root_category_id
        self._cache: dict[int, Category | None] = {}

    def preload(self, category_ids: Iterable[int]) -> None:
        wanted = [category_id for category_id in category_ids if category_id not in self._cache]
        if not wanted:
            return
        found = self._repository.get_many(wanted)
        for category_id in wanted:
            self._cache[category_id] = found.get(category_id)

    def get_root_category(self) -> Category:
        root = self.get_category(self._root_category_id)
        if root is None:
            raise RootCategoryNotFoundError(self._root_category_id)
        return root

    def get_category(self, category_id: int) -> Category | None:
        if category_id not in self._cache:
            self._cache[category_id] = self._repository.get(category_id)
        return self._cache[category_id]


class RewritePersister:
    """Upserts emitted rewrites and maintains their product/category links."""

    def __init__(self, repositories: RewriteRepositories, *, root_category_id: int) -> None:
        self._repositories = repositories
        self._root_category_id = root_category_id
        self.persisted = 0

    def persist(self, record: RewriteRecord) -> None:
        saved = self._repositories.url_rewrites.save(record)
        record.primary_key = saved.primary_key
        self.persisted += 1
        self._link_category(saved)

    def _link_category(self, record: RewriteRecord) -> None:
        if record.entity_type is not EntityType.PRODUCT or record.primary_key is None:
            return
        links = self._repositories.product_categories
        if record.is_redirect:
            links.delete_for_rewrite(record.primary_key)
            return
        category_id = category_id_of(decode_metadata(record.metadata))
        if category_id is None or category_id == self._root_category_id:
            return

        existing = links.find(record.entity_id, category_id)
        if existing is not None and existing.url_rewrite_id == record.primary_key:
            return
        links.save(
            RewriteProductCategory(
                url_rewrite_id=record.primary_key,
                category_id=category_id,
                product_id=record.entity_id,
            )
        )


@dataclass(slots=True)
class ProductReconciliation:
    """Outcome of reconciling one product."""

    product: Product
    result: ReconciliationResult
    persisted: int


@dataclass(slots=True)
class FailedProduct:
    entity_id: int
    sku: str
    error: str


@dataclass(slots=True)
class SyncRewritesResult:
    """Outcome of reconciling a batch of products."""

    processed: int = 0
    persisted: int = 0
    summary: ReconciliationSummary = field(default_factory=ReconciliationSummary)
    failures: list[FailedProduct] = field(default_factory=list["FailedProduct"])

    @property
    def failed(self) -> int:
        return len(self.failures)

    @property
    def succeeded(self) -> int:
        return self.processed - self.failed


def reconcile_product(
    product: Product,
    *,
    uow: RewriteUnitOfWork,
    config: RewriteConfig,
) -> ProductReconciliation:
    """Reconcile and persist the rewrites of ``product`` inside ``uow``.

    The unit of work is committed only after every emitted record was persisted;
    on any error it is rolled back and the exception propagates.
    """

    repositories = uow.repositories
    categories = RepositoryCategoryLookup(
        repositories.categories,
        root_category_id=config.root_category_id,
    )
    categories.preload((config.root_category_id, *product.category_ids))
    generator = ProductUrlPathGenerator(
        product=product,
        root_category_id=config.root_category_id,
        url_suffix=config.url_suffix,
    )

    try:
        candidates = build_candidates(product, categories, generator)
        index = ExistingRewriteIndex.load(
            repositories.url_rewrites,
            config.entity_type,
            product.entity_id,
        )
        engine = ReconciliationEngine(
            categories=categories,
            replacements=candidates,
            paths=generator,
        )
        result = engine.reconcile(index, candidates)
        persister = RewritePersister(repositories, root_category_id=config.root_category_id)
        persisted = persist_emitted(result, persister)
        uow.commit()
    except Exception:
        uow.rollback()
        raise

    return ProductReconciliation(product=product, result=result, persisted=persisted)


def sync_product_rewrites(
    products: Iterable[Product],
    *,
    unit_of_work_factory: Callable[[], RewriteUnitOfWork],
    config: RewriteConfig,
) -> SyncRewritesResult:
    """Reconcile every product in its own unit of work, continuing past failures."""

    outcome = SyncRewritesResult()
    for product in products:
        outcome.processed += 1
        try:
            with unit_of_work_factory() as uow:
                reconciled = reconcile_product(product, uow=uow, config=config)
        except Exception as exc:
            log.exception("Failed to reconcile rewrites of product %s", product.sku)
            outcome.failures.append(
                FailedProduct(entity_id=product.entity_id, sku=product.sku, error=str(exc))
            )
            continue
        outcome.persisted += reconciled.persisted
        outcome.summary.add(reconciled.result.summary)

    log.info(
        "Finished rewrite sync: processed=%s, failed=%s, persisted=%s",
        outcome.processed,
        outcome.failed,
        outcome.persisted,
    )
    return outcome
