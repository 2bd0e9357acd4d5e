"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from itertools import islice
from logging import getLogger
from typing import TYPE_CHECKING

from rewritesync.adapters.product_feed import read_categories, read_products
from rewritesync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyRewriteUnitOfWork,
    is_started,
    startup,
)
from rewritesync.config import get_rewrite_config
from rewritesync.domain.ports.unit_of_work import RewriteUnitOfWork
from rewritesync.domain.rewrite_sync import SyncRewritesResult, sync_product_rewrites

if TYPE_CHECKING:
    from pathlib import Path

    from rewritesync.config import RewriteConfig

UnitOfWorkFactory = Callable[[], RewriteUnitOfWork]


log = getLogger(__name__)


def _ensure_started(unit_of_work_factory: UnitOfWorkFactory | None) -> UnitOfWorkFactory:
    if unit_of_work_factory is not None:
        return unit_of_work_factory
    if not is_started():
        startup()
    return SqlAlchemyRewriteUnitOfWork


def import_categories(
    path: Path,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> int:
    """Load a category feed into storage, replacing categories with the same id."""

    effective_uow = _ensure_started(unit_of_work_factory)
    categories = read_categories(path)
    with effective_uow() as uow:
        for category in categories:
            uow.repositories.categories.add(category)
        uow.commit()
    log.info("Imported %s categories", len(categories))
    return len(categories)


def reconcile_product_feed(
    path: Path,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    config: RewriteConfig | None = None,
    limit: int | None = None,
) -> SyncRewritesResult:
    """Reconcile the rewrites of every product listed in the feed at ``path``."""

    effective_uow = _ensure_started(unit_of_work_factory)
    effective_config = config or get_rewrite_config()
    products = read_products(path)
    if limit is not None:
        products = list(islice(products, limit))
    log.info(
        "Starting rewrite reconciliation: products=%s, root_category=%s, suffix=%r",
        len(products),
        effective_config.root_category_id,
        effective_config.url_suffix,
    )

    return sync_product_rewrites(
        products,
        unit_of_work_factory=effective_uow,
        config=effective_config,
    )
