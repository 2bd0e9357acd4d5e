"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import delete, insert, select, update

from rewritesync.adapters.sqlalchemy.tables import (
    category_table,
    url_rewrite_product_category_table,
    url_rewrite_table,
)
from rewritesync.domain.model import (
    Category,
    EntityType,
    RedirectType,
    RewriteProductCategory,
    RewriteRecord,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sqlalchemy import Row
    from sqlalchemy.orm import Session


def _rewrite_from_row(row: Row[Any]) -> RewriteRecord:
    values = row._mapping  # noqa: SLF001
    return RewriteRecord(
        primary_key=values["url_rewrite_id"],
        store_id=values["store_id"],
        request_path=values["request_path"],
        target_path=values["target_path"],
        entity_type=EntityType(values["entity_type"]),
        entity_id=values["entity_id"],
        redirect_type=RedirectType(values["redirect_type"] or 0),
        is_autogenerated=bool(values["is_autogenerated"]),
        metadata=values["metadata"],
        description=values["description"],
    )


def _rewrite_values(record: RewriteRecord) -> dict[str, object]:
    return {
        "entity_type": str(record.entity_type),
        "entity_id": record.entity_id,
        "request_path": record.request_path,
        "target_path": record.target_path,
        "redirect_type": int(record.redirect_type),
        "store_id": record.store_id,
        "description": record.description,
        "is_autogenerated": record.is_autogenerated,
        "metadata": record.metadata,
    }


class SqlAlchemyUrlRewriteRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, primary_key: int) -> RewriteRecord | None:
        stmt = select(url_rewrite_table).where(url_rewrite_table.c.url_rewrite_id == primary_key)
        row = self.session.execute(stmt).one_or_none()
        return None if row is None else _rewrite_from_row(row)

    def get_existing_rewrites(
        self,
        entity_type: EntityType,
        entity_id: int,
    ) -> list[RewriteRecord]:
        stmt = (
            select(url_rewrite_table)
            .where(url_rewrite_table.c.entity_type == str(entity_type))
            .where(url_rewrite_table.c.entity_id == entity_id)
            .order_by(url_rewrite_table.c.url_rewrite_id)
        )
        return [_rewrite_from_row(row) for row in self.session.execute(stmt)]

    def find_by_request_path(self, store_id: int, request_path: str) -> RewriteRecord | None:
        stmt = (
            select(url_rewrite_table)
            .where(url_rewrite_table.c.store_id == store_id)
            .where(url_rewrite_table.c.request_path == request_path)
        )
        row = self.session.execute(stmt).one_or_none()
        return None if row is None else _rewrite_from_row(row)

    def save(self, record: RewriteRecord) -> RewriteRecord:
        values = _rewrite_values(record)
        if record.primary_key is None:
            result = self.session.execute(insert(url_rewrite_table).values(**values))
            inserted = result.inserted_primary_key
            if inserted is None:
                raise RuntimeError("Database did not report the inserted url_rewrite_id")
            record.primary_key = cast(int, inserted[0])
            return record

        stmt = (
            update(url_rewrite_table)
            .where(url_rewrite_table.c.url_rewrite_id == record.primary_key)
            .values(**values)
        )
        result = self.session.execute(stmt)
        if result.rowcount == 0:
            raise LookupError(f"url_rewrite {record.primary_key} does not exist")
        return record


class SqlAlchemyCategoryRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, category_id: int) -> Category | None:
        stmt = select(category_table).where(category_table.c.entity_id == category_id)
        row = self.session.execute(stmt).one_or_none()
        return None if row is None else self._from_row(row)

    def get_many(self, category_ids: Iterable[int]) -> dict[int, Category]:
        ids = list(dict.fromkeys(category_ids))
        if not ids:
            return {}
        stmt = select(category_table).where(category_table.c.entity_id.in_(ids))
        return {row.entity_id: self._from_row(row) for row in self.session.execute(stmt)}

    def add(self, category: Category) -> None:
        values = {
            "parent_id": category.parent_id,
            "url_path": category.url_path,
            "name": category.name,
        }
        exists = self.session.execute(
            select(category_table.c.entity_id).where(category_table.c.entity_id == category.id)
        ).scalar_one_or_none()
        if exists is None:
            self.session.execute(insert(category_table).values(entity_id=category.id, **values))
            return
        self.session.execute(
            update(category_table).where(category_table.c.entity_id == category.id).values(**values)
        )

    @staticmethod
    def _from_row(row: Row[Any]) -> Category:
        return Category(
            id=row.entity_id,
            parent_id=row.parent_id,
            url_path=row.url_path or "",
            name=row.name,
        )


class SqlAlchemyUrlRewriteProductCategoryRepository:
    """Persist links between product rewrites and their categories."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def find(self, product_id: int, category_id: int) -> RewriteProductCategory | None:
        table = url_rewrite_product_category_table
        stmt = (
            select(table)
            .where(table.c.product_id == product_id)
            .where(table.c.category_id == category_id)
        )
        row = self.session.execute(stmt).one_or_none()
        if row is None:
            return None
        return RewriteProductCategory(
            url_rewrite_id=row.url_rewrite_id,
            category_id=row.category_id,
            product_id=row.product_id,
        )

    def save(self, link: RewriteProductCategory) -> None:
        table = url_rewrite_product_category_table
        if self.find(link.product_id, link.category_id) is None:
            self.session.execute(
                insert(table).values(
                    url_rewrite_id=link.url_rewrite_id,
                    category_id=link.category_id,
                    product_id=link.product_id,
                )
            )
            return
        self.session.execute(
            update(table)
            .where(table.c.product_id == link.product_id)
            .where(table.c.category_id == link.category_id)
            .values(url_rewrite_id=link.url_rewrite_id)
        )

    def delete_for_rewrite(self, url_rewrite_id: int) -> None:
        table = url_rewrite_product_category_table
        self.session.execute(delete(table).where(table.c.url_rewrite_id == url_rewrite_id))


if TYPE_CHECKING:
    from rewritesync.domain.ports.persistence import (
        CategoryRepository,
        UrlRewriteProductCategoryRepository,
        UrlRewriteRepository,
    )
    from rewritesync.domain.reconciliation.contracts import ExistingRewriteSource

    _session_stub = cast("Session", object())
    _rewrite_repo: UrlRewriteRepository = SqlAlchemyUrlRewriteRepository(_session_stub)
    _rewrite_source: ExistingRewriteSource = SqlAlchemyUrlRewriteRepository(_session_stub)
    _category_repo: CategoryRepository = SqlAlchemyCategoryRepository(_session_stub)
    _link_repo: UrlRewriteProductCategoryRepository = (
        SqlAlchemyUrlRewriteProductCategoryRepository(_session_stub)
    )
