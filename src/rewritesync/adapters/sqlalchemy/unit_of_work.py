"""SQLAlchemy-backed unit of work for rewrite reconciliation.

The adapter keeps one engine per process. ``startup`` migrates the schema and binds
a session factory; every unit of work opens its own session from that factory so a
product's rewrites are committed or rolled back together.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from rewritesync.adapters.sqlalchemy.migrations import upgrade_head
from rewritesync.adapters.sqlalchemy.repositories import (
    SqlAlchemyCategoryRepository,
    SqlAlchemyUrlRewriteProductCategoryRepository,
    SqlAlchemyUrlRewriteRepository,
)
from rewritesync.config import get_database_config
from rewritesync.domain.ports.unit_of_work import RewriteRepositories

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when the SQLAlchemy adapter is used in the wrong lifecycle state."""


class _Binding:
    engine: Engine | None = None
    sessions: sessionmaker[Session] | None = None

    @classmethod
    def bind(cls, engine: Engine | None) -> None:
        cls.engine = engine
        cls.sessions = (
            None if engine is None else sessionmaker(bind=engine, expire_on_commit=False)
        )

    @classmethod
    def open_session(cls) -> Session:
        if cls.sessions is None:
            raise StartupError(
                "SQLAlchemy adapter not initialised. Call "
                "rewritesync.adapters.sqlalchemy.unit_of_work.startup() first."
            )
        return cls.sessions()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Bind the adapter to ``engine`` (or a new one for ``database_uri``) after migrating it."""

    if _Binding.engine is not None and not force:
        raise StartupError(
            "SQLAlchemy adapter already initialised. Pass force=True to reconfigure."
        )

    if engine is None:
        engine = create_engine(database_uri or get_database_config().uri, future=True)
    upgrade_head(engine=engine)
    if _Binding.engine is not None and _Binding.engine is not engine:
        _Binding.engine.dispose()
    _Binding.bind(engine)
    log.debug("SQLAlchemy adapter bound to %s", engine.url.render_as_string(hide_password=True))


def configured_engine() -> Engine | None:
    return _Binding.engine


def is_started() -> bool:
    return _Binding.engine is not None


def shutdown() -> None:
    """Dispose the bound engine and forget it (primarily for tests)."""

    if _Binding.engine is not None:
        _Binding.engine.dispose()
    _Binding.bind(None)


class SqlAlchemyRewriteUnitOfWork:
    """Session-scoped access to rewrites, categories and product/category links.

    Construct it only after ``startup``; the session is opened on ``__enter__`` and
    closed on ``__exit__``, rolling back first when the block raised.
    """

    def __init__(self) -> None:
        if not is_started():
            raise StartupError("Call startup() before creating a unit of work")
        self._session: Session | None = None
        self._repositories: RewriteRepositories | None = None

    def __enter__(self) -> SqlAlchemyRewriteUnitOfWork:
        if self._session is not None:
            raise StartupError("Unit of work is already in use")
        session = _Binding.open_session()
        self._session = session
        self._repositories = RewriteRepositories(
            url_rewrites=SqlAlchemyUrlRewriteRepository(session),
            categories=SqlAlchemyCategoryRepository(session),
            product_categories=SqlAlchemyUrlRewriteProductCategoryRepository(session),
        )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        session = self.session
        try:
            if exc_type is not None:
                session.rollback()
        finally:
            session.close()
            self._session = None
            self._repositories = None
        return False

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work session not open")
        return self._session

    @property
    def repositories(self) -> RewriteRepositories:
        if self._repositories is None:
            raise StartupError("Unit of work session not open")
        return self._repositories

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


if TYPE_CHECKING:
    from rewritesync.domain.ports.unit_of_work import RewriteUnitOfWork

    _uow_check: RewriteUnitOfWork = SqlAlchemyRewriteUnitOfWork()
