"""Programmatic Alembic entry points for the rewrite schema."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Final

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext

from rewritesync.config import get_database_config

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

MIGRATIONS_PATH: Final[Path] = Path(__file__).resolve().parent
# src/rewritesync/adapters/sqlalchemy/migrations -> repository root
PROJECT_ROOT: Final[Path] = MIGRATIONS_PATH.parents[4]
PYPROJECT_PATH: Final[Path] = PROJECT_ROOT / "pyproject.toml"
HEAD_REVISION: Final[str] = "0001_initial_schema"


def _tool_options() -> dict[str, str]:
    """Return ``[tool.alembic]`` from a source checkout's pyproject, if there is one."""

    if not PYPROJECT_PATH.is_file():
        return {}
    with PYPROJECT_PATH.open("rb") as handle:
        section = tomllib.load(handle).get("tool", {}).get("alembic", {})
    return {str(key): str(value) for key, value in section.items()}


def _script_location(options: dict[str, str]) -> Path:
    configured = options.get("script_location")
    if configured is None:
        return MIGRATIONS_PATH
    path = Path(configured)
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    return path if path.is_dir() else MIGRATIONS_PATH


def alembic_config(*, database_uri: str | None = None) -> Config:
    """Build an Alembic config without an ini file."""

    options = _tool_options()
    config = Config()
    config.set_main_option("script_location", str(_script_location(options)))
    config.set_main_option("path_separator", "os")
    for key, value in options.items():
        if key not in {"script_location", "path_separator"}:
            config.set_main_option(key, value)
    if database_uri is not None:
        config.set_main_option("sqlalchemy.url", database_uri)
    return config


def upgrade_head(*, engine: Engine | None = None, database_uri: str | None = None) -> None:
    """Migrate ``engine`` (or the database at ``database_uri``) to the newest revision."""

    if engine is None:
        config = alembic_config(database_uri=database_uri or get_database_config().uri)
        command.upgrade(config, "head")
        return

    config = alembic_config()
    with engine.begin() as connection:
        config.attributes["connection"] = connection
        command.upgrade(config, "head")
    log.debug("Schema of %s is at %s", engine.url.database, current_revision(engine))


def current_revision(engine: Engine) -> str | None:
    """Return the revision stamped in ``engine``'s database, ``None`` when unmigrated."""

    with engine.connect() as connection:
        return MigrationContext.configure(connection).get_current_revision()
