"""Shared logging helpers."""

from __future__ import annotations

import logging
import os

from .errors import ConfigurationError


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    """Initialise the root logger once with sensible defaults.

    Parameters mirror ``logging.basicConfig`` with a simplified contract: the level
    defaults to ``REWRITESYNC_LOG_LEVEL`` (or INFO) and the format is terse enough
    for CLI output. Pass ``force=True`` to reconfigure during tests.
    """

    logging.basicConfig(
        level=level if level is not None else get_log_level(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )


def get_log_level() -> int:
    raw = os.getenv("REWRITESYNC_LOG_LEVEL")
    if raw is None or not raw.strip():
        return logging.INFO
    name = raw.strip().upper()
    level = logging.getLevelNamesMapping().get(name)
    if level is None:
        raise ConfigurationError(f"Unknown log level: {raw}")
    return level
