"""Environment variable readers shared by the config loaders."""

from __future__ import annotations

import os

from .errors import ConfigurationError


def optional_env_str(name: str, default: str) -> str:
    """Return the stripped value of ``name``, or ``default`` when it is unset.

    An empty value is kept: ``REWRITESYNC_URL_SUFFIX=`` deliberately disables the suffix.
    """

    raw = os.getenv(name)
    return default if raw is None else raw.strip()


def optional_env_int(name: str, default: int) -> int:
    """Return an integer environment variable, falling back to ``default`` when unset/blank."""

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc
