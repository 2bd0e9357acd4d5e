"""Reconciliation defaults for product rewrites."""

from __future__ import annotations

from dataclasses import dataclass

from rewritesync.domain.model import EntityType

from .env import optional_env_int, optional_env_str
from .errors import ConfigurationError

DEFAULT_URL_SUFFIX = ".html"
DEFAULT_ROOT_CATEGORY_ID = 2


@dataclass(frozen=True, slots=True)
class RewriteConfig:
    url_suffix: str = DEFAULT_URL_SUFFIX
    root_category_id: int = DEFAULT_ROOT_CATEGORY_ID
    entity_type: EntityType = EntityType.PRODUCT


def get_rewrite_config() -> RewriteConfig:
    url_suffix = optional_env_str("REWRITESYNC_URL_SUFFIX", DEFAULT_URL_SUFFIX)
    if "/" in url_suffix:
        raise ConfigurationError(f"URL suffix must not contain '/': {url_suffix!r}")
    root_category_id = optional_env_int("REWRITESYNC_ROOT_CATEGORY_ID", DEFAULT_ROOT_CATEGORY_ID)
    if root_category_id <= 0:
        raise ConfigurationError("REWRITESYNC_ROOT_CATEGORY_ID must be positive")
    return RewriteConfig(url_suffix=url_suffix, root_category_id=root_category_id)
