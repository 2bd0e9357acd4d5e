"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_int, optional_env_str
from .errors import ConfigurationError
from .logging import configure_logging, get_log_level
from .rewrites import RewriteConfig, get_rewrite_config
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "RewriteConfig",
    "StorageConfig",
    "configure_logging",
    "get_database_config",
    "get_log_level",
    "get_rewrite_config",
    "get_storage_config",
    "optional_env_int",
    "optional_env_str",
]
