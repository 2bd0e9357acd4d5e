from __future__ import annotations

import logging
from pathlib import Path  # noqa: TC003

import pytest

from rewritesync.config import (
    ConfigurationError,
    RewriteConfig,
    get_database_config,
    get_log_level,
    get_rewrite_config,
    get_storage_config,
    optional_env_int,
    optional_env_str,
)
from rewritesync.config.storage import DEFAULT_DB_FILENAME
from rewritesync.domain.model import EntityType


def test_optional_env_str_keeps_empty_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("EXAMPLE_VAR", raising=False)
    assert optional_env_str("EXAMPLE_VAR", "fallback") == "fallback"

    monkeypatch.setenv("EXAMPLE_VAR", "  value ")
    assert optional_env_str("EXAMPLE_VAR", "fallback") == "value"

    monkeypatch.setenv("EXAMPLE_VAR", "")
    assert optional_env_str("EXAMPLE_VAR", "fallback") == ""


def test_optional_env_int(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("EXAMPLE_INT", raising=False)
    assert optional_env_int("EXAMPLE_INT", 7) == 7

    monkeypatch.setenv("EXAMPLE_INT", " 12 ")
    assert optional_env_int("EXAMPLE_INT", 7) == 12

    monkeypatch.setenv("EXAMPLE_INT", "twelve")
    with pytest.raises(ConfigurationError, match="EXAMPLE_INT"):
        optional_env_int("EXAMPLE_INT", 7)


def test_rewrite_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("REWRITESYNC_URL_SUFFIX", raising=False)
    monkeypatch.delenv("REWRITESYNC_ROOT_CATEGORY_ID", raising=False)

    config = get_rewrite_config()

    assert config == RewriteConfig(url_suffix=".html", root_category_id=2)
    assert config.entity_type is EntityType.PRODUCT


def test_rewrite_config_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REWRITESYNC_URL_SUFFIX", "")
    monkeypatch.setenv("REWRITESYNC_ROOT_CATEGORY_ID", "1")

    config = get_rewrite_config()

    assert config.url_suffix == ""
    assert config.root_category_id == 1


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("REWRITESYNC_URL_SUFFIX", "/index.html"),
        ("REWRITESYNC_ROOT_CATEGORY_ID", "0"),
        ("REWRITESYNC_ROOT_CATEGORY_ID", "root"),
    ],
)
def test_rewrite_config_rejects_invalid_values(
    monkeypatch: pytest.MonkeyPatch, name: str, value: str
) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(ConfigurationError):
        get_rewrite_config()


def test_log_level_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("REWRITESYNC_LOG_LEVEL", raising=False)
    assert get_log_level() == logging.INFO

    monkeypatch.setenv("REWRITESYNC_LOG_LEVEL", "debug")
    assert get_log_level() == logging.DEBUG

    monkeypatch.setenv("REWRITESYNC_LOG_LEVEL", "chatty")
    with pytest.raises(ConfigurationError, match="chatty"):
        get_log_level()


def test_data_dir_prefers_explicit_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    custom = tmp_path / "custom-data"
    monkeypatch.setenv("REWRITESYNC_DATA_DIR", str(custom))

    assert get_storage_config().data_dir == custom.resolve()


def test_database_uri_uses_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "sqlite:///override.db")

    assert get_database_config().uri == "sqlite:///override.db"


def test_database_uri_creates_data_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("DATABASE_URI", raising=False)
    monkeypatch.setenv("REWRITESYNC_DATA_DIR", str(tmp_path / "data-dir"))

    uri = get_database_config().uri

    expected_path = (tmp_path / "data-dir" / DEFAULT_DB_FILENAME).resolve()
    assert uri == f"sqlite+pysqlite:///{expected_path}"
    assert expected_path.parent.exists()
