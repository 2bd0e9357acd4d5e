from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from rewritesync.domain.rewrite_sync import FailedProduct, SyncRewritesResult
from rewritesync.ui import cli

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def feed(tmp_path: Path) -> Path:
    path = tmp_path / "feed.jsonl"
    path.write_text("", encoding="utf-8")
    return path


def test_cli_reconcile_passes_arguments(monkeypatch: pytest.MonkeyPatch, feed: Path) -> None:
    captured: dict[str, object] = {}

    def fake_reconcile(path: Path, **kwargs: object) -> SyncRewritesResult:
        captured["path"] = path
        captured.update(kwargs)
        return SyncRewritesResult(processed=1, persisted=2)

    monkeypatch.setattr(cli, "reconcile_product_feed", fake_reconcile)

    cli.main(["reconcile", "--input", str(feed), "--limit", "5"])

    assert captured == {"path": feed, "limit": 5}


def test_cli_categories_imports_feed(monkeypatch: pytest.MonkeyPatch, feed: Path) -> None:
    captured: list[Path] = []

    def fake_import(path: Path) -> int:
        captured.append(path)
        return 0

    monkeypatch.setattr(cli, "import_categories", fake_import)

    cli.main(["categories", "--input", str(feed)])

    assert captured == [feed]


@pytest.mark.parametrize(
    "extra",
    [["--limit", "-1"], ["--input-missing"]],
)
def test_cli_rejects_invalid_arguments(feed: Path, extra: list[str]) -> None:
    argv = ["reconcile", "--input", str(feed), *extra]

    with pytest.raises(SystemExit) as excinfo:
        cli.main(argv)

    assert excinfo.value.code == 2


def test_cli_rejects_missing_input_file(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["reconcile", "--input", str(tmp_path / "missing.jsonl")])

    assert excinfo.value.code == 2


def test_cli_exits_non_zero_when_a_product_failed(
    monkeypatch: pytest.MonkeyPatch, feed: Path
) -> None:
    def fake_reconcile(_path: Path, **_: object) -> SyncRewritesResult:
        return SyncRewritesResult(
            processed=1,
            failures=[FailedProduct(entity_id=1, sku="A", error="boom")],
        )

    monkeypatch.setattr(cli, "reconcile_product_feed", fake_reconcile)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["reconcile", "--input", str(feed)])

    assert excinfo.value.code == 1


def test_cli_exits_non_zero_on_fatal_error(monkeypatch: pytest.MonkeyPatch, feed: Path) -> None:
    def fake_import(_path: Path) -> int:
        raise RuntimeError("database unavailable")

    monkeypatch.setattr(cli, "import_categories", fake_import)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["categories", "--input", str(feed)])

    assert excinfo.value.code == 1
