"""JSON Lines readers turning feed files into domain objects."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from rewritesync.domain.model import Category, Product

from .schema import CategoryLine, ProductLine

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from pathlib import Path

log = logging.getLogger(__name__)


class FeedFormatError(ValueError):
    """Raised when a feed line is not valid JSON or fails validation."""

    def __init__(self, line_number: int, message: str) -> None:
        super().__init__(f"line {line_number}: {message}")
        self.line_number = line_number


def _iter_payloads(lines: Iterable[str]) -> Iterator[tuple[int, object]]:
    for line_number, raw in enumerate(lines, start=1):
        stripped = raw.strip()
        if not stripped or stripped.startswith("#"):
            continue
        try:
            yield line_number, json.loads(stripped)
        except ValueError as exc:
            raise FeedFormatError(line_number, f"invalid JSON ({exc})") from exc


def parse_products(lines: Iterable[str]) -> Iterator[Product]:
    for line_number, payload in _iter_payloads(lines):
        try:
            line = ProductLine.model_validate(payload)
        except ValidationError as exc:
            raise FeedFormatError(line_number, str(exc)) from exc
        yield Product(
            entity_id=line.entity_id,
            sku=line.sku,
            url_key=line.url_key,
            store_ids=tuple(line.store_ids),
            category_ids=tuple(line.category_ids),
        )


def parse_categories(lines: Iterable[str]) -> Iterator[Category]:
    for line_number, payload in _iter_payloads(lines):
        try:
            line = CategoryLine.model_validate(payload)
        except ValidationError as exc:
            raise FeedFormatError(line_number, str(exc)) from exc
        yield Category(
            id=line.entity_id,
            parent_id=line.parent_id,
            url_path=line.url_path,
            name=line.name,
        )


def read_products(path: Path) -> list[Product]:
    with path.open(encoding="utf-8") as handle:
        products = list(parse_products(handle))
    log.info("Read %s products from %s", len(products), path)
    return products


def read_categories(path: Path) -> list[Category]:
    with path.open(encoding="utf-8") as handle:
        categories = list(parse_categories(handle))
    log.info("Read %s categories from %s", len(categories), path)
    return categories
