"""Codec for the opaque metadata blob stored on each rewrite.

The blob is a compact JSON object. Only ``category_id`` carries meaning for
reconciliation; any other keys are preserved untouched.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from typing import Final, cast

log = logging.getLogger(__name__)

CATEGORY_ID_KEY: Final[str] = "category_id"
_INTEGER: Final = re.compile(r"-?[0-9]+")


def decode_metadata(blob: str | bytes | None) -> dict[str, object]:
    """Return the decoded metadata mapping, or an empty dict for anything unreadable."""

    if blob is None:
        return {}
    if isinstance(blob, bytes):
        try:
            blob = blob.decode("utf-8")
        except UnicodeDecodeError:
            log.debug("Ignoring undecodable metadata bytes")
            return {}
    if not blob.strip():
        return {}
    try:
        loaded = json.loads(blob)
    except ValueError:
        log.debug("Ignoring malformed metadata %r", blob)
        return {}
    if not isinstance(loaded, dict):
        return {}
    return dict(cast(dict[str, object], loaded))


def encode_metadata(mapping: Mapping[str, object]) -> str:
    return json.dumps(dict(mapping), sort_keys=True, separators=(",", ":"), default=str)


def _coerce_category_id(value: object) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        stripped = value.strip()
        if _INTEGER.fullmatch(stripped):
            return int(stripped)
    return None


def ensure_category_id(
    mapping: Mapping[str, object],
    fallback_category_id: int,
) -> dict[str, object]:
    """Return a copy of ``mapping`` whose ``category_id`` is a resolved integer."""

    resolved = dict(mapping)
    category_id = _coerce_category_id(resolved.get(CATEGORY_ID_KEY))
    resolved[CATEGORY_ID_KEY] = fallback_category_id if category_id is None else category_id
    return resolved


def category_id_of(mapping: Mapping[str, object]) -> int | None:
    """Return the integer ``category_id`` held by ``mapping`` if there is one."""

    return _coerce_category_id(mapping.get(CATEGORY_ID_KEY))


class MetadataCodec:
    """Bundles the metadata functions for injection into collaborators."""

    decode = staticmethod(decode_metadata)
    encode = staticmethod(encode_metadata)
    ensure_category_id = staticmethod(ensure_category_id)
    category_id_of = staticmethod(category_id_of)
