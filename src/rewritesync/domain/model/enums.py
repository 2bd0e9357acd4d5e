"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import IntEnum, StrEnum


class EntityType(StrEnum):
    """Owner discriminator stored on every rewrite row."""

    PRODUCT = "product"
    CATEGORY = "category"


class RedirectType(IntEnum):
    NONE = 0
    PERMANENT = 301
    TEMPORARY = 302
