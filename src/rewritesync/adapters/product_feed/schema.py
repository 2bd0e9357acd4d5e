"""Pydantic models describing product and category feed lines."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


def _split_ids(value: object) -> object:
    """Accept ``"1,2"`` style id lists as found in CSV-derived feeds."""

    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    if isinstance(value, int):
        return [value]
    return value


class FeedBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, str_strip_whitespace=True)


class ProductLine(FeedBaseModel):
    entity_id: int = Field(gt=0)
    sku: str = Field(min_length=1)
    url_key: str = Field(min_length=1)
    store_ids: list[int] = Field(default_factory=list)
    category_ids: list[int] = Field(default_factory=list)

    _normalize_ids = field_validator("store_ids", "category_ids", mode="before")(_split_ids)

    @field_validator("url_key")
    @classmethod
    def _reject_slashes(cls, value: str) -> str:
        if "/" in value:
            raise ValueError("url_key must not contain '/'")
        return value


class CategoryLine(FeedBaseModel):
    entity_id: int = Field(gt=0)
    parent_id: int | None = None
    url_path: str = ""
    name: str | None = None

    _normalize_name = field_validator("name", mode="before")(_blank_to_none)

    @field_validator("url_path")
    @classmethod
    def _strip_slashes(cls, value: str) -> str:
        return value.strip("/")
