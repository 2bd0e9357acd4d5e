"""URL rewrite records and their product/category links."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from rewritesync.domain.model.enums import EntityType, RedirectType

if TYPE_CHECKING:
    from rewritesync.domain.model.primitives import RewriteKey


@dataclass(kw_only=True)
class RewriteRecord:
    """One stored (or to be stored) mapping from a public request path to a target path.

    ``primary_key`` is assigned by storage. A record without it is inserted on
    persist, a record carrying one is updated in place.
    """

    store_id: int
    request_path: str
    target_path: str
    entity_type: EntityType
    entity_id: int
    redirect_type: RedirectType = RedirectType.NONE
    is_autogenerated: bool = True
    metadata: str | None = None
    description: str | None = None
    primary_key: int | None = None

    @property
    def key(self) -> RewriteKey:
        return (self.store_id, self.request_path)

    @property
    def is_redirect(self) -> bool:
        return self.redirect_type != RedirectType.NONE

    def merged(self, **overrides: object) -> RewriteRecord:
        """Return a copy with ``overrides`` applied; ``self`` is left untouched."""

        return replace(self, **overrides)  # pyright: ignore[reportArgumentType]


@dataclass(frozen=True, slots=True)
class RewriteProductCategory:
    """Link between a persisted product rewrite and the category it was generated for."""

    url_rewrite_id: int
    category_id: int
    product_id: int
