"""Domain primitives: scalar aliases shared across modules."""

from __future__ import annotations

type StoreId = int
type CategoryId = int
type RequestPath = str
type RewriteKey = tuple[StoreId, RequestPath]
