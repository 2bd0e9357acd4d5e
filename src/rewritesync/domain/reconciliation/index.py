"""In-memory index over the stored rewrites of one entity."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from rewritesync.domain.model import EntityType, RewriteKey, RewriteRecord

    from .contracts import ExistingRewriteSource


class ExistingRewriteIndex:
    """Existing rewrites keyed by ``(store_id, request_path)``.

    Matching drains the index: whatever is still present after all candidates
    were processed was not produced by the current run. Iteration follows
    insertion order so leftover handling is deterministic.
    """

    def __init__(self, records: Iterable[RewriteRecord] = ()) -> None:
        self._records: dict[RewriteKey, RewriteRecord] = {}
        for record in records:
            self.add(record)

    @classmethod
    def load(
        cls,
        source: ExistingRewriteSource,
        entity_type: EntityType,
        entity_id: int,
    ) -> ExistingRewriteIndex:
        return cls(source.get_existing_rewrites(entity_type, entity_id))

    def add(self, record: RewriteRecord) -> None:
        self._records[record.key] = record

    def lookup(self, store_id: int, request_path: str) -> RewriteRecord | None:
        return self._records.get((store_id, request_path))

    def remove(self, store_id: int, request_path: str) -> RewriteRecord | None:
        return self._records.pop((store_id, request_path), None)

    def leftovers(self) -> tuple[RewriteRecord, ...]:
        return tuple(self._records.values())

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, key: object) -> bool:
        return key in self._records

    def __iter__(self) -> Iterator[RewriteRecord]:
        return iter(tuple(self._records.values()))
