"""Two-phase reconciliation of stored rewrites against a batch's candidates.

Phase 1 matches every candidate against the existing index by
``(store_id, request_path)`` and decides between create, merge and manual
override. Phase 2 walks whatever the index still holds and demotes stale
autogenerated rewrites to permanent redirects pointing at the entity's current
path.

The engine only computes outcomes. Persisting ``ReconciliationResult.emitted``
is left to the caller so a failure half-way through redirect synthesis does not
leave a partial write behind.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, cast

from rewritesync.domain.model import RedirectType

from .metadata import CATEGORY_ID_KEY, decode_metadata, encode_metadata, ensure_category_id
from .outcomes import (
    CandidateCreated,
    CandidateMerged,
    DuplicateCandidate,
    LeftoverOutcome,
    ManualClaimed,
    MatchOutcome,
    ReconciliationResult,
    StaleManualSkipped,
    StaleRedirected,
    StaleRedirectSkipped,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from rewritesync.domain.model import Category, RewriteKey, RewriteRecord

    from .contracts import CategoryLookup, PathGenerator, ReplacementLookup, RewriteSink
    from .index import ExistingRewriteIndex

log = logging.getLogger(__name__)


@dataclass(slots=True)
class ReconciliationEngine:
    """Reconcile one entity's rewrites; instances hold no per-run state."""

    categories: CategoryLookup
    replacements: ReplacementLookup
    paths: PathGenerator

    def reconcile(
        self,
        index: ExistingRewriteIndex,
        candidates: Iterable[RewriteRecord],
    ) -> ReconciliationResult:
        """Run both phases. ``index`` is drained by the matching phase."""

        result = ReconciliationResult()
        produced: set[RewriteKey] = set()
        for candidate in candidates:
            outcome = self.match_candidate(index, candidate, produced=produced)
            result.append(outcome)

        leftovers = index.leftovers()
        if leftovers:
            root = self.categories.get_root_category()
            for existing in leftovers:
                result.append(self.resolve_leftover(existing, root=root))

        summary = result.summary
        log.info(
            "Reconciled rewrites: created=%s, merged=%s, unchanged=%s, manual=%s, "
            "redirected=%s, skipped_manual=%s, skipped_redirects=%s",
            summary.created,
            summary.merged,
            summary.unchanged,
            summary.manual_claimed,
            summary.redirected,
            summary.stale_manual_skipped,
            summary.stale_redirect_skipped,
        )
        return result

    def match_candidate(
        self,
        index: ExistingRewriteIndex,
        candidate: RewriteRecord,
        *,
        produced: set[RewriteKey] | None = None,
    ) -> MatchOutcome:
        """Decide how ``candidate`` materializes against the stored rewrites."""

        if produced is not None:
            if candidate.key in produced:
                log.warning(
                    "Dropping duplicate candidate for store %s path %r",
                    candidate.store_id,
                    candidate.request_path,
                )
                return DuplicateCandidate(candidate=candidate)
            produced.add(candidate.key)

        existing = index.lookup(candidate.store_id, candidate.request_path)
        if existing is None:
            log.debug("Creating rewrite %s", candidate.key)
            return CandidateCreated(record=candidate)

        index.remove(existing.store_id, existing.request_path)
        if not existing.is_autogenerated:
            log.debug("Manual rewrite %s overrides the generated candidate", existing.key)
            return ManualClaimed(candidate=candidate, existing=existing)

        merged = candidate.merged(primary_key=existing.primary_key)
        log.debug("Updating rewrite %s (id=%s)", merged.key, merged.primary_key)
        return CandidateMerged(existing=existing, record=merged)

    def resolve_leftover(
        self,
        existing: RewriteRecord,
        *,
        root: Category | None = None,
    ) -> LeftoverOutcome:
        """Decide what happens to a stored rewrite no candidate claimed."""

        if not existing.is_autogenerated:
            return StaleManualSkipped(existing=existing)
        if existing.is_redirect:
            return StaleRedirectSkipped(existing=existing)

        root_category = root or self.categories.get_root_category()
        metadata = ensure_category_id(decode_metadata(existing.metadata), root_category.id)
        category_id = cast(int, metadata[CATEGORY_ID_KEY])

        category = self._redirect_category(category_id, root=root_category)
        target_path, target_metadata = self.paths.compute_path_and_metadata(category)

        redirect = existing.merged(
            is_autogenerated=False,
            redirect_type=RedirectType.PERMANENT,
            metadata=encode_metadata(target_metadata),
            target_path=target_path,
        )
        log.debug(
            "Redirecting stale rewrite %s (id=%s) to %r",
            existing.key,
            existing.primary_key,
            target_path,
        )
        return StaleRedirected(existing=existing, record=redirect, category_id=category.id)

    def _redirect_category(self, category_id: int, *, root: Category) -> Category:
        if category_id == root.id:
            return root
        if self.replacements.replacement_for(category_id) is None:
            return root
        category = self.categories.get_category(category_id)
        if category is None:
            log.warning("Category %s is gone, redirecting to the root category", category_id)
            return root
        return category


def persist_emitted(result: ReconciliationResult, sink: RewriteSink) -> int:
    """Hand every emitted record to ``sink`` and return how many were persisted."""

    emitted = result.emitted
    for record in emitted:
        sink.persist(record)
    return len(emitted)
