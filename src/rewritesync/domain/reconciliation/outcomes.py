"""Per-record outcomes of the two reconciliation phases.

Matching phase (one outcome per candidate):
- ``CandidateCreated``: no stored rewrite owns the path, insert the candidate
- ``CandidateMerged``: an autogenerated rewrite owns the path, update it in place
- ``ManualClaimed``: a manual rewrite owns the path, nothing is written
- ``DuplicateCandidate``: the same path was already produced earlier in the run

Leftover phase (one outcome per unmatched stored rewrite):
- ``StaleManualSkipped``: manual rewrite, left untouched
- ``StaleRedirectSkipped``: already a redirect, never re-redirected
- ``StaleRedirected``: turned into a permanent redirect
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import StrEnum
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from rewritesync.domain.model import RewriteRecord


class OutcomeKind(StrEnum):
    CREATED = "created"
    MERGED = "merged"
    MANUAL_CLAIMED = "manual_claimed"
    DUPLICATE_CANDIDATE = "duplicate_candidate"
    STALE_MANUAL_SKIPPED = "stale_manual_skipped"
    STALE_REDIRECT_SKIPPED = "stale_redirect_skipped"
    REDIRECTED = "redirected"


_COMPARED_FIELDS = (
    "target_path",
    "redirect_type",
    "is_autogenerated",
    "metadata",
    "description",
    "entity_type",
    "entity_id",
)


@dataclass(slots=True, kw_only=True)
class CandidateCreated:
    record: RewriteRecord
    kind: Literal[OutcomeKind.CREATED] = OutcomeKind.CREATED

    @property
    def emitted(self) -> RewriteRecord | None:
        return self.record


@dataclass(slots=True, kw_only=True)
class CandidateMerged:
    """Candidate merged onto the autogenerated rewrite stored at the same path."""

    existing: RewriteRecord
    record: RewriteRecord
    kind: Literal[OutcomeKind.MERGED] = OutcomeKind.MERGED

    @property
    def emitted(self) -> RewriteRecord | None:
        return self.record

    @property
    def changed(self) -> bool:
        return any(
            getattr(self.existing, name) != getattr(self.record, name) for name in _COMPARED_FIELDS
        )


@dataclass(slots=True, kw_only=True)
class ManualClaimed:
    candidate: RewriteRecord
    existing: RewriteRecord
    kind: Literal[OutcomeKind.MANUAL_CLAIMED] = OutcomeKind.MANUAL_CLAIMED

    @property
    def emitted(self) -> RewriteRecord | None:
        return None


@dataclass(slots=True, kw_only=True)
class DuplicateCandidate:
    candidate: RewriteRecord
    kind: Literal[OutcomeKind.DUPLICATE_CANDIDATE] = OutcomeKind.DUPLICATE_CANDIDATE

    @property
    def emitted(self) -> RewriteRecord | None:
        return None


@dataclass(slots=True, kw_only=True)
class StaleManualSkipped:
    existing: RewriteRecord
    kind: Literal[OutcomeKind.STALE_MANUAL_SKIPPED] = OutcomeKind.STALE_MANUAL_SKIPPED

    @property
    def emitted(self) -> RewriteRecord | None:
        return None


@dataclass(slots=True, kw_only=True)
class StaleRedirectSkipped:
    existing: RewriteRecord
    kind: Literal[OutcomeKind.STALE_REDIRECT_SKIPPED] = OutcomeKind.STALE_REDIRECT_SKIPPED

    @property
    def emitted(self) -> RewriteRecord | None:
        return None


@dataclass(slots=True, kw_only=True)
class StaleRedirected:
    """Stale autogenerated rewrite demoted to a permanent redirect."""

    existing: RewriteRecord
    record: RewriteRecord
    category_id: int
    kind: Literal[OutcomeKind.REDIRECTED] = OutcomeKind.REDIRECTED

    @property
    def emitted(self) -> RewriteRecord | None:
        return self.record


type MatchOutcome = CandidateCreated | CandidateMerged | ManualClaimed | DuplicateCandidate
type LeftoverOutcome = StaleManualSkipped | StaleRedirectSkipped | StaleRedirected
type ReconciliationOutcome = MatchOutcome | LeftoverOutcome


@dataclass(slots=True)
class ReconciliationSummary:
    """Outcome counters for one or many reconciliation runs."""

    created: int = 0
    merged: int = 0
    unchanged: int = 0
    manual_claimed: int = 0
    duplicate_candidates: int = 0
    stale_manual_skipped: int = 0
    stale_redirect_skipped: int = 0
    redirected: int = 0

    def record(self, outcome: ReconciliationOutcome) -> None:
        match outcome:
            case CandidateCreated():
                self.created += 1
            case CandidateMerged():
                if outcome.changed:
                    self.merged += 1
                else:
                    self.unchanged += 1
            case ManualClaimed():
                self.manual_claimed += 1
            case DuplicateCandidate():
                self.duplicate_candidates += 1
            case StaleManualSkipped():
                self.stale_manual_skipped += 1
            case StaleRedirectSkipped():
                self.stale_redirect_skipped += 1
            case StaleRedirected():
                self.redirected += 1

    def add(self, other: ReconciliationSummary) -> None:
        for item in fields(self):
            setattr(self, item.name, getattr(self, item.name) + getattr(other, item.name))


@dataclass(slots=True)
class ReconciliationResult:
    """Ordered outcomes of one entity's reconciliation."""

    outcomes: list[ReconciliationOutcome] = field(
        default_factory=list["ReconciliationOutcome"]
    )

    def append(self, outcome: ReconciliationOutcome) -> None:
        self.outcomes.append(outcome)

    @property
    def emitted(self) -> tuple[RewriteRecord, ...]:
        """Records to hand to the persistence sink, in emission order."""

        return tuple(
            record for outcome in self.outcomes if (record := outcome.emitted) is not None
        )

    def of_kind(self, kind: OutcomeKind) -> tuple[ReconciliationOutcome, ...]:
        return tuple(outcome for outcome in self.outcomes if outcome.kind is kind)

    @property
    def summary(self) -> ReconciliationSummary:
        summary = ReconciliationSummary()
        for outcome in self.outcomes:
            summary.record(outcome)
        return summary
