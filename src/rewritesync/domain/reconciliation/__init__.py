"""Reconciliation core for the URL rewrites of one catalog entity.

Flow:
1) load the stored rewrites of the entity into an ``ExistingRewriteIndex``
2) match the batch's candidates against the index (create / merge / manual)
3) demote unmatched autogenerated rewrites to permanent redirects
4) hand the emitted records to a ``RewriteSink``
"""

from __future__ import annotations

from .contracts import (
    CategoryLookup,
    ExistingRewriteSource,
    PathGenerator,
    ReplacementLookup,
    RewriteSink,
)
from .engine import ReconciliationEngine, persist_emitted
from .index import ExistingRewriteIndex
from .metadata import (
    CATEGORY_ID_KEY,
    MetadataCodec,
    category_id_of,
    decode_metadata,
    encode_metadata,
    ensure_category_id,
)
from .outcomes import (
    CandidateCreated,
    CandidateMerged,
    DuplicateCandidate,
    ManualClaimed,
    OutcomeKind,
    ReconciliationOutcome,
    ReconciliationResult,
    ReconciliationSummary,
    StaleManualSkipped,
    StaleRedirected,
    StaleRedirectSkipped,
)

__all__ = [
    "CATEGORY_ID_KEY",
    "CandidateCreated",
    "CandidateMerged",
    "CategoryLookup",
    "DuplicateCandidate",
    "ExistingRewriteIndex",
    "ExistingRewriteSource",
    "ManualClaimed",
    "MetadataCodec",
    "OutcomeKind",
    "PathGenerator",
    "ReconciliationEngine",
    "ReconciliationOutcome",
    "ReconciliationResult",
    "ReconciliationSummary",
    "ReplacementLookup",
    "RewriteSink",
    "StaleManualSkipped",
    "StaleRedirectSkipped",
    "StaleRedirected",
    "category_id_of",
    "decode_metadata",
    "encode_metadata",
    "ensure_category_id",
    "persist_emitted",
]
