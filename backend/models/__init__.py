"""Models module - Pydantic data models"""

from .diff import (
    AlignedRow,
    DiffHunk,
    DiffStats,
    GroupKind,
    HunkTag,
    LineKind,
    LineRecord,
    RunGroup,
    WordSegment,
    WordTag,
)
from .compare import (
    CompareRequest,
    CompareResponse,
    ComparisonResult,
    DiffSettings,
    DiffSettingsUpdate,
    HighlightFragment,
    PairingStrategy,
    SearchHit,
    SearchRequest,
    SearchResponse,
)

__all__ = [
    # Diff models
    "AlignedRow",
    "DiffHunk",
    "DiffStats",
    "GroupKind",
    "HunkTag",
    "LineKind",
    "LineRecord",
    "RunGroup",
    "WordSegment",
    "WordTag",
    # Comparison models
    "CompareRequest",
    "CompareResponse",
    "ComparisonResult",
    "DiffSettings",
    "DiffSettingsUpdate",
    "HighlightFragment",
    "PairingStrategy",
    "SearchHit",
    "SearchRequest",
    "SearchResponse",
]
