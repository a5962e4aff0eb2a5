"""Comparison API data models"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from .diff import AlignedRow, DiffStats, LineKind, LineRecord, RunGroup


class PairingStrategy(str, Enum):
    """How removed/added runs are paired into modified lines"""

    POSITIONAL = "positional"
    SIMILARITY = "similarity"


class DiffSettings(BaseModel):
    """Persisted diff settings"""

    collapse_unchanged: bool = False
    collapse_threshold: int = Field(default=3, ge=0)
    pairing: PairingStrategy = PairingStrategy.POSITIONAL
    similarity_cutoff: float = Field(default=0.5, ge=0.0, le=1.0)


class DiffSettingsUpdate(BaseModel):
    """Partial settings update"""

    collapse_unchanged: bool | None = None
    collapse_threshold: int | None = Field(default=None, ge=0)
    pairing: PairingStrategy | None = None
    similarity_cutoff: float | None = Field(default=None, ge=0.0, le=1.0)


class CompareRequest(BaseModel):
    """Request to compare two texts"""

    old_text: str
    new_text: str
    old_name: str = "version1.txt"
    new_name: str = "version2.txt"
    collapse_unchanged: bool | None = None  # falls back to settings
    pairing: PairingStrategy | None = None


class ComparisonResult(BaseModel):
    """Every view of a single comparison"""

    records: list[LineRecord]
    rows: list[AlignedRow]
    inline_groups: list[RunGroup]
    side_by_side_groups: list[RunGroup]
    stats: DiffStats


class CompareResponse(ComparisonResult):
    """Response for a comparison request"""

    old_name: str
    new_name: str


class SearchRequest(BaseModel):
    """Request to search a comparison for a term"""

    old_text: str
    new_text: str
    term: str


class HighlightFragment(BaseModel):
    """A piece of line text, flagged when it matches the search term"""

    text: str
    match: bool = False


class SearchHit(BaseModel):
    """A matching record with its text split around the term"""

    index: int
    line_number: int
    kind: LineKind
    old_fragments: list[HighlightFragment] = []
    new_fragments: list[HighlightFragment] = []


class SearchResponse(BaseModel):
    """Indices of matching records"""

    term: str
    matches: list[int] = []
    total: int = 0
    hits: list[SearchHit] = []
