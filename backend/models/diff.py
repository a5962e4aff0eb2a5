"""Diff-related data models"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class HunkTag(str, Enum):
    """Tag of a hunk reported by the line/word diff primitives"""

    COMMON = "common"
    ADDED = "added"
    REMOVED = "removed"


class LineKind(str, Enum):
    """Classification of a single line"""

    UNCHANGED = "unchanged"
    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"


class WordTag(str, Enum):
    """Classification of a word segment inside a modified line"""

    UNCHANGED = "unchanged"
    ADDED = "added"
    REMOVED = "removed"


class GroupKind(str, Enum):
    CHANGE = "change"
    COLLAPSED = "collapsed"


class DiffHunk(BaseModel):
    """A maximal block that is common, only in the old text, or only in the new text"""

    model_config = ConfigDict(frozen=True)

    tag: HunkTag
    value: str  # literal text, line endings included


class WordSegment(BaseModel):
    """A contiguous run of words/whitespace within a modified line"""

    model_config = ConfigDict(frozen=True)

    text: str
    tag: WordTag


class LineRecord(BaseModel):
    """One classified line of either document"""

    model_config = ConfigDict(frozen=True)

    line_number: int = Field(ge=1)  # old numbering, new numbering for added lines
    kind: LineKind
    old_text: str | None = None
    new_text: str | None = None
    word_segments: list[WordSegment] | None = None

    @property
    def has_old_side(self) -> bool:
        return self.old_text is not None

    @property
    def has_new_side(self) -> bool:
        return self.new_text is not None


class AlignedRow(BaseModel):
    """One row of the side-by-side view"""

    model_config = ConfigDict(frozen=True)

    old_side: LineRecord | None = None
    new_side: LineRecord | None = None

    @model_validator(mode="after")
    def _check_sides(self) -> AlignedRow:
        if self.old_side is None and self.new_side is None:
            raise ValueError("an aligned row needs at least one side")
        return self

    @property
    def is_unchanged(self) -> bool:
        return all(
            side.kind == LineKind.UNCHANGED
            for side in (self.old_side, self.new_side)
            if side is not None
        )


class RunGroup(BaseModel):
    """A single change entry, or a collapsible block of unchanged entries"""

    model_config = ConfigDict(frozen=True)

    kind: GroupKind
    entries: list[LineRecord | AlignedRow]
    start_index: int  # index of the first entry in the grouped sequence
    first_line: int | None = None
    last_line: int | None = None
    expanded: bool = False  # toggled by the presentation layer


class DiffStats(BaseModel):
    """Per-kind record counts"""

    added: int = 0
    removed: int = 0
    modified: int = 0
    unchanged: int = 0

    @property
    def total_changes(self) -> int:
        return self.added + self.removed + self.modified
