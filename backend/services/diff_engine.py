"""
Diff Engine Service - Classify line-level edits into unchanged/added/removed/modified records
"""

from __future__ import annotations

import logging

from models.compare import ComparisonResult, DiffSettings, PairingStrategy
from models.diff import DiffHunk, HunkTag, LineKind, LineRecord, WordSegment, WordTag

from .alignment import align_for_side_by_side, group_runs
from .line_diff import diff_lines, diff_words
from .pairing import positional_pairs, similarity_pairs
from .report import compute_stats

logger = logging.getLogger(__name__)

_WORD_TAGS = {
    HunkTag.COMMON: WordTag.UNCHANGED,
    HunkTag.ADDED: WordTag.ADDED,
    HunkTag.REMOVED: WordTag.REMOVED,
}


def hunk_lines(value: str) -> list[str]:
    """Split a hunk's text block into lines.

    The empty fragment after a final newline is dropped; every other empty
    fragment is a real blank line.
    """
    lines = value.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def records_from_hunks(hunks: list[DiffHunk]) -> list[LineRecord]:
    """Flatten hunks into per-line records with independent old/new numbering"""
    records: list[LineRecord] = []
    old_line, new_line = 1, 1

    for hunk in hunks:
        for line in hunk_lines(hunk.value):
            if hunk.tag == HunkTag.ADDED:
                records.append(LineRecord(line_number=new_line, kind=LineKind.ADDED, new_text=line))
                new_line += 1
            elif hunk.tag == HunkTag.REMOVED:
                records.append(LineRecord(line_number=old_line, kind=LineKind.REMOVED, old_text=line))
                old_line += 1
            else:
                records.append(
                    LineRecord(
                        line_number=old_line,
                        kind=LineKind.UNCHANGED,
                        old_text=line,
                        new_text=line,
                    )
                )
                old_line += 1
                new_line += 1

    return records


def word_segments(old_line: str, new_line: str) -> list[WordSegment]:
    """Word-level diff of two lines as tagged segments"""
    return [WordSegment(text=hunk.value, tag=_WORD_TAGS[hunk.tag]) for hunk in diff_words(old_line, new_line)]


def _collect_run(records: list[LineRecord], start: int, kind: LineKind) -> list[LineRecord]:
    end = start
    while end < len(records) and records[end].kind == kind:
        end += 1
    return records[start:end]


def merge_modified_runs(
    records: list[LineRecord],
    pairing: PairingStrategy = PairingStrategy.POSITIONAL,
    similarity_cutoff: float = 0.5,
) -> list[LineRecord]:
    """Merge removed runs with the added runs that follow them into modified records"""
    merged: list[LineRecord] = []
    i = 0

    while i < len(records):
        current = records[i]
        if current.kind != LineKind.REMOVED:
            merged.append(current)
            i += 1
            continue

        removed = _collect_run(records, i, LineKind.REMOVED)
        added = _collect_run(records, i + len(removed), LineKind.ADDED)
        i += len(removed) + len(added)

        if not added:
            merged.extend(removed)
            continue

        if pairing == PairingStrategy.SIMILARITY:
            pairs = similarity_pairs(
                [r.old_text or "" for r in removed],
                [a.new_text or "" for a in added],
                cutoff=similarity_cutoff,
            )
        else:
            pairs = positional_pairs(len(removed), len(added))

        for removed_idx, added_idx in pairs:
            if removed_idx is not None and added_idx is not None:
                old_record, new_record = removed[removed_idx], added[added_idx]
                merged.append(
                    LineRecord(
                        line_number=old_record.line_number,
                        kind=LineKind.MODIFIED,
                        old_text=old_record.old_text,
                        new_text=new_record.new_text,
                        word_segments=word_segments(old_record.old_text or "", new_record.new_text or ""),
                    )
                )
            elif removed_idx is not None:
                merged.append(removed[removed_idx])
            else:
                merged.append(added[added_idx])

    return merged


def compute_diff(
    old_text: str,
    new_text: str,
    pairing: PairingStrategy = PairingStrategy.POSITIONAL,
    similarity_cutoff: float = 0.5,
) -> list[LineRecord]:
    """Classified line records for two texts"""
    hunks = diff_lines(old_text, new_text)
    records = merge_modified_runs(records_from_hunks(hunks), pairing, similarity_cutoff)
    logger.debug("[DiffEngine] %d hunks -> %d records", len(hunks), len(records))
    return records


class DiffEngine:
    """Compute every view of a comparison from a fixed set of settings"""

    def __init__(self, settings: DiffSettings | None = None):
        self.settings = settings or DiffSettings()

    def compute_diff(self, old_text: str, new_text: str) -> list[LineRecord]:
        return compute_diff(
            old_text,
            new_text,
            pairing=self.settings.pairing,
            similarity_cutoff=self.settings.similarity_cutoff,
        )

    def compare(
        self,
        old_text: str,
        new_text: str,
        collapse_unchanged: bool | None = None,
    ) -> ComparisonResult:
        """Records, side-by-side rows, grouped views and stats in one pass"""
        if collapse_unchanged is None:
            collapse_unchanged = self.settings.collapse_unchanged
        threshold = self.settings.collapse_threshold

        records = self.compute_diff(old_text, new_text)
        rows = align_for_side_by_side(records)

        return ComparisonResult(
            records=records,
            rows=rows,
            inline_groups=group_runs(records, collapse_unchanged, threshold=threshold),
            side_by_side_groups=group_runs(rows, collapse_unchanged, threshold=threshold),
            stats=compute_stats(records),
        )
