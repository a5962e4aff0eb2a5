"""
Side-by-side alignment and collapsible grouping of classified records
"""

from __future__ import annotations

from typing import Callable, Sequence, TypeVar, Union

from models.diff import AlignedRow, GroupKind, LineKind, LineRecord, RunGroup

Entry = TypeVar("Entry", LineRecord, AlignedRow)

DEFAULT_COLLAPSE_THRESHOLD = 3


def align_for_side_by_side(records: Sequence[LineRecord]) -> list[AlignedRow]:
    """Pair classified records into (old, new) rows for a two-column view"""
    rows: list[AlignedRow] = []
    i = 0

    while i < len(records):
        current = records[i]

        if current.kind in (LineKind.UNCHANGED, LineKind.MODIFIED):
            rows.append(AlignedRow(old_side=current, new_side=current))
            i += 1
        elif current.kind == LineKind.REMOVED:
            j = i
            while j < len(records) and records[j].kind == LineKind.REMOVED:
                j += 1
            removed = records[i:j]

            k = j
            while k < len(records) and records[k].kind == LineKind.ADDED:
                k += 1
            added = records[j:k]

            for idx in range(max(len(removed), len(added))):
                rows.append(
                    AlignedRow(
                        old_side=removed[idx] if idx < len(removed) else None,
                        new_side=added[idx] if idx < len(added) else None,
                    )
                )
            i = k
        else:
            rows.append(AlignedRow(new_side=current))
            i += 1

    return rows


def is_unchanged_entry(entry: Union[LineRecord, AlignedRow]) -> bool:
    if isinstance(entry, AlignedRow):
        return entry.is_unchanged
    return entry.kind == LineKind.UNCHANGED


def entry_line_number(entry: Union[LineRecord, AlignedRow]) -> int:
    if isinstance(entry, AlignedRow):
        side = entry.old_side if entry.old_side is not None else entry.new_side
        return side.line_number
    return entry.line_number


def group_runs(
    entries: Sequence[Entry],
    collapse_enabled: bool,
    threshold: int = DEFAULT_COLLAPSE_THRESHOLD,
    is_collapsible: Callable[[Entry], bool] = is_unchanged_entry,
    line_number_of: Callable[[Entry], int] = entry_line_number,
) -> list[RunGroup]:
    """Group consecutive unchanged entries into collapsible blocks.

    Works over inline records and side-by-side rows alike. A buffered run
    collapses only when it holds more than ``threshold`` entries; shorter
    runs are emitted entry by entry. With collapsing disabled every entry is
    its own ``change`` group.
    """
    groups: list[RunGroup] = []
    buffer: list[Entry] = []
    buffer_start = 0

    def single(entry: Entry, index: int) -> RunGroup:
        line = line_number_of(entry)
        return RunGroup(kind=GroupKind.CHANGE, entries=[entry], start_index=index, first_line=line, last_line=line)

    def flush():
        if len(buffer) > threshold:
            groups.append(
                RunGroup(
                    kind=GroupKind.COLLAPSED,
                    entries=list(buffer),
                    start_index=buffer_start,
                    first_line=line_number_of(buffer[0]),
                    last_line=line_number_of(buffer[-1]),
                )
            )
        else:
            groups.extend(single(entry, buffer_start + offset) for offset, entry in enumerate(buffer))
        buffer.clear()

    for index, entry in enumerate(entries):
        if collapse_enabled and is_collapsible(entry):
            if not buffer:
                buffer_start = index
            buffer.append(entry)
            continue

        flush()
        groups.append(single(entry, index))

    flush()
    return groups
