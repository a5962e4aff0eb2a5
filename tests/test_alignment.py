from __future__ import annotations

import pytest
from pydantic import ValidationError

from models.diff import AlignedRow, GroupKind, LineKind, LineRecord
from services.alignment import align_for_side_by_side, entry_line_number, group_runs
from services.diff_engine import compute_diff


def _texts(rows):
    return [
        (
            row.old_side.old_text if row.old_side else None,
            row.new_side.new_text if row.new_side else None,
        )
        for row in rows
    ]


def test_scenario_c_rows():
    rows = align_for_side_by_side(compute_diff("x", "x\ny"))
    assert _texts(rows) == [("x", "x"), (None, "y")]
    assert rows[0].old_side == rows[0].new_side


def test_unpaired_removed_and_added_runs_leave_slots_empty():
    records = [
        LineRecord(line_number=1, kind=LineKind.REMOVED, old_text="a"),
        LineRecord(line_number=2, kind=LineKind.REMOVED, old_text="b"),
        LineRecord(line_number=1, kind=LineKind.ADDED, new_text="c"),
        LineRecord(line_number=3, kind=LineKind.UNCHANGED, old_text="d", new_text="d"),
        LineRecord(line_number=3, kind=LineKind.ADDED, new_text="e"),
    ]
    rows = align_for_side_by_side(records)
    assert _texts(rows) == [("a", "c"), ("b", None), ("d", "d"), (None, "e")]


def test_every_record_appears_in_exactly_one_row():
    old = "one\ntwo\nthree\nfour\nfive\nsix"
    new = "one\n2\nthree\nfour and more\nfive\nsix\nseven\neight"
    records = compute_diff(old, new)
    rows = align_for_side_by_side(records)

    seen = []
    for row in rows:
        if row.old_side is not None:
            seen.append(row.old_side)
        if row.new_side is not None and row.new_side != row.old_side:
            seen.append(row.new_side)
    assert seen == records


def test_row_requires_a_side():
    with pytest.raises(ValidationError):
        AlignedRow()


def test_scenario_b_identical_documents_collapse_into_one_group():
    records = compute_diff("1\n2\n3\n4\n5", "1\n2\n3\n4\n5")
    groups = group_runs(records, collapse_enabled=True)

    assert len(groups) == 1
    assert groups[0].kind == GroupKind.COLLAPSED
    assert groups[0].first_line == 1
    assert groups[0].last_line == 5
    assert len(groups[0].entries) == 5
    assert groups[0].expanded is False


def test_three_unchanged_entries_are_never_collapsed():
    records = compute_diff("1\n2\n3\nold", "1\n2\n3\nnew")
    groups = group_runs(records, collapse_enabled=True)

    assert [g.kind for g in groups] == [GroupKind.CHANGE] * 4
    assert [g.start_index for g in groups] == [0, 1, 2, 3]


def test_four_unchanged_entries_collapse():
    records = compute_diff("1\n2\n3\n4\nold\nz", "1\n2\n3\n4\nnew\nz")
    groups = group_runs(records, collapse_enabled=True)

    assert [g.kind for g in groups] == [GroupKind.COLLAPSED, GroupKind.CHANGE, GroupKind.CHANGE]
    assert (groups[0].start_index, groups[0].first_line, groups[0].last_line) == (0, 1, 4)
    assert groups[1].start_index == 4
    assert groups[2].entries[0].old_text == "z"


def test_disabled_collapsing_keeps_one_group_per_entry():
    records = compute_diff("1\n2\n3\n4\n5", "1\n2\n3\n4\n5")
    groups = group_runs(records, collapse_enabled=False)

    assert len(groups) == 5
    assert all(g.kind == GroupKind.CHANGE for g in groups)
    assert [g.start_index for g in groups] == list(range(5))
    assert [g.entries[0] for g in groups] == records


def test_grouping_side_by_side_rows():
    records = compute_diff("a\nb\nc\nd\ne\nf", "a\nb\nc\nd\ne\nf\ng")
    rows = align_for_side_by_side(records)
    groups = group_runs(rows, collapse_enabled=True)

    assert [g.kind for g in groups] == [GroupKind.COLLAPSED, GroupKind.CHANGE]
    assert (groups[0].first_line, groups[0].last_line) == (1, 6)
    assert groups[1].entries[0].old_side is None
    assert groups[1].first_line == 7


def test_custom_threshold_and_capability():
    records = compute_diff("1\n2\nx", "1\n2\ny")
    groups = group_runs(records, collapse_enabled=True, threshold=1)
    assert [g.kind for g in groups] == [GroupKind.COLLAPSED, GroupKind.CHANGE]

    # Collapse every line starting with a digit, whatever its kind.
    groups = group_runs(
        records,
        collapse_enabled=True,
        threshold=1,
        is_collapsible=lambda r: (r.old_text or "")[:1].isdigit(),
        line_number_of=entry_line_number,
    )
    assert [len(g.entries) for g in groups] == [2, 1]
