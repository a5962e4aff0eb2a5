from __future__ import annotations

from services.pairing import MAX_SIMILARITY_RUN, line_similarity, positional_pairs, similarity_pairs


def test_positional_pairs_cover_longer_run():
    assert positional_pairs(2, 3) == [(0, 0), (1, 1), (None, 2)]
    assert positional_pairs(3, 1) == [(0, 0), (1, None), (2, None)]


def test_line_similarity_bounds():
    assert line_similarity("", "") == 1.0
    assert line_similarity("abc", "xyz") == 0.0
    assert 0.9 < line_similarity("hello world", "hello world!") < 1.0


def test_similarity_pairs_below_cutoff_stay_unmatched():
    assert similarity_pairs(["abc"], ["xyz"], cutoff=0.5) == [(0, None), (None, 0)]


def test_similarity_pairs_preserve_order_and_cover_every_index():
    removed = ["import os", "x = compute(1)", "print(x)"]
    added = ["import sys", "import os", "x = compute(2)", "print(x, y)"]
    pairs = similarity_pairs(removed, added, cutoff=0.6)

    assert [p for p in pairs if None not in p] == [(0, 1), (1, 2), (2, 3)]
    assert sorted(p[0] for p in pairs if p[0] is not None) == [0, 1, 2]
    assert sorted(p[1] for p in pairs if p[1] is not None) == [0, 1, 2, 3]
    assert pairs[0] == (None, 0)


def test_line_similarity_skips_full_ratio_below_cutoff():
    # Upper bounds already rule the pair out, so no score is reported.
    assert line_similarity("aaaa", "aaaabbbbbbbbbbbbbbbb", cutoff=0.5) == 0.0
    assert line_similarity("hello world", "hello world!", cutoff=0.5) > 0.9


def test_long_runs_fall_back_to_positional_pairs():
    removed = [f"old line {i}" for i in range(MAX_SIMILARITY_RUN + 1)]
    added = [f"new line {i}" for i in range(MAX_SIMILARITY_RUN + 5)]

    assert similarity_pairs(removed, added) == positional_pairs(len(removed), len(added))
