"""
Pairing strategies for removed/added line runs
"""

from __future__ import annotations

import logging
from difflib import SequenceMatcher

# Longest run, on either side, that is paired by similarity
MAX_SIMILARITY_RUN = 100

logger = logging.getLogger(__name__)


def positional_pairs(removed_count: int, added_count: int) -> list[tuple[int | None, int | None]]:
    """Pair the k-th removed line with the k-th added line, up to the longer run"""
    return [
        (k if k < removed_count else None, k if k < added_count else None)
        for k in range(max(removed_count, added_count))
    ]


def line_similarity(old_line: str, new_line: str, cutoff: float = 0.0) -> float:
    """Similarity ratio of two lines in [0, 1].

    Returns 0.0 without computing the full ratio when a cheaper upper bound
    is already below ``cutoff``.
    """
    if not old_line and not new_line:
        return 1.0

    matcher = SequenceMatcher(None, old_line, new_line, autojunk=False)
    if matcher.real_quick_ratio() < cutoff or matcher.quick_ratio() < cutoff:
        return 0.0
    return matcher.ratio()


def similarity_pairs(
    removed: list[str],
    added: list[str],
    cutoff: float = 0.5,
) -> list[tuple[int | None, int | None]]:
    """Order-preserving pairing that maximizes total line similarity.

    Pairs scoring below ``cutoff`` are never matched. The result lists every
    index of both runs exactly once; before each matched pair come the
    unmatched removed lines, then the unmatched added lines preceding it.
    Runs longer than ``MAX_SIMILARITY_RUN`` fall back to positional pairing.
    """
    n, m = len(removed), len(added)
    if max(n, m) > MAX_SIMILARITY_RUN:
        logger.debug("[Pairing] %dx%d run exceeds similarity limit, pairing by position", n, m)
        return positional_pairs(n, m)

    scores = [[line_similarity(removed[i], added[j], cutoff) for j in range(m)] for i in range(n)]

    # best[i][j]: best total score using removed[i:] and added[j:]
    best = [[0.0] * (m + 1) for _ in range(n + 1)]
    for i in range(n - 1, -1, -1):
        for j in range(m - 1, -1, -1):
            candidate = max(best[i + 1][j], best[i][j + 1])
            if scores[i][j] >= cutoff:
                candidate = max(candidate, scores[i][j] + best[i + 1][j + 1])
            best[i][j] = candidate

    matches: list[tuple[int, int]] = []
    i = j = 0
    while i < n and j < m:
        if scores[i][j] >= cutoff and best[i][j] == scores[i][j] + best[i + 1][j + 1]:
            matches.append((i, j))
            i += 1
            j += 1
        elif best[i][j] == best[i + 1][j]:
            i += 1
        else:
            j += 1

    pairs: list[tuple[int | None, int | None]] = []
    next_removed = next_added = 0
    for match_removed, match_added in matches + [(n, m)]:
        pairs.extend((k, None) for k in range(next_removed, match_removed))
        pairs.extend((None, k) for k in range(next_added, match_added))
        if match_removed < n:
            pairs.append((match_removed, match_added))
        next_removed, next_added = match_removed + 1, match_added + 1

    return pairs
