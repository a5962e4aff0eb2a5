"""
Line and word diff primitives built on difflib
"""

from __future__ import annotations

import re
from difflib import SequenceMatcher

from models.diff import DiffHunk, HunkTag

_WORD_TOKEN_RE = re.compile(r"\s+|\w+|[^\w\s]", re.UNICODE)


def split_lines(text: str) -> list[str]:
    """Split text on "\\n", keeping line endings.

    A trailing newline terminates the last line; it does not start a new one.
    """
    if not isinstance(text, str):
        raise TypeError(f"expected str, got {type(text).__name__}")

    parts = text.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def tokenize_words(text: str) -> list[str]:
    """Split a line into word, whitespace and punctuation tokens"""
    if not isinstance(text, str):
        raise TypeError(f"expected str, got {type(text).__name__}")
    return _WORD_TOKEN_RE.findall(text)


def _opcodes_to_hunks(
    matcher: SequenceMatcher,
    old_items: list[str],
    new_items: list[str],
) -> list[DiffHunk]:
    hunks: list[DiffHunk] = []

    def emit(tag: HunkTag, items: list[str]):
        if not items:
            return
        value = "".join(items)
        # Coalesce with the previous hunk of the same tag
        if hunks and hunks[-1].tag == tag:
            hunks[-1] = DiffHunk(tag=tag, value=hunks[-1].value + value)
        else:
            hunks.append(DiffHunk(tag=tag, value=value))

    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            emit(HunkTag.COMMON, old_items[i1:i2])
        elif tag == "delete":
            emit(HunkTag.REMOVED, old_items[i1:i2])
        elif tag == "insert":
            emit(HunkTag.ADDED, new_items[j1:j2])
        else:
            # replace: removed block first, then the added block
            emit(HunkTag.REMOVED, old_items[i1:i2])
            emit(HunkTag.ADDED, new_items[j1:j2])

    return hunks


def diff_lines(old_text: str, new_text: str) -> list[DiffHunk]:
    """Line-granularity edit script between two texts.

    Lines are compared without their line endings so that a missing final
    newline on one side does not register as a change. Common hunks carry
    the old document's literal text.
    """
    old_lines = split_lines(old_text)
    new_lines = split_lines(new_text)

    matcher = SequenceMatcher(
        None,
        [line.rstrip("\n") for line in old_lines],
        [line.rstrip("\n") for line in new_lines],
        autojunk=False,
    )
    return _opcodes_to_hunks(matcher, old_lines, new_lines)


def diff_words(old_line: str, new_line: str) -> list[DiffHunk]:
    """Word-granularity edit script between two strings"""
    old_tokens = tokenize_words(old_line)
    new_tokens = tokenize_words(new_line)

    matcher = SequenceMatcher(None, old_tokens, new_tokens, autojunk=False)
    return _opcodes_to_hunks(matcher, old_tokens, new_tokens)
