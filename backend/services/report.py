"""
Report Service - Statistics, search and static HTML export of a comparison
"""

from __future__ import annotations

import re
from datetime import datetime
from html import escape

from models.compare import HighlightFragment, SearchHit
from models.diff import DiffStats, LineKind, LineRecord, WordTag

_LINE_CLASSES = {
    LineKind.ADDED: "added-line",
    LineKind.REMOVED: "removed-line",
    LineKind.MODIFIED: "modified-line",
    LineKind.UNCHANGED: "",
}

_REPORT_STYLE = """
    body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif; padding: 20px; background: #f9fafb; }
    .container { max-width: 1200px; margin: 0 auto; background: white; padding: 20px; border-radius: 8px; }
    h1 { color: #111827; margin-bottom: 20px; }
    .stats { display: flex; gap: 20px; margin-bottom: 20px; padding: 15px; background: #f3f4f6; border-radius: 6px; }
    .badge { padding: 4px 8px; border-radius: 4px; font-weight: 600; }
    .added { background: #d1fae5; color: #065f46; }
    .removed { background: #fee2e2; color: #991b1b; }
    .modified { background: #fef3c7; color: #92400e; }
    .unchanged { background: #f3f4f6; color: #374151; }
    .diff-line { padding: 8px; border-bottom: 1px solid #e5e7eb; font-family: 'Courier New', monospace; font-size: 13px; white-space: pre-wrap; }
    .diff-line.added-line { background: #d1fae5; }
    .diff-line.removed-line { background: #fee2e2; }
    .diff-line.modified-line { background: #fef9e7; }
    .line-number { color: #9ca3af; margin-right: 16px; user-select: none; }
    .highlight-added { background: #86efac; color: #065f46; }
    .highlight-removed { background: #fca5a5; color: #991b1b; text-decoration: line-through; }
"""


def compute_stats(records: list[LineRecord]) -> DiffStats:
    """Count records per kind"""
    counts = {kind: 0 for kind in LineKind}
    for record in records:
        counts[record.kind] += 1

    return DiffStats(
        added=counts[LineKind.ADDED],
        removed=counts[LineKind.REMOVED],
        modified=counts[LineKind.MODIFIED],
        unchanged=counts[LineKind.UNCHANGED],
    )


def search_records(records: list[LineRecord], term: str) -> list[int]:
    """Indices of records whose old or new text contains term (case-insensitive)"""
    if not term.strip():
        return []

    needle = term.lower()
    return [
        index
        for index, record in enumerate(records)
        if needle in ((record.old_text or "") + (record.new_text or "")).lower()
    ]


def highlight_matches(text: str, term: str | None) -> list[tuple[str, bool]]:
    """Split text into (fragment, is_match) pairs for a literal, case-insensitive term"""
    if not term or not text:
        return [(text, False)] if text else []

    parts = re.split(f"({re.escape(term)})", text, flags=re.IGNORECASE)
    return [(part, index % 2 == 1) for index, part in enumerate(parts) if part]


def _fragments(text: str | None, term: str) -> list[HighlightFragment]:
    if text is None:
        return []
    return [HighlightFragment(text=part, match=is_match) for part, is_match in highlight_matches(text, term)]


def search_hits(records: list[LineRecord], term: str) -> list[SearchHit]:
    """Matching records with both sides split into highlight fragments"""
    return [
        SearchHit(
            index=index,
            line_number=records[index].line_number,
            kind=records[index].kind,
            old_fragments=_fragments(records[index].old_text, term),
            new_fragments=_fragments(records[index].new_text, term),
        )
        for index in search_records(records, term)
    ]


def _render_line(record: LineRecord) -> str:
    if record.kind == LineKind.MODIFIED and record.word_segments:
        spans = []
        for segment in record.word_segments:
            if segment.tag == WordTag.ADDED:
                spans.append(f'<span class="highlight-added">{escape(segment.text)}</span>')
            elif segment.tag == WordTag.REMOVED:
                spans.append(f'<span class="highlight-removed">{escape(segment.text)}</span>')
            else:
                spans.append(escape(segment.text))
        content = "".join(spans)
    else:
        content = escape(record.old_text if record.old_text is not None else record.new_text or "")

    class_name = _LINE_CLASSES[record.kind]
    return (
        f'<div class="diff-line {class_name}">'
        f'<span class="line-number">{record.line_number}</span>{content}</div>'
    )


def render_html_report(
    records: list[LineRecord],
    old_name: str,
    new_name: str,
    generated_at: datetime | None = None,
) -> str:
    """Serialize the classified records into a standalone HTML document"""
    stats = compute_stats(records)
    generated_at = generated_at or datetime.now()
    title = f"Diff Report: {escape(old_name)} vs {escape(new_name)}"
    lines = "\n      ".join(_render_line(record) for record in records)

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{title}</title>
  <style>{_REPORT_STYLE}  </style>
</head>
<body>
  <div class="container">
    <h1>Diff Report</h1>
    <p><strong>Comparing:</strong> {escape(old_name)} vs {escape(new_name)}</p>
    <div class="stats">
      <span class="badge added">{stats.added} Added</span>
      <span class="badge removed">{stats.removed} Removed</span>
      <span class="badge modified">{stats.modified} Modified</span>
      <span class="badge unchanged">{stats.unchanged} Unchanged</span>
    </div>
    <div class="diff-content">
      {lines}
    </div>
    <footer>Generated on {generated_at.strftime("%Y-%m-%d %H:%M:%S")}</footer>
  </div>
</body>
</html>
"""
