"""Services module - Diff engine and supporting services"""

from .alignment import align_for_side_by_side, group_runs
from .config_manager import ConfigManager
from .diff_engine import DiffEngine, compute_diff
from .report import compute_stats, render_html_report, search_hits, search_records

__all__ = [
    "align_for_side_by_side",
    "group_runs",
    "ConfigManager",
    "DiffEngine",
    "compute_diff",
    "compute_stats",
    "render_html_report",
    "search_hits",
    "search_records",
]
