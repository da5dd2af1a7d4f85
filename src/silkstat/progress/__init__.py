from __future__ import annotations

from .aggregate import (
    Totals,
    act_totals,
    category_complete,
    category_totals,
    completion_percentage,
    fragment_totals,
    global_totals,
    rows_for,
)
from .engine import CategoryProgress, ProgressReport, ProgressRow, build_progress, scene_matchers
from .tiers import FourFlags, compute_four_flags, track_flags

__all__ = [
    "CategoryProgress",
    "FourFlags",
    "ProgressReport",
    "ProgressRow",
    "Totals",
    "act_totals",
    "build_progress",
    "category_complete",
    "category_totals",
    "completion_percentage",
    "compute_four_flags",
    "fragment_totals",
    "global_totals",
    "rows_for",
    "scene_matchers",
    "track_flags",
]
