from __future__ import annotations

from dataclasses import dataclass

from ..catalog.types import ACTS
from .engine import CategoryProgress, ProgressReport, ProgressRow


@dataclass(frozen=True, slots=True)
class Totals:
    have: int = 0
    total: int = 0

    def __add__(self, other: Totals) -> Totals:
        return Totals(self.have + other.have, self.total + other.total)


def check_act(act: int) -> int:
    act = int(act)
    if act != 0 and act not in ACTS:
        raise ValueError(f"act must be 0 (all) or one of {ACTS}, got {act}")
    return act


def filter_rows(rows: tuple[ProgressRow, ...], act: int = 0) -> tuple[ProgressRow, ...]:
    if act == 0:
        return rows
    return tuple(row for row in rows if row.act == act)


def rows_for(category: CategoryProgress, *, act: int = 0, hide_found: bool = False) -> tuple[ProgressRow, ...]:
    rows = filter_rows(category.rows, check_act(act))
    if hide_found:
        rows = tuple(row for row in rows if not row.obtained)
    return rows


def raw_totals(rows: tuple[ProgressRow, ...]) -> Totals:
    return Totals(sum(1 for row in rows if row.obtained), len(rows))


def grouped_totals(category: CategoryProgress) -> Totals:
    """Composite count over every fragment: whole items obtained, whole items possible."""
    size = category.group_size
    max_items = len(category.rows) // size
    return Totals(min(category.obtained_count // size, max_items), max_items)


def category_totals(category: CategoryProgress, act: int = 0) -> Totals:
    act = check_act(act)
    if category.composite and act == 0:
        return grouped_totals(category)
    # Grouping fragments across an act boundary is meaningless; report raw fragments.
    return raw_totals(filter_rows(category.rows, act))


def fragment_totals(category: CategoryProgress, act: int = 0) -> Totals:
    return raw_totals(filter_rows(category.rows, check_act(act)))


def category_complete(category: CategoryProgress, act: int = 0) -> bool:
    act = check_act(act)
    if category.composite and act == 0:
        totals = grouped_totals(category)
        return totals.total == 0 or totals.have >= totals.total
    rows = filter_rows(category.rows, act)
    return all(row.obtained for row in rows)


def act_totals(report: ProgressReport, act: int) -> Totals:
    act = check_act(act)
    if act == 0:
        raise ValueError("act_totals needs a concrete act")
    out = Totals()
    for category in report.categories:
        out += raw_totals(filter_rows(category.rows, act))
    return out


def global_totals(report: ProgressReport) -> Totals:
    out = Totals()
    for category in report.categories:
        out += category_totals(category, 0)
    return out


def completion_percentage(totals: Totals) -> int:
    if totals.total <= 0:
        return 0
    # Halves round up.
    return (200 * totals.have + totals.total) // (2 * totals.total)
