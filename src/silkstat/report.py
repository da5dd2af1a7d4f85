from __future__ import annotations

from typing import Any

import msgspec

from .catalog.types import ACTS
from .config import ReportOptions
from .hunter import filter_hunter, hunter_summary
from .pipeline import DecodeResult
from .progress.aggregate import (
    Totals,
    act_totals,
    category_complete,
    category_totals,
    completion_percentage,
    fragment_totals,
    global_totals,
    rows_for,
)
from .progress.engine import CategoryProgress


def _totals(totals: Totals) -> dict[str, int]:
    return {"have": totals.have, "total": totals.total}


def category_summary(category: CategoryProgress, options: ReportOptions) -> dict[str, Any]:
    out: dict[str, Any] = {
        "key": category.key,
        "title": category.title,
        **_totals(category_totals(category, options.act)),
        "complete": category_complete(category, options.act),
    }
    if category.composite:
        out["grouped"] = options.act == 0
        out["fragments"] = _totals(fragment_totals(category, options.act))
    out["rows"] = msgspec.to_builtins(rows_for(category, act=options.act, hide_found=options.hide_found))
    return out


def summarize(result: DecodeResult, options: ReportOptions | None = None) -> dict[str, Any]:
    options = options or ReportOptions()
    overall = global_totals(result.progress)
    hunter = hunter_summary(result.hunter)
    return {
        "ok": result.ok,
        "error": result.error,
        "act": options.act,
        "overall": {**_totals(overall), "percent": completion_percentage(overall)},
        "acts": {str(act): _totals(act_totals(result.progress, act)) for act in ACTS},
        "tracks": msgspec.to_builtins(result.progress.tracks),
        "categories": [category_summary(category, options) for category in result.progress.categories],
        "hunter": {
            "killed": hunter.killed,
            "found": hunter.found,
            "total": hunter.total,
            "complete": hunter.complete,
            "entries": msgspec.to_builtins(filter_hunter(result.hunter, options.hunter_filter)),
        },
    }


def _mark(ok: bool) -> str:
    return "x" if ok else " "


def format_report(summary: dict[str, Any]) -> list[str]:
    overall = summary["overall"]
    lines = [f"Overall: {overall['have']} / {overall['total']} ({overall['percent']}%)"]
    lines.append(
        "Acts: "
        + "  ".join(f"Act {act}: {totals['have']} / {totals['total']}" for act, totals in summary["acts"].items())
    )
    if summary["act"]:
        lines.append(f"Filter: act {summary['act']}")
    for category in summary["categories"]:
        line = f"[{_mark(category['complete'])}] {category['title']}: {category['have']} / {category['total']}"
        if category.get("grouped"):
            fragments = category["fragments"]
            line += f" ({fragments['have']}/{fragments['total']} fragments)"
        lines.append(line)
        for row in category["rows"]:
            act = f" (act {row['act']})" if row["act"] else ""
            lines.append(f"    [{_mark(row['obtained'])}] {row['name']}{act}")
    hunter = summary["hunter"]
    lines.append(f"[{_mark(hunter['complete'])}] Hunter's Journal: {hunter['killed']} / {hunter['total']}")
    return lines


def format_hunter(summary: dict[str, Any]) -> list[str]:
    hunter = summary["hunter"]
    lines = [f"Found: {hunter['found']}/{hunter['total']}  Killed: {hunter['killed']}/{hunter['total']}"]
    for entry in hunter["entries"]:
        done = entry["kills"] >= entry["target"]
        optional = " (optional)" if entry["optional"] else ""
        link = f" <{entry['link']}>" if entry["link"] else ""
        name = entry["display"] or entry["name"]
        lines.append(f"    [{_mark(done)}] {name}: {entry['kills']}/{entry['target']}{optional}{link}")
    return lines
