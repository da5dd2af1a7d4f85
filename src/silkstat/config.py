from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .hunter import HUNTER_FILTERS, HunterFilter
from .progress.aggregate import check_act


@dataclass(frozen=True, slots=True)
class ReportOptions:
    act: int = 0
    hide_found: bool = False
    hunter_filter: HunterFilter = "all"
    catalog_dir: Path | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "act", check_act(self.act))
        if self.hunter_filter not in HUNTER_FILTERS:
            raise ValueError(f"unknown hunter filter {self.hunter_filter!r}")
        if self.catalog_dir is not None:
            object.__setattr__(self, "catalog_dir", Path(self.catalog_dir))
