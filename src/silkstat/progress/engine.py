from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from ..catalog.registry import Catalog
from ..catalog.types import Category
from ..facts import SaveFacts, SceneMatcher, id_matcher
from .rules import RuleContext, entry_obtained
from .tiers import FourFlags, track_flags


@dataclass(frozen=True, slots=True)
class ProgressRow:
    name: str
    obtained: bool
    act: int = 0
    link: str = ""


@dataclass(frozen=True, slots=True)
class CategoryProgress:
    key: str
    title: str
    rows: tuple[ProgressRow, ...] = ()
    group_size: int = 1

    @property
    def composite(self) -> bool:
        return self.group_size > 1

    @property
    def obtained_count(self) -> int:
        return sum(1 for row in self.rows if row.obtained)


@dataclass(frozen=True, slots=True)
class ProgressReport:
    categories: tuple[CategoryProgress, ...] = ()
    tracks: Mapping[str, FourFlags] = field(default_factory=dict)

    def category(self, key: str) -> CategoryProgress | None:
        for category in self.categories:
            if category.key == key:
                return category
        return None

    def track(self, key: str) -> FourFlags:
        return self.tracks.get(key, FourFlags())


def scene_matchers(catalog: Catalog) -> dict[str, SceneMatcher]:
    return {
        category.scene_id: id_matcher(category.scene_id, exact=category.scene_match == "exact")
        for category in catalog.categories
        if category.scene_id
    }


def category_rows(category: Category, ctx: RuleContext) -> tuple[ProgressRow, ...]:
    return tuple(
        ProgressRow(
            name=entry.display,
            obtained=entry_obtained(entry, category, ctx),
            act=entry.act,
            link=entry.link,
        )
        for entry in category.entries
    )


def build_progress(facts: SaveFacts, catalog: Catalog) -> ProgressReport:
    tracks = {track.key: track_flags(track, facts) for track in catalog.tracks}
    ctx = RuleContext(facts=facts, tracks=tracks)
    categories = tuple(
        CategoryProgress(
            key=category.key,
            title=category.title,
            rows=category_rows(category, ctx),
            group_size=category.group_size,
        )
        for category in catalog.categories
    )
    return ProgressReport(categories=categories, tracks=tracks)
