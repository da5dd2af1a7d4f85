from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from importlib import resources
from pathlib import Path

import msgspec

from .types import ACTS, CatalogFile, Category, HunterFile, HunterTarget, SceneDataDetection, TierDetection, UpgradeTrack

logger = logging.getLogger(__name__)

CATEGORIES_FILE = "categories.json"
HUNTER_FILE = "hunter.json"
CATALOG_ENV = "SILKSTAT_CATALOG"


class CatalogError(ValueError):
    pass


@dataclass(frozen=True, slots=True)
class Catalog:
    categories: tuple[Category, ...]
    tracks: tuple[UpgradeTrack, ...]
    hunter: tuple[HunterTarget, ...]

    def category(self, key: str) -> Category | None:
        for category in self.categories:
            if category.key == key:
                return category
        return None

    def track(self, key: str) -> UpgradeTrack | None:
        for track in self.tracks:
            if track.key == key:
                return track
        return None

    @property
    def category_keys(self) -> tuple[str, ...]:
        return tuple(category.key for category in self.categories)


def _check_unique(kind: str, keys: list[str]) -> None:
    seen: set[str] = set()
    for key in keys:
        if key in seen:
            raise CatalogError(f"duplicate {kind} {key!r}")
        seen.add(key)


def validate_catalog(catalog: Catalog) -> None:
    _check_unique("category", [c.key for c in catalog.categories])
    _check_unique("track", [t.key for t in catalog.tracks])
    _check_unique("hunter enemy", [h.name for h in catalog.hunter])
    track_keys = {t.key for t in catalog.tracks}
    scene_modes: dict[str, str] = {}
    for category in catalog.categories:
        if category.scene_id:
            mode = scene_modes.setdefault(category.scene_id, category.scene_match)
            if mode != category.scene_match:
                raise CatalogError(
                    f"category {category.key!r}: scene_id {category.scene_id!r} is already matched as {mode!r}"
                )
        if category.group_size < 1:
            raise CatalogError(f"category {category.key!r}: group_size must be >= 1, got {category.group_size}")
        for entry in category.entries:
            if entry.act != 0 and entry.act not in ACTS:
                raise CatalogError(f"{category.key}/{entry.display}: act must be 0..3, got {entry.act}")
            det = entry.detection
            if isinstance(det, TierDetection) and det.track not in track_keys:
                raise CatalogError(f"{category.key}/{entry.display}: unknown upgrade track {det.track!r}")
            if isinstance(det, SceneDataDetection) and not category.scene_id:
                raise CatalogError(f"{category.key}/{entry.display}: scene entries need a category scene_id")
    for enemy in catalog.hunter:
        if enemy.target < 0:
            raise CatalogError(f"hunter enemy {enemy.name!r}: negative target {enemy.target}")


def parse_catalog(categories_blob: bytes | str, hunter_blob: bytes | str) -> Catalog:
    try:
        cat_file = msgspec.json.decode(categories_blob, type=CatalogFile)
        hunter_file = msgspec.json.decode(hunter_blob, type=HunterFile)
    except msgspec.DecodeError as exc:
        raise CatalogError(f"invalid catalog: {exc}") from exc
    catalog = Catalog(
        categories=tuple(cat_file.categories),
        tracks=tuple(cat_file.tracks),
        hunter=tuple(hunter_file.enemies),
    )
    validate_catalog(catalog)
    return catalog


def load_catalog(directory: str | Path | None = None) -> Catalog:
    """Load a catalog directory holding `categories.json` and `hunter.json`.

    Without `directory` the `SILKSTAT_CATALOG` environment variable is consulted,
    then the bundled dataset.
    """

    if directory is None:
        env_dir = os.environ.get(CATALOG_ENV, "").strip()
        if not env_dir:
            return default_catalog()
        directory = env_dir
    root = Path(directory)
    try:
        categories_blob = (root / CATEGORIES_FILE).read_bytes()
        hunter_blob = (root / HUNTER_FILE).read_bytes()
    except OSError as exc:
        raise CatalogError(f"cannot read catalog from {root}: {exc}") from exc
    catalog = parse_catalog(categories_blob, hunter_blob)
    logger.debug("loaded catalog from %s: %d categories", root, len(catalog.categories))
    return catalog


@lru_cache(maxsize=1)
def default_catalog() -> Catalog:
    data = resources.files("silkstat.catalog") / "data"
    return parse_catalog((data / CATEGORIES_FILE).read_bytes(), (data / HUNTER_FILE).read_bytes())
