from __future__ import annotations

from .registry import Catalog, CatalogError, default_catalog, load_catalog, parse_catalog
from .types import (
    CatalogEntry,
    Category,
    CounterThresholdDetection,
    Detection,
    FlagDetection,
    FlagEvidence,
    HunterTarget,
    QuestDetection,
    QuestEvidence,
    SceneDataDetection,
    TierDetection,
    UnlockDetection,
    UpgradeTrack,
)

__all__ = [
    "Catalog",
    "CatalogEntry",
    "CatalogError",
    "Category",
    "CounterThresholdDetection",
    "Detection",
    "FlagDetection",
    "FlagEvidence",
    "HunterTarget",
    "QuestDetection",
    "QuestEvidence",
    "SceneDataDetection",
    "TierDetection",
    "UnlockDetection",
    "UpgradeTrack",
    "default_catalog",
    "load_catalog",
    "parse_catalog",
]
