from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from ..catalog.types import (
    CatalogEntry,
    Category,
    CounterThresholdDetection,
    FlagDetection,
    QuestDetection,
    SceneDataDetection,
    TierDetection,
    UnlockDetection,
)
from ..facts import SaveFacts, scene_key
from .tiers import FourFlags


@dataclass(frozen=True, slots=True)
class RuleContext:
    facts: SaveFacts
    tracks: Mapping[str, FourFlags] = field(default_factory=dict)


def scene_obtained(events: frozenset[str], det: SceneDataDetection, generic_id: str) -> bool:
    if scene_key(det.scene, det.event_id) in events:
        return True
    # Some pickups only record the generic id for their scene.
    if generic_id and det.event_id != generic_id:
        return scene_key(det.scene, generic_id) in events
    return False


def entry_obtained(entry: CatalogEntry, category: Category, ctx: RuleContext) -> bool:
    det = entry.detection
    facts = ctx.facts
    if isinstance(det, FlagDetection):
        return facts.flag(det.flag)
    if isinstance(det, SceneDataDetection):
        generic_id = category.scene_id
        return scene_obtained(facts.scene_events(generic_id), det, generic_id)
    if isinstance(det, QuestDetection):
        return det.quest in facts.quests
    if isinstance(det, CounterThresholdDetection):
        return facts.amount(det.collectable) >= det.amount
    if isinstance(det, UnlockDetection):
        unlocked = facts.tools if det.source == "tools" else facts.crests
        return any(unlocked.get(name) is True for name in det.names)
    if isinstance(det, TierDetection):
        flags = ctx.tracks.get(det.track)
        return flags is not None and flags.get(det.tier)
    raise TypeError(f"unsupported detection: {type(det).__name__}")
