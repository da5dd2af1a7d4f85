from __future__ import annotations

from typing import Literal, TypeAlias

import msgspec

TierKey = Literal["u1", "u2", "u3", "u4"]
ExtraTierKey = Literal["u2", "u3", "u4"]
UnlockSource = Literal["tools", "crests"]
SceneMatch = Literal["prefix", "exact"]

TIER_KEYS: tuple[TierKey, ...] = ("u1", "u2", "u3", "u4")
ACTS: tuple[int, ...] = (1, 2, 3)


class FlagDetection(msgspec.Struct, tag_field="kind", tag="flag", forbid_unknown_fields=True, frozen=True):
    flag: str


class SceneDataDetection(msgspec.Struct, tag_field="kind", tag="sceneData", forbid_unknown_fields=True, frozen=True):
    scene: str
    event_id: str


class QuestDetection(msgspec.Struct, tag_field="kind", tag="quest", forbid_unknown_fields=True, frozen=True):
    quest: str


class CounterThresholdDetection(
    msgspec.Struct, tag_field="kind", tag="counterThreshold", forbid_unknown_fields=True, frozen=True
):
    collectable: str
    amount: int = 1


class UnlockDetection(msgspec.Struct, tag_field="kind", tag="unlock", forbid_unknown_fields=True, frozen=True):
    names: tuple[str, ...]
    source: UnlockSource = "tools"


class TierDetection(msgspec.Struct, tag_field="kind", tag="tier", forbid_unknown_fields=True, frozen=True):
    track: str
    tier: TierKey


Detection: TypeAlias = (
    FlagDetection
    | SceneDataDetection
    | QuestDetection
    | CounterThresholdDetection
    | UnlockDetection
    | TierDetection
)


class CatalogEntry(msgspec.Struct, forbid_unknown_fields=True, frozen=True):
    display: str
    detection: Detection
    act: int = 0
    link: str = ""

    @property
    def ids(self) -> tuple[str, ...]:
        """Internal identifiers this entry is joined on."""
        det = self.detection
        if isinstance(det, FlagDetection):
            return (det.flag,)
        if isinstance(det, SceneDataDetection):
            return (det.scene, det.event_id)
        if isinstance(det, QuestDetection):
            return (det.quest,)
        if isinstance(det, CounterThresholdDetection):
            return (det.collectable,)
        if isinstance(det, UnlockDetection):
            return det.names
        return (det.track, det.tier)


class Category(msgspec.Struct, forbid_unknown_fields=True, frozen=True):
    key: str
    title: str
    entries: tuple[CatalogEntry, ...] = ()
    # Fragments per displayed item (4 shards per mask, 2 fragments per spool).
    group_size: int = 1
    scene_id: str = ""
    scene_match: SceneMatch = "prefix"

    @property
    def composite(self) -> bool:
        return self.group_size > 1


class FlagEvidence(msgspec.Struct, tag_field="kind", tag="flag", forbid_unknown_fields=True, frozen=True):
    flag: str
    tier: ExtraTierKey


class QuestEvidence(msgspec.Struct, tag_field="kind", tag="quest", forbid_unknown_fields=True, frozen=True):
    quest: str
    tier: ExtraTierKey


Evidence: TypeAlias = FlagEvidence | QuestEvidence


class UpgradeTrack(msgspec.Struct, forbid_unknown_fields=True, frozen=True):
    key: str
    counter: str
    evidence: tuple[Evidence, ...] = ()


class HunterTarget(msgspec.Struct, forbid_unknown_fields=True, frozen=True):
    name: str
    target: int
    optional: bool = False
    # In-game name when the journal key differs from it.
    display: str = ""
    link: str = ""


class CatalogFile(msgspec.Struct, forbid_unknown_fields=True):
    tracks: list[UpgradeTrack] = msgspec.field(default_factory=list)
    categories: list[Category] = msgspec.field(default_factory=list)


class HunterFile(msgspec.Struct, forbid_unknown_fields=True):
    enemies: list[HunterTarget] = msgspec.field(default_factory=list)
