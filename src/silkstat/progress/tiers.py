from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..catalog.types import TIER_KEYS, ExtraTierKey, FlagEvidence, TierKey, UpgradeTrack
from ..facts import SaveFacts

MAX_TIERS = len(TIER_KEYS)


@dataclass(frozen=True, slots=True)
class FourFlags:
    u1: bool = False
    u2: bool = False
    u3: bool = False
    u4: bool = False

    def get(self, tier: TierKey) -> bool:
        return bool(getattr(self, tier))

    def as_tuple(self) -> tuple[bool, bool, bool, bool]:
        return self.u1, self.u2, self.u3, self.u4

    @property
    def owned(self) -> int:
        return sum(self.as_tuple())


def compute_four_flags(raw_count: int, extras: Sequence[bool], order: Sequence[ExtraTierKey]) -> FourFlags:
    """Derive owned tiers 1..4 of an upgrade track.

    `extras[i]` is evidence for tier `order[i]`. When the save's counter claims more
    tiers than the evidence confirms, tiers 2..raw_count are filled in regardless.
    """

    if len(extras) != len(order):
        raise ValueError(f"extras and order differ in length: {len(extras)} != {len(order)}")
    raw_count = int(raw_count)
    if raw_count <= 0:
        return FourFlags()
    if raw_count == 1:
        return FourFlags(u1=True)

    owned: dict[str, bool] = {"u1": True, "u2": False, "u3": False, "u4": False}
    count = 1
    for present, tier in zip(extras, order):
        if present:
            owned[tier] = True
            count += 1

    if count < raw_count:
        # No fifth tier: counters above 4 still only fill u2..u4.
        for idx in range(2, min(raw_count, MAX_TIERS) + 1):
            owned[f"u{idx}"] = True

    return FourFlags(**owned)


def _evidence_present(facts: SaveFacts, evidence) -> bool:
    if isinstance(evidence, FlagEvidence):
        return facts.flag(evidence.flag)
    return evidence.quest in facts.quests


def track_flags(track: UpgradeTrack, facts: SaveFacts) -> FourFlags:
    extras = [_evidence_present(facts, ev) for ev in track.evidence]
    order = [ev.tier for ev in track.evidence]
    return compute_four_flags(facts.counter(track.counter), extras, order)
