from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from .save.document import bool_field, coerce_int, list_field, lookup, mapping_field, string_field

logger = logging.getLogger(__name__)

SceneMatcher = Callable[[str, Any], bool]

PLAYER_DATA = "playerData"
TOOLS_PATH = "Tools.savedData"
CRESTS_PATH = "ToolEquips.savedData"
QUESTS_PATH = "QuestCompletionData.savedData"
COLLECTABLES_PATH = "Collectables.savedData"
KILLS_PATH = "EnemyJournalKillData.list"
SCENE_BOOLS_PATH = "sceneData.persistentBools.serializedList"


def scene_key(scene: str, event_id: object) -> str:
    return f"{scene}|{event_id}"


def id_matcher(generic_id: str, *, exact: bool = False) -> SceneMatcher:
    """Match event ids equal to `generic_id`, or starting with it unless `exact`."""

    def match(_scene: str, event_id: Any) -> bool:
        if event_id == generic_id:
            return True
        return not exact and isinstance(event_id, str) and event_id.startswith(generic_id)

    return match


def build_unlock_map(records: Iterable[Any]) -> dict[str, bool]:
    out: dict[str, bool] = {}
    for record in records:
        name = string_field(record, "Name")
        if not name:
            continue
        out[name] = bool_field(record, "Data.IsUnlocked")
    return out


def completed_quests(records: Iterable[Any]) -> frozenset[str]:
    done: set[str] = set()
    for record in records:
        name = string_field(record, "Name")
        if name and bool_field(record, "Data.IsCompleted"):
            done.add(name)
    return frozenset(done)


def scene_event_set(records: Iterable[Any], match: SceneMatcher) -> frozenset[str]:
    keys: set[str] = set()
    for record in records:
        scene = string_field(record, "SceneName")
        event_id = lookup(record, "ID")
        if not scene or not lookup(record, "Value", default=False):
            continue
        if match(scene, event_id):
            keys.add(scene_key(scene, event_id))
    return frozenset(keys)


def collectable_counts(records: Iterable[Any]) -> dict[str, int]:
    out: dict[str, int] = {}
    for record in records:
        name = string_field(record, "Name")
        if name:
            out[name] = coerce_int(lookup(record, "Data.Amount"))
    return out


def kill_counts(records: Iterable[Any]) -> dict[str, int]:
    out: dict[str, int] = {}
    for record in records:
        name = string_field(record, "Name")
        if name:
            out[name] = coerce_int(lookup(record, "Record.Kills"))
    return out


@dataclass(frozen=True, slots=True)
class SaveFacts:
    player_data: Mapping[str, Any] = field(default_factory=dict)
    tools: Mapping[str, bool] = field(default_factory=dict)
    crests: Mapping[str, bool] = field(default_factory=dict)
    quests: frozenset[str] = frozenset()
    collectables: Mapping[str, int] = field(default_factory=dict)
    kills: Mapping[str, int] = field(default_factory=dict)
    scenes: Mapping[str, frozenset[str]] = field(default_factory=dict)

    def flag(self, name: str) -> bool:
        return bool_field(self.player_data, name, exact=True)

    def counter(self, name: str) -> int:
        return coerce_int(lookup(self.player_data, name, exact=True))

    def amount(self, collectable: str) -> int:
        return int(self.collectables.get(collectable, 0))

    def scene_events(self, generic_id: str) -> frozenset[str]:
        return self.scenes.get(generic_id, frozenset())


def extract_facts(document: object, scene_matchers: Mapping[str, SceneMatcher] | None = None) -> SaveFacts:
    """Run every extraction pass over its region of a decoded save.

    `scene_matchers` maps a subsystem's generic event id (e.g. ``"Heart Piece"``) to
    the predicate selecting its persistent bools.
    """

    player = mapping_field(document, PLAYER_DATA, exact=True)
    scene_records = list_field(document, SCENE_BOOLS_PATH)
    scenes = {
        generic_id: scene_event_set(scene_records, match)
        for generic_id, match in (scene_matchers or {}).items()
    }
    facts = SaveFacts(
        player_data=player,
        tools=build_unlock_map(list_field(player, TOOLS_PATH)),
        crests=build_unlock_map(list_field(player, CRESTS_PATH)),
        quests=completed_quests(list_field(player, QUESTS_PATH)),
        collectables=collectable_counts(list_field(player, COLLECTABLES_PATH)),
        kills=kill_counts(list_field(player, KILLS_PATH)),
        scenes=scenes,
    )
    logger.debug(
        "facts: %d tools, %d crests, %d quests, %d collectables, %d kill records, scenes=%s",
        len(facts.tools),
        len(facts.crests),
        len(facts.quests),
        len(facts.collectables),
        len(facts.kills),
        {key: len(value) for key, value in scenes.items()},
    )
    return facts
