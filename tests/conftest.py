from __future__ import annotations

import copy
import sys
from pathlib import Path
from typing import Any

import pytest


def pytest_configure(config: pytest.Config) -> None:
    # Ensure the local `src/` tree wins over any other editable install that may exist
    # (e.g. a different git worktree pointing at the same project).
    src_dir = Path(__file__).resolve().parents[1] / "src"
    src_str = str(src_dir)
    if src_str not in sys.path:
        sys.path.insert(0, src_str)


_SAMPLE_DOCUMENT: dict[str, Any] = {
    "playerData": {
        "nailUpgrades": 3,
        "GotGourmandReward": False,
        "FleaGamesEnded": False,
        "ToolPouchUpgrades": 2,
        "PinGalleryLastChallengeOpen": False,
        "ToolKitUpgrades": 1,
        "hasDash": True,
        "hasWalljump": True,
        "PurchasedBonebottomHeartPiece": True,
        "Tools": {
            "savedData": [
                {"Name": "Straight Pin", "Data": {"IsUnlocked": True}},
                {"name": "Silk Spear", "data": {"isUnlocked": True}},
                {"Name": "WebShot Weaver", "Data": {"IsUnlocked": True}},
                {"Name": "Tri Pin", "Data": {"IsUnlocked": False}},
            ]
        },
        "ToolEquips": {
            "savedData": [
                {"Name": "Hunter", "Data": {"IsUnlocked": True}},
                {"Name": "Reaper", "Data": {"IsUnlocked": True}},
            ]
        },
        "QuestCompletionData": {
            "savedData": [
                {"Name": "Journal", "Data": {"IsCompleted": True}},
                {"Name": "Beastfly Hunt", "Data": {"IsCompleted": False}},
            ]
        },
        "Collectables": {"savedData": [{"Name": "White Flower", "Data": {"Amount": 1}}]},
        "EnemyJournalKillData": {
            "list": [
                {"Name": "Mossbone Crawler", "Record": {"Kills": 30}},
                {"Name": "Aknid", "Record": {"Kills": 3}},
                {"Name": "Shakra", "Record": {"Kills": 1}},
            ]
        },
    },
    "sceneData": {
        "persistentBools": {
            "serializedList": [
                {"SceneName": "Bone_East_20", "ID": "Heart Piece", "Value": True},
                {"SceneName": "Dock_08", "ID": "Heart Piece", "Value": False},
                {"SceneName": "Cog_Bench", "ID": "Heart Piece", "Value": True},
                {"SceneName": "Bone_11b", "ID": "Silk Spool", "Value": True},
                {"sceneName": "Greymoor_02", "id": "Silk Spool", "value": True},
                {"SceneName": "Memory_Red", "ID": "glow_rim_Remasker", "Value": True},
                {"SceneName": "Memory_Red", "ID": "Door Open", "Value": True},
            ]
        }
    },
}


@pytest.fixture
def sample_document() -> dict[str, Any]:
    return copy.deepcopy(_SAMPLE_DOCUMENT)


@pytest.fixture
def sample_save(sample_document: dict[str, Any]) -> bytes:
    import msgspec

    from silkstat.save import encode

    return encode(msgspec.json.encode(sample_document).decode("utf-8"))
