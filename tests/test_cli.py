from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from silkstat.cli import app
from silkstat.save import read_save


def _save(tmp_path: Path, blob: bytes, name: str = "user1.dat") -> Path:
    path = tmp_path / name
    path.write_bytes(blob)
    return path


def test_report_text(tmp_path: Path, sample_save: bytes) -> None:
    path = _save(tmp_path, sample_save)
    result = CliRunner().invoke(app, ["report", str(path)])
    assert result.exit_code == 0, result.output
    lines = result.stdout.splitlines()
    assert lines[0] == "Overall: 15 / 105 (14%)"
    assert "[ ] Ancient Masks: 0 / 5 (3/20 fragments)" in lines
    assert "[ ] Silk Spool: 1 / 9 (2/18 fragments)" in lines
    assert "    [x] Swift Step (act 1)" in lines
    assert "[ ] Hunter's Journal: 1 / 32" in lines


def test_report_hide_found_and_act(tmp_path: Path, sample_save: bytes) -> None:
    path = _save(tmp_path, sample_save)
    result = CliRunner().invoke(app, ["report", str(path), "--act", "1", "--hide-found"])
    assert result.exit_code == 0, result.output
    assert "Filter: act 1" in result.stdout
    assert "Swift Step" not in result.stdout
    assert "(act 2)" not in result.stdout


def test_report_json(tmp_path: Path, sample_save: bytes) -> None:
    path = _save(tmp_path, sample_save)
    result = CliRunner().invoke(app, ["report", str(path), "--json", "--act", "1"])
    assert result.exit_code == 0, result.output
    summary = json.loads(result.stdout)
    assert summary["ok"] is True
    assert summary["act"] == 1
    assert summary["overall"] == {"have": 15, "total": 105, "percent": 14}
    assert summary["tracks"]["toolPouch"] == {"u1": True, "u2": True, "u3": False, "u4": False}
    masks = next(c for c in summary["categories"] if c["key"] == "ancientMasks")
    assert masks["grouped"] is False
    assert masks["have"] == masks["fragments"]["have"]
    assert all(row["act"] == 1 for row in masks["rows"])
    assert summary["hunter"]["total"] == 32


def test_report_rejects_wrong_extension(tmp_path: Path, sample_save: bytes) -> None:
    path = _save(tmp_path, sample_save, name="user1.sav")
    result = CliRunner().invoke(app, ["report", str(path)])
    assert result.exit_code == 1
    assert "expected a .dat save file" in result.output

    result = CliRunner().invoke(app, ["report", str(path), "--any-extension"])
    assert result.exit_code == 0, result.output


def test_report_missing_file(tmp_path: Path) -> None:
    result = CliRunner().invoke(app, ["report", str(tmp_path / "user1.dat")])
    assert result.exit_code == 1
    assert "not found" in result.output


def test_report_undecodable_save(tmp_path: Path) -> None:
    path = _save(tmp_path, b"\x00\x01\x02 not a save")
    result = CliRunner().invoke(app, ["report", str(path)])
    assert result.exit_code == 1
    assert "failed to process user1.dat" in result.output


def test_report_rejects_out_of_range_act(tmp_path: Path, sample_save: bytes) -> None:
    path = _save(tmp_path, sample_save)
    result = CliRunner().invoke(app, ["report", str(path), "--act", "4"])
    assert result.exit_code == 2


def test_report_with_custom_catalog(tmp_path: Path, sample_save: bytes) -> None:
    catalog_dir = tmp_path / "catalog"
    catalog_dir.mkdir()
    (catalog_dir / "categories.json").write_text(
        json.dumps(
            {
                "categories": [
                    {
                        "key": "abilities",
                        "title": "Abilities",
                        "entries": [
                            {"display": "Swift Step", "act": 1, "detection": {"kind": "flag", "flag": "hasDash"}},
                            {"display": "Clawline", "act": 2, "detection": {"kind": "flag", "flag": "hasHarpoonDash"}},
                        ],
                    }
                ]
            }
        ),
        encoding="utf-8",
    )
    (catalog_dir / "hunter.json").write_text('{"enemies": []}', encoding="utf-8")
    path = _save(tmp_path, sample_save)

    result = CliRunner().invoke(app, ["report", str(path), "--catalog", str(catalog_dir)])
    assert result.exit_code == 0, result.output
    assert result.stdout.splitlines()[0] == "Overall: 1 / 2 (50%)"

    (catalog_dir / "hunter.json").write_text("[", encoding="utf-8")
    result = CliRunner().invoke(app, ["report", str(path), "--catalog", str(catalog_dir)])
    assert result.exit_code == 1
    assert "invalid catalog" in result.output


def test_hunter_filter(tmp_path: Path, sample_save: bytes) -> None:
    path = _save(tmp_path, sample_save)
    result = CliRunner().invoke(app, ["hunter", str(path), "--filter", "incomplete"])
    assert result.exit_code == 0, result.output
    lines = result.stdout.splitlines()
    assert lines[0] == "Found: 2/32  Killed: 1/32"
    assert lines[1:] == ["    [ ] Aknid: 3/15"]


def test_hunter_rejects_unknown_filter(tmp_path: Path, sample_save: bytes) -> None:
    path = _save(tmp_path, sample_save)
    result = CliRunner().invoke(app, ["hunter", str(path), "--filter", "killed"])
    assert result.exit_code == 2


def test_decode_then_encode(tmp_path: Path, sample_save: bytes) -> None:
    path = _save(tmp_path, sample_save)
    decoded = tmp_path / "user1.json"
    result = CliRunner().invoke(app, ["decode", str(path), "-o", str(decoded)])
    assert result.exit_code == 0, result.output
    text = decoded.read_text(encoding="utf-8")
    assert text.startswith("{\n  ")
    assert json.loads(text)["playerData"]["nailUpgrades"] == 3

    rebuilt = tmp_path / "user2.dat"
    result = CliRunner().invoke(app, ["encode", str(decoded), "-o", str(rebuilt)])
    assert result.exit_code == 0, result.output
    assert json.loads(read_save(rebuilt)) == json.loads(text)
    assert "\n" not in read_save(rebuilt)

    result = CliRunner().invoke(app, ["report", str(rebuilt), "--json"])
    assert json.loads(result.stdout)["overall"]["have"] == 15


def test_decode_to_stdout(tmp_path: Path, sample_save: bytes) -> None:
    path = _save(tmp_path, sample_save)
    result = CliRunner().invoke(app, ["decode", str(path)])
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["playerData"]["hasDash"] is True


def test_encode_rejects_non_document(tmp_path: Path) -> None:
    source = tmp_path / "broken.json"
    source.write_text("[1, 2, 3]", encoding="utf-8")
    result = CliRunner().invoke(app, ["encode", str(source), "-o", str(tmp_path / "user1.dat")])
    assert result.exit_code == 1
    assert not (tmp_path / "user1.dat").exists()


def test_encode_reports_unreadable_source(tmp_path: Path) -> None:
    result = CliRunner().invoke(app, ["encode", str(tmp_path / "absent.json"), "-o", str(tmp_path / "user1.dat")])
    assert result.exit_code == 1
    assert "cannot read" in result.output
    assert not isinstance(result.exception, FileNotFoundError)

    binary = tmp_path / "binary.json"
    binary.write_bytes(b"\xff\xfe\x00garbage")
    result = CliRunner().invoke(app, ["encode", str(binary), "-o", str(tmp_path / "user1.dat")])
    assert result.exit_code == 1
    assert "cannot read" in result.output
    assert not (tmp_path / "user1.dat").exists()
