from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

from iniedit import cli
from iniedit.codec import parse


@pytest.fixture
def ini_file(tmp_path: Path) -> Path:
    path = tmp_path / "app.ini"
    path.write_text("; demo\n[General]\nname = demo\nport=8080\n\n[Empty]\n")
    return path


def test_show_ini(ini_file: Path, capsys):
    assert cli.main(["show", str(ini_file)]) == 0
    out = capsys.readouterr().out
    assert out == "[General]\nname=demo\nport=8080\n\n[Empty]\n"


def test_show_json(ini_file: Path, capsys):
    assert cli.main(["show", str(ini_file), "--as", "json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data == {"General": {"name": "demo", "port": "8080"}, "Empty": {}}


def test_show_yaml(ini_file: Path, capsys):
    yaml = pytest.importorskip("yaml")
    assert cli.main(["show", str(ini_file), "--as", "yaml"]) == 0
    data = yaml.safe_load(capsys.readouterr().out)
    assert data["General"] == {"name": "demo", "port": "8080"}


def test_sections(ini_file: Path, capsys):
    assert cli.main(["sections", str(ini_file)]) == 0
    assert capsys.readouterr().out.split() == ["General", "Empty"]


def test_get(ini_file: Path, capsys):
    assert cli.main(["get", str(ini_file), "general", "NAME"]) == 0
    assert capsys.readouterr().out.strip() == "demo"
    assert cli.main(["get", str(ini_file), "General", "missing"]) == 1


def test_missing_file(tmp_path: Path, capsys):
    assert cli.main(["show", str(tmp_path / "nope.ini")]) == 1
    assert "does not exist" in capsys.readouterr().err


def test_set_saves_with_backup(ini_file: Path, tmp_path: Path):
    original = ini_file.read_text()
    assert cli.main(["set", str(ini_file), "General", "port", "9090"]) == 0
    assert parse(ini_file.read_text()).get("General", "port") == "9090"
    (backup_file,) = (tmp_path / "BackupConfigurations").iterdir()
    assert backup_file.read_text() == original


def test_set_missing_section(ini_file: Path, capsys):
    assert cli.main(["set", str(ini_file), "Nope", "k", "v"]) == 1
    assert "Nope" in capsys.readouterr().err
    assert cli.main(["set", str(ini_file), "Nope", "k", "v", "--create-section"]) == 0
    assert parse(ini_file.read_text()).get("Nope", "k") == "v"


def test_unset_and_sections(ini_file: Path):
    assert cli.main(["unset", str(ini_file), "General", "name"]) == 0
    assert cli.main(["unset", str(ini_file), "General", "name"]) == 1
    assert cli.main(["add-section", str(ini_file), "Extra"]) == 0
    assert cli.main(["add-section", str(ini_file), "extra"]) == 1
    assert cli.main(["remove-section", str(ini_file), "Empty"]) == 0
    assert parse(ini_file.read_text()).sections() == ["General", "Extra"]


def test_backups_listing(ini_file: Path, capsys):
    assert cli.main(["backups", str(ini_file)]) == 0
    assert capsys.readouterr().out.strip() == "No backups found"
    cli.main(["set", str(ini_file), "General", "port", "1"])
    assert cli.main(["backups", str(ini_file)]) == 0
    out = capsys.readouterr().out
    assert "BackupConfigurations" in out and "app_" in out


def test_settings_backup_dir_respected(ini_file: Path, tmp_path: Path, monkeypatch):
    cfg = tmp_path / "cfg"
    cfg.mkdir()
    (cfg / "settings.ini").write_text("[iniedit]\nbackup_dir = history\n")
    monkeypatch.setenv("INIEDIT_CONFIG_DIR", str(cfg))
    assert cli.main(["set", str(ini_file), "General", "port", "1"]) == 0
    assert len(list((tmp_path / "history").iterdir())) == 1


def test_module_entry_point_help():
    src = Path(__file__).resolve().parents[1] / "src"
    env = {**os.environ, "PYTHONPATH": os.pathsep.join(filter(None, [str(src), os.environ.get("PYTHONPATH")]))}
    proc = subprocess.run(
        [sys.executable, "-m", "iniedit", "--help"], capture_output=True, text=True, env=env
    )
    assert proc.returncode == 0
    assert "usage: iniedit" in proc.stdout


def test_invalid_section_name_is_operation_failure(ini_file: Path, capsys):
    assert cli.main(["add-section", str(ini_file), "a]b"]) == 1
    assert "invalid section name" in capsys.readouterr().err


def test_edits_written_when_autosave_preference_off(ini_file: Path, tmp_path: Path, monkeypatch):
    cfg = tmp_path / "cfg"
    cfg.mkdir()
    (cfg / "settings.ini").write_text("[iniedit]\nautosave = false\n")
    monkeypatch.setenv("INIEDIT_CONFIG_DIR", str(cfg))
    assert cli.main(["set", str(ini_file), "General", "port", "9090"]) == 0
    assert cli.main(["add-section", str(ini_file), "Extra"]) == 0
    doc = parse(ini_file.read_text())
    assert doc.get("General", "port") == "9090"
    assert "Extra" in doc
