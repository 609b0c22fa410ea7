from __future__ import annotations

import json
from pathlib import Path

import pytest

from iniedit.core import IniEditor
from iniedit.errors import SaveError
from iniedit.settings import EditorSettings
from iniedit.ui import state as ui_state
from iniedit.ui.core import EditorSession, EventBus


class Recorder:
    def __init__(self, events: EventBus, *, confirm: bool = True, answer: bool | None = False):
        self.snapshots = []
        self.errors: list[str] = []
        self.toasts: list[tuple[str, str]] = []
        self.questions: list[str] = []
        events.on_state_changed.append(self.snapshots.append)
        events.on_error.append(self.errors.append)
        events.on_toast.append(lambda msg, level: self.toasts.append((msg, level)))
        events.on_confirm.append(lambda _title, _msg: confirm)

        def ask(_title: str, msg: str) -> bool | None:
            self.questions.append(msg)
            return answer

        events.on_question.append(ask)


@pytest.fixture
def ini_file(tmp_path: Path) -> Path:
    path = tmp_path / "app.ini"
    path.write_text("[S]\nk=v\n")
    return path


def _session(**kwargs) -> EditorSession:
    return EditorSession(settings=EditorSettings(), **kwargs)


def test_open_emits_snapshot_and_remembers(ini_file: Path):
    session = _session()
    rec = Recorder(session.events)
    assert session.open(ini_file) is True
    assert rec.snapshots[-1][0].name == "S"
    assert ui_state.load_last_file() == ini_file.resolve()
    assert session.title == "INI Editor - app.ini"


def test_open_missing_reports_error(tmp_path: Path):
    session = _session()
    rec = Recorder(session.events)
    assert session.open(tmp_path / "missing.ini") is False
    assert rec.errors and "does not exist" in rec.errors[0]
    assert rec.snapshots == []


def test_open_last(ini_file: Path):
    ui_state.save_last_file(ini_file)
    session = _session()
    assert session.open_last() is True
    assert session.editor.path == ini_file.resolve()


def test_open_last_disabled(ini_file: Path):
    ui_state.save_last_file(ini_file)
    session = _session(remember=False)
    assert session.open_last() is False


def test_add_section_blank_is_ignored(ini_file: Path):
    session = _session()
    rec = Recorder(session.events)
    session.open(ini_file)
    assert session.add_section("   ") is False
    assert session.add_section(None) is False
    assert rec.errors == []


def test_add_section_duplicate(ini_file: Path):
    session = _session()
    rec = Recorder(session.events)
    session.open(ini_file)
    assert session.add_section("s") is False
    assert rec.errors == ["Section already exists!"]


def test_add_entry_autosaves(ini_file: Path):
    session = _session()
    rec = Recorder(session.events)
    session.open(ini_file)
    assert session.add_entry("S", "new", None) is True
    assert rec.snapshots[-1][0].entries == (("k", "v"), ("new", ""))
    assert "new=" in ini_file.read_text()


def test_remove_requires_confirmation(ini_file: Path):
    session = _session()
    rec = Recorder(session.events, confirm=False)
    session.open(ini_file)
    assert session.remove_entry("S", "k") is False
    assert session.remove_section("S") is False
    assert session.editor.get("S", "k") == "v"
    assert len(rec.snapshots) == 1


def test_remove_confirmed(ini_file: Path):
    session = _session()
    Recorder(session.events, confirm=True)
    session.open(ini_file)
    assert session.remove_entry("S", "k") is True
    assert session.remove_section("S") is True
    assert ini_file.read_text() == ""


def test_failed_autosave_keeps_edit_and_reports(ini_file: Path, monkeypatch):
    session = _session()
    rec = Recorder(session.events)
    session.open(ini_file)

    def failing_save() -> None:
        raise SaveError("disk full")

    monkeypatch.setattr(session.editor, "save", failing_save)
    assert session.set_value("S", "k", "v2") is False
    assert rec.errors == ["Change kept but not saved: disk full"]
    assert rec.snapshots[-1][0].as_dict() == {"k": "v2"}


def test_unencodable_value_is_reported_not_raised(ini_file: Path):
    session = _session()
    rec = Recorder(session.events)
    session.open(ini_file)
    assert session.set_value("S", "k", "\ud800") is False
    assert rec.errors and rec.errors[0].startswith("Change kept but not saved:")
    assert ini_file.read_text() == "[S]\nk=v\n"


def test_save_without_path_reports_error():
    session = _session()
    rec = Recorder(session.events)
    assert session.needs_path is True
    assert session.save() is False
    assert rec.errors


def test_save_toast(ini_file: Path):
    session = _session()
    rec = Recorder(session.events)
    session.open(ini_file)
    assert session.save() is True
    assert rec.toasts == [("Configuration saved successfully!", "info")]


def test_save_as_new_document(tmp_path: Path):
    session = _session()
    Recorder(session.events)
    session.add_section("Fresh")
    target = tmp_path / "fresh.ini"
    assert session.save_as(target) is True
    assert target.read_text() == "[Fresh]\n\n"
    assert session.needs_path is False


def test_confirm_close_clean():
    session = _session()
    rec = Recorder(session.events)
    assert session.confirm_close() is True
    assert rec.questions == []


@pytest.mark.parametrize(
    "answer, expected, saved",
    [(None, False, False), (False, True, False), (True, True, True)],
)
def test_confirm_close_dirty(ini_file: Path, answer, expected, saved):
    editor = IniEditor(autosave=False)
    session = _session(editor=editor)
    rec = Recorder(session.events, answer=answer)
    session.open(ini_file)
    session.set_value("S", "k", "v2")
    assert session.confirm_close() is expected
    assert rec.questions == ["You have unsaved changes. Save before closing?"]
    assert ("k=v2" in ini_file.read_text()) is saved


def test_event_bus_defaults():
    bus = EventBus()
    assert bus.confirm("t", "m") is True
    assert bus.ask("t", "m") is False


def test_gui_state_ignores_garbage(tmp_path: Path, monkeypatch):
    state_path = tmp_path / "gui-state.json"
    monkeypatch.setattr(ui_state, "gui_state_file", lambda: state_path)
    state_path.write_text("not json")
    assert ui_state.load_last_file() is None
    state_path.write_text(json.dumps({"last_file": str(tmp_path / "gone.ini")}))
    assert ui_state.load_last_file() is None


def test_gui_state_round_trip(tmp_path: Path):
    state_path = tmp_path / "nested" / "gui-state.json"
    ui_state.GuiState(last_file=tmp_path / "a.ini").save(state_path)
    assert ui_state.GuiState.load(state_path).last_file == tmp_path / "a.ini"
    assert ui_state.GuiState.load(tmp_path / "absent.json").last_file is None
    assert not (tmp_path / "nested" / "gui-state.json.tmp").exists()
