"""Framework agnostic GUI core.

:class:`EditorSession` sits between a concrete front end and
:class:`~iniedit.core.IniEditor`.  It turns user commands into editor
calls, asks the front end for confirmation before anything is removed,
and reports results through the callbacks registered on an
:class:`EventBus`.  Errors never escape a session command; they are
reported through ``on_error`` and the command returns ``False``.

After every successful command the complete document snapshot is emitted
so the view can simply rebuild itself.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from ..core import IniEditor
from ..document import DocumentSnapshot
from ..errors import DuplicateSectionError, IniEditError, SaveError
from ..settings import EditorSettings
from .state import load_last_file, save_last_file

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Event handling
# ---------------------------------------------------------------------------


class EventBus:
    """Simple callback based pub/sub system."""

    def __init__(self) -> None:
        self.on_state_changed: list[Callable[[DocumentSnapshot], None]] = []
        self.on_error: list[Callable[[str], None]] = []
        self.on_toast: list[Callable[[str, str], None]] = []
        self.on_confirm: list[Callable[[str, str], bool]] = []
        self.on_question: list[Callable[[str, str], bool | None]] = []

    # Emit helpers -----------------------------------------------------
    def emit_state(self, snapshot: DocumentSnapshot) -> None:
        for cb in list(self.on_state_changed):
            cb(snapshot)

    def emit_error(self, msg: str) -> None:
        for cb in list(self.on_error):
            cb(msg)

    def emit_toast(self, msg: str, level: str = "info") -> None:
        for cb in list(self.on_toast):
            cb(msg, level)

    def confirm(self, title: str, msg: str) -> bool:
        """Return ``True`` unless a registered handler declines."""
        return all(cb(title, msg) for cb in list(self.on_confirm))

    def ask(self, title: str, msg: str) -> bool | None:
        """Yes/no/cancel question answered by the first handler.

        Without a handler the answer is ``False`` (no).
        """
        handlers = list(self.on_question)
        if not handlers:
            return False
        return handlers[0](title, msg)


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------


class EditorSession:
    def __init__(
        self,
        editor: IniEditor | None = None,
        *,
        settings: EditorSettings | None = None,
        events: EventBus | None = None,
        remember: bool | None = None,
    ) -> None:
        self.settings = settings or EditorSettings.load()
        self.editor = editor or IniEditor.from_settings(self.settings)
        self.events = events or EventBus()
        self.remember = self.settings.remember_last_file if remember is None else remember

    # --- read side ---------------------------------------------------
    @property
    def snapshot(self) -> DocumentSnapshot:
        return self.editor.current_document()

    @property
    def title(self) -> str:
        return self.editor.title

    @property
    def needs_path(self) -> bool:
        return self.editor.path is None

    def refresh(self) -> None:
        self.events.emit_state(self.snapshot)

    # --- files -------------------------------------------------------
    def open(self, path: Path | str) -> bool:
        try:
            self.editor.load(path)
        except IniEditError as exc:
            self.events.emit_error(str(exc))
            return False
        if self.remember:
            save_last_file(Path(path))
        self.refresh()
        return True

    def open_last(self) -> bool:
        if not self.remember:
            return False
        path = load_last_file()
        if path is None:
            return False
        return self.open(path)

    def save(self) -> bool:
        try:
            self.editor.save()
        except IniEditError as exc:
            self.events.emit_error(str(exc))
            return False
        self.events.emit_toast("Configuration saved successfully!", "info")
        return True

    def save_as(self, path: Path | str) -> bool:
        try:
            self.editor.save_as(path)
        except IniEditError as exc:
            self.events.emit_error(str(exc))
            self.refresh()
            return False
        if self.remember:
            save_last_file(Path(path))
        self.refresh()
        return True

    def confirm_close(self) -> bool:
        """Return ``True`` when the view may close."""
        if not self.editor.dirty:
            return True
        answer = self.events.ask(
            "Unsaved Changes", "You have unsaved changes. Save before closing?"
        )
        if answer is None:
            return False
        if answer:
            return self.save()
        return True

    # --- edits -------------------------------------------------------
    def add_section(self, name: str | None) -> bool:
        if name is None or not name.strip():
            return False
        try:
            self.editor.add_section(name)
        except DuplicateSectionError:
            self.events.emit_error("Section already exists!")
            return False
        except SaveError as exc:
            return self._edit_not_saved(exc)
        except IniEditError as exc:
            self.events.emit_error(str(exc))
            return False
        self.refresh()
        return True

    def remove_section(self, name: str) -> bool:
        if not self.events.confirm("Confirm", f"Delete section [{name}]?"):
            return False
        return self._edit(self.editor.remove_section, name)

    def add_entry(self, section: str, key: str | None, value: str | None) -> bool:
        if key is None or not key.strip():
            return False
        return self._edit(self.editor.set_entry, section, key, value or "")

    def set_value(self, section: str, key: str, value: str) -> bool:
        return self._edit(self.editor.set_entry, section, key, value)

    def remove_entry(self, section: str, key: str) -> bool:
        if not self.events.confirm("Confirm", f"Delete key '{key}'?"):
            return False
        return self._edit(self.editor.remove_entry, section, key)

    # --- helpers -----------------------------------------------------
    def _edit(self, fn: Callable[..., None], *args: str) -> bool:
        try:
            fn(*args)
        except SaveError as exc:
            return self._edit_not_saved(exc)
        except IniEditError as exc:
            self.events.emit_error(str(exc))
            return False
        self.refresh()
        return True

    def _edit_not_saved(self, exc: SaveError) -> bool:
        # the edit stands in memory; show it and report the failed write
        logger.warning("auto-save failed: %s", exc)
        self.events.emit_error(f"Change kept but not saved: {exc}")
        self.refresh()
        return False


__all__ = ["EditorSession", "EventBus"]
