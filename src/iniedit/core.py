from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from threading import RLock

from .backup import BACKUP_DIR_NAME, backup
from .codec import read_document, serialize, write_document
from .document import Document, DocumentSnapshot
from .errors import (
    IniEditError,  # noqa: F401 - re-exported for convenience
    IniFileNotFoundError,
    IniReadError,
    NoTargetPathError,
    SaveError,
)
from .settings import EditorSettings

logger = logging.getLogger(__name__)

TITLE = "INI Editor"


class EditorState(enum.Enum):
    UNLOADED = "unloaded"
    CLEAN = "clean"
    DIRTY = "dirty"


class IniEditor:
    """Owns the open :class:`Document` and keeps it in sync with disk.

    Every structural edit goes through this class.  While a target path is
    known (and ``autosave`` is on) each edit is followed by a synchronous
    :meth:`save`, which backs up the previous file contents before writing.
    A failed save raises :class:`~iniedit.errors.SaveError` but the edit
    itself stays in memory so the caller may retry.
    """

    def __init__(
        self,
        *,
        autosave: bool = True,
        backup_dir: str = BACKUP_DIR_NAME,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.autosave = autosave
        self.backup_dir = backup_dir
        self._clock = clock
        self._lock = RLock()
        self._document = Document()
        self._path: Path | None = None
        self._loaded = False

    @classmethod
    def from_settings(cls, settings: EditorSettings) -> IniEditor:
        return cls(autosave=settings.autosave, backup_dir=settings.backup_dir)

    # ----- state -----

    @property
    def path(self) -> Path | None:
        return self._path

    @property
    def dirty(self) -> bool:
        return self._document.dirty

    @property
    def state(self) -> EditorState:
        if self._document.dirty:
            return EditorState.DIRTY
        if self._loaded:
            return EditorState.CLEAN
        return EditorState.UNLOADED

    @property
    def title(self) -> str:
        if self._path is None:
            return TITLE
        return f"{TITLE} - {self._path.name}"

    def current_document(self) -> DocumentSnapshot:
        with self._lock:
            return self._document.snapshot()

    def get(self, section: str, key: str, default: str | None = None) -> str | None:
        with self._lock:
            return self._document.get(section, key, default)

    def has_section(self, name: str) -> bool:
        with self._lock:
            return name in self._document

    def text(self) -> str:
        """Return the document as it would be written by :meth:`save`."""
        with self._lock:
            return serialize(self._document)

    # ----- loading and saving -----

    def new(self) -> None:
        with self._lock:
            self._document = Document()
            self._path = None
            self._loaded = False

    def load(self, path: Path | str) -> DocumentSnapshot:
        path = Path(path)
        if not path.is_file():
            raise IniFileNotFoundError(f"File '{path}' does not exist.")
        try:
            document = read_document(path)
        except (OSError, UnicodeDecodeError) as exc:
            raise IniReadError(f"could not read {path}: {exc}") from exc
        with self._lock:
            self._document = document
            self._path = path
            self._loaded = True
            logger.debug("loaded %s", path)
            return self._document.snapshot()

    def save(self) -> Path:
        with self._lock:
            path = self._path
            if path is None:
                raise NoTargetPathError("no file name given; use save_as()")
            backup(path, directory_name=self.backup_dir, now=self._clock)
            try:
                write_document(path, self._document)
            except (OSError, UnicodeError) as exc:
                logger.error("writing %s failed: %s", path, exc)
                raise SaveError(f"could not write {path}: {exc}") from exc
            self._document.dirty = False
            self._loaded = True
            logger.debug("saved %s", path)
            return path

    def save_as(self, path: Path | str) -> Path:
        with self._lock:
            self._path = Path(path)
            return self.save()

    # ----- structural edits -----

    def add_section(self, name: str) -> None:
        with self._lock:
            self._document.add_section(name)
            self._after_edit()

    def remove_section(self, name: str) -> None:
        with self._lock:
            self._document.remove_section(name)
            self._after_edit()

    def set_entry(self, section: str, key: str, value: str) -> None:
        with self._lock:
            self._document.set_entry(section, key, value)
            self._after_edit()

    def remove_entry(self, section: str, key: str) -> None:
        with self._lock:
            self._document.remove_entry(section, key)
            self._after_edit()

    def _after_edit(self) -> None:
        if self.autosave and self._path is not None:
            self.save()


__all__ = ["EditorState", "IniEditor", "TITLE"]
