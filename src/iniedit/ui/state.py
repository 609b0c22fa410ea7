"""Per-user GUI state kept between sessions.

Stored as ``gui-state.json`` in the user data directory.  Nothing here is
essential: unreadable state is treated as empty and failed writes are
logged and otherwise ignored.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from ..paths import user_data_dir

logger = logging.getLogger(__name__)


def gui_state_file() -> Path:
    return user_data_dir() / "gui-state.json"


@dataclass(slots=True)
class GuiState:
    last_file: Path | None = None

    @classmethod
    def load(cls, path: Path | None = None) -> GuiState:
        path = path or gui_state_file()
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return cls()
        except (OSError, ValueError) as exc:
            logger.debug("ignoring GUI state %s: %s", path, exc)
            return cls()
        value = data.get("last_file") if isinstance(data, dict) else None
        if not isinstance(value, str) or not value.strip():
            return cls()
        return cls(last_file=Path(value))

    def save(self, path: Path | None = None) -> None:
        path = path or gui_state_file()
        data = {"last_file": str(self.last_file) if self.last_file else None}
        tmp = path.with_suffix(path.suffix + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(data), encoding="utf-8")
            tmp.replace(path)
        except OSError as exc:
            logger.warning("could not store GUI state in %s: %s", path, exc)


def load_last_file() -> Path | None:
    """Return the last file opened in the GUI, if it still exists."""
    last = GuiState.load().last_file
    if last is not None and last.is_file():
        return last
    return None


def save_last_file(path: Path | str) -> None:
    GuiState(last_file=Path(path).resolve()).save()


__all__ = ["GuiState", "gui_state_file", "load_last_file", "save_last_file"]
