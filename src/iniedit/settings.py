"""User preferences for the editor.

Preferences live in ``settings.ini`` under the user config directory::

    [iniedit]
    autosave = true
    backup_dir = BackupConfigurations
    remember_last_file = true

A missing or unreadable file yields the defaults.
"""

from __future__ import annotations

import configparser
import logging
from dataclasses import dataclass, fields
from pathlib import Path

from .backup import BACKUP_DIR_NAME
from .paths import APP_NAME, settings_file

logger = logging.getLogger(__name__)

SECTION = APP_NAME


@dataclass(slots=True)
class EditorSettings:
    autosave: bool = True
    backup_dir: str = BACKUP_DIR_NAME
    remember_last_file: bool = True

    @classmethod
    def load(cls, path: Path | None = None) -> EditorSettings:
        path = path or settings_file()
        settings = cls()
        if not path.is_file():
            return settings
        parser = configparser.ConfigParser()
        try:
            parser.read(path, encoding="utf-8")
        except (configparser.Error, OSError, UnicodeDecodeError) as exc:
            logger.warning("Failed to read settings %s: %s", path, exc)
            return settings
        if not parser.has_section(SECTION):
            return settings
        sec = parser[SECTION]
        for name in ("autosave", "remember_last_file"):
            try:
                value = sec.getboolean(name, fallback=getattr(settings, name))
            except ValueError as exc:
                logger.warning("Ignoring %s in %s: %s", name, path, exc)
                continue
            setattr(settings, name, value)
        backup_dir = sec.get("backup_dir", fallback="").strip()
        if backup_dir:
            settings.backup_dir = backup_dir
        return settings

    def save(self, path: Path | None = None) -> Path:
        path = path or settings_file()
        parser = configparser.ConfigParser()
        parser[SECTION] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            parser[SECTION][f.name] = str(value).lower() if isinstance(value, bool) else str(value)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(path.suffix + ".tmp")
        with tmp.open("w", encoding="utf-8") as fh:
            parser.write(fh)
        tmp.replace(path)
        return path


__all__ = ["EditorSettings"]
