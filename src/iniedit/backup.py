"""Timestamped copies of a file taken before it is overwritten."""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from .errors import BackupError

logger = logging.getLogger(__name__)

BACKUP_DIR_NAME = "BackupConfigurations"
TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"
BACKUP_SUFFIX = ".ini"


def backup_dir(path: Path, directory_name: str = BACKUP_DIR_NAME) -> Path:
    return Path(path).parent / directory_name


def backup_name(path: Path, when: datetime) -> str:
    """Return ``<stem>_<YYYYMMDD_HHMMSS>.ini`` for *path*."""
    return f"{Path(path).stem}_{when.strftime(TIMESTAMP_FORMAT)}{BACKUP_SUFFIX}"


def backup(
    path: Path,
    *,
    directory_name: str = BACKUP_DIR_NAME,
    now: Callable[[], datetime] = datetime.now,
) -> Path | None:
    """Copy *path* into its backup directory.

    Nothing happens and ``None`` is returned when *path* does not exist yet.
    A backup with the same second-resolution timestamp is overwritten.  Any
    failure to create the directory or copy the file raises
    :class:`~iniedit.errors.BackupError`.
    """

    path = Path(path)
    if not path.exists():
        logger.debug("no backup for %s: file does not exist", path)
        return None
    target_dir = backup_dir(path, directory_name)
    target = target_dir / backup_name(path, now())
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(path, target)
    except OSError as exc:
        logger.error("backup of %s to %s failed: %s", path, target, exc)
        raise BackupError(f"could not back up {path}: {exc}") from exc
    logger.debug("backed up %s -> %s", path, target)
    return target


def list_backups(path: Path, *, directory_name: str = BACKUP_DIR_NAME) -> list[Path]:
    """Return the existing backups of *path*, oldest first."""
    path = Path(path)
    target_dir = backup_dir(path, directory_name)
    if not target_dir.is_dir():
        return []
    prefix = f"{path.stem}_"
    found = []
    for candidate in target_dir.glob(f"*{BACKUP_SUFFIX}"):
        if not candidate.stem.startswith(prefix):
            continue
        stamp = candidate.stem[len(prefix):]
        try:
            datetime.strptime(stamp, TIMESTAMP_FORMAT)
        except ValueError:
            continue
        found.append((stamp, candidate))
    return [p for _, p in sorted(found)]


__all__ = [
    "BACKUP_DIR_NAME",
    "backup",
    "backup_dir",
    "backup_name",
    "list_backups",
]
