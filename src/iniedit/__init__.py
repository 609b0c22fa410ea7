"""Form editor core for INI configuration files."""

import logging
import os

from .codec import parse, serialize
from .core import EditorState, IniEditor
from .document import Document, DocumentSnapshot, SectionView
from .errors import IniEditError

logger = logging.getLogger("iniedit")


def enable_debug_logging() -> None:
    """Attach a stderr handler to the ``iniedit`` logger at DEBUG level."""
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s:%(message)s"))
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)


if os.environ.get("INIEDIT_DEBUG"):
    enable_debug_logging()


__all__ = [
    "Document",
    "DocumentSnapshot",
    "EditorState",
    "IniEditError",
    "IniEditor",
    "SectionView",
    "enable_debug_logging",
    "parse",
    "serialize",
]
