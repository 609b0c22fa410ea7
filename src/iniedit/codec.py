"""Line oriented INI reader and writer.

:func:`parse` accepts any text and never fails; lines it does not
understand are dropped.  Comments and blank lines are not kept, so
``serialize(parse(text))`` only reproduces the sections and entries of
*text*.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .document import Document

logger = logging.getLogger(__name__)

COMMENT_PREFIX = ";"


def _lines(text: str) -> list[str]:
    # CR, LF and CRLF only; str.splitlines() also splits on \f, \v and \x85
    return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")


def parse(text: str) -> Document:
    doc = Document()
    current = None
    for raw in _lines(text):
        line = raw.strip()
        if not line or line.startswith(COMMENT_PREFIX):
            continue
        if line.startswith("[") and line.endswith("]"):
            current = doc.open_section(line[1:-1])
        elif current is not None and "=" in line:
            key, _, value = line.partition("=")
            current.put(key.strip(), value.strip())
    doc.dirty = False
    return doc


def serialize(document: Document) -> str:
    lines: list[str] = []
    for section in document:
        lines.append(f"[{section.name}]")
        lines.extend(f"{entry.key}={entry.value}" for entry in section)
        lines.append("")
    return "".join(f"{line}\n" for line in lines)


def read_document(path: Path) -> Document:
    """Parse the file at *path*.

    ``OSError`` and ``UnicodeDecodeError`` propagate to the caller.
    """
    text = Path(path).read_text(encoding="utf-8-sig")
    doc = parse(text)
    logger.debug("parsed %s: %d sections", path, len(doc))
    return doc


def write_document(path: Path, document: Document) -> None:
    """Write *document* to *path* through a temporary sibling file."""
    path = Path(path)
    tmp = path.with_suffix(path.suffix + ".tmp")
    try:
        with tmp.open("w", encoding="utf-8", newline="") as fh:
            fh.write(serialize(document))
        tmp.replace(path)
    except (OSError, UnicodeError):
        tmp.unlink(missing_ok=True)
        raise


__all__ = ["parse", "serialize", "read_document", "write_document"]
