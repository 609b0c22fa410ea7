"""In-memory model of an INI document.

A :class:`Document` is an ordered sequence of :class:`Section` objects and
each section an ordered sequence of :class:`Entry` objects.  Names are
matched case-insensitively but keep the casing they were first created
with.  Order is tracked explicitly with lists; the dictionaries only serve
as lookup indexes.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from .errors import (
    DuplicateSectionError,
    InvalidNameError,
    KeyNotFoundError,
    SectionNotFoundError,
)

_LINE_BREAKS = ("\n", "\r")


def fold(name: str) -> str:
    """Return the lookup form of a section name or key."""
    return name.casefold()


@dataclass(slots=True)
class Entry:
    key: str
    value: str


@dataclass(frozen=True, slots=True)
class SectionView:
    """Read-only view of a section handed out to callers."""

    name: str
    entries: tuple[tuple[str, str], ...]

    def as_dict(self) -> dict[str, str]:
        return dict(self.entries)


DocumentSnapshot = tuple[SectionView, ...]


class Section:
    def __init__(self, name: str) -> None:
        self.name = name
        self._entries: list[Entry] = []
        self._index: dict[str, Entry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and fold(key) in self._index

    def get(self, key: str) -> Entry | None:
        return self._index.get(fold(key))

    def put(self, key: str, value: str) -> None:
        entry = self._index.get(fold(key))
        if entry is None:
            entry = Entry(key, value)
            self._entries.append(entry)
            self._index[fold(key)] = entry
        else:
            entry.value = value

    def pop(self, key: str) -> Entry:
        entry = self._index.pop(fold(key))
        self._entries.remove(entry)
        return entry

    def clear(self) -> None:
        self._entries.clear()
        self._index.clear()

    def view(self) -> SectionView:
        return SectionView(self.name, tuple((e.key, e.value) for e in self._entries))

    def __repr__(self) -> str:
        return f"Section({self.name!r}, {len(self._entries)} entries)"


class Document:
    """Ordered collection of sections with a dirty flag."""

    def __init__(self) -> None:
        self._sections: list[Section] = []
        self._index: dict[str, Section] = {}
        self.dirty = False

    # ----- read-only access -----

    def __len__(self) -> int:
        return len(self._sections)

    def __iter__(self) -> Iterator[Section]:
        return iter(self._sections)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and fold(name) in self._index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Document):
            return NotImplemented
        return self.snapshot() == other.snapshot()

    def __repr__(self) -> str:
        names = ", ".join(repr(s.name) for s in self._sections)
        return f"Document([{names}], dirty={self.dirty})"

    def sections(self) -> list[str]:
        return [s.name for s in self._sections]

    def entries(self, section: str) -> list[tuple[str, str]]:
        return list(self._require(section).view().entries)

    def get(self, section: str, key: str, default: str | None = None) -> str | None:
        sec = self._index.get(fold(section))
        if sec is None:
            return default
        entry = sec.get(key)
        return default if entry is None else entry.value

    def snapshot(self) -> DocumentSnapshot:
        return tuple(s.view() for s in self._sections)

    # ----- structural operations -----

    def add_section(self, name: str) -> None:
        if "[" in name or "]" in name or any(c in name for c in _LINE_BREAKS):
            raise InvalidNameError(f"invalid section name: {name!r}")
        if fold(name) in self._index:
            raise DuplicateSectionError(f"section [{name}] already exists")
        self._append(name)
        self.dirty = True

    def remove_section(self, name: str) -> None:
        section = self._require(name)
        self._sections.remove(section)
        del self._index[fold(name)]
        self.dirty = True

    def set_entry(self, section: str, key: str, value: str) -> None:
        sec = self._require(section)
        key = key.strip()
        if not key or "=" in key or any(c in key for c in _LINE_BREAKS):
            raise InvalidNameError(f"invalid key: {key!r}")
        sec.put(key, value.strip())
        self.dirty = True

    def remove_entry(self, section: str, key: str) -> None:
        sec = self._require(section)
        if key not in sec:
            raise KeyNotFoundError(f"{key!r} not found in [{sec.name}]")
        sec.pop(key)
        self.dirty = True

    # ----- codec support -----

    def open_section(self, name: str) -> Section:
        """Return section *name*, emptied, creating it when absent.

        Used while parsing: a repeated header replaces the entries collected
        so far for that section but keeps its first-seen casing and position.
        """
        section = self._index.get(fold(name))
        if section is None:
            return self._append(name)
        section.clear()
        return section

    def _append(self, name: str) -> Section:
        section = Section(name)
        self._sections.append(section)
        self._index[fold(name)] = section
        return section

    def _require(self, name: str) -> Section:
        try:
            return self._index[fold(name)]
        except KeyError:
            raise SectionNotFoundError(f"section [{name}] not found") from None


__all__ = [
    "Document",
    "DocumentSnapshot",
    "Entry",
    "Section",
    "SectionView",
    "fold",
]
