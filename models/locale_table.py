# -*- coding: utf-8 -*-
"""
LangKeeper Locale Table Models

Value types shared by the extractor, the table parser, the session model
and the patch writer:
- UsageRecord: one translation key reference found in a source file
- LocaleEntry: one key with its value per locale column
- LocaleTable: ordered key -> LocaleEntry mapping tagged with its layout and paths
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from langkeeper_enums import Locale, TableLayout


@dataclass(frozen=True)
class UsageRecord:
    """
    A translation key referenced in application source code.

    Attributes:
        key (str): The literal key passed to the lookup.
        source_file (Path): File the usage was found in.
    """
    key: str
    source_file: Path


@dataclass
class LocaleEntry:
    """
    One key of a locale table and its value per locale.

    A locale missing from `values` reads as an empty string.
    """
    key: str
    values: Dict[Locale, str] = field(default_factory=dict)

    def value(self, locale: Locale) -> str:
        """Get the value for a locale ('' when absent)."""
        return self.values.get(Locale(locale), "") or ""

    def set_value(self, locale: Locale, value: str):
        self.values[Locale(locale)] = value

    def copy(self) -> 'LocaleEntry':
        return LocaleEntry(key=self.key, values=dict(self.values))

    def as_row(self) -> Dict[str, str]:
        """Flat row for display: {'key': ..., 'zh': ..., 'en': ...}."""
        row = {'key': self.key}
        for locale in Locale:
            row[locale.value] = self.value(locale)
        return row

    def __eq__(self, other):
        if not isinstance(other, LocaleEntry):
            return NotImplemented
        return self.key == other.key and all(
            self.value(locale) == other.value(locale) for locale in Locale
        )


class LocaleTable:
    """
    Ordered mapping from key to LocaleEntry.

    Keys are unique and insertion order is kept, since it decides where
    entries land when the table is written back.
    """

    def __init__(
        self,
        layout: TableLayout,
        paths: Tuple[Path, ...] = (),
        entries: Optional[List[LocaleEntry]] = None
    ):
        """
        Initialize a LocaleTable.

        Args:
            layout: Storage layout the table was parsed from.
            paths: Table file path(s), in locale order.
            entries: Initial entries; a later duplicate key replaces the earlier value.
        """
        self._layout = TableLayout(layout)
        self._paths = tuple(Path(p) for p in paths)
        self._entries: Dict[str, LocaleEntry] = {}
        for entry in entries or []:
            self._entries[entry.key] = entry

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def layout(self) -> TableLayout:
        return self._layout

    @property
    def paths(self) -> Tuple[Path, ...]:
        return self._paths

    def keys(self) -> List[str]:
        return list(self._entries)

    def entries(self) -> List[LocaleEntry]:
        return list(self._entries.values())

    def get(self, key: str) -> Optional[LocaleEntry]:
        return self._entries.get(key)

    def __contains__(self, key) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[LocaleEntry]:
        return iter(list(self._entries.values()))

    def __len__(self) -> int:
        return len(self._entries)

    # =========================================================================
    # MUTATION
    # =========================================================================

    def add(self, entry: LocaleEntry):
        """Append an entry. An existing key keeps its position and takes the new values."""
        self._entries[entry.key] = entry

    def remove(self, key: str) -> bool:
        """Remove an entry. Returns True if it was present."""
        return self._entries.pop(key, None) is not None

    def copy(self) -> 'LocaleTable':
        """Deep copy: entries of the copy share nothing with this table."""
        return LocaleTable(self._layout, self._paths, [e.copy() for e in self._entries.values()])

    def rows(self) -> List[Dict[str, str]]:
        return [entry.as_row() for entry in self._entries.values()]

    def __eq__(self, other):
        if not isinstance(other, LocaleTable):
            return NotImplemented
        return (
            self._layout == other._layout
            and self._paths == other._paths
            and list(self._entries.values()) == list(other._entries.values())
        )

    def __repr__(self):
        return f"LocaleTable({self._layout.value}, {len(self._entries)} entries, paths={[str(p) for p in self._paths]})"
