# -*- coding: utf-8 -*-
"""
LangKeeper Session Model

Holds the state of one editing session:
- the usages extracted from the source file
- the working copy of the locale table (mutable)
- a snapshot of the table taken at load/reload time (diff baseline)

All operations are in-memory; nothing here touches the disk.
"""

from typing import Dict, List, Optional

from langkeeper_enums import Locale, PlaceholderPolicy
from langkeeper_exceptions import KeyExists, NotFound
from langkeeper_logger import get_logger
from models.locale_table import LocaleEntry, LocaleTable, UsageRecord
from models.diff_result import DiffResult
from core import diff_engine

logger = get_logger("models.session")


class SessionModel:
    """
    Usage list, working table and snapshot of a single extraction session.

    The snapshot and the working table never share entry objects, so
    editing one cannot leak into the other.
    """

    def __init__(
        self,
        usages: Optional[List[UsageRecord]] = None,
        table: Optional[LocaleTable] = None,
        placeholder_policy: PlaceholderPolicy = PlaceholderPolicy.KEY,
        placeholder_suffixes: Optional[Dict[Locale, str]] = None
    ):
        """
        Initialize a SessionModel.

        Args:
            usages: Extracted usages.
            table: Locale table as parsed from disk.
            placeholder_policy: How merged entries are seeded.
            placeholder_suffixes: Per-locale suffix for PlaceholderPolicy.KEY_WITH_SUFFIX.
        """
        self._placeholder_policy = PlaceholderPolicy(placeholder_policy)
        self._placeholder_suffixes = dict(placeholder_suffixes or {})
        self._usages: List[UsageRecord] = []
        self._table: Optional[LocaleTable] = None
        self._snapshot: Optional[LocaleTable] = None
        if table is not None:
            self.load(usages or [], table)

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def usages(self) -> List[UsageRecord]:
        return list(self._usages)

    @property
    def table(self) -> Optional[LocaleTable]:
        return self._table

    @property
    def snapshot(self) -> Optional[LocaleTable]:
        """Read-only baseline. Callers get a copy."""
        return self._snapshot.copy() if self._snapshot is not None else None

    @property
    def is_loaded(self) -> bool:
        return self._table is not None

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def load(self, usages: List[UsageRecord], table: LocaleTable):
        """Replace usages and working table; snapshot a deep copy of the table."""
        self._usages = list(usages)
        self._table = table
        self._snapshot = table.copy()
        logger.debug(f"Session loaded: {len(self._usages)} usages, {len(table)} entries")

    def reload(self, usages: List[UsageRecord], table: LocaleTable):
        """Discard unsaved edits and the old snapshot in favour of freshly parsed state."""
        self.load(usages, table)

    # =========================================================================
    # MUTATORS
    # =========================================================================

    def edit_entry(self, key: str, locale: Locale, value: str):
        """
        Set one locale value of an existing entry.

        Raises:
            NotFound: If no entry with `key` exists
        """
        entry = self._require_table().get(key)
        if entry is None:
            raise NotFound(f"No entry with key '{key}'", key=key)
        entry.set_value(Locale(locale), value)

    def add_entry(self, key: str, values: Optional[Dict[Locale, str]] = None):
        """
        Append a new entry.

        Raises:
            KeyExists: If an entry with `key` is already in the table
        """
        table = self._require_table()
        if key in table:
            raise KeyExists(f"Entry '{key}' already exists", key=key)
        table.add(LocaleEntry(key=key, values={Locale(k): v for k, v in (values or {}).items()}))

    def delete_usage(self, key: str):
        """Drop every usage record with this key (no-op if absent)."""
        self._usages = [u for u in self._usages if u.key != key]

    def delete_locale_entry(self, key: str):
        """Remove an entry from the working table (no-op if absent)."""
        self._require_table().remove(key)

    def merge_usages_into_table(self) -> int:
        """
        Add a placeholder entry for every used key missing from the table.

        Existing entries are left as they are. The usage list is emptied
        afterwards since its content now lives in the table.

        Returns:
            Number of entries added
        """
        table = self._require_table()
        added = 0
        for usage in self._usages:
            if usage.key in table:
                continue
            table.add(LocaleEntry(key=usage.key, values=self._placeholder_values(usage.key)))
            added += 1
        self._usages = []
        logger.debug(f"Merged usages into table: {added} added")
        return added

    def _placeholder_values(self, key: str) -> Dict[Locale, str]:
        if self._placeholder_policy == PlaceholderPolicy.KEY_WITH_SUFFIX:
            return {locale: key + self._placeholder_suffixes.get(locale, "") for locale in Locale}
        return {locale: key for locale in Locale}

    # =========================================================================
    # DIFF
    # =========================================================================

    def pending_diff(self) -> DiffResult:
        """Difference between the snapshot and the working table."""
        table = self._require_table()
        return diff_engine.diff(self._snapshot, table)

    def has_changes(self) -> bool:
        return self.is_loaded and not self.pending_diff().is_empty()

    def _require_table(self) -> LocaleTable:
        if self._table is None:
            raise NotFound("No locale table loaded")
        return self._table
