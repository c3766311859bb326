# -*- coding: utf-8 -*-
"""
DiffResult Model

Per-locale-column change set between the session snapshot and the working table.
"""

from dataclasses import dataclass, field
from typing import List

from langkeeper_enums import Locale
from models.locale_table import LocaleEntry


@dataclass
class DiffResult:
    """
    Changes to write back into the locale table source.

    Attributes:
        push: Entries new in the working table (inserted into every column).
        zh_edit: Entries whose zh value changed.
        en_edit: Entries whose en value changed.
        delete: Entries removed from the working table (removed from every column).

    `push` and `delete` never share a key. An entry may sit in both
    `zh_edit` and `en_edit`.
    """
    push: List[LocaleEntry] = field(default_factory=list)
    zh_edit: List[LocaleEntry] = field(default_factory=list)
    en_edit: List[LocaleEntry] = field(default_factory=list)
    delete: List[LocaleEntry] = field(default_factory=list)

    def edits_for(self, locale: Locale) -> List[LocaleEntry]:
        """Edits belonging to one locale column."""
        return self.zh_edit if Locale(locale) == Locale.ZH else self.en_edit

    def is_empty(self) -> bool:
        return not (self.push or self.zh_edit or self.en_edit or self.delete)

    def summary(self) -> str:
        return (
            f"push={len(self.push)}, zh_edit={len(self.zh_edit)}, "
            f"en_edit={len(self.en_edit)}, delete={len(self.delete)}"
        )
