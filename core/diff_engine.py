# -*- coding: utf-8 -*-
"""
Locale table diffing.

Compares a working table with the snapshot it was loaded from and sorts the
differences into pushes, per-locale edits and deletes.
"""

from langkeeper_enums import Locale
from langkeeper_logger import get_logger
from models.diff_result import DiffResult
from models.locale_table import LocaleTable

logger = get_logger("core.diff_engine")


def diff(snapshot: LocaleTable, current: LocaleTable) -> DiffResult:
    """
    Compare the working table against its snapshot.

    Keys are compared by exact string equality. Output lists follow the
    order of the table they are taken from; entries are copies.

    Args:
        snapshot: Table state at load/reload time
        current: Working table

    Returns:
        DiffResult with push/zh_edit/en_edit/delete lists
    """
    result = DiffResult()

    for entry in current:
        before = snapshot.get(entry.key)
        if before is None:
            result.push.append(entry.copy())
            continue
        if entry.value(Locale.ZH) != before.value(Locale.ZH):
            result.zh_edit.append(entry.copy())
        if entry.value(Locale.EN) != before.value(Locale.EN):
            result.en_edit.append(entry.copy())

    for entry in snapshot:
        if entry.key not in current:
            result.delete.append(entry.copy())

    logger.debug(f"Diff computed: {result.summary()}")
    return result
