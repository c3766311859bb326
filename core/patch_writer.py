# -*- coding: utf-8 -*-
"""
Locale table writer.

Applies a DiffResult to the locale table file(s) on disk. Every file is
re-read and re-parsed at save time, the changes are spliced into the
original bytes, and only then is anything written. Writes go through
temp-file-and-replace; if one file fails, files already written in this
save are restored so the table is never left half updated.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Set

from langkeeper_core import SourceText, read_source, restore_source, write_source
from langkeeper_enums import Locale
from langkeeper_exceptions import MissingPath, ParseFailure, WriteFailure
from langkeeper_logger import get_logger
from models.diff_result import DiffResult
from core.object_patcher import ObjectLiteralPatcher, SourceEdit, apply_edits
from parser.syntax import parse_script
from parser.table_parser import column_object, group_by_path, table_script_dialect

logger = get_logger("core.patch_writer")

NEW_TABLE_TEMPLATE = "const {binding} = {{}};\n"


@dataclass
class ColumnChanges:
    """What one locale column has to absorb."""
    upserts: Dict[str, str] = field(default_factory=dict)
    deletes: Set[str] = field(default_factory=set)
    edited: Set[str] = field(default_factory=set)

    def is_empty(self) -> bool:
        return not (self.upserts or self.deletes)

    @classmethod
    def from_diff(cls, result: DiffResult, locale: Locale) -> 'ColumnChanges':
        changes = cls()
        for entry in result.push:
            changes.upserts[entry.key] = entry.value(locale)
        for entry in result.edits_for(locale):
            changes.upserts[entry.key] = entry.value(locale)
            changes.edited.add(entry.key)
        changes.deletes = {entry.key for entry in result.delete}
        return changes


@dataclass
class FilePlan:
    """Planned new content for one table file."""
    path: Path
    original: Optional[SourceText]
    updated: bytes

    @property
    def changed(self) -> bool:
        before = self.original.raw() if self.original is not None else None
        return before != self.updated


class PatchWriter:
    """
    Writes diffs into locale table files.

    Args:
        bindings: Binding name per locale
        template: Content of a new table file, formatted with `binding`
    """

    def __init__(self, bindings: Dict[Locale, str], template: str = NEW_TABLE_TEMPLATE):
        self._bindings = dict(bindings)
        self._template = template

    def write(self, result: DiffResult, paths: Dict[Locale, Path]) -> List[Path]:
        """
        Apply a diff to the table files.

        Args:
            result: Changes between snapshot and working table
            paths: Table file per locale

        Returns:
            Files that were rewritten (files whose content did not change are not touched)

        Raises:
            MissingPath: If no table path is known
            ParseFailure: If a table file cannot be parsed or lacks a binding that has to grow
            FileOperationError: If a table file cannot be read
            WriteFailure: If writing fails (earlier writes of this call are rolled back)
        """
        if not paths:
            raise MissingPath("No locale table path to write to")

        plans = []
        for path, locales in group_by_path(paths).items():
            plan = self.plan_file(path, locales, result)
            if plan is not None and plan.changed:
                plans.append(plan)

        self._commit(plans)
        written = [plan.path for plan in plans]
        logger.info(f"Saved {len(written)} locale file(s) ({result.summary()})")
        return written

    def plan_file(self, path: Path, locales: List[Locale], result: DiffResult) -> Optional[FilePlan]:
        """New content for one file, or None if it has nothing to change."""
        changes = {locale: ColumnChanges.from_diff(result, locale) for locale in locales}
        if all(c.is_empty() for c in changes.values()):
            return None

        original = read_source(path)
        if original is None:
            if not any(c.upserts for c in changes.values()):
                logger.debug(f"{path} does not exist, nothing to delete")
                return None
            base = SourceText(path=Path(path), data=self.new_file_source(locales).encode("utf-8"))
            logger.info(f"Creating locale file {path}")
        else:
            base = original

        tree = parse_script(base.data, table_script_dialect(path), path)
        edits: List[SourceEdit] = []
        for locale in locales:
            column = changes[locale]
            if column.is_empty():
                continue
            binding = self._bindings[locale]
            obj = column_object(tree.root_node, base.data, binding, path)
            if obj is None:
                if column.upserts:
                    raise ParseFailure(f"No object literal bound to '{binding}' in {path}", file_path=str(path))
                continue
            patcher = ObjectLiteralPatcher(obj, base.data, base.newline, path)
            edits.extend(patcher.plan(column.upserts, column.deletes))
            for key in patcher.appended_keys:
                if key in column.edited:
                    logger.warning(f"'{key}' no longer in {Path(path).name} [{locale.value}], appending it")

        data = apply_edits(base.data, edits)
        updated = SourceText(path=Path(path), data=data, bom=base.bom).raw()
        return FilePlan(path=Path(path), original=original, updated=updated)

    def new_file_source(self, locales: List[Locale]) -> str:
        """Skeleton declaring an empty object per binding stored in the file."""
        bindings = []
        for locale in locales:
            if self._bindings[locale] not in bindings:
                bindings.append(self._bindings[locale])
        return "".join(self._template.format(binding=b) for b in bindings)

    def _commit(self, plans: List[FilePlan]):
        written: List[FilePlan] = []
        try:
            for plan in plans:
                write_source(plan.path, plan.updated)
                written.append(plan)
        except WriteFailure:
            for plan in reversed(written):
                restore_source(plan.path, plan.original)
            raise
