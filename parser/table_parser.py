# -*- coding: utf-8 -*-
"""
Locale Table Parser

Reads locale definition files into a LocaleTable. A locale column is the
object literal bound to a fixed name; each string-valued property of that
object is one key of the column.

Two layouts are supported:
    combined:   lang.ts
                    const cn = { "hello": "你好" }
                    const en = { "hello": "Hi" }

    split:      lang.cn.js  ->  const $lang = { "hello": "你好" }
                lang.en.js  ->  const $lang = { "hello": "Hi" }

A missing file yields an empty column. A file that cannot be read or
parsed is reported and also yields empty columns, without affecting
columns that live in other files.
"""

from pathlib import Path
from typing import Dict, List, Optional

from langkeeper_core import read_source
from langkeeper_enums import Locale, ScriptDialect, TableLayout
from langkeeper_exceptions import FileOperationError, ParseFailure
from langkeeper_logger import get_logger
from models.locale_table import LocaleEntry, LocaleTable
from parser.syntax import binding_object, find_binding_declarators, object_properties, parse_script
from parser.usage_parser import script_dialect_for

logger = get_logger("parser.table")


def table_script_dialect(path: Path) -> ScriptDialect:
    """Locale files are plain scripts; .tsx stays TSX, everything else by extension."""
    dialect = script_dialect_for(path)
    return ScriptDialect.JAVASCRIPT if dialect == ScriptDialect.VUE else dialect


def column_object(root, data: bytes, binding: str, path=None):
    """
    The object literal holding a locale column.

    Returns the first top-level declaration of `binding` initialised with an
    object literal, or None when the file has no such declaration.
    """
    declarators = find_binding_declarators(root, binding, data)
    if not declarators:
        logger.debug(f"No binding '{binding}' in {path}")
    for declarator in declarators:
        obj = binding_object(declarator)
        if obj is not None:
            return obj
        logger.warning(f"Binding '{binding}' in {path} is not an object literal; ignored")
    return None


def group_by_path(paths: Dict[Locale, Path]) -> Dict[Path, List[Locale]]:
    """Locales per file, in locale order (combined layout maps both to one file)."""
    grouped: Dict[Path, List[Locale]] = {}
    for locale in Locale:
        path = paths.get(locale)
        if path is None:
            continue
        grouped.setdefault(Path(path), []).append(locale)
    return grouped


class LocaleTableParser:
    """
    Parser for locale definition files.

    Args:
        layout: Layout tag attached to the resulting table
        bindings: Binding name per locale (same name for every locale in split layout)
    """

    def __init__(self, layout: TableLayout, bindings: Dict[Locale, str]):
        self._layout = TableLayout(layout)
        self._bindings = dict(bindings)

    def parse(self, paths: Dict[Locale, Path], problems: Optional[list] = None) -> LocaleTable:
        """
        Parse the table file(s) and merge the columns.

        Args:
            paths: File per locale
            problems: Optional list that collects reported errors

        Returns:
            LocaleTable with the union of keys across columns
        """
        columns: Dict[Locale, Dict[str, str]] = {locale: {} for locale in Locale}

        for path, locales in group_by_path(paths).items():
            try:
                parsed = self.parse_file(path, locales)
            except (ParseFailure, FileOperationError) as e:
                logger.warning(f"Locale file {path} skipped: {e}")
                if problems is not None:
                    problems.append(e)
                continue
            for locale, column in parsed.items():
                columns[locale] = column

        ordered_paths = tuple(group_by_path(paths))
        return self.merge(columns, ordered_paths)

    def parse_file(self, path: Path, locales: List[Locale]) -> Dict[Locale, Dict[str, str]]:
        """
        Read the columns stored in one file.

        Returns:
            Column (key -> value) per locale; empty columns if the file does not exist

        Raises:
            ParseFailure: If the file has syntax errors
            FileOperationError: If the file cannot be read
        """
        source = read_source(path)
        if source is None:
            logger.info(f"Locale file not found, starting empty: {path}")
            return {locale: {} for locale in locales}

        tree = parse_script(source.data, table_script_dialect(path), path)
        root = tree.root_node
        result = {}
        for locale in locales:
            result[locale] = self._read_column(root, source.data, self._bindings[locale], path)
            logger.debug(f"{Path(path).name} [{locale.value}]: {len(result[locale])} keys")
        return result

    def _read_column(self, root, data: bytes, binding: str, path: Path) -> Dict[str, str]:
        column: Dict[str, str] = {}
        obj = column_object(root, data, binding, path)
        if obj is None:
            return column
        for slot in object_properties(obj, data):
            if slot.key is None or slot.value is None:
                continue
            column[slot.key] = slot.value
        return column

    def merge(self, columns: Dict[Locale, Dict[str, str]], paths) -> LocaleTable:
        """Union of keys across columns; zh keys first, then keys only the other columns have."""
        entries: Dict[str, LocaleEntry] = {}
        for locale in Locale:
            for key in columns.get(locale, {}):
                if key not in entries:
                    entries[key] = LocaleEntry(
                        key=key,
                        values={loc: columns.get(loc, {}).get(key, "") for loc in Locale},
                    )
        return LocaleTable(self._layout, paths, list(entries.values()))
