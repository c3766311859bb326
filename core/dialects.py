# -*- coding: utf-8 -*-
"""
Project dialects.

A dialect bundles everything that differs between the projects LangKeeper
works on: how usages are found, where the locale table lives next to the
usage file, which bindings hold the columns, and how merged placeholders
are seeded.

    sis   structured `t('key')` extraction, one `lang.ts` with `cn` / `en`
    myth  `$lang['key']` lookups, `lang.cn.js` + `lang.en.js` each binding `$lang`
"""

import dataclasses
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import langkeeper_config as config
from langkeeper_enums import ExtractionMode, Locale, PlaceholderPolicy, TableLayout
from langkeeper_exceptions import UnknownModeError
from langkeeper_logger import get_logger
from models.diff_result import DiffResult
from models.locale_table import LocaleTable, UsageRecord
from core.patch_writer import NEW_TABLE_TEMPLATE, PatchWriter
from parser.core import extract_usages, parse_locale_table

logger = get_logger("core.dialects")


@dataclass(frozen=True)
class Dialect:
    """
    Preset describing one project convention.

    Attributes:
        name: Mode name used on the command line and in settings
        extraction: How usages are found
        layout: COMBINED (one file) or SPLIT (one file per locale)
        bindings: Binding name of each locale column
        table_files: File name per locale, resolved next to the usage file
        lookup_name: Index lookup name for PATTERN extraction
        placeholder_policy: How merged entries are seeded
        placeholder_suffixes: Per-locale suffix for KEY_WITH_SUFFIX
        new_file_template: Content of a table file created on save
    """
    name: str
    extraction: ExtractionMode
    layout: TableLayout
    bindings: Dict[Locale, str]
    table_files: Dict[Locale, str]
    lookup_name: Optional[str] = None
    placeholder_policy: PlaceholderPolicy = PlaceholderPolicy.KEY
    placeholder_suffixes: Dict[Locale, str] = field(default_factory=dict)
    new_file_template: str = NEW_TABLE_TEMPLATE

    def table_paths(self, usage_file) -> Dict[Locale, Path]:
        """Table file per locale, in the usage file's directory."""
        directory = Path(usage_file).resolve().parent
        return {locale: directory / name for locale, name in self.table_files.items()}

    def extract_usages(self, usage_file, problems: Optional[list] = None) -> List[UsageRecord]:
        return extract_usages(usage_file, self.extraction, self.lookup_name, problems)

    def parse_table(self, paths: Dict[Locale, Path], problems: Optional[list] = None) -> LocaleTable:
        return parse_locale_table(paths, self.layout, self.bindings, problems)

    def write_table(self, result: DiffResult, paths: Dict[Locale, Path]) -> List[Path]:
        return PatchWriter(self.bindings, self.new_file_template).write(result, paths)


DIALECTS: Dict[str, Dialect] = {
    "sis": Dialect(
        name="sis",
        extraction=ExtractionMode.STRUCTURED,
        layout=TableLayout.COMBINED,
        bindings=dict(config.COMBINED_BINDINGS),
        table_files={locale: config.COMBINED_TABLE_FILE for locale in Locale},
        placeholder_policy=PlaceholderPolicy.KEY_WITH_SUFFIX,
        placeholder_suffixes={Locale.EN: config.DEFAULT_PLACEHOLDER_SUFFIX},
    ),
    "myth": Dialect(
        name="myth",
        extraction=ExtractionMode.PATTERN,
        layout=TableLayout.SPLIT,
        bindings={locale: config.SPLIT_BINDING for locale in Locale},
        table_files=dict(config.SPLIT_TABLE_FILES),
        lookup_name=config.INDEX_LOOKUP_NAME,
        placeholder_policy=PlaceholderPolicy.KEY,
    ),
}


def get_dialect(name: Optional[str] = None, settings: Optional[dict] = None) -> Dialect:
    """
    Look up a dialect, applying placeholder overrides from settings.

    Args:
        name: Mode name; falls back to settings["default_mode"], then the built-in default
        settings: Loaded settings dict (see langkeeper_settings.load_settings)

    Raises:
        UnknownModeError: If the name matches no dialect
    """
    settings = settings or {}
    name = name or settings.get("default_mode") or config.DEFAULT_MODE
    dialect = DIALECTS.get(name)
    if dialect is None:
        raise UnknownModeError(f"Unknown mode '{name}'", mode=name)

    policy = settings.get("placeholder_policy")
    if policy:
        suffix = settings.get("placeholder_suffix", config.DEFAULT_PLACEHOLDER_SUFFIX)
        dialect = dataclasses.replace(
            dialect,
            placeholder_policy=PlaceholderPolicy(policy),
            placeholder_suffixes={Locale.EN: suffix},
        )
        logger.debug(f"Dialect '{name}' placeholder policy overridden: {policy}")
    return dialect
