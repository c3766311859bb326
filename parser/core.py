# -*- coding: utf-8 -*-
"""
Parser Core Functions

Main entry points for extraction: they read the file, pick the strategy
for the mode and degrade every failure to an empty result.
"""

from pathlib import Path
from typing import Dict, List, Optional

from langkeeper_enums import ExtractionMode, Locale, TableLayout
from langkeeper_exceptions import FileOperationError, ParseFailure
from langkeeper_logger import get_logger
from langkeeper_core import read_source
from models.locale_table import LocaleTable, UsageRecord
from parser.table_parser import LocaleTableParser
from parser.usage_parser import PatternUsageParser, StructuredUsageParser

logger = get_logger("parser.core")


def extract_usages(
    file_path,
    mode: ExtractionMode,
    lookup_name: Optional[str] = None,
    problems: Optional[list] = None
) -> List[UsageRecord]:
    """
    Extract translation key usages from a source file.

    Args:
        file_path: Source file
        mode: STRUCTURED (syntax tree) or PATTERN (raw-text index lookups)
        lookup_name: Index lookup name for PATTERN mode
        problems: Optional list that collects reported errors

    Returns:
        Usages in file order, or an empty list if the file cannot be read or parsed
    """
    path = Path(file_path)
    try:
        source = read_source(path)
        if source is None:
            raise FileOperationError(f"File not found: {path}", file_path=str(path), operation="find")

        if ExtractionMode(mode) == ExtractionMode.PATTERN:
            parser = PatternUsageParser(lookup_name) if lookup_name else PatternUsageParser()
        else:
            parser = StructuredUsageParser()
        usages = parser.parse(source.text(), path)
    except (ParseFailure, FileOperationError) as e:
        logger.warning(f"Usage extraction failed for {path.name}, no usages: {e}")
        if problems is not None:
            problems.append(e)
        return []

    logger.info(f"Extracted {len(usages)} usages from {path.name}")
    return usages


def parse_locale_table(
    paths: Dict[Locale, Path],
    layout: TableLayout,
    bindings: Dict[Locale, str],
    problems: Optional[list] = None
) -> LocaleTable:
    """
    Parse the locale table backing a usage file.

    Args:
        paths: Table file per locale (one shared file in combined layout)
        layout: COMBINED or SPLIT
        bindings: Binding name per locale
        problems: Optional list that collects reported errors

    Returns:
        Merged LocaleTable (empty columns for missing or broken files)
    """
    table = LocaleTableParser(layout, bindings).parse(paths, problems)
    logger.info(f"Loaded locale table: {len(table)} entries ({TableLayout(layout).value})")
    return table
