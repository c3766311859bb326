# -*- coding: utf-8 -*-
"""
LangKeeper Parser Package

Extraction of translation key usages and locale tables from
JavaScript / TypeScript / Vue sources, using the Strategy pattern.
"""

from parser.base import BaseUsageParser, UsageStrategy
from parser.usage_parser import StructuredUsageParser, PatternUsageParser
from parser.table_parser import LocaleTableParser
from parser.patterns import UsagePatterns

from parser.core import (
    extract_usages,
    parse_locale_table,
)

__all__ = [
    'BaseUsageParser',
    'UsageStrategy',
    'StructuredUsageParser',
    'PatternUsageParser',
    'LocaleTableParser',
    'UsagePatterns',
    'extract_usages',
    'parse_locale_table',
]
