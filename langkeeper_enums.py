"""
LangKeeper Enum Definitions

Type-safe enums for locales, extraction modes, table layouts and merge policies.
"""

from enum import Enum


class Locale(str, Enum):
    """Locale columns of a translation table"""
    ZH = 'zh'
    EN = 'en'


class ExtractionMode(str, Enum):
    """How translation key usages are found in a source file"""
    STRUCTURED = 'structured'
    PATTERN = 'pattern'


class TableLayout(str, Enum):
    """On-disk layout of the locale table"""
    COMBINED = 'combined'
    SPLIT = 'split'


class PlaceholderPolicy(str, Enum):
    """Seed values for entries created by merging usages into the table"""
    KEY = 'key'
    KEY_WITH_SUFFIX = 'key_suffix'


class ScriptDialect(str, Enum):
    """Source dialects understood by the structured extractor"""
    JAVASCRIPT = 'javascript'
    TYPESCRIPT = 'typescript'
    TSX = 'tsx'
    VUE = 'vue'
