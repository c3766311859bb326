from pathlib import Path

from langkeeper_enums import Locale, ScriptDialect

VERSION = "0.4.0"
DEFAULT_UI_LANGUAGE = "en"  # Supported: "en" (English), "zh" (Chinese)
DEFAULT_MODE = "sis"

SETTINGS_DIR = Path.home() / ".langkeeper"
SETTINGS_FILE_PATH = SETTINGS_DIR / "settings.json"

# Structured extraction: callee names that count as a translation lookup
TRANSLATE_CALLEE_NAMES = frozenset({"t", "$t"})

# Pattern extraction: `$lang['key']`
INDEX_LOOKUP_NAME = "$lang"

# Combined layout: one file next to the usage file, one binding per locale
COMBINED_TABLE_FILE = "lang.ts"
COMBINED_BINDINGS = {
    Locale.ZH: "cn",
    Locale.EN: "en",
}

# Split layout: one file per locale, same binding name in each
SPLIT_TABLE_FILES = {
    Locale.ZH: "lang.cn.js",
    Locale.EN: "lang.en.js",
}
SPLIT_BINDING = "$lang"

DEFAULT_PLACEHOLDER_SUFFIX = "_en"

DEFAULT_INDENT = "  "
DEFAULT_QUOTE = '"'

SCRIPT_EXTENSIONS = {
    ".js": ScriptDialect.JAVASCRIPT,
    ".jsx": ScriptDialect.JAVASCRIPT,
    ".mjs": ScriptDialect.JAVASCRIPT,
    ".cjs": ScriptDialect.JAVASCRIPT,
    ".ts": ScriptDialect.TYPESCRIPT,
    ".mts": ScriptDialect.TYPESCRIPT,
    ".cts": ScriptDialect.TYPESCRIPT,
    ".tsx": ScriptDialect.TSX,
    ".vue": ScriptDialect.VUE,
}

__all__ = [
    "VERSION", "DEFAULT_UI_LANGUAGE", "DEFAULT_MODE",
    "SETTINGS_DIR", "SETTINGS_FILE_PATH",
    "TRANSLATE_CALLEE_NAMES", "INDEX_LOOKUP_NAME",
    "COMBINED_TABLE_FILE", "COMBINED_BINDINGS",
    "SPLIT_TABLE_FILES", "SPLIT_BINDING",
    "DEFAULT_PLACEHOLDER_SUFFIX", "DEFAULT_INDENT", "DEFAULT_QUOTE",
    "SCRIPT_EXTENSIONS",
]

# Import logger at the end to avoid circular imports
from langkeeper_logger import get_logger
_logger = get_logger("config")
_logger.debug("langkeeper_config.py loaded")
