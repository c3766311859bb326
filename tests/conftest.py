# -*- coding: utf-8 -*-
"""
LangKeeper Test Fixtures

Shared fixtures for all tests.
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


# =============================================================================
# SOURCE FIXTURES
# =============================================================================

COMBINED_TABLE = (
    '// generated by hand\n'
    'const cn = {\n'
    '  "hello": "你好",\n'
    '  "bye": "再见", // farewell\n'
    '};\n'
    '\n'
    'const en = {\n'
    '  "hello": "Hi",\n'
    '  "bye": "Bye",\n'
    '};\n'
    '\n'
    'export default { cn, en };\n'
)

USAGE_SOURCE = (
    "import { t } from './i18n';\n"
    "\n"
    "const greeting = t('hello');\n"
    "function leave(obj) {\n"
    "  return obj.$t('bye');\n"
    "}\n"
)


@pytest.fixture
def usage_file(tmp_path) -> Path:
    """Script calling t('hello') and obj.$t('bye')."""
    path = tmp_path / "page.js"
    path.write_text(USAGE_SOURCE, encoding='utf-8')
    return path


@pytest.fixture
def combined_table_file(tmp_path) -> Path:
    """lang.ts with `cn` and `en` bindings next to the usage file."""
    path = tmp_path / "lang.ts"
    path.write_text(COMBINED_TABLE, encoding='utf-8')
    return path


@pytest.fixture
def split_project(tmp_path) -> Path:
    """Pattern-mode usage file with only the zh table present."""
    usage = tmp_path / "page.js"
    usage.write_text("const title = $lang['k'];\nconst sub = $lang[\"other\"];\n", encoding='utf-8')
    (tmp_path / "lang.cn.js").write_text('const $lang = {\n  "k": "v",\n};\n', encoding='utf-8')
    return usage


# =============================================================================
# DIALECT / TABLE FIXTURES
# =============================================================================

@pytest.fixture
def sis_dialect():
    from core.dialects import get_dialect
    return get_dialect("sis")


@pytest.fixture
def myth_dialect():
    from core.dialects import get_dialect
    return get_dialect("myth")


@pytest.fixture
def make_table():
    """Build a LocaleTable from {key: (zh, en)}."""
    from langkeeper_enums import Locale, TableLayout
    from models.locale_table import LocaleEntry, LocaleTable

    def _make(rows, layout=TableLayout.COMBINED):
        entries = [
            LocaleEntry(key=key, values={Locale.ZH: zh, Locale.EN: en})
            for key, (zh, en) in rows.items()
        ]
        return LocaleTable(layout, (), entries)

    return _make


# =============================================================================
# CONTROLLER FIXTURES
# =============================================================================

@pytest.fixture
def session_controller():
    """SessionController with built-in defaults."""
    from controllers.session_controller import SessionController
    return SessionController({})


@pytest.fixture(autouse=True)
def english_reports():
    """Reports are asserted in English."""
    import locales
    previous = locales.get_language()
    locales.set_language("en")
    yield
    locales.set_language(previous)
