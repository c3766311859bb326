# -*- coding: utf-8 -*-
"""
Usage Parsers

Strategies that find the translation keys a source file references:

1. StructuredUsageParser - parses scripts into a syntax tree and collects
   calls to `t(...)` / `$t(...)` (bare or as a member, e.g. `this.$t(...)`)
   whose first argument is a string literal. Vue components additionally
   get their template scanned with a regex.

2. PatternUsageParser - scans raw text for index lookups such as
   `$lang['key']`, for projects that look strings up by bracket access.
"""

from pathlib import Path
from typing import FrozenSet, List, Optional

import langkeeper_config as config
from langkeeper_enums import ScriptDialect
from langkeeper_logger import get_logger
from models.locale_table import UsageRecord
from parser.base import BaseUsageParser
from parser.patterns import UsagePatterns
from parser.syntax import node_text, parse_script, significant_children, string_literal_value, walk

logger = get_logger("parser.usage")


def script_dialect_for(file_path) -> ScriptDialect:
    """Pick the dialect from the file extension (JavaScript when unknown)."""
    return config.SCRIPT_EXTENSIONS.get(Path(file_path).suffix.lower(), ScriptDialect.JAVASCRIPT)


def _component_script_dialect(attributes: str) -> ScriptDialect:
    match = UsagePatterns.LANG_ATTRIBUTE.search(attributes or '')
    lang = match.group(1).lower() if match else ''
    if lang == 'ts':
        return ScriptDialect.TYPESCRIPT
    if lang == 'tsx':
        return ScriptDialect.TSX
    return ScriptDialect.JAVASCRIPT


class StructuredUsageParser(BaseUsageParser):
    """
    Syntax-tree based extractor for scripts, TSX and Vue components.

    Calls whose first argument is not a string literal (variables,
    concatenations, template strings) are skipped, since their key cannot
    be known statically.
    """

    def __init__(self, callee_names: Optional[FrozenSet[str]] = None):
        super().__init__()
        self._callee_names = frozenset(callee_names or config.TRANSLATE_CALLEE_NAMES)

    def parse(self, text: str, file_path: Path) -> List[UsageRecord]:
        """
        Extract usages.

        Raises:
            ParseFailure: If a script (or component script block) has syntax errors
        """
        self.reset()
        dialect = script_dialect_for(file_path)
        if dialect == ScriptDialect.VUE:
            self._parse_component(text, file_path)
        else:
            self._scan_script(text.encode('utf-8'), dialect, file_path, block_start=0)

        records = self._records(file_path)
        logger.debug(f"{Path(file_path).name}: {len(records)} usages ({dialect.value})")
        return records

    def _parse_component(self, text: str, file_path: Path):
        """Scan the template with a regex and parse every script block."""
        region = UsagePatterns.template_region(text)
        if region:
            start, end = region
            for match in UsagePatterns.TEMPLATE_CALL.finditer(text, start, end):
                self._add_hit((match.start(), 0), match.group(2))

        for match in UsagePatterns.SCRIPT_BLOCK.finditer(text):
            if region and region[0] <= match.start() < region[1]:
                continue
            content = match.group(2)
            if not content.strip():
                continue
            self._scan_script(
                content.encode('utf-8'),
                _component_script_dialect(match.group(1)),
                file_path,
                block_start=match.start(2),
            )

    def _scan_script(self, source: bytes, dialect: ScriptDialect, file_path: Path, block_start: int):
        tree = parse_script(source, dialect, file_path)
        for node in walk(tree.root_node):
            if node.type != 'call_expression':
                continue
            if not self._is_translate_callee(node.child_by_field_name('function'), source):
                continue
            arguments = node.child_by_field_name('arguments')
            if arguments is None or arguments.type != 'arguments':
                continue
            params = significant_children(arguments)
            if not params:
                continue
            key = string_literal_value(params[0], source)
            if key is None:
                logger.debug(f"Skipping non-literal key at {Path(file_path).name}:{node.start_point[0] + 1}")
                continue
            self._add_hit((block_start, node.start_byte), key)

    def _is_translate_callee(self, callee, source: bytes) -> bool:
        if callee is None:
            return False
        if callee.type == 'identifier':
            return node_text(callee, source) in self._callee_names
        if callee.type == 'member_expression':
            prop = callee.child_by_field_name('property')
            return prop is not None and node_text(prop, source) in self._callee_names
        return False


class PatternUsageParser(BaseUsageParser):
    """Raw-text extractor for `<name>['key']` lookups."""

    def __init__(self, lookup_name: str = config.INDEX_LOOKUP_NAME):
        super().__init__()
        self._pattern = UsagePatterns.index_lookup(lookup_name)

    def parse(self, text: str, file_path: Path) -> List[UsageRecord]:
        self.reset()
        for match in self._pattern.finditer(text):
            key = match.group(2)
            if not key:
                continue
            self._add_hit((match.start(),), key)
        records = self._records(file_path)
        logger.debug(f"{Path(file_path).name}: {len(records)} usages (pattern)")
        return records
