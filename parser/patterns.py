# -*- coding: utf-8 -*-
"""
Usage Regex Patterns

Centralized regex patterns for the parts of a source file that are scanned
as raw text rather than parsed into a syntax tree.
"""

import re


class UsagePatterns:
    """
    Collection of regex patterns for finding translation keys in raw text.

    Organized by category:
    - Component blocks (Vue single-file component sections)
    - Markup lookups (`t('key')` / `$t("key")` inside templates)
    - Index lookups (`$lang['key']` style bracket access)
    """

    # =========================================================================
    # COMPONENT BLOCKS
    # =========================================================================

    TEMPLATE_OPEN = re.compile(r'<template\b[^>]*>', re.IGNORECASE)
    TEMPLATE_CLOSE = '</template>'
    SCRIPT_BLOCK = re.compile(r'<script\b([^>]*)>(.*?)</script\s*>', re.IGNORECASE | re.DOTALL)
    LANG_ATTRIBUTE = re.compile(r'\blang\s*=\s*["\']?([A-Za-z]+)["\']?', re.IGNORECASE)

    # =========================================================================
    # MARKUP LOOKUPS
    # =========================================================================

    # t('key') or $t("key"), not part of a longer identifier such as `format(`
    TEMPLATE_CALL = re.compile(r'''(?<![\w$])\$?t\(\s*(['"])([^'"]+)\1\s*[,)]''')

    # =========================================================================
    # INDEX LOOKUPS
    # =========================================================================

    @staticmethod
    def index_lookup(name: str) -> 're.Pattern':
        """Pattern for `<name>[<quoted key>]` with single, double or backtick quotes."""
        return re.compile(re.escape(name) + r'''\[\s*(['"`])(.*?)\1\s*\]''')

    @classmethod
    def template_region(cls, text: str):
        """
        Span of the component's top-level template content.

        Nested `<template>` tags are common, so the region runs from the first
        opening tag to the last closing tag.

        Returns:
            (start, end) character offsets, or None if there is no template
        """
        match = cls.TEMPLATE_OPEN.search(text)
        if not match:
            return None
        end = text.rfind(cls.TEMPLATE_CLOSE)
        if end < match.end():
            return None
        return match.end(), end
