# -*- coding: utf-8 -*-
"""
Unit Tests for Usage Extraction

Tests for StructuredUsageParser, PatternUsageParser and extract_usages.
"""

import pytest
from pathlib import Path

from langkeeper_enums import ExtractionMode
from langkeeper_exceptions import FileOperationError, ParseFailure
from parser import extract_usages, PatternUsageParser, StructuredUsageParser, UsagePatterns


def keys(usages):
    return [u.key for u in usages]


class TestStructuredUsageParser:
    """Tests for syntax-tree based extraction."""

    def test_bare_and_member_calls(self, usage_file):
        """t('hello') and obj.$t('bye') are both usages, in file order."""
        usages = extract_usages(usage_file, ExtractionMode.STRUCTURED)

        assert keys(usages) == ["hello", "bye"]
        assert all(u.source_file == usage_file for u in usages)

    def test_non_literal_argument_skipped(self, tmp_path):
        """Keys that cannot be known statically are ignored."""
        path = tmp_path / "dyn.js"
        path.write_text("t(name);\nt('a' + b);\nt(`tpl`);\nt('ok');\n", encoding='utf-8')

        assert keys(extract_usages(path, ExtractionMode.STRUCTURED)) == ["ok"]

    def test_other_callees_ignored(self, tmp_path):
        """Only callees named t / $t count."""
        path = tmp_path / "other.js"
        path.write_text("format('x');\nthis.tr('y');\nthis.$t(\"z\");\n", encoding='utf-8')

        assert keys(extract_usages(path, ExtractionMode.STRUCTURED)) == ["z"]

    def test_duplicates_kept(self, tmp_path):
        path = tmp_path / "dup.js"
        path.write_text("t('a'); t('b'); t('a');\n", encoding='utf-8')

        assert keys(extract_usages(path, ExtractionMode.STRUCTURED)) == ["a", "b", "a"]

    def test_escaped_key_decoded(self, tmp_path):
        path = tmp_path / "esc.js"
        path.write_text("t('it\\'s');\nt(\"tab\\there\");\n", encoding='utf-8')

        assert keys(extract_usages(path, ExtractionMode.STRUCTURED)) == ["it's", "tab\there"]

    def test_typescript_and_tsx(self, tmp_path):
        ts = tmp_path / "view.ts"
        ts.write_text("const label: string = t('typed') as string;\n", encoding='utf-8')
        tsx = tmp_path / "view.tsx"
        tsx.write_text("export const C = () => <div title={t('attr')}>{t('body')}</div>;\n", encoding='utf-8')

        assert keys(extract_usages(ts, ExtractionMode.STRUCTURED)) == ["typed"]
        assert keys(extract_usages(tsx, ExtractionMode.STRUCTURED)) == ["attr", "body"]

    def test_vue_component_in_file_order(self, tmp_path):
        """Template matches and script calls are merged by position."""
        path = tmp_path / "Comp.vue"
        path.write_text(
            "<script setup lang=\"ts\">\n"
            "const a: string = t('setup');\n"
            "</script>\n"
            "<template>\n"
            "  <div :title=\"$t('title')\">{{ t(\"body\") }}</div>\n"
            "  <template v-if=\"x\"><span>{{ $t('nested') }}</span></template>\n"
            "</template>\n"
            "<script>\n"
            "export default { computed: { x() { return this.$t('script') } } }\n"
            "</script>\n",
            encoding='utf-8'
        )

        usages = extract_usages(path, ExtractionMode.STRUCTURED)

        assert keys(usages) == ["setup", "title", "body", "nested", "script"]

    def test_syntax_error_degrades_to_empty(self, tmp_path):
        path = tmp_path / "broken.js"
        path.write_text("t('a');\nconst = ;\n", encoding='utf-8')
        problems = []

        assert extract_usages(path, ExtractionMode.STRUCTURED, problems=problems) == []
        assert len(problems) == 1
        assert isinstance(problems[0], ParseFailure)
        assert problems[0].line_number is not None

    def test_invalid_escape_degrades_to_empty(self, tmp_path):
        path = tmp_path / "page.js"
        path.write_text(r"t('ok');" + "\n" + r"t('\u{110000}');" + "\n", encoding='utf-8')
        problems = []

        assert extract_usages(path, ExtractionMode.STRUCTURED, problems=problems) == []
        assert isinstance(problems[0], ParseFailure)
        assert problems[0].line_number == 2

    def test_missing_file_degrades_to_empty(self, tmp_path):
        problems = []

        assert extract_usages(tmp_path / "nope.js", ExtractionMode.STRUCTURED, problems=problems) == []
        assert isinstance(problems[0], FileOperationError)

    def test_parser_raises_directly(self):
        """The strategy itself raises; degradation happens in extract_usages."""
        with pytest.raises(ParseFailure):
            StructuredUsageParser().parse("t('a'", Path("x.js"))


class TestPatternUsageParser:
    """Tests for raw-text index lookups."""

    def test_all_quote_styles(self):
        text = "a = $lang['one'];\nb = $lang[\"two\"];\nc = $lang[`three`];\n"

        usages = PatternUsageParser().parse(text, Path("p.js"))

        assert keys(usages) == ["one", "two", "three"]

    def test_other_names_ignored(self):
        text = "x = lang['no']; y = $lang.no; z = $lang['yes'];"

        assert keys(PatternUsageParser().parse(text, Path("p.js"))) == ["yes"]

    def test_pattern_mode_skips_syntax(self, tmp_path):
        """Pattern mode never parses, so broken scripts still yield keys."""
        path = tmp_path / "broken.js"
        path.write_text("const = $lang['still'];\n", encoding='utf-8')

        assert keys(extract_usages(path, ExtractionMode.PATTERN, "$lang")) == ["still"]

    def test_custom_lookup_name(self):
        usages = PatternUsageParser("i18n").parse("i18n['k'] + $lang['x']", Path("p.js"))

        assert keys(usages) == ["k"]


class TestUsagePatterns:
    """Tests for the raw-text patterns."""

    def test_template_call_not_inside_identifier(self):
        text = "format('x') t('y') $t(\"z\", 1)"

        assert [m.group(2) for m in UsagePatterns.TEMPLATE_CALL.finditer(text)] == ["y", "z"]

    def test_template_region_spans_nested_tags(self):
        text = "<template><template>a</template></template><script></script>"

        start, end = UsagePatterns.template_region(text)

        assert text[start:end] == "<template>a</template>"

    def test_no_template(self):
        assert UsagePatterns.template_region("<script></script>") is None
