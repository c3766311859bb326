# -*- coding: utf-8 -*-
"""
Unit Tests for the Patch Writer

Tests for writing diffs back into locale table files: in-place edits,
appends, removals, file creation, formatting preservation and rollback.
"""

import codecs

import pytest

from conftest import COMBINED_TABLE
from langkeeper_enums import Locale, TableLayout
from langkeeper_exceptions import MissingPath, ParseFailure, PatchError, WriteFailure
from core.diff_engine import diff
from core.object_patcher import SourceEdit, apply_edits
from core.patch_writer import PatchWriter
from models import DiffResult, LocaleEntry
from parser import parse_locale_table

CN_EN = {Locale.ZH: "cn", Locale.EN: "en"}
ZH_ONLY = {Locale.ZH: "cn"}


def entry(key, zh, en=""):
    return LocaleEntry(key=key, values={Locale.ZH: zh, Locale.EN: en})


def combined(path):
    return {Locale.ZH: path, Locale.EN: path}


def write_zh(path, text, result):
    """Write a zh-only file through a one-binding writer and return the new text."""
    path.write_bytes(text.encode('utf-8'))
    PatchWriter(ZH_ONLY).write(result, {Locale.ZH: path})
    return path.read_bytes().decode('utf-8')


class TestApplyEdits:
    """Tests for splicing byte edits."""

    def test_insert_before_removal_at_same_offset(self):
        out = apply_edits(b"abcdef", [SourceEdit(2, 4), SourceEdit(2, 2, b"X")])

        assert out == b"abXef"

    def test_overlap_rejected(self):
        with pytest.raises(PatchError):
            apply_edits(b"abcdef", [SourceEdit(1, 4), SourceEdit(3, 5)])


class TestCombinedScenarios:
    """End-to-end scenarios on a combined-layout table."""

    def test_edit_en_value_only(self, combined_table_file):
        result = DiffResult(en_edit=[entry("hello", "你好", "Hello")])

        written = PatchWriter(CN_EN).write(result, combined(combined_table_file))

        assert written == [combined_table_file]
        assert combined_table_file.read_text(encoding='utf-8') == COMBINED_TABLE.replace(
            '"hello": "Hi"', '"hello": "Hello"'
        )

    def test_delete_from_both_columns(self, combined_table_file):
        result = DiffResult(delete=[entry("bye", "再见", "Bye")])

        PatchWriter(CN_EN).write(result, combined(combined_table_file))

        expected = COMBINED_TABLE.replace('  "bye": "再见", // farewell\n', '').replace('  "bye": "Bye",\n', '')
        assert combined_table_file.read_text(encoding='utf-8') == expected

    def test_push_appends_to_both_columns(self, combined_table_file):
        result = DiffResult(push=[entry("new", "新的", "New")])

        PatchWriter(CN_EN).write(result, combined(combined_table_file))

        text = combined_table_file.read_text(encoding='utf-8')
        assert '  "bye": "再见", // farewell\n  "new": "新的",\n};' in text
        assert '  "bye": "Bye",\n  "new": "New",\n};' in text
        assert text.startswith('// generated by hand\n')

    def test_reparse_after_save(self, combined_table_file):
        paths = combined(combined_table_file)
        before = parse_locale_table(paths, TableLayout.COMBINED, CN_EN)
        after = before.copy()
        after.get("hello").set_value(Locale.ZH, "您好")
        after.remove("bye")
        after.add(entry("k", "钥", "key"))

        PatchWriter(CN_EN).write(diff(before, after), paths)

        assert parse_locale_table(paths, TableLayout.COMBINED, CN_EN) == after

    def test_empty_diff_leaves_bytes(self, combined_table_file):
        raw = combined_table_file.read_bytes()

        written = PatchWriter(CN_EN).write(DiffResult(), combined(combined_table_file))

        assert written == []
        assert combined_table_file.read_bytes() == raw

    def test_same_diff_twice(self, combined_table_file):
        result = DiffResult(
            push=[entry("new", "新", "New")],
            zh_edit=[entry("hello", "哈喽", "Hi")],
            delete=[entry("bye", "再见", "Bye")],
        )
        writer = PatchWriter(CN_EN)

        writer.write(result, combined(combined_table_file))
        once = combined_table_file.read_bytes()
        written = writer.write(result, combined(combined_table_file))

        assert written == []
        assert combined_table_file.read_bytes() == once

    def test_missing_binding_aborts(self, tmp_path):
        path = tmp_path / "lang.ts"
        original = 'const cn = { "a": "1" };\n'
        path.write_text(original, encoding='utf-8')

        with pytest.raises(ParseFailure):
            PatchWriter(CN_EN).write(DiffResult(push=[entry("b", "2", "two")]), combined(path))

        assert path.read_text(encoding='utf-8') == original

    def test_missing_binding_ignored_for_deletes(self, tmp_path):
        path = tmp_path / "lang.ts"
        path.write_text('const cn = { "a": "1", "b": "2" };\n', encoding='utf-8')

        PatchWriter(CN_EN).write(DiffResult(delete=[entry("b", "2")]), combined(path))

        assert path.read_text(encoding='utf-8') == 'const cn = { "a": "1" };\n'

    def test_syntax_error_aborts(self, tmp_path):
        path = tmp_path / "lang.ts"
        path.write_text('const cn = { "a": ', encoding='utf-8')

        with pytest.raises(ParseFailure):
            PatchWriter(CN_EN).write(DiffResult(push=[entry("b", "2")]), combined(path))

    def test_no_paths(self):
        with pytest.raises(MissingPath):
            PatchWriter(CN_EN).write(DiffResult(push=[entry("a", "1")]), {})


class TestSplitScenarios:
    """Scenarios on split-layout tables."""

    def test_edit_for_absent_en_file_creates_it(self, split_project, myth_dialect):
        paths = myth_dialect.table_paths(split_project)
        cn_before = paths[Locale.ZH].read_bytes()
        result = DiffResult(en_edit=[entry("k", "v", "value")])

        written = myth_dialect.write_table(result, paths)

        assert written == [paths[Locale.EN]]
        assert paths[Locale.EN].read_text(encoding='utf-8') == 'const $lang = {\n  "k": "value"\n};\n'
        assert paths[Locale.ZH].read_bytes() == cn_before
        assert myth_dialect.parse_table(paths).rows() == [{"key": "k", "zh": "v", "en": "value"}]

    def test_delete_on_absent_file_is_noop(self, split_project, myth_dialect):
        paths = myth_dialect.table_paths(split_project)

        myth_dialect.write_table(DiffResult(delete=[entry("k", "v")]), paths)

        assert not paths[Locale.EN].exists()
        assert paths[Locale.ZH].read_text(encoding='utf-8') == 'const $lang = {\n};\n'

    def test_rollback_when_second_write_fails(self, split_project, myth_dialect, monkeypatch):
        import core.patch_writer as patch_writer

        paths = myth_dialect.table_paths(split_project)
        cn_before = paths[Locale.ZH].read_bytes()
        real_write = patch_writer.write_source

        def failing_write(path, raw):
            if path == paths[Locale.EN]:
                raise WriteFailure("disk full", file_path=str(path))
            real_write(path, raw)

        monkeypatch.setattr(patch_writer, "write_source", failing_write)

        with pytest.raises(WriteFailure):
            myth_dialect.write_table(DiffResult(push=[entry("n", "新", "new")]), paths)

        assert paths[Locale.ZH].read_bytes() == cn_before
        assert not paths[Locale.EN].exists()


class TestFormatting:
    """Tests for layout preservation of patched objects."""

    def test_inline_delete_last_drops_separator(self, tmp_path):
        text = write_zh(tmp_path / "lang.js", 'const cn = { "a": "1", "b": "2" };\n',
                        DiffResult(delete=[entry("b", "2")]))

        assert text == 'const cn = { "a": "1" };\n'

    def test_inline_delete_first(self, tmp_path):
        text = write_zh(tmp_path / "lang.js", 'const cn = { "a": "1", "b": "2" };\n',
                        DiffResult(delete=[entry("a", "1")]))

        assert text == 'const cn = { "b": "2" };\n'

    def test_inline_delete_trailing_run(self, tmp_path):
        text = write_zh(tmp_path / "lang.js", 'const cn = { "a": "1", "b": "2", "c": "3" };\n',
                        DiffResult(delete=[entry("b", "2"), entry("c", "3")]))

        assert text == 'const cn = { "a": "1" };\n'

    def test_inline_delete_all_then_push(self, tmp_path):
        text = write_zh(tmp_path / "lang.js", 'const cn = { "a": "1", "b": "2" };\n',
                        DiffResult(push=[entry("c", "3")], delete=[entry("a", "1"), entry("b", "2")]))

        assert text == 'const cn = { "c": "3" };\n'

    def test_inline_push(self, tmp_path):
        text = write_zh(tmp_path / "lang.js", "const cn = { 'a': '1' };\n",
                        DiffResult(push=[entry("b", "二")]))

        assert text == "const cn = { 'a': '1', 'b': '二' };\n"

    def test_push_without_trailing_comma(self, tmp_path):
        text = write_zh(tmp_path / "lang.js", 'const cn = {\n    "a": "1"\n};\n',
                        DiffResult(push=[entry("b", "2"), entry("c", "3")]))

        assert text == 'const cn = {\n    "a": "1",\n    "b": "2",\n    "c": "3"\n};\n'

    def test_delete_last_without_trailing_comma(self, tmp_path):
        text = write_zh(tmp_path / "lang.js", 'const cn = {\n  "a": "1",\n  "b": "2"\n};\n',
                        DiffResult(delete=[entry("b", "2")]))

        assert text == 'const cn = {\n  "a": "1"\n};\n'

    def test_replace_everything(self, tmp_path):
        text = write_zh(tmp_path / "lang.js", 'const cn = {\n  "a": "1",\n};\n',
                        DiffResult(push=[entry("b", "2")], delete=[entry("a", "1")]))

        assert text == 'const cn = {\n  "b": "2",\n};\n'

    def test_push_into_empty_object(self, tmp_path):
        text = write_zh(tmp_path / "lang.js", 'export const cn = {};\n',
                        DiffResult(push=[entry("a", "1")]))

        assert text == 'export const cn = {\n  "a": "1"\n};\n'

    def test_comments_and_bare_keys_survive(self, tmp_path):
        source = (
            'const cn = {\n'
            '  // greeting\n'
            '  hello: "你好", /* inline */\n'
            '  bye: \'再见\',\n'
            '};\n'
        )

        text = write_zh(tmp_path / "lang.js", source, DiffResult(zh_edit=[entry("bye", "回头见")]))

        assert text == source.replace("'再见'", "'回头见'")

    def test_values_are_escaped_but_not_ascii_encoded(self, tmp_path):
        text = write_zh(tmp_path / "lang.js", 'const cn = {\n  "a": "1",\n};\n',
                        DiffResult(push=[entry('say "hi"', '第一行\n第二行 😀')]))

        assert '  "say \\"hi\\"": "第一行\\n第二行 😀",\n' in text

    def test_duplicate_keys_all_updated(self, tmp_path):
        text = write_zh(tmp_path / "lang.js", 'const cn = { "a": "1", "a": "2" };\n',
                        DiffResult(zh_edit=[entry("a", "3")]))

        assert text == 'const cn = { "a": "3", "a": "3" };\n'

    def test_crlf_and_bom_kept(self, tmp_path):
        path = tmp_path / "lang.js"
        path.write_bytes(codecs.BOM_UTF8 + b'const cn = {\r\n  "a": "1",\r\n};\r\n')

        PatchWriter(ZH_ONLY).write(DiffResult(push=[entry("b", "2")]), {Locale.ZH: path})

        assert path.read_bytes() == codecs.BOM_UTF8 + b'const cn = {\r\n  "a": "1",\r\n  "b": "2",\r\n};\r\n'

    def test_typescript_wrapped_object(self, tmp_path):
        path = tmp_path / "lang.ts"
        path.write_text('export const cn = {\n  "a": "1",\n} as const;\n', encoding='utf-8')

        PatchWriter(ZH_ONLY).write(DiffResult(push=[entry("b", "2")]), {Locale.ZH: path})

        assert path.read_text(encoding='utf-8') == 'export const cn = {\n  "a": "1",\n  "b": "2",\n} as const;\n'

    def test_push_onto_nested_object_refused(self, tmp_path):
        path = tmp_path / "lang.js"
        original = 'const cn = {\n  common: { ok: "确定" },\n  "a": "1",\n};\n'
        path.write_text(original, encoding='utf-8')

        with pytest.raises(PatchError, match="common"):
            PatchWriter(ZH_ONLY).write(DiffResult(push=[entry("common", "通用")]), {Locale.ZH: path})

        assert path.read_text(encoding='utf-8') == original

    def test_lone_surrogate_value_escaped(self, tmp_path):
        text = write_zh(tmp_path / "lang.js", 'const cn = {\n  "a": "1",\n};\n',
                        DiffResult(push=[entry("b", "x\ud800")]))

        assert '  "b": "x\\ud800",\n' in text
