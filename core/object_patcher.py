# -*- coding: utf-8 -*-
"""
Object literal patching.

Turns "set these keys, drop those keys" for one object literal into byte
range edits on the original source. Everything outside the edited ranges
(comments, indentation, quoting, untouched properties) is left exactly as
it was, so regenerating the file is a matter of splicing the edits in.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Set

import langkeeper_config as config
from langkeeper_exceptions import PatchError
from langkeeper_logger import get_logger
from parser.syntax import PropertySlot, object_properties, quote_of, render_string

logger = get_logger("core.object_patcher")

_HSPACE = b' \t'


@dataclass
class SourceEdit:
    """Replace source[start:end] with text (start == end inserts)."""
    start: int
    end: int
    text: bytes = b''


def apply_edits(source: bytes, edits: List[SourceEdit]) -> bytes:
    """
    Splice edits into the source, back to front so offsets stay valid.

    An insertion at the start of a removed range lands in front of the
    removal's gap.

    Raises:
        PatchError: If two edits overlap
    """
    ordered = sorted(edits, key=lambda e: (e.start, e.end), reverse=True)
    out = source
    limit = len(source)
    for edit in ordered:
        if edit.end > limit or edit.start > edit.end:
            raise PatchError(f"Overlapping source edits at bytes {edit.start}-{edit.end}")
        out = out[:edit.start] + edit.text + out[edit.end:]
        limit = edit.start
    return out


class ObjectLiteralPatcher:
    """
    Plans edits for one object literal node.

    Args:
        obj: tree-sitter `object` node
        source: Source bytes the node was parsed from
        newline: Newline sequence of the file
        path: File the object lives in, for error messages
    """

    def __init__(self, obj, source: bytes, newline: bytes = b'\n', path=None):
        self._obj = obj
        self._path = path
        self._source = source
        self._newline = newline
        self._slots: List[PropertySlot] = object_properties(obj, source)
        self.appended_keys: List[str] = []

    def plan(self, upserts: Dict[str, str], deletes: Set[str]) -> List[SourceEdit]:
        """
        Edits that set every key in `upserts` and remove every key in `deletes`.

        A key in both ends up removed. Existing properties are updated in
        place (every occurrence of a duplicated key); missing ones are
        appended after the last remaining property.

        Raises:
            PatchError: If a key to set is held by a member whose value is
                not a string literal, such as a nested object
        """
        upserts = {k: v for k, v in upserts.items() if k not in deletes}
        deleted = {i for i, slot in enumerate(self._slots) if slot.key is not None and slot.key in deletes}
        survivors = [i for i in range(len(self._slots)) if i not in deleted]
        trailing_comma = bool(self._slots) and self._slots[-1].comma is not None

        edits: List[SourceEdit] = []
        appended = []
        self.appended_keys = []
        for key, value in upserts.items():
            matches = [self._slots[i] for i in survivors if self._slots[i].key == key]
            if not matches:
                appended.append((key, value))
                self.appended_keys.append(key)
                continue
            occupied = [slot for slot in matches if slot.value is None]
            if occupied:
                line = occupied[0].node.start_point[0] + 1
                raise PatchError(
                    f"'{key}' in {self._path or '<source>'} (line {line}) does not hold a string; not overwritten"
                )
            for slot in matches:
                edit = self._replace_value(slot, value)
                if edit is not None:
                    edits.append(edit)

        removals = {i: self._removal(self._slots[i], i - 1 in deleted) for i in sorted(deleted)}
        deletions = list(removals.values())
        edits.extend(deletions)

        if appended:
            if survivors:
                edits.extend(self._append_after(self._slots[survivors[-1]], appended, trailing_comma))
            else:
                edits.extend(self._append_into_empty(appended, trailing_comma, deletions))
        elif survivors and deleted and survivors[-1] < len(self._slots) - 1:
            last = self._slots[survivors[-1]]
            if last.comma is not None and not trailing_comma:
                end = last.comma.end_byte
                following = removals[survivors[-1] + 1].start
                if not self._source[end:following].strip(_HSPACE):
                    end = following
                edits.append(SourceEdit(last.comma.start_byte, end))

        logger.debug(f"Planned {len(edits)} edits: {len(upserts) - len(appended)} updated, "
                     f"{len(appended)} appended, {len(deleted)} removed")
        return edits

    # =========================================================================
    # REPLACE / REMOVE
    # =========================================================================

    def _replace_value(self, slot: PropertySlot, value: str) -> Optional[SourceEdit]:
        """Swap a string value in place, keeping its quote style."""
        if slot.value == value:
            return None
        literal = render_string(value, quote_of(slot.value_node, self._source) or self._quote())
        return SourceEdit(slot.value_node.start_byte, slot.value_node.end_byte, literal.encode('utf-8'))

    def _removal(self, slot: PropertySlot, after_removed: bool = False) -> SourceEdit:
        """
        Range covering a member, its comma and, when it sits alone on its
        lines, those lines. `after_removed` means the previous member goes too
        and already took the blanks in between.
        """
        src = self._source
        start = slot.node.start_byte
        end = slot.comma.end_byte if slot.comma is not None else slot.node.end_byte

        line_start = self._line_start(start)
        if not src[line_start:start].strip(_HSPACE):
            eol = self._line_end(end)
            tail = src[end:eol].strip()
            if not tail or tail.startswith(b'//'):
                return SourceEdit(line_start, eol + 1 if eol < len(src) else eol)

        if slot.comma is not None:
            while end < len(src) and src[end:end + 1] in (b' ', b'\t'):
                end += 1
        elif not after_removed:
            while start > 0 and src[start - 1:start] in (b' ', b'\t'):
                start -= 1
        return SourceEdit(start, end)

    # =========================================================================
    # APPEND
    # =========================================================================

    def _append_after(self, anchor: PropertySlot, appended, trailing_comma: bool) -> List[SourceEdit]:
        anchor_end = anchor.comma.end_byte if anchor.comma is not None else anchor.node.end_byte
        pos, at_eol = self._line_tail(anchor_end)
        pairs = [self._render_pair(k, v) for k, v in appended]

        if self._is_multiline() and at_eol:
            text = self._multiline_members(pairs, trailing_comma)
        else:
            pos = anchor_end
            text = ''.join(' ' + pair + (',' if i < len(pairs) - 1 or trailing_comma else '')
                           for i, pair in enumerate(pairs))
        data = text.encode('utf-8')

        if anchor.comma is not None:
            return [SourceEdit(pos, pos, data)]
        if pos == anchor.node.end_byte:
            return [SourceEdit(pos, pos, b',' + data)]
        return [SourceEdit(anchor.node.end_byte, anchor.node.end_byte, b','), SourceEdit(pos, pos, data)]

    def _append_into_empty(self, appended, trailing_comma: bool, deletions: List[SourceEdit]) -> List[SourceEdit]:
        open_brace = self._obj.children[0]
        close_brace = self._obj.children[-1]
        pairs = [self._render_pair(k, v) for k, v in appended]
        nl = self._newline.decode('ascii')

        if self._slots:
            # every member was removed
            if self._is_multiline():
                text = self._multiline_members(pairs, trailing_comma)
                return [SourceEdit(open_brace.end_byte, open_brace.end_byte, text.encode('utf-8'))]
            pos = min(d.start for d in deletions)
            text = ', '.join(pairs) + (',' if trailing_comma else '')
            if self._source[pos - 1:pos] not in (b' ', b'\t', b'\n'):
                text = ' ' + text
            return [SourceEdit(pos, pos, text.encode('utf-8'))]

        inner = self._source[open_brace.end_byte:close_brace.start_byte]
        text = self._multiline_members(pairs, False)
        if not inner.strip():
            text += nl + self._base_indent()
            return [SourceEdit(open_brace.end_byte, close_brace.start_byte, text.encode('utf-8'))]
        return [SourceEdit(open_brace.end_byte, open_brace.end_byte, text.encode('utf-8'))]

    def _multiline_members(self, pairs: List[str], trailing_comma: bool) -> str:
        nl = self._newline.decode('ascii')
        indent = self._member_indent()
        return ''.join(
            nl + indent + pair + (',' if i < len(pairs) - 1 or trailing_comma else '')
            for i, pair in enumerate(pairs)
        )

    def _render_pair(self, key: str, value: str) -> str:
        quote = self._quote()
        return f"{render_string(key, quote)}: {render_string(value, quote)}"

    # =========================================================================
    # LAYOUT HELPERS
    # =========================================================================

    def _quote(self) -> str:
        """Quote style of the object's existing string literals."""
        for slot in self._slots:
            quote = quote_of(slot.value_node, self._source)
            if quote:
                return quote
        for slot in self._slots:
            if slot.node.type == 'pair':
                quote = quote_of(slot.node.child_by_field_name('key'), self._source)
                if quote:
                    return quote
        return config.DEFAULT_QUOTE

    def _is_multiline(self) -> bool:
        return self._obj.start_point[0] != self._obj.end_point[0]

    def _member_indent(self) -> str:
        for slot in self._slots:
            line_start = self._line_start(slot.node.start_byte)
            prefix = self._source[line_start:slot.node.start_byte]
            if not prefix.strip(_HSPACE):
                return prefix.decode('utf-8')
        return self._base_indent() + config.DEFAULT_INDENT

    def _base_indent(self) -> str:
        """Indentation of the line holding the opening brace."""
        line_start = self._line_start(self._obj.start_byte)
        line = self._source[line_start:self._obj.start_byte]
        return line[:len(line) - len(line.lstrip(_HSPACE))].decode('utf-8')

    def _line_start(self, pos: int) -> int:
        return self._source.rfind(b'\n', 0, pos) + 1

    def _line_end(self, pos: int) -> int:
        """Index of the next LF at or after pos, or len(source)."""
        eol = self._source.find(b'\n', pos)
        return len(self._source) if eol == -1 else eol

    def _line_tail(self, pos: int):
        """
        Skip blanks and trailing comments after pos.

        Returns:
            (position before the line break, True) if only blanks/comments
            follow on the line, else (pos, False)
        """
        src = self._source
        i = pos
        while True:
            while i < len(src) and src[i:i + 1] in (b' ', b'\t'):
                i += 1
            if src[i:i + 2] == b'//':
                i = self._line_end(i)
                if src[i - 1:i] == b'\r':
                    i -= 1
                break
            if src[i:i + 2] == b'/*':
                close = src.find(b'*/', i + 2)
                if close == -1 or b'\n' in src[i:close]:
                    return pos, False
                i = close + 2
                continue
            break
        if i >= len(src) or src[i:i + 1] in (b'\r', b'\n'):
            return i, True
        return pos, False
