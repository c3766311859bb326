# -*- coding: utf-8 -*-
"""
Script Syntax Helpers

Thin layer over tree-sitter for JavaScript, TypeScript and TSX sources:
- grammar loading and parsing (with error detection)
- node walking and lookup of top-level bindings
- object literal property access
- JS string literal decoding and rendering

Offsets reported by tree-sitter are byte offsets into the UTF-8 source,
which is what the patch writer splices on.
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterator, List, Optional

import tree_sitter_javascript
import tree_sitter_typescript
from tree_sitter import Language, Node, Parser, Tree

from langkeeper_enums import ScriptDialect
from langkeeper_exceptions import ParseFailure
from langkeeper_logger import get_logger

logger = get_logger("parser.syntax")

# Wrappers that may sit around a binding's object literal in TypeScript
_TRANSPARENT_WRAPPERS = {
    'parenthesized_expression',
    'as_expression',
    'satisfies_expression',
    'non_null_expression',
}

_QUOTE_TOKENS = {'"', "'"}

_SIMPLE_ESCAPES = {
    'n': '\n',
    't': '\t',
    'r': '\r',
    'b': '\b',
    'f': '\f',
    'v': '\v',
    '0': '\0',
}

_LINE_CONTINUATIONS = {'\n', '\r\n', '\r', '\u2028', '\u2029'}

_RENDER_ESCAPES = {
    '\\': '\\\\',
    '\n': '\\n',
    '\r': '\\r',
    '\t': '\\t',
    '\b': '\\b',
    '\f': '\\f',
    '\v': '\\v',
    '\u2028': '\\u2028',
    '\u2029': '\\u2029',
}

_CONTROL_CHAR = re.compile(r'[\x00-\x1f\x7f]')
_SURROGATE = re.compile(r'[\ud800-\udfff]')


@lru_cache(maxsize=None)
def get_language(dialect: ScriptDialect) -> Language:
    """Load the tree-sitter grammar for a script dialect."""
    dialect = ScriptDialect(dialect)
    if dialect == ScriptDialect.TYPESCRIPT:
        return Language(tree_sitter_typescript.language_typescript())
    if dialect == ScriptDialect.TSX:
        return Language(tree_sitter_typescript.language_tsx())
    return Language(tree_sitter_javascript.language())


def parse_script(source: bytes, dialect: ScriptDialect, file_path=None) -> Tree:
    """
    Parse script source into a syntax tree.

    Args:
        source: UTF-8 encoded source
        dialect: JAVASCRIPT, TYPESCRIPT or TSX
        file_path: Used in error reports only

    Returns:
        tree_sitter.Tree

    Raises:
        ParseFailure: If the source contains syntax errors
    """
    parser = Parser(get_language(dialect))
    tree = parser.parse(source)
    if tree.root_node.has_error:
        bad = first_error(tree.root_node)
        line = bad.start_point[0] + 1 if bad is not None else None
        raise ParseFailure(
            f"Syntax error in {file_path or '<source>'} ({ScriptDialect(dialect).value})"
            + (f" at line {line}" if line else ""),
            file_path=str(file_path) if file_path else None,
            line_number=line,
        )
    return tree


def first_error(root: Node) -> Optional[Node]:
    """First ERROR or MISSING node in document order."""
    for node in walk(root):
        if node.type == 'ERROR' or node.is_missing:
            return node
    return None


def walk(root: Node) -> Iterator[Node]:
    """Pre-order traversal (parents before children, children in source order)."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def node_text(node: Node, source: bytes) -> str:
    return source[node.start_byte:node.end_byte].decode('utf-8')


def significant_children(node: Node) -> List[Node]:
    """Named children that are not comments."""
    return [child for child in node.named_children if child.type != 'comment']


# =============================================================================
# BINDINGS & OBJECT LITERALS
# =============================================================================

def find_binding_declarators(root: Node, name: str, source: bytes) -> List[Node]:
    """
    Top-level `variable_declarator` nodes binding `name`.

    Covers `const`/`let`/`var` declarations and their `export` forms.
    """
    found = []
    for statement in root.named_children:
        declaration = statement
        if statement.type == 'export_statement':
            declaration = statement.child_by_field_name('declaration')
        if declaration is None or declaration.type not in ('lexical_declaration', 'variable_declaration'):
            continue
        for declarator in declaration.named_children:
            if declarator.type != 'variable_declarator':
                continue
            name_node = declarator.child_by_field_name('name')
            if name_node is not None and name_node.type == 'identifier' and node_text(name_node, source) == name:
                found.append(declarator)
    return found


def binding_object(declarator: Node) -> Optional[Node]:
    """The object literal a declarator is initialized with, or None."""
    value = declarator.child_by_field_name('value')
    while value is not None and value.type in _TRANSPARENT_WRAPPERS:
        inner = significant_children(value)
        value = inner[0] if inner else None
    if value is None or value.type != 'object':
        return None
    return value


@dataclass
class PropertySlot:
    """
    One member of an object literal.

    Attributes:
        node: The member node (pair, spread, method, ...)
        key: Property name, or None for members without a static name
        value_node: Value node of a `pair`, else None
        value: Decoded value when the value is a string literal, else None
        comma: The `,` token following the member, if any
    """
    node: Node
    key: Optional[str]
    value_node: Optional[Node]
    value: Optional[str]
    comma: Optional[Node]


def object_properties(obj: Node, source: bytes) -> List[PropertySlot]:
    """List the members of an object literal in source order."""
    slots: List[PropertySlot] = []
    for child in obj.children:
        if child.type == ',':
            if slots and slots[-1].comma is None:
                slots[-1].comma = child
            continue
        if not child.is_named or child.type == 'comment':
            continue
        key = None
        value_node = None
        value = None
        if child.type == 'pair':
            key = property_key(child.child_by_field_name('key'), source)
            value_node = child.child_by_field_name('value')
            if value_node is not None and value_node.type == 'string':
                value = decode_string(value_node, source)
        elif child.type == 'shorthand_property_identifier':
            key = node_text(child, source)
        slots.append(PropertySlot(node=child, key=key, value_node=value_node, value=value, comma=None))
    return slots


def property_key(key_node: Optional[Node], source: bytes) -> Optional[str]:
    """Static name of a property key (identifier, string or number key)."""
    if key_node is None:
        return None
    if key_node.type == 'string':
        return decode_string(key_node, source)
    if key_node.type in ('property_identifier', 'identifier', 'number'):
        return node_text(key_node, source)
    return None


# =============================================================================
# STRING LITERALS
# =============================================================================

def string_literal_value(node: Optional[Node], source: bytes) -> Optional[str]:
    """Decoded value if `node` is a plain string literal, else None."""
    if node is None or node.type != 'string':
        return None
    return decode_string(node, source)


def decode_string(node: Node, source: bytes) -> str:
    """
    Decode a `string` node, resolving escape sequences.

    Raises:
        ParseFailure: If an escape names no valid code point, or the value
            keeps an unpaired surrogate that UTF-8 cannot hold
    """
    parts = []
    for child in node.children:
        if child.type in _QUOTE_TOKENS:
            continue
        text = node_text(child, source)
        if child.type == 'escape_sequence':
            try:
                parts.append(decode_escape(text))
            except (ValueError, OverflowError):
                raise ParseFailure(
                    f"Invalid escape sequence {text} at line {child.start_point[0] + 1}",
                    line_number=child.start_point[0] + 1,
                ) from None
        else:
            parts.append(text)
    value = ''.join(parts)
    # Re-join UTF-16 surrogate pairs written as "\\ud83d\\ude00"
    value = value.encode('utf-16', 'surrogatepass').decode('utf-16', 'surrogatepass')
    if _SURROGATE.search(value):
        raise ParseFailure(
            f"Unpaired surrogate in string at line {node.start_point[0] + 1}",
            line_number=node.start_point[0] + 1,
        )
    return value


def decode_escape(sequence: str) -> str:
    body = sequence[1:]
    if not body:
        return ''
    if body.startswith('u{') and body.endswith('}'):
        return chr(int(body[2:-1], 16))
    if body[0] == 'u' and len(body) == 5:
        return chr(int(body[1:], 16))
    if body[0] == 'x' and len(body) == 3:
        return chr(int(body[1:], 16))
    if body in _LINE_CONTINUATIONS:
        return ''
    if body in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[body]
    if body.isdigit() and all(c in '01234567' for c in body):
        return chr(int(body, 8))
    return body


def quote_of(node: Optional[Node], source: bytes) -> Optional[str]:
    """Quote character a string node was written with."""
    if node is None or node.type != 'string':
        return None
    first = source[node.start_byte:node.start_byte + 1].decode('ascii', errors='replace')
    return first if first in _QUOTE_TOKENS else None


def render_string(value: str, quote: str = '"') -> str:
    """
    Render a JS string literal.

    Non-ASCII text is written as-is. Backslashes, the quote character, line
    terminators, control characters and lone surrogates are escaped.
    """
    out = []
    for char in value:
        if char == quote:
            out.append('\\' + quote)
        elif char in _RENDER_ESCAPES:
            out.append(_RENDER_ESCAPES[char])
        elif _CONTROL_CHAR.match(char) or _SURROGATE.match(char):
            out.append(f'\\u{ord(char):04x}')
        else:
            out.append(char)
    return quote + ''.join(out) + quote
