"""
ast_builder.py
Builds the immutable schema AST (schema_ast) from the lark parse tree and
enforces the layout rules the grammar leaves to the source text: which tokens
must share a line, and which must touch.
"""
import re
from typing import List, Optional

from lark import Token
from lark.visitors import Transformer_NonRecursive
from lark.exceptions import VisitError

from debug_output import debug_print, resolve_verbose
from lark_parser import describe_expected, parse_schema_tree
from schema_ast import (
    ArrayField,
    Attribute,
    Document,
    Field,
    IdDeclaration,
    Package,
    Struct,
    TypeSource,
)
from schema_errors import SchemaSyntaxError

# Same-line whitespace: spaces and tabs only, never a line break or a comment
_SAME_LINE_GAP = re.compile(r'[ \t]*')

_PACKAGE_MEMBER_TOKENS = ['ID', 'NATIVE_TYPE', 'USER_TYPE', 'STRUCT']
_STRUCT_MEMBER_TOKENS = ['NATIVE_TYPE', 'USER_TYPE', 'STRUCT']


class SchemaAstBuilder(Transformer_NonRecursive):
    """
    Transformer turning a lark tree from lark_parser into a schema_ast.Document.
    Non-recursive, so struct nesting depth is not bound by the Python stack.
    """

    def __init__(self, text: str, verbose: bool = False):
        super().__init__()
        self.text = text
        self.verbose = verbose
        self.last_close = 0

    def debug_print(self, message: str) -> None:
        debug_print(message, self.verbose)

    # Layout checks

    def _error(self, reason: str, pos: int, expected: Optional[List[str]] = None):
        return SchemaSyntaxError(reason, self.text, pos, describe_expected(expected or []))

    def _require_same_line(self, before: Token, after: Token, required: bool = False) -> None:
        """
        `after` may only be separated from `before` by spaces and tabs.
        With required=True at least one of them must be there.
        """
        gap = self.text[before.end_pos:after.start_pos]
        if not _SAME_LINE_GAP.fullmatch(gap):
            raise self._error(
                f"{str(after)!r} must be on the same line as {str(before)!r}",
                after.start_pos)
        if required and not gap:
            raise self._error(
                f"Expected whitespace between {str(before)!r} and {str(after)!r}",
                after.start_pos)

    def _require_adjacent(self, before: Token, after: Token) -> None:
        if before.end_pos != after.start_pos:
            raise self._error(
                f"Array size {str(after)!r} must directly follow the type {str(before)!r}",
                after.start_pos)

    def _attributes(self, previous: Token, tokens: List[Token]):
        if not tokens:
            return None
        attributes = []
        for token in tokens:
            self._require_same_line(previous, token)
            attributes.append(Attribute(str(token)[1:]))
            previous = token
        return tuple(attributes)

    def _check_body(self, open_brace: Token, close_brace: Token, members, expected: List[str]) -> None:
        # A body needs at least one member; a lone comment counts as one.
        if members:
            return
        if '//' in self.text[open_brace.end_pos:close_brace.start_pos]:
            return
        raise self._error("Empty block: expected at least one member", close_brace.start_pos, expected)

    # Declarations

    def _type_ref(self, token: Token):
        if token.type == 'USER_TYPE':
            return TypeSource.USER, str(token)[1:]
        return TypeSource.NATIVE, str(token)

    def id_declaration(self, items):
        keyword, value = items
        self._require_same_line(keyword, value)
        return IdDeclaration(str(value), line=keyword.line)

    def field(self, items):
        type_token, name, *attribute_tokens = items
        self._require_same_line(type_token, name, required=True)
        source, kind = self._type_ref(type_token)
        return Field(source, kind, str(name), self._attributes(name, attribute_tokens), line=type_token.line)

    def array(self, items):
        type_token, size, name, *attribute_tokens = items
        self._require_adjacent(type_token, size)
        self._require_same_line(size, name, required=True)
        source, kind = self._type_ref(type_token)
        return ArrayField(source, kind, str(name), str(size)[1:-1],
                          self._attributes(name, attribute_tokens), line=type_token.line)

    # Blocks

    def struct(self, items):
        keyword, name, open_brace, *members, close_brace = items
        self._require_same_line(keyword, name)
        self._require_same_line(name, open_brace)
        self._check_body(open_brace, close_brace, members, _STRUCT_MEMBER_TOKENS)
        self.debug_print(f"struct '{name}' with {len(members)} member(s) at line {keyword.line}")
        return Struct(str(name), members, line=keyword.line)

    def package(self, items):
        keyword, name, open_brace, *members, close_brace = items
        self._require_same_line(keyword, name)
        self._require_same_line(name, open_brace)
        self._check_body(open_brace, close_brace, members, _PACKAGE_MEMBER_TOKENS)
        self.last_close = max(self.last_close, close_brace.end_pos)
        self.debug_print(f"package '{name}' with {len(members)} member(s) at line {keyword.line}")
        return Package(str(name), members, line=keyword.line)

    def start(self, items):
        # After the last package a comment needs whitespace before it
        if self.text.startswith('//', self.last_close):
            raise self._error("Expected whitespace before a trailing comment", self.last_close)
        return Document(items)


def parse_schema(text: str, verbose: bool = False) -> Document:
    """
    Parse Ludwieg schema text into a Document.

    Args:
        text: The full schema source
        verbose: Whether to print debug information (default: False)

    Returns:
        The parsed Document. Nothing partial is ever returned: any syntax
        problem raises SchemaSyntaxError.
    """
    verbose = resolve_verbose(verbose)
    tree = parse_schema_tree(text)
    try:
        document = SchemaAstBuilder(text, verbose).transform(tree)
    except VisitError as e:
        if isinstance(e.orig_exc, SchemaSyntaxError):
            raise e.orig_exc from None
        raise
    debug_print(f"Parsed {len(document)} package(s): {[p.name for p in document]}", verbose)
    return document


def parse_package(text: str, verbose: bool = False) -> Package:
    """Parse a document that is expected to hold exactly one package and return it."""
    document = parse_schema(text, verbose)
    if len(document) != 1:
        second = document[1]
        raise SchemaSyntaxError(
            f"Expected a single package, found {len(document)}",
            text, _offset_of_line(text, second.line))
    return document[0]


def _offset_of_line(text: str, line: Optional[int]) -> int:
    if not line:
        return 0
    pos = 0
    for _ in range(line - 1):
        pos = text.index('\n', pos) + 1
    return pos
