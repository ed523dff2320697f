import re

from lark import Lark, Token
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, UnexpectedToken

from schema_ast import NATIVE_TYPES
from schema_errors import SchemaSyntaxError


# Ludwieg schema grammar.
# Whitespace and // comments are trivia, skipped between every token. The
# places where the language only tolerates same-line whitespace (between a
# type and its name, before an attribute, before an opening brace, ...) are
# checked on the source text by ast_builder.SchemaAstBuilder.
# Every alternative starts with a distinct token, so the LALR tables pick
# the same branch an ordered choice would: a native keyword before a user
# type, and an array only when a size suffix follows the type.
grammar = r"""
    start: package+

    package: PACKAGE NAME LBRACE package_member* RBRACE
    ?package_member: id_declaration
        | field
        | array
        | struct

    struct: STRUCT NAME LBRACE struct_member* RBRACE
    ?struct_member: field
        | array
        | struct

    id_declaration: ID HEX
    field: (NATIVE_TYPE | USER_TYPE) NAME ATTRIBUTE*
    array: (NATIVE_TYPE | USER_TYPE) ARRAY_SIZE NAME ATTRIBUTE*

    PACKAGE: "package"
    STRUCT: "struct"
    ID: "id"
    LBRACE: "{"
    RBRACE: "}"

    // Keywords must not run into a following name character
    NATIVE_TYPE: /(?:<native_types>)(?![a-z_])/
    USER_TYPE: /@[a-z_]+/
    ARRAY_SIZE: /\[(?:\*|[0-9]*)\]/
    ATTRIBUTE: "!deprecated"
    HEX: /0x[0-9a-fA-F]+/
    NAME: /[a-z_]+/

    WS: /[ \t\r\n]+/
    COMMENT: /\/\/[^\n]*/
    %ignore WS
    %ignore COMMENT
"""

# Native keywords are tried in the order of schema_ast.NATIVE_TYPES
grammar = grammar.replace("<native_types>", "|".join(re.escape(t) for t in NATIVE_TYPES))

parser = Lark(
    grammar,
    start='start',
    parser='lalr',
    lexer='contextual',
    propagate_positions=True
)


# Human readable names for the terminals reported in syntax errors
TOKEN_DESCRIPTIONS = {
    'PACKAGE': "'package'",
    'STRUCT': "'struct'",
    'ID': "'id'",
    'LBRACE': "'{'",
    'RBRACE': "'}'",
    'NATIVE_TYPE': 'native type',
    'USER_TYPE': "user type '@name'",
    'ARRAY_SIZE': "array size '[N]' or '[*]'",
    'ATTRIBUTE': "'!deprecated'",
    'HEX': "hex value '0x..'",
    'NAME': 'name [a-z_]+',
    '$END': 'end of input',
}

IGNORED_TOKENS = {'WS', 'COMMENT'}


def describe_expected(names):
    return [TOKEN_DESCRIPTIONS.get(n, n) for n in names if n not in IGNORED_TOKENS]


def _syntax_error_from_lark(text: str, error: UnexpectedInput) -> SchemaSyntaxError:
    if isinstance(error, UnexpectedCharacters):
        pos = error.pos_in_stream
        found = text[pos:pos + 1]
        reason = f"Unexpected character {found!r}"
        expected = error.allowed or ()
    elif isinstance(error, UnexpectedToken):
        token: Token = error.token
        if token.type == '$END':
            pos = len(text)
            reason = "Unexpected end of input"
        else:
            pos = token.start_pos
            reason = f"Unexpected token {str(token)!r}"
        expected = error.expected or ()
    elif isinstance(error, UnexpectedEOF):
        pos = len(text)
        reason = "Unexpected end of input"
        expected = error.expected or ()
    else:
        pos = getattr(error, 'pos_in_stream', None) or 0
        reason = "Syntax error"
        expected = ()
    if pos is None or pos < 0:
        pos = len(text)
    return SchemaSyntaxError(reason, text, pos, describe_expected(expected))


def parse_schema_tree(text):
    """
    Parse Ludwieg schema text into a raw lark parse tree.
    Raises SchemaSyntaxError at the first position where nothing matches.
    """
    try:
        return parser.parse(text)
    except UnexpectedInput as e:
        raise _syntax_error_from_lark(text, e) from e
