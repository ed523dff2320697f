"""Same-line and adjacency rules that the grammar leaves to the source layout."""
import pytest
from ast_builder import parse_package, parse_schema
from schema_ast import ArrayField, Field, IdDeclaration, Struct, TypeSource
from schema_errors import SchemaSyntaxError


@pytest.mark.parametrize("text, fragment", [
    # name on the line after its type
    ("package p {\n    uint8\n    count\n}", "count"),
    ("package p {\n    @foo\n    bar\n}", "bar"),
    ("package p {\n    uint8[4]\n    values\n}", "values"),
    # a comment between a type and its name
    ("package p {\n    uint8 // what\n    count\n}", "count"),
    # opening brace on the next line
    ("package p\n{\n    uint8 a\n}", "{"),
    ("package p {\n    struct s\n    {\n        uint8 a\n    }\n}", "{\n        uint8"),
    # attribute on the next line
    ("package p {\n    uint8 a\n    !deprecated\n}", "!deprecated"),
    # hex value on the next line
    ("package p {\n    id\n    0x01\n}", "0x01"),
    # block names on the next line
    ("package\np { uint8 a }", "p {"),
    ("package p { struct\n s { uint8 a } }", "s {"),
])
def test_same_line_violations(text, fragment):
    with pytest.raises(SchemaSyntaxError) as exc:
        parse_schema(text)
    assert exc.value.pos == text.index(fragment), exc.value.describe()


def test_carriage_return_is_not_same_line_whitespace():
    text = "package p { uint8\rcount }"
    with pytest.raises(SchemaSyntaxError) as exc:
        parse_schema(text)
    assert exc.value.pos == text.index("count")


def test_array_size_must_touch_the_type():
    text = "package p { uint8 [4] values }"
    with pytest.raises(SchemaSyntaxError) as exc:
        parse_schema(text)
    assert exc.value.pos == text.index("[4]")
    assert "must directly follow" in str(exc.value)


def test_name_must_be_separated_from_array_size():
    text = "package p { uint8[4]values }"
    with pytest.raises(SchemaSyntaxError) as exc:
        parse_schema(text)
    assert exc.value.pos == text.index("values")


def test_tabs_are_same_line_whitespace():
    package = parse_package("package\tp\t{\n\tuint8\t\tcount\t!deprecated\n\tstruct\ts\t{ @t\tx }\n}")
    assert package.contents[0].name == "count"
    assert package.contents[1] == Struct("s", [Field(TypeSource.USER, "t", "x")])


def test_keywords_may_touch_what_follows():
    package = parse_package("package p{ id0x10\n struct s{ uint8 a } }")
    assert package.contents == (
        IdDeclaration("0x10"),
        Struct("s", [Field(TypeSource.NATIVE, "uint8", "a")]),
    )


def test_comments_between_members_are_invisible():
    plain = """package p {
    id 0x01
    uint8 a
    struct s {
        bool b
        @t[*] c
    }
    string d
}"""
    commented = """// top
package p { // after the brace
    // before id
    id 0x01 // after id
    // between
    uint8 a
    struct s { // struct opening
        // first
        bool b
        // middle
        @t[*] c
        // last
    }
    // before d
    string d
    // before the closing brace
}
// end"""
    assert parse_schema(commented) == parse_schema(plain)


def test_comment_is_not_recognised_inside_a_token():
    text = "package p { @// c\nfoo bar }"
    with pytest.raises(SchemaSyntaxError) as exc:
        parse_schema(text)
    assert exc.value.pos == text.index("@")


def test_blank_lines_everywhere():
    package = parse_package("\n\n\npackage p {\n\n\n    uint8 a\n\n\n    uint8[] b\n\n\n}\n\n\n")
    assert package.contents == (
        Field(TypeSource.NATIVE, "uint8", "a"),
        ArrayField(TypeSource.NATIVE, "uint8", "b", ""),
    )


def test_trailing_comment_must_not_touch_the_closing_brace():
    text = "package p { uint8 a }// end"
    with pytest.raises(SchemaSyntaxError) as exc:
        parse_schema(text)
    assert exc.value.pos == text.index("//")


@pytest.mark.parametrize("text", [
    "package p { uint8 a } // end",
    "package p { uint8 a }\n// end\n// more",
    "package a { uint8 x }// between\npackage b { uint8 y }",
])
def test_trailing_and_separating_comments(text):
    assert len(parse_schema(text)) >= 1
