"""
schema_printer.py
Turns a schema_ast.Document back into Ludwieg source text, and renders an
indented debug dump of the AST.
"""
from typing import List

from schema_ast import ArrayField, Document, Field, IdDeclaration, Package, Struct, TypeSource

# A block must hold at least one member; an empty one is written as a comment.
EMPTY_BLOCK_COMMENT = "// empty"


def format_type(member: Field) -> str:
    if member.source == TypeSource.USER:
        return f"@{member.kind}"
    return member.kind


def format_declaration(member) -> str:
    """Single-line source text for an id, field or array declaration."""
    if isinstance(member, IdDeclaration):
        return f"id {member.value}"
    text = format_type(member)
    if isinstance(member, ArrayField):
        text += f"[{member.size}]"
    text += f" {member.name}"
    for attribute in member.attributes or ():
        text += f" !{attribute.value}"
    return text


def _format_block(keyword: str, node, level: int, indent: str, lines: List[str]) -> None:
    pad = indent * level
    lines.append(f"{pad}{keyword} {node.name} {{")
    if not node.contents:
        lines.append(f"{pad}{indent}{EMPTY_BLOCK_COMMENT}")
    for member in node.contents:
        if isinstance(member, Struct):
            _format_block("struct", member, level + 1, indent, lines)
        else:
            lines.append(f"{pad}{indent}{format_declaration(member)}")
    lines.append(f"{pad}}}")


def format_package(package: Package, indent: str = "    ") -> str:
    lines: List[str] = []
    _format_block("package", package, 0, indent, lines)
    return "\n".join(lines) + "\n"


def format_document(document: Document, indent: str = "    ") -> str:
    """
    Canonical source text for a document: one declaration per line, nested
    structs indented, packages separated by a blank line. Parsing the result
    gives back an equal Document.
    """
    return "\n".join(format_package(package, indent) for package in document)


def dump_document(document: Document) -> str:
    """Indented, human readable dump of the AST for debugging."""
    lines: List[str] = []

    def add_line(level, text):
        lines.append('  ' * level + text)

    def dump_member(member, level):
        if isinstance(member, IdDeclaration):
            add_line(level, f"Identifier: {member.value}")
        elif isinstance(member, Struct):
            add_line(level, f"Struct {member.name}")
            for child in member.contents:
                dump_member(child, level + 1)
        else:
            details = f"{member.source.value} {member.kind}"
            if isinstance(member, ArrayField):
                details += f" size='{member.size}'"
            if member.attributes:
                details += f" attributes={[a.value for a in member.attributes]}"
            add_line(level, f"{type(member).__name__} {member.name}: {details}")

    for package in document:
        add_line(0, f"Package {package.name}")
        for member in package.contents:
            dump_member(member, 1)
    return "\n".join(lines)
