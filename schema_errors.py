"""
schema_errors.py
The single error kind raised while parsing Ludwieg schema text.
"""
from typing import Iterable, Optional


def line_and_column(text: str, pos: int):
    """Return the 1-based (line, column) of a character offset in text."""
    pos = max(0, min(pos, len(text)))
    line = text.count('\n', 0, pos) + 1
    column = pos - (text.rfind('\n', 0, pos) + 1) + 1
    return line, column


class SchemaSyntaxError(SyntaxError):
    """
    Raised when no grammar alternative matches at some position of the input.

    Attributes:
        pos: 0-based character offset of the failure
        line: 1-based line of the failure
        column: 1-based column of the failure
        expected: sorted list of token names that were being attempted
        context: the offending source line followed by a caret line
    """

    def __init__(self, reason: str, text: str, pos: int, expected: Optional[Iterable[str]] = None):
        self.reason = reason
        self.pos = pos
        self.line, self.column = line_and_column(text, pos)
        self.expected = sorted(set(expected or []))
        self.context = _context_line(text, pos, self.column)
        super().__init__(f"{reason} at line {self.line}, column {self.column}")

    def describe(self) -> str:
        """Multi-line description with the source context and expected tokens."""
        lines = [str(self), self.context]
        if self.expected:
            lines.append(f"Expected one of: {', '.join(self.expected)}")
        return "\n".join(lines)


def _context_line(text: str, pos: int, column: int) -> str:
    start = text.rfind('\n', 0, pos) + 1
    end = text.find('\n', pos)
    if end == -1:
        end = len(text)
    source_line = text[start:end].rstrip('\r').expandtabs(1)
    return f"{source_line}\n{' ' * (column - 1)}^"
