"""Custom exceptions for flashmap."""

from __future__ import annotations


class FlashmapError(Exception):
    """Base exception for flashmap operations."""


class ParseError(FlashmapError):
    """Syntax error in a flashmap descriptor.

    Attributes:
        line: 1-based line of the offending token.
        column: 1-based column of the offending token.
        offset: Absolute character offset of the offending token.
        expected: Description of what the parser expected, if known.
        found: Text of the offending token ("" at end of input).
    """

    def __init__(
        self,
        message: str,
        *,
        line: int,
        column: int,
        offset: int,
        expected: str | None = None,
        found: str = "",
    ) -> None:
        super().__init__(f"{line}:{column}: {message}")
        self.line = line
        self.column = column
        self.offset = offset
        self.expected = expected
        self.found = found


class LayoutError(FlashmapError):
    """A layout edit could not be applied to the section tree."""


class SectionNotFoundError(LayoutError):
    """A section required by a layout edit does not exist."""
