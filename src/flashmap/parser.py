"""Parse flashmap descriptor text into a Section tree.

Grammar::

    section    := IDENT annotation? address? size_spec block*
    annotation := '(' IDENT* ')'
    address    := '@' INT
    size_spec  := INT unit?
    unit       := 'k' | 'K' | 'm' | 'M'
    block      := '{' section* '}'

The document is a single section; everything after it must be whitespace or
comments.
"""

from __future__ import annotations

import logging
from os import PathLike
from pathlib import Path
from typing import IO, cast

from flashmap.exceptions import ParseError
from flashmap.lexer import Token, TokenKind, parse_int_literal, tokenize
from flashmap.schemas import Section
from flashmap.units import UNIT_MULTIPLIERS, SizeUnit

logger = logging.getLogger(__name__)

_KIND_NAMES: dict[TokenKind, str] = {
    "IDENT": "identifier",
    "INT": "integer",
    "LPAREN": "'('",
    "RPAREN": "')'",
    "LBRACE": "'{'",
    "RBRACE": "'}'",
    "AT": "'@'",
    "EOF": "end of input",
}


class _Parser:
    """Recursive descent parser for the descriptor grammar."""

    def __init__(self, tokens: list[Token]) -> None:
        self._tokens = tokens
        self._pos = 0

    def _peek(self) -> Token:
        return self._tokens[self._pos]

    def _advance(self) -> Token:
        tok = self._tokens[self._pos]
        if self._pos < len(self._tokens) - 1:
            self._pos += 1
        return tok

    def _accept(self, kind: TokenKind) -> Token | None:
        if self._peek().kind == kind:
            return self._advance()
        return None

    def _expect(self, kind: TokenKind, what: str | None = None) -> Token:
        tok = self._peek()
        if tok.kind == kind:
            return self._advance()
        raise self._error(what or _KIND_NAMES[kind], tok)

    def _error(self, expected: str, tok: Token) -> ParseError:
        return ParseError(
            f"unexpected {tok.describe()} (expected {expected})",
            line=tok.line,
            column=tok.column,
            offset=tok.offset,
            expected=expected,
            found=tok.value,
        )

    def expect_end(self) -> None:
        self._expect("EOF")

    def parse_document(self) -> Section:
        section = self.parse_section()
        self.expect_end()
        return section

    def parse_section(self) -> Section:
        """Parse one section and everything nested inside it.

        Open blocks are tracked on an explicit stack, so nesting depth is not
        bounded by the interpreter's recursion limit.
        """
        root = self._parse_header()
        open_sections: list[Section] = []
        if self._accept("LBRACE"):
            open_sections.append(root)

        while open_sections:
            tok = self._peek()
            if tok.kind == "RBRACE":
                self._advance()
                # `{ A } { B }` keeps adding to the same section
                if not self._accept("LBRACE"):
                    open_sections.pop()
                continue
            if tok.kind != "IDENT":
                raise self._error("section name or '}'", tok)
            child = self._parse_header()
            open_sections[-1].children.append(child)
            if self._accept("LBRACE"):
                open_sections.append(child)

        return root

    def _parse_header(self) -> Section:
        name = self._expect("IDENT", "section name").value

        annotation: str | None = None
        if self._accept("LPAREN"):
            words: list[str] = []
            while (tok := self._accept("IDENT")) is not None:
                words.append(tok.value)
            self._expect("RPAREN", "identifier or ')'")
            annotation = " ".join(words)

        start: int | None = None
        if self._accept("AT"):
            start = parse_int_literal(self._expect("INT", "start offset").value)

        size, unit = self.parse_size_spec()
        return Section(name=name, annotation=annotation, start=start, size=size, unit=unit)

    def parse_size_spec(self) -> tuple[int, SizeUnit | None]:
        size = parse_int_literal(self._expect("INT", "size").value)
        unit: SizeUnit | None = None
        tok = self._peek()
        if tok.kind == "IDENT" and tok.value in UNIT_MULTIPLIERS:
            unit = cast(SizeUnit, self._advance().value)
        return size, unit


def parse_flashmap(text: str | bytes) -> Section:
    """Parse a complete flashmap descriptor.

    Args:
        text: Descriptor source. Bytes are decoded as UTF-8.

    Returns:
        The root Section.

    Raises:
        ParseError: If the input does not match the grammar.
    """
    if isinstance(text, bytes):
        text = _decode(text)
    root = _Parser(tokenize(text)).parse_document()
    logger.debug("Parsed flashmap %s with %d top-level sections", root.name, len(root.children))
    return root


def _decode(data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        prefix = data[: exc.start].decode("utf-8", errors="replace")
        line = prefix.count("\n") + 1
        column = len(prefix) - (prefix.rfind("\n") + 1) + 1
        raise ParseError(
            "invalid UTF-8 in input",
            line=line,
            column=column,
            offset=len(prefix),
            found=repr(data[exc.start : exc.end]),
        ) from exc


def read_flashmap(source: str | PathLike[str] | IO[str] | IO[bytes]) -> Section:
    """Read a whole descriptor from a path or open stream and parse it.

    Raises:
        OSError: If the source cannot be read.
        ParseError: If the input does not match the grammar.
    """
    if isinstance(source, (str, PathLike)):
        data: str | bytes = Path(source).read_bytes()
    else:
        data = source.read()
    return parse_flashmap(data)


def parse_size_spec(text: str) -> tuple[int, SizeUnit | None]:
    """Parse a standalone size such as ``"4k"`` or ``"0x1000"``.

    Raises:
        ParseError: If ``text`` is not a single size specification.
    """
    parser = _Parser(tokenize(text))
    result = parser.parse_size_spec()
    parser.expect_end()
    return result
