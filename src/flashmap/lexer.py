"""Tokenizer for the flashmap descriptor language."""

from __future__ import annotations

import bisect
import re
from dataclasses import dataclass
from typing import Literal, TypeAlias

from flashmap.exceptions import ParseError
from flashmap.units import UNIT_MULTIPLIERS

TokenKind: TypeAlias = Literal["IDENT", "INT", "LPAREN", "RPAREN", "LBRACE", "RBRACE", "AT", "EOF"]

_PUNCTUATION: dict[str, TokenKind] = {
    "(": "LPAREN",
    ")": "RPAREN",
    "{": "LBRACE",
    "}": "RBRACE",
    "@": "AT",
}

_WHITESPACE_RE = re.compile(r"\s+")
_LINE_COMMENT_RE = re.compile(r"//[^\n]*")
_BLOCK_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_IDENT_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
# The trailing group catches letters glued to a number, e.g. the unit in `4k`.
_INT_RE = re.compile(r"(0[xX][0-9a-fA-F]+|[0-9]+)([A-Za-z0-9_]*)")


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexical token."""

    kind: TokenKind
    value: str
    offset: int
    line: int
    column: int

    def describe(self) -> str:
        if self.kind == "EOF":
            return "end of input"
        return repr(self.value)


def _compute_line_starts(text: str) -> list[int]:
    starts = [0]
    for match in re.finditer(r"\n", text):
        starts.append(match.end())
    return starts


class _Scanner:
    def __init__(self, text: str) -> None:
        self._text = text
        self._line_starts = _compute_line_starts(text)
        self._tokens: list[Token] = []

    def position(self, offset: int) -> tuple[int, int]:
        """Return the 1-based (line, column) of an offset."""
        idx = bisect.bisect_right(self._line_starts, offset) - 1
        return idx + 1, offset - self._line_starts[idx] + 1

    def emit(self, kind: TokenKind, value: str, offset: int) -> None:
        line, column = self.position(offset)
        self._tokens.append(Token(kind=kind, value=value, offset=offset, line=line, column=column))

    def error(self, message: str, offset: int, found: str) -> ParseError:
        line, column = self.position(offset)
        return ParseError(message, line=line, column=column, offset=offset, found=found)

    def scan(self) -> list[Token]:
        text = self._text
        pos = 0
        while pos < len(text):
            char = text[pos]

            match = _WHITESPACE_RE.match(text, pos)
            if match:
                pos = match.end()
                continue

            if text.startswith("//", pos):
                pos = _LINE_COMMENT_RE.match(text, pos).end()
                continue

            if text.startswith("/*", pos):
                match = _BLOCK_COMMENT_RE.match(text, pos)
                if not match:
                    raise self.error("unterminated comment", pos, "/*")
                pos = match.end()
                continue

            if char in _PUNCTUATION:
                self.emit(_PUNCTUATION[char], char, pos)
                pos += 1
                continue

            match = _INT_RE.match(text, pos)
            if match:
                number, suffix = match.groups()
                if suffix and suffix not in UNIT_MULTIPLIERS:
                    raise self.error(
                        f"malformed integer literal {match.group()!r}", pos, match.group()
                    )
                self.emit("INT", number, pos)
                if suffix:
                    self.emit("IDENT", suffix, match.start(2))
                pos = match.end()
                continue

            match = _IDENT_RE.match(text, pos)
            if match:
                self.emit("IDENT", match.group(), pos)
                pos = match.end()
                continue

            raise self.error(f"unexpected character {char!r}", pos, char)

        self.emit("EOF", "", pos)
        return self._tokens


def tokenize(text: str) -> list[Token]:
    """Split descriptor text into tokens, ending with an EOF token.

    Raises:
        ParseError: On characters or literals outside the token grammar.
    """
    return _Scanner(text).scan()


def parse_int_literal(value: str) -> int:
    """Convert a decimal or ``0x``-prefixed hexadecimal literal to an int."""
    if value[:2] in ("0x", "0X"):
        return int(value[2:], 16)
    return int(value, 10)
