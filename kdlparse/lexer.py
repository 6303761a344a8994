"""Lexical primitives: a rewindable cursor, quoted strings and raw strings."""

from __future__ import annotations

from typing import Callable, Iterable, Iterator

from kdlparse.chars import is_hex_digit, is_newline
from kdlparse.errors import InvalidEscapeSequence, InvalidUnicodeEscape, ParseException, UnterminatedString

SIMPLE_ESCAPES: dict[str, str] = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "\\": "\\",
    "/": "/",
    '"': '"',
    "b": "\b",
    "f": "\f",
}

MAX_UNICODE_ESCAPE_DIGITS = 6


class Cursor:
    """Read position over a fully buffered document.

    Backtracking takes a ``snapshot()`` (a plain integer position) and hands it
    back to ``restore()``; nothing is copied.
    """

    __slots__ = ("text", "position")

    def __init__(self, text: str | Iterable[str], position: int = 0):
        self.text = text if isinstance(text, str) else "".join(text)
        self.position = position

    @property
    def at_end(self) -> bool:
        return self.position >= len(self.text)

    @property
    def char(self) -> str:
        return self.peek()

    def snapshot(self) -> int:
        return self.position

    def restore(self, mark: int) -> None:
        self.position = mark

    def peek(self, ahead: int = 0) -> str:
        index = self.position + ahead
        if index >= len(self.text):
            return "\0"
        return self.text[index]

    def advance(self, steps: int = 1) -> str:
        if self.position + steps > len(self.text):
            raise self.error(ParseException, "Attempt to advance beyond end of input")
        consumed = self.text[self.position : self.position + steps]
        self.position += steps
        return consumed

    def startswith(self, literal: str) -> bool:
        return self.text.startswith(literal, self.position)

    def try_consume(self, literal: str) -> bool:
        """Consume ``literal`` if the input starts with it; otherwise leave the position alone."""
        if literal and self.startswith(literal):
            self.position += len(literal)
            return True
        return False

    def consume_while(self, condition: Callable[[str], bool]) -> str:
        start = self.position
        while not self.at_end and condition(self.text[self.position]):
            self.position += 1
        return self.text[start : self.position]

    def span(self, start: int, end: int | None = None) -> str:
        return self.text[start : self.position if end is None else end]

    def location(self, position: int | None = None) -> tuple[int, int]:
        """1-based line and column of ``position`` (defaults to the current one)."""
        position = self.position if position is None else position
        line, column = 1, 1
        index = 0
        while index < position:
            char = self.text[index]
            if char == "\r" and index + 1 < position and self.text[index + 1] == "\n":
                index += 1
            if is_newline(char):
                line += 1
                column = 1
            else:
                column += 1
            index += 1
        return line, column

    def error(self, error_type: type[ParseException], message: str, position: int | None = None) -> ParseException:
        line, column = self.location(position)
        return error_type(message, line, column)


class EscapedStringReader:
    """Iterates the decoded characters of a double-quoted string body.

    The cursor must sit just past the opening quote. Iteration stops once the
    closing unescaped quote has been consumed; that quote is not yielded.
    """

    def __init__(self, cursor: Cursor):
        self.cursor = cursor
        self.start = cursor.position
        self.closed = False

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        if self.closed:
            raise StopIteration
        cursor = self.cursor
        if cursor.at_end:
            raise cursor.error(UnterminatedString, "Unterminated string literal", self.start - 1)
        char = cursor.advance()
        if char == '"':
            self.closed = True
            raise StopIteration
        if char != "\\":
            return char
        return self._read_escape()

    def _read_escape(self) -> str:
        cursor = self.cursor
        escape_start = cursor.position - 1
        if cursor.at_end:
            raise cursor.error(UnterminatedString, "Unterminated string literal", self.start - 1)
        code = cursor.advance()
        if code in SIMPLE_ESCAPES:
            return SIMPLE_ESCAPES[code]
        if code == "u":
            return self._read_unicode_escape(escape_start)
        raise cursor.error(InvalidEscapeSequence, f"Invalid escape sequence '\\{code}'", escape_start)

    def _read_unicode_escape(self, escape_start: int) -> str:
        cursor = self.cursor
        if cursor.at_end:
            raise cursor.error(UnterminatedString, "Unterminated string literal", self.start - 1)
        if not cursor.try_consume("{"):
            raise cursor.error(InvalidUnicodeEscape, "Expected '{' after \\u", escape_start)
        digits = cursor.consume_while(is_hex_digit)
        if not cursor.try_consume("}"):
            if cursor.at_end:
                raise cursor.error(UnterminatedString, "Unterminated string literal", self.start - 1)
            raise cursor.error(InvalidUnicodeEscape, "Invalid unicode escape sequence", escape_start)
        if not 1 <= len(digits) <= MAX_UNICODE_ESCAPE_DIGITS:
            raise cursor.error(
                InvalidUnicodeEscape,
                f"Unicode escape needs 1 to {MAX_UNICODE_ESCAPE_DIGITS} hex digits",
                escape_start,
            )
        codepoint = int(digits, 16)
        if codepoint > 0x10FFFF or 0xD800 <= codepoint <= 0xDFFF:
            raise cursor.error(InvalidUnicodeEscape, f"\\u{{{digits}}} is not a unicode scalar value", escape_start)
        return chr(codepoint)


def read_escaped_string(cursor: Cursor) -> str | None:
    """Reads a quoted string and returns its decoded contents, or None if the cursor is not on a quote."""
    if not cursor.try_consume('"'):
        return None
    return "".join(EscapedStringReader(cursor))


def read_raw_string(cursor: Cursor) -> str | None:
    """Reads ``r#"..."#`` and returns the verbatim contents.

    An incomplete opener (``r`` or ``r##`` without a quote) is not a raw
    string: the cursor is restored and None returned.
    """
    start = cursor.snapshot()
    if not cursor.try_consume("r"):
        return None
    hashes = len(cursor.consume_while(lambda c: c == "#"))
    if not cursor.try_consume('"'):
        cursor.restore(start)
        return None
    close_tag = '"' + "#" * hashes
    body_start = cursor.position
    end = cursor.text.find(close_tag, body_start)
    if end < 0:
        cursor.position = len(cursor.text)
        raise cursor.error(UnterminatedString, "Unterminated raw string literal", start)
    cursor.position = end + len(close_tag)
    return cursor.text[body_start:end]


__all__ = ["Cursor", "EscapedStringReader", "read_escaped_string", "read_raw_string", "SIMPLE_ESCAPES"]
