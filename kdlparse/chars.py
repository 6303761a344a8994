"""Character classes used by the lexer, the parser and the formatter."""

from __future__ import annotations

WHITESPACE: frozenset[str] = frozenset(
    chr(codepoint)
    for codepoint in (0x0009, 0x0020, 0x00A0, 0x1680, *range(0x2000, 0x200B), 0x202F, 0x205F, 0x3000)
)
NEWLINES: frozenset[str] = frozenset(chr(codepoint) for codepoint in (0x000D, 0x000A, 0x0085, 0x000C, 0x2028, 0x2029))
DIGITS: frozenset[str] = frozenset("0123456789")
HEX_DIGITS: frozenset[str] = DIGITS | frozenset("abcdefABCDEF")
OCTAL_DIGITS: frozenset[str] = frozenset("01234567")
BINARY_DIGITS: frozenset[str] = frozenset("01")
ILLEGAL_IDENTIFIER_PUNCTUATION: frozenset[str] = frozenset('\\/(){}<>;[]=,"')

# Everything below the space character is outside the printable range.
_FIRST_PRINTABLE = 0x20


def is_whitespace(char: str) -> bool:
    return char in WHITESPACE


def is_newline(char: str) -> bool:
    return char in NEWLINES


def is_digit(char: str) -> bool:
    return char in DIGITS


def is_hex_digit(char: str) -> bool:
    return char in HEX_DIGITS


def is_octal_digit(char: str) -> bool:
    return char in OCTAL_DIGITS


def is_binary_digit(char: str) -> bool:
    return char in BINARY_DIGITS


def is_identifier_illegal(char: str) -> bool:
    """True for characters that may never appear in a bare identifier."""
    if char in ILLEGAL_IDENTIFIER_PUNCTUATION or char in WHITESPACE or char in NEWLINES:
        return True
    return ord(char) < _FIRST_PRINTABLE


def is_non_initial(char: str) -> bool:
    """True for characters that may not start a bare identifier."""
    return char in DIGITS or is_identifier_illegal(char)


DIGITS_BY_RADIX: dict[int, frozenset[str]] = {2: BINARY_DIGITS, 8: OCTAL_DIGITS, 16: HEX_DIGITS}
