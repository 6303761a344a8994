"""Fatal parse errors. Any of these aborts the whole document."""

from __future__ import annotations


class ParseException(Exception):
    def __init__(self, message: str, line: int | None = None, column: int | None = None):
        self.message = message
        self.line = line
        self.column = column
        if line is not None:
            message = f"Error: {message} at {line}:{column}"
        super().__init__(message)


class UnterminatedString(ParseException):
    pass


class UnterminatedTypeHint(ParseException):
    pass


class UnterminatedChildren(ParseException):
    pass


class MissingPropertyValue(ParseException):
    pass


class InvalidEscapeSequence(ParseException):
    pass


class InvalidUnicodeEscape(ParseException):
    pass


class MalformedBasedLiteral(ParseException):
    pass


class UnexpectedCharacter(ParseException):
    pass


class NestingTooDeep(ParseException):
    """Children blocks nested deeper than the interpreter stack allows."""


__all__ = [
    "ParseException",
    "UnterminatedString",
    "UnterminatedTypeHint",
    "UnterminatedChildren",
    "MissingPropertyValue",
    "InvalidEscapeSequence",
    "InvalidUnicodeEscape",
    "MalformedBasedLiteral",
    "UnexpectedCharacter",
    "NestingTooDeep",
]
