"""Parsing, tree building and canonical formatting for KDL documents."""

from .errors import (
    InvalidEscapeSequence,
    InvalidUnicodeEscape,
    MalformedBasedLiteral,
    MissingPropertyValue,
    NestingTooDeep,
    ParseException,
    UnexpectedCharacter,
    UnterminatedChildren,
    UnterminatedString,
    UnterminatedTypeHint,
)
from .nodes import (
    BasedNumber,
    BoolValue,
    DecimalNumber,
    Keyword,
    KdlValue,
    Node,
    NullValue,
    NumberValue,
    Radix,
    StringValue,
)
from .document import KdlDocument
from .formatter import KdlFormatter, format_document
from .visitor import Event, EventKind, EventRecorder, KdlVisitor
from .parser import KdlParser, ParserConfig, parse
from .builder import DocumentBuilder, parse_document

__all__ = [
    "InvalidEscapeSequence",
    "InvalidUnicodeEscape",
    "MalformedBasedLiteral",
    "MissingPropertyValue",
    "NestingTooDeep",
    "ParseException",
    "UnexpectedCharacter",
    "UnterminatedChildren",
    "UnterminatedString",
    "UnterminatedTypeHint",
    "BasedNumber",
    "BoolValue",
    "DecimalNumber",
    "Keyword",
    "KdlValue",
    "Node",
    "NullValue",
    "NumberValue",
    "Radix",
    "StringValue",
    "KdlDocument",
    "KdlFormatter",
    "format_document",
    "Event",
    "EventKind",
    "EventRecorder",
    "KdlVisitor",
    "KdlParser",
    "ParserConfig",
    "parse",
    "DocumentBuilder",
    "parse_document",
]
