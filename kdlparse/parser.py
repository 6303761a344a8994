"""Recursive-descent KDL grammar with cursor backtracking.

Every rule with alternatives takes a cursor snapshot, tries each branch in
order and restores the snapshot when a branch does not match. Only rules
that have fully matched report to the visitor. Structural errors that can
not be recovered by trying another branch raise a ``ParseException``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, NotRequired, Optional, TypedDict

from kdlparse.chars import DIGITS, DIGITS_BY_RADIX, is_digit, is_identifier_illegal, is_newline, is_non_initial, is_whitespace
from kdlparse.errors import (
    MalformedBasedLiteral,
    MissingPropertyValue,
    NestingTooDeep,
    ParseException,
    UnexpectedCharacter,
    UnterminatedChildren,
    UnterminatedTypeHint,
)
from kdlparse.lexer import Cursor, read_escaped_string, read_raw_string
from kdlparse.logger import Logger
from kdlparse.nodes import BasedNumber, DecimalNumber, Keyword, Radix
from kdlparse.utils import resolve_config
from kdlparse.visitor import EventKind, KdlVisitor

BYTE_ORDER_MARK = chr(0xFEFF)
RESERVED_WORDS = frozenset(keyword.value for keyword in Keyword)
BASED_PREFIXES: tuple[tuple[str, Radix], ...] = tuple((radix.prefix, radix) for radix in Radix)


class ParserConfig(TypedDict):
    enable_logger: NotRequired[bool]
    skip_bom: NotRequired[bool]


class ParserConfigRequired(TypedDict):
    enable_logger: bool
    skip_bom: bool


DEFAULT_CONFIG: ParserConfigRequired = {"enable_logger": False, "skip_bom": True}


@dataclass(slots=True)
class ValueMatch:
    """A fully read value, held back until the rule that owns it commits."""

    slashdash: bool
    type_hint: str | None
    kind: EventKind
    args: tuple[Any, ...]

    def emit(self, visitor: KdlVisitor) -> None:
        if self.slashdash:
            visitor.slashdash()
        if self.type_hint is not None:
            visitor.type_hint(self.type_hint)
        getattr(visitor, self.kind.name.lower())(*self.args)


class KdlParser:
    def __init__(self, text: str | Iterable[str], visitor: KdlVisitor, config: Optional[ParserConfig] = None):
        self.config = resolve_config(config or {}, DEFAULT_CONFIG)
        self.logger = Logger(config={"name": "Parser Logger", "is_enabled": self.config["enable_logger"]}).logger
        self.cursor = Cursor(text)
        self.visitor = visitor
        self.logger.info("Parser initialized")

    def parse(self) -> None:
        """Runs the whole document through the visitor, or raises on the first fatal error."""
        try:
            self.logger.info("Starting parse")
            if self.config["skip_bom"]:
                self.cursor.try_consume(BYTE_ORDER_MARK)
            self.visitor.document_begin()
            try:
                self._parse_nodes()
            except RecursionError:
                raise self.cursor.error(NestingTooDeep, "Children blocks are nested too deeply") from None
            if not self.cursor.at_end:
                raise self.cursor.error(UnexpectedCharacter, f"Unexpected character {self.cursor.char!r}")
            self.visitor.document_end()
            self.logger.info("Parse complete")
        except ParseException as e:
            self.logger.error(e)
            raise

    # Nodes -------------------------------------------------------------------
    def _parse_nodes(self) -> None:
        while True:
            self._read_line_space()
            if not self._parse_node():
                break

    def _parse_node(self) -> bool:
        cursor = self.cursor
        start = cursor.snapshot()
        slashdash = cursor.try_consume("/-")
        if slashdash:
            self._read_node_space()
        type_hint = self._read_type_hint()
        name = self._read_identifier()
        if name is None:
            cursor.restore(start)
            return False

        self.logger.debug(f"Parsed node '{name}' at offset {start}")
        if slashdash:
            self.visitor.slashdash()
        if type_hint is not None:
            self.visitor.type_hint(type_hint)
        self.visitor.node(name)

        while True:
            mark = cursor.snapshot()
            if not self._read_node_space():
                break
            if self._parse_property():
                continue
            if self._parse_value():
                continue
            cursor.restore(mark)
            break

        if self._parse_children():
            # The closing brace ends the node; a sibling may follow on the same line.
            self._read_node_space()
            cursor.try_consume(";")
        else:
            self._read_terminator()
        self.visitor.node_end()
        return True

    def _parse_children(self) -> bool:
        cursor = self.cursor
        start = cursor.snapshot()
        self._read_node_space()
        slashdash = cursor.try_consume("/-")
        if slashdash:
            self._read_node_space()
        opening = cursor.snapshot()
        if not cursor.try_consume("{"):
            cursor.restore(start)
            return False

        if slashdash:
            self.visitor.slashdash()
        self.visitor.children_begin()
        self._parse_nodes()
        if not cursor.try_consume("}"):
            if cursor.at_end:
                raise cursor.error(UnterminatedChildren, "Expected closing '}' after node children", opening)
            raise cursor.error(UnterminatedChildren, f"Expected closing '}}' but found {cursor.char!r}")
        self.visitor.children_end()
        return True

    def _read_terminator(self) -> None:
        cursor = self.cursor
        self._read_node_space()
        if cursor.at_end or cursor.try_consume(";"):
            return
        if is_newline(cursor.char) or cursor.startswith("//") or cursor.char == "}":
            return
        raise cursor.error(UnexpectedCharacter, f"Unexpected character {cursor.char!r} after node")

    # Properties and values ---------------------------------------------------
    def _parse_property(self) -> bool:
        cursor = self.cursor
        start = cursor.snapshot()
        slashdash = cursor.try_consume("/-")
        if slashdash:
            self._read_node_space()
        name = self._read_identifier()
        if name is None or not cursor.try_consume("="):
            cursor.restore(start)
            return False

        value = self._read_value(allow_slashdash=False)
        if value is None:
            raise cursor.error(MissingPropertyValue, f"Property '{name}' has an invalid or missing value")
        if slashdash:
            self.visitor.slashdash()
        self.visitor.property(name)
        value.emit(self.visitor)
        return True

    def _parse_value(self) -> bool:
        value = self._read_value()
        if value is None:
            return False
        value.emit(self.visitor)
        return True

    def _read_value(self, allow_slashdash: bool = True) -> ValueMatch | None:
        cursor = self.cursor
        start = cursor.snapshot()
        slashdash = allow_slashdash and cursor.try_consume("/-")
        if slashdash:
            self._read_node_space()
        type_hint = self._read_type_hint()

        text = read_raw_string(cursor)
        if text is None:
            text = read_escaped_string(cursor)
        if text is not None:
            return ValueMatch(slashdash, type_hint, EventKind.VALUE_STRING, (text,))

        number = self._read_number()
        if number is not None:
            return ValueMatch(slashdash, type_hint, EventKind.VALUE_NUMBER, number)

        for keyword in Keyword:
            if cursor.try_consume(keyword.value):
                return ValueMatch(slashdash, type_hint, EventKind.VALUE_KEYWORD, (keyword,))

        cursor.restore(start)
        return None

    # Identifiers -------------------------------------------------------------
    def _read_identifier(self) -> str | None:
        cursor = self.cursor
        start = cursor.snapshot()
        text = read_raw_string(cursor)
        if text is None:
            text = read_escaped_string(cursor)
        if text is None:
            return self._read_bare_identifier()
        if not text:
            cursor.restore(start)
            return None
        return text

    def _read_bare_identifier(self) -> str | None:
        cursor = self.cursor
        if cursor.at_end or is_non_initial(cursor.char):
            return None
        # A sign followed by a digit starts a number.
        if cursor.char in "+-" and is_digit(cursor.peek(1)):
            return None
        start = cursor.snapshot()
        text = cursor.consume_while(lambda c: not is_identifier_illegal(c))
        if text in RESERVED_WORDS:
            cursor.restore(start)
            return None
        return text

    def _read_type_hint(self) -> str | None:
        cursor = self.cursor
        start = cursor.snapshot()
        if not cursor.try_consume("("):
            return None
        hint = self._read_identifier()
        if hint is None:
            cursor.restore(start)
            return None
        if not cursor.try_consume(")"):
            raise cursor.error(UnterminatedTypeHint, "Type hint closing parenthesis missing or not adjacent to type", start)
        return hint

    # Numbers -----------------------------------------------------------------
    def _read_number(self) -> tuple[DecimalNumber | BasedNumber, str] | None:
        cursor = self.cursor
        start = cursor.snapshot()
        negative = cursor.char == "-"
        if cursor.char in "+-":
            cursor.advance()

        for prefix, radix in BASED_PREFIXES:
            if cursor.try_consume(prefix):
                digits = self._read_digit_group(DIGITS_BY_RADIX[radix])
                if digits is None:
                    raise cursor.error(MalformedBasedLiteral, f"Expected a base-{int(radix)} digit after '{prefix}'", start)
                number = BasedNumber(radix=radix, magnitude=int(digits, int(radix)), negative=negative)
                return number, cursor.span(start)

        integral = self._read_digit_group(DIGITS)
        if integral is None:
            cursor.restore(start)
            return None

        fractional = ""
        mark = cursor.snapshot()
        if cursor.try_consume("."):
            digits = self._read_digit_group(DIGITS)
            if digits is None:
                cursor.restore(mark)
            else:
                fractional = digits

        exponent: int | None = None
        exponent_negative = False
        mark = cursor.snapshot()
        if cursor.char in "eE":
            cursor.advance()
            exponent_negative = cursor.char == "-"
            if cursor.char in "+-":
                cursor.advance()
            digits = self._read_digit_group(DIGITS)
            if digits is None:
                cursor.restore(mark)
                exponent_negative = False
            else:
                exponent = int(digits)

        number = DecimalNumber(
            negative=negative,
            integral=int(integral),
            fractional=int(fractional or "0"),
            fractional_digits=len(fractional),
            exponent_negative=exponent_negative,
            exponent=exponent,
        )
        return number, cursor.span(start)

    def _read_digit_group(self, digits: frozenset[str]) -> str | None:
        """A digit followed by digits or ``_`` separators; returns the digits only."""
        cursor = self.cursor
        if cursor.at_end or cursor.char not in digits:
            return None
        text = cursor.consume_while(lambda c: c in digits or c == "_")
        return text.replace("_", "")

    # Spacing and comments ----------------------------------------------------
    def _read_line_space(self) -> None:
        while self._read_newline() or self._read_whitespace() or self._read_single_line_comment():
            pass

    def _read_node_space(self) -> bool:
        seen = False
        while self._read_whitespace() or self._read_line_continuation():
            seen = True
        return seen

    def _read_whitespace(self) -> bool:
        seen = False
        while True:
            if self.cursor.consume_while(is_whitespace):
                seen = True
                continue
            if self._read_block_comment():
                seen = True
                continue
            return seen

    def _read_line_continuation(self) -> bool:
        cursor = self.cursor
        start = cursor.snapshot()
        if not cursor.try_consume("\\"):
            return False
        self._read_whitespace()
        if self._read_single_line_comment() or self._read_newline() or cursor.at_end:
            return True
        cursor.restore(start)
        return False

    def _read_newline(self) -> bool:
        cursor = self.cursor
        if cursor.try_consume("\r\n"):
            return True
        if not cursor.at_end and is_newline(cursor.char):
            cursor.advance()
            return True
        return False

    def _read_single_line_comment(self) -> bool:
        cursor = self.cursor
        if not cursor.try_consume("//"):
            return False
        cursor.consume_while(lambda c: not is_newline(c))
        self._read_newline()
        return True

    def _read_block_comment(self) -> bool:
        cursor = self.cursor
        start = cursor.snapshot()
        if not cursor.try_consume("/*"):
            return False
        depth = 1
        while not cursor.at_end:
            if cursor.try_consume("/*"):
                depth += 1
            elif cursor.try_consume("*/"):
                depth -= 1
                if depth == 0:
                    return True
            else:
                cursor.advance()
        # Unterminated: leave it for the caller's next alternative.
        cursor.restore(start)
        return False


def parse(text: str | Iterable[str], visitor: KdlVisitor, config: Optional[ParserConfig] = None) -> None:
    KdlParser(text, visitor, config=config).parse()


__all__ = ["KdlParser", "ParserConfig", "DEFAULT_CONFIG", "ValueMatch", "parse"]
