"""Formatter rendering KDL documents to canonical text."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .chars import is_digit, is_identifier_illegal, is_non_initial
from .nodes import BasedNumber, BoolValue, DecimalNumber, KdlValue, Node, NullValue, NumberValue, StringValue

if TYPE_CHECKING:
    from .document import KdlDocument

RESERVED_WORDS = frozenset({"true", "false", "null"})

ESCAPES: dict[str, str] = {
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\\": "\\\\",
    '"': '\\"',
    "\b": "\\b",
    "\f": "\\f",
}


def escape_string(text: str) -> str:
    return '"' + "".join(ESCAPES.get(char, char) for char in text) + '"'


def needs_quotes(text: str) -> bool:
    """Whether ``text`` must be written as a quoted string to read back as the same identifier."""
    if not text:
        raise ValueError("Identifiers cannot be empty")
    if text in RESERVED_WORDS or is_non_initial(text[0]):
        return True
    if text[0] in "+-" and len(text) > 1 and is_digit(text[1]):
        return True
    return any(is_identifier_illegal(char) for char in text)


@dataclass
class KdlFormatter:
    indent: str = "    "
    sort_properties: bool = False

    def format_document(self, document: KdlDocument) -> str:
        lines: list[str] = []
        for child in document.children():
            lines.extend(self.format_node(document, child, level=0))
        return "".join(line + "\n" for line in lines)

    def format_node(self, document: KdlDocument, node: Node, level: int = 0) -> list[str]:
        lines: list[str] = []
        # (node, level, closing): a closing entry writes the brace after the node's children.
        stack: list[tuple[Node, int, bool]] = [(node, level, False)]
        while stack:
            current, depth, closing = stack.pop()
            if closing:
                lines.append(f"{self._indent(depth)}}}")
                continue
            header = self._format_header(current, depth)
            if not current.children:
                lines.append(header)
                continue
            lines.append(header + " {")
            stack.append((current, depth, True))
            stack.extend((child, depth + 1, False) for child in reversed(document.children(current.index)))
        return lines

    def _format_header(self, node: Node, level: int) -> str:
        parts = [self._indent(level) + self._format_hint(node.type_hint) + self.format_identifier(node.name)]
        parts.extend(self.format_value(value) for value in node.values)
        properties = node.properties.items()
        if self.sort_properties:
            properties = sorted(properties, key=lambda item: item[0])
        parts.extend(f"{self.format_identifier(key)}={self.format_value(value)}" for key, value in properties)
        return " ".join(parts)

    def format_value(self, value: KdlValue) -> str:
        hint = self._format_hint(value.type_hint)
        if isinstance(value, NullValue):
            return hint + "null"
        if isinstance(value, BoolValue):
            return hint + ("true" if value.value else "false")
        if isinstance(value, StringValue):
            return hint + escape_string(value.value)
        if isinstance(value, NumberValue):
            return hint + self.format_number(value.value)
        raise TypeError(f"Cannot format value of type {type(value).__name__}")

    def format_number(self, number: DecimalNumber | BasedNumber) -> str:
        sign = "-" if number.negative else ""
        if isinstance(number, BasedNumber):
            return sign + str(number.magnitude)
        text = sign + str(number.integral)
        if number.fractional_digits > 0:
            text += "." + str(number.fractional).zfill(number.fractional_digits)
        if number.exponent is not None:
            text += "e" + ("-" if number.exponent_negative else "") + str(number.exponent)
        return text

    def format_identifier(self, text: str) -> str:
        return escape_string(text) if needs_quotes(text) else text

    def _format_hint(self, hint: str | None) -> str:
        return "" if hint is None else f"({self.format_identifier(hint)})"

    def _indent(self, level: int) -> str:
        return "" if level <= 0 else self.indent * level


def format_document(document: KdlDocument, formatter: KdlFormatter | None = None) -> str:
    return (formatter or KdlFormatter()).format_document(document)


__all__ = ["KdlFormatter", "format_document", "escape_string", "needs_quotes"]
