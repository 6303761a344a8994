"""Visitor that assembles parser events into a ``KdlDocument``."""

from __future__ import annotations

from typing import Iterable, Optional

from .document import ROOT_INDEX, KdlDocument
from .logger import Logger
from .nodes import BasedNumber, DecimalNumber, Keyword, KdlValue, NumberValue, StringValue, keyword_value
from .parser import KdlParser, ParserConfig
from .visitor import KdlVisitor


class DocumentBuilder(KdlVisitor):
    """Builds a node tree, leaving out everything marked with ``/-``.

    A slashdashed node or children block, and everything nested inside it, is
    still parsed but has no effect on the tree. ``_suppressed`` counts the
    open nodes and children blocks inside the outermost slashdashed one; while
    it is above zero, properties and values are ignored.
    """

    def __init__(self, enable_logger: bool = False) -> None:
        self.logger = Logger(config={"name": "Builder Logger", "is_enabled": enable_logger}).logger
        self.document = KdlDocument()
        self._reset()

    def _reset(self) -> None:
        self._head = ROOT_INDEX
        self._slashdash = False
        self._type_hint: str | None = None
        self._property: str | None = None
        self._suppressed = 0
        # One entry per open node / children block: True if it was suppressed.
        self._open_nodes: list[bool] = []
        self._open_children: list[bool] = []

    @property
    def suppressed(self) -> bool:
        return self._suppressed > 0

    def document_begin(self) -> None:
        self.document = KdlDocument()
        self._reset()

    def document_end(self) -> None:
        self.logger.debug(f"Built document with {len(self.document)} node(s)")

    def slashdash(self) -> None:
        self._slashdash = True

    def type_hint(self, hint: str) -> None:
        self._type_hint = hint

    def node(self, name: str) -> None:
        if self._slashdash or self.suppressed:
            self._slashdash = False
            self._type_hint = None
            self._suppressed += 1
            self._open_nodes.append(True)
            self.logger.debug(f"Skipping node '{name}'")
            return

        child = self.document.add_child(self._head, name, self._type_hint)
        self._type_hint = None
        self._head = child.index
        self._open_nodes.append(False)

    def node_end(self) -> None:
        if self._open_nodes.pop():
            self._suppressed -= 1
            return
        parent = self.document.node(self._head).parent
        self._head = ROOT_INDEX if parent is None else parent
        self._property = None

    def children_begin(self) -> None:
        if self._slashdash or self.suppressed:
            self._slashdash = False
            self._suppressed += 1
            self._open_children.append(True)
            return
        self._open_children.append(False)

    def children_end(self) -> None:
        if self._open_children.pop():
            self._suppressed -= 1

    def property(self, name: str) -> None:
        # A slashdash before the property stays raised so the value that
        # follows is dropped with it.
        if self._slashdash or self.suppressed:
            return
        self._property = name

    def value_string(self, value: str) -> None:
        self._add_value(StringValue(value=value))

    def value_number(self, number: DecimalNumber | BasedNumber, span: str) -> None:
        self._add_value(NumberValue(value=number))

    def value_keyword(self, keyword: Keyword) -> None:
        self._add_value(keyword_value(keyword))

    def _add_value(self, value: KdlValue) -> None:
        if self._slashdash or self.suppressed:
            self._slashdash = False
            self._type_hint = None
            return

        if self._type_hint is not None:
            value.type_hint = self._type_hint
            self._type_hint = None

        head = self.document.node(self._head)
        if self._property is not None:
            head.set_property(self._property, value)
            self._property = None
        else:
            head.add_value(value)


def parse_document(text: str | Iterable[str], config: Optional[ParserConfig] = None) -> KdlDocument:
    """Parses ``text`` into a document tree. Raises ``ParseException`` on malformed input."""
    builder = DocumentBuilder(enable_logger=bool(config and config.get("enable_logger")))
    KdlParser(text, builder, config=config).parse()
    return builder.document


__all__ = ["DocumentBuilder", "parse_document"]
