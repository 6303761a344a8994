"""Visitor interface between the grammar and whatever consumes its events."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

from .nodes import DecimalNumber, BasedNumber, Keyword


class EventKind(Enum):
    DOCUMENT_BEGIN = auto()
    DOCUMENT_END = auto()
    SLASHDASH = auto()
    TYPE_HINT = auto()
    NODE = auto()
    NODE_END = auto()
    PROPERTY = auto()
    VALUE_STRING = auto()
    VALUE_NUMBER = auto()
    VALUE_KEYWORD = auto()
    CHILDREN_BEGIN = auto()
    CHILDREN_END = auto()


class KdlVisitor:
    """Receives parser events in document order.

    Every method is a no-op here, so a consumer only overrides what it needs.
    A ``slashdash`` event marks the single unit (node, property, value or
    children block) that follows it; ``type_hint`` attaches to the next
    ``node`` or value event.
    """

    def document_begin(self) -> None:
        pass

    def document_end(self) -> None:
        pass

    def slashdash(self) -> None:
        pass

    def type_hint(self, hint: str) -> None:
        pass

    def node(self, name: str) -> None:
        pass

    def node_end(self) -> None:
        pass

    def property(self, name: str) -> None:
        pass

    def value_string(self, value: str) -> None:
        pass

    def value_number(self, number: DecimalNumber | BasedNumber, span: str) -> None:
        """``span`` is the literal exactly as written, e.g. ``0x1A_F``."""

    def value_keyword(self, keyword: Keyword) -> None:
        pass

    def children_begin(self) -> None:
        pass

    def children_end(self) -> None:
        pass


@dataclass(frozen=True, slots=True)
class Event:
    kind: EventKind
    args: tuple[Any, ...] = ()


class EventRecorder(KdlVisitor):
    """Keeps every event it sees, for replay or inspection."""

    def __init__(self) -> None:
        self.events: list[Event] = []

    # Defined ahead of the event methods: one of them is named ``property``.
    @property
    def kinds(self) -> list[EventKind]:
        return [event.kind for event in self.events]

    def _record(self, kind: EventKind, *args: Any) -> None:
        self.events.append(Event(kind, args))

    def document_begin(self) -> None:
        self.events.clear()
        self._record(EventKind.DOCUMENT_BEGIN)

    def document_end(self) -> None:
        self._record(EventKind.DOCUMENT_END)

    def slashdash(self) -> None:
        self._record(EventKind.SLASHDASH)

    def type_hint(self, hint: str) -> None:
        self._record(EventKind.TYPE_HINT, hint)

    def node(self, name: str) -> None:
        self._record(EventKind.NODE, name)

    def node_end(self) -> None:
        self._record(EventKind.NODE_END)

    def property(self, name: str) -> None:
        self._record(EventKind.PROPERTY, name)

    def value_string(self, value: str) -> None:
        self._record(EventKind.VALUE_STRING, value)

    def value_number(self, number: DecimalNumber | BasedNumber, span: str) -> None:
        self._record(EventKind.VALUE_NUMBER, number, span)

    def value_keyword(self, keyword: Keyword) -> None:
        self._record(EventKind.VALUE_KEYWORD, keyword)

    def children_begin(self) -> None:
        self._record(EventKind.CHILDREN_BEGIN)

    def children_end(self) -> None:
        self._record(EventKind.CHILDREN_END)

    def replay(self, visitor: KdlVisitor) -> None:
        """Feeds the recorded events to another visitor."""
        for event in self.events:
            getattr(visitor, event.kind.name.lower())(*event.args)


__all__ = ["EventKind", "KdlVisitor", "Event", "EventRecorder"]
