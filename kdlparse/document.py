"""Arena container for parsed KDL nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from .formatter import KdlFormatter, format_document
from .nodes import Node

ROOT_INDEX = 0
ROOT_NAME = "document"


def _new_arena() -> list[Node]:
    return [Node(index=ROOT_INDEX, name=ROOT_NAME)]


@dataclass
class KdlDocument:
    """Owns every node of one parsed document.

    Nodes are addressed by their index in ``nodes``. Index 0 is the synthetic
    root: it is never removed and never printed, and its children are the
    top-level nodes.
    """

    nodes: list[Node] = field(default_factory=_new_arena)

    @property
    def root(self) -> Node:
        return self.nodes[ROOT_INDEX]

    def node(self, index: int) -> Node:
        return self.nodes[index]

    def add_child(self, parent: int, name: str, type_hint: str | None = None) -> Node:
        child = Node(index=len(self.nodes), name=name, type_hint=type_hint, parent=parent)
        self.nodes.append(child)
        self.nodes[parent].children.append(child.index)
        return child

    def children(self, index: int = ROOT_INDEX) -> list[Node]:
        return [self.nodes[child] for child in self.nodes[index].children]

    def parent(self, index: int) -> Node | None:
        parent = self.nodes[index].parent
        return None if parent is None else self.nodes[parent]

    def walk(self, index: int = ROOT_INDEX) -> Iterator[tuple[int, Node]]:
        """Depth-first, document-order traversal below ``index`` as ``(depth, node)`` pairs."""
        stack = [(0, child) for child in reversed(self.nodes[index].children)]
        while stack:
            depth, current = stack.pop()
            node = self.nodes[current]
            yield depth, node
            stack.extend((depth + 1, child) for child in reversed(node.children))

    def find(self, name: str) -> list[Node]:
        return [node for _, node in self.walk() if node.name == name]

    def serialize(self, formatter: KdlFormatter | None = None) -> str:
        return format_document(self, formatter)

    def __len__(self) -> int:
        # The root is bookkeeping, not content.
        return len(self.nodes) - 1

    def __str__(self) -> str:
        return self.serialize()
