"""Binary search tree that maps archive directories to their entries."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field

from midgarts.fileformat.grf.entry import Entry


@dataclass(eq=False)
class EntryTreeNode:
    """A directory name, its entries, and the subtrees on either side."""

    value: str
    data: list[Entry] = field(default_factory=list)
    left: EntryTreeNode | None = field(default=None, repr=False)
    right: EntryTreeNode | None = field(default=None, repr=False)

    def insert(self, value: str, data: list[Entry]) -> None:
        """Insert ``value`` below this node; an existing value is left unchanged."""
        node = self
        while True:
            if value == node.value:
                return
            if value < node.value:
                if node.left is None:
                    node.left = EntryTreeNode(value, data)
                    return
                node = node.left
            else:
                if node.right is None:
                    node.right = EntryTreeNode(value, data)
                    return
                node = node.right

    def find(self, name: str) -> list[Entry] | None:
        """Return the entries stored under ``name``, or None if it is absent."""
        node: EntryTreeNode | None = self
        while node is not None:
            if name == node.value:
                return node.data
            node = node.left if name < node.value else node.right
        return None


class EntryTree:
    """A binary search tree of directory nodes, ordered by name."""

    def __init__(self) -> None:
        self.root: EntryTreeNode | None = None

    def traverse(self, node: EntryTreeNode | None, visit: Callable[[EntryTreeNode], None]) -> None:
        """Call ``visit`` on every node of the subtree at ``node``, in order."""
        stack: list[EntryTreeNode] = []
        current = node
        while stack or current is not None:
            while current is not None:
                stack.append(current)
                current = current.left
            current = stack.pop()
            visit(current)
            current = current.right

    def __iter__(self) -> Iterator[EntryTreeNode]:
        nodes: list[EntryTreeNode] = []
        self.traverse(self.root, nodes.append)
        return iter(nodes)

    def insert(self, value: str, data: list[Entry]) -> None:
        """Insert a directory and its entries."""
        if self.root is None:
            self.root = EntryTreeNode(value, data)
            return
        self.root.insert(value, data)

    def find(self, name: str) -> list[Entry] | None:
        """Return the entries of directory ``name``, or None if it is absent."""
        if self.root is None:
            return None
        return self.root.find(name)