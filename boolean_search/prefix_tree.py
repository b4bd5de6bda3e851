"""
Prefix trees mapping terms to posting list ids.

Two variants share one contract:
- CompactPrefixTree: radix tree, edges carry multi-character labels and
  nodes are split when a new term diverges inside a label.
- PrefixTree: one character per edge.

Both support exact lookup and enumeration of every stored term that starts
with a given prefix. All walks are iterative.
"""

from abc import ABC, abstractmethod
from typing import Iterator, NamedTuple, Optional


class PrefixResult(NamedTuple):
    term: str
    posting_list_id: int


def _shared_prefix_length(a: str, b: str) -> int:
    """Length of the longest common leading substring of a and b."""
    n = min(len(a), len(b))
    i = 0
    while i < n and a[i] == b[i]:
        i += 1
    return i


class _Node:
    __slots__ = ("label", "posting_list_id", "children")

    def __init__(self, label: str, posting_list_id: Optional[int] = None) -> None:
        self.label = label
        self.posting_list_id = posting_list_id
        self.children: dict[str, "_Node"] = {}

    def add_child(self, label: str) -> "_Node":
        child = _Node(label)
        self.children[label[0]] = child
        return child

    def split(self, at: int) -> "_Node":
        """
        Keep label[:at] on this node and push the rest of the label, the
        posting list id and the children down into a new child.
        """
        suffix = self.label[at:]
        child = _Node(suffix, self.posting_list_id)
        child.children = self.children
        self.label = self.label[:at]
        self.posting_list_id = None
        self.children = {suffix[0]: child}
        return child


class _BasePrefixTree(ABC):
    def __init__(self) -> None:
        self._root = _Node("")
        self._size = 0

    @abstractmethod
    def insert(self, term: str, posting_list_id: int) -> None:
        """Store term; an existing id for the same term is overwritten."""

    @abstractmethod
    def _find_node(self, prefix: str) -> tuple[Optional[_Node], str]:
        """
        Return the node whose path starts with prefix, together with that
        node's full path, or (None, "") if no stored path does.
        """

    def _set_posting_list_id(self, node: _Node, posting_list_id: int) -> None:
        if node.posting_list_id is None:
            self._size += 1
        node.posting_list_id = posting_list_id

    def find_exact(self, term: str) -> Optional[int]:
        """Posting list id stored for exactly this term, or None."""
        node, path = self._find_node(term)
        if node is None or path != term:
            return None
        return node.posting_list_id

    def find_with_prefix(self, prefix: str) -> list[PrefixResult]:
        """
        All stored terms starting with prefix, deduplicated and sorted by
        posting list id.
        """
        node, path = self._find_node(prefix)
        if node is None:
            return []
        results = set(self._collect(node, path))
        return sorted(results, key=lambda r: (r.posting_list_id, r.term))

    def _collect(self, start: _Node, start_path: str) -> Iterator[PrefixResult]:
        stack = [(start, start_path)]
        while stack:
            node, path = stack.pop()
            if node.posting_list_id is not None:
                yield PrefixResult(path, node.posting_list_id)
            for child in node.children.values():
                stack.append((child, path + child.label))

    def __contains__(self, term: str) -> bool:
        return self.find_exact(term) is not None

    def __len__(self) -> int:
        return self._size

    def node_count(self) -> int:
        count = 0
        stack = [self._root]
        while stack:
            node = stack.pop()
            count += 1
            stack.extend(node.children.values())
        return count


class CompactPrefixTree(_BasePrefixTree):
    """Prefix tree with chains of single-child nodes collapsed into one edge."""

    def insert(self, term: str, posting_list_id: int) -> None:
        """Store term; an existing id for the same term is overwritten."""
        node = self._root
        remaining = term
        while True:
            if remaining == node.label:
                self._set_posting_list_id(node, posting_list_id)
                return

            shared = _shared_prefix_length(remaining, node.label)
            rest = remaining[shared:]

            if shared < len(node.label):
                # Term diverges from (or ends inside) this label.
                node.split(shared)
                if rest:
                    node = node.add_child(rest)
                self._set_posting_list_id(node, posting_list_id)
                return

            child = node.children.get(rest[0])
            if child is None:
                self._set_posting_list_id(node.add_child(rest), posting_list_id)
                return
            node, remaining = child, rest

    def _find_node(self, prefix: str) -> tuple[Optional[_Node], str]:
        node = self._root
        path = node.label
        remaining = prefix
        while True:
            shared = _shared_prefix_length(remaining, node.label)
            if shared == len(remaining):
                return node, path
            if shared < len(node.label):
                return None, ""
            rest = remaining[shared:]
            child = node.children.get(rest[0])
            if child is None:
                return None, ""
            node, remaining = child, rest
            path += node.label


class PrefixTree(_BasePrefixTree):
    """Prefix tree with exactly one character on every edge."""

    def insert(self, term: str, posting_list_id: int) -> None:
        """Store term; an existing id for the same term is overwritten."""
        node = self._root
        for char in term:
            child = node.children.get(char)
            if child is None:
                child = node.add_child(char)
            node = child
        self._set_posting_list_id(node, posting_list_id)

    def _find_node(self, prefix: str) -> tuple[Optional[_Node], str]:
        node = self._root
        for char in prefix:
            node = node.children.get(char)
            if node is None:
                return None, ""
        return node, prefix


TREE_TYPES = {
    "compact": CompactPrefixTree,
    "simple": PrefixTree,
}
