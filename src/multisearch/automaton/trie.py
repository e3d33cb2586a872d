"""Mutable prefix tree that collects patterns before compilation.

Every registered pattern is a path from the root. Patterns that share
a prefix share the vertices for it, so "she" and "shell" end up on the
same branch and only diverge after "she".

Vertices live in one list (an arena) and refer to each other by index.
Index 0 is always the root, and indices are handed out in creation
order. Parent links are stored as indices too, which keeps the graph
free of reference cycles and lets the compiler walk it by position.

A builder is OPEN until compile_trie() closes it. After that, insert()
and a second compile raise InvalidStateError. Apart from that the
builder does no validation: rejecting empty patterns, empty id
collections and reused ids is the job of MultiSearch.
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from multisearch.domain.errors import InvalidStateError
from multisearch.domain.types import ROOT, PatternId, Symbol, VertexId


@dataclass(slots=True)
class ProtoVertex:
    """A builder-time vertex.

    children maps a symbol to the index of the child vertex (tree
    edges only). parent and symbol are None for the root. length is
    only set once a pattern ends here.
    """
    index: VertexId
    parent: VertexId | None = None
    symbol: Symbol | None = None
    children: dict[Symbol, VertexId] = field(default_factory=dict)
    ids: set[PatternId] = field(default_factory=set)
    length: int | None = None

    @property
    def is_terminal(self) -> bool:
        return bool(self.ids)


class TrieBuilder:
    """Prefix tree over arbitrary hashable symbols.

    Usage:
        trie = TrieBuilder()
        trie.insert("she", ["SHE"])
        trie.insert("he", ["HE"])
        automaton = compile_trie(trie)
    """

    def __init__(self) -> None:
        self._vertices: list[ProtoVertex] = [ProtoVertex(index=ROOT)]
        self._closed = False

    @property
    def vertices(self) -> Sequence[ProtoVertex]:
        return self._vertices

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def vertex_count(self) -> int:
        return len(self._vertices)

    @property
    def pattern_count(self) -> int:
        """Number of distinct patterns (terminal vertices)."""
        return sum(1 for v in self._vertices if v.is_terminal)

    def insert(self, sequence: Iterable[Symbol], ids: Iterable[PatternId]) -> int:
        """Add a pattern and its ids. Returns the pattern length.

        An empty sequence returns 0 and leaves the trie untouched so
        the caller can reject it. Inserting the same sequence again
        lands on the same vertex and merges the new ids into it.
        """
        if self._closed:
            raise InvalidStateError("Cannot insert into a compiled trie")
        current = self._vertices[ROOT]
        length = 0
        for symbol in sequence:
            length += 1
            child = current.children.get(symbol)
            if child is None:
                child = self._new_vertex(current.index, symbol)
                current.children[symbol] = child
            current = self._vertices[child]

        if length == 0:
            return 0

        current.ids.update(ids)
        current.length = length
        return length

    def close(self) -> None:
        """Move to CLOSED. Raises InvalidStateError if already closed."""
        if self._closed:
            raise InvalidStateError("The trie has already been compiled")
        self._closed = True

    def _new_vertex(self, parent: VertexId, symbol: Symbol) -> VertexId:
        index = len(self._vertices)
        self._vertices.append(ProtoVertex(index=index, parent=parent, symbol=symbol))
        return index
