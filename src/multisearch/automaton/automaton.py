"""Compiled, immutable Aho-Corasick automaton.

The automaton is a dense table of vertices with the root at index 0.
Each vertex keeps its trie edges plus two resolved links:

    failure: the vertex for the longest proper suffix of this vertex's
             path that is also a path from the root.
    output:  the nearest terminal vertex reachable through zero or
             more failure links (the root if there is none).

Nothing in here changes after construction. Children are exposed as
read-only mappings and ids as frozensets, so one automaton can be
scanned by any number of threads at once without locking.

Binary image layout (to_bytes / from_bytes):

    magic      4 bytes   b"MSAC"
    version    uint16    FORMAT_VERSION
    vertices   uint32    vertex count, checked after decoding
    payload    uint32 length prefix + pickle of the plain vertex table

The payload is a pickle, so symbols and ids must be picklable. Only
load images you produced yourself: unpickling untrusted data can run
arbitrary code.
"""
from __future__ import annotations

import pickle
import struct
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import BinaryIO

from multisearch.domain.errors import InvalidArgumentError
from multisearch.domain.types import ROOT, PatternId, Symbol, VertexId

MAGIC = b"MSAC"
FORMAT_VERSION = 1
_HEADER = struct.Struct("!4sHI")
_LENGTH = struct.Struct("!I")


@dataclass(frozen=True, slots=True)
class Vertex:
    """A compiled vertex. length is None unless the vertex is terminal."""
    children: Mapping[Symbol, VertexId]
    failure: VertexId
    output: VertexId
    ids: frozenset
    length: int | None

    @property
    def is_terminal(self) -> bool:
        return bool(self.ids)


# One row of the plain table used for pickling: children as a tuple of
# (symbol, index) pairs, then failure, output, ids, length.
_Row = tuple[tuple[tuple[Symbol, VertexId], ...], VertexId, VertexId, tuple[PatternId, ...], "int | None"]


class Automaton:
    """Immutable vertex table produced by compile_trie()."""

    __slots__ = ("_vertices",)

    def __init__(self, vertices: tuple[Vertex, ...]) -> None:
        if not vertices:
            raise InvalidArgumentError("An automaton needs at least a root vertex")
        self._vertices = vertices

    @property
    def root(self) -> Vertex:
        return self._vertices[ROOT]

    @property
    def vertex_count(self) -> int:
        return len(self._vertices)

    @property
    def pattern_count(self) -> int:
        return sum(1 for v in self._vertices if v.is_terminal)

    def __getitem__(self, index: VertexId) -> Vertex:
        return self._vertices[index]

    def __len__(self) -> int:
        return len(self._vertices)

    def __iter__(self) -> Iterator[Vertex]:
        return iter(self._vertices)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Automaton):
            return NotImplemented
        return self._vertices == other._vertices

    def __repr__(self) -> str:
        return f"Automaton(vertices={self.vertex_count}, patterns={self.pattern_count})"

    # --- persistence ---

    def _table(self) -> list[_Row]:
        """Flatten the vertices into plain tuples."""
        return [
            (
                tuple(v.children.items()),
                v.failure,
                v.output,
                tuple(v.ids),
                v.length,
            )
            for v in self._vertices
        ]

    @classmethod
    def _from_table(cls, table: list[_Row]) -> Automaton:
        vertices = []
        for children, failure, output, ids, length in table:
            vertices.append(Vertex(
                children=MappingProxyType(dict(children)),
                failure=failure,
                output=output,
                ids=frozenset(ids),
                length=length,
            ))
        return cls(tuple(vertices))

    def __reduce__(self):
        # MappingProxyType cannot be pickled, so go through the plain table.
        return (Automaton._from_table, (self._table(),))

    def to_bytes(self) -> bytes:
        """Serialize to the versioned binary image described above."""
        payload = pickle.dumps(self._table(), protocol=pickle.HIGHEST_PROTOCOL)
        return (
            _HEADER.pack(MAGIC, FORMAT_VERSION, self.vertex_count)
            + _LENGTH.pack(len(payload))
            + payload
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> Automaton:
        """Rebuild an automaton from to_bytes() output.

        Raises InvalidArgumentError for a truncated image, a foreign
        magic number, an unknown version, a payload that does not decode
        to a vertex table, or a vertex count mismatch.
        """
        prefix = _HEADER.size + _LENGTH.size
        if len(data) < prefix:
            raise InvalidArgumentError(
                f"Automaton image too short: {len(data)} bytes, need at least {prefix}"
            )
        magic, version, count = _HEADER.unpack_from(data, 0)
        if magic != MAGIC:
            raise InvalidArgumentError(f"Not an automaton image: bad magic {magic!r}")
        if version != FORMAT_VERSION:
            raise InvalidArgumentError(f"Unsupported automaton format version {version}")
        (size,) = _LENGTH.unpack_from(data, _HEADER.size)
        payload = data[prefix:prefix + size]
        if len(payload) != size:
            raise InvalidArgumentError(
                f"Truncated automaton payload: expected {size} bytes, got {len(payload)}"
            )
        try:
            automaton = cls._from_table(pickle.loads(payload))
        except (
            pickle.UnpicklingError, EOFError, ValueError, TypeError,
            IndexError, KeyError, AttributeError, ImportError,
        ) as exc:
            raise InvalidArgumentError(f"Corrupt automaton payload: {exc}") from exc
        if automaton.vertex_count != count:
            raise InvalidArgumentError(
                f"Vertex count mismatch: header says {count}, "
                f"payload has {automaton.vertex_count}"
            )
        return automaton

    def dump(self, fp: BinaryIO) -> None:
        """Write the binary image to an open binary file."""
        fp.write(self.to_bytes())

    @classmethod
    def load(cls, fp: BinaryIO) -> Automaton:
        """Read an image written by dump()."""
        return cls.from_bytes(fp.read())
