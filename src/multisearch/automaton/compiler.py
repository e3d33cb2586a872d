"""Turn a finished TrieBuilder into an immutable Automaton.

Failure and output links are computed breadth-first from the root.
BFS order matters: a vertex's failure link is found by starting at
its parent's failure link, so every shallower vertex must already be
resolved.

For a vertex v with parent p and incoming symbol c:

    1. root:            failure = root, output = root
    2. p is root:       failure = root
    3. otherwise:       start at failure(p). If it has a child on c,
                        that child is failure(v). If it is the root,
                        failure(v) = root. Else move to its own
                        failure link and try again.

    output(v) = v if v is terminal, else output(failure(v))

The output links form a chain through every terminal suffix of v's
path, longest first. The matcher walks that chain to report all the
patterns that end at one input position.

Each failure walk only ever moves to shallower vertices, so the total
work across the whole compile is linear in the total pattern length.
"""
from __future__ import annotations

import logging
from collections import deque
from types import MappingProxyType

from multisearch.automaton.automaton import Automaton, Vertex
from multisearch.automaton.trie import TrieBuilder
from multisearch.domain.types import ROOT, VertexId

log = logging.getLogger(__name__)


def compile_trie(trie: TrieBuilder) -> Automaton:
    """Compute failure/output links and freeze the trie into an Automaton.

    Closes the trie first, so compiling it twice or inserting into it
    afterwards raises InvalidStateError. The vertices are only read.
    """
    trie.close()
    protos = trie.vertices
    count = len(protos)
    failure: list[VertexId] = [ROOT] * count
    output: list[VertexId] = [ROOT] * count

    queue: deque[VertexId] = deque([ROOT])
    while queue:
        index = queue.popleft()
        vertex = protos[index]
        queue.extend(vertex.children.values())

        if index == ROOT:
            continue

        if vertex.parent == ROOT:
            link = ROOT
        else:
            candidate = failure[vertex.parent]
            while True:
                child = protos[candidate].children.get(vertex.symbol)
                if child is not None:
                    link = child
                    break
                if candidate == ROOT:
                    link = ROOT
                    break
                candidate = failure[candidate]
        failure[index] = link
        output[index] = index if vertex.is_terminal else output[link]

    vertices = tuple(
        Vertex(
            children=MappingProxyType(dict(p.children)),
            failure=failure[p.index],
            output=output[p.index],
            ids=frozenset(p.ids),
            length=p.length if p.is_terminal else None,
        )
        for p in protos
    )
    automaton = Automaton(vertices)
    log.debug(
        "Compiled automaton: %d vertices, %d patterns",
        automaton.vertex_count, automaton.pattern_count,
    )
    return automaton
