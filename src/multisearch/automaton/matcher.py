"""Streaming matcher: the single-pass scan over a compiled automaton.

State is three values:

    current   the vertex reached after the symbols consumed so far
    offset    how many symbols have been consumed
    pending   a vertex whose output chain is still being walked at
              this offset, or None

Each step does exactly one of two things:

  * pending is None: pull one symbol, follow failure links until a
    child edge for it exists (or the root is reached), move along the
    edge, bump offset and set pending = current.
  * otherwise hop along pending's output link. Landing on the root
    ends the chain. Landing on a terminal vertex w emits a match for
    w and sets pending = failure(w), so the next hop finds the next
    shorter pattern that ends at the same offset.

Matches therefore come out in non-decreasing end offset, and for one
end offset the longest pattern comes first. Nothing is computed until
the caller asks for the next match, and a caller that stops early
leaves the rest of the input unread. That is what makes "is there any
match" cheap.

A matcher owns its input iterator and is not thread-safe. The
automaton it reads is, so start one matcher per scan.
"""
from __future__ import annotations

from collections.abc import Iterable, Iterator

from multisearch.automaton.automaton import Automaton
from multisearch.domain.match import Match
from multisearch.domain.types import ROOT, Symbol, VertexId


class StreamingMatcher:
    """Pull-based iterator of Match records over one input.

    Usage:
        matcher = StreamingMatcher(automaton, "she sells")
        for match in matcher:
            ...

    Single pass, not restartable: once exhausted it stays exhausted.
    """

    __slots__ = ("_automaton", "_symbols", "_current", "_offset", "_pending", "_exhausted")

    def __init__(self, automaton: Automaton, source: Iterable[Symbol]) -> None:
        self._automaton = automaton
        self._symbols = iter(source)
        self._current: VertexId = ROOT
        self._offset = 0
        self._pending: VertexId | None = None
        self._exhausted = False

    @property
    def offset(self) -> int:
        """Number of input symbols consumed so far."""
        return self._offset

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    def __iter__(self) -> Iterator[Match]:
        return self

    def __next__(self) -> Match:
        while True:
            match = self._step()
            if match is not None:
                return match

    def _step(self) -> Match | None:
        """Advance by one symbol or one output hop, never both."""
        vertices = self._automaton
        if self._pending is None:
            if self._exhausted:
                raise StopIteration
            try:
                symbol = next(self._symbols)
            except StopIteration:
                self._exhausted = True
                raise
            self._current = self._transition(self._current, symbol)
            self._offset += 1
            self._pending = self._current

        hit = vertices[self._pending].output
        if hit == ROOT:
            self._pending = None
            return None

        terminal = vertices[hit]
        self._pending = terminal.failure
        return Match(
            start=self._offset - terminal.length,
            length=terminal.length,
            ids=terminal.ids,
        )

    def _transition(self, state: VertexId, symbol: Symbol) -> VertexId:
        vertices = self._automaton
        while True:
            child = vertices[state].children.get(symbol)
            if child is not None:
                return child
            if state == ROOT:
                return ROOT
            state = vertices[state].failure


def iter_matches(automaton: Automaton, source: Iterable[Symbol]) -> Iterator[Match]:
    """Lazily yield every match of the automaton's patterns in source."""
    return StreamingMatcher(automaton, source)
