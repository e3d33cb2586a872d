"""MultiSearch: pattern registration and the one-shot build step.

Lifecycle:

    OPEN    register() adds patterns; build_finder() is allowed once
    CLOSED  every register() and build_finder() raises InvalidStateError

Both operations run under one threading.Lock, so concurrent register()
calls and the single build never interleave. Nothing blocks waiting for
a state change: calling into a CLOSED instance fails immediately.

Registration rules, checked in this order:
  1. the instance must be OPEN                  -> InvalidStateError
  2. at least one id must be given              -> InvalidArgumentError
  3. no id may repeat one from an earlier call  -> DuplicateIdentifierError
  4. the pattern must not be empty              -> InvalidArgumentError

The same pattern may be registered again with fresh ids. Both calls
land on one terminal vertex and a match reports the union of the ids.
A rejected call records nothing, so its ids stay available.

The set of used ids belongs to the instance and is dropped at build
time together with the trie.
"""
from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum, auto

from multisearch.automaton.automaton import Automaton
from multisearch.automaton.compiler import compile_trie
from multisearch.automaton.trie import TrieBuilder
from multisearch.domain.errors import (
    DuplicateIdentifierError,
    InvalidArgumentError,
    InvalidStateError,
)
from multisearch.domain.types import PatternId, Symbol
from multisearch.search.finder import Finder

log = logging.getLogger(__name__)


class Algorithm(Enum):
    AHO_CORASICK = auto()


@dataclass(frozen=True, slots=True)
class Engine:
    """The two capabilities an algorithm has to provide."""
    new_builder: Callable[[], TrieBuilder]
    compile: Callable[[TrieBuilder], Automaton]


ENGINES: dict[Algorithm, Engine] = {
    Algorithm.AHO_CORASICK: Engine(new_builder=TrieBuilder, compile=compile_trie),
}


class MultiSearch:
    """Collects patterns with their ids and builds a Finder.

    Usage:
        search = MultiSearch()
        search.register("she", "SHE").register("he", "HE")
        finder = search.build_finder()
        list(finder.search_in("ushers"))
        # [Match(start=1, length=3, ids=frozenset({'SHE'})),
        #  Match(start=2, length=2, ids=frozenset({'HE'}))]

    Patterns are any finite iterables of hashable symbols: strings,
    bytes, tuples of tokens. Ids are any hashable values.
    """

    def __init__(self, algorithm: Algorithm = Algorithm.AHO_CORASICK) -> None:
        self._algorithm = algorithm
        self._engine = ENGINES[algorithm]
        self._lock = threading.Lock()
        self._builder: TrieBuilder | None = self._engine.new_builder()
        self._used_ids: set[PatternId] | None = set()
        self._compiled_count = 0

    @classmethod
    def implementation(cls, algorithm: Algorithm = Algorithm.AHO_CORASICK) -> MultiSearch:
        """Factory: create an instance for the given algorithm."""
        return cls(algorithm)

    @property
    def algorithm(self) -> Algorithm:
        return self._algorithm

    @property
    def is_open(self) -> bool:
        with self._lock:
            return self._builder is not None

    @property
    def pattern_count(self) -> int:
        """Distinct patterns registered. Kept after the finder is built."""
        with self._lock:
            if self._builder is None:
                return self._compiled_count
            return self._builder.pattern_count

    def register(self, pattern: Iterable[Symbol], *ids: PatternId) -> MultiSearch:
        """Register pattern with the ids given as extra arguments."""
        return self.register_all(pattern, ids)

    def register_all(
        self, pattern: Iterable[Symbol], ids: Iterable[PatternId]
    ) -> MultiSearch:
        """Register pattern with an explicit collection of ids."""
        with self._lock:
            if self._builder is None or self._used_ids is None:
                raise InvalidStateError("Cannot register patterns after building a finder")
            fresh = set(ids)
            if not fresh:
                raise InvalidArgumentError("No pattern ids provided")

            for pattern_id in fresh:
                if pattern_id in self._used_ids:
                    raise DuplicateIdentifierError(pattern_id)

            length = self._builder.insert(pattern, fresh)
            if length == 0:
                raise InvalidArgumentError("Cannot register an empty pattern")

            self._used_ids.update(fresh)
            log.debug("Registered pattern of length %d with %d id(s)", length, len(fresh))
            return self

    def build_finder(self) -> Finder:
        """Close registration and compile the automaton.

        Raises InvalidStateError if called a second time.
        """
        with self._lock:
            if self._builder is None:
                raise InvalidStateError("The finder has already been built")
            builder = self._builder
            self._builder = None
            self._used_ids = None
            automaton = self._engine.compile(builder)
            self._compiled_count = automaton.pattern_count
        log.info(
            "Built %s finder: %d patterns, %d vertices",
            self._algorithm.name, automaton.pattern_count, automaton.vertex_count,
        )
        return Finder(automaton)
