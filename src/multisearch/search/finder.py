"""Finder: the read-only scanning surface over a compiled automaton.

A Finder holds nothing but the automaton, so it can be shared between
threads and pickled freely. Every search_in() call starts a fresh
StreamingMatcher with its own state.
"""
from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import BinaryIO

from multisearch.automaton.automaton import Automaton
from multisearch.automaton.matcher import StreamingMatcher
from multisearch.domain.match import Match
from multisearch.domain.types import Symbol


class Finder:
    """Searches inputs for the patterns compiled into an automaton."""

    __slots__ = ("_automaton",)

    def __init__(self, automaton: Automaton) -> None:
        self._automaton = automaton

    @property
    def automaton(self) -> Automaton:
        return self._automaton

    def search_in(self, sequence: Iterable[Symbol]) -> Iterator[Match]:
        """Lazily yield matches found in sequence.

        sequence may be any iterable, including a one-shot iterator or
        generator. It is consumed once, front to back.
        """
        return StreamingMatcher(self._automaton, sequence)

    def find_all(self, sequence: Iterable[Symbol]) -> list[Match]:
        """Eagerly collect every match."""
        return list(self.search_in(sequence))

    def contains_any(self, sequence: Iterable[Symbol]) -> bool:
        """True if at least one pattern occurs. Stops at the first hit."""
        return next(self.search_in(sequence), None) is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Finder):
            return NotImplemented
        return self._automaton == other._automaton

    def __repr__(self) -> str:
        return f"Finder({self._automaton!r})"

    def to_bytes(self) -> bytes:
        return self._automaton.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> Finder:
        return cls(Automaton.from_bytes(data))

    def dump(self, fp: BinaryIO) -> None:
        self._automaton.dump(fp)

    @classmethod
    def load(cls, fp: BinaryIO) -> Finder:
        return cls(Automaton.load(fp))
