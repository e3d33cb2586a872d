"""Shared helpers for the multisearch tests."""

from __future__ import annotations

import random
from collections.abc import Iterable
from enum import Enum

from multisearch.domain.match import Match
from multisearch.search.multi_search import MultiSearch
from multisearch.search.strings import StringFinder, StringMultiSearch

SEED = 42

SEASHELLS = "she sells seashells by the seashore"


class Keyword(Enum):
    SHE = "she"
    HE = "he"
    SEA = "sea"
    ASH = "ash"


SEASHELLS_EXPECTED = [
    Match.of(0, 3, Keyword.SHE),
    Match.of(1, 2, Keyword.HE),
    Match.of(10, 3, Keyword.SEA),
    Match.of(12, 3, Keyword.ASH),
    Match.of(13, 3, Keyword.SHE),
    Match.of(14, 2, Keyword.HE),
    Match.of(24, 2, Keyword.HE),
    Match.of(27, 3, Keyword.SEA),
    Match.of(29, 3, Keyword.ASH),
]


def keyword_finder() -> StringFinder:
    """Finder for she/he/sea/ash, each pattern tagged with its Keyword."""
    search = StringMultiSearch()
    for kw in Keyword:
        search.register(kw.value, kw)
    return search.build_finder()


def naive_matches(patterns: dict[str, set], text: str) -> list[Match]:
    """Brute-force reference: every occurrence, ordered like the automaton.

    Matches are sorted by end offset, and longest first for a shared end.
    """
    found: list[Match] = []
    for end in range(1, len(text) + 1):
        ending_here = [
            p for p in patterns
            if len(p) <= end and text[end - len(p):end] == p
        ]
        for p in sorted(ending_here, key=len, reverse=True):
            found.append(Match(end - len(p), len(p), frozenset(patterns[p])))
    return found


def random_patterns(
    rng: random.Random, count: int, alphabet: str = "abc", max_length: int = 5
) -> list[str]:
    """Distinct random non-empty patterns over a small alphabet."""
    seen: set[str] = set()
    while len(seen) < count:
        length = rng.randint(1, max_length)
        seen.add("".join(rng.choice(alphabet) for _ in range(length)))
    return sorted(seen)


def build_finder(patterns: Iterable[str]):
    """Finder where each pattern's id is its index in `patterns`."""
    search = MultiSearch()
    for i, p in enumerate(patterns):
        search.register(p, i)
    return search.build_finder()
