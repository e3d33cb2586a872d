"""Convenience wrappers for searching text and binary data.

StringMultiSearch registers str keywords and scans str text one
character at a time. BytesMultiSearch does the same for bytes, where
each symbol is an int in 0..255. Both only adapt their inputs and
delegate everything to MultiSearch and Finder.

Usage:
    finder = (
        StringMultiSearch()
        .register("she", "SHE")
        .register("he", "HE")
        .build_finder()
    )
    finder.find_all("she sells")
"""
from __future__ import annotations

from collections.abc import Collection, Iterator

from multisearch.domain.match import Match
from multisearch.domain.types import PatternId
from multisearch.search.finder import Finder
from multisearch.search.multi_search import Algorithm, MultiSearch


class StringFinder:
    """Finder restricted to str input."""

    __slots__ = ("_finder",)

    def __init__(self, finder: Finder) -> None:
        self._finder = finder

    @property
    def finder(self) -> Finder:
        return self._finder

    def search_in(self, text: str) -> Iterator[Match]:
        return self._finder.search_in(text)

    def find_all(self, text: str) -> list[Match]:
        return self._finder.find_all(text)

    def contains_any(self, text: str) -> bool:
        return self._finder.contains_any(text)

    def to_bytes(self) -> bytes:
        return self._finder.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> StringFinder:
        return cls(Finder.from_bytes(data))


class BytesFinder(StringFinder):
    """Finder restricted to bytes input."""

    __slots__ = ()

    def search_in(self, data: bytes) -> Iterator[Match]:  # type: ignore[override]
        return self._finder.search_in(data)

    def find_all(self, data: bytes) -> list[Match]:  # type: ignore[override]
        return self._finder.find_all(data)

    def contains_any(self, data: bytes) -> bool:  # type: ignore[override]
        return self._finder.contains_any(data)


class StringMultiSearch:
    """Registers str keywords. See MultiSearch for the error rules."""

    _finder_type: type[StringFinder] = StringFinder

    def __init__(self, algorithm: Algorithm = Algorithm.AHO_CORASICK) -> None:
        self._search = MultiSearch(algorithm)

    @property
    def pattern_count(self) -> int:
        return self._search.pattern_count

    def register(self, keyword: str, *ids: PatternId) -> StringMultiSearch:
        self._search.register_all(keyword, ids)
        return self

    def register_all(self, keyword: str, ids: Collection[PatternId]) -> StringMultiSearch:
        self._search.register_all(keyword, ids)
        return self

    def build_finder(self) -> StringFinder:
        return self._finder_type(self._search.build_finder())


class BytesMultiSearch(StringMultiSearch):
    """Registers bytes keywords; symbols are byte values."""

    _finder_type = BytesFinder

    def register(self, keyword: bytes, *ids: PatternId) -> BytesMultiSearch:  # type: ignore[override]
        self._search.register_all(keyword, ids)
        return self

    def register_all(  # type: ignore[override]
        self, keyword: bytes, ids: Collection[PatternId]
    ) -> BytesMultiSearch:
        self._search.register_all(keyword, ids)
        return self
