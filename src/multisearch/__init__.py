"""multisearch: find many patterns in one pass with Aho-Corasick.

Quick start:
    from multisearch import StringMultiSearch

    finder = (
        StringMultiSearch()
        .register("she", "SHE")
        .register("he", "HE")
        .build_finder()
    )
    for match in finder.search_in("she sells"):
        print(match.start, match.length, match.ids)
"""

from multisearch.automaton import Automaton, StreamingMatcher
from multisearch.domain import (
    DuplicateIdentifierError,
    InvalidArgumentError,
    InvalidStateError,
    Match,
    MultiSearchError,
)
from multisearch.search import (
    Algorithm,
    BytesFinder,
    BytesMultiSearch,
    Finder,
    MultiSearch,
    StringFinder,
    StringMultiSearch,
)

__version__ = "0.1.0"

__all__ = [
    "Algorithm",
    "Automaton",
    "BytesFinder",
    "BytesMultiSearch",
    "DuplicateIdentifierError",
    "Finder",
    "InvalidArgumentError",
    "InvalidStateError",
    "Match",
    "MultiSearch",
    "MultiSearchError",
    "StreamingMatcher",
    "StringFinder",
    "StringMultiSearch",
]
