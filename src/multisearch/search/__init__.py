"""Registration and scanning surface.

MultiSearch collects patterns and builds a Finder; StringMultiSearch and
BytesMultiSearch are thin adapters for text and binary input.
"""

from multisearch.search.finder import Finder
from multisearch.search.multi_search import ENGINES, Algorithm, Engine, MultiSearch
from multisearch.search.strings import (
    BytesFinder,
    BytesMultiSearch,
    StringFinder,
    StringMultiSearch,
)

__all__ = [
    "Algorithm",
    "BytesFinder",
    "BytesMultiSearch",
    "ENGINES",
    "Engine",
    "Finder",
    "MultiSearch",
    "StringFinder",
    "StringMultiSearch",
]
