"""Errors raised while registering patterns and building a finder.

All of them are raised synchronously by MultiSearch.register() or
MultiSearch.build_finder(). Scanning a compiled automaton never raises:
running out of input simply ends the match stream.
"""
from __future__ import annotations

from typing import Hashable


class MultiSearchError(Exception):
    """Base class for every error raised by multisearch."""


class InvalidArgumentError(MultiSearchError, ValueError):
    """Raised for an empty pattern or an empty id collection."""


class InvalidStateError(MultiSearchError, RuntimeError):
    """Raised when registering after build, or building twice."""


class DuplicateIdentifierError(MultiSearchError, ValueError):
    """Raised when an id was already used by an earlier register() call."""

    def __init__(self, identifier: Hashable) -> None:
        self.identifier = identifier
        super().__init__(f"Duplicate pattern id: {identifier!r}")
