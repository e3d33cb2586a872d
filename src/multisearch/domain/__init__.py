"""Domain model for multisearch.

Re-exports the public value types and errors:
    from multisearch.domain import Match, InvalidStateError
"""
from multisearch.domain.errors import (
    DuplicateIdentifierError,
    InvalidArgumentError,
    InvalidStateError,
    MultiSearchError,
)
from multisearch.domain.match import Match
from multisearch.domain.types import ROOT, PatternId, Symbol, VertexId

__all__ = [
    "DuplicateIdentifierError",
    "InvalidArgumentError",
    "InvalidStateError",
    "Match",
    "MultiSearchError",
    "PatternId",
    "ROOT",
    "Symbol",
    "VertexId",
]
