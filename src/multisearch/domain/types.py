"""Shared type aliases used across the package."""
from __future__ import annotations

from typing import Hashable, TypeAlias

Symbol: TypeAlias = Hashable     # one element of a pattern or of the scanned input
PatternId: TypeAlias = Hashable  # opaque identifier attached to a pattern
VertexId: TypeAlias = int        # dense index into the vertex arena

ROOT: VertexId = 0
