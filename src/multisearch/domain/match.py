"""Match record produced by the streaming matcher."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable


@dataclass(frozen=True, slots=True)
class Match:
    """One occurrence of a registered pattern in the scanned input.

    start is the offset of the first matched symbol (inclusive),
    length the number of symbols, ids every id registered for the
    pattern. Matches are values: two matches at the same place for
    the same pattern compare equal.
    """
    start: int
    length: int
    ids: frozenset

    @classmethod
    def of(cls, start: int, length: int, *ids: Hashable) -> Match:
        """Factory: build a match from loose ids."""
        return cls(start=start, length=length, ids=frozenset(ids))

    @property
    def end(self) -> int:
        """Offset right after the last matched symbol."""
        return self.start + self.length
