from __future__ import annotations
import bisect
from itertools import accumulate
from typing import Iterable, List, Optional, Tuple


class OffsetIndex:
    """
    Cumulative byte-boundary table over the corpus.

    cumulative[i] is the sum of byte counts 0..i, i.e. the end offset of
    document i's span. locate(p) maps an absolute corpus position to the
    owning document in O(log D).
    """

    def __init__(self, byte_counts: Iterable[int]) -> None:
        counts = [int(c) for c in byte_counts]
        if any(c < 0 for c in counts):
            raise ValueError("byte counts must be non-negative")
        self._cum: List[int] = list(accumulate(counts))

    @classmethod
    def build(cls, byte_counts: Iterable[int]) -> "OffsetIndex":
        return cls(byte_counts)

    def __len__(self) -> int:
        return len(self._cum)

    @property
    def cumulative(self) -> Tuple[int, ...]:
        return tuple(self._cum)

    @property
    def boundaries(self) -> Tuple[int, ...]:
        """(0, s1, ..., sD): D + 1 boundaries."""
        return (0, *self._cum)

    @property
    def total(self) -> int:
        return self._cum[-1] if self._cum else 0

    def locate(self, pos: int) -> Optional[int]:
        """
        Index of the document owning byte position pos: the smallest i with
        cumulative[i] >= pos. A position that ends exactly on a boundary
        belongs to the document whose span ends there.
        Returns None when pos is out of range (or the index is empty).
        """
        if not self._cum or pos < 0 or pos > self._cum[-1]:
            return None
        return bisect.bisect_left(self._cum, pos)

    def span(self, i: int) -> Tuple[int, int]:
        """(start, end) byte range of document i."""
        if not 0 <= i < len(self._cum):
            raise IndexError(i)
        start = self._cum[i - 1] if i else 0
        return start, self._cum[i]
