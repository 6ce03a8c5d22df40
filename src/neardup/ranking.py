from __future__ import annotations
import bisect
import sys
from typing import Iterable, Iterator, List, Optional, TextIO, Tuple

from .models import Similarity

_Key = Tuple[int, str, str]


class RankedSimilarities:
    """
    Sorted, duplicate-free collection of Similarity keyed by
    (count, doc_a, doc_b), ascending.
    Kept as parallel sorted arrays (keys + items) searched with bisect.
    Inserting a key already present is a no-op, so the key must be total:
    count alone would collapse equal-count pairs into one.
    """

    def __init__(self, items: Iterable[Similarity] = ()) -> None:
        self._keys: List[_Key] = []
        self._items: List[Similarity] = []
        # bulk load: one sort, then drop equal neighbours
        for s in sorted(items, key=Similarity.key):
            key = s.key()
            if self._keys and self._keys[-1] == key:
                continue
            self._keys.append(key)
            self._items.append(s)

    # -------- Build-time API --------
    def add(self, sim: Similarity) -> bool:
        """Insert sim; return False if an equal entry is already present."""
        key = sim.key()
        i = bisect.bisect_left(self._keys, key)
        if i != len(self._keys) and self._keys[i] == key:
            return False
        self._keys.insert(i, key)
        self._items.insert(i, sim)
        return True

    def __contains__(self, sim: object) -> bool:
        if not isinstance(sim, Similarity):
            return False
        key = sim.key()
        i = bisect.bisect_left(self._keys, key)
        return i != len(self._keys) and self._keys[i] == key

    # -------- Read API --------
    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Similarity]:
        return iter(self._items)

    def __reversed__(self) -> Iterator[Similarity]:
        return reversed(self._items)

    def peek_max(self) -> Optional[Similarity]:
        return self._items[-1] if self._items else None

    def pop_max(self) -> Similarity:
        if not self._items:
            raise KeyError("pop from an empty RankedSimilarities")
        self._keys.pop()
        return self._items.pop()


def rank(similarities: Iterable[Similarity]) -> RankedSimilarities:
    return RankedSimilarities(s for s in similarities if s.count > 0)


def iter_report(ranked: RankedSimilarities, threshold: int) -> Iterator[Similarity]:
    """
    Remove and yield the highest-count entry while its count >= threshold.
    Stops at the first entry below threshold; it and everything lower stay in
    ranked.
    """
    while ranked:
        top = ranked.peek_max()
        if top.count < threshold:
            return
        yield ranked.pop_max()


def format_similarity(sim: Similarity) -> str:
    return f"{sim.count:<7} {sim.doc_a}  <->  {sim.doc_b}"


def print_similarities(ranked: RankedSimilarities, threshold: int, file: TextIO | None = None) -> int:
    """Write one line per reported similarity; return how many were written."""
    out = file or sys.stdout
    n = 0
    for sim in iter_report(ranked, threshold):
        print(format_similarity(sim), file=out)
        n += 1
    return n
