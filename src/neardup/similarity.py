from __future__ import annotations
import logging
from array import array
from collections import defaultdict
from typing import Dict, List, Optional, Sequence

from .config import ENCODING, MAX_POSTINGS, SEPARATOR
from .models import ByteCount, Similarity
from .shingler import iter_tokens
from .DB.offsets import OffsetIndex

log = logging.getLogger(__name__)

PROGRESS_EVERY_TOKENS = 1_000_000


class PairCounts:
    """
    Upper-triangular D x D counter table stored flat.
    Pair (i, j), i < j, lives at i*(2D - i - 1)//2 + (j - i - 1).
    """

    def __init__(self, n_docs: int) -> None:
        self.n_docs = int(n_docs)
        size = self.n_docs * (self.n_docs - 1) // 2 if self.n_docs > 1 else 0
        self._counts = array("Q", bytes(8 * size))

    def __len__(self) -> int:
        return len(self._counts)

    def slot(self, i: int, j: int) -> int:
        if not 0 <= i < j < self.n_docs:
            raise IndexError((i, j))
        return i * (2 * self.n_docs - i - 1) // 2 + (j - i - 1)

    def add(self, i: int, j: int, k: int = 1) -> None:
        self._counts[self.slot(i, j)] += k

    def get(self, i: int, j: int) -> int:
        return self._counts[self.slot(i, j)]

    def iter_nonzero(self):
        """Yield (i, j, count) for every pair with count > 0, in (i, j) order."""
        pos = 0
        for i in range(self.n_docs - 1):
            for j in range(i + 1, self.n_docs):
                c = self._counts[pos]
                if c:
                    yield i, j, c
                pos += 1


def count_shared(
    tokens,
    offsets: OffsetIndex,
    *,
    max_postings: Optional[int] = MAX_POSTINGS,
) -> PairCounts:
    """
    One forward pass over corpus tokens.

    A running byte cursor attributes each token to its document; every
    earlier occurrence of the same shingle in a different document adds one to
    that pair. Every occurrence is recorded, so a shingle seen k times in each
    of two documents contributes k*k. max_postings, when set, stops recording
    a shingle once its postings list reaches that length.
    """
    table = PairCounts(len(offsets))
    postings: Dict[str, List[int]] = defaultdict(list)
    sep_bytes = len(SEPARATOR.encode(ENCODING))
    cursor = 0
    seen = 0

    for tok in tokens:
        cursor += len(tok.encode(ENCODING)) + sep_bytes
        cur = offsets.locate(cursor)
        if cur is None:
            raise ValueError(
                f"corpus extends past recorded byte counts (cursor={cursor}, total={offsets.total})"
            )

        plist = postings[tok]
        for prev in plist:
            if prev != cur:
                table.add(prev, cur)
        if max_postings is None or len(plist) < max_postings:
            plist.append(cur)

        seen += 1
        if log.isEnabledFor(logging.INFO) and seen % PROGRESS_EVERY_TOKENS == 0:
            log.info("[scanned] tokens=%d distinct=%d", seen, len(postings))

    log.info("Scanned %d tokens (%d distinct shingles, %d bytes)", seen, len(postings), cursor)
    return table


def compute_similarities(
    corpus_path: str,
    byte_counts: Sequence[ByteCount],
    *,
    max_postings: Optional[int] = MAX_POSTINGS,
) -> List[Similarity]:
    """
    Shared-shingle counts for every pair of documents in the corpus.
    Returns Similarity entries with count > 0 only; [] when the corpus
    cannot be opened.
    """
    if len(byte_counts) < 2:
        return []
    offsets = OffsetIndex.build(bc.nbytes for bc in byte_counts)

    try:
        f = open(corpus_path, "r", encoding=ENCODING, newline="")
    except OSError as exc:
        log.warning("Cannot open corpus %s: %s", corpus_path, exc)
        return []
    with f:
        table = count_shared(iter_tokens(f), offsets, max_postings=max_postings)

    ids = [bc.doc_id for bc in byte_counts]
    return [Similarity(count, ids[i], ids[j]) for i, j, count in table.iter_nonzero()]
