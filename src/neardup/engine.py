# neardup/engine.py
from __future__ import annotations

import logging
from typing import List, Optional

from . import config as CFG
from .models import ByteCount, Similarity
from .loader import iter_documents, document_openers, process_documents
from .DB.corpus_store import process_and_store, store_shingles
from .similarity import compute_similarities
from .ranking import RankedSimilarities, rank, iter_report

log = logging.getLogger(__name__)


class Engine:
    """
    Thin orchestration layer that glues together:
      - document discovery (loader),
      - the corpus writer (DB.corpus_store),
      - the single-pass similarity scan (similarity),
      - ranking and the threshold report (ranking).

    Public API (used by CLI/Flask):
      * build(root, ...):      shingle -> write corpus -> scan -> rank
      * similarities():        all pairs, highest count first
      * report(threshold):     pairs with count >= threshold, highest first
      * shutdown():            drop state
    """

    # ------------- lifecycle -------------

    def __init__(self) -> None:
        self.corpus_path: Optional[str] = None
        self.byte_counts: List[ByteCount] = []
        self.n: int = CFG.SHINGLE_SIZE
        self._similarities: Optional[List[Similarity]] = None

    # /* ~~~ Shingle a folder, write the corpus and count shared shingles ~~~ */
    def build(
        self,
        root: str,
        *,
        corpus_path: Optional[str] = None,     # flat corpus file, replaced on every build
        n: Optional[int] = None,               # words per shingle
        max_postings: Optional[int] = CFG.MAX_POSTINGS,
        streaming: bool = True,                # False: materialize shingle lists first
        verbose: bool = False,
    ) -> None:
        if verbose:
            logging.basicConfig(level=logging.INFO)

        if not root:
            raise ValueError("build(): a root folder is required")

        n = int(n if n is not None else CFG.SHINGLE_SIZE)
        if n < 1:
            raise ValueError(f"build(): shingle size must be >= 1, got {n}")
        corpus_path = corpus_path or CFG.CORPUS_PATH

        log.info("Shingling documents under %s (n=%d)", root, n)
        if streaming:
            # list first so a missing root raises here, not inside the writer
            paths = list(iter_documents(root))
            counts = process_and_store(document_openers(paths), corpus_path, n)
        else:
            counts = store_shingles(process_documents(root, n), corpus_path)

        log.info("Scanning corpus %s", corpus_path)
        sims = compute_similarities(corpus_path, counts, max_postings=max_postings)

        # Commit engine state
        self.corpus_path = corpus_path
        self.byte_counts = counts
        self.n = n
        self._similarities = sims
        log.info("Engine build() complete: documents=%d pairs=%d", len(counts), len(sims))

    # ------------- query -------------

    def ranked(self) -> RankedSimilarities:
        """A fresh ranked collection; reporting from it does not touch engine state."""
        if self._similarities is None:
            raise RuntimeError("Engine not initialized. Call build() first.")
        return rank(self._similarities)

    def similarities(self) -> List[Similarity]:
        return list(reversed(self.ranked()))

    # /* ~~~ Pairs with count >= threshold, highest count first ~~~ */
    def report(self, threshold: int = CFG.THRESHOLD, *, limit: Optional[int] = None) -> List[Similarity]:
        rows: List[Similarity] = []
        for sim in iter_report(self.ranked(), threshold):
            if limit is not None and len(rows) >= limit:
                break
            rows.append(sim)
        return rows

    @property
    def documents(self) -> List[str]:
        return [bc.doc_id for bc in self.byte_counts]

    # ------------- teardown -------------

    def shutdown(self) -> None:
        self.corpus_path = None
        self.byte_counts = []
        self._similarities = None
        log.info("Engine shutdown complete")
