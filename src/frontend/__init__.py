"""Public API for the near-duplicate detector (module-level engine)."""
from __future__ import annotations
import time
import logging
from neardup.config import THRESHOLD
from neardup.engine import Engine

log = logging.getLogger(__name__)

_engine: Engine | None = None

def initialize(root: str,
               corpus: str | None = None,
               n: int | None = None,
               max_postings: int | None = None,
               verbose: bool = False) -> Engine:
    """Build the corpus for root and keep the engine for report()."""
    global _engine
    t0 = time.perf_counter()
    eng = Engine()
    eng.build(root, corpus_path=corpus, n=n, max_postings=max_postings, verbose=verbose)
    _engine = eng
    log.info("[ready] init complete in %.2fs", time.perf_counter() - t0)
    return eng

def report(threshold: int = THRESHOLD):
    """Return similarities with count >= threshold, highest first (list[Similarity])."""
    if _engine is None:
        raise RuntimeError("Engine not initialized. Call initialize(...) first.")
    return _engine.report(threshold)
