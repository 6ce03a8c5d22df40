"""
Near-duplicate detection by shared word shingles.

Every document is cut into overlapping n-word shingles, all shingles are
written to one flat corpus file with per-document byte counts, and a single
pass over that corpus counts, for every pair of documents, how many shingle
occurrences they share. Pairs are reported highest count first.

Example Usage:
    from neardup import Engine

    eng = Engine()
    eng.build("essays/", corpus_path="build/ngrams.txt", n=3)
    for sim in eng.report(threshold=5):
        print(sim)
"""

from .engine import Engine
from .models import ByteCount, Similarity
from .shingler import Shingler

__version__ = "1.0.0"
__all__ = ["Engine", "ByteCount", "Similarity", "Shingler"]
