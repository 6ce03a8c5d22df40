from __future__ import annotations
import os
from typing import Optional

# Words per shingle
SHINGLE_SIZE: int = 3

# Minimum shared-shingle count reported
THRESHOLD: int = 1

# Encoding for documents and the corpus store (byte counts are measured in it)
ENCODING: str = "utf-8"

# Default corpus location
CORPUS_PATH: str = os.path.join("build", "ngrams.txt")

# One separator byte after every shingle in the corpus
SEPARATOR: str = " "

# Characters pulled from a stream per read() call
READ_CHUNK: int = 8192

# /* ~~~ optional cap on postings per shingle; None records every occurrence ~~~ */
MAX_POSTINGS: Optional[int] = None

# Progress logging (emitted when the logger is at INFO, e.g. build(verbose=True))
PROGRESS_EVERY_DOCS: int = 500
