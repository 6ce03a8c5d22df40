# neardup/DB/corpus_store.py
from __future__ import annotations
import logging
import os
from typing import Callable, Iterable, List, Mapping, TextIO, Tuple

from ..config import ENCODING, SEPARATOR, SHINGLE_SIZE, PROGRESS_EVERY_DOCS
from ..models import ByteCount
from ..shingler import Shingler

log = logging.getLogger(__name__)

# File format:
#   <shingle><SEPARATOR><shingle><SEPARATOR>...
#   No header, no index. Document spans are known only from the ByteCount
#   list returned at write time.


def reset_store(path: str) -> bool:
    """Create missing parent dirs and replace any existing corpus with an empty file."""
    path = os.path.abspath(path)
    try:
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        if os.path.exists(path):
            os.remove(path)
        with open(path, "wb"):
            pass
    except OSError as exc:
        log.error("Cannot create corpus store %s: %s", path, exc)
        return False
    return True


def _open_append(path: str) -> TextIO:
    return open(path, "a", encoding=ENCODING, newline="")


def _write_shingles(out: TextIO, shingles: Iterable[str]) -> int:
    """Append shingles, each followed by the separator; return bytes written."""
    nbytes = 0
    for shingle in shingles:
        record = shingle + SEPARATOR
        out.write(record)
        nbytes += len(record.encode(ENCODING))
    return nbytes


def _truncate_to(path: str, counts: List[ByteCount]) -> bool:
    """Cut the corpus back to the records in counts, dropping a half-written document."""
    try:
        os.truncate(path, sum(c.nbytes for c in counts))
    except OSError as exc:
        log.error("Cannot truncate corpus %s: %s", path, exc)
        return False
    return True


def store_shingles(docs: Mapping[str, Iterable[str]], path: str) -> List[ByteCount]:
    """
    Write every document's shingles to the corpus at path, in mapping order.
    Returns one ByteCount per document, or [] if the store cannot be set up.
    A write fault stops the run; the corpus is truncated to the documents
    completed so far and their counts are returned.
    """
    if not reset_store(path):
        return []

    counts: List[ByteCount] = []
    try:
        with _open_append(path) as out:
            for doc_id, shingles in docs.items():
                counts.append(ByteCount(doc_id, _write_shingles(out, shingles)))
                if log.isEnabledFor(logging.INFO) and len(counts) % PROGRESS_EVERY_DOCS == 0:
                    log.info("[stored] documents=%d", len(counts))
    except OSError as exc:
        log.error("Error writing corpus %s: %s", path, exc)
        if not _truncate_to(path, counts):
            return []
    log.info("Stored %d documents in %s", len(counts), path)
    return counts


def process_and_store(
    documents: Iterable[Tuple[str, Callable[[], TextIO]]],
    path: str,
    n: int = SHINGLE_SIZE,
) -> List[ByteCount]:
    """
    Streaming variant of store_shingles: shingle each document straight into
    the corpus. documents yields (doc_id, opener); a document whose opener
    fails contributes 0 bytes.
    """
    if n < 1:
        raise ValueError(f"shingle size must be >= 1, got {n}")
    if not reset_store(path):
        return []

    counts: List[ByteCount] = []
    try:
        with _open_append(path) as out:
            for doc_id, opener in documents:
                try:
                    src = opener()
                except OSError as exc:
                    log.warning("Cannot read document %s: %s", doc_id, exc)
                    counts.append(ByteCount(doc_id, 0))
                    continue
                # read faults end the Shingler quietly; write faults propagate
                with src:
                    counts.append(ByteCount(doc_id, _write_shingles(out, Shingler(src, n))))
                if log.isEnabledFor(logging.INFO) and len(counts) % PROGRESS_EVERY_DOCS == 0:
                    log.info("[stored] documents=%d", len(counts))
    except OSError as exc:
        log.error("Error writing corpus %s: %s", path, exc)
        if not _truncate_to(path, counts):
            return []
    log.info("Stored %d documents in %s (n=%d)", len(counts), path, n)
    return counts


def corpus_size(path: str) -> int:
    """Total byte length of the corpus store."""
    return os.path.getsize(path)
