from __future__ import annotations
import io
import logging
import os
from typing import Dict, Iterable, Iterator, List, TextIO, Tuple

from .config import ENCODING, SHINGLE_SIZE, PROGRESS_EVERY_DOCS
from .shingler import Shingler

log = logging.getLogger(__name__)


def iter_documents(root: str) -> Iterator[Tuple[str, str]]:
    """
    Yield (doc_id, path) for every regular file directly under root.
    doc_id is the file name; files are visited in name order so runs are
    reproducible.
    """
    root = os.path.abspath(root)
    if not os.path.isdir(root):
        raise FileNotFoundError(root)
    with os.scandir(root) as it:
        entries = sorted((e for e in it if e.is_file()), key=lambda e: e.name)
    for entry in entries:
        yield entry.name, entry.path


def open_document(path: str) -> TextIO:
    """Open one document as a text stream (undecodable bytes are skipped)."""
    return open(path, "r", encoding=ENCODING, errors="ignore", newline="")


def open_partial(path: str, start: int, length: int) -> TextIO:
    """
    Text stream over bytes [start, start + length) of a file.
    Raises EOFError when the file is shorter than the requested range.
    """
    if start < 0 or length < 0:
        raise ValueError("start and length must be non-negative")
    with open(path, "rb") as f:
        f.seek(start)
        data = f.read(length)
    if len(data) < length:
        raise EOFError(f"{path}: wanted {length} bytes at {start}, got {len(data)}")
    return io.StringIO(data.decode(ENCODING, errors="ignore"))


def read_shingles(path: str, n: int = SHINGLE_SIZE) -> List[str]:
    """All shingles of one document; [] when it cannot be opened."""
    try:
        with open_document(path) as f:
            return list(Shingler(f, n))
    except OSError as exc:
        log.warning("Cannot read %s: %s", path, exc)
        return []


def process_documents(root: str, n: int = SHINGLE_SIZE) -> Dict[str, List[str]]:
    """
    Shingle every document under root.
    Returns {doc_id: [shingle, ...]} in document order; unreadable or
    letterless documents map to an empty list.
    """
    docs: Dict[str, List[str]] = {}
    for doc_id, path in iter_documents(root):
        docs[doc_id] = read_shingles(path, n)
        if log.isEnabledFor(logging.INFO) and len(docs) % PROGRESS_EVERY_DOCS == 0:
            log.info("[shingled] documents=%d", len(docs))
    log.info("Shingled %d documents from %s (n=%d)", len(docs), root, n)
    return docs


def document_openers(paths: Iterable[Tuple[str, str]]):
    """Pair each doc_id with a zero-argument opener, for streaming writes."""
    for doc_id, path in paths:
        yield doc_id, (lambda p=path: open_document(p))
