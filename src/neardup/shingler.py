"""
Streaming tokenizers.

Shingler turns a character stream into overlapping word n-grams ("shingles"):
letters are the only word characters, every maximal run of letters is a word,
words are lowercased and n consecutive words are concatenated without a
separator. iter_tokens splits an already built corpus back into its
space-delimited shingles.

Both read the stream in chunks and treat a failed read as the end of the
stream: whatever was complete before the fault is returned, nothing after it.
"""

from __future__ import annotations
import logging
from collections import deque
from typing import Deque, Iterator, Optional, TextIO

from .config import READ_CHUNK, SEPARATOR, SHINGLE_SIZE

log = logging.getLogger(__name__)

# Faults that end a stream early. UnicodeDecodeError is a ValueError, and so is
# reading from a closed file.
_READ_FAULTS = (OSError, ValueError)


def _read_chunk(stream: TextIO, size: int) -> Optional[str]:
    """Return the next chunk, '' at end of stream, or None on a read fault."""
    try:
        return stream.read(size)
    except _READ_FAULTS as exc:
        log.debug("read failed, ending stream early: %r", exc)
        return None


class Shingler:
    """
    Lazy, single-pass iterator of shingles over a text stream.

    >>> import io
    >>> list(Shingler(io.StringIO("To be, or not to be!"), 2))
    ['tobe', 'beor', 'ornot', 'notto', 'tobe']
    """

    def __init__(self, stream: TextIO, n: int = SHINGLE_SIZE) -> None:
        if stream is None:
            raise TypeError("stream cannot be None")
        if n < 1:
            raise ValueError(f"shingle size must be >= 1, got {n}")
        self._stream = stream
        self._n = int(n)
        self._window: Deque[str] = deque()
        self._buf = ""
        self._pos = 0
        self._eof = False
        self._failed = False

    @property
    def n(self) -> int:
        return self._n

    def __iter__(self) -> "Shingler":
        return self

    def __next__(self) -> str:
        while len(self._window) < self._n:
            word = self._next_word()
            if word is None:
                raise StopIteration
            self._window.append(word)
        shingle = "".join(self._window)
        self._window.popleft()
        return shingle

    # ---- internals ----

    def _next_char(self) -> str:
        if self._pos >= len(self._buf):
            if self._eof:
                return ""
            chunk = _read_chunk(self._stream, READ_CHUNK)
            if not chunk:
                self._eof = True
                self._failed = chunk is None
                self._buf, self._pos = "", 0
                return ""
            self._buf, self._pos = chunk, 0
        ch = self._buf[self._pos]
        self._pos += 1
        return ch

    def _next_word(self) -> Optional[str]:
        """Next lowercased word, or None once the stream is exhausted."""
        ch = self._next_char()
        while ch and not ch.isalpha():
            ch = self._next_char()
        if not ch:
            return None

        letters = []
        while ch.isalpha():
            letters.append(ch)
            ch = self._next_char()
        if self._failed:
            # the run was cut by a fault, not by a separator
            return None
        return "".join(letters).lower()


def iter_tokens(stream: TextIO, sep: str = SEPARATOR) -> Iterator[str]:
    """
    Yield the sep-terminated tokens of a corpus stream, in order.

    Empty tokens are skipped. A trailing fragment with no terminating
    separator is a truncated record and is dropped, as is everything after a
    read fault.
    """
    if stream is None:
        raise TypeError("stream cannot be None")
    tail = ""
    while True:
        chunk = _read_chunk(stream, READ_CHUNK)
        if not chunk:
            break
        parts = (tail + chunk).split(sep)
        tail = parts.pop()
        for tok in parts:
            if tok:
                yield tok
    if tail:
        log.debug("dropping unterminated corpus fragment (%d chars)", len(tail))
