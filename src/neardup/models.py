# neardup/models.py
"""
Data models for the near-duplicate detector.

- ByteCount: how many corpus bytes one document wrote.
- Similarity: shared-shingle count for one pair of documents.

These classes carry no business logic beyond ordering; writing, scanning and
ranking live in their own modules.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ByteCount:
    """
    One record of the writer -> offset index contract.

    Attributes
    ----------
    doc_id : str
        Document name (file name), unique within a run.
    nbytes : int
        Bytes written to the corpus for this document, shingles plus one
        separator each, measured in the corpus encoding. 0 when the document
        produced no shingles.
    """
    doc_id: str
    nbytes: int


@dataclass(order=True, slots=True)
class Similarity:
    """
    Shared-shingle count between two documents.

    Ordering compares (count, doc_a, doc_b) so that two distinct pairs never
    compare equal; a sorted, duplicate-free container relies on this.

    Attributes
    ----------
    count : int
        Shingle occurrences observed to be shared between the two documents.
    doc_a : str
        The document that comes first in corpus order.
    doc_b : str
        The document that comes later in corpus order.
    """
    count: int
    doc_a: str
    doc_b: str

    def key(self) -> tuple[int, str, str]:
        return (self.count, self.doc_a, self.doc_b)

    def to_dict(self) -> dict:
        return {"doc_a": self.doc_a, "doc_b": self.doc_b, "count": self.count}

    def __str__(self) -> str:
        return f"{self.doc_a} <-> {self.doc_b}: {self.count}"
