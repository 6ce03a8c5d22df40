from .corpus_store import reset_store, store_shingles, process_and_store, corpus_size
from .offsets import OffsetIndex

__all__ = ["reset_store", "store_shingles", "process_and_store", "corpus_size", "OffsetIndex"]
