import io
import re

import pytest

from neardup.shingler import Shingler, iter_tokens
import neardup.shingler as SH


def _shingles(text: str, n: int) -> list[str]:
    return list(Shingler(io.StringIO(text), n))


class FlakyStream:
    """Text stream double that serves chunks, then raises OSError."""
    def __init__(self, chunks: list[str]):
        self._chunks = list(chunks)

    def read(self, size: int = -1) -> str:
        if not self._chunks:
            raise OSError("device went away")
        return self._chunks.pop(0)


@pytest.fixture
def small_chunks(monkeypatch):
    # Force words to straddle read() boundaries
    monkeypatch.setattr(SH, "READ_CHUNK", 3)


def test_letters_only_words_lowercased_and_concatenated():
    assert _shingles("The  quick, brown-fox! 42jumps", 2) == [
        "thequick", "quickbrown", "brownfox", "foxjumps",
    ]


def test_digits_and_punctuation_are_separators():
    assert _shingles("abc123def...ghi", 1) == ["abc", "def", "ghi"]


@pytest.mark.parametrize("n", [1, 2, 3, 5, 8])
def test_shingle_count_matches_word_count(n, small_chunks):
    text = "It was the best of times, it was the worst of times;\n it was..."
    words = re.findall(r"[^\W\d_]+", text)
    assert len(_shingles(text, n)) == max(0, len(words) - n + 1)


def test_adjacent_shingles_overlap_by_n_minus_one_words():
    words = ["alpha", "beta", "gamma", "delta", "eps"]
    out = _shingles(" ".join(words), 3)
    for i in range(len(out) - 1):
        assert out[i] == "".join(words[i:i + 3])
        assert out[i + 1] == "".join(words[i + 1:i + 4])


@pytest.mark.parametrize("n", [1, 2, 4])
def test_no_letters_gives_no_shingles(n):
    assert _shingles("12345 !@#$%^&*()\n", n) == []
    assert _shingles("", n) == []


def test_partial_trailing_window_is_dropped():
    assert _shingles("one two", 3) == []
    assert _shingles("one two three", 3) == ["onetwothree"]


def test_unicode_letters_are_words():
    assert _shingles("Café über naïve", 1) == ["café", "über", "naïve"]


def test_words_split_across_chunks(small_chunks):
    assert _shingles("abcdefgh ijklmnop", 1) == ["abcdefgh", "ijklmnop"]


def test_exhausted_iterator_raises_stop_iteration():
    it = Shingler(io.StringIO("only"), 1)
    assert next(it) == "only"
    with pytest.raises(StopIteration):
        next(it)
    with pytest.raises(StopIteration):
        next(it)


def test_read_fault_is_end_of_stream_and_drops_cut_word(small_chunks):
    # "cd" is cut by the fault, so it is not a word
    stream = FlakyStream(["ab ", "cd"])
    assert list(Shingler(stream, 1)) == ["ab"]


def test_read_fault_on_closed_stream():
    s = io.StringIO("hello world")
    s.close()
    assert list(Shingler(s, 1)) == []


def test_invalid_arguments():
    with pytest.raises(TypeError):
        Shingler(None, 2)
    with pytest.raises(ValueError):
        Shingler(io.StringIO("x"), 0)


def test_iter_tokens_splits_corpus_and_drops_unterminated_tail(small_chunks):
    assert list(iter_tokens(io.StringIO("abcd efg hi jkl"))) == ["abcd", "efg", "hi"]
    assert list(iter_tokens(io.StringIO("abcd efg "))) == ["abcd", "efg"]
    assert list(iter_tokens(io.StringIO(""))) == []


def test_iter_tokens_stops_at_read_fault(small_chunks):
    assert list(iter_tokens(FlakyStream(["ab ", "cd ", "ef"]))) == ["ab", "cd"]
