from pathlib import Path
import pytest
from neardup.engine import Engine
from neardup.DB.corpus_store import corpus_size

def _seed(tmp: Path) -> str:
    root = tmp / "Essays"
    root.mkdir()
    (root / "hamlet.txt").write_text(
        "To be, or not to be: that is the question.\n"
        "Whether 'tis nobler in the mind to suffer.\n",
        encoding="utf-8",
    )
    (root / "copy.txt").write_text(
        "I wonder: to be, or not to be? That is the question, friend.\n",
        encoding="utf-8",
    )
    (root / "other.txt").write_text("Completely unrelated prose about gardening.\n", encoding="utf-8")
    return str(root)

@pytest.mark.e2e
@pytest.mark.parametrize("streaming", [True, False])
def test_build_and_report(tmp_path: Path, streaming: bool):
    root = _seed(tmp_path)
    corpus = tmp_path / "out" / "ngrams.txt"
    eng = Engine()
    try:
        eng.build(root, corpus_path=str(corpus), n=3, streaming=streaming)
        assert eng.documents == ["copy.txt", "hamlet.txt", "other.txt"]
        assert sum(bc.nbytes for bc in eng.byte_counts) == corpus_size(str(corpus))

        rows = eng.report(threshold=1)
        assert len(rows) == 1
        top = rows[0]
        assert (top.doc_a, top.doc_b) == ("copy.txt", "hamlet.txt")
        # tobeor beornot ornotto nottobe tobethat bethatis thatisthe isthequestion
        assert top.count == 8
        assert eng.report(threshold=9) == []
    finally:
        eng.shutdown()

@pytest.mark.e2e
def test_report_is_repeatable_and_limited(tmp_path: Path):
    root = tmp_path / "R"; root.mkdir()
    for name, text in {"a.txt": "x y z w", "b.txt": "x y z", "c.txt": "y z w"}.items():
        (root / name).write_text(text, encoding="utf-8")
    eng = Engine()
    try:
        eng.build(str(root), corpus_path=str(tmp_path / "c.txt"), n=1)
        first = eng.report(1)
        assert [(r.count, r.doc_a, r.doc_b) for r in first] == [(3, "a.txt", "c.txt"), (3, "a.txt", "b.txt"), (2, "b.txt", "c.txt")]
        assert eng.report(1) == first
        assert len(eng.report(1, limit=2)) == 2
        assert eng.similarities() == first
    finally:
        eng.shutdown()

@pytest.mark.e2e
def test_engine_requires_build_and_root():
    eng = Engine()
    with pytest.raises(RuntimeError):
        eng.report(1)
    with pytest.raises(ValueError):
        eng.build("")

@pytest.mark.e2e
def test_missing_root_raises(tmp_path: Path):
    eng = Engine()
    with pytest.raises(FileNotFoundError):
        eng.build(str(tmp_path / "nope"), corpus_path=str(tmp_path / "c.txt"))
