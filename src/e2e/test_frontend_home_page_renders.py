from pathlib import Path
import pytest
from neardup.engine import Engine
from frontend.web import app as flask_app

def _seed(tmp: Path) -> str:
    root = tmp / "Archive"; root.mkdir()
    (root / "<x>.txt").write_text("hello world\nnear duplicate demo line\n", encoding="utf-8")
    (root / "y.txt").write_text("a near duplicate demo\n", encoding="utf-8")
    return str(root)

@pytest.mark.e2e
def test_frontend_home_page_renders(tmp_path: Path):
    roots = _seed(tmp_path)
    eng = Engine(); eng.build(roots, corpus_path=str(tmp_path / "ngrams.txt"), n=2)

    import frontend.web as webmod
    webmod._engine = eng

    client = flask_app.test_client()
    r = client.get("/")
    assert r.status_code == 200
    html = r.data.decode("utf-8", errors="ignore")
    assert "<table>" in html
    assert "&lt;x&gt;.txt" in html and "y.txt" in html

    eng.shutdown()
    webmod._engine = None
