from pathlib import Path
import pytest
from neardup.engine import Engine
from frontend.web import app as flask_app

def _seed(tmp: Path) -> str:
    root = tmp / "Archive"; root.mkdir()
    (root / "y.txt").write_text("health check line\n", encoding="utf-8")
    (root / "w.txt").write_text("another health check\n", encoding="utf-8")
    return str(root)

@pytest.mark.e2e
def test_frontend_health(tmp_path: Path):
    import frontend.web as webmod
    client = flask_app.test_client()

    webmod._engine = None
    r = client.get("/health")
    assert r.status_code == 200
    assert r.get_json() == {"ok": False, "documents": 0}

    eng = Engine(); eng.build(_seed(tmp_path), corpus_path=str(tmp_path / "ngrams.txt"), n=1)
    webmod._engine = eng
    data = client.get("/health").get_json()
    assert data["ok"] is True and data["documents"] == 2

    eng.shutdown()
    webmod._engine = None
