from __future__ import annotations
import argparse
from flask import Flask, request, jsonify, Response
from markupsafe import escape
from neardup.engine import Engine
from neardup.config import CORPUS_PATH, SHINGLE_SIZE, THRESHOLD

app = Flask(__name__)
_engine: Engine | None = None

def _require_engine() -> Engine:
    if _engine is None:
        raise RuntimeError("Engine not initialized. Run main() or set frontend.web._engine.")
    return _engine

# ---------- API ----------
@app.get("/api/similarities")
def api_similarities():
    threshold = request.args.get("threshold", THRESHOLD, type=int)
    limit = request.args.get("limit", None, type=int)
    rows = _require_engine().report(threshold, limit=limit)
    return jsonify([r.to_dict() for r in rows])

@app.get("/health")
def health():
    eng = _engine
    return jsonify({"ok": eng is not None, "documents": len(eng.documents) if eng else 0})

# ---------- UI ----------
_PAGE = r"""<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<title>Near-duplicates</title>
<style>
:root{ --bg:#0b0f14; --panel:#0f141b; --ink:#cfd8e3; --muted:#8a94a6; --border:#1c2530; }
body{ margin:0; background:var(--bg); color:var(--ink); font:15px/1.45 system-ui,sans-serif; }
.container{ max-width:980px; margin:24px auto; padding:0 16px; }
table{ width:100%; border-collapse:collapse; background:var(--panel); }
th,td{ padding:8px 12px; border-top:1px solid var(--border); text-align:left; }
th{ color:var(--muted); }
.empty{ padding:24px; text-align:center; color:var(--muted); }
</style>
</head>
<body><div class="container">
<h1>Near-duplicate documents</h1>
<p class="meta">threshold &ge; {threshold} &middot; {ndocs} documents</p>
{body}
</div></body>
</html>
"""

@app.get("/")
def home():
    threshold = request.args.get("threshold", THRESHOLD, type=int)
    eng = _engine
    rows = eng.report(threshold) if eng else []
    if rows:
        trs = "".join(
            f"<tr><td>{r.count}</td><td>{escape(r.doc_a)}</td><td>{escape(r.doc_b)}</td></tr>" for r in rows
        )
        body = f"<table><tr><th>Count</th><th>Document</th><th>Document</th></tr>{trs}</table>"
    else:
        body = '<div class="empty">No similar documents.</div>'
    html = (_PAGE.replace("{threshold}", str(threshold))
                 .replace("{ndocs}", str(len(eng.documents) if eng else 0))
                 .replace("{body}", body))
    return Response(html, mimetype="text/html")

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run Flask UI on top of Engine")
    ap.add_argument("--root", required=True)
    ap.add_argument("--corpus", default=CORPUS_PATH)
    ap.add_argument("-n", "--shingle-size", type=int, default=SHINGLE_SIZE)
    ap.add_argument("--max-postings", type=int, default=None)
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    global _engine
    _engine = Engine()
    _engine.build(
        args.root, corpus_path=args.corpus, n=args.shingle_size,
        max_postings=args.max_postings, verbose=args.verbose,
    )

    try:
        app.run(host=args.host, port=args.port, debug=args.verbose)
    finally:
        _engine.shutdown()
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
