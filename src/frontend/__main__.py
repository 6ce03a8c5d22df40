from __future__ import annotations
import argparse, json
from neardup import Engine
from neardup.config import CORPUS_PATH, SHINGLE_SIZE, THRESHOLD
from neardup.ranking import format_similarity

def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Near-duplicate detector (shared word shingles)")
    p.add_argument("--root", required=True, help="Folder whose files are compared")
    p.add_argument("--corpus", default=CORPUS_PATH, help="Where to write the shingle corpus")
    p.add_argument("-n", "--shingle-size", type=int, default=SHINGLE_SIZE, help="Words per shingle")
    p.add_argument("--threshold", type=int, default=THRESHOLD, help="Minimum shared count to report")
    p.add_argument("--limit", type=int, default=None, help="Report at most this many pairs")
    p.add_argument("--max-postings", type=int, default=None,
                   help="Cap recorded occurrences per shingle (default: record all)")
    p.add_argument("--json", action="store_true", help="Emit JSON rows")
    p.add_argument("--verbose", action="store_true")

    args = p.parse_args(argv)
    if args.shingle_size < 1:
        p.error("--shingle-size must be >= 1")

    eng = Engine()
    try:
        eng.build(
            args.root,
            corpus_path=args.corpus,
            n=args.shingle_size,
            max_postings=args.max_postings,
            verbose=args.verbose,
        )
        rows = eng.report(args.threshold, limit=args.limit)
        if args.json:
            print(json.dumps([r.to_dict() for r in rows], ensure_ascii=False, indent=2))
        else:
            if not rows:
                print("(no similar documents)"); return 0
            print("Count   Documents")
            for r in rows:
                print(format_similarity(r))
        return 0
    finally:
        eng.shutdown()

if __name__ == "__main__":
    raise SystemExit(main())
