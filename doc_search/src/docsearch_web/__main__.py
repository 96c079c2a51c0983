from __future__ import annotations
import argparse, sys, json
from docsearch import Engine
from docsearch.config import TOP_K, DEFAULT_INDEX_PATH, DEFAULT_HOST, DEFAULT_PORT
from docsearch.errors import SearchError

def _parse_address(address: str) -> tuple[str, int]:
    host, _, port = address.rpartition(":")
    if not host or not port.isdigit():
        raise argparse.ArgumentTypeError(f"invalid address {address!r}, expected HOST:PORT")
    return host, int(port)

def _load(eng: Engine, args) -> int:
    if args.db and not args.index_file:
        return eng.load(db_dsn=args.db, verbose=args.verbose)
    return eng.load(index=args.index_file or DEFAULT_INDEX_PATH, db_dsn=args.db, verbose=args.verbose)

def _cmd_index(eng: Engine, args) -> int:
    n = eng.build(roots=args.folders, db_dsn=args.db, verbose=args.verbose)
    # only a sqlite:/// store outlives the process; everything else goes to a snapshot
    if args.index_file or not (args.db or "").startswith("sqlite:///"):
        eng.save(args.index_file or DEFAULT_INDEX_PATH)
    print(f"Indexed {n} documents")
    return 0

def _cmd_search(eng: Engine, args) -> int:
    n = _load(eng, args)
    print(f"{args.index_file or args.db} contains {n} files")
    return 0

def _cmd_query(eng: Engine, args) -> int:
    _load(eng, args)

    def run_query(q: str):
        rows = eng.search(q, top_k=args.k)
        if args.json:
            print(json.dumps([[r.path, r.score] for r in rows], ensure_ascii=False, indent=2))
        else:
            if not rows:
                print("(no matches)"); return
            print("#   Score      Path")
            for i, r in enumerate(rows, 1):
                print(f"{i:<3} {r.score:<10.6f} {r.path}")

    if args.q:
        run_query(args.q)

    if args.repl or not args.q:
        print("Type a query (empty line to exit).")
        while True:
            try:
                q = input("> ").strip()
            except (EOFError, KeyboardInterrupt):
                break
            if not q:
                break
            run_query(q)
    return 0

def _cmd_serve(eng: Engine, args) -> int:
    from docsearch_web.web import serve
    _load(eng, args)
    host, port = args.address
    serve(eng, host=host, port=port, debug=args.verbose)
    return 0

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="docsearch", description="TF-IDF document search (Engine-backed)")
    p.add_argument("--verbose", action="store_true")
    p.add_argument("--db", default=None, help='Storage DSN: "memory://" (default) or "sqlite:///path"')
    sub = p.add_subparsers(dest="command", required=True)

    s = sub.add_parser("index", help="index folders and save the index to a JSON file")
    s.add_argument("folders", nargs="+", help="folders (or files) to index")
    s.add_argument("--index-file", default=None, help=f"snapshot path (default: {DEFAULT_INDEX_PATH})")
    s.set_defaults(func=_cmd_index)

    s = sub.add_parser("search", help="check how many documents are indexed in the file")
    s.add_argument("index_file", nargs="?", default=None)
    s.set_defaults(func=_cmd_search)

    s = sub.add_parser("query", help="run queries against an index")
    s.add_argument("index_file", nargs="?", default=None)
    s.add_argument("--q", default=None, help="Single query to run once")
    s.add_argument("-k", type=int, default=TOP_K, help="Top-K results")
    s.add_argument("--repl", action="store_true", help="Interactive loop after the single query")
    s.add_argument("--json", action="store_true", help="Emit JSON rows")
    s.set_defaults(func=_cmd_query)

    s = sub.add_parser("serve", help="start local HTTP server with Web Interface")
    s.add_argument("index_file", nargs="?", default=None)
    s.add_argument("address", nargs="?", type=_parse_address,
                   default=(DEFAULT_HOST, DEFAULT_PORT), help="HOST:PORT")
    s.set_defaults(func=_cmd_serve)
    return p

def main(argv: list[str] | None = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)

    eng = Engine()
    try:
        return args.func(eng, args)
    except SearchError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    finally:
        eng.shutdown()

if __name__ == "__main__":
    raise SystemExit(main())
