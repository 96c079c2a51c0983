from __future__ import annotations
import argparse
import sys
import logging
from flask import Flask, request, jsonify, Response
from docsearch.engine import Engine
from docsearch.config import TOP_K, DEFAULT_HOST, DEFAULT_PORT
from docsearch.errors import SearchError

log = logging.getLogger(__name__)

app = Flask(__name__)
_engine: Engine | None = None

# ---------- API ----------
@app.post("/api/search")
def api_search():
    # body is the raw query text (text/plain), as sent by the page below
    q = request.get_data(as_text=True) or ""
    k = request.args.get("k", TOP_K, type=int)
    if _engine is None or not _engine.ready:
        return jsonify({"error": "engine not initialized"}), 503
    if not q.strip():
        return jsonify([])
    rows = _engine.search(q, top_k=k)
    log.info("query %r -> %d results", q, len(rows))
    return jsonify([[r.path, r.score] for r in rows])

@app.get("/api/health")
def api_health():
    ready = _engine is not None and _engine.ready
    n = _engine.document_count() if ready else 0
    return jsonify({"ok": ready, "documents": n})

# ---------- UI ----------
@app.get("/")
def home():
    # A tiny page: CSS variables + minimal JS, no external deps.
    html = r"""
<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width,initial-scale=1" />
<title>Document Search</title>
<style>
:root{
  --bg:#0b0f14;
  --panel:#0f141b;
  --ink:#cfd8e3;
  --muted:#8a94a6;
  --accent:#6ee7ff;
  --border:#1c2530;
}
*{box-sizing:border-box}
body{
  margin:0; background:var(--bg); color:var(--ink);
  font:16px/1.45 system-ui,-apple-system,Segoe UI,Roboto,Ubuntu,"Helvetica Neue",Arial;
}
.container{ max-width:980px; margin:24px auto; padding:0 16px }
.card{
  background:var(--panel); border:1px solid var(--border);
  border-radius:16px; padding:18px;
}
h1{ font-size:20px; margin:0 0 8px 0 }
input{
  width:100%; padding:12px 14px; border-radius:12px; border:1px solid var(--border);
  background:#0b1117; color:var(--ink); outline:none; font-size:16px;
}
input:focus{ border-color:var(--accent) }
.meta{ color:var(--muted); font-size:13px; margin-top:6px }
.result-list{ list-style:none; padding:0; margin:16px 0 0 0 }
.result-list li{ padding:10px 4px; border-top:1px solid var(--border); word-break:break-all }
.rank{ color:var(--muted); font-family:ui-monospace,Menlo,Consolas,monospace; margin-left:8px }
</style>
</head>
<body>
  <div class="container">
    <div class="card">
      <h1>Document Search</h1>
      <input id="query" type="text" placeholder="Type a query and press Enter…" autocomplete="off" autofocus />
      <div id="stats" class="meta">Ready.</div>
      <div id="results"></div>
    </div>
  </div>
<script>
const query = document.getElementById("query");
const results = document.getElementById("results");
const stats = document.getElementById("stats");

async function search(prompt){
  results.innerHTML = "";
  const t0 = performance.now();
  const resp = await fetch("/api/search", {
    method: "POST",
    headers: {"Content-Type": "text/plain"},
    body: prompt,
  });
  if(!resp.ok){ stats.textContent = `Error: HTTP ${resp.status}`; return; }
  const data = await resp.json();
  stats.textContent = `Results: ${data.length} • ~${Math.max(1, Math.round(performance.now() - t0))} ms`;
  const list = document.createElement("ul");
  list.className = "result-list";
  for(const [path, rank] of data){
    const item = document.createElement("li");
    item.appendChild(document.createTextNode(path));
    const span = document.createElement("span");
    span.className = "rank";
    span.appendChild(document.createTextNode(rank.toFixed(6)));
    item.appendChild(span);
    list.appendChild(item);
  }
  results.appendChild(list);
}

query.addEventListener("keypress", (e)=>{
  if(e.key === "Enter"){ search(query.value); }
});
</script>
</body>
</html>
"""
    return Response(html, mimetype="text/html")

def serve(engine: Engine, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT, debug: bool = False) -> None:
    """Serve `engine` until interrupted; the engine is shut down afterwards."""
    global _engine
    _engine = engine
    log.info("Listening on http://%s:%d/", host, port)
    try:
        app.run(host=host, port=port, debug=debug)
    finally:
        engine.shutdown()
        _engine = None

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run Flask UI on top of Engine")
    mode = ap.add_mutually_exclusive_group(required=True)
    mode.add_argument("--build", action="store_true")
    mode.add_argument("--load", action="store_true")
    ap.add_argument("--roots", nargs="+", default=[])
    ap.add_argument("--index", default=None)      # JSON snapshot
    ap.add_argument("--db", dest="db", default=None)  # DSN: "sqlite:///path" or "memory://"
    ap.add_argument("--host", default=DEFAULT_HOST)
    ap.add_argument("--port", type=int, default=DEFAULT_PORT)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    engine = Engine()
    try:
        if args.build:
            if not args.roots:
                ap.error("--build requires --roots")
            engine.build(roots=args.roots, db_dsn=args.db, index_out=args.index, verbose=args.verbose)
        else:
            engine.load(index=args.index, db_dsn=args.db, verbose=args.verbose)
    except SearchError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        engine.shutdown()
        return 1

    serve(engine, host=args.host, port=args.port, debug=args.verbose)
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
