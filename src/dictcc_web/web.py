from __future__ import annotations
import argparse
from typing import Optional

from flask import Flask, Response, jsonify, request

from dictcc import config as CFG
from dictcc.engine import Engine
from dictcc.errors import DictError

app = Flask(__name__)
_engine: Engine | None = None


def _int_arg(name: str, default: Optional[int], lo: int, hi: Optional[int] = None) -> Optional[int]:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer") from None
    if value < lo or (hi is not None and value > hi):
        bound = f"{lo}..{hi}" if hi is not None else f">= {lo}"
        raise ValueError(f"{name} must be {bound}")
    return value


def _require_engine() -> Engine:
    if _engine is None or _engine.index is None:
        raise RuntimeError("Engine not initialized. Call main() or set web._engine first.")
    return _engine


# ---------- API ----------
@app.get("/api/health")
def api_health():
    eng = _engine
    ready = eng is not None and eng.index is not None
    body = {"ok": True, "ready": ready}
    if ready:
        body.update({"pair": eng.pair.code, "from": eng.source_language, "terms": len(eng.index)})
    return jsonify(body)


@app.get("/api/search")
def api_search():
    eng = _require_engine()
    q = request.args.get("q", "", type=str)
    try:
        d = _int_arg("d", CFG.DEFAULT_DISTANCE, 0)
        s = _int_arg("s", CFG.DEFAULT_MIN_SIMILARITY, 0, CFG.MAX_SIMILARITY)
        limit = _int_arg("limit", None, 1)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    if not q.strip():
        return jsonify([])
    side = eng.index.side
    rows = [
        {
            "source": h.entry.side(side).raw,
            "target": h.entry.other(side).raw,
            "word_classes": h.entry.word_classes,
            "subject_labels": h.entry.subject_labels,
            "distance": h.distance,
            "similarity": h.similarity,
        }
        for h in eng.rank(q, max_distance=d, min_similarity=s, limit=limit)
    ]
    return jsonify(rows)


@app.get("/api/complete")
def api_complete():
    eng = _require_engine()
    line = request.args.get("line", "", type=str)
    return jsonify(eng.completions(line))


# ---------- UI ----------
@app.get("/")
def home():
    # Minimal page: one input, fetches /api/search as you type.
    html = r"""
<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width,initial-scale=1" />
<title>dict.cc • offline lookup</title>
<style>
body{margin:0;background:#0b0f14;color:#cfd8e3;font:16px/1.45 system-ui,-apple-system,Segoe UI,Roboto,Arial}
.container{max-width:980px;margin:24px auto;padding:0 16px}
input{width:100%;padding:12px 14px;border-radius:12px;border:1px solid #1c2530;background:#0b1117;color:#cfd8e3;font-size:16px}
table{width:100%;border-collapse:collapse;margin-top:16px}
th,td{text-align:left;padding:8px 10px;border-top:1px solid #1c2530}
th{color:#8a94a6}
.small{color:#8a94a6;font-size:13px}
</style>
</head>
<body>
  <div class="container">
    <h1>dict.cc</h1>
    <input id="q" type="text" placeholder="Type to search…" autocomplete="off" autofocus />
    <div id="stats" class="small">Ready.</div>
    <table><thead><tr><th>Source</th><th>Target</th><th>Similarity</th></tr></thead><tbody id="out"></tbody></table>
  </div>
<script>
const q = document.querySelector("#q"), out = document.querySelector("#out"), stats = document.querySelector("#stats");
const esc = (s) => String(s).replace(/[&<>"]/g, (c) => ({"&":"&amp;","<":"&lt;",">":"&gt;",'"':"&quot;"}[c]));
let t;
async function search(){
  const query = q.value.trim();
  if(!query){ out.innerHTML = ""; stats.textContent = "Ready."; return; }
  const resp = await fetch(`/api/search?q=${encodeURIComponent(query)}&d=1&limit=50`);
  const data = await resp.json();
  stats.textContent = `Results: ${data.length}`;
  out.innerHTML = data.map(r => `<tr><td>${esc(r.source)}</td><td>${esc(r.target)}</td><td class="small">${r.similarity}</td></tr>`).join("");
}
q.addEventListener("input", () => { clearTimeout(t); t = setTimeout(search, 150); });
</script>
</body>
</html>
"""
    return Response(html, mimetype="text/html")


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run Flask UI on top of Engine")
    ap.add_argument("-l", "--language-pair", required=True)
    ap.add_argument("-f", "--from", dest="language_from", required=True)
    ap.add_argument("--db", dest="db", default=None)  # DSN: "sqlite:///dir" or "memory://"
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    global _engine
    _engine = Engine(args.db, verbose=args.verbose)
    try:
        _engine.load(args.language_pair, args.language_from)
    except DictError as e:
        _engine.shutdown()
        ap.exit(1, f"{e}\n")

    try:
        app.run(host=args.host, port=args.port, debug=args.verbose)
    finally:
        _engine.shutdown()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
