from pathlib import Path
import pytest
from docsearch.engine import Engine
from docsearch_web.web import app as flask_app

def _seed(tmp: Path) -> str:
    root = tmp / "Archive"; root.mkdir()
    (root / "y.txt").write_text("health check line\n", encoding="utf-8")
    (root / "z.txt").write_text("another line\n", encoding="utf-8")
    return str(root)

@pytest.mark.e2e
def test_frontend_health(tmp_path: Path):
    roots = _seed(tmp_path)
    eng = Engine(); eng.build(roots=[roots], db_dsn="memory://")

    import docsearch_web.web as webmod
    webmod._engine = eng

    client = flask_app.test_client()
    r = client.get("/api/health")
    assert r.status_code == 200
    data = r.get_json()
    assert data == {"ok": True, "documents": 2}

    webmod._engine = None
    r = client.get("/api/health")
    assert r.get_json()["ok"] is False

    eng.shutdown()

@pytest.mark.e2e
def test_web_main_load_without_index_reports_error(capsys):
    from docsearch_web.web import main as web_main
    assert web_main(["--load"]) == 1
    assert "ERROR:" in capsys.readouterr().err
