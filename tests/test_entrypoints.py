"""Direct invocation and the development-mode process entrypoint."""

import pytest

from app import serve
from app.services.credit_reset import ResetSummary
from app.worker import reset_credits


def _patch_job(monkeypatch, error: Exception | None = None):
    async def fake_reset():
        if error:
            raise error
        return ResetSummary(date="2024-02-10")
    monkeypatch.setattr(reset_credits, "process_credit_reset", fake_reset)


def test_run_returns_zero_on_success(monkeypatch):
    _patch_job(monkeypatch)
    assert reset_credits.run() == 0


def test_run_returns_one_on_failure(monkeypatch):
    _patch_job(monkeypatch, ConnectionError("mongo unreachable"))
    assert reset_credits.run() == 1


def test_main_exits_with_run_code(monkeypatch):
    _patch_job(monkeypatch, RuntimeError("boom"))
    with pytest.raises(SystemExit) as exc:
        reset_credits.main()
    assert exc.value.code == 1


def test_serve_runs_job_directly_in_development(monkeypatch):
    monkeypatch.setenv("ENV", "development")
    _patch_job(monkeypatch)
    monkeypatch.setattr(serve.uvicorn, "run", lambda *a, **kw: pytest.fail("server started"))
    with pytest.raises(SystemExit) as exc:
        serve.main()
    assert exc.value.code == 0


def test_serve_starts_server_otherwise(monkeypatch):
    monkeypatch.setenv("ENV", "production")
    monkeypatch.setenv("PORT", "9001")
    started = {}
    monkeypatch.setattr(serve.uvicorn, "run", lambda target, **kw: started.update(target=target, **kw))
    serve.main()
    assert started == {"target": "app.main:app", "host": "0.0.0.0", "port": 9001}


def test_serve_accepts_node_env_development(monkeypatch):
    monkeypatch.delenv("ENV", raising=False)
    monkeypatch.setenv("NODE_ENV", "development")
    _patch_job(monkeypatch)
    monkeypatch.setattr(serve.uvicorn, "run", lambda *a, **kw: pytest.fail("server started"))
    with pytest.raises(SystemExit) as exc:
        serve.main()
    assert exc.value.code == 0
