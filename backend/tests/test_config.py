import pytest
from student_records.config import Settings


def test_defaults(monkeypatch):
    for name in ("ENV", "CORS_ORIGINS", "LOG_LEVEL", "SQL_ECHO", "HOST", "PORT"):
        monkeypatch.delenv(name, raising=False)
    s = Settings()
    assert s.ENV == "dev"
    assert s.CORS_ORIGINS == ["http://localhost:5173"]
    assert s.LOG_LEVEL == "INFO"
    assert s.SQL_ECHO is False
    assert s.PORT == 8080


def test_origins_are_split_and_trimmed(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test ,")
    assert Settings().CORS_ORIGINS == ["http://a.test", "http://b.test"]


def test_wildcard_origin_rejected_outside_dev(monkeypatch):
    monkeypatch.setenv("ENV", "prod")
    monkeypatch.setenv("CORS_ORIGINS", "*")
    with pytest.raises(RuntimeError):
        Settings()


def test_server_address(monkeypatch):
    monkeypatch.delenv("HOST", raising=False)
    monkeypatch.setenv("PORT", "9001")
    s = Settings()
    assert s.HOST == "127.0.0.1"
    assert s.PORT == 9001


def test_main_serves_app_with_uvicorn(monkeypatch):
    from student_records import __main__ as entry
    calls = []
    monkeypatch.setattr(entry.uvicorn, "run", lambda app, **kw: calls.append((app, kw)))
    entry.main()
    assert calls[0][0] == "student_records.main:app"
    assert set(calls[0][1]) == {"host", "port", "log_level"}
