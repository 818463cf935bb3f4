import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient


TEST_PASSWORD = "test-media-password"


def _write_min_frontend(frontend_dir: Path) -> None:
    frontend_dir.mkdir(parents=True, exist_ok=True)
    (frontend_dir / "index.html").write_text(
        "<html>library {{ video_extensions | tojson }}</html>", encoding="utf-8"
    )


@pytest.fixture()
def app_ctx(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> dict:
    media_root = tmp_path / "lib"
    media_root.mkdir(parents=True, exist_ok=True)
    frontend_dir = tmp_path / "frontend"
    _write_min_frontend(frontend_dir)

    monkeypatch.setenv("MEDIA_PASSWORD", TEST_PASSWORD)
    monkeypatch.setenv("MEDIA_ROOT", str(media_root))
    monkeypatch.setenv("DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("FRONTEND_DIR", str(frontend_dir))
    monkeypatch.setenv("STREAM_CHUNK_BYTES", "4096")

    for name in list(sys.modules.keys()):
        if name == "medialib" or name.startswith("medialib."):
            del sys.modules[name]

    import importlib

    main = importlib.import_module("medialib.main")
    return {"app": main.app, "media_root": media_root.resolve(), "password": TEST_PASSWORD}


@pytest.fixture()
def client(app_ctx: dict):
    with TestClient(app_ctx["app"]) as c:
        yield c


@pytest.fixture()
def media_root(app_ctx: dict) -> Path:
    return app_ctx["media_root"]


@pytest.fixture()
def session_token(client, app_ctx: dict) -> str:
    r = client.post("/api/login", json={"password": app_ctx["password"]})
    assert r.status_code == 200
    return r.json()["sessionToken"]


@pytest.fixture()
def auth(session_token: str) -> dict:
    return {"X-Session-Token": session_token}


@pytest.fixture()
def sample_tree(media_root: Path) -> Path:
    """movies/a.mp4 (500000 bytes), movies/poster.png, .hidden/b.mp4, notes.txt"""
    (media_root / "movies").mkdir()
    (media_root / "movies" / "a.mp4").write_bytes(bytes(i % 251 for i in range(500_000)))
    (media_root / "movies" / "poster.png").write_bytes(b"\x89PNG\r\n\x1a\n" + b"\x00" * 32)
    (media_root / ".hidden").mkdir()
    (media_root / ".hidden" / "b.mp4").write_bytes(b"\x00" * 10)
    (media_root / "notes.txt").write_text("hello", encoding="utf-8")
    return media_root
