from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from piano_server.config import Settings
from piano_server.main import create_app


@pytest.fixture
def site(tmp_path: Path) -> Path:
    root = tmp_path / "site"
    root.mkdir()
    (root / "index.html").write_bytes(b"<h1>Hi</h1>")
    (root / "piano.js").write_bytes(b"console.log('piano');\n")
    (root / "style.css").write_bytes(b"body { margin: 0; }\n")
    (root / "img").mkdir()
    (root / "img" / "key.png").write_bytes(b"\x89PNG\r\n\x1a\n\x00\x01")
    (root / "FILE.HTML").write_bytes(b"<p>upper</p>")
    (root / "README").write_bytes(b"no suffix\n")
    # Sits next to the serving root; reachable only through "..".
    (tmp_path / "secret.txt").write_bytes(b"top secret\n")
    return root


@pytest.fixture
def settings(site: Path) -> Settings:
    return Settings(serve_root=site)


@pytest.fixture
def client(settings: Settings) -> TestClient:
    return TestClient(create_app(settings))
