from __future__ import annotations

import asyncio
from functools import partial
from pathlib import Path

import httpx
import pytest

from piano_server.config import Settings
from piano_server.main import create_app
from runner.cli import parse_args
from runner.client import fetch_all, wait_for_health
from runner.smoke import main, run_smoke
from runner.types import SmokeError
from tools.fixtures import write_site

BASE_URL = "http://piano.test"


def _route_clients_to(monkeypatch: pytest.MonkeyPatch, root: Path) -> None:
    """Send every httpx.AsyncClient the runner opens to an in-process app."""
    transport = httpx.ASGITransport(app=create_app(Settings(serve_root=root)))
    monkeypatch.setattr(httpx, "AsyncClient", partial(httpx.AsyncClient, transport=transport))


@pytest.fixture
def demo_site(tmp_path: Path) -> Path:
    site = tmp_path / "site"
    write_site(site)
    (site / "with space.txt").write_bytes(b"spaced\n")
    return site


def test_parse_args_reads_base_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BASE_URL", "http://example.test:9000")
    args = parse_args([])
    assert args.base_url == "http://example.test:9000"
    assert args.timeout == 20.0


def test_parse_args_flags_win() -> None:
    args = parse_args(["--base-url", "http://x", "--site", "/srv/site", "--timeout", "3"])
    assert (args.base_url, args.site, args.timeout) == ("http://x", "/srv/site", 3.0)


def test_wait_for_health(monkeypatch: pytest.MonkeyPatch, demo_site: Path) -> None:
    _route_clients_to(monkeypatch, demo_site)
    asyncio.run(wait_for_health(BASE_URL, timeout_s=2.0))


def test_wait_for_health_times_out(monkeypatch: pytest.MonkeyPatch) -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    transport = httpx.MockTransport(refuse)
    monkeypatch.setattr(httpx, "AsyncClient", partial(httpx.AsyncClient, transport=transport))
    with pytest.raises(SmokeError):
        asyncio.run(wait_for_health(BASE_URL, timeout_s=0.3))


def test_fetch_all(monkeypatch: pytest.MonkeyPatch, demo_site: Path) -> None:
    _route_clients_to(monkeypatch, demo_site)
    fetched = asyncio.run(fetch_all(BASE_URL, ["/", "/piano.js", "/nope"]))
    by_path = {f.url_path: f for f in fetched}
    assert by_path["/"].status == 200
    assert by_path["/piano.js"].content_type == "application/javascript"
    assert by_path["/nope"].status == 404


def test_run_smoke_passes_against_matching_server(monkeypatch: pytest.MonkeyPatch, demo_site: Path) -> None:
    _route_clients_to(monkeypatch, demo_site)
    code = asyncio.run(run_smoke(base_url=BASE_URL, site_dir=demo_site, timeout_s=2.0))
    assert code == 0


def test_run_smoke_fails_when_server_lacks_files(
    monkeypatch: pytest.MonkeyPatch, demo_site: Path, tmp_path: Path
) -> None:
    served = tmp_path / "served"
    served.mkdir()
    (served / "index.html").write_bytes(b"something else")
    _route_clients_to(monkeypatch, served)
    code = asyncio.run(run_smoke(base_url=BASE_URL, site_dir=demo_site, timeout_s=2.0))
    assert code == 1


def test_main_exit_code(monkeypatch: pytest.MonkeyPatch, demo_site: Path) -> None:
    _route_clients_to(monkeypatch, demo_site)
    with pytest.raises(SystemExit) as exc:
        main(["--base-url", BASE_URL, "--site", str(demo_site), "--timeout", "2"])
    assert exc.value.code == 0
