from __future__ import annotations

import asyncio
import time
from collections.abc import Iterable

import httpx

from piano_server.logging_conf import get_logger
from runner.types import Fetched, FetchError, SmokeError

logger = get_logger("runner.client")


async def wait_for_health(base_url: str, timeout_s: float = 20.0) -> None:
    """Ping /health until it returns ok or raise after a timeout."""
    deadline = time.monotonic() + timeout_s
    async with httpx.AsyncClient(base_url=base_url, timeout=5.0) as client:
        while time.monotonic() < deadline:
            try:
                r = await client.get("/health")
                if r.status_code == 200 and r.json().get("ok") is True:
                    logger.info("health.ok", extra={"event": "health_ok"})
                    return
            except httpx.HTTPError:
                pass
            await asyncio.sleep(0.25)
    raise SmokeError("Health check did not pass within timeout")


async def fetch_one(client: httpx.AsyncClient, url_path: str, *, retries: int = 2) -> Fetched:
    """GET one path and capture status, bytes and content type, with retry.

    Any HTTP status counts as an answer; only transport errors are retried.
    """
    last_err: Exception | None = None
    for attempt in range(retries):
        start = time.perf_counter()
        try:
            r = await client.get(url_path)
        except httpx.TransportError as e:  # pragma: no cover - network flakiness
            last_err = e
            logger.warning(
                "fetch.retry",
                extra={
                    "event": "fetch_retry",
                    "path": url_path,
                    "attempt": attempt + 1,
                    "error": str(e),
                },
            )
            continue
        return Fetched(
            url_path=url_path,
            status=r.status_code,
            body=r.content,
            content_type=r.headers.get("content-type"),
            elapsed_ms=(time.perf_counter() - start) * 1000.0,
        )
    raise FetchError(f"fetch failed for {url_path}: {last_err}")


async def fetch_all(base_url: str, url_paths: Iterable[str]) -> list[Fetched]:
    """Fetch paths concurrently; paths that keep failing are dropped and logged."""
    paths = list(url_paths)
    async with httpx.AsyncClient(base_url=base_url, timeout=10.0) as client:
        results = await asyncio.gather(*(fetch_one(client, p) for p in paths), return_exceptions=True)
    fetched: list[Fetched] = []
    for res in results:
        if isinstance(res, FetchError):
            continue
        if isinstance(res, BaseException):
            raise res
        fetched.append(res)
    logger.info(
        "fetch.summary",
        extra={
            "event": "fetch_summary",
            "requested": len(paths),
            "succeeded": len(fetched),
            "failed": len(paths) - len(fetched),
        },
    )
    return fetched
