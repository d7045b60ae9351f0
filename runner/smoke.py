#!/usr/bin/env python3
"""End-to-end smoke check against a running piano server.

Steps:
- wait for server health
- derive the expected response for every file in the site directory
- fetch all of them concurrently, plus "/" and a missing path
- emit a compact summary and exit code
"""
from __future__ import annotations

import asyncio
import sys
from pathlib import Path

from piano_server.logging_conf import get_logger, setup_logging
from runner.cli import parse_args
from runner.client import fetch_all, wait_for_health
from runner.utils import collect_expectations, summarize

setup_logging()
logger = get_logger("runner")


async def run_smoke(*, base_url: str, site_dir: Path, timeout_s: float = 20.0) -> int:
    await wait_for_health(base_url, timeout_s)
    expected = collect_expectations(site_dir)
    fetched = await fetch_all(base_url, [e.url_path for e in expected])
    summary, exit_code = summarize(expected, fetched)
    logger.info("runner.summary", extra=summary)
    return exit_code


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    code = asyncio.run(
        run_smoke(base_url=args.base_url, site_dir=Path(args.site), timeout_s=args.timeout)
    )
    raise SystemExit(code)


if __name__ == "__main__":
    main()
