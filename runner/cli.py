from __future__ import annotations

import argparse
import os
from pathlib import Path


def parse_args(argv: list[str]) -> argparse.Namespace:
    """Parse CLI arguments for the smoke runner."""
    parser = argparse.ArgumentParser(description="Piano server smoke runner")
    parser.add_argument("--base-url", default=os.getenv("BASE_URL", "http://127.0.0.1:8080"))
    parser.add_argument(
        "--site",
        default=str(Path(__file__).resolve().parents[1] / "site"),
        help="Directory the server is serving from",
    )
    parser.add_argument("--timeout", type=float, default=20.0)
    return parser.parse_args(argv)
