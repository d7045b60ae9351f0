from __future__ import annotations

from pathlib import Path
from urllib.parse import quote

from piano_server.domain.content_types import content_type_for
from piano_server.domain.paths import DEFAULT_DOCUMENT
from piano_server.domain.status import not_found_message
from runner.types import Expected, Fetched, SiteError

MISSING_PATH = "/__smoke_missing__.png"


def percentile(values: list[float], p: float) -> float:
    """Compute the p-th percentile using linear interpolation."""
    if not values:
        return 0.0
    s = sorted(values)
    k = (len(s) - 1) * p
    f = int(k)
    c = min(f + 1, len(s) - 1)
    if f == c:
        return s[f]
    d0 = s[f] * (c - k)
    d1 = s[c] * (k - f)
    return d0 + d1


def collect_expectations(site_dir: Path) -> list[Expected]:
    """Build the expected response for every file under `site_dir`.

    Adds "/" (same as the index document, when present) and a path that
    must come back as 404.
    """
    if not site_dir.is_dir():
        raise SiteError(f"site directory not found: {site_dir}")
    files = sorted(p for p in site_dir.rglob("*") if p.is_file())
    if not files:
        raise SiteError(f"site directory is empty: {site_dir}")

    expected: list[Expected] = []
    for p in files:
        rel = p.relative_to(site_dir).as_posix()
        expected.append(
            Expected(url_path="/" + quote(rel), status=200, body=p.read_bytes(), content_type=content_type_for(rel))
        )

    index = site_dir / DEFAULT_DOCUMENT
    if index.is_file():
        expected.append(
            Expected(url_path="/", status=200, body=index.read_bytes(), content_type=content_type_for(DEFAULT_DOCUMENT))
        )
    else:
        expected.append(
            Expected(url_path="/", status=404, body=not_found_message(DEFAULT_DOCUMENT).encode("utf-8"))
        )

    missing = MISSING_PATH.lstrip("/")
    expected.append(Expected(url_path=MISSING_PATH, status=404, body=not_found_message(missing).encode("utf-8")))
    return expected


def _mismatches(exp: Expected, got: Fetched) -> list[str]:
    problems: list[str] = []
    if got.status != exp.status:
        problems.append(f"status {got.status} != {exp.status}")
    if got.body != exp.body:
        problems.append(f"body differs ({len(got.body)} bytes vs {len(exp.body)})")
    if exp.content_type is not None and got.content_type != exp.content_type:
        problems.append(f"content-type {got.content_type!r} != {exp.content_type!r}")
    return problems


def summarize(expected: list[Expected], fetched: list[Fetched]) -> tuple[dict, int]:
    """Compare fetched responses to expectations; return a summary and exit code."""
    by_path = {f.url_path: f for f in fetched}
    per_type: dict[str, dict[str, int]] = {}
    failures: list[dict] = []
    passed = 0

    for exp in expected:
        bucket = per_type.setdefault(exp.content_type or "none", {"ok": 0, "failed": 0})
        got = by_path.get(exp.url_path)
        if got is None:
            problems = ["no response"]
        else:
            problems = _mismatches(exp, got)
        if problems:
            bucket["failed"] += 1
            failures.append({"path": exp.url_path, "problems": problems})
        else:
            bucket["ok"] += 1
            passed += 1

    durations = [f.elapsed_ms for f in fetched]
    summary = {
        "component": "runner",
        "event": "summary",
        "checked": len(expected),
        "passed": passed,
        "failed": len(expected) - passed,
        "timings": {
            "avg_ms": round(sum(durations) / len(durations), 2) if durations else 0.0,
            "p95_ms": round(percentile(durations, 0.95), 2),
            "max_ms": round(max(durations), 2) if durations else 0.0,
        },
        "per_content_type": per_type,
        "failures": failures,
    }
    exit_code = 0 if passed == len(expected) else 1
    return summary, exit_code
