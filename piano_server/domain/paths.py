from __future__ import annotations

from pathlib import Path

__all__ = [
    "DEFAULT_DOCUMENT",
    "resolve_request_path",
    "is_within_root",
]

DEFAULT_DOCUMENT = "index.html"


def resolve_request_path(path: str) -> str:
    """Map a raw request path to a candidate path relative to the serving root.

    Rules:
    - "/" becomes the default document ("index.html").
    - Exactly one leading "/" is stripped.
    - Nothing else is touched: no normalization, no ".." handling.

    Never raises; the result is only a candidate and may not exist.
    """
    if path == "/":
        path = "/" + DEFAULT_DOCUMENT
    if path.startswith("/"):
        path = path[1:]
    return path


def is_within_root(root: Path, candidate: Path) -> bool:
    """Return True if `candidate` resolves to a location inside `root`.

    Symlinks are followed on both sides, so a link pointing out of the root
    counts as outside.
    """
    root_resolved = root.resolve()
    target = candidate.resolve()
    return target == root_resolved or root_resolved in target.parents
