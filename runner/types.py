from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Expected:
    """What a request path should return, derived from the local site dir."""

    url_path: str
    status: int
    body: bytes
    content_type: str | None = None


@dataclass
class Fetched:
    """What the server actually returned for one request."""

    url_path: str
    status: int
    body: bytes
    content_type: str | None
    elapsed_ms: float


class SmokeError(RuntimeError):
    """Raised when the smoke flow cannot proceed (e.g., health never ready)."""


class SiteError(SmokeError):
    """Raised when the local site directory is missing or empty."""


class FetchError(SmokeError):
    """Raised when fetching a path fails after retries."""
