from __future__ import annotations

__all__ = [
    "DEFAULT_CONTENT_TYPE",
    "CONTENT_TYPES",
    "content_type_for",
]

DEFAULT_CONTENT_TYPE = "text/plain"

# Checked in order, first match wins. Matching is case-sensitive.
CONTENT_TYPES: tuple[tuple[str, str], ...] = (
    (".html", "text/html"),
    (".js", "application/javascript"),
    (".css", "text/css"),
    (".png", "image/png"),
    (".jpg", "image/jpeg"),
    (".jpeg", "image/jpeg"),
    (".wav", "audio/wav"),
)


def content_type_for(path: str) -> str:
    """Return the MIME type for `path` based on its suffix."""
    for suffix, content_type in CONTENT_TYPES:
        if path.endswith(suffix):
            return content_type
    return DEFAULT_CONTENT_TYPE
