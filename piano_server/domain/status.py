from __future__ import annotations

from enum import IntEnum

__all__ = [
    "FileStatus",
    "NOT_FOUND_PREFIX",
    "READ_ERROR_PREFIX",
    "not_found_message",
    "read_error_message",
]

NOT_FOUND_PREFIX = "404 - File not found: "
READ_ERROR_PREFIX = "500 - Error reading file: "


class FileStatus(IntEnum):
    ok = 200
    not_found = 404
    error = 500


def not_found_message(resolved_path: str) -> str:
    """Body text for a path that does not name a regular file."""
    return NOT_FOUND_PREFIX + resolved_path


def read_error_message(resolved_path: str) -> str:
    return READ_ERROR_PREFIX + resolved_path
