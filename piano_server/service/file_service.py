from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from ..domain.content_types import content_type_for
from ..domain.paths import is_within_root, resolve_request_path
from ..domain.status import FileStatus, not_found_message, read_error_message
from ..logging_conf import get_logger

__all__ = ["ServedFile", "serve_file"]

logger = get_logger("service.files")


class ServedFile(BaseModel):
    """Outcome of handling one request: what was asked for and what to send."""

    request_path: str
    resolved_path: str
    status: FileStatus
    content_type: Optional[str] = None
    body: bytes = b""


def _not_found(request_path: str, resolved: str, reason: str) -> ServedFile:
    logger.info(
        "file.not_found",
        extra={"event": "file_not_found", "path": resolved, "reason": reason},
    )
    return ServedFile(
        request_path=request_path,
        resolved_path=resolved,
        status=FileStatus.not_found,
        body=not_found_message(resolved).encode("utf-8"),
    )


def serve_file(request_path: str, *, root: Path, allow_outside_root: bool = False) -> ServedFile:
    """Resolve `request_path` under `root` and load the file it names.

    - 200 with the full file bytes and a suffix-derived content type
    - 404 when the path is not a regular file, or escapes `root`
      (unless `allow_outside_root` is set)
    - 500 when the file exists but cannot be read
    """
    resolved = resolve_request_path(request_path)
    # An absolute `resolved` replaces `root` entirely; containment catches it.
    candidate = root / resolved

    # NUL bytes, symlink loops and overlong names fail here rather than on read.
    try:
        outside = not allow_outside_root and not is_within_root(root, candidate)
        is_file = not outside and candidate.is_file()
    except (OSError, ValueError, RuntimeError):
        return _not_found(request_path, resolved, "unresolvable")

    if outside:
        return _not_found(request_path, resolved, "outside_root")
    if not is_file:
        return _not_found(request_path, resolved, "missing")

    try:
        data = candidate.read_bytes()
    except OSError:
        logger.exception(
            "file.read_error",
            extra={"event": "file_read_error", "path": resolved},
        )
        return ServedFile(
            request_path=request_path,
            resolved_path=resolved,
            status=FileStatus.error,
            body=read_error_message(resolved).encode("utf-8"),
        )

    content_type = content_type_for(resolved)
    logger.info(
        "file.served",
        extra={
            "event": "file_served",
            "path": resolved,
            "content_type": content_type,
            "bytes": len(data),
        },
    )
    return ServedFile(
        request_path=request_path,
        resolved_path=resolved,
        status=FileStatus.ok,
        content_type=content_type,
        body=data,
    )
