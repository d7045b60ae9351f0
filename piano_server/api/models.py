from __future__ import annotations

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Liveness/readiness payload."""
    ok: bool = True
