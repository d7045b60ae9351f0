"""FastAPI app factory, request logging middleware and the uvicorn entrypoint."""
from __future__ import annotations

import time
from collections.abc import Callable
from uuid import uuid4

import uvicorn
from fastapi import FastAPI, Request, Response

from piano_server.api import router as files_router
from piano_server.api.models import HealthResponse
from piano_server.config import Settings, get_settings
from piano_server.logging_conf import get_logger, setup_logging

logger = get_logger("app")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title="Piano Server",
        version=settings.app_version,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings

    @app.on_event("startup")
    async def _on_startup() -> None:
        logger.info(
            "startup",
            extra={
                "event": "startup",
                "port": settings.port,
                "serve_root": str(settings.serve_root),
            },
        )

    @app.on_event("shutdown")
    async def _on_shutdown() -> None:
        logger.info("shutdown", extra={"event": "shutdown"})

    @app.middleware("http")
    async def access_log(request: Request, call_next: Callable[[Request], Response]):
        """Log each request once it finishes and tag the response with X-Request-ID."""
        request_id = request.headers.get("X-Request-ID") or uuid4().hex
        request.state.request_id = request_id
        fields = {
            "method": request.method,
            "path": request.scope["path"],
            "request_id": request_id,
        }

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("request.error", extra={"event": "request_error", **fields})
            raise

        response.headers["X-Request-ID"] = request_id
        logger.info(
            "request.end",
            extra={
                "event": "request_end",
                "status_code": response.status_code,
                "elapsed_ms": round((time.perf_counter() - started) * 1000.0, 2),
                **fields,
            },
        )
        return response

    # Registered before the file routes so the catch-all does not shadow it.
    @app.get("/health", summary="Liveness/readiness check")
    async def health() -> HealthResponse:
        return HealthResponse(ok=True)

    app.include_router(files_router)

    return app


def run() -> None:
    """Console entrypoint: announce the URL and serve until interrupted."""
    settings = get_settings()
    app = create_app(settings)

    print(f"Piano server started on http://localhost:{settings.port}")
    print(f"Open your browser and navigate to http://localhost:{settings.port}")

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_config=None,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
