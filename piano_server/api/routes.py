from __future__ import annotations

from fastapi import APIRouter, Request, Response

from ..config import Settings
from ..logging_conf import get_logger
from ..service.file_service import ServedFile, serve_file

router = APIRouter()
logger = get_logger("api")

_METHODS = ["GET", "HEAD"]


def _to_response(served: ServedFile) -> Response:
    # Content-Type is set as a raw header so Starlette does not append a charset.
    headers = {"Content-Type": served.content_type} if served.content_type else None
    return Response(content=served.body, status_code=int(served.status), headers=headers)


def _serve(request: Request) -> Response:
    settings: Settings = request.app.state.settings
    # scope["path"] is already percent-decoded; request.url.path would cut at a decoded "?" or "#".
    served = serve_file(
        request.scope["path"],
        root=settings.serve_root,
        allow_outside_root=settings.allow_outside_root,
    )
    return _to_response(served)


# Handlers are sync on purpose: FastAPI runs them on its threadpool,
# so a slow disk read does not block the event loop.
@router.api_route("/", methods=_METHODS, summary="Serve the index document", include_in_schema=False)
def serve_index(request: Request) -> Response:
    return _serve(request)


@router.api_route("/piano.js", methods=_METHODS, summary="Serve the piano script", include_in_schema=False)
def serve_piano_script(request: Request) -> Response:
    return _serve(request)


@router.api_route(
    "/{file_path:path}",
    methods=_METHODS,
    summary="Serve a file from the serving root",
    include_in_schema=False,
)
def serve_any(file_path: str, request: Request) -> Response:
    """Serve any other path; `file_path` is only used for routing."""
    return _serve(request)
