"""FastAPI application for the SSML Parser REST API.

Endpoints:
  POST /v1/parse
  POST /v1/validate
  POST /v1/rewrite
  GET  /v1/health
"""

from __future__ import annotations

import logging
import re

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from ssml_parser import __version__
from ssml_parser.exceptions import SSMLError, SSMLParseError

from .config import Settings
from .routes import parse, rewrite, validate

logger = logging.getLogger(__name__)

settings = Settings()

app = FastAPI(
    title="SSML Parser API",
    description="REST API for parsing, validating and rewriting SSML 1.1 documents.",
    version=__version__,
    debug=settings.debug,
)
app.state.settings = settings


# ---------------------------------------------------------------------------
# Middleware
# ---------------------------------------------------------------------------


class DocumentSizeLimitMiddleware(BaseHTTPMiddleware):
    """Reject requests whose Content-Length exceeds the configured maximum."""

    def __init__(self, app: ASGIApp, max_bytes: int) -> None:
        super().__init__(app)
        self.max_bytes = max_bytes

    async def dispatch(self, request: Request, call_next):  # type: ignore[override]
        content_length = request.headers.get("content-length")
        if content_length and int(content_length) > self.max_bytes:
            logger.info("Rejected %s: body of %s bytes", request.url.path, content_length)
            return JSONResponse(
                status_code=413,
                content={
                    "error": "payload_too_large",
                    "detail": (
                        f"Request body ({int(content_length)} bytes) exceeds "
                        f"maximum allowed size ({self.max_bytes} bytes)."
                    ),
                },
            )
        return await call_next(request)


app.add_middleware(DocumentSizeLimitMiddleware, max_bytes=settings.max_document_bytes)

# CORS: only allow configured origins. Empty list → no cross-origin access.
if settings.cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

app.include_router(parse.router, prefix="/v1", tags=["parse"])
app.include_router(validate.router, prefix="/v1", tags=["validate"])
app.include_router(rewrite.router, prefix="/v1", tags=["rewrite"])


# ---------------------------------------------------------------------------
# Error handling
# ---------------------------------------------------------------------------


def _error_kind(exc: Exception) -> str:
    """``NestedSpeakError`` -> ``"nested_speak"``."""
    name = type(exc).__name__.removesuffix("Error")
    return re.sub(r"(?<!^)(?=[A-Z][a-z])", "_", name).lower()


@app.exception_handler(SSMLParseError)
async def ssml_parse_error_handler(request: Request, exc: SSMLParseError) -> JSONResponse:
    logger.info("Rejected %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=400,
        content={"error": _error_kind(exc), "detail": str(exc)},
    )


@app.exception_handler(SSMLError)
async def ssml_error_handler(request: Request, exc: SSMLError) -> JSONResponse:
    logger.info("Rejected %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=400,
        content={"error": "ssml_error", "detail": str(exc)},
    )


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------


@app.get("/v1/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": __version__}
