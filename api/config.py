"""API server configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from fastapi import Request


@dataclass
class Settings:
    """Application settings, configurable via environment variables.

    Environment variables:
        SSML_HOST: Server bind address (default "0.0.0.0")
        SSML_PORT: Server port (default 8000)
        SSML_DEBUG: Enable debug mode ("1" or "true")
        SSML_CORS_ORIGINS: Comma-separated allowed origins (default: none, reject cross-origin)
        SSML_MAX_DOCUMENT_KB: Maximum request body size in kilobytes (default 512)
        SSML_EXPAND_SUB: Default for ``expand_sub`` when a request omits it ("1" or "true")
    """

    host: str = field(default_factory=lambda: os.getenv("SSML_HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("SSML_PORT", "8000")))
    debug: bool = field(default_factory=lambda: _parse_flag("SSML_DEBUG"))
    cors_origins: list[str] = field(default_factory=lambda: _parse_cors())
    max_document_kb: int = field(
        default_factory=lambda: int(os.getenv("SSML_MAX_DOCUMENT_KB", "512"))
    )
    expand_sub: bool = field(default_factory=lambda: _parse_flag("SSML_EXPAND_SUB"))

    @property
    def max_document_bytes(self) -> int:
        return self.max_document_kb * 1024


def _parse_flag(name: str) -> bool:
    return os.getenv(name, "").lower() in ("1", "true")


def _parse_cors() -> list[str]:
    raw = os.getenv("SSML_CORS_ORIGINS", "")
    if not raw:
        return []
    return [o.strip() for o in raw.split(",") if o.strip()]


def get_settings(request: Request) -> Settings:
    """Dependency returning the settings the app was started with."""
    return request.app.state.settings
