"""Middleware configuration."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware

from subtrans.core.config import Settings, get_settings
from subtrans.core.security import AuthenticationMiddleware


def setup_middleware(app: FastAPI, settings: Settings | None = None) -> None:
    """Configure API key authentication, compression, CORS and trusted hosts.

    Starlette runs the last added middleware first. Authentication is added
    first so CORS wraps it: preflight requests never need an API key and 401
    responses still carry CORS headers for browser clients.

    Args:
        app: FastAPI application instance
        settings: Settings instance (defaults to get_settings())
    """
    if settings is None:
        settings = get_settings()

    app.add_middleware(AuthenticationMiddleware)

    # Streamed NDJSON chunks are flushed one by one
    app.add_middleware(GZipMiddleware, minimum_size=settings.gzip_minimum_size)

    if settings.cors_enabled:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=settings.cors_allow_credentials,
            allow_methods=settings.cors_allow_methods,
            allow_headers=settings.cors_allow_headers,
            expose_headers=settings.cors_expose_headers,
        )

    if settings.environment == "production" and settings.allowed_hosts:
        app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.allowed_hosts)
