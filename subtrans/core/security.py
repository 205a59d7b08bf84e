"""Security and authentication middleware."""

import secrets

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from subtrans.core.config import settings

# Versioned API routes, health included, always require the key when one is set
PUBLIC_PATHS = frozenset({"/", "/health", "/docs", "/openapi.json", "/redoc"})


def _unauthorized(detail: str) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content={"detail": detail})


class AuthenticationMiddleware(BaseHTTPMiddleware):
    """Middleware to validate the X-API-Key header if a service key is configured."""

    async def dispatch(self, request: Request, call_next):
        if request.url.path in PUBLIC_PATHS or not settings.api_key:
            return await call_next(request)

        api_key = request.headers.get("X-API-Key")
        if not api_key:
            return _unauthorized(
                "Missing X-API-Key header. Please provide API key for authentication."
            )

        if not secrets.compare_digest(api_key.encode(), settings.api_key.encode()):
            return _unauthorized("Invalid API key. Please check your X-API-Key header.")

        return await call_next(request)
