"""Bearer token authentication middleware."""

from typing import Awaitable, Callable

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from starlette.types import ASGIApp

PUBLIC_PATHS = {"/docs", "/openapi.json", "/health", "/redoc"}


class AuthMiddleware(BaseHTTPMiddleware):
    """Middleware to check Bearer token authentication."""

    def __init__(self, app: ASGIApp, token: str) -> None:
        super().__init__(app)
        self.token = token

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        if request.url.path in PUBLIC_PATHS:
            return await call_next(request)

        auth_header = request.headers.get("Authorization", "")
        has_bearer_prefix = auth_header.lower().startswith("bearer ")
        provided_token = auth_header[7:] if has_bearer_prefix else ""

        if provided_token != self.token:
            return JSONResponse(
                status_code=401,
                content={"detail": "Permission denied: invalid or missing token"},
                headers={"WWW-Authenticate": "Bearer"},
            )

        return await call_next(request)
