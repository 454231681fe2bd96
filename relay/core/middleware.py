"""
CORS and request context middleware.
"""

from __future__ import annotations

from typing import Callable, Dict
from uuid import uuid4

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from relay.core.logging import bind_context, clear_context, get_logger


def cors_headers(allow_origin: str = "*") -> Dict[str, str]:
    return {
        "Access-Control-Allow-Origin": allow_origin,
        "Access-Control-Allow-Methods": "POST, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type",
    }


class CORSRelayMiddleware(BaseHTTPMiddleware):
    """Answers preflight probes and stamps CORS headers on every response.

    OPTIONS on any path gets an empty 204 before routing, so it never depends
    on configuration. Also binds a request_id into the structlog context and
    propagates the X-Request-ID header.
    """

    def __init__(self, app: ASGIApp, allow_origin: str = "*") -> None:
        super().__init__(app)
        self.headers = cors_headers(allow_origin)

    async def dispatch(self, request: Request, call_next: Callable[[Request], Response]) -> Response:  # type: ignore[override]
        request_id = request.headers.get("x-request-id") or str(uuid4())
        bind_context(request_id=request_id, path=str(request.url.path), method=request.method)
        logger = get_logger("http")

        try:
            if request.method == "OPTIONS":
                response = Response(status_code=204, headers=self.headers)
            else:
                response = await call_next(request)
                response.headers.update(self.headers)
            response.headers["X-Request-ID"] = request_id
            logger.info("request.end", status_code=response.status_code)
            return response
        finally:
            clear_context()
