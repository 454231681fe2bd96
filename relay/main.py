from contextlib import asynccontextmanager
from typing import AsyncGenerator
import json

import httpx
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from relay.api.schemas import ErrorResponse
from relay.api.v1.relay import router as relay_router
from relay.core.config import settings
from relay.core.logging import setup_logging, get_logger
from relay.core.middleware import CORSRelayMiddleware
from relay.core.observability import setup_observability
from relay.domain.exceptions import RelayException

logger = get_logger(__name__)


class CustomJSONResponse(JSONResponse):
    def render(self, content) -> bytes:
        return json.dumps(
            content,
            ensure_ascii=False,
            allow_nan=False,
            indent=None,
            separators=(",", ":"),
            default=jsonable_encoder,
        ).encode("utf-8")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info("Starting up Blueprint Relay", version=settings.version)

    setup_observability()
    if getattr(app.state, "http_client", None) is None:
        app.state.http_client = httpx.AsyncClient()

    if not settings.has_credential():
        logger.warning("GEMINI_KEY not configured; POST requests will fail")

    try:
        yield
    finally:
        logger.info("Shutting down Blueprint Relay")
        await app.state.http_client.aclose()
        app.state.http_client = None


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    # Setup logging first
    setup_logging()

    app = FastAPI(
        title=settings.app_name,
        version=settings.version,
        description="Relays project-structure prompts to a generative-text API",
        # The relay route owns every path, so no docs endpoints
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
        default_response_class=CustomJSONResponse,
    )

    # CORS middleware
    app.add_middleware(CORSRelayMiddleware, allow_origin=settings.cors_allow_origin)

    # Include routers
    app.include_router(relay_router)

    @app.exception_handler(RelayException)
    async def relay_exception_handler(request: Request, exc: RelayException):
        return CustomJSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(**exc.to_payload()).model_dump(exclude_none=True),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return CustomJSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(error=str(exc.detail)).model_dump(exclude_none=True),
            headers=getattr(exc, "headers", None),
        )

    return app


# Create the application instance
app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run(
        "relay.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development(),
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
