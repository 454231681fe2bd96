import httpx
from fastapi import Depends, Request

from relay.core.config import Settings, settings
from relay.infrastructure.llm.client import GeminiClient
from relay.ports.text_generation import TextGenerationClient
from relay.services.blueprint import BlueprintService


def get_settings() -> Settings:
    """Get application settings."""
    return settings


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Shared outbound client owned by the lifespan.

    The lazy fallback only serves apps driven without their lifespan (test
    clients outside a `with` block); it is stored on app.state so one client
    is reused, and a later lifespan shutdown closes it.
    """
    client = getattr(request.app.state, "http_client", None)
    if client is None:
        client = httpx.AsyncClient()
        request.app.state.http_client = client
    return client


def get_generation_client(
    http_client: httpx.AsyncClient = Depends(get_http_client),
    app_settings: Settings = Depends(get_settings),
) -> TextGenerationClient:
    """Get the upstream text-generation client."""
    return GeminiClient(http_client, app_settings)


def get_blueprint_service(
    client: TextGenerationClient = Depends(get_generation_client),
    app_settings: Settings = Depends(get_settings),
) -> BlueprintService:
    """Get blueprint service."""
    return BlueprintService(client, app_settings)
