import time

import httpx
import structlog

from relay.core.config import Settings
from relay.core.observability import metrics, trace_async_operation
from relay.domain.exceptions import UpstreamServiceException
from relay.infrastructure.llm.models import (
    Content,
    GenerateContentRequest,
    GenerateContentResponse,
    GenerationConfig,
    Part,
)
from relay.infrastructure.llm.prompts import SYSTEM_INSTRUCTION
from relay.ports.text_generation import TextGenerationClient

logger = structlog.get_logger(__name__)


def build_request(prompt: str, settings: Settings) -> GenerateContentRequest:
    """Two-turn envelope: the steering instruction, then the caller's prompt."""
    return GenerateContentRequest(
        contents=[
            Content(role="user", parts=[Part(text=SYSTEM_INSTRUCTION)]),
            Content(role="user", parts=[Part(text=prompt)]),
        ],
        generation_config=GenerationConfig(
            temperature=settings.gemini_temperature,
            max_output_tokens=settings.gemini_max_output_tokens,
        ),
    )


def extract_blueprint(response: GenerateContentResponse) -> str:
    return response.first_text()


class GeminiClient(TextGenerationClient):
    """Thin async wrapper around the Gemini generateContent endpoint."""

    def __init__(self, http_client: httpx.AsyncClient, settings: Settings) -> None:
        self.http_client = http_client
        self.settings = settings

    async def generate_content(self, prompt: str) -> GenerateContentResponse:
        """Send one non-streaming generation request.

        Raises UpstreamServiceException when the upstream answers with a
        non-success status. Transport and decoding errors propagate unchanged.
        """
        payload = build_request(prompt, self.settings).to_wire()
        start_time = time.time()

        async with trace_async_operation(
            "gemini.generate_content", model=self.settings.gemini_model
        ):
            resp = await self.http_client.post(
                self.settings.get_generate_url(),
                params={"key": self.settings.gemini_key},
                json=payload,
                timeout=self.settings.upstream_timeout,
            )

        duration = time.time() - start_time
        metrics.record_upstream_call(
            self.settings.gemini_model, resp.status_code, duration
        )
        logger.info(
            "upstream.response",
            status_code=resp.status_code,
            duration=f"{duration:.2f}s",
        )

        if not resp.is_success:
            logger.error(
                "upstream.error", status_code=resp.status_code, body=resp.text
            )
            raise UpstreamServiceException(resp.status_code, resp.text)

        return GenerateContentResponse.model_validate(resp.json())
