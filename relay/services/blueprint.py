from pydantic import ValidationError
import structlog

from relay.api.schemas import BlueprintRequest, BlueprintResponse
from relay.core.config import Settings
from relay.core.logging import truncate_prompt
from relay.domain.exceptions import (
    ConfigurationException,
    EmptyBlueprintException,
    InvalidPromptException,
    PromptTooLongException,
)
from relay.infrastructure.llm.client import extract_blueprint
from relay.ports.text_generation import TextGenerationClient

logger = structlog.get_logger(__name__)


class BlueprintService:
    """Turns one inbound request body into a blueprint via the upstream model."""

    def __init__(self, client: TextGenerationClient, settings: Settings) -> None:
        self.client = client
        self.settings = settings

    def ensure_configured(self) -> None:
        if not self.settings.has_credential():
            logger.error("config.missing_credential", setting="GEMINI_KEY")
            raise ConfigurationException("GEMINI_KEY")

    def parse_request(self, body: bytes) -> BlueprintRequest:
        """Validate the raw body; anything unusable is a missing prompt."""
        try:
            return BlueprintRequest.model_validate_json(body)
        except ValidationError:
            raise InvalidPromptException()

    async def generate(self, body: bytes) -> BlueprintResponse:
        self.ensure_configured()

        request = self.parse_request(body)
        prompt = request.prompt
        logger.info("prompt.received", prompt=truncate_prompt(prompt))

        if len(prompt) > self.settings.max_prompt_chars:
            raise PromptTooLongException(self.settings.max_prompt_chars, len(prompt))

        result = await self.client.generate_content(prompt)
        blueprint = extract_blueprint(result)

        if not blueprint.strip():
            logger.warning("blueprint.empty")
            raise EmptyBlueprintException()

        logger.info("blueprint.generated", length=len(blueprint))
        return BlueprintResponse(blueprint=blueprint)
