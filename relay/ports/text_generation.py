"""Outbound text-generation port."""

from abc import ABC, abstractmethod

from relay.infrastructure.llm.models import GenerateContentResponse


class TextGenerationClient(ABC):
    """Interface the blueprint service uses to reach the upstream model."""

    @abstractmethod
    async def generate_content(self, prompt: str) -> GenerateContentResponse:
        """Run one generation for the prompt."""
        pass
