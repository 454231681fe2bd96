from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Part(BaseModel):
    model_config = ConfigDict(extra="ignore")

    text: Optional[str] = None


class Content(BaseModel):
    model_config = ConfigDict(extra="ignore")

    role: Optional[str] = None
    parts: List[Part] = Field(default_factory=list)


class GenerationConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    temperature: float = Field(default=0.7)
    max_output_tokens: int = Field(default=2048, alias="maxOutputTokens")


class GenerateContentRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    contents: List[Content]
    generation_config: Optional[GenerationConfig] = Field(
        default=None, alias="generationConfig"
    )

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class Candidate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    content: Optional[Content] = None


class GenerateContentResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    candidates: List[Candidate] = Field(default_factory=list)

    def first_text(self) -> str:
        """Text of the first part of the first candidate, or an empty string."""
        if not self.candidates:
            return ""
        content = self.candidates[0].content
        if content is None or not content.parts:
            return ""
        return content.parts[0].text or ""
