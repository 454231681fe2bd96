from typing import Optional

from pydantic import BaseModel, Field, StrictStr


# API Request/Response Schemas
class BlueprintRequest(BaseModel):
    prompt: StrictStr = Field(..., min_length=1)


class BlueprintResponse(BaseModel):
    blueprint: str


class ErrorResponse(BaseModel):
    error: str
    status: Optional[int] = None
    message: Optional[str] = None
