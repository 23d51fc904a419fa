"""Pydantic models for the extraction layer."""

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict


Role = Literal["system", "user", "assistant"]
ImageMimeType = Literal["image/png", "image/jpeg", "image/webp"]


class Message(BaseModel):
    """A single chat message. Content is plain text or a list of content parts."""
    role: Role
    content: Any


class ExtractionConfig(BaseModel):
    """Configuration for screenshot extraction."""
    model_config = ConfigDict(extra='allow')

    model: str = "gpt-4o"
    temperature: float = 0.0
    max_tokens: Optional[int] = 4096
    query: Optional[str] = None
    # Additional kwargs are allowed and passed to LiteLLM

    @property
    def additional_params(self) -> Dict[str, Any]:
        return dict(self.__pydantic_extra__ or {})


class ExtractionError(Exception):
    """Raised when a screenshot cannot be turned into model text."""

    def __init__(self, code: str, message: str, details: Any = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details
