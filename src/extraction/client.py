"""
Vision model client for board screenshots.

Sends one screenshot to a chat-completion model via LiteLLM and returns the
raw text the model produced. Parsing that text is the board_state package's job.
"""

import base64
import logging
from typing import Any, Dict, List, Optional, get_args

import litellm
from pydantic import BaseModel, ConfigDict

from .models import ExtractionConfig, ExtractionError, ImageMimeType, Message
from .prompts import build_extraction_query, get_system_prompt


logger = logging.getLogger(__name__)

MAX_IMAGE_SIZE_BYTES = 5 * 1024 * 1024
ALLOWED_IMAGE_MIME_TYPES = frozenset(get_args(ImageMimeType))


def _get(obj: Any, name: str) -> Any:
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def _non_empty(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value.strip() else None


def extract_model_text(response: Any) -> Optional[str]:
    """
    Pull the model's text out of a completion response.

    Handles LiteLLM/OpenAI responses (`choices[0].message.content`) as well as
    workflow-style envelopes (`answer`, `output_text`, `data.*`).

    Returns:
        The text, or None if the response carries none
    """
    if response is None:
        return None

    choices = _get(response, "choices")
    if isinstance(choices, (list, tuple)) and choices:
        content = _non_empty(_get(_get(choices[0], "message"), "content"))
        if content:
            return content

    if not isinstance(response, dict):
        return None

    for key in ("answer", "output_text"):
        if isinstance(response.get(key), str):
            return response[key]

    data = response.get("data")
    if not isinstance(data, dict):
        return None

    for key in ("answer", "text"):
        if isinstance(data.get(key), str):
            return data[key]

    outputs = data.get("outputs")
    if isinstance(outputs, dict):
        for key in ("text", "answer"):
            if isinstance(outputs.get(key), str):
                return outputs[key]
        for value in outputs.values():
            if _non_empty(value):
                return value

    return None


def build_image_part(image_bytes: bytes, mime_type: str) -> Dict[str, Any]:
    """Encode a screenshot as an OpenAI-style image content part."""
    if mime_type not in ALLOWED_IMAGE_MIME_TYPES:
        raise ExtractionError("INVALID_IMAGE", "Unsupported image type.", details=mime_type)
    if not image_bytes:
        raise ExtractionError("INVALID_IMAGE", "Missing image upload.")
    if len(image_bytes) > MAX_IMAGE_SIZE_BYTES:
        raise ExtractionError("INVALID_IMAGE", "File too large", details=len(image_bytes))

    encoded = base64.b64encode(image_bytes).decode("ascii")
    return {"type": "image_url", "image_url": {"url": f"data:{mime_type};base64,{encoded}"}}


class VisionClient(BaseModel):
    """
    Client for screenshot extraction via LiteLLM.

    Each call is independent: no conversation history is kept between screenshots.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    config: ExtractionConfig

    @classmethod
    def from_config(cls, config: ExtractionConfig) -> "VisionClient":
        return cls(config=config)

    def build_messages(
        self,
        image_bytes: bytes,
        mime_type: str,
        query: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """
        Build the chat messages for one screenshot.

        Args:
            image_bytes: Raw screenshot bytes
            mime_type: One of image/png, image/jpeg, image/webp
            query: Optional user query; falls back to the configured query

        Returns:
            Messages in OpenAI format
        """
        text = build_extraction_query(query if query is not None else self.config.query)
        messages = [
            Message(role="system", content=get_system_prompt()),
            Message(role="user", content=[
                {"type": "text", "text": text},
                build_image_part(image_bytes, mime_type),
            ]),
        ]
        return [message.model_dump() for message in messages]

    def extract(
        self,
        image_bytes: bytes,
        mime_type: str,
        query: Optional[str] = None,
        **kwargs: Any,
    ) -> str:
        """
        Send a screenshot to the model and return its raw text.

        Raises:
            ExtractionError: If the image is rejected, the call fails, or the
                response carries no text
        """
        messages = self.build_messages(image_bytes, mime_type, query)

        params = {
            "model": self.config.model,
            "messages": messages,
            "temperature": self.config.temperature,
            **self.config.additional_params,
            **kwargs,
        }
        if self.config.max_tokens is not None:
            params["max_tokens"] = self.config.max_tokens

        logger.info(
            "Extracting board state: model=%s mime=%s bytes=%d",
            self.config.model, mime_type, len(image_bytes),
        )
        try:
            response = litellm.completion(**params)
        except Exception as e:
            raise ExtractionError("EXTRACTION_FAILED", "Model call failed.", details=str(e)) from e

        model_text = extract_model_text(response)
        if not model_text:
            raise ExtractionError("EXTRACTION_FAILED", "Model response missing text.")
        return model_text
