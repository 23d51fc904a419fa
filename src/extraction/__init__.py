"""Screenshot-to-text extraction via a vision model."""

from .models import Message, Role, ExtractionConfig, ExtractionError
from .client import VisionClient, extract_model_text, build_image_part, MAX_IMAGE_SIZE_BYTES
from .prompts import SYSTEM_PROMPT, get_system_prompt, build_extraction_query, DEFAULT_QUERY

__all__ = [
    "Message",
    "Role",
    "ExtractionConfig",
    "ExtractionError",
    "VisionClient",
    "extract_model_text",
    "build_image_part",
    "MAX_IMAGE_SIZE_BYTES",
    "SYSTEM_PROMPT",
    "get_system_prompt",
    "build_extraction_query",
    "DEFAULT_QUERY",
]
