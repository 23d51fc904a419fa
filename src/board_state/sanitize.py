"""Model text cleanup and JSON decoding."""

import json
import re
from typing import Any, Dict, Tuple, Optional

from .models import ErrorCode, ParseResult


_FENCE_RE = re.compile(r'^```(?:json)?\s*(.*?)\s*```$', re.IGNORECASE | re.DOTALL)


def strip_code_fences(text: str) -> str:
    """Remove a ```json ... ``` wrapper if the whole text is one fenced block."""
    trimmed = text.strip()
    match = _FENCE_RE.match(trimmed)
    if match:
        return match.group(1).strip()
    return trimmed


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


def looks_like_json_object(text: str) -> bool:
    """Cheap shape check before a real parse."""
    return text.startswith('{') and text.endswith('}')


def is_plain_object(value: Any) -> bool:
    return isinstance(value, dict)


def decode_model_json(model_text: Any) -> Tuple[Optional[Dict[str, Any]], Optional[ParseResult]]:
    """
    Turn raw model text into a decoded JSON object.

    Returns a tuple of (decoded, failure). Exactly one of the two is None.
    """
    if not isinstance(model_text, str):
        return None, ParseResult.failure(ErrorCode.NOT_JSON, "Model output is not text.")

    normalized = strip_code_fences(model_text)
    if not looks_like_json_object(normalized):
        return None, ParseResult.failure(ErrorCode.NOT_JSON, "Model output does not look like JSON.")

    try:
        decoded = json.loads(normalized, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        return None, ParseResult.failure(
            ErrorCode.NOT_JSON,
            "Model output could not be parsed as JSON.",
            details=str(e),
        )

    if not is_plain_object(decoded):
        return None, ParseResult.failure(ErrorCode.SCHEMA_INVALID, "Model output JSON is not an object.")

    return decoded, None
