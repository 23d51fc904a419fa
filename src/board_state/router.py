"""
Entry point for turning model text into a board.

Pipeline: strip fences -> decode JSON -> route on (schema, game) -> normalize.
Every outcome comes back as a ParseResult; nothing raises past parse_model_output.
"""

import logging
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Tuple

from .models import (
    SCRABBLE_GAME,
    SCRABBLE_SCHEMA,
    WORDSCAPES_GAME,
    WORDSCAPES_SCHEMA,
    ErrorCode,
    ParseResult,
)
from .sanitize import decode_model_json
from .scrabble import parse_scrabble
from .wordscapes import parse_wordscapes


logger = logging.getLogger(__name__)

Normalizer = Callable[[Dict[str, Any]], ParseResult]

# Existing entries never change meaning; new games or schema versions get new keys
NORMALIZERS: Mapping[Tuple[str, str], Normalizer] = MappingProxyType({
    (WORDSCAPES_SCHEMA, WORDSCAPES_GAME): parse_wordscapes,
    (SCRABBLE_SCHEMA, SCRABBLE_GAME): parse_scrabble,
})


def route(decoded: Dict[str, Any]) -> ParseResult:
    """Dispatch a decoded object to the normalizer for its (schema, game) pair."""
    schema = decoded.get("schema")
    game = decoded.get("game")
    if not isinstance(schema, str) or not isinstance(game, str):
        return ParseResult.failure(
            ErrorCode.SCHEMA_INVALID, "Model output JSON is missing required fields."
        )

    normalizer = NORMALIZERS.get((schema, game))
    if normalizer is None:
        return ParseResult.failure(
            ErrorCode.SCHEMA_INVALID,
            "Model output JSON has an unsupported schema.",
            details={"schema": schema, "game": game},
        )
    result = normalizer(decoded)
    if result.ok:
        return result.model_copy(update={"raw_payload": decoded})
    return result


def parse_model_output(model_text: Any) -> ParseResult:
    """
    Parse raw model text into a canonical board.

    Args:
        model_text: Text returned by the vision model. Anything that is not a
            string fails with MODEL_OUTPUT_NOT_JSON.

    Returns:
        ParseResult with either `board` or `error` set
    """
    decoded, failure = decode_model_json(model_text)
    if failure is not None:
        logger.debug("Model output rejected before routing: %s", failure.error.code.value)
        return failure

    result = route(decoded)
    if not result.ok:
        logger.debug("Model output rejected: %s (%s)", result.error.code.value, result.error.message)
    return result
