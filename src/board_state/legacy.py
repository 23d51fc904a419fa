"""
Parser for the legacy single-game format.

Older clients send exactly `letters`, `solvedWords` and `unsolvedSlots`
with no schema/game fields. Every field here is strict, and a solved word
containing promotional text flags the whole response as suspicious.
"""

import logging
import math
from typing import Any, Dict, List, Optional

from .fields import SchemaInvalid, dedupe_preserve_order, normalize_letters, normalize_word
from .models import ErrorCode, LegacyBoard, LegacySummary, ParseResult, UnsolvedSlot
from .sanitize import decode_model_json
from .tables import is_suspicious_word


logger = logging.getLogger(__name__)

LEGACY_KEYS = ("letters", "solvedWords", "unsolvedSlots")


def _truncate(value: Any) -> Optional[int]:
    """Finite number (or numeric string) truncated toward zero."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return math.trunc(number)


def merge_unsolved_slots(slots: List[UnsolvedSlot]) -> List[UnsolvedSlot]:
    merged: Dict[int, int] = {}
    for slot in slots:
        merged[slot.length] = merged.get(slot.length, 0) + slot.count
    return [UnsolvedSlot(length=length, count=count) for length, count in sorted(merged.items())]


def _normalize_solved_words(solved_raw: List[Any]) -> List[str]:
    words = []
    for raw in solved_raw:
        word = normalize_word(raw, min_length=2)
        if word is None:
            raise SchemaInvalid("solvedWords must be uppercase alphabetic words (length >= 2).")
        words.append(word)
    return dedupe_preserve_order(words)


def _normalize_unsolved_slots(unsolved_raw: List[Any]) -> List[UnsolvedSlot]:
    slots = []
    for slot in unsolved_raw:
        if not isinstance(slot, dict):
            raise SchemaInvalid("unsolvedSlots entries must be objects.")

        length = _truncate(slot.get("length"))
        count = _truncate(slot.get("count"))
        if length is None or count is None:
            raise SchemaInvalid("unsolvedSlots length and count must be numbers.")
        if length < 3 or length > 12:
            raise SchemaInvalid("unsolvedSlots length must be an integer between 3 and 12.")
        if count < 1 or count > 20:
            raise SchemaInvalid("unsolvedSlots count must be an integer between 1 and 20.")

        slots.append(UnsolvedSlot(length=length, count=count))
    return merge_unsolved_slots(slots)


def parse_legacy_model_output(model_text: Any) -> ParseResult:
    """
    Parse model text in the legacy format.

    Returns MODEL_OUTPUT_SUSPICIOUS (rather than a schema error) when the
    payload is well formed but a solved word looks like promotional text.
    """
    decoded, failure = decode_model_json(model_text)
    if failure is not None:
        return failure

    if sorted(decoded) != sorted(LEGACY_KEYS):
        return ParseResult.failure(
            ErrorCode.SCHEMA_INVALID,
            "Model output JSON must contain only letters, solvedWords, unsolvedSlots.",
            details=list(decoded),
        )

    if not all(isinstance(decoded[key], list) for key in LEGACY_KEYS):
        return ParseResult.failure(ErrorCode.SCHEMA_INVALID, "Model output JSON fields must be arrays.")

    try:
        letters = normalize_letters(decoded["letters"])
        solved_words = _normalize_solved_words(decoded["solvedWords"])
        unsolved_slots = _normalize_unsolved_slots(decoded["unsolvedSlots"])
    except SchemaInvalid as e:
        logger.debug("Rejected legacy board: %s", e.message)
        return ParseResult.failure(ErrorCode.SCHEMA_INVALID, e.message, details=e.details)

    for word in solved_words:
        if is_suspicious_word(word):
            logger.debug("Flagged legacy board for suspicious word %r", word)
            return ParseResult.failure(ErrorCode.SUSPICIOUS, f"Suspicious word detected: {word}")

    return ParseResult.success(
        LegacyBoard(letters=letters, solved_words=solved_words, unsolved_slots=unsolved_slots)
    )


def build_legacy_summary(board: LegacyBoard) -> LegacySummary:
    return LegacySummary(
        letters=" ".join(board.letters),
        remaining_by_length=list(board.unsolved_slots),
        total_remaining=sum(slot.count for slot in board.unsolved_slots),
    )
