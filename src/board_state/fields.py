"""Field-level coercion helpers shared by the per-game normalizers."""

import logging
import re
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .tables import is_suspicious_word


logger = logging.getLogger(__name__)

_LETTER_RE = re.compile(r'^[A-Z]$')
_WORD_RE = re.compile(r'^[A-Z]+$')

# Marks a key that is absent from the decoded object, as opposed to present and null
MISSING = object()


class SchemaInvalid(Exception):
    """Raised inside a normalizer when a strict field fails validation."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details


def check_allowed_keys(decoded: Dict[str, Any], allowed: Sequence[str]) -> None:
    unexpected = [key for key in decoded if key not in allowed]
    if unexpected:
        raise SchemaInvalid("Model output JSON contains unexpected keys.", details=unexpected)


def require_fields(decoded: Dict[str, Any], *names: str) -> None:
    if any(name not in decoded for name in names):
        raise SchemaInvalid("Model output JSON is missing required fields.")


def coerce_int(value: Any) -> Optional[int]:
    """
    Coerce a JSON number (or numeric string) to an int.

    Returns None for anything that is not an integral number. Booleans are not numbers here.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return None
        return int(number) if number.is_integer() else None
    return None


def int_in_range(value: Any, low: int, high: int) -> Optional[int]:
    number = coerce_int(value)
    if number is None or number < low or number > high:
        return None
    return number


def normalize_letter(value: Any) -> Optional[str]:
    """Trim and upper-case a single letter; None if it is not exactly one A-Z character."""
    if not isinstance(value, str):
        return None
    normalized = value.strip().upper()
    return normalized if _LETTER_RE.match(normalized) else None


def normalize_word(value: Any, length: Optional[int] = None, min_length: int = 1) -> Optional[str]:
    """Trim and upper-case a word; None if it is not purely A-Z or has the wrong length."""
    if not isinstance(value, str):
        return None
    normalized = value.strip().upper()
    if not _WORD_RE.match(normalized) or len(normalized) < min_length:
        return None
    if length is not None and len(normalized) != length:
        return None
    return normalized


def normalize_solved_word(value: Any, length: int) -> Optional[str]:
    """A word for a slot of known length, with promotional text filtered out."""
    word = normalize_word(value, length=length)
    if word is None:
        return None
    if is_suspicious_word(word):
        logger.debug("Dropping suspicious word %r", word)
        return None
    return word


def dedupe_preserve_order(items: Iterable[Any]) -> List[Any]:
    seen = set()
    result = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        result.append(item)
    return result


def normalize_notes(notes_raw: Any) -> List[str]:
    """Keep only string notes. Never fails."""
    if isinstance(notes_raw, list):
        return [note for note in notes_raw if isinstance(note, str)]
    return []


def normalize_letters(letters_raw: Any) -> List[str]:
    """Validate 5-8 single letters and dedupe them, keeping first-seen order."""
    if not isinstance(letters_raw, list):
        raise SchemaInvalid("letters must be an array.")

    if len(letters_raw) < 5 or len(letters_raw) > 8:
        raise SchemaInvalid("letters must contain 5 to 8 items.")

    letters = []
    for raw in letters_raw:
        letter = normalize_letter(raw)
        if letter is None:
            raise SchemaInvalid("letters must contain single A-Z characters.")
        letters.append(letter)

    deduped = dedupe_preserve_order(letters)
    if len(deduped) < 5:
        raise SchemaInvalid("letters must contain at least 5 unique characters.")
    return deduped
