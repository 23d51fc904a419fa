"""Fixed lookup tables shared by the board normalizers.

Everything here is built once at import time and exposed read-only.
"""

from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


# Tokens that show up in promotional overlays rather than in the puzzle
SUSPICIOUS_TOKENS: Tuple[str, ...] = ("FREE", "HINT", "COIN", "COINS", "LEVEL", "DAILY")

# Standard English Scrabble tile values
LETTER_POINTS: Mapping[str, int] = MappingProxyType({
    "A": 1, "B": 3, "C": 3, "D": 2, "E": 1, "F": 4, "G": 2,
    "H": 4, "I": 1, "J": 8, "K": 5, "L": 1, "M": 3, "N": 1,
    "O": 1, "P": 3, "Q": 10, "R": 1, "S": 1, "T": 1, "U": 1,
    "V": 4, "W": 4, "X": 8, "Y": 4, "Z": 10,
})

BLANK_POINTS = 0
MAX_TILE_POINTS = 10


class FieldPolicy(str, Enum):
    """How a normalizer reacts to a malformed field."""
    STRICT = "strict"  # reject the whole board
    LENIENT = "lenient"  # drop the bad value, keep going


WORDSCAPES_FIELD_POLICY: Mapping[str, FieldPolicy] = MappingProxyType({
    "letters": FieldPolicy.STRICT,
    "missingByLength": FieldPolicy.STRICT,
    "wordLists": FieldPolicy.LENIENT,
    "solvedWordsByLength": FieldPolicy.LENIENT,
    "notes": FieldPolicy.LENIENT,
})

SCRABBLE_FIELD_POLICY: Mapping[str, FieldPolicy] = MappingProxyType({
    "rack": FieldPolicy.STRICT,
    "board": FieldPolicy.STRICT,
    "notes": FieldPolicy.LENIENT,
})


def is_suspicious_word(word: str) -> bool:
    """True if `word` contains any promotional token (case-insensitive)."""
    upper = word.upper()
    return any(token in upper for token in SUSPICIOUS_TOKENS)


def get_tile_points(letter: Optional[str], is_blank: bool = False) -> Optional[int]:
    """
    Look up the point value of a single tile.

    Blank tiles are always worth 0, whatever letter they stand in for.

    Returns:
        The point value, or None if `letter` is not a single A-Z character
    """
    if is_blank:
        return BLANK_POINTS
    if not isinstance(letter, str):
        return None
    return LETTER_POINTS.get(letter.strip().upper())
