"""Model-output parsing for Wordscapes and Scrabble screenshots."""

from .router import parse_model_output, route, NORMALIZERS
from .legacy import parse_legacy_model_output
from .summary import build_summary
from .sanitize import strip_code_fences, decode_model_json
from .tables import get_tile_points, is_suspicious_word, LETTER_POINTS, SUSPICIOUS_TOKENS, FieldPolicy
from .models import (
    ErrorCode,
    ParseError,
    ParseResult,
    Board,
    WordscapesBoard,
    ScrabbleBoard,
    LegacyBoard,
    MissingCount,
    WordList,
    SolvedWords,
    RackTile,
    ScrabbleGrid,
    UnsolvedSlot,
    WordscapesSummary,
    ScrabbleSummary,
    LegacySummary,
)

__all__ = [
    # Parsing
    "parse_model_output",
    "parse_legacy_model_output",
    "route",
    "NORMALIZERS",
    "strip_code_fences",
    "decode_model_json",
    # Summaries
    "build_summary",
    # Lookup tables
    "get_tile_points",
    "is_suspicious_word",
    "LETTER_POINTS",
    "SUSPICIOUS_TOKENS",
    "FieldPolicy",
    # Models
    "ErrorCode",
    "ParseError",
    "ParseResult",
    "Board",
    "WordscapesBoard",
    "ScrabbleBoard",
    "LegacyBoard",
    "MissingCount",
    "WordList",
    "SolvedWords",
    "RackTile",
    "ScrabbleGrid",
    "UnsolvedSlot",
    "WordscapesSummary",
    "ScrabbleSummary",
    "LegacySummary",
]
