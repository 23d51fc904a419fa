import re
from typing import Any


DEFAULT_QUERY = "WORDSCAPES EXTRACT_BOARD_STATE_V4"

_GAME_TOKEN_RE = re.compile(r'\b(WORDSCAPES|SCRABBLE)\b', re.IGNORECASE)


def build_extraction_query(raw_query: Any = None) -> str:
    """
    Build the user query sent with a screenshot.

    The query must name the game so the model picks the right schema; queries
    that don't are assumed to be about Wordscapes.
    """
    if not isinstance(raw_query, str) or not raw_query.strip():
        return DEFAULT_QUERY

    collapsed = re.sub(r'\s+', ' ', raw_query.strip())
    if _GAME_TOKEN_RE.search(collapsed):
        return collapsed
    return f"WORDSCAPES {collapsed}"
