"""UI-friendly summaries of canonical boards."""

from typing import Union

from .models import LegacyBoard, ScrabbleBoard, Summary, WordscapesBoard
from .scrabble import build_scrabble_summary
from .wordscapes import build_wordscapes_summary
from .legacy import build_legacy_summary


def build_summary(board: Union[WordscapesBoard, ScrabbleBoard, LegacyBoard]) -> Summary:
    """Summarize a board, branching on its game."""
    if isinstance(board, ScrabbleBoard):
        return build_scrabble_summary(board)
    if isinstance(board, LegacyBoard):
        return build_legacy_summary(board)
    if isinstance(board, WordscapesBoard):
        return build_wordscapes_summary(board)
    raise TypeError(f"Cannot summarize {type(board).__name__}")
