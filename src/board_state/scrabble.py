"""Scrabble board normalization for WORDVINDER_SCRABBLE_EXTRACT_V1."""

import logging
from typing import Any, Dict, List, Optional

from .fields import (
    MISSING,
    SchemaInvalid,
    check_allowed_keys,
    int_in_range,
    normalize_letter,
    normalize_notes,
    require_fields,
)
from .models import (
    BOARD_SIZE,
    ErrorCode,
    ParseResult,
    RackTile,
    ScrabbleBoard,
    ScrabbleGrid,
    ScrabbleSummary,
)
from .tables import MAX_TILE_POINTS, SCRABBLE_FIELD_POLICY, FieldPolicy, get_tile_points


logger = logging.getLogger(__name__)

ALLOWED_TOP_LEVEL_KEYS = ("schema", "game", "rack", "board", "notes")

MAX_RACK_SIZE = 7


def normalize_tile(tile: Any) -> RackTile:
    """
    Validate one rack tile.

    A blank tile drops whatever letter the model guessed for it. Points always
    come from the letter table; a supplied `points` value is only range-checked.
    """
    if not isinstance(tile, dict):
        raise SchemaInvalid("rack tiles must be objects.")

    is_blank = tile.get("isBlank") is True

    raw_points = tile.get("points", MISSING)
    if raw_points not in (MISSING, None) and int_in_range(raw_points, 0, MAX_TILE_POINTS) is None:
        raise SchemaInvalid("rack tile points must be an integer between 0 and 10.")

    letter = None
    raw_letter = tile.get("letter")
    if raw_letter is not None:
        if not isinstance(raw_letter, str):
            raise SchemaInvalid("rack tile letter must be a string or null.")
        letter = normalize_letter(raw_letter)
        if letter is None:
            raise SchemaInvalid("rack tile letter must be a single A-Z character.")

    if is_blank:
        return RackTile(letter=None, is_blank=True, points=get_tile_points(None, is_blank=True))

    if letter is None:
        raise SchemaInvalid("non-blank tiles must have a letter.")
    return RackTile(letter=letter, is_blank=False, points=get_tile_points(letter))


def normalize_rack(rack_raw: Any) -> List[RackTile]:
    if not isinstance(rack_raw, list):
        raise SchemaInvalid("rack must be an array.")

    if len(rack_raw) > MAX_RACK_SIZE:
        raise SchemaInvalid("rack must contain 0 to 7 tiles.")

    return [normalize_tile(tile) for tile in rack_raw]


def _normalize_cell(cell: Any) -> Optional[str]:
    if cell is None:
        return None
    letter = normalize_letter(cell)
    if letter is None:
        raise SchemaInvalid("board tiles must be null or A-Z strings.")
    return letter


def normalize_grid(board_raw: Any) -> ScrabbleGrid:
    """Validate the 15x15 grid. Any shape or cell problem rejects the board."""
    if not isinstance(board_raw, dict):
        raise SchemaInvalid("board must be an object.")

    if int_in_range(board_raw.get("size"), BOARD_SIZE, BOARD_SIZE) is None:
        raise SchemaInvalid("board size must be 15.")

    rows = board_raw.get("tiles")
    if not isinstance(rows, list) or len(rows) != BOARD_SIZE:
        raise SchemaInvalid("board tiles must be a 15x15 array.")

    tiles = []
    for row in rows:
        if not isinstance(row, list) or len(row) != BOARD_SIZE:
            raise SchemaInvalid("board tiles must be a 15x15 array.")
        tiles.append([_normalize_cell(cell) for cell in row])

    return ScrabbleGrid(size=BOARD_SIZE, tiles=tiles)


def parse_scrabble(decoded: Dict[str, Any]) -> ParseResult:
    """Normalize a schema-routed Scrabble object. Never raises."""
    try:
        check_allowed_keys(decoded, ALLOWED_TOP_LEVEL_KEYS)
        required = [name for name, policy in SCRABBLE_FIELD_POLICY.items() if policy is FieldPolicy.STRICT]
        require_fields(decoded, *required)

        board = ScrabbleBoard(
            rack=normalize_rack(decoded["rack"]),
            board=normalize_grid(decoded["board"]),
            notes=normalize_notes(decoded.get("notes")),
        )
    except SchemaInvalid as e:
        logger.debug("Rejected Scrabble board: %s", e.message)
        return ParseResult.failure(ErrorCode.SCHEMA_INVALID, e.message, details=e.details)

    return ParseResult.success(board)


def build_scrabble_summary(board: ScrabbleBoard) -> ScrabbleSummary:
    """Compact rack string with '_' for blanks."""
    letters = []
    blank_count = 0
    for tile in board.rack:
        if tile.is_blank:
            letters.append("_")
            blank_count += 1
        elif tile.letter:
            letters.append(tile.letter)

    return ScrabbleSummary(rack="".join(letters), rack_count=len(letters), blank_count=blank_count)
