"""Data models for parsed board state."""

from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


WORDSCAPES_SCHEMA = "WORDVINDER_BOARD_EXTRACT_V4"
WORDSCAPES_GAME = "WORDSCAPES"
SCRABBLE_SCHEMA = "WORDVINDER_SCRABBLE_EXTRACT_V1"
SCRABBLE_GAME = "SCRABBLE"

BOARD_SIZE = 15


class ErrorCode(str, Enum):
    """Closed set of parse failure codes."""
    NOT_JSON = "MODEL_OUTPUT_NOT_JSON"
    SCHEMA_INVALID = "MODEL_OUTPUT_SCHEMA_INVALID"
    SUSPICIOUS = "MODEL_OUTPUT_SUSPICIOUS"


class _Frozen(BaseModel):
    """
    Base for values that must not change after construction.

    Frozen only blocks attribute assignment; list fields are still plain lists,
    so callers must not mutate them in place.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)


# --- Wordscapes ---

class MissingCount(_Frozen):
    """
    Unsolved words of one length. A null count means the model could not tell.

    Input counts are capped at 20 each, but merged counts for a length are not.
    """
    length: int = Field(..., ge=3, le=12)
    count: Optional[int] = Field(None, ge=0)


class WordList(_Frozen):
    """One column of word slots; unsolved slots are None."""
    length: int = Field(..., ge=3, le=12)
    slots: List[Optional[str]] = Field(default_factory=list)


class SolvedWords(_Frozen):
    length: int = Field(..., ge=3, le=12)
    words: List[str] = Field(default_factory=list)


class WordscapesBoard(_Frozen):
    """Canonical Wordscapes board."""
    schema_id: Literal["WORDVINDER_BOARD_EXTRACT_V4"] = Field(WORDSCAPES_SCHEMA, alias="schema")
    game: Literal["WORDSCAPES"] = WORDSCAPES_GAME
    letters: List[str] = Field(..., min_length=5, max_length=8)
    missing_by_length: List[MissingCount] = Field(default_factory=list, alias="missingByLength")
    notes: List[str] = Field(default_factory=list)
    word_lists: Optional[List[WordList]] = Field(None, alias="wordLists")
    solved_words_by_length: Optional[List[SolvedWords]] = Field(None, alias="solvedWordsByLength")

    def to_payload(self) -> Dict[str, Any]:
        """Serialize to the canonical JSON shape, leaving out absent word collections."""
        exclude = set()
        if self.word_lists is None:
            exclude.add("word_lists")
        if self.solved_words_by_length is None:
            exclude.add("solved_words_by_length")
        return self.model_dump(by_alias=True, exclude=exclude)


# --- Scrabble ---

class RackTile(_Frozen):
    """A rack tile. Blank tiles never carry a letter and are worth 0."""
    letter: Optional[str] = Field(None, pattern=r'^[A-Z]$')
    is_blank: bool = Field(False, alias="isBlank")
    points: int = Field(0, ge=0, le=10)


class ScrabbleGrid(_Frozen):
    size: Literal[15] = BOARD_SIZE
    tiles: List[List[Optional[str]]] = Field(..., min_length=BOARD_SIZE, max_length=BOARD_SIZE)


class ScrabbleBoard(_Frozen):
    """Canonical Scrabble board."""
    schema_id: Literal["WORDVINDER_SCRABBLE_EXTRACT_V1"] = Field(SCRABBLE_SCHEMA, alias="schema")
    game: Literal["SCRABBLE"] = SCRABBLE_GAME
    rack: List[RackTile] = Field(default_factory=list, max_length=7)
    board: ScrabbleGrid
    notes: List[str] = Field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


Board = Union[WordscapesBoard, ScrabbleBoard]


# --- Legacy single-schema format ---

class UnsolvedSlot(_Frozen):
    length: int = Field(..., ge=3, le=12)
    count: int = Field(..., ge=1)


class LegacyBoard(_Frozen):
    """Board from the legacy format that predates the schema/game fields."""
    letters: List[str] = Field(..., min_length=5, max_length=8)
    solved_words: List[str] = Field(default_factory=list, alias="solvedWords")
    unsolved_slots: List[UnsolvedSlot] = Field(default_factory=list, alias="unsolvedSlots")

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


# --- Results ---

class ParseError(_Frozen):
    """A single parse failure."""
    code: ErrorCode
    message: str
    details: Optional[Any] = None


class ParseResult(BaseModel):
    """Outcome of parsing one model response: a board or an error, never both."""
    ok: bool
    board: Optional[Union[WordscapesBoard, ScrabbleBoard, LegacyBoard]] = None
    error: Optional[ParseError] = None
    # Decoded model JSON behind a successful board; never serialized
    raw_payload: Optional[Dict[str, Any]] = None

    @classmethod
    def success(cls, board: Union[WordscapesBoard, ScrabbleBoard, LegacyBoard]) -> "ParseResult":
        return cls(ok=True, board=board)

    @classmethod
    def failure(cls, code: ErrorCode, message: str, details: Any = None) -> "ParseResult":
        return cls(ok=False, error=ParseError(code=code, message=message, details=details))

    def to_payload(self) -> Dict[str, Any]:
        if self.ok:
            return {"ok": True, "board": self.board.to_payload()}
        error = {"code": self.error.code.value, "message": self.error.message}
        if self.error.details is not None:
            error["details"] = self.error.details
        return {"ok": False, "error": error}


# --- Summaries ---

class WordscapesSummary(_Frozen):
    letters: str
    remaining_by_length: List[MissingCount] = Field(default_factory=list, alias="remainingByLength")
    total_remaining: Optional[int] = Field(None, alias="totalRemaining")


class ScrabbleSummary(_Frozen):
    rack: str
    rack_count: int = Field(0, alias="rackCount")
    blank_count: int = Field(0, alias="blankCount")


class LegacySummary(_Frozen):
    letters: str
    remaining_by_length: List[UnsolvedSlot] = Field(default_factory=list, alias="remainingByLength")
    total_remaining: int = Field(0, alias="totalRemaining")


Summary = Union[WordscapesSummary, ScrabbleSummary, LegacySummary]
