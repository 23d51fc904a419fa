"""
Wordscapes board normalization.

Turns a decoded WORDVINDER_BOARD_EXTRACT_V4 object into a WordscapesBoard.

Strict fields (letters, missingByLength) reject the board on the first
problem. Lenient fields (wordLists, solvedWordsByLength, notes) drop bad
values and keep going, leaving a note when a whole field is discarded.
"""

import logging
from typing import Any, Dict, List, Optional

from .fields import (
    MISSING,
    SchemaInvalid,
    check_allowed_keys,
    dedupe_preserve_order,
    int_in_range,
    normalize_letters,
    normalize_notes,
    normalize_solved_word,
    require_fields,
)
from .models import (
    ErrorCode,
    MissingCount,
    ParseResult,
    SolvedWords,
    WordList,
    WordscapesBoard,
    WordscapesSummary,
)
from .tables import WORDSCAPES_FIELD_POLICY, FieldPolicy


logger = logging.getLogger(__name__)

ALLOWED_TOP_LEVEL_KEYS = (
    "schema",
    "game",
    "letters",
    "missingByLength",
    "wordLists",
    "solvedWordsByLength",
    "notes",
)

MIN_WORD_LENGTH = 3
MAX_WORD_LENGTH = 12
MAX_MISSING_COUNT = 20


def merge_missing_by_length(entries: List[MissingCount]) -> List[MissingCount]:
    """
    Merge entries sharing a length.

    Counts add up, except that an unknown (None) count makes the merged count unknown.
    """
    merged: Dict[int, Optional[int]] = {}
    for entry in entries:
        if entry.length not in merged:
            merged[entry.length] = entry.count
            continue
        current = merged[entry.length]
        if current is None or entry.count is None:
            merged[entry.length] = None
        else:
            merged[entry.length] = current + entry.count

    return [MissingCount(length=length, count=count) for length, count in sorted(merged.items())]


def normalize_missing_by_length(missing_raw: Any) -> List[MissingCount]:
    if not isinstance(missing_raw, list):
        raise SchemaInvalid("missingByLength must be an array.")

    entries: List[MissingCount] = []
    for entry in missing_raw:
        if not isinstance(entry, dict):
            raise SchemaInvalid("missingByLength entries must be objects.")

        length = int_in_range(entry.get("length"), MIN_WORD_LENGTH, MAX_WORD_LENGTH)
        if length is None:
            raise SchemaInvalid("missingByLength length must be an integer between 3 and 12.")

        # An absent count is not the same as an explicit null
        raw_count = entry.get("count", MISSING)
        count = None
        if raw_count is not None:
            count = int_in_range(raw_count, 0, MAX_MISSING_COUNT)
            if count is None:
                raise SchemaInvalid(
                    "missingByLength count must be null or an integer between 0 and 20."
                )

        entries.append(MissingCount(length=length, count=count))

    return merge_missing_by_length(entries)


def _drop_field(name: str, notes: List[str]) -> None:
    logger.debug("Ignoring malformed optional field %s", name)
    notes.append(f"Ignored invalid {name} (not an array)")


def normalize_word_lists(word_lists_raw: Any, notes: List[str]) -> Optional[List[WordList]]:
    """
    Validate slot columns.

    A bad slot becomes None in place; a bad entry is skipped. Entries are
    ordered by length, then by their position in the input.
    """
    if word_lists_raw is MISSING:
        return None

    if not isinstance(word_lists_raw, list):
        _drop_field("wordLists", notes)
        return None

    entries = []
    for index, entry in enumerate(word_lists_raw):
        if not isinstance(entry, dict):
            continue

        length = int_in_range(entry.get("length"), MIN_WORD_LENGTH, MAX_WORD_LENGTH)
        if length is None:
            continue

        slots_raw = entry.get("slots")
        if not isinstance(slots_raw, list):
            continue

        slots = [normalize_solved_word(slot, length) for slot in slots_raw]
        entries.append((length, index, WordList(length=length, slots=slots)))

    entries.sort(key=lambda item: (item[0], item[1]))
    return [word_list for _, _, word_list in entries]


def derive_solved_words(word_lists: List[WordList]) -> List[SolvedWords]:
    """Group every filled slot by length."""
    grouped: Dict[int, List[str]] = {}
    for word_list in word_lists:
        for word in word_list.slots:
            if not word:
                continue
            grouped.setdefault(word_list.length, []).append(word)

    return [
        SolvedWords(length=length, words=dedupe_preserve_order(words))
        for length, words in sorted(grouped.items())
    ]


def normalize_solved_words_by_length(solved_raw: Any, notes: List[str]) -> Optional[List[SolvedWords]]:
    if solved_raw is MISSING:
        return None

    if not isinstance(solved_raw, list):
        _drop_field("solvedWordsByLength", notes)
        return None

    entries = []
    for entry in solved_raw:
        if not isinstance(entry, dict):
            continue

        length = int_in_range(entry.get("length"), MIN_WORD_LENGTH, MAX_WORD_LENGTH)
        if length is None:
            continue

        words_raw = entry.get("words")
        if not isinstance(words_raw, list):
            continue

        words = [normalize_solved_word(word, length) for word in words_raw]
        words = dedupe_preserve_order(word for word in words if word is not None)
        entries.append(SolvedWords(length=length, words=words))

    # sorted() is stable, so equal lengths keep input order
    return sorted(entries, key=lambda entry: entry.length)


def parse_wordscapes(decoded: Dict[str, Any]) -> ParseResult:
    """Normalize a schema-routed Wordscapes object. Never raises."""
    try:
        return ParseResult.success(_build_board(decoded))
    except SchemaInvalid as e:
        logger.debug("Rejected Wordscapes board: %s", e.message)
        return ParseResult.failure(ErrorCode.SCHEMA_INVALID, e.message, details=e.details)


def _build_board(decoded: Dict[str, Any]) -> WordscapesBoard:
    check_allowed_keys(decoded, ALLOWED_TOP_LEVEL_KEYS)
    required = [name for name, policy in WORDSCAPES_FIELD_POLICY.items() if policy is FieldPolicy.STRICT]
    require_fields(decoded, *required)

    letters = normalize_letters(decoded["letters"])
    missing_by_length = normalize_missing_by_length(decoded["missingByLength"])
    notes = normalize_notes(decoded.get("notes"))

    word_lists = normalize_word_lists(decoded.get("wordLists", MISSING), notes)
    if word_lists:
        solved_words = derive_solved_words(word_lists)
    else:
        solved_words = normalize_solved_words_by_length(
            decoded.get("solvedWordsByLength", MISSING), notes
        )

    return WordscapesBoard(
        letters=letters,
        missing_by_length=missing_by_length,
        notes=notes,
        word_lists=word_lists or None,
        solved_words_by_length=solved_words or None,
    )


def build_wordscapes_summary(board: WordscapesBoard) -> WordscapesSummary:
    """Letters and remaining counts; the total is None as soon as one count is unknown."""
    total_remaining: Optional[int] = 0
    for entry in board.missing_by_length:
        if entry.count is None:
            total_remaining = None
            break
        total_remaining += entry.count

    return WordscapesSummary(
        letters=" ".join(board.letters),
        remaining_by_length=list(board.missing_by_length),
        total_remaining=total_remaining,
    )
