"""
Test suite for Wordscapes normalization.

Covers strict fields (letters, missingByLength, allowed keys) and the
lenient ones (wordLists, solvedWordsByLength, notes).
"""

import json

import pytest

from src.board_state import parse_model_output, build_summary, ErrorCode, WordscapesBoard, MissingCount


def wordscapes(**fields) -> str:
    """Build Wordscapes model text with sensible defaults."""
    payload = {
        "schema": "WORDVINDER_BOARD_EXTRACT_V4",
        "game": "WORDSCAPES",
        "letters": ["A", "B", "C", "D", "E"],
        "missingByLength": [{"length": 3, "count": 2}],
    }
    payload.update(fields)
    return json.dumps(payload)


def parse_ok(text: str) -> WordscapesBoard:
    result = parse_model_output(text)
    assert result.ok is True, result.error
    assert isinstance(result.board, WordscapesBoard)
    return result.board


def assert_invalid(text: str, message: str = None):
    result = parse_model_output(text)
    assert result.ok is False
    assert result.error.code == ErrorCode.SCHEMA_INVALID
    if message is not None:
        assert result.error.message == message
    return result.error


class TestValidBoards:
    """Test cases for boards that should normalize."""

    def test_minimal_board(self):
        """Only the required fields."""
        board = parse_ok(wordscapes())
        assert board.letters == ["A", "B", "C", "D", "E"]
        assert board.missing_by_length == [MissingCount(length=3, count=2)]
        assert board.notes == []
        assert board.word_lists is None
        assert board.solved_words_by_length is None

    def test_payload_omits_empty_collections(self):
        """wordLists and solvedWordsByLength keys are left out when empty."""
        payload = parse_ok(wordscapes()).to_payload()
        assert payload == {
            "schema": "WORDVINDER_BOARD_EXTRACT_V4",
            "game": "WORDSCAPES",
            "letters": ["A", "B", "C", "D", "E"],
            "missingByLength": [{"length": 3, "count": 2}],
            "notes": [],
        }

    def test_letters_trimmed_and_upper_cased(self):
        """Letters are normalized before validation."""
        board = parse_ok(wordscapes(letters=[" a", "b ", "c", "D", "e"]))
        assert board.letters == ["A", "B", "C", "D", "E"]

    def test_fenced_output(self):
        """A fenced response parses the same as a bare one."""
        board = parse_ok(f"```json\n{wordscapes()}\n```")
        assert board.letters == ["A", "B", "C", "D", "E"]

    def test_eight_letters(self):
        """Eight letters is the upper bound."""
        board = parse_ok(wordscapes(letters=list("ABCDEFGH")))
        assert len(board.letters) == 8


class TestLetters:
    """Test cases for the strict letters field."""

    def test_dedupe_preserves_first_seen_order(self):
        """Duplicates are removed, order kept."""
        board = parse_ok(wordscapes(letters=["E", "A", "E", "B", "C", "D"]))
        assert board.letters == ["E", "A", "B", "C", "D"]

    def test_four_unique_letters_rejected(self):
        """Fewer than five unique letters after dedupe is rejected."""
        assert_invalid(
            wordscapes(letters=["A", "A", "B", "C", "D"]),
            "letters must contain at least 5 unique characters.",
        )

    @pytest.mark.parametrize("letters", [list("ABCD"), list("ABCDEFGHI")])
    def test_wrong_count(self, letters):
        """Fewer than 5 or more than 8 entries is rejected."""
        assert_invalid(wordscapes(letters=letters), "letters must contain 5 to 8 items.")

    @pytest.mark.parametrize("bad", ["AB", "1", "", "É", 7, None])
    def test_bad_letter_rejects_board(self, bad):
        """Any invalid entry rejects the whole board."""
        assert_invalid(
            wordscapes(letters=["A", "B", "C", "D", bad]),
            "letters must contain single A-Z characters.",
        )

    def test_letters_not_array(self):
        """letters must be an array."""
        assert_invalid(wordscapes(letters="ABCDE"), "letters must be an array.")


class TestMissingByLength:
    """Test cases for the strict missingByLength field."""

    def test_merge_sums_counts(self):
        """Two known counts for one length add up."""
        board = parse_ok(wordscapes(missingByLength=[
            {"length": 4, "count": 2},
            {"length": 4, "count": 3},
        ]))
        assert board.missing_by_length == [MissingCount(length=4, count=5)]

    def test_merged_count_may_exceed_input_cap(self):
        """Each input count is capped at 20, but their sum is not."""
        board = parse_ok(wordscapes(missingByLength=[
            {"length": 4, "count": 15},
            {"length": 4, "count": 10},
        ]))
        assert board.missing_by_length == [MissingCount(length=4, count=25)]

    def test_large_merge_totals_in_summary(self):
        """The summary total reflects merged counts above 20."""
        board = parse_ok(wordscapes(missingByLength=[
            {"length": 4, "count": 20},
            {"length": 4, "count": 20},
            {"length": 5, "count": 3},
        ]))
        assert build_summary(board).total_remaining == 43

    def test_merge_with_unknown_is_unknown(self):
        """An unknown count poisons the merged count."""
        board = parse_ok(wordscapes(missingByLength=[
            {"length": 4, "count": 2},
            {"length": 4, "count": None},
        ]))
        assert board.missing_by_length == [MissingCount(length=4, count=None)]

    def test_unknown_stays_unknown_after_later_entries(self):
        """Once unknown, further entries do not restore a count."""
        board = parse_ok(wordscapes(missingByLength=[
            {"length": 4, "count": None},
            {"length": 4, "count": 3},
            {"length": 4, "count": 1},
        ]))
        assert board.missing_by_length[0].count is None

    def test_sorted_by_length(self):
        """Entries come out sorted by length."""
        board = parse_ok(wordscapes(missingByLength=[
            {"length": 6, "count": 1},
            {"length": 3, "count": 0},
            {"length": 5, "count": None},
        ]))
        assert [entry.length for entry in board.missing_by_length] == [3, 5, 6]

    def test_numeric_strings_coerced(self):
        """Numeric strings and integral floats are accepted."""
        board = parse_ok(wordscapes(missingByLength=[{"length": "4", "count": 2.0}]))
        assert board.missing_by_length == [MissingCount(length=4, count=2)]

    def test_empty_array(self):
        """An empty array is valid."""
        board = parse_ok(wordscapes(missingByLength=[]))
        assert board.missing_by_length == []

    @pytest.mark.parametrize("length", [2, 13, 4.5, "four", None, True])
    def test_bad_length_rejects_board(self, length):
        """Out-of-range or non-integer lengths reject the board."""
        assert_invalid(
            wordscapes(missingByLength=[{"length": length, "count": 1}]),
            "missingByLength length must be an integer between 3 and 12.",
        )

    @pytest.mark.parametrize("count", [-1, 21, 1.5, "many"])
    def test_bad_count_rejects_board(self, count):
        """Out-of-range or non-integer counts reject the board."""
        assert_invalid(
            wordscapes(missingByLength=[{"length": 4, "count": count}]),
            "missingByLength count must be null or an integer between 0 and 20.",
        )

    def test_absent_count_rejected(self):
        """A missing count is not the same as null."""
        assert_invalid(wordscapes(missingByLength=[{"length": 4}]))

    def test_entry_not_object(self):
        """Entries must be objects."""
        assert_invalid(
            wordscapes(missingByLength=[[4, 2]]),
            "missingByLength entries must be objects.",
        )

    def test_not_array(self):
        """missingByLength must be an array."""
        assert_invalid(wordscapes(missingByLength={"length": 4}), "missingByLength must be an array.")


class TestTopLevelKeys:
    """Test cases for the key allow-list and required fields."""

    def test_unexpected_key_rejected(self):
        """An extra key rejects an otherwise valid board."""
        error = assert_invalid(
            wordscapes(cheatCode="UPUPDOWNDOWN"),
            "Model output JSON contains unexpected keys.",
        )
        assert error.details == ["cheatCode"]

    @pytest.mark.parametrize("field", ["letters", "missingByLength"])
    def test_required_field_missing(self, field):
        """Both strict fields are required."""
        payload = json.loads(wordscapes())
        del payload[field]
        assert_invalid(json.dumps(payload), "Model output JSON is missing required fields.")


class TestNotes:
    """Test cases for the lenient notes field."""

    def test_non_strings_dropped(self):
        """Only string notes survive."""
        board = parse_ok(wordscapes(notes=["blurry", 3, None, {"x": 1}, "cropped"]))
        assert board.notes == ["blurry", "cropped"]

    @pytest.mark.parametrize("notes", ["just a string", None, 5, {"a": "b"}])
    def test_non_array_defaults_to_empty(self, notes):
        """A non-array notes field never rejects the board."""
        board = parse_ok(wordscapes(notes=notes))
        assert board.notes == []


class TestWordLists:
    """Test cases for the lenient wordLists field."""

    def test_mismatched_slot_length_becomes_null(self):
        """A slot of the wrong length is nulled; the others survive."""
        board = parse_ok(wordscapes(wordLists=[
            {"length": 4, "slots": ["CATS", "DOGS", "FREEZ"]},
        ]))
        assert board.word_lists[0].slots == ["CATS", "DOGS", None]
        assert board.solved_words_by_length[0].length == 4
        assert board.solved_words_by_length[0].words == ["CATS", "DOGS"]

    def test_invalid_slots_keep_position(self):
        """Non-letter, non-string and suspicious slots become None in place."""
        board = parse_ok(wordscapes(wordLists=[
            {"length": 4, "slots": [None, "ca7s", 12, " hint", "cats"]},
        ]))
        assert board.word_lists[0].slots == [None, None, None, None, "CATS"]

    def test_suspicious_word_dropped(self):
        """FREEBIE contains FREE and is dropped at slot level."""
        board = parse_ok(wordscapes(wordLists=[
            {"length": 7, "slots": ["FREEBIE", "EXAMPLE"]},
        ]))
        assert board.word_lists[0].slots == [None, "EXAMPLE"]
        assert board.solved_words_by_length[0].words == ["EXAMPLE"]

    def test_bad_entries_skipped(self):
        """Entries with wrong types or lengths are skipped entirely."""
        board = parse_ok(wordscapes(wordLists=[
            "CATS",
            {"length": 2, "slots": ["AT"]},
            {"length": 13, "slots": []},
            {"length": 4},
            {"length": 4, "slots": "CATS"},
            {"length": 3, "slots": ["CAT"]},
        ]))
        assert len(board.word_lists) == 1
        assert board.word_lists[0].length == 3

    def test_sorted_by_length_then_input_order(self):
        """Lists sort by length; equal lengths keep input order."""
        board = parse_ok(wordscapes(wordLists=[
            {"length": 5, "slots": ["BEARD"]},
            {"length": 4, "slots": ["BEAD"]},
            {"length": 5, "slots": ["BREAD"]},
            {"length": 4, "slots": ["DEAR"]},
        ]))
        assert [(wl.length, wl.slots[0]) for wl in board.word_lists] == [
            (4, "BEAD"), (4, "DEAR"), (5, "BEARD"), (5, "BREAD"),
        ]

    def test_payload_has_no_index_field(self):
        """Internal ordering data never reaches the output."""
        payload = parse_ok(wordscapes(wordLists=[{"length": 3, "slots": ["CAB"]}])).to_payload()
        assert payload["wordLists"] == [{"length": 3, "slots": ["CAB"]}]

    def test_not_array_drops_field_with_note(self):
        """A non-array wordLists is ignored and noted."""
        board = parse_ok(wordscapes(wordLists={"length": 4}, notes=["first"]))
        assert board.word_lists is None
        assert board.notes == ["first", "Ignored invalid wordLists (not an array)"]

    def test_null_word_lists_noted(self):
        """An explicit null is treated as malformed, not absent."""
        board = parse_ok(wordscapes(wordLists=None))
        assert board.notes == ["Ignored invalid wordLists (not an array)"]

    def test_empty_word_lists_omitted(self):
        """An empty wordLists array is left out of the board."""
        payload = parse_ok(wordscapes(wordLists=[])).to_payload()
        assert "wordLists" not in payload
        assert "solvedWordsByLength" not in payload

    def test_all_null_slots_keep_list_but_no_solved_words(self):
        """Unsolved columns are kept; with no words there is nothing to derive."""
        board = parse_ok(wordscapes(wordLists=[{"length": 4, "slots": [None, None]}]))
        assert board.word_lists[0].slots == [None, None]
        assert board.solved_words_by_length is None


class TestSolvedWordsByLength:
    """Test cases for deriving or validating solvedWordsByLength."""

    def test_derived_from_word_lists_ignores_raw(self):
        """When wordLists has entries, the raw field is ignored."""
        board = parse_ok(wordscapes(
            wordLists=[
                {"length": 4, "slots": ["DEAR", "READ"]},
                {"length": 3, "slots": ["RED", None]},
                {"length": 4, "slots": ["DEAR", "DARE"]},
            ],
            solvedWordsByLength=[{"length": 5, "words": ["BREAD"]}],
        ))
        solved = [(entry.length, entry.words) for entry in board.solved_words_by_length]
        assert solved == [(3, ["RED"]), (4, ["DEAR", "READ", "DARE"])]

    def test_raw_field_used_without_word_lists(self):
        """Without wordLists, the raw field is validated leniently."""
        board = parse_ok(wordscapes(solvedWordsByLength=[
            {"length": 5, "words": ["bread", "BEARD", "BREAD", "FREEBIE", "BED", 9]},
            {"length": 3, "words": ["RED"]},
            {"length": 20, "words": ["X"]},
            {"length": 4, "words": "DEAR"},
            "junk",
        ]))
        solved = [(entry.length, entry.words) for entry in board.solved_words_by_length]
        assert solved == [(3, ["RED"]), (5, ["BREAD", "BEARD"])]

    def test_raw_field_used_when_word_lists_empty(self):
        """An empty wordLists falls back to the raw field."""
        board = parse_ok(wordscapes(wordLists=[], solvedWordsByLength=[{"length": 3, "words": ["RED"]}]))
        assert board.solved_words_by_length[0].words == ["RED"]

    def test_not_array_drops_field_with_note(self):
        """A non-array raw field is ignored and noted."""
        board = parse_ok(wordscapes(solvedWordsByLength="RED"))
        assert board.solved_words_by_length is None
        assert board.notes == ["Ignored invalid solvedWordsByLength (not an array)"]

    def test_entry_with_no_valid_words_kept(self):
        """An entry whose words are all invalid survives with an empty list."""
        board = parse_ok(wordscapes(solvedWordsByLength=[{"length": 4, "words": ["TOOLONG"]}]))
        assert board.solved_words_by_length[0].words == []


class TestIdempotence:
    """Re-parsing a normalized board yields the same board."""

    @pytest.mark.parametrize("fields", [
        {},
        {"notes": ["a", 1]},
        {"missingByLength": [{"length": 4, "count": 2}, {"length": 4, "count": None}, {"length": 3, "count": 1}]},
        {"wordLists": [{"length": 4, "slots": ["CATS", "FREEZ", None]}, {"length": 3, "slots": ["cat"]}]},
        {"solvedWordsByLength": [{"length": 4, "words": ["DEAR", "dear"]}]},
        {"letters": ["e", "A", "e", "B", "C", "D"], "wordLists": "nope"},
    ])
    def test_renormalize(self, fields):
        """Normalizing the output again changes nothing."""
        first = parse_ok(wordscapes(**fields))
        second = parse_ok(json.dumps(first.to_payload()))
        assert second == first
        assert second.to_payload() == first.to_payload()


class TestImmutability:
    """Boards cannot be modified after construction."""

    def test_frozen(self):
        """Assigning to a field raises."""
        board = parse_ok(wordscapes())
        with pytest.raises(Exception):
            board.letters = ["Z"]

    def test_payload_lists_are_copies(self):
        """Changing a serialized payload leaves the board untouched."""
        board = parse_ok(wordscapes())
        payload = board.to_payload()
        payload["letters"].append("Z")
        payload["missingByLength"].clear()
        assert board.letters == ["A", "B", "C", "D", "E"]
        assert board.missing_by_length == [MissingCount(length=3, count=2)]
