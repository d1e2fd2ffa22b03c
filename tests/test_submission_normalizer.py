"""Unit tests for turning raw client fields into a safe submission"""
import json
import math

from classes.submission_normalizer import (
    DEFAULT_SUBMIT_REASON,
    MAX_COUNT,
    finite_number,
    normalize_answers,
    normalize_count,
    normalize_submission,
    normalize_time_taken,
)


class TestAnswers:

    def test_non_list_answers_become_empty(self):
        assert normalize_answers(None) == []
        assert normalize_answers("0,1,2") == []
        assert normalize_answers({"0": 1}) == []

    def test_entries_are_integer_or_none(self):
        raw = [1, None, "2", True, 2.0, 1.5, math.nan, -1, [0]]
        assert normalize_answers(raw) == [1, None, None, None, 2, None, None, -1, None]

    def test_length_is_kept_as_sent(self):
        # Truncation to the quiz length happens when the record is built
        assert len(normalize_answers(list(range(12)))) == 12
        assert normalize_answers([0]) == [0]


class TestCounts:

    def test_invalid_counts_fall_back_to_zero(self):
        for raw in (None, -3, "5", math.inf, -math.inf, math.nan, True, [2]):
            assert normalize_count(raw) == 0

    def test_valid_counts_are_whole_numbers(self):
        assert normalize_count(3) == 3
        assert normalize_count(2.7) == 2
        assert normalize_count(0) == 0


class TestTimeTaken:

    def test_unknown_time_is_none_not_zero(self):
        assert normalize_time_taken(None) is None
        assert normalize_time_taken("90") is None
        assert normalize_time_taken(-5) is None
        assert normalize_time_taken(math.inf) is None

    def test_valid_time_is_kept(self):
        assert normalize_time_taken(0) == 0
        assert normalize_time_taken(42.5) == 42.5


class TestAutoSubmit:

    def test_missing_reason_is_a_normal_submit(self):
        for raw in (None, "", DEFAULT_SUBMIT_REASON):
            submission = normalize_submission([], raw_auto_submit_reason=raw)
            assert submission.auto_submitted is False
            assert submission.auto_submit_reason == "Quiz submitted"

    def test_any_other_reason_marks_auto_submit(self):
        submission = normalize_submission([], raw_auto_submit_reason="Tab switching limit exceeded")
        assert submission.auto_submitted is True
        assert submission.auto_submit_reason == "Tab switching limit exceeded"


def test_normalize_submission_never_raises_on_garbage():
    submission = normalize_submission(
        raw_answers=object(),
        raw_hints={"a": 1},
        raw_auto_submit_reason=0,
        raw_time_taken="soon",
        raw_tab_switch_count=-2,
    )
    assert submission.answers == []
    assert submission.hints_used == 0
    assert submission.tab_switch_count == 0
    assert submission.time_taken is None
    assert submission.auto_submitted is False


def test_integers_too_large_for_a_float_are_unusable():
    big = json.loads("1" + "0" * 400)
    assert finite_number(big) is None

    submission = normalize_submission(
        [big, 1],
        raw_hints=big,
        raw_time_taken=big,
        raw_tab_switch_count=big,
    )
    assert submission.answers == [None, 1]
    assert submission.hints_used == 0
    assert submission.tab_switch_count == 0
    assert submission.time_taken is None


def test_counts_are_capped():
    assert normalize_count(10 ** 20) == MAX_COUNT
    assert normalize_submission([0], raw_hints=10 ** 20).hints_used == MAX_COUNT
