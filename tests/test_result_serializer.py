"""Unit tests for the result view, including legacy records"""
import copy
from datetime import datetime
from types import SimpleNamespace

from classes.marking_engine import MarkingScheme
from classes.result_serializer import derive_marks_summary, review_questions, serialize_result


def test_legacy_record_gets_marks_derived():
    legacy = {"score": 80, "correctAnswers": 4, "totalQuestions": 5, "hintsUsed": 0}

    view = serialize_result(legacy)

    assert view["totalMarks"] == 20
    assert view["baseMarks"] == 16
    assert view["obtainedMarks"] == 16
    assert view["accuracy"] == 80
    assert view["score"] == 80
    assert view["baseScore"] == 80
    assert view["attemptedAnswers"] == 4
    assert view["incorrectAnswers"] == 0


def test_simple_scheme_record_keeps_its_stored_score():
    record = {
        "scoringMode": "simple",
        "score": 78,
        "baseScore": 80,
        "correctAnswers": 3,
        "totalQuestions": 5,
        "hintsUsed": 1,
        "pointsDeductedForHints": 2,
        "answers": [0, 1, 0, None, 0],
    }

    view = serialize_result(record)

    assert view["score"] == 78
    assert view["baseScore"] == 80
    assert view["attemptedAnswers"] == 4
    assert view["incorrectAnswers"] == 1
    assert view["baseMarks"] == 9
    assert view["obtainedMarks"] == 7
    assert view["accuracy"] == 35
    assert view["scoringMode"] == "simple"


def test_stored_values_win_over_derivation():
    record = {
        "score": 10, "correctAnswers": 1, "totalQuestions": 5, "hintsUsed": 0,
        "totalMarks": 40, "baseMarks": 4, "obtainedMarks": 4, "accuracy": 10,
        "attemptedAnswers": 1, "incorrectAnswers": 0,
    }
    summary = derive_marks_summary(record)
    assert summary["totalMarks"] == 40
    assert summary["accuracy"] == 10


def test_hints_are_deducted_when_deriving():
    record = {"correctAnswers": 3, "totalQuestions": 5, "hintsUsed": 1, "answers": [0, 1, 0, None, 0]}
    summary = derive_marks_summary(record)
    assert summary["pointsDeductedForHints"] == 2
    assert summary["obtainedMarks"] == 7
    assert summary["score"] == 35
    assert summary["baseScore"] == 45


def test_empty_record_never_raises():
    view = serialize_result({})
    assert view["quizTitle"] == "Untitled Quiz"
    assert view["score"] == 0
    assert view["totalMarks"] == 0
    assert view["answers"] == []
    assert view["autoSubmitted"] is False
    assert view["autoSubmitReason"] is None
    assert view["tabSwitchCount"] == 0
    assert view["timeTaken"] is None
    assert view["scoringMode"] == "negative-marking"
    assert "studentName" not in view
    assert "reviewQuestions" not in view


def test_serializing_does_not_touch_the_record():
    record = {"score": 80, "correctAnswers": 4, "totalQuestions": 5, "answers": [0, 1]}
    before = copy.deepcopy(record)
    serialize_result(record, include_review_questions=True)
    assert record == before


def test_quiz_title_fallback_order():
    record = {"quizTitle": "Stored title"}
    assert serialize_result(record, SimpleNamespace(title="Live title"))["quizTitle"] == "Live title"
    assert serialize_result(record, SimpleNamespace(title=""))["quizTitle"] == "Stored title"
    assert serialize_result({}, None)["quizTitle"] == "Untitled Quiz"


def test_review_questions_prefer_snapshot(sample_questions):
    snapshot = review_questions(sample_questions)
    live = copy.deepcopy(sample_questions)
    live[0]["questionText"] = "Edited after the attempt"

    view = serialize_result(
        {"questionSnapshot": snapshot},
        SimpleNamespace(title="Quiz", questions=live),
        include_review_questions=True,
    )

    assert view["reviewQuestions"][0]["questionText"] == "Which organelle produces ATP?"


def test_review_questions_fall_back_to_live_quiz(sample_questions):
    view = serialize_result(
        {"questionSnapshot": None},
        SimpleNamespace(title="Quiz", questions=sample_questions),
        include_review_questions=True,
    )
    assert len(view["reviewQuestions"]) == 5
    assert view["reviewQuestions"][1]["correctAnswer"] == 1


def test_review_questions_defaults():
    [review] = review_questions([{"questionText": "Q", "options": ["a"], "correctAnswer": "0"}])
    assert review == {
        "questionText": "Q",
        "options": ["a"],
        "correctAnswer": None,
        "explanation": "",
        "imageUrl": "",
        "hint": "",
        "concept": "",
        "points": 1,
    }


def test_student_details_only_when_known():
    student = SimpleNamespace(name="Ada", email="ada@example.com")
    view = serialize_result({"studentId": "s-1"}, student=student)
    assert view["studentName"] == "Ada"
    assert view["studentEmail"] == "ada@example.com"


def test_marking_scheme_echoes_constants_in_force():
    view = serialize_result({}, scheme=MarkingScheme(correct=5, incorrect=-1, hint_deduction=1))
    assert view["markingScheme"] == {"correct": 5, "incorrect": -1, "hintDeduction": 1}


def test_datetime_timestamp_is_iso_formatted():
    view = serialize_result({"timestamp": datetime(2024, 3, 1, 9, 30)})
    assert view["timestamp"] == "2024-03-01T09:30:00"


def test_view_counts_agree_with_derived_marks():
    record = {"correctAnswers": "3", "totalQuestions": 5, "hintsUsed": -2, "answers": [0, 1, 0]}

    view = serialize_result(record)

    assert view["hintsUsed"] == 0
    assert view["pointsDeductedForHints"] == 0
    assert view["correctAnswers"] == 0
    assert view["totalQuestions"] == 5
    assert view["obtainedMarks"] == view["baseMarks"]
