from datetime import datetime

from classes.marking_engine import MarkingScheme, NEGATIVE_MARKING, clamp_percentage, is_index
from classes.submission_normalizer import finite_number

UNTITLED_QUIZ = "Untitled Quiz"


def review_questions(questions):
    """Sanitized per-question form shown to a student after an attempt."""
    return [
        {
            "questionText": q.get("questionText") or "",
            "options": q.get("options") or [],
            "correctAnswer": q.get("correctAnswer") if is_index(q.get("correctAnswer")) else None,
            "explanation": q.get("explanation") or "",
            "imageUrl": q.get("imageUrl") or "",
            "hint": q.get("hint") or "",
            "concept": q.get("concept") or "",
            "points": q.get("points") or 1,
        }
        for q in (questions or [])
    ]


def _non_negative(value):
    number = finite_number(value)
    return max(0, number) if number is not None else 0


def derive_marks_summary(record, scheme=None):
    """
    Fill in mark fields missing from a stored record.

    Values present on the record win. Missing ones are derived from
    correctAnswers, totalQuestions, hintsUsed and answers using the
    negative-marking formulas. The input counts are returned sanitized, so the
    view never mixes raw and cleaned numbers. Used only for display; the record
    is not touched.
    """
    scheme = scheme or MarkingScheme()
    total_questions = _non_negative(record.get("totalQuestions"))
    correct = _non_negative(record.get("correctAnswers"))
    hints_used = _non_negative(record.get("hintsUsed"))

    answers = record.get("answers")
    answered = sum(1 for a in answers if is_index(a)) if isinstance(answers, list) else 0

    attempted = finite_number(record.get("attemptedAnswers"))
    attempted = max(0, attempted) if attempted is not None else max(answered, correct)

    incorrect = finite_number(record.get("incorrectAnswers"))
    incorrect = max(0, incorrect) if incorrect is not None else max(0, attempted - correct)

    total_marks = finite_number(record.get("totalMarks"))
    total_marks = max(0, total_marks) if total_marks is not None else total_questions * scheme.correct

    base_marks = finite_number(record.get("baseMarks"))
    if base_marks is None:
        base_marks = correct * scheme.correct + incorrect * scheme.incorrect

    obtained_marks = finite_number(record.get("obtainedMarks"))
    if obtained_marks is None:
        obtained_marks = base_marks - hints_used * scheme.hint_deduction

    accuracy = finite_number(record.get("accuracy"))
    if accuracy is None:
        accuracy = clamp_percentage(obtained_marks / total_marks * 100) if total_marks > 0 else 0

    score = finite_number(record.get("score"))
    if score is None:
        score = accuracy

    base_score = finite_number(record.get("baseScore"))
    if base_score is None:
        base_score = clamp_percentage(base_marks / total_marks * 100) if total_marks > 0 else 0

    deducted = finite_number(record.get("pointsDeductedForHints"))
    if deducted is None:
        deducted = hints_used * scheme.hint_deduction

    return {
        "hintsUsed": hints_used,
        "correctAnswers": correct,
        "totalQuestions": total_questions,
        "attemptedAnswers": attempted,
        "incorrectAnswers": incorrect,
        "totalMarks": total_marks,
        "baseMarks": base_marks,
        "obtainedMarks": obtained_marks,
        "accuracy": accuracy,
        "score": score,
        "baseScore": base_score,
        "pointsDeductedForHints": deducted,
    }


def _as_record(result):
    if hasattr(result, "to_dict"):
        return result.to_dict()
    return dict(result or {})


def _timestamp(value):
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def serialize_result(result, quiz=None, student=None, include_review_questions=False, scheme=None):
    """
    Client-facing view of a stored result.

    ``result`` may be a QuizResult row or a plain mapping, including legacy
    documents that lack the derived mark fields. Never raises on missing
    optional fields.
    """
    scheme = scheme or MarkingScheme()
    record = _as_record(result)
    summary = derive_marks_summary(record, scheme)

    view = {
        "resultId": record.get("resultId"),
        "quizId": record.get("quizId"),
        "quizTitle": getattr(quiz, "title", None) or record.get("quizTitle") or UNTITLED_QUIZ,
        "studentId": record.get("studentId"),
        "scoringMode": record.get("scoringMode") or NEGATIVE_MARKING,
        "score": summary["score"],
        "accuracy": summary["accuracy"],
        "baseScore": summary["baseScore"],
        "hintsUsed": summary["hintsUsed"],
        "pointsDeductedForHints": summary["pointsDeductedForHints"],
        "correctAnswers": summary["correctAnswers"],
        "attemptedAnswers": summary["attemptedAnswers"],
        "incorrectAnswers": summary["incorrectAnswers"],
        "totalQuestions": summary["totalQuestions"],
        "totalMarks": summary["totalMarks"],
        "baseMarks": summary["baseMarks"],
        "obtainedMarks": summary["obtainedMarks"],
        "markingScheme": scheme.to_dict(),
        "answers": record.get("answers") or [],
        "timestamp": _timestamp(record.get("timestamp")),
        "autoSubmitted": bool(record.get("autoSubmitted")),
        "autoSubmitReason": record.get("autoSubmitReason") or None,
        "tabSwitchCount": record.get("tabSwitchCount") or 0,
        "timeTaken": record.get("timeTaken"),
    }

    if student is not None:
        view["studentName"] = student.name
        view["studentEmail"] = student.email

    if include_review_questions:
        snapshot = record.get("questionSnapshot")
        if isinstance(snapshot, list):
            view["reviewQuestions"] = snapshot
        else:
            view["reviewQuestions"] = review_questions(getattr(quiz, "questions", None))

    return view
