import math
from dataclasses import dataclass
from typing import Optional

from classes.errors import QuizNotFound, QuizNotPublished


NEGATIVE_MARKING = "negative-marking"
SIMPLE = "simple"
SCORING_MODES = (NEGATIVE_MARKING, SIMPLE)


def round_half_up(value):
    """Round .5 upwards, the way the existing clients round percentages."""
    return int(math.floor(value + 0.5))


def clamp_percentage(value):
    return min(100, max(0, round_half_up(value)))


def is_index(value):
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class MarkingScheme:
    correct: int = 4
    incorrect: int = -3
    hint_deduction: int = 2
    # Percentage points taken off per hint under the simple scheme
    simple_hint_penalty: int = 2

    @classmethod
    def from_config(cls, config):
        return cls(
            correct=config.get("MARKS_PER_CORRECT", cls.correct),
            incorrect=config.get("MARKS_PER_INCORRECT", cls.incorrect),
            hint_deduction=config.get("HINT_DEDUCTION", cls.hint_deduction),
            simple_hint_penalty=config.get("SIMPLE_HINT_PENALTY", cls.simple_hint_penalty),
        )

    def to_dict(self):
        return {
            "correct": self.correct,
            "incorrect": self.incorrect,
            "hintDeduction": self.hint_deduction,
        }


@dataclass(frozen=True)
class MarkingResult:
    scoring_mode: str
    total_questions: int
    correct_answers: int
    attempted_answers: int
    incorrect_answers: int
    hints_used: int
    points_deducted_for_hints: int
    score: int
    base_score: int
    accuracy: Optional[int] = None
    total_marks: Optional[int] = None
    base_marks: Optional[int] = None
    obtained_marks: Optional[int] = None
    total_possible_points: Optional[float] = None
    earned_points: Optional[float] = None


class MarkingEngine:
    """
    Scores a normalized submission against a quiz.

    Two schemes are supported and picked per quiz through ``scoring_mode``:

    - ``negative-marking``: fixed marks per correct and incorrect answer, hints
      deducted in marks, percentages taken against ``total_questions * correct``.
    - ``simple``: percentage of question points earned, hints deducted in
      percentage points.

    The engine is pure. It reads the quiz and the submission and never writes.
    """

    def __init__(self, scheme=None, default_mode=NEGATIVE_MARKING):
        self.scheme = scheme or MarkingScheme()
        self.default_mode = default_mode if default_mode in SCORING_MODES else NEGATIVE_MARKING

    @classmethod
    def from_config(cls, config):
        return cls(
            scheme=MarkingScheme.from_config(config),
            default_mode=config.get("DEFAULT_SCORING_MODE", NEGATIVE_MARKING),
        )

    def resolve_mode(self, quiz):
        mode = getattr(quiz, "scoring_mode", None)
        return mode if mode in SCORING_MODES else self.default_mode

    def compute(self, quiz, submission):
        if quiz is None:
            raise QuizNotFound()
        if not quiz.published:
            raise QuizNotPublished()

        questions = quiz.questions or []
        answers = submission.answers
        correct_answers = 0
        attempted_answers = 0
        total_possible_points = 0
        earned_points = 0

        for index, question in enumerate(questions):
            points = question.get("points") or 1
            # Answers past the end of a short submission count as skipped
            answer = answers[index] if index < len(answers) else None
            expected = question.get("correctAnswer")

            total_possible_points += points
            if is_index(answer):
                attempted_answers += 1
            if is_index(answer) and is_index(expected) and answer == expected:
                correct_answers += 1
                earned_points += points

        counts = {
            "total_questions": len(questions),
            "correct_answers": correct_answers,
            "attempted_answers": attempted_answers,
            "incorrect_answers": max(0, attempted_answers - correct_answers),
            "hints_used": submission.hints_used,
        }

        mode = self.resolve_mode(quiz)
        if mode == SIMPLE:
            return self._score_simple(counts, total_possible_points, earned_points)
        return self._score_negative_marking(counts)

    def _score_simple(self, counts, total_possible_points, earned_points):
        base_score = (
            round_half_up(earned_points / total_possible_points * 100)
            if total_possible_points > 0 else 0
        )
        deducted = counts["hints_used"] * self.scheme.simple_hint_penalty
        return MarkingResult(
            scoring_mode=SIMPLE,
            points_deducted_for_hints=deducted,
            score=max(0, base_score - deducted),
            base_score=base_score,
            total_possible_points=total_possible_points,
            earned_points=earned_points,
            **counts,
        )

    def _score_negative_marking(self, counts):
        total_marks = counts["total_questions"] * self.scheme.correct
        base_marks = (
            counts["correct_answers"] * self.scheme.correct
            + counts["incorrect_answers"] * self.scheme.incorrect
        )
        deducted = counts["hints_used"] * self.scheme.hint_deduction
        obtained_marks = base_marks - deducted

        if total_marks > 0:
            base_score = clamp_percentage(base_marks / total_marks * 100)
            accuracy = clamp_percentage(obtained_marks / total_marks * 100)
        else:
            base_score = accuracy = 0

        return MarkingResult(
            scoring_mode=NEGATIVE_MARKING,
            points_deducted_for_hints=deducted,
            score=accuracy,
            base_score=base_score,
            accuracy=accuracy,
            total_marks=total_marks,
            base_marks=base_marks,
            obtained_marks=obtained_marks,
            **counts,
        )
