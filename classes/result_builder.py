import uuid
from datetime import datetime

from models.quiz_results import QuizResult
from classes.result_serializer import review_questions


class ResultRecordBuilder:
    """Packages a marking result and submission metadata into a QuizResult row."""

    def __init__(self, snapshot_questions=True, clock=datetime.utcnow):
        self.snapshot_questions = snapshot_questions
        self.clock = clock

    def build(self, quiz, student_id, submission, marking):
        # Question count is frozen here; later quiz edits never rescore the result
        total_questions = len(quiz.questions or [])

        return QuizResult(
            result_id=str(uuid.uuid4()),
            quiz_id=quiz.quiz_id,
            student_id=student_id,
            quiz_title=quiz.title,
            scoring_mode=marking.scoring_mode,
            score=marking.score,
            base_score=marking.base_score,
            accuracy=marking.accuracy,
            hints_used=submission.hints_used,
            points_deducted_for_hints=marking.points_deducted_for_hints,
            correct_answers=marking.correct_answers,
            attempted_answers=marking.attempted_answers,
            incorrect_answers=marking.incorrect_answers,
            total_questions=total_questions,
            total_marks=marking.total_marks,
            base_marks=marking.base_marks,
            obtained_marks=marking.obtained_marks,
            answers=list(submission.answers[:total_questions]),
            question_snapshot=review_questions(quiz.questions) if self.snapshot_questions else None,
            auto_submitted=submission.auto_submitted,
            auto_submit_reason=submission.auto_submit_reason,
            tab_switch_count=submission.tab_switch_count,
            time_taken=submission.time_taken,
            timestamp=self.clock(),
        )
