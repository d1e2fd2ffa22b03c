import logging

from classes.errors import AccessDenied, QuizNotFound, ResultNotFound
from classes.marking_engine import MarkingEngine
from classes.result_builder import ResultRecordBuilder
from classes.result_serializer import serialize_result
from classes.submission_normalizer import normalize_submission

logger = logging.getLogger(__name__)


class ScoringService:
    """
    Entry points used by the result routes.

    Everything it touches is passed in: the store wraps the request's database
    session, and the engine carries the marking constants from app config.
    """

    def __init__(self, store, engine=None, builder=None):
        self.store = store
        self.engine = engine or MarkingEngine()
        self.builder = builder or ResultRecordBuilder()

    def score_submission(self, quiz_id, student_id, raw_answers, raw_hints=None,
                         raw_auto_submit_reason=None, raw_time_taken=None,
                         raw_tab_switch_count=None):
        """Score, persist and serialize one submission.

        Returns ``{"result": <view>, "quizMeta": {...}}``. Raises QuizNotFound,
        QuizNotPublished or StorageError; nothing is written when it raises
        before the save.
        """
        submission = normalize_submission(
            raw_answers, raw_hints, raw_auto_submit_reason, raw_time_taken, raw_tab_switch_count
        )
        quiz = self.store.find_quiz_by_id(quiz_id)
        marking = self.engine.compute(quiz, submission)

        result = self.builder.build(quiz, student_id, submission, marking)
        self.store.save_result(result)

        logger.info(
            "Stored result %s for quiz %s (student %s, score %s, mode %s)",
            result.result_id, quiz.quiz_id, student_id, result.score, result.scoring_mode,
        )
        return {
            "result": serialize_result(
                result, quiz, include_review_questions=True, scheme=self.engine.scheme
            ),
            "quizMeta": quiz.release_meta(),
        }

    def get_result_view(self, result_id, user_id, role):
        """Single result for the submitting student or the quiz's owning teacher."""
        result = self.store.find_result_by_id(result_id)
        if result is None:
            raise ResultNotFound()

        quiz = self.store.find_quiz_by_id(result.quiz_id)
        is_owner_student = role == "student" and result.student_id == user_id
        is_owner_teacher = role == "teacher" and quiz is not None and quiz.created_by == user_id

        if not (is_owner_student or is_owner_teacher):
            raise AccessDenied()

        return serialize_result(result, quiz, include_review_questions=True, scheme=self.engine.scheme)

    def results_for_student(self, student_id):
        results = self.store.results_for_student(student_id)
        quizzes = self.store.find_quizzes_by_ids({r.quiz_id for r in results})
        return [
            serialize_result(r, quizzes.get(r.quiz_id), scheme=self.engine.scheme)
            for r in results
        ]

    def results_for_quiz(self, quiz_id, teacher_id):
        quiz = self.store.find_quiz_by_id(quiz_id)
        if quiz is None or quiz.created_by != teacher_id:
            raise QuizNotFound("Quiz not found or access denied")

        results = self.store.results_for_quiz(quiz_id)
        students = self.store.find_users_by_uids({r.student_id for r in results})
        return [
            serialize_result(r, quiz, students.get(r.student_id), scheme=self.engine.scheme)
            for r in results
        ]
