import logging

from models.quizzes import Quiz
from models.quiz_results import QuizResult
from models.users import User
from classes.errors import StorageError

logger = logging.getLogger(__name__)


class QuizStore:
    """Storage collaborator for the scoring core, bound to one SQLAlchemy session."""

    def __init__(self, session):
        self.session = session

    def find_quiz_by_id(self, quiz_id):
        return self.session.query(Quiz).filter_by(quiz_id=quiz_id).first()

    def find_quizzes_by_ids(self, quiz_ids):
        if not quiz_ids:
            return {}
        quizzes = self.session.query(Quiz).filter(Quiz.quiz_id.in_(list(quiz_ids))).all()
        return {q.quiz_id: q for q in quizzes}

    def find_users_by_uids(self, uids):
        if not uids:
            return {}
        users = self.session.query(User).filter(User.uid.in_(list(uids))).all()
        return {u.uid: u for u in users}

    def save_result(self, result):
        """Single write. Rolls back and raises StorageError on any failure, no retry."""
        try:
            self.session.add(result)
            self.session.commit()
        except Exception as e:
            # DBAPI errors such as OverflowError are not wrapped as SQLAlchemyError
            self.session.rollback()
            logger.exception("Failed to save result %s: %s", result.result_id, e)
            raise StorageError() from e
        return result

    def find_result_by_id(self, result_id):
        return self.session.query(QuizResult).filter_by(result_id=result_id).first()

    def results_for_student(self, student_id):
        return (
            self.session.query(QuizResult)
            .filter_by(student_id=student_id)
            .order_by(QuizResult.timestamp.desc())
            .all()
        )

    def results_for_quiz(self, quiz_id):
        return (
            self.session.query(QuizResult)
            .filter_by(quiz_id=quiz_id)
            .order_by(QuizResult.timestamp.desc())
            .all()
        )
