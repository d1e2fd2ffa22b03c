import uuid
from models import db
from datetime import datetime


class QuizResult(db.Model):
    """One scored submission. Rows are written once and never updated."""
    __tablename__ = "quiz_results"

    id = db.Column(db.Integer, primary_key=True)
    result_id = db.Column(db.String(36), nullable=False, unique=True, default=lambda: str(uuid.uuid4()))
    quiz_id = db.Column(db.String(36), nullable=False, index=True)
    student_id = db.Column(db.String(36), nullable=False, index=True)
    quiz_title = db.Column(db.String(255), nullable=True)
    scoring_mode = db.Column(db.String(20), nullable=True)

    score = db.Column(db.Integer, nullable=False)
    base_score = db.Column(db.Integer, nullable=True)
    accuracy = db.Column(db.Integer, nullable=True)
    hints_used = db.Column(db.Integer, nullable=False, default=0)
    points_deducted_for_hints = db.Column(db.Integer, nullable=False, default=0)

    correct_answers = db.Column(db.Integer, nullable=False)
    attempted_answers = db.Column(db.Integer, nullable=True)
    incorrect_answers = db.Column(db.Integer, nullable=True)
    total_questions = db.Column(db.Integer, nullable=False)

    # Null on rows scored with the simple scheme or written before marks existed
    total_marks = db.Column(db.Integer, nullable=True)
    base_marks = db.Column(db.Integer, nullable=True)
    obtained_marks = db.Column(db.Integer, nullable=True)

    answers = db.Column(db.JSON, nullable=False, default=list)
    question_snapshot = db.Column(db.JSON, nullable=True)

    auto_submitted = db.Column(db.Boolean, nullable=False, default=False)
    auto_submit_reason = db.Column(db.String(255), nullable=True)
    tab_switch_count = db.Column(db.Integer, nullable=False, default=0)
    time_taken = db.Column(db.Float, nullable=True)
    timestamp = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<QuizResult {self.result_id} quiz={self.quiz_id} score={self.score}>"

    def to_dict(self):
        """Stored record using the wire field names. Absent fields stay None."""
        return {
            "resultId": self.result_id,
            "quizId": self.quiz_id,
            "studentId": self.student_id,
            "quizTitle": self.quiz_title,
            "scoringMode": self.scoring_mode,
            "score": self.score,
            "baseScore": self.base_score,
            "accuracy": self.accuracy,
            "hintsUsed": self.hints_used,
            "pointsDeductedForHints": self.points_deducted_for_hints,
            "correctAnswers": self.correct_answers,
            "attemptedAnswers": self.attempted_answers,
            "incorrectAnswers": self.incorrect_answers,
            "totalQuestions": self.total_questions,
            "totalMarks": self.total_marks,
            "baseMarks": self.base_marks,
            "obtainedMarks": self.obtained_marks,
            "answers": self.answers,
            "questionSnapshot": self.question_snapshot,
            "autoSubmitted": self.auto_submitted,
            "autoSubmitReason": self.auto_submit_reason,
            "tabSwitchCount": self.tab_switch_count,
            "timeTaken": self.time_taken,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
        }
