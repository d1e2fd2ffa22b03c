import uuid
from models import db
from datetime import datetime
from classes.marking_engine import SCORING_MODES

RELEASE_MODES = ("immediate", "afterAll", "specificDate")
DIFFICULTIES = ("Easy", "Medium", "Hard")
DEFAULT_TIMER = 10


class Quiz(db.Model):
    __tablename__ = "quizzes"

    id = db.Column(db.Integer, primary_key=True)
    quiz_id = db.Column(db.String(36), nullable=False, unique=True, default=lambda: str(uuid.uuid4()))
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    category = db.Column(db.String(100), nullable=False, default="General")
    difficulty = db.Column(db.String(10), nullable=False, default="Medium")
    timer = db.Column(db.Integer, nullable=True, default=DEFAULT_TIMER)
    timer_per_question = db.Column(db.Boolean, nullable=False, default=False)
    exam_mode = db.Column(db.Boolean, nullable=False, default=False)
    result_release_mode = db.Column(db.String(20), nullable=False, default="immediate")
    result_release_date = db.Column(db.DateTime, nullable=True)
    scoring_mode = db.Column(db.String(20), nullable=True)

    # Replaced wholesale on update, never diffed
    questions = db.Column(db.JSON, nullable=False, default=list)

    created_by = db.Column(db.String(36), nullable=False, index=True)
    published = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    @property
    def total_questions(self):
        return len(self.questions or [])

    def __repr__(self):
        return f"<Quiz {self.title}>"

    def release_meta(self):
        return {
            "resultReleaseMode": self.result_release_mode or "immediate",
            "resultReleaseDate": self.result_release_date.isoformat() if self.result_release_date else None,
        }

    def _base_dict(self):
        return {
            "quizId": self.quiz_id,
            "title": self.title,
            "description": self.description or "",
            "category": self.category or "General",
            "difficulty": self.difficulty or "Medium",
            "timer": self.timer if self.timer is not None else DEFAULT_TIMER,
            "timerPerQuestion": bool(self.timer_per_question),
            "published": bool(self.published),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }

    @staticmethod
    def _question_dict(q, include_answer):
        data = {
            "questionText": q.get("questionText"),
            "options": q.get("options") or [],
            "explanation": q.get("explanation") or "",
            "imageUrl": q.get("imageUrl") or "",
            "hint": q.get("hint") or "",
            "concept": q.get("concept") or "",
            "points": q.get("points") or 1,
        }
        if include_answer:
            data["correctAnswer"] = q.get("correctAnswer")
        return data

    def to_dict(self):
        """Full view for the owning teacher, correct answers included."""
        return {
            **self._base_dict(),
            **self.release_meta(),
            "examMode": bool(self.exam_mode),
            "scoringMode": self.scoring_mode or "negative-marking",
            "questions": [self._question_dict(q, True) for q in (self.questions or [])],
            "createdBy": self.created_by,
        }

    def to_student_list_dict(self):
        # Students only see how many questions there are
        return {
            **self._base_dict(),
            "questions": [None] * self.total_questions,
        }

    def to_student_play_dict(self):
        return {
            **self._base_dict(),
            **self.release_meta(),
            "examMode": bool(self.exam_mode),
            "questions": [self._question_dict(q, False) for q in (self.questions or [])],
        }
