"""Pytest configuration and shared fixtures"""
import copy
import pytest
from typing import Any, Dict, List

from app import create_app
from models import db
from models.users import User
from models.quizzes import Quiz
from utils.tokens import get_jwt_token

# correctAnswer per question: 0, 1, 2, 3, 0
SAMPLE_QUESTIONS: List[Dict[str, Any]] = [
    {
        "questionText": "Which organelle produces ATP?",
        "options": ["Mitochondria", "Ribosome", "Golgi body", "Nucleus"],
        "correctAnswer": 0,
        "points": 1,
        "explanation": "Mitochondria run cellular respiration.",
        "hint": "Powerhouse of the cell",
        "concept": "Cell biology",
    },
    {
        "questionText": "What is 6 x 7?",
        "options": ["36", "42", "48", "56"],
        "correctAnswer": 1,
        "points": 1,
    },
    {
        "questionText": "Which planet is closest to the sun?",
        "options": ["Venus", "Earth", "Mercury", "Mars"],
        "correctAnswer": 2,
        "points": 1,
    },
    {
        "questionText": "H2O is the formula of?",
        "options": ["Salt", "Hydrogen", "Oxygen", "Water"],
        "correctAnswer": 3,
        "points": 1,
    },
    {
        "questionText": "Which language runs this backend?",
        "options": ["Python", "Ruby", "Go", "Rust"],
        "correctAnswer": 0,
        "points": 1,
    },
]


@pytest.fixture
def sample_questions() -> List[Dict[str, Any]]:
    return copy.deepcopy(SAMPLE_QUESTIONS)


@pytest.fixture
def app():
    app = create_app("testing")
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    def _make(role="student", username="student1"):
        user = User(
            username=username,
            email=f"{username}@example.com",
            name=username.capitalize(),
            role=role,
        )
        user.set_password("secret123")
        db.session.add(user)
        db.session.commit()
        return user
    return _make


@pytest.fixture
def teacher(make_user):
    return make_user("teacher", "teacher1")


@pytest.fixture
def student(make_user):
    return make_user("student", "student1")


@pytest.fixture
def auth_headers(app):
    def _headers(user):
        token = get_jwt_token({
            "uid": user.uid,
            "email": user.email,
            "name": user.name,
            "role": user.role,
        })
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def make_quiz(app, sample_questions):
    def _make(owner, published=True, questions=None, scoring_mode="negative-marking", **fields):
        quiz = Quiz(
            title=fields.pop("title", "General Science"),
            created_by=owner.uid,
            published=published,
            questions=sample_questions if questions is None else questions,
            scoring_mode=scoring_mode,
            **fields,
        )
        db.session.add(quiz)
        db.session.commit()
        return quiz
    return _make


@pytest.fixture
def published_quiz(make_quiz, teacher):
    return make_quiz(teacher)


@pytest.fixture
def mixed_answers() -> List[Any]:
    """Three right, one wrong, one skipped against the sample questions."""
    return [0, 1, 0, None, 0]
