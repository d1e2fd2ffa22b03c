import logging
from flask import Blueprint, jsonify, g, request, current_app

from models import db
from models.quizzes import Quiz, DEFAULT_TIMER
from classes.validators import validate_quiz_payload
from utils.utils import login_required, role_required

logger = logging.getLogger(__name__)

# Quizzes blueprint
quiz_bp = Blueprint("quizzes", __name__)


def _owned_quiz(quiz_id):
    return Quiz.query.filter_by(quiz_id=quiz_id, created_by=g.user.get("uid")).first()


def _apply_payload(quiz, data, release_date):
    """Full-field replace, questions included."""
    quiz.title = data.get("title")
    quiz.description = data.get("description")
    quiz.category = data.get("category") or "General"
    quiz.difficulty = data.get("difficulty") or "Medium"
    quiz.timer = data.get("timer") or DEFAULT_TIMER
    quiz.timer_per_question = bool(data.get("timerPerQuestion", False))
    quiz.exam_mode = bool(data.get("examMode", False))
    quiz.result_release_mode = data.get("resultReleaseMode") or "immediate"
    quiz.result_release_date = release_date
    quiz.scoring_mode = data.get("scoringMode") or current_app.config["DEFAULT_SCORING_MODE"]
    quiz.questions = list(data.get("questions", []))


#Fetch published quizzes (any signed-in user)
# --------------------------------------------------------------------------------
@quiz_bp.route("", methods=["GET"])
@login_required
def get_published_quizzes():
    quizzes = Quiz.query.filter_by(published=True).order_by(Quiz.created_at.desc()).all()
    return jsonify([quiz.to_student_list_dict() for quiz in quizzes]), 200


#Fetch the teacher's own quizzes
# --------------------------------------------------------------------------------
@quiz_bp.route("/my-quizzes", methods=["GET"])
@login_required
@role_required("teacher")
def get_my_quizzes():
    quizzes = (
        Quiz.query.filter_by(created_by=g.user.get("uid"))
        .order_by(Quiz.created_at.desc())
        .all()
    )
    return jsonify([quiz.to_dict() for quiz in quizzes]), 200


#Fetch one single quiz
# --------------------------------------------------------------------------------
@quiz_bp.route("/<quiz_id>", methods=["GET"])
@login_required
def get_quiz(quiz_id):
    quiz = Quiz.query.filter_by(quiz_id=quiz_id).first()
    if not quiz:
        return jsonify({"error": "Quiz not found"}), 404

    is_owner = quiz.created_by == g.user.get("uid")

    # Drafts are only visible to their creator
    if not quiz.published and not is_owner:
        return jsonify({"error": "Access denied"}), 403

    if is_owner:
        return jsonify(quiz.to_dict()), 200
    return jsonify(quiz.to_student_play_dict()), 200


#CREATE a New Quiz
# --------------------------------------------------------------------------------
@quiz_bp.route("", methods=["POST"])
@login_required
@role_required("teacher")
def create_quiz():
    data = request.get_json(silent=True) or {}

    try:
        release_date = validate_quiz_payload(data)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    new_quiz = Quiz(created_by=g.user.get("uid"), published=False)
    _apply_payload(new_quiz, data, release_date)

    db.session.add(new_quiz)
    db.session.commit()
    logger.info("Quiz %s created by %s", new_quiz.quiz_id, new_quiz.created_by)

    return jsonify(new_quiz.to_dict()), 201


# EDIT a Quiz
# --------------------------------------------------------------------------------
@quiz_bp.route("/<quiz_id>", methods=["PUT"])
@login_required
@role_required("teacher")
def edit_quiz(quiz_id):
    quiz = _owned_quiz(quiz_id)
    if not quiz:
        return jsonify({"error": "Quiz not found or access denied"}), 404

    data = request.get_json(silent=True) or {}

    try:
        release_date = validate_quiz_payload(data)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    _apply_payload(quiz, data, release_date)
    quiz.published = bool(data.get("published", quiz.published))

    db.session.commit()

    return jsonify(quiz.to_dict()), 200


# DELETE a Quiz
# --------------------------------------------------------------------------------
@quiz_bp.route("/<quiz_id>", methods=["DELETE"])
@login_required
@role_required("teacher")
def delete_quiz(quiz_id):
    quiz = _owned_quiz(quiz_id)
    if not quiz:
        return jsonify({"error": "Quiz not found or access denied"}), 404

    db.session.delete(quiz)
    db.session.commit()

    return jsonify({"message": "Quiz deleted successfully"}), 200


# Publish / unpublish
# --------------------------------------------------------------------------------
@quiz_bp.route("/<quiz_id>/publish", methods=["PATCH"])
@login_required
@role_required("teacher")
def publish_quiz(quiz_id):
    quiz = _owned_quiz(quiz_id)
    if not quiz:
        return jsonify({"error": "Quiz not found or access denied"}), 404

    data = request.get_json(silent=True) or {}
    quiz.published = bool(data.get("published"))
    db.session.commit()

    state = "published" if quiz.published else "unpublished"
    logger.info("Quiz %s %s", quiz.quiz_id, state)
    return jsonify({"message": f"Quiz {state} successfully"}), 200
