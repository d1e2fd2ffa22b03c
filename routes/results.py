import logging
from flask import Blueprint, jsonify, g, request, current_app

from models import db
from classes.errors import ScoringError
from classes.marking_engine import MarkingEngine
from classes.quiz_store import QuizStore
from utils.scoring_service import ScoringService
from utils.utils import login_required, role_required

logger = logging.getLogger(__name__)

# Results blueprint
result_bp = Blueprint("results", __name__)


def get_scoring_service():
    return ScoringService(QuizStore(db.session), engine=MarkingEngine.from_config(current_app.config))


def _error_response(error):
    # Storage faults are already logged with a traceback by the store
    if error.status_code < 500:
        logger.info("Rejected %s %s: %s", request.method, request.path, error.message)
    return jsonify({"error": error.message}), error.status_code


# Submit a quiz attempt
# --------------------------------------------------------------------------------
@result_bp.route("", methods=["POST"])
@login_required
@role_required("student")
def submit_result():
    data = request.get_json(silent=True) or {}
    quiz_id = data.get("quizId")
    answers = data.get("answers")

    if not quiz_id or not isinstance(answers, list):
        return jsonify({"error": "quizId and answers are required"}), 400

    try:
        scored = get_scoring_service().score_submission(
            quiz_id,
            g.user.get("uid"),
            answers,
            raw_hints=data.get("hintsUsed"),
            raw_auto_submit_reason=data.get("autoSubmitReason"),
            raw_time_taken=data.get("timeTaken"),
            raw_tab_switch_count=data.get("tabSwitchCount"),
        )
    except ScoringError as e:
        return _error_response(e)

    return jsonify({**scored["result"], **scored["quizMeta"]}), 201


# Get the student's own results
# --------------------------------------------------------------------------------
@result_bp.route("/my-results", methods=["GET"])
@login_required
@role_required("student")
def get_my_results():
    return jsonify(get_scoring_service().results_for_student(g.user.get("uid"))), 200


# Get all results of one quiz (owning teacher)
# --------------------------------------------------------------------------------
@result_bp.route("/quiz/<quiz_id>", methods=["GET"])
@login_required
@role_required("teacher")
def get_quiz_results(quiz_id):
    try:
        results = get_scoring_service().results_for_quiz(quiz_id, g.user.get("uid"))
    except ScoringError as e:
        return _error_response(e)
    return jsonify(results), 200


# Get a specific result
# --------------------------------------------------------------------------------
@result_bp.route("/<result_id>", methods=["GET"])
@login_required
def get_result(result_id):
    try:
        view = get_scoring_service().get_result_view(
            result_id, g.user.get("uid"), g.user.get("role")
        )
    except ScoringError as e:
        return _error_response(e)
    return jsonify(view), 200
