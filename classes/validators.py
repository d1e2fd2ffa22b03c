from classes.marking_engine import SCORING_MODES, is_index
from models.quizzes import RELEASE_MODES, DIFFICULTIES
from utils.helpers import parse_datetime


def validate_string(field_name, value):
    if value is not None and not isinstance(value, str):
        raise ValueError(f"{field_name} must be a string.")


def validate_length(field_name, value, max_length):
    if value is not None and len(value) > max_length:
        raise ValueError(f"{field_name} must be {max_length} characters or fewer.")


def validate_choice(field_name, value, choices):
    if value is not None and value not in choices:
        raise ValueError(f"{field_name} must be one of: {', '.join(choices)}.")


def validate_questions(questions):
    if not isinstance(questions, list):
        raise ValueError("Questions must be a list.")
    for number, question in enumerate(questions, start=1):
        if not isinstance(question, dict):
            raise ValueError(f"Question {number} must be an object.")
        if not question.get("questionText"):
            raise ValueError(f"Question {number} must have 'questionText'.")

        options = question.get("options")
        if not isinstance(options, list) or not all(isinstance(o, str) for o in options):
            raise ValueError(f"Question {number}: 'options' must be a list of strings.")

        correct = question.get("correctAnswer")
        if correct is not None and not (is_index(correct) and 0 <= correct < len(options)):
            raise ValueError(f"Question {number}: 'correctAnswer' must be an index into 'options'.")

        points = question.get("points", 1)
        if not is_index(points) or points <= 0:
            raise ValueError(f"Question {number}: 'points' must be a positive integer.")


def validate_timer(timer):
    """Minutes; None falls back to the default."""
    if timer is not None and not (is_index(timer) and timer > 0):
        raise ValueError("timer must be a positive whole number of minutes.")


def validate_release_settings(mode, release_date):
    """Returns the parsed release date, None unless the mode is specificDate."""
    validate_choice("resultReleaseMode", mode, RELEASE_MODES)
    if mode != "specificDate":
        return None
    if not release_date:
        raise ValueError("resultReleaseDate is required when resultReleaseMode is 'specificDate'.")
    parsed = parse_datetime(release_date)
    if parsed is None:
        raise ValueError("resultReleaseDate must be an ISO-8601 date.")
    return parsed


def validate_quiz_payload(data):
    title = data.get("title")
    validate_string("title", title)
    if not title:
        raise ValueError("Title is required")
    validate_length("title", title, 255)
    validate_string("description", data.get("description"))
    validate_string("category", data.get("category"))
    validate_length("category", data.get("category"), 100)
    validate_timer(data.get("timer"))
    validate_choice("difficulty", data.get("difficulty"), DIFFICULTIES)
    validate_choice("scoringMode", data.get("scoringMode"), SCORING_MODES)
    validate_questions(data.get("questions", []))
    return validate_release_settings(data.get("resultReleaseMode") or "immediate", data.get("resultReleaseDate"))
