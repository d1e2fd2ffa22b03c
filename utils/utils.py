import logging
from functools import wraps
from flask import request, jsonify, g
from utils.tokens import decode_jwt

logger = logging.getLogger(__name__)


def get_request_token():
    """Bearer header first, then the access_token cookie."""
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        return auth_header.split(" ", 1)[1].strip()
    return request.cookies.get("access_token")


def login_required(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        token = get_request_token()
        if not token:
            return jsonify({"error": "Access token required"}), 401

        decoded = decode_jwt(token)
        if not decoded or not decoded.get("uid"):
            return jsonify({"error": "Invalid or expired token"}), 401

        g.user = decoded
        return f(*args, **kwargs)

    return decorated_function


def role_required(*roles):
    """Must be stacked under @login_required."""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            role = g.user.get("role")
            if role not in roles:
                logger.info("Role %s not in allowed roles %s", role, roles)
                return jsonify({"error": "Insufficient permissions"}), 403
            return f(*args, **kwargs)

        return decorated_function

    return decorator
