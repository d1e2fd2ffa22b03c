import logging
from flask import Blueprint, request, jsonify, make_response, g
from models.users import User, ROLES
from models import db
from utils.tokens import get_jwt_token
from utils.utils import login_required

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth_bp', __name__)


# Login
@auth_bp.route('/login', methods=['POST'])
def login():
    data = request.get_json(silent=True) or {}
    username = data.get("username_or_email")
    password = data.get("password")

    if not username or not password:
        return jsonify({"error": "Username/email and password are required"}), 400

    user = User.query.filter(
        (User.username == username) | (User.email == username)
    ).first()

    if not user or not user.check_password(password):
        return jsonify({"error": "Invalid credentials"}), 401

    token = get_jwt_token({
        "uid": user.uid,
        "email": user.email,
        "name": user.name,
        "role": user.role
    })

    response = make_response(jsonify({
        "message": "Login successful",
        "token": token,
        "user": user.to_dict()
    }))

    response.set_cookie(
        "access_token", token,
        httponly=True,
        secure=True,
        samesite="None",
        path="/",
        max_age=86400
    )

    return response

# Logout
@auth_bp.route('/logout', methods=['POST'])
def logout():
    response = make_response(jsonify({"message": "Logout successful"}))

    response.set_cookie(
        "access_token", "",
        httponly=True,
        secure=True,
        samesite="None",
        path="/",
        max_age=0
    )

    return response

# Register
@auth_bp.route('/register', methods=['POST'])
def register():
    data = request.get_json(silent=True) or {}

    username = data.get('username')
    email = data.get('email')
    password = data.get('password')
    name = data.get('name')
    role = data.get('role', 'student')

    if not username or not email or not password or not name:
        return jsonify({"error": "All fields are required"}), 400

    if role not in ROLES:
        return jsonify({"error": "Role must be 'teacher' or 'student'"}), 400

    existing_user = User.query.filter(
        (User.username == username) | (User.email == email)
    ).first()

    if existing_user:
        return jsonify({"error": "User already exists"}), 409

    new_user = User(
        username=username,
        email=email,
        name=name,
        role=role
    )
    new_user.set_password(password)

    db.session.add(new_user)
    db.session.commit()
    logger.info("Registered %s user %s", role, new_user.uid)

    return jsonify({"message": "User registered successfully!", "user": new_user.to_dict()}), 201

# Auth Check
@auth_bp.route('/check-auth', methods=['GET'])
@login_required
def check_auth():
    return jsonify({
        "message": "Authenticated",
        "user": {
            "uid": g.user.get("uid"),
            "role": g.user.get("role"),
            "email": g.user.get("email"),
            "name": g.user.get("name")
        }
    }), 200
