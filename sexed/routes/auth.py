from flask import Blueprint, current_app, jsonify
from sqlalchemy.exc import IntegrityError
from werkzeug.security import check_password_hash, generate_password_hash

from sexed.extensions import db
from sexed.models.student import Student
from sexed.models.user import User, normalize_user_type
from sexed.utils.auth_utils import create_token, token_required
from sexed.utils.errors import AuthenticationError, ValidationError
from sexed.utils.payload import json_body, require_fields, require_strings

auth_bp = Blueprint("auth", __name__)


# ================= SIGNUP =================
@auth_bp.route("/signup", methods=["POST"])
def signup():
    """
    Student self-registration.

    Healthcare professionals are provisioned by staff (see create_staff.py)
    and cannot sign up here. The registration number must be one the
    university issued and not already claimed by another account.
    """
    data = json_body()
    require_strings(data, "regNumber", "username", "password", "userType")

    reg_number = (data.get("regNumber") or "").strip()
    username = (data.get("username") or "").strip()
    password = data.get("password")
    user_type = data.get("userType", "student")

    current_app.logger.info("🔐 Signup attempt: username=%s reg=%s", username, reg_number)

    if normalize_user_type(user_type) != "student":
        raise ValidationError(
            "Only students can sign up. Healthcare professionals should login "
            "with their assigned credentials."
        )

    require_fields(
        {"regNumber": reg_number, "username": username, "password": password},
        "regNumber", "username", "password"
    )

    student = Student.query.filter_by(registration_number=reg_number).first()
    if not student:
        raise ValidationError(
            "Registration number not found. Please contact administration if "
            "you believe this is an error."
        )

    if User.query.filter_by(username=username).first():
        raise ValidationError("Username already exists. Please choose a different username.")

    if User.query.filter_by(registration_number=reg_number).first():
        raise ValidationError("This registration number is already registered. Please login instead.")

    user = User(
        username=username,
        password_hash=generate_password_hash(password),
        user_type="student",
        registration_number=reg_number,
        full_name=student.name or username,
    )

    try:
        db.session.add(user)
        db.session.commit()
    except IntegrityError:
        # Lost a race against a concurrent signup for the same name or number
        db.session.rollback()
        raise ValidationError("Username or registration number already registered.")

    current_app.logger.info("✅ User created: %s", user.username)

    return jsonify({
        "success": True,
        "token": create_token(user),
        "user": user.to_dict(),
    }), 201


# ================= LOGIN =================
@auth_bp.route("/login", methods=["POST"])
def login():
    data = json_body()
    require_strings(data, "username", "password")

    username = (data.get("username") or "").strip()
    password = data.get("password")

    if not username or not password:
        raise ValidationError("Username and password are required")

    current_app.logger.info("🔐 Login attempt for username: %s", username)

    user = User.query.filter_by(username=username).first()
    if not user or not check_password_hash(user.password_hash, password):
        raise AuthenticationError("Invalid username or password")

    current_app.logger.info(
        "✅ Login successful: %s (stored type %r -> %s)",
        user.username, user.user_type, user.role
    )

    return jsonify({
        "success": True,
        "token": create_token(user),
        "user": user.to_dict(),
    }), 200


# ================= PROFILE =================
@auth_bp.route("/profile", methods=["GET"])
@token_required
def profile(current_user):
    return jsonify({
        "success": True,
        "user": current_user.to_dict(),
    })
