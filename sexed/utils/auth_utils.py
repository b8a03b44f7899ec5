from datetime import datetime, timezone
from functools import wraps

import jwt
from flask import current_app, jsonify, request

from sexed.extensions import db
from sexed.models.user import User
from sexed.utils.errors import PermissionDenied

ALGORITHM = "HS256"


def create_token(user):
    payload = {
        "user_id": user.id,
        "username": user.username,
        "role": user.role,
        "exp": datetime.now(timezone.utc) + current_app.config["JWT_ACCESS_TOKEN_EXPIRES"],
    }
    return jwt.encode(payload, current_app.config["JWT_SECRET_KEY"], algorithm=ALGORITHM)


def _preflight_response():
    response = jsonify({"status": "ok"})
    response.headers.add("Access-Control-Allow-Origin", request.headers.get("Origin", "*"))
    response.headers.add("Access-Control-Allow-Headers", "Content-Type,Authorization")
    response.headers.add("Access-Control-Allow-Methods", "GET,POST,PUT,DELETE,OPTIONS")
    return response, 200


def _user_from_header(auth_header):
    token = auth_header[7:] if auth_header.startswith("Bearer ") else auth_header
    payload = jwt.decode(
        token,
        current_app.config["JWT_SECRET_KEY"],
        algorithms=[ALGORITHM]
    )
    user_id = payload.get("user_id")
    if not user_id:
        return None
    return db.session.get(User, user_id)


def token_required(f):
    """Resolve the bearer token to a ``User`` and pass it as the first argument."""
    @wraps(f)
    def decorated(*args, **kwargs):
        # CORS preflight never carries credentials
        if request.method == "OPTIONS":
            return _preflight_response()

        auth_header = request.headers.get("Authorization")
        if not auth_header:
            return jsonify({
                "success": False,
                "error": "Token missing"
            }), 401

        try:
            current_user = _user_from_header(auth_header)
        except jwt.ExpiredSignatureError:
            return jsonify({"success": False, "error": "Token expired"}), 401
        except jwt.InvalidTokenError:
            return jsonify({"success": False, "error": "Invalid token"}), 401

        if not current_user:
            return jsonify({
                "success": False,
                "error": "User not found"
            }), 401

        return f(current_user, *args, **kwargs)

    return decorated


def role_required(*roles):
    """Stack under ``@token_required``; admins pass every role gate."""
    def decorator(f):
        @wraps(f)
        def decorated_function(current_user, *args, **kwargs):
            if current_user.role not in roles and current_user.role != "admin":
                raise PermissionDenied(
                    f"{' or '.join(r.capitalize() for r in roles)} access required"
                )
            return f(current_user, *args, **kwargs)
        return decorated_function
    return decorator
