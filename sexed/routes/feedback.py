from flask import Blueprint, current_app, jsonify

from sexed.extensions import db
from sexed.models.feedback import Feedback
from sexed.utils.payload import json_body, require_fields, require_strings

feedback_bp = Blueprint("feedback", __name__)

DEFAULT_CATEGORY = "general"


@feedback_bp.route("", methods=["POST"])
def submit_feedback():
    """Store feedback from the feedback form; no account needed."""
    data = json_body()
    require_strings(data, "category", "feedback", "email")
    require_fields(data, "feedback")

    email = (data.get("email") or "").strip() or None

    entry = Feedback(
        category=(data.get("category") or "").strip() or DEFAULT_CATEGORY,
        feedback=data["feedback"].strip(),
        email=email,
    )
    db.session.add(entry)
    db.session.commit()

    current_app.logger.info("📝 Feedback %s received (%s)", entry.id, entry.category)
    return jsonify({"success": True, "feedback": entry.to_dict()}), 201
