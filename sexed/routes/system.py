from flask import Blueprint, current_app, jsonify
from sqlalchemy.exc import SQLAlchemyError

from sexed.extensions import db
from sexed.models.student import Student
from sexed.models.user import User
from sexed.routes.community import CHANNELS_KEY, default_channels
from sexed.utils import kv_store
from sexed.utils.auth_utils import role_required, token_required

system_bp = Blueprint("system", __name__)

SAMPLE_LIMIT = 5


@system_bp.route("/health", methods=["GET"])
def health():
    return jsonify({"status": "ok"})


# ================= DIAGNOSTICS =================
@system_bp.route("/database/info", methods=["GET"])
@token_required
@role_required("admin")
def database_info(current_user):
    tables = {}
    sample_data = {}

    for name, model in (("students", Student), ("users", User)):
        try:
            rows = model.query.limit(SAMPLE_LIMIT).all()
        except SQLAlchemyError as e:
            db.session.rollback()
            tables[name] = f"Error: {e}"
            sample_data[name] = []
            continue

        tables[name] = f"✓ Connected ({len(rows)} records found)"
        if model is User:
            sample_data[name] = [
                {
                    "username": u.username,
                    "user_type": u.user_type,
                    "registration_number": u.registration_number,
                }
                for u in rows
            ]
        else:
            sample_data[name] = [s.to_dict() for s in rows]

    return jsonify({
        "success": True,
        "tables": tables,
        "sampleData": sample_data,
    })


# ================= SEEDING =================
@system_bp.route("/init-data", methods=["POST"])
def init_data():
    """Seed the default channels unless some already exist."""
    def apply(channels):
        if not channels:
            channels.extend(default_channels())
            return True
        return False

    seeded = kv_store.update(CHANNELS_KEY, apply, default=list)
    if seeded:
        current_app.logger.info("🌱 Default community channels seeded")

    return jsonify({"success": True, "message": "Default data initialized"})


@system_bp.route("/init-channels", methods=["POST"])
@token_required
@role_required("admin")
def init_channels(current_user):
    """Reset the channel list to the defaults, counters included."""
    kv_store.set(CHANNELS_KEY, default_channels())
    current_app.logger.info("🌱 Community channels reset by %s", current_user.username)
    return jsonify({"success": True, "message": "Community channels initialized"})
