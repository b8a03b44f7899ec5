from flask import Blueprint, jsonify

from sexed.utils import kv_store
from sexed.utils.auth_utils import token_required
from sexed.utils.errors import ValidationError
from sexed.utils.payload import json_body, require_fields
from sexed.utils.records import find_index, utc_now_iso

progress_bp = Blueprint("course_progress", __name__)

PROGRESS_KEY = "course_progress"


def _parse_progress(value):
    try:
        progress = float(value)
    except (TypeError, ValueError):
        raise ValidationError("progress must be a number between 0 and 100")
    if not 0 <= progress <= 100:
        raise ValidationError("progress must be a number between 0 and 100")
    return int(progress) if progress.is_integer() else progress


def _parse_completed(value):
    if not isinstance(value, bool):
        raise ValidationError("completed must be true or false")
    return value


@progress_bp.route("/<username>", methods=["GET"])
def get_progress(username):
    all_progress = kv_store.get(PROGRESS_KEY, {})
    return jsonify({"success": True, "progress": all_progress.get(username, [])})


@progress_bp.route("", methods=["POST"])
@token_required
def save_progress(current_user):
    """Upsert the caller's progress on one module; only the latest state is kept."""
    data = json_body()
    require_fields(data, "courseId")

    entry = {
        "courseId": data["courseId"],
        "progress": _parse_progress(data.get("progress", 0)),
        "completed": _parse_completed(data.get("completed", False)),
        "lastAccessed": utc_now_iso(),
    }

    def apply(all_progress):
        entries = all_progress.setdefault(current_user.username, [])
        index = find_index(entries, entry["courseId"], field="courseId")
        if index >= 0:
            entries[index] = entry
        else:
            entries.append(entry)

    kv_store.update(PROGRESS_KEY, apply, default=dict)
    return jsonify({"success": True, "progress": entry})
