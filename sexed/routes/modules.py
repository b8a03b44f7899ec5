"""
Educational modules published by healthcare professionals.

Newest modules come first. Create and update accept the legacy snake_case
names (``content_type``, ``content_url``, ``url``) for the content fields.
"""
from flask import Blueprint, current_app, jsonify, request

from sexed.utils import kv_store
from sexed.utils.auth_utils import role_required, token_required
from sexed.utils.errors import NotFoundError
from sexed.utils.payload import json_body, require_choice, require_fields
from sexed.utils.records import (
    filter_records,
    find_index,
    generate_id,
    merge_fields,
    utc_now_iso,
)

modules_bp = Blueprint("modules", __name__)

MODULES_KEY = "educational_modules"
DIFFICULTIES = ("Beginner", "Intermediate", "Advanced")
CONTENT_TYPES = ("link", "document", "video")
EDITABLE_FIELDS = (
    "title", "description", "category", "duration",
    "difficulty", "contentType", "contentUrl",
)

_ALIASES = {
    "content_type": "contentType",
    "content_url": "contentUrl",
    "url": "contentUrl",
}


def normalize_module_payload(data):
    normalized = dict(data)
    for alias, field in _ALIASES.items():
        if alias in normalized and field not in normalized:
            normalized[field] = normalized[alias]
    return normalized


def _validate(data):
    if "difficulty" in data and data["difficulty"] is not None:
        require_choice(data["difficulty"], DIFFICULTIES, "difficulty")
    if "contentType" in data and data["contentType"] is not None:
        require_choice(data["contentType"], CONTENT_TYPES, "contentType")


@modules_bp.route("", methods=["GET"])
def list_modules():
    modules = kv_store.get(MODULES_KEY, [])
    modules = filter_records(
        modules,
        exact={
            "category": request.args.get("category"),
            "difficulty": request.args.get("difficulty"),
            "uploadedBy": request.args.get("uploadedBy"),
        },
        search=request.args.get("search"),
    )
    return jsonify({"success": True, "modules": modules})


@modules_bp.route("", methods=["POST"])
@token_required
@role_required("healthcare")
def create_module(current_user):
    data = normalize_module_payload(json_body())
    require_fields(data, "title")
    _validate(data)

    module = {
        "id": generate_id(),
        "title": data["title"],
        "description": data.get("description", ""),
        "category": data.get("category", "General Health"),
        "duration": data.get("duration"),
        "difficulty": data.get("difficulty") or "Beginner",
        "contentType": data.get("contentType") or "link",
        "contentUrl": data.get("contentUrl"),
        "uploadedBy": current_user.username,
        "createdAt": utc_now_iso(),
    }

    kv_store.update(MODULES_KEY, lambda modules: modules.insert(0, module), default=list)

    current_app.logger.info("🎓 Module %s created by %s", module["id"], current_user.username)
    return jsonify({"success": True, "module": module}), 201


@modules_bp.route("/<module_id>", methods=["PUT"])
@token_required
@role_required("healthcare")
def update_module(current_user, module_id):
    data = normalize_module_payload(json_body())
    if "title" in data:
        require_fields(data, "title")
    _validate(data)

    def apply(modules):
        index = find_index(modules, module_id)
        if index == -1:
            raise NotFoundError("Module not found")
        return merge_fields(modules[index], data, EDITABLE_FIELDS)

    module = kv_store.update(MODULES_KEY, apply, default=list)
    return jsonify({"success": True, "module": module})


@modules_bp.route("/<module_id>", methods=["DELETE"])
@token_required
@role_required("healthcare")
def delete_module(current_user, module_id):
    def apply(modules):
        modules[:] = [m for m in modules if m.get("id") != module_id]

    kv_store.update(MODULES_KEY, apply, default=list)
    return jsonify({"success": True})
