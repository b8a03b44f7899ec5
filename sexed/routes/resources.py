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

resources_bp = Blueprint("resources", __name__)

RESOURCES_KEY = "resources"
RESOURCE_TYPES = ("Articles", "Books", "Videos", "PDFs")
EDITABLE_FIELDS = ("title", "description", "type", "category", "url")


# ================= LIST =================
@resources_bp.route("", methods=["GET"])
def list_resources():
    resources = kv_store.get(RESOURCES_KEY, [])
    resources = filter_records(
        resources,
        exact={
            "category": request.args.get("category"),
            "type": request.args.get("type"),
            "uploadedBy": request.args.get("uploadedBy"),
        },
        search=request.args.get("search"),
    )
    return jsonify({"success": True, "resources": resources})


# ================= CREATE =================
@resources_bp.route("", methods=["POST"])
@token_required
@role_required("healthcare")
def create_resource(current_user):
    data = json_body()
    require_fields(data, "title")
    if data.get("type") is not None:
        require_choice(data["type"], RESOURCE_TYPES, "type")

    resource = {
        "id": generate_id(),
        "title": data["title"],
        "description": data.get("description", ""),
        "type": data.get("type", "Articles"),
        "category": data.get("category", "General Health"),
        "url": data.get("url"),
        "uploadedBy": current_user.username,
        "createdAt": utc_now_iso(),
    }

    kv_store.update(RESOURCES_KEY, lambda resources: resources.append(resource), default=list)

    current_app.logger.info("📚 Resource %s created by %s", resource["id"], current_user.username)
    return jsonify({"success": True, "resource": resource}), 201


# ================= UPDATE =================
@resources_bp.route("/<resource_id>", methods=["PUT"])
@token_required
@role_required("healthcare")
def update_resource(current_user, resource_id):
    data = json_body()
    if "type" in data:
        require_choice(data["type"], RESOURCE_TYPES, "type")
    if "title" in data:
        require_fields(data, "title")

    def apply(resources):
        index = find_index(resources, resource_id)
        if index == -1:
            raise NotFoundError("Resource not found")
        return merge_fields(resources[index], data, EDITABLE_FIELDS)

    resource = kv_store.update(RESOURCES_KEY, apply, default=list)
    return jsonify({"success": True, "resource": resource})


# ================= DELETE =================
@resources_bp.route("/<resource_id>", methods=["DELETE"])
@token_required
@role_required("healthcare")
def delete_resource(current_user, resource_id):
    def apply(resources):
        resources[:] = [r for r in resources if r.get("id") != resource_id]

    kv_store.update(RESOURCES_KEY, apply, default=list)
    return jsonify({"success": True})
