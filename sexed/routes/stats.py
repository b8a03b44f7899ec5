from collections import Counter

from flask import Blueprint, jsonify

from sexed.routes.community import POSTS_KEY
from sexed.routes.modules import MODULES_KEY
from sexed.routes.progress import PROGRESS_KEY
from sexed.routes.qa import DEFAULT_CATEGORY, QUESTIONS_KEY
from sexed.routes.resources import RESOURCES_KEY
from sexed.utils import kv_store

stats_bp = Blueprint("stats", __name__)


# ================= HELPER FUNCTIONS =================
def student_stats(username, progress_by_user, posts_by_channel, questions, modules):
    """Dashboard numbers for a student, recomputed from the raw collections."""
    user_progress = (progress_by_user or {}).get(username, [])
    completed = sum(1 for p in user_progress if p.get("completed"))
    total_modules = len(modules or [])

    community_posts = 0
    for posts in (posts_by_channel or {}).values():
        if isinstance(posts, list):
            community_posts += sum(1 for p in posts if p.get("author") == username)

    questions_asked = sum(1 for q in questions or [] if q.get("askedBy") == username)

    return {
        "modulesCompleted": f"{completed}/{total_modules or len(user_progress)}",
        "completedModules": completed,
        "totalModules": total_modules,
        "communityPosts": community_posts,
        "questionsAsked": questions_asked,
        "resourcesSaved": 0,
    }


def healthcare_stats(username, questions, resources, modules):
    """Dashboard numbers for a healthcare professional."""
    answered = [q for q in questions or [] if q.get("status") == "answered"]
    answered_by_user = [q for q in answered if q.get("answeredBy") == username]

    topic_breakdown = Counter(
        q.get("category") or DEFAULT_CATEGORY for q in answered_by_user
    )

    return {
        "questionsAnsweredByUser": len(answered_by_user),
        "totalQuestionsAnswered": len(answered),
        "resourcesUploaded": sum(1 for r in resources or [] if r.get("uploadedBy") == username),
        "modulesUploaded": sum(1 for m in modules or [] if m.get("uploadedBy") == username),
        "topicBreakdown": dict(topic_breakdown),
    }


# ================= ROUTES =================
@stats_bp.route("/student/<username>", methods=["GET"])
def get_student_stats(username):
    data = kv_store.mget([PROGRESS_KEY, POSTS_KEY, QUESTIONS_KEY, MODULES_KEY])
    stats = student_stats(
        username,
        data[PROGRESS_KEY],
        data[POSTS_KEY],
        data[QUESTIONS_KEY],
        data[MODULES_KEY],
    )
    return jsonify({"success": True, **stats})


@stats_bp.route("/healthcare/<username>", methods=["GET"])
def get_healthcare_stats(username):
    data = kv_store.mget([QUESTIONS_KEY, RESOURCES_KEY, MODULES_KEY])
    stats = healthcare_stats(
        username,
        data[QUESTIONS_KEY],
        data[RESOURCES_KEY],
        data[MODULES_KEY],
    )
    return jsonify({"success": True, **stats})
