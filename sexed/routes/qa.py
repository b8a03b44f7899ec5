"""
Q&A FORUM ROUTES

Students ask anonymously; healthcare professionals answer. A question moves
from "pending" to "answered" once and never back. Answering again replaces
the answer text but the status stays "answered".
"""
from flask import Blueprint, current_app, jsonify, request

from sexed.utils import kv_store
from sexed.utils.auth_utils import role_required, token_required
from sexed.utils.errors import NotFoundError
from sexed.utils.payload import json_body, require_fields
from sexed.utils.records import filter_records, find_index, generate_id, utc_now_iso

qa_bp = Blueprint("qa", __name__)

QUESTIONS_KEY = "qa_questions"
DEFAULT_CATEGORY = "General Health"

# Kept for statistics, never shown on the public forum
PRIVATE_FIELDS = ("askedBy",)


def public_question(question):
    return {k: v for k, v in question.items() if k not in PRIVATE_FIELDS}


@qa_bp.route("/questions", methods=["GET"])
def list_questions():
    questions = filter_records(
        kv_store.get(QUESTIONS_KEY, []),
        exact={
            "status": request.args.get("status"),
            "category": request.args.get("category"),
        },
        search=request.args.get("search"),
        search_fields=("question", "answer"),
    )
    return jsonify({
        "success": True,
        "questions": [public_question(q) for q in questions],
    })


@qa_bp.route("/questions", methods=["POST"])
@token_required
def ask_question(current_user):
    data = json_body()
    require_fields(data, "question")

    question = {
        "id": generate_id(),
        "question": str(data["question"]).strip(),
        "category": data.get("category") or DEFAULT_CATEGORY,
        "status": "pending",
        "answer": None,
        "answeredBy": None,
        "answeredAt": None,
        "askedBy": current_user.username,
        "createdAt": utc_now_iso(),
    }

    kv_store.update(QUESTIONS_KEY, lambda questions: questions.insert(0, question), default=list)

    current_app.logger.info("❓ Question %s submitted (%s)", question["id"], question["category"])
    return jsonify({"success": True, "question": public_question(question)}), 201


@qa_bp.route("/answer", methods=["POST"])
@token_required
@role_required("healthcare")
def answer_question(current_user):
    data = json_body()
    require_fields(data, "questionId", "answer")
    question_id = data["questionId"]

    def apply(questions):
        index = find_index(questions, question_id)
        if index == -1:
            raise NotFoundError("Question not found")
        question = questions[index]
        question["answer"] = data["answer"]
        question["answeredBy"] = current_user.username
        question["status"] = "answered"
        question["answeredAt"] = utc_now_iso()
        return question

    question = kv_store.update(QUESTIONS_KEY, apply, default=list)

    current_app.logger.info("✅ Question %s answered by %s", question_id, current_user.username)
    return jsonify({"success": True, "question": public_question(question)})
