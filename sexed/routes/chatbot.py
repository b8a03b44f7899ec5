from flask import Blueprint, jsonify

from sexed.utils import chatbot
from sexed.utils.payload import json_body, require_fields, require_strings

chatbot_bp = Blueprint("chatbot", __name__)


@chatbot_bp.route("/faqs", methods=["GET"])
def list_faqs():
    return jsonify({
        "success": True,
        "greeting": chatbot.GREETING,
        "faqs": [{"question": faq.question, "answer": faq.answer} for faq in chatbot.FAQS],
    })


@chatbot_bp.route("/message", methods=["POST"])
def send_message():
    data = json_body()
    require_strings(data, "message")
    require_fields(data, "message")

    faq = chatbot.match_faq(data["message"])
    return jsonify({
        "success": True,
        "reply": faq.answer if faq else chatbot.FALLBACK_ANSWER,
        "matchedQuestion": faq.question if faq else None,
    })
