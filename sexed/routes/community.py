"""
COMMUNITY ROUTES - channels, posts, likes and replies

Store layout:
    community_channels  [channel, ...]
    community_posts     {"<channelId>": [post, ...]}     newest first
    post_likes          {"<postId>-<username>": like}
    post_replies        {"<postId>": [reply, ...]}       oldest first

A post's ``likes``/``replies`` counters are written in the same transaction
as the like/reply records they count.
"""
from flask import Blueprint, current_app, jsonify

from sexed.utils import kv_store
from sexed.utils.auth_utils import token_required
from sexed.utils.errors import NotFoundError, ValidationError
from sexed.utils.payload import json_body, require_fields
from sexed.utils.records import find_index, generate_id, utc_now_iso

community_bp = Blueprint("community", __name__)

CHANNELS_KEY = "community_channels"
POSTS_KEY = "community_posts"
LIKES_KEY = "post_likes"
REPLIES_KEY = "post_replies"

DEFAULT_CHANNELS = [
    {"id": 1, "name": "General Discussion", "description": "General sexual health topics", "posts": 0, "members": 0},
    {"id": 2, "name": "Relationships", "description": "Healthy relationships and communication", "posts": 0, "members": 0},
    {"id": 3, "name": "STI Prevention", "description": "STI awareness and prevention", "posts": 0, "members": 0},
    {"id": 4, "name": "Mental Health", "description": "Mental health and sexuality", "posts": 0, "members": 0},
    {"id": 5, "name": "LGBTQ+ Support", "description": "Safe space for LGBTQ+ students", "posts": 0, "members": 0},
]


def default_channels():
    return [dict(channel) for channel in DEFAULT_CHANNELS]


def like_key(post_id, username):
    return f"{post_id}-{username}"


def parse_channel_id(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError("channelId must be a channel number")


def _find_post(all_posts, channel_id, post_id):
    posts = all_posts.get(str(channel_id), [])
    index = find_index(posts, post_id)
    if index == -1:
        raise NotFoundError("Post not found")
    return posts[index]


# ================= CHANNELS =================
@community_bp.route("/channels", methods=["GET"])
def list_channels():
    return jsonify({"success": True, "channels": kv_store.get(CHANNELS_KEY, [])})


# ================= POSTS =================
@community_bp.route("/posts/<channel_id>", methods=["GET"])
def list_posts(channel_id):
    all_posts = kv_store.get(POSTS_KEY, {})
    return jsonify({"success": True, "posts": all_posts.get(str(channel_id), [])})


@community_bp.route("/posts", methods=["POST"])
@token_required
def create_post(current_user):
    data = json_body()
    require_fields(data, "channelId", "title", "content")
    channel_id = parse_channel_id(data["channelId"])

    post = {
        "id": generate_id(),
        "channelId": channel_id,
        "title": data["title"],
        "content": data["content"],
        "author": current_user.username,
        "likes": 0,
        "replies": 0,
        "createdAt": utc_now_iso(),
    }

    def apply(values):
        channels = values[CHANNELS_KEY]
        index = find_index(channels, channel_id)
        if index == -1:
            raise NotFoundError("Channel not found")
        channels[index]["posts"] = (channels[index].get("posts") or 0) + 1
        values[POSTS_KEY].setdefault(str(channel_id), []).insert(0, post)

    kv_store.update_many(
        [POSTS_KEY, CHANNELS_KEY],
        apply,
        defaults={POSTS_KEY: dict, CHANNELS_KEY: list},
    )

    current_app.logger.info("💬 Post %s in channel %s by %s", post["id"], channel_id, current_user.username)
    return jsonify({"success": True, "post": post}), 201


# ================= LIKES =================
@community_bp.route("/posts/<post_id>/like", methods=["POST"])
@token_required
def toggle_like(current_user, post_id):
    """Like the post, or take the like back if the caller already liked it."""
    data = json_body()
    require_fields(data, "channelId")
    channel_id = parse_channel_id(data["channelId"])
    key = like_key(post_id, current_user.username)

    def apply(values):
        likes = values[LIKES_KEY]
        post = _find_post(values[POSTS_KEY], channel_id, post_id)

        if key in likes:
            del likes[key]
            post["likes"] = max(0, (post.get("likes") or 0) - 1)
            return False, post["likes"]

        likes[key] = {
            "postId": post_id,
            "username": current_user.username,
            "createdAt": utc_now_iso(),
        }
        post["likes"] = (post.get("likes") or 0) + 1
        return True, post["likes"]

    liked, count = kv_store.update_many(
        [LIKES_KEY, POSTS_KEY],
        apply,
        defaults={LIKES_KEY: dict, POSTS_KEY: dict},
    )
    return jsonify({"success": True, "liked": liked, "likes": count})


@community_bp.route("/posts/<post_id>/liked/<username>", methods=["GET"])
def has_liked(post_id, username):
    likes = kv_store.get(LIKES_KEY, {})
    return jsonify({"success": True, "liked": like_key(post_id, username) in likes})


# ================= REPLIES =================
@community_bp.route("/posts/<post_id>/replies", methods=["GET"])
def list_replies(post_id):
    all_replies = kv_store.get(REPLIES_KEY, {})
    return jsonify({"success": True, "replies": all_replies.get(post_id, [])})


@community_bp.route("/posts/<post_id>/replies", methods=["POST"])
@token_required
def create_reply(current_user, post_id):
    data = json_body()
    require_fields(data, "content", "channelId")
    channel_id = parse_channel_id(data["channelId"])

    reply = {
        "id": generate_id(),
        "postId": post_id,
        "content": data["content"],
        "author": current_user.username,
        "createdAt": utc_now_iso(),
    }

    def apply(values):
        post = _find_post(values[POSTS_KEY], channel_id, post_id)
        values[REPLIES_KEY].setdefault(post_id, []).append(reply)
        post["replies"] = (post.get("replies") or 0) + 1
        return post["replies"]

    count = kv_store.update_many(
        [REPLIES_KEY, POSTS_KEY],
        apply,
        defaults={REPLIES_KEY: dict, POSTS_KEY: dict},
    )
    return jsonify({"success": True, "reply": reply, "replies": count}), 201
