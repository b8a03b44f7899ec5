from sexed.extensions import db
from sexed.models.feedback import Feedback


def test_feedback_is_stored(client):
    response = client.post(
        "/api/feedback",
        json={"category": "content", "feedback": "More videos please", "email": "a@uni.ac.ke"},
    )

    assert response.status_code == 201
    body = response.get_json()["feedback"]
    assert body["category"] == "content"
    assert body["email"] == "a@uni.ac.ke"

    stored = db.session.get(Feedback, body["id"])
    assert stored.feedback == "More videos please"


def test_feedback_defaults_category_and_blank_email(client):
    response = client.post("/api/feedback", json={"feedback": "Great app", "email": "  "})

    body = response.get_json()["feedback"]
    assert body["category"] == "general"
    assert body["email"] is None


def test_feedback_text_is_required(client):
    for payload in ({"category": "bug"}, {"feedback": "   "}):
        response = client.post("/api/feedback", json=payload)
        assert response.status_code == 400

    assert Feedback.query.count() == 0


def test_feedback_text_must_be_a_string(client):
    response = client.post("/api/feedback", json={"feedback": 5})
    assert response.status_code == 400
