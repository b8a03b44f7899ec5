from sexed.utils.chatbot import FALLBACK_ANSWER, FAQS, match_faq


def test_keyword_match_is_case_insensitive():
    assert match_faq("What is CONSENT exactly?").question == "What is consent?"


def test_first_matching_faq_wins():
    # "emergency contraception" also contains "contraception", which comes first
    assert match_faq("emergency contraception") is FAQS[0]
    assert match_faq("I need plan b").question == "Is emergency contraception safe?"


def test_no_match_returns_none():
    assert match_faq("hello there") is None
    assert match_faq("") is None


def test_message_endpoint(client):
    body = client.post("/api/chatbot/message", json={"message": "I think I'm pregnant"}).get_json()

    assert body["matchedQuestion"] == "What should I do if I think I'm pregnant?"
    assert body["reply"].startswith("If you think you might be pregnant")


def test_message_endpoint_falls_back_to_forum(client):
    body = client.post("/api/chatbot/message", json={"message": "hello"}).get_json()

    assert body["reply"] == FALLBACK_ANSWER
    assert body["matchedQuestion"] is None


def test_blank_message_is_rejected(client):
    assert client.post("/api/chatbot/message", json={"message": " "}).status_code == 400


def test_faq_listing(client):
    body = client.get("/api/chatbot/faqs").get_json()
    assert len(body["faqs"]) == len(FAQS)
    assert body["greeting"]


def test_non_string_message_is_rejected(client):
    response = client.post("/api/chatbot/message", json={"message": 42})

    assert response.status_code == 400
    assert response.get_json()["success"] is False
