from famhealth.models.chat_log import ChatLog
from famhealth.services import gemini


def test_chat_not_configured(client, monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "")
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    r = client.post("/api/chat", json={"message": "hi"})
    assert r.status_code == 503
    body = r.json()
    assert body["code"] == "SERVICE_UNAVAILABLE"
    assert body["message"] == "Chat is not configured. Missing GEMINI_API_KEY."


def test_chat_empty_message(client, monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    r = client.post("/api/chat", json={"message": "   "})
    assert r.status_code == 400
    assert r.json()["message"] == "Message cannot be empty."


def test_chat_malformed_body(client, monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    r = client.post("/api/chat", json={"messages": []})
    assert r.status_code == 422
    assert r.json()["code"] == "UNPROCESSABLE_ENTITY"


def test_chat_success_is_logged(client, db, monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    seen = {}

    async def fake_reply(message, history=None, **_kwargs):
        seen["message"] = message
        seen["history"] = history
        return "Stay hydrated."

    monkeypatch.setattr(gemini, "generate_reply", fake_reply)
    r = client.post("/api/chat", json={
        "message": " headache? ",
        "messages": [{"role": "user", "content": "hi"}, {"role": "assistant", "content": "hello"}],
    })
    assert r.status_code == 200
    assert r.json() == {"text": "Stay hydrated."}
    assert seen["message"] == "headache?"
    assert seen["history"][1] == {"role": "assistant", "content": "hello"}

    log = db.query(ChatLog).one()
    assert log.source == "model"
    assert log.message == "headache?"
    assert log.response == "Stay hydrated."


def test_chat_upstream_error_is_502(client, db, monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")

    async def failing_reply(message, history=None, **_kwargs):
        raise gemini.GeminiError(502, "quota exceeded")

    monkeypatch.setattr(gemini, "generate_reply", failing_reply)
    r = client.post("/api/chat", json={"message": "hi"})
    assert r.status_code == 502
    assert r.json()["code"] == "BAD_GATEWAY"
    assert r.json()["message"] == "quota exceeded"
    assert db.query(ChatLog).count() == 0


def test_ask_with_topic_uses_records(client):
    client.post("/api/family", json={"relation": "Mother", "condition_list": ["Diabetes"]})
    r = client.post("/api/ask", json={"topic": "diabetes", "details": "should I worry?"})
    assert r.status_code == 200
    body = r.json()
    assert body["question"] == "Question about: Diabetes risk. Details: should I worry?"
    assert "diabetes in your family history" in body["answer"]


def test_ask_requires_message_or_topic(client):
    assert client.post("/api/ask", json={}).status_code == 400


def test_chat_logs_list_both_sources(client, monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")

    async def fake_reply(message, history=None, **_kwargs):
        return "ok"

    monkeypatch.setattr(gemini, "generate_reply", fake_reply)
    client.post("/api/ask", json={"message": "what tests?"})
    client.post("/api/chat", json={"message": "hello"})
    logs = client.get("/api/chat/logs").json()
    assert sorted(log["source"] for log in logs) == ["canned", "model"]


def test_chat_is_rate_limited(client, monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")

    async def fake_reply(message, history=None, **_kwargs):
        return "ok"

    monkeypatch.setattr(gemini, "generate_reply", fake_reply)
    codes = [client.post("/api/chat", json={"message": "hi"}).status_code for _ in range(31)]
    assert codes[:30] == [200] * 30
    assert codes[30] == 429
    r = client.post("/api/chat", json={"message": "hi"})
    assert r.json()["code"] == "TOO_MANY_REQUESTS"
    assert "Retry-After" in r.headers
