import asyncio
import json

import httpx
import pytest

from famhealth.services import gemini


def _run(coro):
    return asyncio.run(coro)


def test_build_contents_maps_roles_and_skips_blank_turns():
    history = [
        {"role": "user", "content": "hi"},
        {"role": "assistant", "content": "hello"},
        {"role": "assistant", "content": ""},
        {"role": "", "content": "orphan"},
    ]
    contents = gemini.build_contents("next", history)
    assert contents == [
        {"role": "user", "parts": [{"text": "hi"}]},
        {"role": "model", "parts": [{"text": "hello"}]},
        {"role": "user", "parts": [{"text": "next"}]},
    ]


def test_extract_text_handles_missing_parts():
    assert gemini.extract_text({}) == ""
    assert gemini.extract_text({"candidates": [{"content": {"parts": [{"text": " hi "}]}}]}) == "hi"


@pytest.mark.parametrize("data", [None, [], "text", {"candidates": {}}, {"candidates": [{"content": "x"}]}])
def test_extract_text_tolerates_unexpected_shapes(data):
    assert gemini.extract_text(data) == ""


def test_missing_key_is_503(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    with pytest.raises(gemini.GeminiError) as err:
        _run(gemini.generate_reply("hello"))
    assert err.value.status_code == 503


def test_google_api_key_fallback(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "")
    monkeypatch.setenv("GOOGLE_API_KEY", "g-key")
    assert gemini.gemini_api_key() == "g-key"


def test_successful_reply_sends_transcript(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    monkeypatch.setenv("GEMINI_MODEL", "gemini-test")
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": "Drink water."}]}}]})

    text = _run(gemini.generate_reply(
        "What helps headaches?",
        [{"role": "user", "content": "hi"}],
        transport=httpx.MockTransport(handler),
    ))
    assert text == "Drink water."
    assert "/models/gemini-test:generateContent" in seen["url"]
    assert "key=test-key" in seen["url"]
    assert seen["body"]["generationConfig"] == {"temperature": 0.7, "maxOutputTokens": 2048}
    assert seen["body"]["contents"][-1] == {"role": "user", "parts": [{"text": "What helps headaches?"}]}


@pytest.mark.parametrize("response,message", [
    (httpx.Response(400, json={"error": {"message": "API key not valid"}}), "API key not valid"),
    (httpx.Response(500, text="upstream exploded"), "upstream exploded"),
    (httpx.Response(503, text=""), "AI service error. Try again later."),
    (httpx.Response(200, json={"candidates": []}), "No response from the model."),
    (httpx.Response(200, text="<html>proxy</html>"), "No response from the model."),
    (httpx.Response(200, json=[]), "No response from the model."),
    (httpx.Response(200, json={"candidates": ["text"]}), "No response from the model."),
    (httpx.Response(200, json={"candidates": [{"content": {"parts": ["text"]}}]}), "No response from the model."),
])
def test_upstream_failures_are_502(monkeypatch, response, message):
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    transport = httpx.MockTransport(lambda request: response)
    with pytest.raises(gemini.GeminiError) as err:
        _run(gemini.generate_reply("hi", transport=transport))
    assert err.value.status_code == 502
    assert err.value.message == message


def test_transport_failure_is_500(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")

    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(gemini.GeminiError) as err:
        _run(gemini.generate_reply("hi", transport=httpx.MockTransport(handler)))
    assert err.value.status_code == 500
    assert "connection refused" in err.value.message
