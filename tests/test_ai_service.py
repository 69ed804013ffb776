# tests/test_ai_service.py
import asyncio
import json

import httpx
import pytest

from conductor.src.core.ai_service import (
    AIService,
    EmptyResponseError,
    InvalidCommandError,
    MalformedResponseError,
    RemoteApiError,
    TransportError,
    build_prompt,
)
from conftest import GeminiStub, reply

SUMMARIZE_PREFIX = "Summarize the following slide content in one concise sentence. Focus on the key takeaway:\n\n"
QUESTION_PREFIX = "Act as my assistant. Based on the following slide content, what's a likely question the audience would have? Provide one specific, relevant question:\n\n"


def test_summarize_prompt_is_exact():
    assert build_prompt("summarize", "Sales up 10%") == SUMMARIZE_PREFIX + "Sales up 10%"


def test_ask_question_prompt_is_exact():
    assert build_prompt("ask-question", "Sales up 10%") == QUESTION_PREFIX + "Sales up 10%"


def test_prompt_keeps_braces_and_empty_text():
    assert build_prompt("summarize", "{x} {text}") == SUMMARIZE_PREFIX + "{x} {text}"
    assert build_prompt("summarize", "") == SUMMARIZE_PREFIX


@pytest.mark.parametrize("command", ["", "translate", "Summarize", "ask_question", " summarize"])
def test_invalid_command_makes_no_outbound_call(make_service, command):
    stub = GeminiStub(json_body=reply("unused"))
    service = make_service(stub)

    with pytest.raises(InvalidCommandError) as excinfo:
        asyncio.run(service.process_command(command, "slide"))

    assert str(excinfo.value) == "Invalid command. Use 'summarize' or 'ask-question'"
    assert stub.call_count == 0


def test_returns_first_part_text(make_service):
    stub = GeminiStub(json_body={"candidates": [{"content": {"parts": [{"text": "Hello"}]}}]})
    service = make_service(stub)

    assert asyncio.run(service.process_command("summarize", "x")) == "Hello"
    assert stub.call_count == 1


def test_text_is_returned_verbatim(make_service):
    body = {"candidates": [
        {"content": {"parts": [{"text": "  first \n"}, {"text": "second"}]}},
        {"content": {"parts": [{"text": "other candidate"}]}},
    ]}
    service = make_service(GeminiStub(json_body=body))

    assert asyncio.run(service.process_command("ask-question", "x")) == "  first \n"


def test_request_shape_and_credential(make_service):
    stub = GeminiStub(json_body=reply("ok"))
    service = make_service(stub)

    asyncio.run(service.process_command("summarize", "slide text"))

    request = stub.requests[0]
    assert request.method == "POST"
    assert request.url.host == "generativelanguage.googleapis.com"
    assert request.url.path == "/v1beta/models/gemini-pro:generateContent"
    assert request.url.params["key"] == "test-key"
    assert json.loads(request.content) == {"contents": [{"parts": [{"text": SUMMARIZE_PREFIX + "slide text"}]}]}


def test_empty_candidates(make_service):
    service = make_service(GeminiStub(json_body={"candidates": []}))

    with pytest.raises(EmptyResponseError):
        asyncio.run(service.process_command("summarize", "x"))


def test_empty_parts(make_service):
    service = make_service(GeminiStub(json_body={"candidates": [{"content": {"parts": []}}]}))

    with pytest.raises(EmptyResponseError) as excinfo:
        asyncio.run(service.process_command("summarize", "x"))

    assert str(excinfo.value) == "No response from Gemini API"


def test_non_success_status_carries_body(make_service):
    service = make_service(GeminiStub(status_code=429, text="quota exceeded"))

    with pytest.raises(RemoteApiError) as excinfo:
        asyncio.run(service.process_command("summarize", "x"))

    assert "quota exceeded" in str(excinfo.value)
    assert excinfo.value.status_code == 429
    assert excinfo.value.body == "quota exceeded"


@pytest.mark.parametrize("text", ["not json", "", "[1, 2]"])
def test_unparseable_body(make_service, text):
    service = make_service(GeminiStub(text=text))

    with pytest.raises(MalformedResponseError):
        asyncio.run(service.process_command("summarize", "x"))


@pytest.mark.parametrize("body", [
    {},
    {"candidates": [{"finishReason": "SAFETY"}]},
    {"candidates": [{"content": {"role": "model"}}]},
    {"candidates": [{"content": {"parts": [{"inlineData": {}}]}}]},
])
def test_missing_reply_fields_are_malformed(make_service, body):
    service = make_service(GeminiStub(json_body=body))

    with pytest.raises(MalformedResponseError):
        asyncio.run(service.process_command("summarize", "x"))


def test_lone_surrogate_is_sent_escaped(make_service):
    stub = GeminiStub(json_body=reply("ok"))
    service = make_service(stub)

    assert asyncio.run(service.process_command("summarize", "a\ud800b")) == "ok"

    body = stub.requests[0].content
    assert body.isascii()
    assert b"a\\ud800b" in body
    assert stub.requests[0].headers["content-type"] == "application/json"


def test_transport_failure(make_service):
    stub = GeminiStub(exc=httpx.ConnectError("Connection refused"))
    service = make_service(stub)

    with pytest.raises(TransportError) as excinfo:
        asyncio.run(service.process_command("summarize", "x"))

    assert "Connection refused" in str(excinfo.value)
    assert "test-key" not in str(excinfo.value)
    assert stub.call_count == 1


def test_custom_model_and_base_url():
    stub = GeminiStub(json_body=reply("ok"))
    client = httpx.AsyncClient(transport=httpx.MockTransport(stub))

    service = AIService("k", client, model="gemini-1.5-flash", base_url="http://gemini.local/v1/")
    asyncio.run(service.call_gemini("hi"))

    assert service.endpoint == "http://gemini.local/v1/models/gemini-1.5-flash:generateContent"
    assert str(stub.requests[0].url) == "http://gemini.local/v1/models/gemini-1.5-flash:generateContent?key=k"
