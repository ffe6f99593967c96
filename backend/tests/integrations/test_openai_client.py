from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from bridal_backend.engines.openai_engine import OpenAIChatEngine, extract_completion_text
from bridal_backend.integrations.openai_client import (
    OpenAIBackendError,
    OpenAICompatibleClient,
    OpenAIUpstreamError,
)


def _client(handler, *, api_key: str | None = "sk-unit-test-key") -> OpenAICompatibleClient:
    return OpenAICompatibleClient(
        base_url="https://llm.test/v1/",
        api_key=api_key,
        timeout_s=5,
        transport=httpx.MockTransport(handler),
    )


def test_chat_completions_posts_payload():
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json={"choices": [{"message": {"content": "hi"}}]})

    data = asyncio.run(
        _client(handler).chat_completions(
            model="gpt-4o-mini", temperature=0.7, messages=[{"role": "user", "content": "hey"}]
        )
    )

    assert data["choices"][0]["message"]["content"] == "hi"
    (req,) = captured
    assert req.method == "POST"
    assert str(req.url) == "https://llm.test/v1/chat/completions"
    assert req.headers["content-type"] == "application/json"
    assert json.loads(req.content) == {
        "model": "gpt-4o-mini",
        "temperature": 0.7,
        "messages": [{"role": "user", "content": "hey"}],
    }


def test_no_authorization_header_without_key():
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json={})

    asyncio.run(_client(handler, api_key=None).chat_completions(model="m", messages=[]))
    assert "authorization" not in captured[0].headers


def test_error_status_raises_upstream_error_with_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, text='{"error": {"message": "Incorrect API key"}}')

    with pytest.raises(OpenAIUpstreamError) as exc:
        asyncio.run(_client(handler).chat_completions(model="m", messages=[]))

    assert exc.value.status_code == 401
    assert exc.value.body == '{"error": {"message": "Incorrect API key"}}'
    assert isinstance(exc.value, OpenAIBackendError)


def test_timeout_is_wrapped():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("too slow", request=request)

    with pytest.raises(OpenAIBackendError) as exc:
        asyncio.run(_client(handler).chat_completions(model="m", messages=[]))
    assert "5s" in str(exc.value)
    assert not isinstance(exc.value, OpenAIUpstreamError)


def test_engine_sends_model_and_temperature():
    bodies: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json={"choices": [{"message": {"content": " olive "}}]})

    engine = OpenAIChatEngine(client=_client(handler), model="gpt-test", temperature=0.3)
    content = asyncio.run(engine.run([{"role": "user", "content": "hi"}]))

    assert content == " olive "
    assert bodies[0]["model"] == "gpt-test"
    assert bodies[0]["temperature"] == 0.3


@pytest.mark.parametrize(
    "data",
    [
        None,
        [],
        {},
        {"choices": None},
        {"choices": []},
        {"choices": ["text"]},
        {"choices": [{"message": None}]},
        {"choices": [{"message": {"content": None}}]},
        {"choices": [{"message": {"content": 12}}]},
    ],
)
def test_extract_completion_text_missing(data):
    assert extract_completion_text(data) is None


def test_extract_completion_text_first_choice():
    data = {"choices": [{"message": {"content": "first"}}, {"message": {"content": "second"}}]}
    assert extract_completion_text(data) == "first"
