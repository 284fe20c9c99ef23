from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from hreval.llm import ChatConfig, ChatMessage, GatewayConfig, HTTPChatGateway, ModelCallError

MESSAGES = [ChatMessage(role="system", content="sys"), ChatMessage(role="user", content="hello")]


def completion(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def build_gateway(handler, **config):
    return HTTPChatGateway(config=GatewayConfig(**config), transport=httpx.MockTransport(handler))


def test_openrouter_request_shape():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["headers"] = request.headers
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=completion('{"score": 80}'))

    gateway = build_gateway(handler, api_key="secret", model="openai/gpt-4o", app_title="screening")
    content = asyncio.run(gateway.chat(MESSAGES, ChatConfig(temperature=0.3, request_id="req-7")))

    assert content == '{"score": 80}'
    assert seen["url"] == "https://openrouter.ai/api/v1/chat/completions"
    assert seen["headers"]["Authorization"] == "Bearer secret"
    assert seen["headers"]["X-Title"] == "screening"
    assert seen["headers"]["X-Request-ID"] == "req-7"
    assert seen["body"]["model"] == "openai/gpt-4o"
    assert seen["body"]["temperature"] == 0.3
    assert seen["body"]["messages"][1] == {"role": "user", "content": "hello"}
    assert "max_tokens" not in seen["body"]


def test_kimi_k2_forces_thinking_temperature():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=completion("ok"))

    gateway = build_gateway(handler, provider="kimi", model="kimi-k2.5")
    asyncio.run(gateway.chat(MESSAGES, ChatConfig(temperature=0.2, max_tokens=2048)))

    assert seen["url"] == "https://api.moonshot.cn/v1/chat/completions"
    assert seen["body"]["temperature"] == 1
    assert seen["body"]["thinking"] == {"type": "enabled"}
    assert seen["body"]["max_tokens"] == 2048


def test_http_error_status_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": {"message": "upstream down"}})

    gateway = build_gateway(handler, provider="openai", model="gpt-4o-mini")

    with pytest.raises(ModelCallError) as exc_info:
        asyncio.run(gateway.chat(MESSAGES, ChatConfig()))

    assert exc_info.value.status_code == 500
    assert exc_info.value.provider == "openai"


def test_empty_content_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"choices": [], "error": {"message": "content filtered"}})

    gateway = build_gateway(handler)

    with pytest.raises(ModelCallError, match="content filtered"):
        asyncio.run(gateway.chat(MESSAGES, ChatConfig()))


def test_non_json_body_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>gateway</html>")

    with pytest.raises(ModelCallError):
        asyncio.run(build_gateway(handler).chat(MESSAGES, ChatConfig()))


def test_transport_error_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ModelCallError) as exc_info:
        asyncio.run(build_gateway(handler).chat(MESSAGES, ChatConfig()))

    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
    assert exc_info.value.status_code is None


def test_unknown_provider_without_base_url():
    gateway = HTTPChatGateway(config=GatewayConfig(provider="acme"))

    with pytest.raises(ModelCallError):
        gateway.endpoint


def test_openrouter_referer_comes_from_config():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["headers"] = request.headers
        return httpx.Response(200, json=completion("ok"))

    gateway = build_gateway(handler, app_url="https://hiring.example.com")
    asyncio.run(gateway.chat(MESSAGES, ChatConfig()))

    assert seen["headers"]["HTTP-Referer"] == "https://hiring.example.com"
    assert build_gateway(handler).build_headers(ChatConfig())["HTTP-Referer"] == "http://localhost"
