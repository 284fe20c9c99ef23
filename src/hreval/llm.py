"""Chat-completion gateway used by the evaluation pipelines."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Protocol, runtime_checkable

import httpx
import structlog

Role = Literal["system", "user", "assistant"]

PROVIDER_BASE_URLS: dict[str, str] = {
    "openai": "https://api.openai.com/v1",
    "openrouter": "https://openrouter.ai/api/v1",
    "kimi": "https://api.moonshot.cn/v1",
}

# Kimi K2 models reject any temperature other than 1 in thinking mode.
KIMI_K2_MODELS = frozenset(
    {
        "kimi-k2.5",
        "kimi-k2-0905-preview",
        "kimi-k2-turbo-preview",
        "kimi-k2-thinking",
        "kimi-k2-thinking-turbo",
    }
)


@dataclass(frozen=True, slots=True)
class ChatMessage:
    role: Role
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True, slots=True)
class ChatConfig:
    """Per-call options forwarded to the gateway."""

    temperature: float = 0.2
    request_id: str | None = None
    max_tokens: int | None = None


class ModelCallError(RuntimeError):
    """Raised when the model gateway returns no usable completion."""

    def __init__(
        self,
        message: str,
        *,
        provider: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code


@runtime_checkable
class ModelGateway(Protocol):
    """Asynchronous chat-completion contract."""

    async def chat(self, messages: list[ChatMessage], config: ChatConfig) -> str:
        """Return the completion text or raise on transport/provider failure."""


@dataclass
class GatewayConfig:
    """Connection settings for an OpenAI-compatible provider."""

    provider: str = "openrouter"
    base_url: str | None = None
    api_key: str | None = None
    model: str = "google/gemini-3-flash-preview"
    timeout: float = 120.0
    app_title: str = "hreval"
    app_url: str = "http://localhost"
    extra_headers: dict[str, str] = field(default_factory=dict)


class HTTPChatGateway:
    """Async client for ``/chat/completions`` endpoints.

    No retries are attempted; any failure surfaces as ``ModelCallError``.
    """

    def __init__(
        self,
        *,
        config: GatewayConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or GatewayConfig()
        self._transport = transport
        self._logger = structlog.get_logger(__name__).bind(provider=self._config.provider)

    @property
    def endpoint(self) -> str:
        base_url = self._config.base_url or PROVIDER_BASE_URLS.get(self._config.provider)
        if not base_url:
            raise ModelCallError(
                f"No base URL configured for provider {self._config.provider!r}",
                provider=self._config.provider,
            )
        return base_url.rstrip("/") + "/chat/completions"

    def build_payload(self, messages: list[ChatMessage], config: ChatConfig) -> dict[str, Any]:
        model = self._config.model
        payload: dict[str, Any] = {
            "model": model,
            "messages": [message.to_dict() for message in messages],
            "temperature": config.temperature,
        }
        if self._config.provider == "kimi" and model.lower() in KIMI_K2_MODELS:
            payload["temperature"] = 1
            payload["thinking"] = {"type": "enabled"}
        if config.max_tokens:
            payload["max_tokens"] = config.max_tokens
        return payload

    def build_headers(self, config: ChatConfig) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._config.api_key:
            headers["Authorization"] = f"Bearer {self._config.api_key}"
        if self._config.provider == "openrouter":
            headers["HTTP-Referer"] = self._config.app_url
            headers["X-Title"] = self._config.app_title
        if config.request_id:
            headers["X-Request-ID"] = config.request_id
        headers.update(self._config.extra_headers)
        return headers

    async def chat(self, messages: list[ChatMessage], config: ChatConfig) -> str:
        provider = self._config.provider
        url = self.endpoint
        try:
            async with httpx.AsyncClient(
                timeout=self._config.timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    url,
                    headers=self.build_headers(config),
                    json=self.build_payload(messages, config),
                )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            self._logger.warning("llm.request_failed", status_code=status)
            raise ModelCallError(
                f"{provider} returned HTTP {status}", provider=provider, status_code=status
            ) from exc
        except httpx.HTTPError as exc:
            self._logger.warning("llm.request_failed", error=str(exc))
            raise ModelCallError(f"{provider} request failed: {exc}", provider=provider) from exc
        except ValueError as exc:
            raise ModelCallError(f"{provider} returned a non-JSON body", provider=provider) from exc

        content = _extract_content(data)
        if not content:
            error = data.get("error") if isinstance(data, dict) else None
            message = error.get("message") if isinstance(error, dict) else None
            raise ModelCallError(
                message or f"No content in {provider} response", provider=provider
            )
        return content


def _extract_content(data: Any) -> str | None:
    if not isinstance(data, dict):
        return None
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    message = first.get("message")
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    return content if isinstance(content, str) else None
