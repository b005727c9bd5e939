"""Adapters around hosted model APIs (Anthropic Messages / OpenAI-compatible)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple

import httpx
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)
from tenacity.wait import wait_base

from ..config import SUPPORTED_PROVIDERS
from ..errors import TransientProviderError, UpstreamGenerationError
from ..logging import get_logger


@dataclass
class LLMRequest:
    """Represents one inference request against the configured provider."""

    prompt: str
    system: Optional[str]
    model: str
    provider: str
    temperature: Optional[float]
    max_tokens: Optional[int]
    base_url: str
    api_key: Optional[str]
    request_timeout: Optional[float]


Runner = Callable[[LLMRequest], Awaitable[str]]


class LLMRunner:
    """Executes prompts against the configured model provider.

    Transport errors, HTTP 429 and 5xx responses are raised as
    ``TransientProviderError`` and retried up to ``max_attempts`` times with
    jittered exponential backoff. Everything else fails on the first attempt.
    """

    DEFAULT_MODEL = "claude-sonnet-4-20250514"
    DEFAULT_PROVIDER = "anthropic"
    DEFAULT_MAX_TOKENS = 16000
    DEFAULT_BASE_URLS: Dict[str, str] = {
        "anthropic": "https://api.anthropic.com/v1",
        "openai": "https://api.openai.com/v1",
    }
    ANTHROPIC_VERSION = "2023-06-01"
    PROVIDERS: Tuple[str, ...] = SUPPORTED_PROVIDERS

    def __init__(
        self,
        model: str | None = None,
        *,
        provider: str | None = None,
        base_url: str | None = None,
        api_key: str | None = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = DEFAULT_MAX_TOKENS,
        request_timeout: Optional[float] = 120.0,
        max_attempts: int = 3,
        runner: Runner | None = None,
        client: httpx.AsyncClient | None = None,
        retry_wait: wait_base | None = None,
    ) -> None:
        self.provider = (provider or self.DEFAULT_PROVIDER).lower()
        if self.provider not in self.PROVIDERS:
            raise ValueError(
                f"Unsupported LLM provider '{provider}'. Expected one of: {', '.join(self.PROVIDERS)}"
            )
        self.model = model or self.DEFAULT_MODEL
        self.base_url = (base_url or self.DEFAULT_BASE_URLS[self.provider]).rstrip("/")
        self.api_key = api_key
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.request_timeout = request_timeout
        self.max_attempts = max(1, max_attempts)
        self.retry_wait = retry_wait or wait_exponential_jitter(initial=1, max=10)
        self._client = client
        self._runner: Runner = runner or self._http_runner
        self.logger = get_logger("llm")

    async def run(self, prompt: str, *, system: str | None = None) -> str:
        """Send the prompt to the provider and return the response text."""
        request = LLMRequest(
            prompt=prompt,
            system=system,
            model=self.model,
            provider=self.provider,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            base_url=self.base_url,
            api_key=self.api_key,
            request_timeout=self.request_timeout,
        )
        text = ""
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=self.retry_wait,
            retry=retry_if_exception_type(TransientProviderError),
            before_sleep=before_sleep_log(self.logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                text = await self._runner(request)
        if not text or not text.strip():
            raise UpstreamGenerationError("LLM provider returned an empty response")
        return text.strip()

    async def _http_runner(self, request: LLMRequest) -> str:
        if not request.api_key:
            raise UpstreamGenerationError(
                f"No API key configured for LLM provider '{request.provider}'"
            )
        if request.provider == "anthropic":
            endpoint, payload, headers = self._anthropic_call(request)
        else:
            endpoint, payload, headers = self._openai_call(request)

        try:
            if self._client is not None:
                response = await self._client.post(
                    endpoint, json=payload, headers=headers, timeout=request.request_timeout
                )
            else:
                async with httpx.AsyncClient(timeout=request.request_timeout) as client:
                    response = await client.post(endpoint, json=payload, headers=headers)
        except httpx.TimeoutException as exc:
            raise TransientProviderError(
                f"LLM request timed out after {request.request_timeout}s"
            ) from exc
        except httpx.TransportError as exc:
            raise TransientProviderError(f"LLM transport failed: {exc}") from exc

        status = response.status_code
        if status == 429 or status >= 500:
            raise TransientProviderError(
                f"LLM provider returned HTTP {status}: {response.text[:500]}", status=status
            )
        if response.is_error:
            raise UpstreamGenerationError(
                f"LLM provider returned HTTP {status}: {response.text[:500]}", status=status
            )

        try:
            response_payload = response.json()
        except ValueError as exc:
            raise UpstreamGenerationError("LLM provider returned invalid JSON") from exc
        if not isinstance(response_payload, dict):
            raise UpstreamGenerationError("LLM provider returned an unexpected payload")

        if request.provider == "anthropic":
            return self._extract_anthropic_content(response_payload)
        return self._extract_content(response_payload)

    @classmethod
    def _anthropic_call(cls, request: LLMRequest) -> Tuple[str, Dict[str, Any], Dict[str, str]]:
        payload: Dict[str, Any] = {
            "model": request.model,
            "max_tokens": request.max_tokens or cls.DEFAULT_MAX_TOKENS,
            "messages": [{"role": "user", "content": request.prompt}],
        }
        if request.system:
            payload["system"] = request.system
        if request.temperature is not None:
            payload["temperature"] = request.temperature
        headers = {
            "Content-Type": "application/json",
            "x-api-key": request.api_key or "",
            "anthropic-version": cls.ANTHROPIC_VERSION,
        }
        return f"{request.base_url}/messages", payload, headers

    @classmethod
    def _openai_call(cls, request: LLMRequest) -> Tuple[str, Dict[str, Any], Dict[str, str]]:
        payload: Dict[str, Any] = {
            "model": request.model,
            "messages": cls._build_messages(request.system, request.prompt),
        }
        if request.temperature is not None:
            payload["temperature"] = request.temperature
        if request.max_tokens is not None:
            payload["max_tokens"] = request.max_tokens
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {request.api_key}",
        }
        return f"{request.base_url}/chat/completions", payload, headers

    @staticmethod
    def _build_messages(system: str | None, prompt: str) -> list[dict[str, str]]:
        messages: list[dict[str, str]] = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})
        return messages

    @staticmethod
    def _extract_anthropic_content(payload: dict[str, object]) -> str:
        blocks = payload.get("content")
        if not isinstance(blocks, list):
            return ""
        texts = [
            block["text"]
            for block in blocks
            if isinstance(block, dict) and block.get("type") == "text" and isinstance(block.get("text"), str)
        ]
        return "".join(texts)

    @staticmethod
    def _extract_content(payload: dict[str, object]) -> str:
        choices = payload.get("choices")
        if not isinstance(choices, list) or not choices:
            return ""
        first = choices[0]
        if not isinstance(first, dict):
            return ""
        message = first.get("message")
        if isinstance(message, dict):
            content = message.get("content")
            if isinstance(content, str):
                return content
        text = first.get("text")
        if isinstance(text, str):
            return text
        return ""


__all__ = ["LLMRequest", "LLMRunner", "Runner"]
