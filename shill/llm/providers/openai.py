"""OpenAI completion provider.

Talks to the legacy text Completions endpoint (``/v1/completions``), which
takes a raw prompt instead of chat messages.  Also works with any
OpenAI-compatible server (vLLM, llama.cpp, LM Studio); set LLM_BASE_URL.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from openai import OpenAI, OpenAIError

from ...errors import ProviderError
from ...models import Choice, CompletionRequest, CompletionResult
from .base import CompletionProvider

logger = logging.getLogger(__name__)


class OpenAIProvider(CompletionProvider):
    """OpenAI Completions API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "",
        *,
        timeout: float = 120.0,
        max_retries: int = 2,
        http_client: httpx.Client | None = None,
    ):
        kwargs: dict = {
            "api_key": api_key,
            "timeout": timeout,
            "max_retries": max_retries,
        }
        if base_url:
            kwargs["base_url"] = base_url
        if http_client is not None:
            kwargs["http_client"] = http_client
        self._client = OpenAI(**kwargs)
        logger.info(
            f"OpenAI provider ready (timeout={timeout}s, retries={max_retries}"
            f"{', base_url=' + base_url if base_url else ''})"
        )

    @property
    def name(self) -> str:
        return "openai"

    def complete(self, request: CompletionRequest) -> CompletionResult:
        params: dict[str, Any] = {
            "model": request.engine,
            "prompt": request.prompt,
            "temperature": request.temperature,
            "max_tokens": request.max_tokens,
        }
        if request.stop:
            params["stop"] = request.stop

        try:
            response = self._client.completions.create(**params)
        except OpenAIError as e:
            raise ProviderError(f"Completion request failed: {e}") from e

        if not getattr(response, "choices", None):
            raise ProviderError("Malformed completion response: no choices returned")

        return CompletionResult(
            id=response.id,
            model=response.model,
            object=response.object,
            created=response.created,
            choices=tuple(
                Choice(
                    index=c.index,
                    text=c.text,
                    finish_reason=c.finish_reason,
                    logprobs=c.logprobs.model_dump() if c.logprobs is not None else None,
                )
                for c in response.choices
            ),
        )
