"""Provider loader.

Reads LLM_PROVIDER from the given settings and returns the matching provider
instance.  The API key is passed in by the caller because it comes from
the resolved options, not from settings.

Usage:
    from shill.llm.providers import load_provider
    result = load_provider(api_key, settings).complete(request)
"""

from __future__ import annotations

import logging

import httpx

from ...settings import Settings
from .base import CompletionProvider

logger = logging.getLogger(__name__)


def load_provider(
    api_key: str,
    settings: Settings | None = None,
    *,
    http_client: httpx.Client | None = None,
) -> CompletionProvider:
    """Instantiate the configured provider."""
    settings = settings or Settings()
    name = settings.LLM_PROVIDER.lower()

    if name == "openai":
        from .openai import OpenAIProvider

        return OpenAIProvider(
            api_key=api_key,
            base_url=settings.LLM_BASE_URL,
            timeout=settings.LLM_REQUEST_TIMEOUT,
            max_retries=settings.LLM_MAX_RETRIES,
            http_client=http_client,
        )
    else:
        raise ValueError(
            f"Unknown LLM_PROVIDER: '{name}'.  "
            f"Supported: openai"
        )
