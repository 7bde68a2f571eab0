"""Completion provider base class.

Every provider implements one method:
  - complete(request) -> CompletionResult

Failures of any kind (authentication, network, malformed response) are
raised as ``ProviderError``.  Providers never retry on their own account;
transport retries belong to the SDK underneath.

To add a new provider:
  1. Create shill/llm/providers/your_provider.py
  2. Subclass CompletionProvider
  3. Register it in shill/llm/providers/__init__.py
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ...models import CompletionRequest, CompletionResult


class CompletionProvider(ABC):
    """Abstract base for text-completion providers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider identifier (e.g. 'openai')."""
        ...

    @abstractmethod
    def complete(self, request: CompletionRequest) -> CompletionResult:
        """Send one completion request and return the parsed result."""
        ...
