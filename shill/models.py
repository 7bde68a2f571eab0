"""Request and response records exchanged with the completion provider."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CompletionRequest:
    engine: str
    prompt: str
    temperature: float
    # Prompt tokens + requested output length, never user supplied.
    max_tokens: int
    stop: str | None = None


@dataclass(frozen=True)
class Choice:
    index: int
    text: str
    finish_reason: str | None
    logprobs: Any = None


@dataclass(frozen=True)
class CompletionResult:
    id: str
    model: str
    object: str
    created: int
    choices: tuple[Choice, ...]
