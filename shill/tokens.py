"""Token counting and the generation budget.

Completion endpoints count prompt tokens against the same ``max_tokens``
budget as generated tokens, so the budget is always the prompt's token
count plus the requested output length.

Token counting is delegated to tiktoken.  Encoders are memoized per
encoding name because loading the BPE ranks is expensive.  tiktoken
fetches an encoding's BPE file on first use; when that fails (offline, no
cache) counts fall back to a rough characters-per-token estimate.

Public API
----------
    count_tokens(text, engine=None)                    → int
    estimate_tokens(text)                              → int
    token_budget(rendered_prompt, requested, count)    → int
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Callable

import tiktoken

logger = logging.getLogger(__name__)

# Used when tiktoken does not know the engine name.
FALLBACK_ENCODING = "cl100k_base"

# Rough average for English text
_CHARS_PER_TOKEN = 4


@lru_cache(maxsize=None)
def _encoding(name: str) -> tiktoken.Encoding | None:
    """Loaded encoding, or ``None`` when tiktoken cannot provide it."""
    try:
        return tiktoken.get_encoding(name)
    except Exception as e:
        logger.warning(
            "Could not load tokenizer %s (%s); estimating token counts instead", name, e
        )
        return None


def estimate_tokens(text: str) -> int:
    """Offline approximation: ~4 characters per token."""
    return max(1, len(text) // _CHARS_PER_TOKEN)


def encoding_name_for(engine: str | None) -> str:
    """Encoding used by *engine*, or the fallback for unknown engines."""
    if not engine:
        return FALLBACK_ENCODING
    try:
        return tiktoken.encoding_name_for_model(engine)
    except KeyError:
        logger.debug("No tokenizer mapping for engine %s, using %s", engine, FALLBACK_ENCODING)
        return FALLBACK_ENCODING


def count_tokens(text: str, engine: str | None = None) -> int:
    """Exact token count of *text* for *engine*, estimated if no encoding loads."""
    encoding = _encoding(encoding_name_for(engine))
    if encoding is None:
        return estimate_tokens(text)
    return len(encoding.encode(text, disallowed_special=()))


def token_budget(
    rendered_prompt: str,
    requested_tokens: int,
    count: Callable[[str], int] = count_tokens,
) -> int:
    """Total ``max_tokens`` for a prompt and a requested output length."""
    prompt_tokens = count(rendered_prompt)
    logger.debug("Prompt is %d tokens, requesting %d more", prompt_tokens, requested_tokens)
    return prompt_tokens + requested_tokens
