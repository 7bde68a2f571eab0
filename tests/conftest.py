"""Pytest conftest — make the repo root importable and share fixtures."""

import sys
from pathlib import Path

import pytest

# Add the repo root to sys.path so `import shill` works without installing
_root_dir = str(Path(__file__).resolve().parent.parent)
if _root_dir not in sys.path:
    sys.path.insert(0, _root_dir)

from shill.models import Choice, CompletionResult  # noqa: E402
from shill.settings import Settings  # noqa: E402

API_KEY = "sk-test"


@pytest.fixture
def env():
    """Environment with the API key set."""
    return {"OPENAI_API_KEY": API_KEY}


@pytest.fixture
def test_settings():
    """Settings independent of the developer's shell and .env."""
    return Settings(
        API_KEY_ENV="OPENAI_API_KEY",
        DEFAULT_ENGINE="davinci-002",
        FAST_ENGINE="babbage-002",
        LLM_PROVIDER="openai",
        LLM_BASE_URL="",
        LLM_REQUEST_TIMEOUT=5.0,
        LLM_MAX_RETRIES=0,
    )


def make_result(*texts, id="cmpl-1", model="davinci-002", logprobs=None):
    return CompletionResult(
        id=id,
        model=model,
        object="text_completion",
        created=1700000000,
        choices=tuple(
            Choice(index=i, text=t, finish_reason="stop", logprobs=logprobs)
            for i, t in enumerate(texts)
        ),
    )
