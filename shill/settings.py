"""Centralized configuration — every tunable in one place.

Environment variables override defaults.  A ``.env`` file in the working
directory is loaded first, so keys can live there instead of the shell:

    from shill.settings import Settings
    settings = Settings.from_env()

The environment is read when ``from_env()`` is called, not at import, so a
malformed value surfaces as a ``ConfigError`` the CLI can report.  Values
are frozen after that.  Components receive the ``Settings`` instance
explicitly, which keeps tests free to build their own.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from dotenv import find_dotenv, load_dotenv

from .errors import ConfigError

# Load .env from the directory shill is invoked in (never overrides the shell)
load_dotenv(find_dotenv(usecwd=True))


# ── Helpers ───────────────────────────────────────────────────────────────

def _env(env: Mapping[str, str], key: str, default: str = "") -> str:
    return env.get(key, default)


def _env_int(env: Mapping[str, str], key: str, default: int = 0) -> int:
    raw = env.get(key, str(default))
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"Environment variable {key} must be an integer, got '{raw}'") from None


def _env_float(env: Mapping[str, str], key: str, default: float = 0.0) -> float:
    raw = env.get(key, str(default))
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"Environment variable {key} must be a number, got '{raw}'") from None


# ── Settings ──────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Settings:
    """Application settings.  Immutable after creation."""

    # ── Authentication ────────────────────────────────────────────
    # Name of the variable that holds the service secret.  The value
    # itself is read per invocation by the options resolver.
    API_KEY_ENV: str = "OPENAI_API_KEY"

    # ── Engines ───────────────────────────────────────────────────
    # Used when neither --engine, --fast nor the preset picks one.
    DEFAULT_ENGINE: str = "davinci-002"
    # Selected by --fast.
    FAST_ENGINE: str = "babbage-002"

    # ── LLM Provider ──────────────────────────────────────────────
    # Supported: openai (and any OpenAI-compatible completions endpoint)
    LLM_PROVIDER: str = "openai"
    # Optional: override API endpoint (vLLM, Azure OpenAI, local servers)
    LLM_BASE_URL: str = ""
    LLM_REQUEST_TIMEOUT: float = 120.0
    # Transport-level retries are the SDK's concern; shill never retries.
    LLM_MAX_RETRIES: int = 2

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from *env* (``os.environ`` by default).

        Raises ``ConfigError`` when a numeric variable does not parse.
        """
        env = os.environ if env is None else env
        return cls(
            DEFAULT_ENGINE=_env(env, "SHILL_DEFAULT_ENGINE", cls.DEFAULT_ENGINE),
            FAST_ENGINE=_env(env, "SHILL_FAST_ENGINE", cls.FAST_ENGINE),
            LLM_PROVIDER=_env(env, "LLM_PROVIDER", cls.LLM_PROVIDER),
            LLM_BASE_URL=_env(env, "LLM_BASE_URL", cls.LLM_BASE_URL),
            LLM_REQUEST_TIMEOUT=_env_float(env, "LLM_REQUEST_TIMEOUT", cls.LLM_REQUEST_TIMEOUT),
            LLM_MAX_RETRIES=_env_int(env, "LLM_MAX_RETRIES", cls.LLM_MAX_RETRIES),
        )
