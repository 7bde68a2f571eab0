"""Options resolution — flags + preset + environment → one validated config.

``resolve_options()`` never raises for bad user input.  It returns either a
frozen :class:`Options` or a :class:`ValidationError` value, and the caller
decides how to report it.  The environment is passed in as a mapping so the
resolver stays pure.

Resolution order:
    1. boolean flags (help, version, dry)
    2. preset: unknown names stop here, nothing else is validated
    3. engine: --engine > --fast > preset engine > configured default
    4. temperature: flag or preset default, float in [0, 1]
    5. tokens: flag or preset default, integer >= 1
    6. prompt: first positional argument
    7. API key: from the environment
    8. key and prompt are required unless help or version was requested
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Sequence

from .presets import DEFAULT_PRESET, PRESETS, PresetRegistry, UnknownPreset
from .settings import Settings


@dataclass(frozen=True)
class ValidationError:
    """Why a set of flags could not be turned into :class:`Options`."""

    field: str
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class Options:
    help: bool
    version: bool
    dry_run: bool
    engine: str
    temperature: float
    tokens: int
    prompt: str
    api_key: str = field(repr=False)
    template: Callable[[str], str] = field(repr=False)
    preset: str = DEFAULT_PRESET
    stop: str | None = None


def _flag(flags: Mapping[str, Any], name: str) -> Any:
    """Flag value, treating ``None`` and empty strings as absent."""
    value = flags.get(name)
    if value is None or value == "":
        return None
    return value


def _parse_temperature(raw: Any) -> float | None:
    try:
        temp = float(raw)
    except (TypeError, ValueError):
        return None
    if math.isnan(temp) or not 0.0 <= temp <= 1.0:
        return None
    return temp


def _parse_tokens(raw: Any) -> int | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        tokens = raw
    else:
        try:
            tokens = int(str(raw).strip())
        except ValueError:
            return None
    return tokens if tokens >= 1 else None


def resolve_options(
    flags: Mapping[str, Any],
    env: Mapping[str, str],
    args: Sequence[str] = (),
    *,
    registry: PresetRegistry = PRESETS,
    settings: Settings | None = None,
) -> Options | ValidationError:
    """Merge raw flags, the selected preset and the environment."""
    settings = settings or Settings()
    help_ = bool(flags.get("help"))
    version = bool(flags.get("version"))
    dry_run = bool(flags.get("dry"))

    preset_name = _flag(flags, "preset") or DEFAULT_PRESET
    try:
        preset = registry.lookup(preset_name)
    except UnknownPreset:
        valid = ", ".join(registry.names())
        return ValidationError(
            "preset",
            f"Option 'preset' must be a valid preset, got '{preset_name}'. "
            f"Valid presets: {valid}",
        )

    if flags.get("fast"):
        fallback_engine = settings.FAST_ENGINE
    else:
        fallback_engine = preset.engine or settings.DEFAULT_ENGINE
    engine = _flag(flags, "engine") or fallback_engine

    raw_temp = _flag(flags, "temp")
    temperature = _parse_temperature(preset.temperature if raw_temp is None else raw_temp)
    if temperature is None:
        return ValidationError(
            "temp",
            "Option 'temp' must be a floating point number from 0 to 1.",
        )

    raw_tokens = _flag(flags, "tokens")
    tokens = _parse_tokens(preset.tokens if raw_tokens is None else raw_tokens)
    if tokens is None:
        return ValidationError("tokens", "Option 'tokens' must be a positive integer.")

    prompt = str(args[0]) if args and args[0] else ""
    api_key = env.get(settings.API_KEY_ENV) or ""

    if not help_ and not version:
        if not api_key:
            return ValidationError(
                "api_key",
                f"Environment variable {settings.API_KEY_ENV} must contain an OpenAI API key.",
            )
        if not prompt:
            return ValidationError("prompt", "Positional argument 'prompt' must be provided.")

    return Options(
        help=help_,
        version=version,
        dry_run=dry_run,
        engine=str(engine),
        temperature=temperature,
        tokens=tokens,
        prompt=prompt,
        api_key=api_key,
        template=preset.template,
        preset=preset.name,
        stop=preset.stop,
    )
