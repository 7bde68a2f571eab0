"""Named prompt presets — a template plus default generation parameters.

A preset bundles everything needed to turn raw user input into a request:
a pure ``template`` function and defaults for the output length and
temperature.  Presets may also pin an engine or a stop sequence.

The registry is built once at import time and never changes afterwards;
callers pass it into the resolver explicitly.

Usage:
    from shill.presets import PRESETS
    preset = PRESETS.lookup("bash")
    prompt = preset.template("list all files")
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from types import MappingProxyType
from typing import Callable, Iterable, Iterator

DEFAULT_PRESET = "default"


class UnknownPreset(LookupError):
    """Raised when a preset name is not registered."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown preset '{self.name}'"


@dataclass(frozen=True)
class Preset:
    name: str
    template: Callable[[str], str]
    tokens: int
    temperature: float
    engine: str | None = None
    stop: str | None = None

    def __post_init__(self):
        if self.tokens < 1:
            raise ValueError(f"Preset '{self.name}': tokens must be positive")
        if not 0.0 <= self.temperature <= 1.0:
            raise ValueError(f"Preset '{self.name}': temperature must be in [0, 1]")


class PresetRegistry:
    """Fixed, ordered name → preset table."""

    def __init__(self, presets: Iterable[Preset]):
        table: dict[str, Preset] = {}
        for preset in presets:
            if preset.name in table:
                raise ValueError(f"Duplicate preset name: '{preset.name}'")
            table[preset.name] = preset
        self._presets = MappingProxyType(table)

    def lookup(self, name: str) -> Preset:
        try:
            return self._presets[name]
        except KeyError:
            raise UnknownPreset(name) from None

    def names(self) -> list[str]:
        return list(self._presets)

    def __contains__(self, name: object) -> bool:
        return name in self._presets

    def __iter__(self) -> Iterator[Preset]:
        return iter(self._presets.values())

    def __len__(self) -> int:
        return len(self._presets)


# ── Templates ─────────────────────────────────────────────────────────────

def identity(text: str) -> str:
    return text


def with_header(header: tuple[str, ...], text: str) -> str:
    """Prepend fixed lines to the prompt, one per line."""
    return "\n".join((*header, text))


BASH_HEADER = (
    "# Navigate out of the current directory.",
    "cd ..",
    "",
)

PREACT_HEADER = (
    'import * as React from "preact";',
    "",
)

REACT_HEADER = (
    'import * as React from "react";',
    "",
)


PRESETS = PresetRegistry([
    Preset(
        name=DEFAULT_PRESET,
        template=identity,
        tokens=100,
        temperature=0.5,
    ),
    Preset(
        name="bash",
        template=partial(with_header, BASH_HEADER),
        tokens=100,
        temperature=0.2,
        # Deliberate change from the preset shill was modelled on, which sent
        # no stop sequence: generation stops at the first blank line, and only
        # the text before it is printed, without the prompt.
        stop="\n\n",
    ),
    Preset(
        name="preact",
        template=partial(with_header, PREACT_HEADER),
        tokens=1000,
        temperature=0.2,
    ),
    Preset(
        name="react",
        template=partial(with_header, REACT_HEADER),
        tokens=1000,
        temperature=0.2,
    ),
])
