"""shill — generate text from a prompt.

Usage:
    shill "def fizzbuzz(n):"                 Complete with the default preset
    shill -p bash "list all python files"    Use the bash preset
    shill --dry --tokens=5 "hello"           Everything except the API call
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Any, Mapping, Sequence, TextIO

from . import __version__
from .dispatcher import RequestDispatcher
from .errors import (
    EXIT_INTERRUPTED,
    EXIT_OK,
    EXIT_UNEXPECTED,
    EXIT_VALIDATION,
    ShillError,
    StreamError,
    UsageError,
)
from .options import ValidationError, resolve_options
from .presets import DEFAULT_PRESET, PRESETS, PresetRegistry
from .renderer import ResponseRenderer
from .settings import Settings

logger = logging.getLogger(__name__)

ERROR_MARKER = "shill error"


# ---------------------------------------------------------------------------
#  Pages
# ---------------------------------------------------------------------------

def help_text(registry: PresetRegistry = PRESETS, settings: Settings | None = None) -> str:
    settings = settings or Settings()
    default = registry.lookup(DEFAULT_PRESET)
    presets = "".join(f"\t{name}\n" for name in registry.names())
    return f"""\
shill: generates text using OpenAI's API

USAGE:
\tshill [...options] <prompt>

ARGUMENTS:
\tprompt
\t\tinput text for the OpenAI API query

OPTIONS:
\t-h, --help
\t\tshow this help message and exit
\t-v, --version
\t\tshow the shill command's version and exit
\t-e, --engine=<name>
\t\tname of language engine (default: {settings.DEFAULT_ENGINE})
\t-t, --temp=<num>
\t\tquery temperature (default: {default.temperature})
\t-n, --tokens=<num>
\t\tmaximum output length excluding prompt length (default: {default.tokens})
\t-p, --preset=<name>
\t\tname of the preset that should be used (default: {DEFAULT_PRESET})
\t-f, --fast
\t\tshorthand for using {settings.FAST_ENGINE} as engine
\t    --dry
\t\ttry the shill command without making an API request

PRESETS:
{presets}
ENVIRONMENT:
\t{settings.API_KEY_ENV}
\t\tsecret key provided by OpenAI
"""


def version_text() -> str:
    return f"shill {__version__}"


# ---------------------------------------------------------------------------
#  Flags
# ---------------------------------------------------------------------------

class _FlagParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of exiting on bad input."""

    def error(self, message: str):
        raise UsageError(message)


def _build_parser() -> argparse.ArgumentParser:
    parser = _FlagParser(prog="shill", add_help=False, allow_abbrev=False)
    parser.add_argument("-h", "--help", action="store_true")
    parser.add_argument("-v", "--version", action="store_true")
    parser.add_argument("-e", "--engine")
    # Kept as strings: the options resolver owns number parsing.
    parser.add_argument("-t", "--temp")
    parser.add_argument("-n", "--tokens")
    parser.add_argument("-p", "--preset")
    parser.add_argument("-f", "--fast", action="store_true")
    parser.add_argument("--dry", action="store_true")
    parser.add_argument("prompt", nargs="*")
    return parser


def parse_flags(argv: Sequence[str]) -> tuple[dict[str, Any], list[str]]:
    """Decode argv into a flat flag map and the positional arguments."""
    flags = vars(_build_parser().parse_args(list(argv)))
    args = flags.pop("prompt")
    return flags, args


# ---------------------------------------------------------------------------
#  Entry points
# ---------------------------------------------------------------------------

def _write(stream: TextIO, text: str) -> None:
    try:
        stream.write(text)
        stream.flush()
    except OSError as e:
        raise StreamError(f"Could not write output: {e}") from e


def _report(stderr: TextIO, message: object) -> None:
    try:
        stderr.write(f"{ERROR_MARKER}: {message}\n")
        stderr.flush()
    except OSError:
        # stderr itself is gone; the exit code still carries the failure
        logger.debug("Could not report error: %s", message)


def run(
    argv: Sequence[str],
    env: Mapping[str, str],
    stdout: TextIO,
    stderr: TextIO,
    *,
    registry: PresetRegistry = PRESETS,
    settings: Settings | None = None,
    dispatcher: RequestDispatcher | None = None,
) -> int:
    """Run one invocation and return the process exit code.

    Without explicit *settings* they are read from *env*, so a malformed
    configuration variable is reported like any other error.
    """
    try:
        if settings is None:
            settings = Settings.from_env(env)
        flags, args = parse_flags(argv)
        options = resolve_options(flags, env, args, registry=registry, settings=settings)
        if isinstance(options, ValidationError):
            _report(stderr, options)
            return EXIT_VALIDATION

        if options.help:
            _write(stdout, help_text(registry, settings))
            return EXIT_OK
        if options.version:
            _write(stdout, version_text() + "\n")
            return EXIT_OK

        dispatcher = dispatcher or RequestDispatcher(settings=settings)
        renderer = ResponseRenderer(stdout, stderr)
        request = dispatcher.build_request(options)
        renderer.render_request(request)
        result = dispatcher.dispatch(options, request)
        renderer.render_result(request, result)
        return EXIT_OK
    except ShillError as e:
        logger.debug("%s", type(e).__name__, exc_info=True)
        _report(stderr, e)
        return e.exit_code
    except KeyboardInterrupt:
        _report(stderr, "interrupted")
        return EXIT_INTERRUPTED
    except Exception as e:
        logger.debug("Unhandled error", exc_info=True)
        _report(stderr, e)
        return EXIT_UNEXPECTED


def main() -> int:
    level = getattr(logging, os.environ.get("LOG_LEVEL", "WARNING").upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(message)s")
    return run(sys.argv[1:], os.environ, sys.stdout, sys.stderr)


if __name__ == "__main__":
    raise SystemExit(main())
