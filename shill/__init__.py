"""shill — generate text from a prompt with the OpenAI Completions API."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("shill")
except PackageNotFoundError:
    __version__ = "<unknown>"
