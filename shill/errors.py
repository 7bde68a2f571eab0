"""Error types and process exit codes.

Validation problems are not exceptions: the resolver returns a
``ValidationError`` value (see ``shill.options``).  Everything here is
raised and only caught by the CLI entry point.

Exit codes:
    0    success (including help and version)
    1    unexpected error
    2    invalid flags, environment, configuration or prompt
    3    completion provider failure (auth, network, malformed response)
    4    writing to stdout or stderr failed
    130  interrupted
"""

EXIT_OK = 0
EXIT_UNEXPECTED = 1
EXIT_VALIDATION = 2
EXIT_PROVIDER = 3
EXIT_STREAM = 4
EXIT_INTERRUPTED = 130


class ShillError(Exception):
    """Base class for errors raised by shill."""

    exit_code = EXIT_UNEXPECTED


class ProviderError(ShillError):
    """The completion provider rejected or failed the request."""

    exit_code = EXIT_PROVIDER


class StreamError(ShillError):
    """An output stream could not be written."""

    exit_code = EXIT_STREAM


class UsageError(ShillError):
    """The command line could not be parsed."""

    exit_code = EXIT_VALIDATION


class ConfigError(ShillError):
    """A configuration variable holds a value that cannot be used."""

    exit_code = EXIT_VALIDATION
