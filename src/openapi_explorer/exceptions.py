"""Exception hierarchy for openapi-explorer.

All exceptions inherit from :class:`ExplorerError`, which carries an
``exit_code`` attribute mapped to a constant from
:mod:`openapi_explorer.exit_codes`. The CLI entry point in
:func:`openapi_explorer.app.main` catches ``ExplorerError`` and exits with the
appropriate code. Inside the MCP server the same exceptions never escape a
request: the resolver converts them into error items.

Subclass hierarchy::

    ExplorerError (exit 1)
    +-- InvalidAddressError      (exit 2)
    +-- NotFoundError            (exit 4)
    +-- SpecParseError           (exit 7)
    +-- DocumentLoadError        (exit 7)
    +-- UnsupportedVersionError  (exit 7)
    +-- RenderFormatError        (exit 1)
    +-- ConfigError              (exit 1)
"""

from openapi_explorer.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
    EXIT_SPEC_PARSE_ERROR,
)


class ExplorerError(Exception):
    """Base exception for all openapi-explorer errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`openapi_explorer.exit_codes`.

    Args:
        message: Human-readable error description.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidAddressError(ExplorerError):
    """Raised when a resource address is malformed or a required segment is empty."""

    exit_code = EXIT_INVALID_USAGE


class NotFoundError(ExplorerError):
    """Raised when a named part of the document does not exist."""

    exit_code = EXIT_NOT_FOUND


class SpecParseError(ExplorerError):
    """Raised when the spec source cannot be read or parsed as JSON/YAML."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class DocumentLoadError(ExplorerError):
    """Raised by the document store when the initial load fails.

    Wraps the underlying :class:`SpecParseError` (or I/O error) message.
    """

    exit_code = EXIT_SPEC_PARSE_ERROR


class UnsupportedVersionError(ExplorerError):
    """Raised when the document does not declare an OpenAPI 3.x version."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class RenderFormatError(ExplorerError):
    """Raised when an output codec cannot serialise a value."""

    exit_code = EXIT_GENERIC_FAILURE


class ConfigError(ExplorerError):
    """Raised for configuration problems (missing spec path, invalid config file, bad format)."""

    exit_code = EXIT_GENERIC_FAILURE
