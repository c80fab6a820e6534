"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~openapi_explorer.exceptions.ExplorerError` subclass.
Wrapper scripts can inspect the exit code to tell a bad address from a
broken spec file without parsing stderr.

Example::

    $ openapi-explorer read components/schemas/Missing --spec api.yaml
    $ echo $?
    4   # EXIT_NOT_FOUND -- at least one requested item does not exist
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or a malformed resource address."""

EXIT_NOT_FOUND = 4
"""A requested field, path, operation, or component does not exist in the document."""

EXIT_SPEC_PARSE_ERROR = 7
"""The OpenAPI document could not be read, parsed, or has an unsupported version."""
