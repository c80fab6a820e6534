"""Load OpenAPI documents from a local file or stdin.

This module handles all I/O for reading raw OpenAPI documents and converting
them into Python dictionaries. It supports both JSON and YAML formats with
automatic format detection. Remote URLs are deliberately not fetched: the
explorer performs no network I/O of its own.

The public functions are:

* :func:`load_spec` -- Load and parse a spec from any supported source.
* :func:`is_openapi_v3` -- Cheap check used on every resource request.
* :func:`validate_openapi_version` -- Check and return the ``openapi`` version
  string, rejecting Swagger 2.x and other major versions.

The returned dict is owned by :class:`~openapi_explorer.store.DocumentStore`
and must never be mutated; rewritten views are produced by
:mod:`~openapi_explorer.parser.transform`.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import yaml

from openapi_explorer.exceptions import SpecParseError, UnsupportedVersionError

UNSUPPORTED_VERSION_MESSAGE = "Only OpenAPI v3 specifications are supported"


def load_spec(source: str) -> dict[str, Any]:
    """Load an OpenAPI spec from a file path or stdin ('-').

    Supports JSON and YAML formats.
    Auto-detects format from content/extension.

    Args:
        source: A file path, or '-' for stdin.

    Returns:
        The parsed spec as a dictionary.

    Raises:
        SpecParseError: If the source cannot be loaded or parsed.
    """
    if source == "-":
        return _load_from_stdin()
    if source.startswith(("http://", "https://")):
        raise SpecParseError(
            f"Remote specs are not supported: {source}. Download the file and pass its path."
        )
    return _load_from_file(source)


def _load_from_stdin() -> dict[str, Any]:
    """Read spec from stdin.

    Reads all available input and attempts to parse as JSON, then YAML.

    Returns:
        The parsed spec dictionary.

    Raises:
        SpecParseError: If stdin is empty or content cannot be parsed.
    """
    try:
        content = sys.stdin.read()
    except Exception as exc:
        raise SpecParseError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise SpecParseError("No input received from stdin")

    return _parse_content(content, hint="stdin")


def _load_from_file(path: str) -> dict[str, Any]:
    """Load spec from local file.

    Supports .json, .yaml, and .yml extensions. Falls back to content-based
    detection if the extension is not recognized.

    Args:
        path: Path to the local file.

    Returns:
        The parsed spec dictionary.

    Raises:
        SpecParseError: If the file cannot be read or content cannot be parsed.
    """
    file_path = Path(path).expanduser()
    if not file_path.is_file():
        raise SpecParseError(f"Spec file not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SpecParseError(f"Failed to read spec file {path}: {exc}") from exc

    if not content.strip():
        raise SpecParseError(f"Spec file is empty: {path}")

    suffix = file_path.suffix.lower()
    hint = ""
    if suffix == ".json":
        hint = "json"
    elif suffix in (".yaml", ".yml"):
        hint = "yaml"

    return _parse_content(content, hint=hint)


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Parse content as JSON or YAML.

    Tries JSON first (unless hint is 'yaml'), then falls back to YAML.
    Valid JSON is also valid YAML, but JSON parsing is stricter and faster.

    Args:
        content: The raw string content.
        hint: Optional format hint ('json' or 'yaml').

    Returns:
        The parsed dictionary.

    Raises:
        SpecParseError: If the content cannot be parsed as either format.
    """
    json_error: Exception | None = None
    yaml_error: Exception | None = None

    if hint != "yaml":
        try:
            result = json.loads(content)
            if not isinstance(result, dict):
                raise SpecParseError(
                    "Spec must be a JSON/YAML object (got "
                    f"{type(result).__name__})"
                )
            return result
        except json.JSONDecodeError as exc:
            json_error = exc
            if hint == "json":
                raise SpecParseError(f"Invalid JSON: {exc}") from exc

    try:
        result = yaml.safe_load(content)
        if not isinstance(result, dict):
            raise SpecParseError(
                "Spec must be a JSON/YAML object (got "
                f"{type(result).__name__ if result is not None else 'empty document'})"
            )
        return result
    except yaml.YAMLError as exc:
        yaml_error = exc

    msg = "Failed to parse spec as JSON or YAML"
    if json_error:
        msg += f"\n  JSON error: {json_error}"
    if yaml_error:
        msg += f"\n  YAML error: {yaml_error}"
    raise SpecParseError(msg)


def is_openapi_v3(spec: Any) -> bool:
    """Return ``True`` when *spec* declares an ``openapi`` version starting with ``3.``.

    Args:
        spec: Any value; non-dicts are never OpenAPI v3 documents.
    """
    if not isinstance(spec, dict):
        return False
    version = spec.get("openapi")
    return isinstance(version, str) and version.startswith("3.")


def validate_openapi_version(spec: dict[str, Any]) -> str:
    """Validate and return the OpenAPI version string.

    Any 3.x version is accepted. Swagger 2.x documents, documents without an
    ``openapi`` field, and other major versions are rejected with the same
    fixed message, which is what clients see as the error item text.

    Args:
        spec: The parsed spec dictionary.

    Returns:
        The OpenAPI version string (e.g., '3.0.3', '3.1.0').

    Raises:
        UnsupportedVersionError: If the document is not OpenAPI 3.x.
    """
    if not is_openapi_v3(spec):
        raise UnsupportedVersionError(UNSUPPORTED_VERSION_MESSAGE)
    return spec["openapi"]
