"""Configuration resolution and XDG paths.

* **Directory layout** -- the data directory used for crash logs follows the
  XDG Base Directory spec on Linux/BSD and falls back to
  ``~/.openapi-explorer/`` on macOS and Windows. See :func:`get_data_dir`.
* **Project-local config** -- an optional ``./openapi-explorer.json`` with
  ``spec`` and ``output_format`` keys. See :func:`load_project_config`.
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables, and project-local config into a
  :class:`~openapi_explorer.models.ServerConfig`.
"""

from __future__ import annotations

import json
import os
import platform
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from openapi_explorer.exceptions import ConfigError
from openapi_explorer.models import ServerConfig

_APP_NAME = "openapi-explorer"
_PROJECT_CONFIG_FILENAME = "openapi-explorer.json"

ENV_SPEC = "OPENAPI_EXPLORER_SPEC"
ENV_OUTPUT_FORMAT = "OPENAPI_EXPLORER_OUTPUT_FORMAT"

MISSING_SPEC_MESSAGE = (
    "OpenAPI spec path is required. Usage: openapi-explorer serve <path-to-spec>"
)


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/openapi-explorer/`` (default
    ``~/.local/share/openapi-explorer/``).
    On macOS/Windows: ``~/.openapi-explorer/logs/``.

    Returns:
        Absolute path to the data directory (guaranteed to exist).
    """
    if _is_xdg_platform():
        env_value = os.environ.get("XDG_DATA_HOME", "")
        base = Path(env_value) if env_value else Path.home() / ".local" / "share"
        path = base / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}" / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Project-local config ---


def load_project_config() -> Optional[dict[str, Any]]:
    """Load project-local configuration from ``./openapi-explorer.json``.

    Returns:
        The parsed JSON object, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    path = Path.cwd() / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


# --- Precedence resolution ---


def resolve_config(
    cli_spec: Optional[str] = None,
    cli_format: Optional[str] = None,
) -> ServerConfig:
    """Resolve the server configuration.

    Precedence (high to low):
        1. CLI flags (``cli_spec``, ``cli_format``)
        2. Environment variables (``OPENAPI_EXPLORER_SPEC``,
           ``OPENAPI_EXPLORER_OUTPUT_FORMAT``)
        3. Project config (``./openapi-explorer.json``)
        4. Defaults (``output_format`` = ``json``)

    Raises:
        ConfigError: If no spec path is given anywhere, or a value is invalid.
    """
    project = load_project_config() or {}

    spec_path = project.get("spec")
    output_format = project.get("output_format")

    env_spec = os.environ.get(ENV_SPEC)
    if env_spec:
        spec_path = env_spec
    env_format = os.environ.get(ENV_OUTPUT_FORMAT)
    if env_format:
        output_format = env_format

    if cli_spec is not None:
        spec_path = cli_spec
    if cli_format is not None:
        output_format = cli_format

    if not spec_path:
        raise ConfigError(MISSING_SPEC_MESSAGE)

    values: dict[str, Any] = {"spec_path": spec_path}
    if output_format is not None:
        values["output_format"] = str(output_format).lower()

    try:
        return ServerConfig(**values)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise ConfigError(f"Invalid configuration: {problems}") from exc
