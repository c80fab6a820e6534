"""Shared test fixtures for openapi-explorer.

Provides reusable fixtures for loading spec fixtures, building stores and
resolvers over in-memory documents, isolating config, managing output state,
and running CLI commands. These fixtures are automatically discovered by
pytest and available to all test modules without explicit imports.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Optional

import pytest
import yaml

from openapi_explorer.formatters import Formatter, JsonFormatter, YamlFormatter
from openapi_explorer.output import DisplayMode, OutputManager, reset_output, set_output
from openapi_explorer.parser import create_default_transform_service
from openapi_explorer.rendering import RenderContext
from openapi_explorer.resolver import AddressResolver
from openapi_explorer.store import DocumentStore

FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time.  When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale
    ("I/O operation on closed file").  Resetting forces a fresh manager
    to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Raw spec fixtures (plain dicts loaded from fixture files)
# ---------------------------------------------------------------------------


@pytest.fixture
def complex_endpoint_raw() -> dict[str, Any]:
    """Load the complex-endpoint spec (one deep path, three schemas)."""
    with open(FIXTURES_DIR / "complex-endpoint.json") as f:
        return json.load(f)


@pytest.fixture
def tasks_api_raw() -> dict[str, Any]:
    """Load the tasks spec (several paths, a path without methods, a schema alias)."""
    with open(FIXTURES_DIR / "tasks-api.yaml") as f:
        return yaml.safe_load(f)


@pytest.fixture
def minimal_spec() -> dict[str, Any]:
    """A single path ``/tasks`` with ``get`` and ``post``."""
    return {
        "openapi": "3.0.0",
        "info": {"title": "Minimal", "version": "1.0.0"},
        "paths": {
            "/tasks": {
                "get": {"summary": "List", "responses": {"200": {"description": "OK"}}},
                "post": {"summary": "Create", "responses": {"201": {"description": "Created"}}},
            }
        },
    }


# ---------------------------------------------------------------------------
# Store / resolver fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def make_store() -> Callable[[Any], DocumentStore]:
    """Factory for DocumentStores whose loader returns a given document without touching disk."""

    def _make(document: Any) -> DocumentStore:
        return DocumentStore(
            "in-memory.json",
            create_default_transform_service(),
            loader=lambda _source: document,
        )

    return _make


@pytest.fixture
def make_resolver(make_store) -> Callable[..., AddressResolver]:
    """Factory for AddressResolvers over an in-memory document (JSON codec by default)."""

    def _make(document: Any, formatter: Optional[Formatter] = None) -> AddressResolver:
        return AddressResolver(make_store(document), formatter or JsonFormatter())

    return _make


@pytest.fixture
def json_context() -> RenderContext:
    """Render context using the JSON codec."""
    return RenderContext(formatter=JsonFormatter())


@pytest.fixture
def yaml_context() -> RenderContext:
    """Render context using the YAML codec."""
    return RenderContext(formatter=YamlFormatter())


@pytest.fixture
def spec_file(tmp_path: Path) -> Path:
    """Copy the complex-endpoint fixture into tmp_path and return its path."""
    path = tmp_path / "complex-endpoint.json"
    path.write_text((FIXTURES_DIR / "complex-endpoint.json").read_text())
    return path


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Sets XDG_DATA_HOME to a subdirectory of tmp_path so that crash logs never
    land in the real user directory, clears all OPENAPI_EXPLORER_*
    environment variables, and changes the working directory to tmp_path.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for var in ["OPENAPI_EXPLORER_SPEC", "OPENAPI_EXPLORER_OUTPUT_FORMAT"]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN, quiet OutputManager as the global output."""
    output = OutputManager(mode=DisplayMode.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner.

    Returns a CliRunner instance that captures stdout/stderr and
    provides a consistent interface for invoking Typer apps in tests.
    """
    from typer.testing import CliRunner

    return CliRunner()
