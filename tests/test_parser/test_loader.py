"""Tests for openapi_explorer.parser.loader."""

from __future__ import annotations

import copy
import io
import json
import textwrap
from pathlib import Path
from unittest.mock import patch

import pytest

from openapi_explorer.exceptions import SpecParseError, UnsupportedVersionError
from openapi_explorer.parser.loader import (
    UNSUPPORTED_VERSION_MESSAGE,
    _load_from_file,
    _parse_content,
    is_openapi_v3,
    load_spec,
    validate_openapi_version,
)

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


# ---------------------------------------------------------------------------
# load_spec dispatch
# ---------------------------------------------------------------------------


class TestLoadSpec:
    """Test load_spec dispatcher routes to the correct loader."""

    def test_loads_from_file_json(self) -> None:
        result = load_spec(str(FIXTURES_DIR / "complex-endpoint.json"))
        assert result["openapi"] == "3.0.3"
        assert result["info"]["title"] == "Complex Endpoint Test API"

    def test_loads_from_file_yaml(self) -> None:
        result = load_spec(str(FIXTURES_DIR / "tasks-api.yaml"))
        assert result["info"]["title"] == "Tasks API"
        assert set(result["paths"]) == {"/tasks", "/tasks/{id}", "/health"}

    def test_loads_from_yml_extension(self, tmp_path: Path) -> None:
        yaml_content = textwrap.dedent("""\
            openapi: "3.1.0"
            info:
              title: YML Extension
              version: "2.0.0"
            paths: {}
        """)
        yml_file = tmp_path / "spec.yml"
        yml_file.write_text(yaml_content, encoding="utf-8")
        result = load_spec(str(yml_file))
        assert result["openapi"] == "3.1.0"

    def test_loads_from_stdin(self) -> None:
        spec_json = json.dumps({"openapi": "3.0.3", "info": {"title": "stdin test", "version": "1.0"}})
        with patch("openapi_explorer.parser.loader.sys") as mock_sys:
            mock_sys.stdin = io.StringIO(spec_json)
            result = load_spec("-")
        assert result["info"]["title"] == "stdin test"

    def test_empty_stdin_raises(self) -> None:
        with patch("openapi_explorer.parser.loader.sys") as mock_sys:
            mock_sys.stdin = io.StringIO("   \n")
            with pytest.raises(SpecParseError, match="No input"):
                load_spec("-")

    @pytest.mark.parametrize("url", ["http://example.com/spec.json", "https://example.com/spec.yaml"])
    def test_remote_sources_are_rejected(self, url: str) -> None:
        with pytest.raises(SpecParseError, match="Remote specs are not supported"):
            load_spec(url)


# ---------------------------------------------------------------------------
# _load_from_file
# ---------------------------------------------------------------------------


class TestLoadFromFile:
    """Test loading specs from local files."""

    def test_file_not_found_raises(self) -> None:
        with pytest.raises(SpecParseError, match="not found"):
            _load_from_file("/nonexistent/path/to/spec.json")

    def test_empty_file_raises(self, tmp_path: Path) -> None:
        empty = tmp_path / "empty.json"
        empty.write_text("", encoding="utf-8")
        with pytest.raises(SpecParseError, match="empty"):
            _load_from_file(str(empty))

    def test_invalid_json_with_json_extension_raises(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.json"
        bad.write_text("{not json", encoding="utf-8")
        with pytest.raises(SpecParseError, match="Invalid JSON"):
            _load_from_file(str(bad))

    def test_unknown_extension_falls_back_to_yaml(self, tmp_path: Path) -> None:
        spec = tmp_path / "spec.txt"
        spec.write_text("openapi: '3.0.0'\ninfo:\n  title: T\n", encoding="utf-8")
        assert _load_from_file(str(spec))["info"]["title"] == "T"


# ---------------------------------------------------------------------------
# _parse_content
# ---------------------------------------------------------------------------


class TestParseContent:
    """Test JSON/YAML content detection."""

    def test_json_object(self) -> None:
        assert _parse_content('{"openapi": "3.0.0"}') == {"openapi": "3.0.0"}

    def test_yaml_object(self) -> None:
        assert _parse_content("openapi: '3.0.0'\n") == {"openapi": "3.0.0"}

    def test_non_mapping_root_raises(self) -> None:
        with pytest.raises(SpecParseError, match="must be a JSON/YAML object"):
            _parse_content("[1, 2, 3]")

    def test_unparseable_raises(self) -> None:
        with pytest.raises(SpecParseError, match="Failed to parse"):
            _parse_content("key: [unclosed")


# ---------------------------------------------------------------------------
# Version checks
# ---------------------------------------------------------------------------


class TestOpenAPIVersion:
    """Test the OpenAPI 3.x gate."""

    @pytest.mark.parametrize("version", ["3.0.0", "3.0.3", "3.1.0"])
    def test_accepts_v3(self, version: str) -> None:
        spec = {"openapi": version}
        assert is_openapi_v3(spec)
        assert validate_openapi_version(spec) == version

    @pytest.mark.parametrize(
        "spec",
        [
            {"swagger": "2.0"},
            {"openapi": "2.0"},
            {"openapi": "4.0.0"},
            {"openapi": 3.0},
            {},
        ],
    )
    def test_rejects_everything_else(self, spec: dict) -> None:
        assert not is_openapi_v3(spec)
        with pytest.raises(UnsupportedVersionError) as exc_info:
            validate_openapi_version(spec)
        assert str(exc_info.value) == UNSUPPORTED_VERSION_MESSAGE

    def test_non_dict_is_not_v3(self) -> None:
        assert not is_openapi_v3(["openapi", "3.0.0"])
        assert not is_openapi_v3(None)

    def test_loader_does_not_mutate_returned_document(self) -> None:
        first = load_spec(str(FIXTURES_DIR / "complex-endpoint.json"))
        snapshot = copy.deepcopy(first)
        validate_openapi_version(first)
        assert first == snapshot
