"""Output codecs for detail views.

A codec turns one payload value (an operation, a schema, the ``info`` object,
...) into text and reports the media type of that text. The codec is chosen
once per process from :class:`~openapi_explorer.models.OutputFormat`; there is
no per-request override. List views and error items never pass through a
codec -- they are always plain text (see
:func:`~openapi_explorer.resolver.resolver.format_results`).
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any

import yaml

from openapi_explorer.exceptions import ConfigError, RenderFormatError
from openapi_explorer.models import OutputFormat

_YAML_DOCUMENT_END = "...\n"


class Formatter(ABC):
    """Interface shared by all output codecs."""

    @abstractmethod
    def format(self, value: Any) -> str:
        """Serialise *value* to text.

        Raises:
            RenderFormatError: If *value* cannot be serialised.
        """

    @abstractmethod
    def get_media_type(self) -> str:
        """Media type of the text returned by :meth:`format`."""


class JsonFormatter(Formatter):
    """Pretty-printed JSON with a stable two-space indent."""

    def format(self, value: Any) -> str:
        try:
            return json.dumps(value, indent=2, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise RenderFormatError(str(exc)) from exc

    def get_media_type(self) -> str:
        return "application/json"


class _NoAliasSafeDumper(yaml.SafeDumper):
    """SafeDumper that writes repeated objects out in full instead of using anchors."""

    def ignore_aliases(self, data: Any) -> bool:
        return True


class YamlFormatter(Formatter):
    """Block-style YAML: no anchors/aliases, no line wrapping, key order preserved.

    The result always ends with exactly one newline. PyYAML terminates bare
    scalar documents with an explicit ``...`` marker; it is stripped so that
    ``None`` renders as ``null\\n``.
    """

    def format(self, value: Any) -> str:
        try:
            text = yaml.dump(
                value,
                Dumper=_NoAliasSafeDumper,
                default_flow_style=False,
                sort_keys=False,
                allow_unicode=True,
                indent=2,
                width=float("inf"),
            )
        except yaml.YAMLError as exc:
            raise RenderFormatError(str(exc)) from exc

        if text.endswith(_YAML_DOCUMENT_END):
            text = text[: -len(_YAML_DOCUMENT_END)]
        if not text.endswith("\n"):
            text += "\n"
        return text

    def get_media_type(self) -> str:
        return "text/yaml"


def create_formatter(output_format: OutputFormat | str) -> Formatter:
    """Return the codec for *output_format*.

    Args:
        output_format: An :class:`~openapi_explorer.models.OutputFormat` or
            its string value (``"json"`` / ``"yaml"``).

    Raises:
        ConfigError: If the format is not supported.
    """
    try:
        resolved = OutputFormat(output_format)
    except ValueError:
        raise ConfigError(
            f"Unsupported output format: {output_format}. Use 'json' or 'yaml'."
        ) from None

    if resolved == OutputFormat.YAML:
        return YamlFormatter()
    return JsonFormatter()
