"""Shared interface and helpers for renderable views.

Every renderable wraps one part of the rewritten document and turns it into
:class:`~openapi_explorer.models.RenderResultItem` objects. Renderables are
built fresh for each request, hold no long-lived state, and never format
text through the codec themselves -- they return raw data (detail views) or
pre-rendered plain text (list views) and leave the codec to the resolver.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import quote

from openapi_explorer.formatters import Formatter
from openapi_explorer.models import BASE_URI, RenderResultItem

# Characters encodeURIComponent leaves alone besides the unreserved set.
_PATH_SAFE_CHARS = "!'()*"


@dataclass(frozen=True)
class RenderContext:
    """Per-request rendering context.

    Attributes:
        formatter: Codec configured for the process.
        base_uri: Scheme prefix used in hints and addresses.
    """

    formatter: Formatter
    base_uri: str = BASE_URI


class Renderable(ABC):
    """A view over part of the document with a list form and a detail form."""

    @abstractmethod
    def render_list(self, context: RenderContext) -> list[RenderResultItem]:
        """Render a compact plain-text listing of child addresses."""

    @abstractmethod
    def render_detail(self, context: RenderContext) -> list[RenderResultItem]:
        """Render the full detail view of this object."""


def create_error_result(address_suffix: str, message: str) -> list[RenderResultItem]:
    """Return a single-element result list holding an error item."""
    return [create_error_item(address_suffix, message)]


def create_error_item(address_suffix: str, message: str) -> RenderResultItem:
    """Build an error item; errors are always rendered as plain text."""
    return RenderResultItem(
        address_suffix=address_suffix,
        data=None,
        is_error=True,
        error_text=message,
        render_as_list=True,
    )


def generate_list_hint(context: RenderContext, item_type: str, detail_pattern: str) -> str:
    """Return the navigation hint appended to list views.

    Args:
        context: Rendering context supplying the base URI.
        item_type: What one listed entry is (``"schema"``, ``"operation"``).
        detail_pattern: Address pattern relative to the base URI, e.g.
            ``"components/schemas/{name}"``.
    """
    return (
        f"Hint: Use '{context.base_uri}{detail_pattern}' "
        f"to view details for a specific {item_type}."
    )


def get_operation_summary(operation: Any) -> Optional[str]:
    """Return an operation's ``summary``, falling back to ``operationId``, else ``None``."""
    if not isinstance(operation, dict):
        return None
    return operation.get("summary") or operation.get("operationId") or None


def encode_path(path: str) -> str:
    """Percent-encode an API path for use as a single address segment.

    Leading slashes are dropped first, so ``/pets/{id}`` becomes
    ``pets%2F%7Bid%7D``. Decoding the result and re-adding one leading slash
    gives back the original path.
    """
    return quote(path.lstrip("/"), safe=_PATH_SAFE_CHARS)
