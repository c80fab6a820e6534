"""Canonical Pydantic models shared across all openapi-explorer modules.

This is the single source of truth for data shapes in the project. The models
fall into three groups:

**Configuration models** -- resolved by :mod:`openapi_explorer.config`:
    :class:`OutputFormat` and :class:`ServerConfig`.

**Document models** -- vocabulary for walking an OpenAPI document:
    :class:`HTTPMethod`, :class:`ResourceKind`, :class:`DocumentFormat`, and
    :class:`TransformContext`.

**Rendering models** -- produced by the renderables and the resolver:
    :class:`RenderResultItem` and :class:`FormattedResultItem`.

The source document itself is kept as a plain ``dict[str, Any]``; it is never
wrapped in a model so that every key survives untouched into detail views.
"""

from __future__ import annotations

import enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

BASE_URI = "openapi://"
"""Scheme prefix shared by every resource address."""

PLAIN_TEXT_MEDIA_TYPE = "text/plain"


# --- Configuration ---


class OutputFormat(str, enum.Enum):
    """Codec used for detail views. Fixed for the lifetime of the process."""

    JSON = "json"
    YAML = "yaml"


class ServerConfig(BaseModel):
    """Effective server configuration after precedence resolution.

    See :func:`~openapi_explorer.config.resolve_config` for how each field
    is resolved from CLI flags, environment variables, and the project file.
    """

    spec_path: str = Field(description="Path to the OpenAPI document, or '-' for stdin")
    output_format: OutputFormat = Field(
        default=OutputFormat.JSON, description="Detail view codec: json or yaml"
    )


# --- Document vocabulary ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods treated as operations when walking a path item.

    Other path-item keys (``parameters``, ``servers``, ``summary``, and the
    rarely used ``head``/``options``/``trace``) are not listed as operations.
    """

    GET = "get"
    PUT = "put"
    POST = "post"
    DELETE = "delete"
    PATCH = "patch"


# Order used by the token-efficient endpoint index (``GET POST /pets``).
ENDPOINT_LIST_METHOD_ORDER: tuple[HTTPMethod, ...] = (
    HTTPMethod.GET,
    HTTPMethod.POST,
    HTTPMethod.PUT,
    HTTPMethod.DELETE,
    HTTPMethod.PATCH,
)


class ResourceKind(str, enum.Enum):
    """Kind of resource a rewrite is being performed for."""

    ENDPOINT = "endpoint"
    SCHEMA = "schema"


class DocumentFormat(str, enum.Enum):
    """API description formats a reference transformer can be registered for."""

    OPENAPI = "openapi"
    ASYNCAPI = "asyncapi"
    GRAPHQL = "graphql"


class TransformContext(BaseModel):
    """Context passed through a reference rewrite.

    Frozen so that it can key the document store's rewrite cache. Only
    ``document_format`` currently influences which transformer runs.
    """

    model_config = ConfigDict(frozen=True)

    resource_kind: ResourceKind = ResourceKind.SCHEMA
    document_format: DocumentFormat = DocumentFormat.OPENAPI
    path: Optional[str] = None
    method: Optional[str] = None


# --- Rendering ---


class RenderResultItem(BaseModel):
    """One abstract result produced by a renderable.

    ``address_suffix`` is relative to :data:`BASE_URI`. List items carry their
    pre-rendered text in ``data`` and set ``render_as_list``; error items set
    ``is_error`` and ``error_text`` and are always emitted as plain text.
    """

    address_suffix: str
    data: Any = None
    is_error: bool = False
    error_text: Optional[str] = None
    render_as_list: bool = False


class FormattedResultItem(BaseModel):
    """Wire-ready projection of a :class:`RenderResultItem` after codec application.

    ``exit_code`` is set on error items whose failure maps to a specific
    process exit code (a bad address, an unloadable document, a codec
    failure). Per-item lookup misses leave it unset.
    """

    address: str
    media_type: str
    text: str
    is_error: bool = False
    exit_code: Optional[int] = None
