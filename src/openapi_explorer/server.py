"""MCP server binding.

Exposes the address space as MCP resources over the low-level
:class:`mcp.server.lowlevel.Server`. Listing is static (a handful of fixed
resources plus one template per address shape); every ``resources/read`` is
delegated to :class:`~openapi_explorer.resolver.AddressResolver`, and each
formatted item becomes one ``TextResourceContents`` entry carrying its own
``uri``, ``mimeType`` and ``isError`` flag.

The server speaks JSON-RPC over stdio, so nothing here writes to stdout.
"""

from __future__ import annotations

from typing import NamedTuple

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from openapi_explorer import __version__
from openapi_explorer.formatters import Formatter, create_formatter
from openapi_explorer.models import BASE_URI, PLAIN_TEXT_MEDIA_TYPE, ServerConfig
from openapi_explorer.output import debug, info
from openapi_explorer.parser import create_default_transform_service
from openapi_explorer.resolver import AddressResolver
from openapi_explorer.store import DocumentStore

SERVER_NAME = "openapi-explorer"


class ResourceEntry(NamedTuple):
    """A resource or template advertised to clients."""

    uri: str
    name: str
    description: str
    is_list: bool


STATIC_RESOURCES: tuple[ResourceEntry, ...] = (
    ResourceEntry(
        f"{BASE_URI}endpoints/list",
        "endpoint-list",
        "One line per path with its HTTP methods, e.g. 'GET POST /pets'.",
        True,
    ),
    ResourceEntry(
        f"{BASE_URI}schemas/list",
        "schema-list",
        "Names of all schemas in components.schemas, one per line.",
        True,
    ),
    ResourceEntry(
        f"{BASE_URI}paths",
        "paths",
        "Every API path with the HTTP methods it supports.",
        True,
    ),
    ResourceEntry(
        f"{BASE_URI}components",
        "components",
        "Component types defined in the document.",
        True,
    ),
    ResourceEntry(
        f"{BASE_URI}info",
        "info",
        "The document's info object (title, version, description).",
        False,
    ),
)

RESOURCE_TEMPLATES: tuple[ResourceEntry, ...] = (
    ResourceEntry(
        f"{BASE_URI}{{field}}",
        "top-level-field",
        "A top-level field of the document. 'paths' and 'components' are lists.",
        False,
    ),
    ResourceEntry(
        f"{BASE_URI}paths/{{path}}",
        "path-item",
        "HTTP methods available on one path. The path is URL-encoded without its leading slash.",
        True,
    ),
    ResourceEntry(
        f"{BASE_URI}paths/{{path}}/{{method*}}",
        "operation",
        "Operation details for one path. Separate several methods with commas.",
        False,
    ),
    ResourceEntry(
        f"{BASE_URI}components/{{type}}",
        "component-map",
        "Names of all components of one type, e.g. schemas or responses.",
        True,
    ),
    ResourceEntry(
        f"{BASE_URI}components/{{type}}/{{name*}}",
        "component",
        "Component details. Separate several names with commas.",
        False,
    ),
    ResourceEntry(
        f"{BASE_URI}schema/{{name*}}",
        "schema",
        "Schema details by name. Separate several names with commas.",
        False,
    ),
    ResourceEntry(
        f"{BASE_URI}endpoint/{{method*}}/{{path*}}",
        "endpoint",
        "Operation details for every method and path combination. Separate values with commas.",
        False,
    ),
)


def _media_type(entry: ResourceEntry, formatter: Formatter) -> str:
    return PLAIN_TEXT_MEDIA_TYPE if entry.is_list else formatter.get_media_type()


def create_server(resolver: AddressResolver) -> Server:
    """Build the MCP server for *resolver*.

    Args:
        resolver: Resolver serving every ``resources/read`` request. Its
            formatter decides the media type advertised for detail views.

    Returns:
        A configured, not yet running, low-level MCP server.
    """
    server: Server = Server(SERVER_NAME, version=__version__)
    formatter = resolver.formatter

    @server.list_resources()
    async def list_resources() -> list[types.Resource]:
        return [
            types.Resource(
                uri=entry.uri,
                name=entry.name,
                description=entry.description,
                mimeType=_media_type(entry, formatter),
            )
            for entry in STATIC_RESOURCES
        ]

    @server.list_resource_templates()
    async def list_resource_templates() -> list[types.ResourceTemplate]:
        return [
            types.ResourceTemplate(
                uriTemplate=entry.uri,
                name=entry.name,
                description=entry.description,
                mimeType=_media_type(entry, formatter),
            )
            for entry in RESOURCE_TEMPLATES
        ]

    async def read_resource(request: types.ReadResourceRequest) -> types.ServerResult:
        uri = str(request.params.uri)
        items = await resolver.resolve(uri)
        contents = [
            types.TextResourceContents(
                uri=item.address,
                mimeType=item.media_type,
                text=item.text,
                isError=item.is_error,
            )
            for item in items
        ]
        return types.ServerResult(types.ReadResourceResult(contents=contents))

    # One content entry per formatted item, each with its own isError.
    server.request_handlers[types.ReadResourceRequest] = read_resource
    return server


def build_resolver(config: ServerConfig) -> AddressResolver:
    """Wire a store, codec and resolver together from *config*."""
    store = DocumentStore(config.spec_path, create_default_transform_service())
    return AddressResolver(store, create_formatter(config.output_format))


async def serve_stdio(config: ServerConfig) -> None:
    """Load the document and serve it over stdio until the client disconnects.

    Raises:
        DocumentLoadError: If the document cannot be loaded. The server is
            never started in that case.
    """
    resolver = build_resolver(config)
    document = await resolver.store.load()
    doc_info = document.get("info")
    title = doc_info.get("title", "untitled") if isinstance(doc_info, dict) else "untitled"
    info(f"Loaded OpenAPI document '{title}' from {config.spec_path}")

    server = create_server(resolver)
    debug(f"Serving {SERVER_NAME} over stdio ({config.output_format.value} output)")
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
