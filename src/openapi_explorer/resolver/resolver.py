"""Turn a resource address into formatted result items.

:class:`AddressResolver` is the single entry point used by both the MCP
server and the ``read`` command. For one request it parses the address,
fetches the rewritten document from the store, checks the OpenAPI version,
dispatches to the matching handler, and applies :func:`format_results`.

Failure is isolated at two levels:

* A missing key in a batch becomes an error item for that key only.
* Anything that goes wrong outside a handler's per-item loop (bad address,
  unloadable document, wrong OpenAPI version) becomes exactly one error item
  addressed at the requested URI.
"""

from __future__ import annotations

from typing import Optional

from openapi_explorer.exceptions import ExplorerError, RenderFormatError
from openapi_explorer.exit_codes import EXIT_GENERIC_FAILURE
from openapi_explorer.formatters import Formatter
from openapi_explorer.models import (
    BASE_URI,
    PLAIN_TEXT_MEDIA_TYPE,
    FormattedResultItem,
    RenderResultItem,
    ResourceKind,
    TransformContext,
)
from openapi_explorer.output import debug, error
from openapi_explorer.parser.loader import validate_openapi_version
from openapi_explorer.rendering import RenderContext
from openapi_explorer.resolver.address import AddressKind, ResourceAddress, parse_address
from openapi_explorer.resolver.handlers import HANDLERS
from openapi_explorer.store import DocumentStore

_UNKNOWN_ERROR = "An unknown error occurred."

_ENDPOINT_KINDS = frozenset(
    {AddressKind.PATH_ITEM, AddressKind.OPERATIONS, AddressKind.ENDPOINT, AddressKind.ENDPOINT_LIST}
)


class AddressResolver:
    """Resolves ``openapi://`` addresses against one document store.

    Args:
        store: The process-wide document store.
        formatter: Codec applied to detail views.
        base_uri: Scheme prefix of every address.
    """

    def __init__(self, store: DocumentStore, formatter: Formatter, base_uri: str = BASE_URI) -> None:
        self._store = store
        self._formatter = formatter
        self._base_uri = base_uri

    @property
    def store(self) -> DocumentStore:
        return self._store

    @property
    def formatter(self) -> Formatter:
        return self._formatter

    async def resolve(self, uri: str) -> list[FormattedResultItem]:
        """Resolve *uri* into one or more formatted items.

        Never raises: request-level failures are returned as a single
        plain-text error item whose address is *uri*.
        """
        context = RenderContext(formatter=self._formatter, base_uri=self._base_uri)
        debug(f"Resolving {uri}")
        try:
            address = parse_address(uri, self._base_uri)
            items = await self._render(address, context)
        except Exception as exc:
            error(f"Failed to resolve {uri}: {exc}")
            exit_code = exc.exit_code if isinstance(exc, ExplorerError) else EXIT_GENERIC_FAILURE
            return [_error_item(uri, str(exc) or _UNKNOWN_ERROR, exit_code=exit_code)]
        return format_results(context, items)

    async def _render(
        self, address: ResourceAddress, context: RenderContext
    ) -> list[RenderResultItem]:
        validate_openapi_version(await self._store.get_raw())

        kind = ResourceKind.ENDPOINT if address.kind in _ENDPOINT_KINDS else ResourceKind.SCHEMA
        document = await self._store.get_rewritten(TransformContext(resource_kind=kind))
        return HANDLERS[address.kind](document, address, context)


def format_results(context: RenderContext, items: list[RenderResultItem]) -> list[FormattedResultItem]:
    """Project abstract result items onto wire-ready ones.

    Error items and list items are emitted as ``text/plain`` verbatim. Detail
    items go through the codec; if the codec fails the item turns into an
    error (``Error formatting data for <uri>: <reason>``).

    Args:
        context: Render context supplying the codec and base URI.
        items: Items produced by a handler.

    Returns:
        One formatted item per input item, in the same order.
    """
    formatted = []
    for item in items:
        address = f"{context.base_uri}{item.address_suffix}"

        if item.is_error:
            formatted.append(_error_item(address, item.error_text or _UNKNOWN_ERROR))
        elif item.render_as_list:
            text = item.data if isinstance(item.data, str) else "Invalid list data"
            formatted.append(
                FormattedResultItem(address=address, media_type=PLAIN_TEXT_MEDIA_TYPE, text=text)
            )
        else:
            try:
                text = context.formatter.format(item.data)
            except RenderFormatError as exc:
                formatted.append(
                    _error_item(
                        address,
                        f"Error formatting data for {address}: {exc}",
                        exit_code=exc.exit_code,
                    )
                )
                continue
            formatted.append(
                FormattedResultItem(
                    address=address,
                    media_type=context.formatter.get_media_type(),
                    text=text,
                )
            )
    return formatted


def _error_item(address: str, text: str, exit_code: Optional[int] = None) -> FormattedResultItem:
    return FormattedResultItem(
        address=address,
        media_type=PLAIN_TEXT_MEDIA_TYPE,
        text=text,
        is_error=True,
        exit_code=exit_code,
    )
