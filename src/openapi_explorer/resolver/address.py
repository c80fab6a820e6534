"""Parse ``openapi://`` resource addresses into typed :class:`ResourceAddress` values.

Address grammar (relative to ``openapi://``)::

    (empty)                               top-level field list
    {field}                               one top-level field
    paths/{path}                          methods of one path item
    paths/{path}/{method[,method...]}     operation details
    components/{type}                     names of one component type
    components/{type}/{name[,name...]}    component details
    schema/{name[,name...]}               schema details
    schemas/list                          schema name index
    endpoint/{method[,...]}/{path[,...]}  operation details, method x path
    endpoints/list                        endpoint index

``{path}`` is an API path with its leading slash removed and percent-encoded
as a single segment (``pets%2F%7Bid%7D``). Multi-value segments are split on
commas first, then each element is trimmed and percent-decoded, and empty
elements are dropped.
"""

from __future__ import annotations

import enum
from typing import Optional
from urllib.parse import unquote

from pydantic import BaseModel, ConfigDict

from openapi_explorer.exceptions import InvalidAddressError
from openapi_explorer.models import BASE_URI
from openapi_explorer.rendering.components import VALID_COMPONENT_TYPES


class AddressKind(str, enum.Enum):
    """Shape of a parsed address; selects the request handler."""

    ROOT = "root"
    FIELD = "field"
    PATH_ITEM = "path_item"
    OPERATIONS = "operations"
    COMPONENT_MAP = "component_map"
    COMPONENT_DETAIL = "component_detail"
    SCHEMA = "schema"
    SCHEMA_LIST = "schema_list"
    ENDPOINT = "endpoint"
    ENDPOINT_LIST = "endpoint_list"


class ResourceAddress(BaseModel):
    """A parsed resource address.

    Only the segments relevant to ``kind`` are set. Paths are decoded and
    normalised to a single leading slash; methods are lowercase.
    """

    model_config = ConfigDict(frozen=True)

    kind: AddressKind
    raw: str
    field: Optional[str] = None
    paths: tuple[str, ...] = ()
    methods: tuple[str, ...] = ()
    component_type: Optional[str] = None
    names: tuple[str, ...] = ()

    @property
    def path(self) -> str:
        """The single path of a ``PATH_ITEM`` or ``OPERATIONS`` address."""
        return self.paths[0]


def parse_address(uri: str, base_uri: str = BASE_URI) -> ResourceAddress:
    """Parse *uri* into a :class:`ResourceAddress`.

    Args:
        uri: Full address, e.g. ``"openapi://components/schemas/Pet,Order"``.
        base_uri: Expected scheme prefix.

    Returns:
        The parsed address.

    Raises:
        InvalidAddressError: If the scheme is wrong, the shape is unknown, the
            component type is not recognised, or a required segment is empty.
    """
    if not uri.startswith(base_uri):
        raise InvalidAddressError(f"Unsupported resource address: {uri}")

    rest = uri[len(base_uri):]
    for separator in ("#", "?"):
        rest = rest.split(separator, 1)[0]
    rest = rest.rstrip("/")

    if not rest:
        return ResourceAddress(kind=AddressKind.ROOT, raw=uri)

    segments = rest.split("/")
    head, tail = segments[0], segments[1:]

    if not tail:
        return ResourceAddress(kind=AddressKind.FIELD, raw=uri, field=unquote(head))

    if head == "paths":
        if len(tail) == 1:
            return ResourceAddress(
                kind=AddressKind.PATH_ITEM, raw=uri, paths=(normalize_path(tail[0]),)
            )
        if len(tail) == 2:
            return ResourceAddress(
                kind=AddressKind.OPERATIONS,
                raw=uri,
                paths=(normalize_path(tail[0]),),
                methods=tuple(method.lower() for method in split_values(tail[1])),
            )

    elif head == "components" and len(tail) in (1, 2):
        component_type = unquote(tail[0])
        if component_type not in VALID_COMPONENT_TYPES:
            raise InvalidAddressError(f"Invalid component type: {component_type}")
        if len(tail) == 1:
            return ResourceAddress(
                kind=AddressKind.COMPONENT_MAP, raw=uri, component_type=component_type
            )
        return ResourceAddress(
            kind=AddressKind.COMPONENT_DETAIL,
            raw=uri,
            component_type=component_type,
            names=tuple(split_values(tail[1])),
        )

    elif head == "schema" and len(tail) == 1:
        return ResourceAddress(kind=AddressKind.SCHEMA, raw=uri, names=tuple(split_values(tail[0])))

    elif head == "schemas" and tail == ["list"]:
        return ResourceAddress(kind=AddressKind.SCHEMA_LIST, raw=uri)

    elif head == "endpoints" and tail == ["list"]:
        return ResourceAddress(kind=AddressKind.ENDPOINT_LIST, raw=uri)

    elif head == "endpoint" and len(tail) >= 2:
        # Tolerate clients that forget to encode the slashes of the path.
        raw_paths = "/".join(tail[1:])
        return ResourceAddress(
            kind=AddressKind.ENDPOINT,
            raw=uri,
            methods=tuple(method.lower() for method in split_values(tail[0])),
            paths=tuple(normalize_path(path) for path in split_values(raw_paths, decode=False)),
        )

    raise InvalidAddressError(f"Unsupported resource address: {uri}")


def split_values(segment: str, decode: bool = True) -> list[str]:
    """Split a comma-separated address segment into its non-empty values.

    Args:
        segment: The raw (still percent-encoded) segment.
        decode: Percent-decode each value after trimming.

    Raises:
        InvalidAddressError: If no non-empty value remains.
    """
    values = []
    for value in segment.split(","):
        value = value.strip()
        if decode:
            value = unquote(value).strip()
        if value:
            values.append(value)
    if not values:
        raise InvalidAddressError(f"Address segment has no values: '{segment}'")
    return values


def normalize_path(encoded_path: str) -> str:
    """Decode an encoded path segment and give it exactly one leading slash."""
    return "/" + unquote(encoded_path).lstrip("/")
