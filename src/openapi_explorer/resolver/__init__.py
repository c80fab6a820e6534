"""Address parsing, request handlers, and the address resolver."""

from openapi_explorer.resolver.address import (
    AddressKind,
    ResourceAddress,
    normalize_path,
    parse_address,
    split_values,
)
from openapi_explorer.resolver.handlers import HANDLERS
from openapi_explorer.resolver.resolver import AddressResolver, format_results

__all__ = [
    "HANDLERS",
    "AddressKind",
    "AddressResolver",
    "ResourceAddress",
    "format_results",
    "normalize_path",
    "parse_address",
    "split_values",
]
