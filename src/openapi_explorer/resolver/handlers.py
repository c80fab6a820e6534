"""Request handlers, one per :class:`~openapi_explorer.resolver.address.AddressKind`.

Each handler receives the rewritten document, the parsed address and the
render context, and returns abstract
:class:`~openapi_explorer.models.RenderResultItem` values. Handlers for batch
addresses return exactly one item per requested key, in request order, and
report a missing key as an error item without affecting the others.
"""

from __future__ import annotations

from typing import Any, Callable

from openapi_explorer.models import RenderResultItem
from openapi_explorer.parser.transform import is_reference
from openapi_explorer.rendering import (
    RenderableComponentMap,
    RenderableDocument,
    RenderablePathItem,
    RenderablePaths,
    RenderContext,
    create_error_item,
    encode_path,
)
from openapi_explorer.resolver.address import AddressKind, ResourceAddress

Handler = Callable[[dict[str, Any], ResourceAddress, RenderContext], list[RenderResultItem]]


def handle_root(
    document: dict[str, Any], address: ResourceAddress, context: RenderContext
) -> list[RenderResultItem]:
    return RenderableDocument(document).render_list(context)


def handle_field(
    document: dict[str, Any], address: ResourceAddress, context: RenderContext
) -> list[RenderResultItem]:
    return RenderableDocument(document).render_top_level_field(context, address.field)


def handle_path_item(
    document: dict[str, Any], address: ResourceAddress, context: RenderContext
) -> list[RenderResultItem]:
    return _path_item(document, address.path).render_list(context)


def handle_operations(
    document: dict[str, Any], address: ResourceAddress, context: RenderContext
) -> list[RenderResultItem]:
    return _path_item(document, address.path).render_operation_detail(
        context, list(address.methods)
    )


def handle_component_map(
    document: dict[str, Any], address: ResourceAddress, context: RenderContext
) -> list[RenderResultItem]:
    return _component_map(document, address.component_type).render_list(context)


def handle_component_detail(
    document: dict[str, Any], address: ResourceAddress, context: RenderContext
) -> list[RenderResultItem]:
    return _component_map(document, address.component_type).render_component_detail(
        context, list(address.names)
    )


def handle_schema(
    document: dict[str, Any], address: ResourceAddress, context: RenderContext
) -> list[RenderResultItem]:
    """Resolve ``schema/{name[,name...]}``.

    A failed lookup is still a structured payload (``{"name", "error"}``)
    rendered through the codec, so clients can parse it like a schema.
    """
    schemas = _component_map(document, "schemas")
    results: list[RenderResultItem] = []
    for name in address.names:
        suffix = f"schema/{name}"
        schema = schemas.get_component(name)
        if schema is None:
            problem = f"Schema not found: {name}"
        elif is_reference(schema):
            problem = f"Unexpected reference found for schema: {name}. Expected resolved schema."
        else:
            results.append(RenderResultItem(address_suffix=suffix, data=schema))
            continue

        payload = context.formatter.format({"name": name, "error": problem})
        results.append(create_error_item(suffix, payload))
    return results


def handle_schema_list(
    document: dict[str, Any], address: ResourceAddress, context: RenderContext
) -> list[RenderResultItem]:
    components = RenderableDocument(document).get_components_object() or {}
    schemas = components.get("schemas")
    text = "\n".join(sorted(schemas)) if isinstance(schemas, dict) else ""
    return [RenderResultItem(address_suffix="schemas/list", data=text, render_as_list=True)]


def handle_endpoint(
    document: dict[str, Any], address: ResourceAddress, context: RenderContext
) -> list[RenderResultItem]:
    """Resolve ``endpoint/{methods}/{paths}`` as a path-major product.

    Each success payload is the operation prefixed with its upper-case
    ``method`` and decoded ``path``.
    """
    results: list[RenderResultItem] = []
    for path in address.paths:
        path_item = _path_item(document, path)
        for method in address.methods:
            suffix = f"endpoint/{method.upper()}/{encode_path(path)}"
            item = path_item.render_operation_detail(context, [method])[0]
            if item.is_error:
                results.append(create_error_item(suffix, item.error_text))
            else:
                data = {"method": method.upper(), "path": path, **item.data}
                results.append(RenderResultItem(address_suffix=suffix, data=data))
    return results


def handle_endpoint_list(
    document: dict[str, Any], address: ResourceAddress, context: RenderContext
) -> list[RenderResultItem]:
    paths = RenderableDocument(document).get_paths_object()
    text = "\n".join(RenderablePaths(paths).endpoint_lines())
    return [RenderResultItem(address_suffix="endpoints/list", data=text, render_as_list=True)]


HANDLERS: dict[AddressKind, Handler] = {
    AddressKind.ROOT: handle_root,
    AddressKind.FIELD: handle_field,
    AddressKind.PATH_ITEM: handle_path_item,
    AddressKind.OPERATIONS: handle_operations,
    AddressKind.COMPONENT_MAP: handle_component_map,
    AddressKind.COMPONENT_DETAIL: handle_component_detail,
    AddressKind.SCHEMA: handle_schema,
    AddressKind.SCHEMA_LIST: handle_schema_list,
    AddressKind.ENDPOINT: handle_endpoint,
    AddressKind.ENDPOINT_LIST: handle_endpoint_list,
}


def _path_item(document: dict[str, Any], path: str) -> RenderablePathItem:
    paths = RenderableDocument(document).get_paths_object() or {}
    return RenderablePathItem(paths.get(path), f"paths/{encode_path(path)}", path)


def _component_map(document: dict[str, Any], component_type: str) -> RenderableComponentMap:
    components = RenderableDocument(document).get_components_object() or {}
    component_map = components.get(component_type)
    return RenderableComponentMap(
        component_map if isinstance(component_map, dict) else None,
        component_type,
        f"components/{component_type}",
    )
