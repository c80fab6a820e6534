"""Renderable views over the rewritten OpenAPI document."""

from openapi_explorer.rendering.base import (
    Renderable,
    RenderContext,
    create_error_item,
    create_error_result,
    encode_path,
    generate_list_hint,
    get_operation_summary,
)
from openapi_explorer.rendering.components import (
    VALID_COMPONENT_TYPES,
    RenderableComponentMap,
    RenderableComponents,
)
from openapi_explorer.rendering.document import RenderableDocument
from openapi_explorer.rendering.path_item import RenderablePathItem
from openapi_explorer.rendering.paths import RenderablePaths

__all__ = [
    "VALID_COMPONENT_TYPES",
    "Renderable",
    "RenderableComponentMap",
    "RenderableComponents",
    "RenderableDocument",
    "RenderablePathItem",
    "RenderablePaths",
    "RenderContext",
    "create_error_item",
    "create_error_result",
    "encode_path",
    "generate_list_hint",
    "get_operation_summary",
]
