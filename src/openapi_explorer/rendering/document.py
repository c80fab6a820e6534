"""Renderable for the document root and its top-level fields."""

from __future__ import annotations

from typing import Any, Optional

from openapi_explorer.models import RenderResultItem
from openapi_explorer.rendering.base import (
    Renderable,
    RenderContext,
    create_error_result,
    generate_list_hint,
)
from openapi_explorer.rendering.components import RenderableComponents
from openapi_explorer.rendering.paths import RenderablePaths


class RenderableDocument(Renderable):
    """Wraps the whole (rewritten) OpenAPI document.

    The root address ``openapi://`` lists the top-level fields; each field is
    then reachable at ``openapi://{field}``. ``paths`` and ``components``
    delegate to their own list views, every other field is returned whole.
    """

    def __init__(self, document: dict[str, Any]) -> None:
        self._document = document

    def render_list(self, context: RenderContext) -> list[RenderResultItem]:
        text = "Available top-level fields:\n\n"
        text += "".join(f"- {field}\n" for field in sorted(self._document))
        text += "\n" + generate_list_hint(context, "field", "{field}")
        return [RenderResultItem(address_suffix="", data=text, render_as_list=True)]

    def render_detail(self, context: RenderContext) -> list[RenderResultItem]:
        # The full document is too large to be useful as one payload.
        return self.render_list(context)

    def render_top_level_field(self, context: RenderContext, field: str) -> list[RenderResultItem]:
        """Render the view for a single top-level field.

        Args:
            context: Rendering context.
            field: The field name, e.g. ``"info"`` or ``"paths"``.

        Returns:
            The list view of ``paths`` or ``components``, a single detail item
            for any other present field, or an error item if it is missing.
        """
        if field == "paths":
            return RenderablePaths(self.get_paths_object()).render_list(context)
        if field == "components":
            return RenderableComponents(self.get_components_object()).render_list(context)

        if field not in self._document:
            return create_error_result(
                field, f'Field "{field}" not found in the OpenAPI document.'
            )
        return [RenderResultItem(address_suffix=field, data=self._document[field])]

    def get_paths_object(self) -> Optional[dict[str, Any]]:
        paths = self._document.get("paths")
        return paths if isinstance(paths, dict) else None

    def get_components_object(self) -> Optional[dict[str, Any]]:
        components = self._document.get("components")
        return components if isinstance(components, dict) else None
