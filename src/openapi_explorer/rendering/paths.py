"""Renderable for the ``paths`` object: the token-efficient path index."""

from __future__ import annotations

from typing import Any, Optional

from openapi_explorer.models import ENDPOINT_LIST_METHOD_ORDER, RenderResultItem
from openapi_explorer.rendering.base import Renderable, RenderContext


class RenderablePaths(Renderable):
    """Wraps the ``paths`` object.

    The list view is one line per path, e.g. ``GET POST /pets``, so a client
    can see every endpoint at a glance without paying for summaries.
    """

    def __init__(self, paths: Optional[dict[str, Any]]) -> None:
        self._paths = paths if isinstance(paths, dict) else {}

    def endpoint_lines(self) -> list[str]:
        """Return sorted ``METHOD METHOD /path`` lines.

        Methods appear in the fixed order get, post, put, delete, patch. Paths
        without any standard method are skipped.
        """
        lines = []
        for path, path_item in self._paths.items():
            if not isinstance(path_item, dict):
                continue
            keys = {key.lower() for key in path_item}
            methods = [
                method.value.upper()
                for method in ENDPOINT_LIST_METHOD_ORDER
                if method.value in keys
            ]
            if methods:
                lines.append(f"{' '.join(methods)} {path}")
        return sorted(lines)

    def render_list(self, context: RenderContext) -> list[RenderResultItem]:
        hint = (
            f"Hint: Use '{context.base_uri}paths/{{encoded_path}}' to list methods for a path, "
            f"or '{context.base_uri}paths/{{encoded_path}}/{{method}}' "
            "to view details for a specific operation."
        )
        text = hint + "\n\n" + "\n".join(self.endpoint_lines())
        return [RenderResultItem(address_suffix="paths", data=text, render_as_list=True)]

    def render_detail(self, context: RenderContext) -> list[RenderResultItem]:
        # Individual paths are served by RenderablePathItem.
        return self.render_list(context)
