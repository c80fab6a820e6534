"""Renderable for a single path item and the operations it defines."""

from __future__ import annotations

from typing import Any, Optional

from openapi_explorer.models import HTTPMethod, RenderResultItem
from openapi_explorer.rendering.base import (
    Renderable,
    RenderContext,
    create_error_item,
    create_error_result,
    generate_list_hint,
    get_operation_summary,
)

_STANDARD_METHODS = frozenset(method.value for method in HTTPMethod)


class RenderablePathItem(Renderable):
    """Wraps one entry of the ``paths`` object.

    Args:
        path_item: The path item object, or ``None`` when the path is not in
            the document.
        address_suffix: Address of the path item, e.g.
            ``"paths/pets%2F%7Bid%7D"``.
        display_path: The decoded API path (``"/pets/{id}"``) used in messages.
    """

    def __init__(
        self,
        path_item: Optional[dict[str, Any]],
        address_suffix: str,
        display_path: str,
    ) -> None:
        self._path_item = path_item if isinstance(path_item, dict) else None
        self._address_suffix = address_suffix
        self._display_path = display_path

    @property
    def exists(self) -> bool:
        return self._path_item is not None

    def methods(self) -> list[str]:
        """Return the keys of this path item that are standard HTTP methods, sorted."""
        if self._path_item is None:
            return []
        return sorted(key for key in self._path_item if key.lower() in _STANDARD_METHODS)

    def render_list(self, context: RenderContext) -> list[RenderResultItem]:
        if self._path_item is None:
            return create_error_result(self._address_suffix, "Path item not found.")

        methods = self.methods()
        if not methods:
            return [
                RenderResultItem(
                    address_suffix=self._address_suffix,
                    data=f"No standard HTTP methods found for path: {self._display_path}",
                    render_as_list=True,
                )
            ]

        lines = []
        for method in methods:
            summary = get_operation_summary(self._path_item[method])
            lines.append(f"{method.upper()}: {summary}" if summary else method.upper())

        hint = generate_list_hint(context, "operation", f"{self._address_suffix}/{{method}}")
        text = hint + "\n\n" + "\n".join(sorted(lines))
        return [RenderResultItem(address_suffix=self._address_suffix, data=text, render_as_list=True)]

    def render_detail(self, context: RenderContext) -> list[RenderResultItem]:
        # A path item is browsed through its method list.
        return self.render_list(context)

    def render_operation_detail(
        self, context: RenderContext, methods: list[str]
    ) -> list[RenderResultItem]:
        """Render one item per requested method, in request order.

        Methods are matched case-insensitively and reported in upper case.
        """
        results: list[RenderResultItem] = []
        for method in methods:
            suffix = f"{self._address_suffix}/{method.lower()}"
            if self._path_item is None:
                results.append(create_error_item(suffix, "Path item not found."))
                continue

            operation = self.get_operation(method)
            if operation is None:
                results.append(
                    create_error_item(suffix, f'Method "{method.upper()}" not found for path.')
                )
            else:
                results.append(RenderResultItem(address_suffix=suffix, data=operation))
        return results

    def get_operation(self, method: str) -> Optional[dict[str, Any]]:
        """Return the operation for *method* (any case), or ``None``."""
        if self._path_item is None:
            return None
        wanted = method.lower()
        if wanted not in _STANDARD_METHODS:
            return None
        for key, value in self._path_item.items():
            if key.lower() == wanted and isinstance(value, dict):
                return value
        return None
