"""Renderables for the ``components`` section.

* :class:`RenderableComponents` -- the component-type index
  (``openapi://components``).
* :class:`RenderableComponentMap` -- the name -> object map of one component
  type (``openapi://components/schemas``) plus batched detail lookups
  (``openapi://components/schemas/Pet,Order``).
"""

from __future__ import annotations

from typing import Any, Optional

from openapi_explorer.models import RenderResultItem
from openapi_explorer.rendering.base import (
    Renderable,
    RenderContext,
    create_error_item,
    create_error_result,
    generate_list_hint,
)

# Component types recognised in the index. ``pathItems`` (3.1) is left out
# because paths are browsed through ``openapi://paths``.
VALID_COMPONENT_TYPES: tuple[str, ...] = (
    "schemas",
    "responses",
    "parameters",
    "examples",
    "requestBodies",
    "headers",
    "securitySchemes",
    "links",
    "callbacks",
)


class RenderableComponents(Renderable):
    """Wraps the ``components`` object and lists the component types it defines."""

    def __init__(self, components: Optional[dict[str, Any]]) -> None:
        self._components = components if isinstance(components, dict) else None

    def render_list(self, context: RenderContext) -> list[RenderResultItem]:
        if not self._components:
            return create_error_result("components", "No components found in the specification.")

        available = sorted(key for key in self._components if key in VALID_COMPONENT_TYPES)
        if not available:
            return create_error_result("components", "No valid component types found.")

        text = "Available Component Types:\n\n"
        text += "".join(f"- {component_type}\n" for component_type in available)
        text += "\n" + generate_list_hint(context, "component type", "components/{type}")

        return [RenderResultItem(address_suffix="components", data=text, render_as_list=True)]

    def render_detail(self, context: RenderContext) -> list[RenderResultItem]:
        # The components object as a whole is only browsable as a list.
        return self.render_list(context)

    def get_component_map(self, component_type: str) -> Optional[dict[str, Any]]:
        """Return the name -> object map for *component_type*, or ``None``."""
        if self._components is None:
            return None
        component_map = self._components.get(component_type)
        return component_map if isinstance(component_map, dict) else None


class RenderableComponentMap(Renderable):
    """Wraps all components of one type, e.g. ``components.schemas``.

    Args:
        component_map: The name -> object mapping, or ``None`` when the
            document does not define this type.
        component_type: The component type key (``"schemas"``).
        address_suffix: Address of the map itself (``"components/schemas"``).
    """

    def __init__(
        self,
        component_map: Optional[dict[str, Any]],
        component_type: str,
        address_suffix: str,
    ) -> None:
        self._component_map = component_map
        self._component_type = component_type
        self._address_suffix = address_suffix

    def render_list(self, context: RenderContext) -> list[RenderResultItem]:
        if not self._component_map:
            return create_error_result(
                self._address_suffix,
                f'No components of type "{self._component_type}" found.',
            )

        text = f"Available {self._component_type}:\n\n"
        text += "".join(f"- {name}\n" for name in sorted(self._component_map))
        text += "\n" + generate_list_hint(
            context,
            _singular(self._component_type),
            f"{self._address_suffix}/{{name}}",
        )

        return [
            RenderResultItem(address_suffix=self._address_suffix, data=text, render_as_list=True)
        ]

    def render_detail(self, context: RenderContext) -> list[RenderResultItem]:
        # Specific components are served by render_component_detail.
        return self.render_list(context)

    def render_component_detail(
        self, context: RenderContext, names: list[str]
    ) -> list[RenderResultItem]:
        """Render one item per requested name, in request order.

        A missing map or a missing name produces an error item for that name
        only; the remaining names are still resolved.
        """
        results: list[RenderResultItem] = []
        for name in names:
            suffix = f"{self._address_suffix}/{name}"
            if self._component_map is None:
                results.append(
                    create_error_item(
                        suffix, f'Component map for type "{self._component_type}" not found.'
                    )
                )
                continue

            component = self.get_component(name)
            if component is None:
                results.append(
                    create_error_item(
                        suffix, f'Component "{name}" of type "{self._component_type}" not found.'
                    )
                )
            else:
                results.append(RenderResultItem(address_suffix=suffix, data=component))
        return results

    def get_component(self, name: str) -> Any:
        """Return the raw component object for *name*, or ``None``."""
        if self._component_map is None:
            return None
        return self._component_map.get(name)


def _singular(component_type: str) -> str:
    """Naive singular used in hints: ``schemas`` -> ``schema``."""
    return component_type[:-1] if component_type.endswith("s") else component_type
