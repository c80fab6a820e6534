"""Rewrite internal ``$ref`` pointers into ``openapi://`` resource addresses.

OpenAPI documents use JSON Reference pointers (e.g.
``{"$ref": "#/components/schemas/Pet"}``) to avoid repetition. Inlining them
would bloat every detail view, so instead this module rewrites the pointers
into addresses a client can read on demand::

    {"$ref": "#/components/schemas/Pet"}  ->  {"$ref": "openapi://schema/Pet"}

Rules for the OpenAPI transformer:

* External references (anything not starting with ``#/``) are kept as-is.
* ``#/components/schemas/<name>`` becomes ``openapi://schema/<name>``.
* Any other internal pointer is kept as-is.

The rewrite walks the whole document, returns new containers, and never
mutates its input. It is idempotent: rewritten addresses no longer start with
``#/`` so a second pass leaves them alone.

Transformers are registered per :class:`~openapi_explorer.models.DocumentFormat`
on a :class:`ReferenceTransformService`; :func:`create_default_transform_service`
returns one with the OpenAPI transformer installed.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from openapi_explorer.exceptions import ExplorerError
from openapi_explorer.models import BASE_URI, DocumentFormat, TransformContext

REF_KEY = "$ref"
_INTERNAL_PREFIX = "#/"
_SCHEMA_POINTER_PREFIX = "#/components/schemas/"


def is_reference(node: Any) -> bool:
    """Return ``True`` when *node* is a reference object (a mapping with a string ``$ref``)."""
    return isinstance(node, dict) and isinstance(node.get(REF_KEY), str)


class ReferenceTransformer(ABC):
    """Format-specific rewrite of every reference node in a document."""

    @abstractmethod
    def transform_refs(self, document: Any, context: TransformContext) -> Any:
        """Return a rewritten copy of *document*."""


class OpenAPITransformer(ReferenceTransformer):
    """Rewrites ``#/components/schemas/<name>`` pointers to schema addresses.

    Args:
        base_uri: Scheme prefix of generated addresses.
    """

    def __init__(self, base_uri: str = BASE_URI) -> None:
        self._base_uri = base_uri

    def transform_refs(self, document: Any, context: TransformContext) -> Any:
        return self._transform(document, context)

    def _transform(self, node: Any, context: TransformContext) -> Any:
        """Recursively rewrite *node*.

        Lists are mapped element-wise, reference nodes are replaced by a new
        single-key ``{"$ref": ...}`` dict (sibling keys are dropped), other
        dicts are copied key by key in order, and scalars pass through.
        """
        if isinstance(node, list):
            return [self._transform(item, context) for item in node]

        if isinstance(node, dict):
            if is_reference(node):
                return {REF_KEY: self.rewrite_pointer(node[REF_KEY])}
            return {key: self._transform(value, context) for key, value in node.items()}

        return node

    def rewrite_pointer(self, ref: str) -> str:
        """Map a single ``$ref`` string to its rewritten form.

        Args:
            ref: The pointer, e.g. ``"#/components/schemas/Pet"``.

        Returns:
            ``"<base>schema/<name>"`` for component schema pointers, otherwise
            *ref* unchanged.
        """
        if not ref.startswith(_INTERNAL_PREFIX):
            return ref

        if ref.startswith(_SCHEMA_POINTER_PREFIX):
            name = ref[len(_SCHEMA_POINTER_PREFIX):]
            # Deeper pointers (#/components/schemas/Pet/properties/id) are not schema addresses.
            if name and "/" not in name:
                return f"{self._base_uri}schema/{name}"

        return ref


class ReferenceTransformService:
    """Registry of reference transformers keyed by document format."""

    def __init__(self) -> None:
        self._transformers: dict[DocumentFormat, ReferenceTransformer] = {}

    def register_transformer(
        self, document_format: DocumentFormat, transformer: ReferenceTransformer
    ) -> None:
        """Install *transformer* for *document_format*, replacing any previous one."""
        self._transformers[DocumentFormat(document_format)] = transformer

    def transform_document(self, document: Any, context: TransformContext) -> Any:
        """Rewrite *document* with the transformer registered for ``context.document_format``.

        Raises:
            ExplorerError: If no transformer is registered for the format.
        """
        transformer = self._transformers.get(context.document_format)
        if transformer is None:
            raise ExplorerError(
                f"No transformer registered for format: {context.document_format.value}"
            )
        return transformer.transform_refs(document, context)


def create_default_transform_service(base_uri: str = BASE_URI) -> ReferenceTransformService:
    """Return a :class:`ReferenceTransformService` with the OpenAPI transformer registered."""
    service = ReferenceTransformService()
    service.register_transformer(DocumentFormat.OPENAPI, OpenAPITransformer(base_uri))
    return service
