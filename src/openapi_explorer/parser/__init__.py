"""OpenAPI document parsing -- load the source and rewrite ``$ref`` pointers.

This sub-package sits underneath the document store: it turns a JSON or YAML
file into a plain dictionary and produces reference-rewritten copies of it.

Typical usage::

    from openapi_explorer.parser import load_spec, create_default_transform_service
    from openapi_explorer.models import TransformContext

    raw = load_spec("petstore.yaml")
    rewritten = create_default_transform_service().transform_document(
        raw, TransformContext()
    )

Sub-modules:

* :mod:`~openapi_explorer.parser.loader` -- I/O layer (file, stdin) plus
  format detection and OpenAPI version validation.
* :mod:`~openapi_explorer.parser.transform` -- Recursive ``$ref`` rewriting
  into ``openapi://schema/...`` addresses.
"""

from openapi_explorer.parser.loader import is_openapi_v3, load_spec, validate_openapi_version
from openapi_explorer.parser.transform import (
    OpenAPITransformer,
    ReferenceTransformService,
    create_default_transform_service,
)

__all__ = [
    "load_spec",
    "is_openapi_v3",
    "validate_openapi_version",
    "OpenAPITransformer",
    "ReferenceTransformService",
    "create_default_transform_service",
]
