"""Once-loaded holder for the source document and its rewritten views.

The :class:`DocumentStore` owns the parsed OpenAPI document for the lifetime
of the process. The document is read exactly once, on the first successful
:meth:`DocumentStore.load`, and is never mutated afterwards. Reference-rewritten
views are derived from it on demand and cached per
:class:`~openapi_explorer.models.TransformContext`.

Init-before-use contract: the server awaits :meth:`DocumentStore.load` during
startup, before it accepts requests. Every accessor also loads lazily, so
tests and the ``read`` command can skip the explicit call; callers must not
start two first loads concurrently.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Optional

from openapi_explorer.exceptions import DocumentLoadError
from openapi_explorer.models import TransformContext
from openapi_explorer.output import debug
from openapi_explorer.parser.loader import load_spec
from openapi_explorer.parser.transform import ReferenceTransformService

SpecLoader = Callable[[str], dict[str, Any]]


class DocumentStore:
    """Process-wide cache of the source document.

    Args:
        spec_path: Path handed to the loader (``-`` for stdin).
        transform_service: Reference rewriter used by :meth:`get_rewritten`.
        loader: Parsing callable; defaults to
            :func:`~openapi_explorer.parser.loader.load_spec`. Runs in a worker
            thread so file I/O does not block the event loop.
    """

    def __init__(
        self,
        spec_path: str,
        transform_service: ReferenceTransformService,
        loader: SpecLoader = load_spec,
    ) -> None:
        self._spec_path = spec_path
        self._transform_service = transform_service
        self._loader = loader
        self._document: Optional[dict[str, Any]] = None
        self._rewritten: dict[TransformContext, Any] = {}

    @property
    def spec_path(self) -> str:
        """The source the document is (or will be) loaded from."""
        return self._spec_path

    @property
    def is_loaded(self) -> bool:
        """Whether the source document has been loaded successfully."""
        return self._document is not None

    async def load(self) -> dict[str, Any]:
        """Parse the source document, or return the cached one.

        Returns:
            The source document.

        Raises:
            DocumentLoadError: If the loader fails. Nothing is cached, so the
                error repeats on every call.
        """
        if self._document is not None:
            return self._document

        debug(f"Loading OpenAPI document from {self._spec_path}")
        try:
            document = await asyncio.to_thread(self._loader, self._spec_path)
        except Exception as exc:
            raise DocumentLoadError(f"Failed to load OpenAPI spec: {exc}") from exc

        self._document = document
        return document

    async def get_raw(self) -> dict[str, Any]:
        """Return the source document, loading it first if necessary."""
        return await self.load()

    async def get_rewritten(self, context: TransformContext) -> Any:
        """Return the reference-rewritten view of the document for *context*.

        The rewrite runs once per distinct context; later calls return the
        same object, which callers must treat as read-only.
        """
        cached = self._rewritten.get(context)
        if cached is not None:
            return cached

        document = await self.get_raw()
        rewritten = self._transform_service.transform_document(document, context)
        self._rewritten[context] = rewritten
        return rewritten
