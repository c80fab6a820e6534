"""openapi-explorer -- Browse an OpenAPI 3.x document as MCP resources.

This package loads a single OpenAPI document and exposes it to tool-calling
clients as a tree of addressable ``openapi://`` resources. List views are
compact plain text meant for discovery; detail views are rendered as JSON or
YAML. Internal ``#/components/schemas/...`` references are rewritten into
``openapi://schema/...`` addresses so that clients can follow them.

Typical workflow::

    openapi-explorer serve petstore.yaml                 # run the MCP server
    openapi-explorer read endpoints/list --spec petstore.yaml

Modules:
    app: Typer application and CLI entry point.
    server: MCP server wiring (resources, templates, ``resources/read``).
    store: Once-loaded document holder with cached rewritten views.
    formatters: JSON and YAML output codecs.
    models: Pydantic models shared across the package.
    config: Configuration precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.3.0"
