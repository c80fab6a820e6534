"""Typer application and CLI entry point for openapi-explorer.

Commands:

* ``serve SPEC`` -- run the MCP server over stdio.
* ``read ADDRESS`` -- resolve one ``openapi://`` address and print the result,
  the same way a client would see it. Handy for checking a document before
  wiring it into a client.
* ``templates`` -- print the resources and address templates the server
  advertises.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. :class:`~openapi_explorer.exceptions.ExplorerError` is
mapped to its exit code; any other exception is written to a crash log under
the data directory.

See Also:
    :mod:`openapi_explorer.config`: Precedence resolution for ``--spec`` and
    ``--output-format``.
    :mod:`openapi_explorer.output`: Output manager initialised in
    :func:`main_callback`.
"""

from __future__ import annotations

import asyncio
import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from openapi_explorer import __version__
from openapi_explorer.exit_codes import EXIT_GENERIC_FAILURE, EXIT_NOT_FOUND

app = typer.Typer(
    name="openapi-explorer",
    help="Browse an OpenAPI 3.x document as MCP resources.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"openapi-explorer {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Initialises the global :class:`~openapi_explorer.output.OutputManager`
    from CLI flags.
    """
    from openapi_explorer.output import OutputManager, set_output

    set_output(OutputManager(no_color=no_color, quiet=quiet, verbose=verbose))


@app.command("serve")
def serve_command(
    spec: Optional[str] = typer.Argument(
        None, help="Path to the OpenAPI document, or '-' for stdin."
    ),
    output_format: Optional[str] = typer.Option(
        None, "--output-format", "-f", help="Detail view format: json or yaml."
    ),
) -> None:
    """Serve an OpenAPI document as MCP resources over stdio."""
    from openapi_explorer.config import resolve_config
    from openapi_explorer.exceptions import ConfigError
    from openapi_explorer.server import serve_stdio

    config = resolve_config(cli_spec=spec, cli_format=output_format)
    if config.spec_path == "-":
        raise ConfigError("'serve' cannot read the spec from stdin: stdin carries the MCP protocol.")
    asyncio.run(serve_stdio(config))


@app.command("read")
def read_command(
    address: str = typer.Argument(
        ..., help="Resource address, with or without the 'openapi://' prefix."
    ),
    spec: Optional[str] = typer.Option(
        None, "--spec", "-s", help="Path to the OpenAPI document, or '-' for stdin."
    ),
    output_format: Optional[str] = typer.Option(
        None, "--output-format", "-f", help="Detail view format: json or yaml."
    ),
) -> None:
    """Resolve one resource address and print the result.

    Each returned item is printed in order. When there is more than one, each
    is preceded by a ``# <address>`` header line. A request-level failure
    exits with its own code (2 for a bad address, 7 for an unreadable
    document); otherwise any missing item exits with code 4.
    """
    from openapi_explorer.config import resolve_config
    from openapi_explorer.models import BASE_URI
    from openapi_explorer.output import print_data, print_resource
    from openapi_explorer.server import build_resolver

    config = resolve_config(cli_spec=spec, cli_format=output_format)
    uri = address if address.startswith(BASE_URI) else f"{BASE_URI}{address}"

    resolver = build_resolver(config)
    items = asyncio.run(resolver.resolve(uri))

    for item in items:
        if len(items) > 1:
            print_data(f"# {item.address}")
        print_resource(item.text, item.media_type)

    codes = [item.exit_code or EXIT_NOT_FOUND for item in items if item.is_error]
    if codes:
        raise typer.Exit(codes[0])


@app.command("templates")
def templates_command() -> None:
    """List the static resources and address templates the server advertises."""
    from openapi_explorer.output import print_data
    from openapi_explorer.server import RESOURCE_TEMPLATES, STATIC_RESOURCES

    lines = ["Resources:"]
    lines += [f"  {entry.uri}  {entry.description}" for entry in STATIC_RESOURCES]
    lines += ["", "Templates:"]
    lines += [f"  {entry.uri}  {entry.description}" for entry in RESOURCE_TEMPLATES]
    print_data("\n".join(lines))


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path.

    Args:
        exc: The unhandled exception to log.

    Returns:
        Absolute path to the written crash log file.
    """
    from openapi_explorer.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    )
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``openapi-explorer`` console script.

    Unhandled :class:`~openapi_explorer.exceptions.ExplorerError` instances
    cause a clean exit with the error's ``exit_code``. All other exceptions
    produce a crash log and a generic failure exit.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from openapi_explorer.exceptions import ExplorerError
        from openapi_explorer.output import error

        if isinstance(exc, ExplorerError):
            error(str(exc))
            sys.exit(exc.exit_code)
        else:
            log_path = _write_crash_log(exc)
            error(f"Unexpected error. Debug log: {log_path}")
            sys.exit(EXIT_GENERIC_FAILURE)
