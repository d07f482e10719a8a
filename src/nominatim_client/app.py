"""Typer application and CLI entry point for nominatim_client.

The ``nominatim-client`` console script exposes the library for quick
manual queries:

* ``key`` prints the request key (encoded URL) for a URL and parameters,
* ``get`` performs one GET through :class:`~nominatim_client.client.WebClient`
  and prints the decoded JSON,
* ``config`` manages the stored :class:`~nominatim_client.models.ClientConfig`.

:func:`main` installs a SIGINT handler and maps
:class:`~nominatim_client.exceptions.NominatimClientError` to its exit
code. Any other exception is written to a crash log under the data
directory.
"""

from __future__ import annotations

import logging
import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer
from rich.logging import RichHandler

from nominatim_client import __version__
from nominatim_client.commands.config import config_app
from nominatim_client.exceptions import InvalidUsageError, NominatimClientError
from nominatim_client.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="nominatim-client",
    help="Query a Nominatim geocoding server with response caching.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.add_typer(config_app, name="config", help="Configuration management.")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"nominatim-client {__version__}")
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
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~nominatim_client.output.OutputManager`
    and, with ``--verbose``, routes the package's DEBUG log records to
    stderr through Rich.
    """
    from nominatim_client.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))

    if verbose:
        _configure_logging()


def _configure_logging() -> None:
    logger = logging.getLogger("nominatim_client")
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(show_path=False, markup=False))
    logger.setLevel(logging.DEBUG)


def parse_params(values: Optional[list[str]]) -> dict[str, str]:
    """Turn ``KEY=VALUE`` strings into an ordered dict.

    Only the first ``=`` separates key from value, so values may contain
    ``=`` themselves.

    Raises:
        InvalidUsageError: If an item has no ``=`` or an empty key.
    """
    params: dict[str, str] = {}
    for item in values or []:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise InvalidUsageError(f"Expected KEY=VALUE, got: {item!r}")
        params[key] = value
    return params


_PARAM_OPTION = typer.Option(
    None, "--param", "-p", help="Query parameter as KEY=VALUE (repeatable)."
)


@app.command("key")
def key_command(
    url: str = typer.Argument(help="Base URL of the server method."),
    param: Optional[list[str]] = _PARAM_OPTION,
    sort: bool = typer.Option(False, "--sort", help="Sort parameters by name."),
) -> None:
    """Print the request key (encoded URL) without sending anything.

    Example::

        nominatim-client key https://example.org/search -p "q=Berlin Straße"
    """
    from nominatim_client.output import error, print_data
    from nominatim_client.query import build_request_key

    try:
        params = parse_params(param)
    except InvalidUsageError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    print_data(build_request_key(url, params, sort=sort))


@app.command("get")
def get_command(
    url: str = typer.Argument(help="URL of the Nominatim server method."),
    param: Optional[list[str]] = _PARAM_OPTION,
    no_cache: bool = typer.Option(
        False,
        "--no-cache",
        help=(
            "Disable the response cache. The cache only lives for this run, so a"
            " single GET behaves the same with or without it."
        ),
    ),
    product: Optional[str] = typer.Option(
        None, "--product", help="Product name for the User-Agent header."
    ),
    sort: bool = typer.Option(False, "--sort", help="Sort parameters by name."),
) -> None:
    """Send a GET request and print the decoded JSON response.

    Example::

        nominatim-client get https://nominatim.openstreetmap.org/search \\
            -p q=Berlin -p format=jsonv2
    """
    from nominatim_client.client import WebClient
    from nominatim_client.config import resolve_config
    from nominatim_client.output import debug, error, format_response

    try:
        params = parse_params(param)
        config = resolve_config(cli_product_name=product, cli_no_cache=no_cache)
        if sort:
            config = config.model_copy(update={"sort_params": True})

        client = WebClient(config)
        debug(f"GET {client.request_key(url, params)} as {client.user_agent}")
        data: Any = client.get_request(url, params)
    except NominatimClientError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    format_response(data)


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write the current traceback to the data directory and return its path."""
    from nominatim_client.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``nominatim-client`` console script.

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
        from nominatim_client.output import error

        if isinstance(exc, NominatimClientError):
            error(str(exc))
            sys.exit(exc.exit_code)
        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
