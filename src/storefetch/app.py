"""Typer application and CLI entry point for storefetch.

This module wires together the top-level Typer application and registers
the built-in sub-commands (``get``, ``admin``, ``config``).

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs signal handlers, registers commands and
invokes the Typer app. :class:`~storefetch.exceptions.StorefetchError`
exits with its own code; any other exception is written to a crash log
under the data directory.

See Also:
    :mod:`storefetch.config`: Configuration resolution used in
    :func:`main_callback`.
    :mod:`storefetch.output`: Output formatting initialised in
    :func:`main_callback`.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from storefetch import __version__
from storefetch.commands.admin import admin_app
from storefetch.commands.config import config_app
from storefetch.commands.get import get_command
from storefetch.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="storefetch",
    help="Cached JSON reads from storefront and admin APIs.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("get")(get_command)
app.add_typer(admin_app, name="admin", help="Back-office products, orders and dashboard.")
app.add_typer(config_app, name="config", help="Configuration management.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"storefetch {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    base_url: Optional[str] = typer.Option(
        None, "--base-url", "-u", help="Storefront base URL (overrides config and env)."
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~storefetch.output.OutputManager`, routes
    library logging to stderr and stores the resolved configuration in
    ``ctx.obj["config"]``.
    """
    from storefetch.config import resolve_config
    from storefetch.output import OutputFormat, OutputManager, configure_logging, set_output

    cli_format: Optional[str] = None
    if json_output:
        cli_format = OutputFormat.JSON.value
    elif plain_output:
        cli_format = OutputFormat.PLAIN.value

    config = resolve_config(cli_base_url=base_url, cli_format=cli_format)

    try:
        fmt = OutputFormat(config.output.format)
    except ValueError:
        fmt = OutputFormat.AUTO

    output = OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose)
    set_output(output)
    configure_logging(output)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["verbose"] = verbose


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from storefetch.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``storefetch`` console script.

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
        from storefetch.exceptions import StorefetchError
        from storefetch.output import error

        if isinstance(exc, StorefetchError):
            error(str(exc))
            sys.exit(exc.exit_code)
        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
