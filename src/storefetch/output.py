"""Output formatting system with strict stdout/stderr discipline.

Follows `clig.dev <https://clig.dev/>`_ conventions:

* **stdout** -- fetched data only (JSON payloads, tables).
* **stderr** -- all diagnostics (status, warnings, errors, debug).
* **TTY detection** -- Rich formatting when stdout is an interactive
  terminal, plain text when piped.
* **Colour control** -- respects ``NO_COLOR``, ``TERM=dumb`` and the
  ``--no-color`` CLI flag.

:class:`OutputManager` holds the preferences and the two Rich consoles; it
is created once in :func:`~storefetch.app.main_callback` and installed with
:func:`set_output`.  Module-level functions (:func:`info`, :func:`error`,
...) delegate to the installed instance.  :func:`configure_logging` routes
the library loggers (``storefetch.cache``, ``storefetch.fetch``) to the
same stderr console.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table


class OutputFormat(str, Enum):
    """Supported output formats.

    ``AUTO`` resolves to ``RICH`` on an interactive TTY with colour enabled,
    and to ``PLAIN`` otherwise.
    """

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


class OutputManager:
    """Central manager for all CLI output.

    Args:
        format: Desired output format. ``AUTO`` resolves based on TTY
            detection.
        no_color: Disable all colour and Rich markup.
        quiet: Suppress informational messages on stderr.
        verbose: Enable debug messages on stderr.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose

        if format == OutputFormat.AUTO:
            self._format = (
                OutputFormat.RICH if _is_tty() and not self._no_color else OutputFormat.PLAIN
            )
        else:
            self._format = format

        self._stdout = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=(self._format == OutputFormat.RICH),
        )
        self._stderr = Console(
            file=sys.stderr,
            no_color=self._no_color,
            stderr=True,
        )

    @property
    def format(self) -> OutputFormat:
        """The resolved output format."""
        return self._format

    @property
    def is_quiet(self) -> bool:
        return self._quiet

    @property
    def is_verbose(self) -> bool:
        return self._verbose

    @property
    def stderr_console(self) -> Console:
        """The Rich console bound to stderr."""
        return self._stderr

    # ------------------------------------------------------------------ #
    # Data output (stdout)
    # ------------------------------------------------------------------ #

    def format_response(self, data: Any) -> None:
        """Write a fetched JSON payload to stdout in the active format."""
        if self._format == OutputFormat.JSON:
            self.print_data(json.dumps(data, indent=2, ensure_ascii=False, default=str))
        elif self._format == OutputFormat.PLAIN:
            self._print_plain(data)
        else:
            json_str = json.dumps(data, indent=2, ensure_ascii=False, default=str)
            self._stdout.print(Syntax(json_str, "json", theme="monokai", word_wrap=True))

    def print_data(self, text: str) -> None:
        """Print raw text to stdout."""
        print(text, file=sys.stdout, flush=True)

    def print_table(
        self,
        headers: list[str],
        rows: list[list[str]],
        title: Optional[str] = None,
    ) -> None:
        """Print tabular data to stdout in the active format.

        * **Rich mode** -- styled :class:`~rich.table.Table`.
        * **JSON mode** -- array of objects keyed by header names.
        * **Plain mode** -- tab-separated values, one row per line.
        """
        if self._format == OutputFormat.JSON:
            records = [dict(zip(headers, row)) for row in rows]
            self.print_data(json.dumps(records, indent=2, ensure_ascii=False))
        elif self._format == OutputFormat.PLAIN:
            self.print_data("\t".join(headers))
            for row in rows:
                self.print_data("\t".join(row))
        else:
            table = Table(title=title, show_header=True, header_style="bold cyan")
            for h in headers:
                table.add_column(h)
            for row in rows:
                table.add_row(*row)
            self._stdout.print(table)

    # ------------------------------------------------------------------ #
    # Diagnostics (stderr)
    # ------------------------------------------------------------------ #

    def info(self, message: str) -> None:
        """Informational message. Suppressed by ``--quiet``."""
        if not self._quiet:
            self._emit(message, "{}")

    def success(self, message: str) -> None:
        """Green success message. Suppressed by ``--quiet``."""
        if not self._quiet:
            self._emit(message, "[green]{}[/green]")

    def warning(self, message: str) -> None:
        """Yellow warning. NOT suppressed by ``--quiet``."""
        self._emit(message, "[yellow]Warning:[/yellow] {}", plain_prefix="Warning: ")

    def error(self, message: str) -> None:
        """Bold-red error. Never suppressed."""
        self._emit(message, "[bold red]Error:[/bold red] {}", plain_prefix="Error: ")

    def suggest(self, message: str) -> None:
        """Dimmed next-step suggestion. Suppressed by ``--quiet``."""
        if not self._quiet:
            self._emit(f"\u2192 {message}", "[dim]{}[/dim]")

    def debug(self, message: str) -> None:
        """Debug message, shown only with ``--verbose``."""
        if self._verbose:
            self._emit(message, "[dim]\\[debug] {}[/dim]", plain_prefix="[debug] ")

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _emit(self, message: str, markup: str, plain_prefix: str = "") -> None:
        if self._no_color:
            print(f"{plain_prefix}{message}", file=sys.stderr, flush=True)
        else:
            self._stderr.print(markup.format(escape(message)), highlight=False)

    def _print_plain(self, data: Any) -> None:
        if isinstance(data, dict):
            for key, value in data.items():
                if isinstance(value, (dict, list)):
                    value = json.dumps(value, ensure_ascii=False, default=str)
                self.print_data(f"{key}\t{value}")
        elif isinstance(data, list):
            for item in data:
                if isinstance(item, dict):
                    self.print_data("\t".join(str(v) for v in item.values()))
                else:
                    self.print_data(str(item))
        else:
            self.print_data(str(data))


# ------------------------------------------------------------------ #
# Module-level helpers
# ------------------------------------------------------------------ #


def _is_tty() -> bool:
    """Check if stdout is a TTY."""
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """Return True when NO_COLOR is set (any value) or TERM=dumb."""
    if os.environ.get("NO_COLOR") is not None:
        return True
    return os.environ.get("TERM") == "dumb"


def configure_logging(output: OutputManager) -> None:
    """Route ``storefetch.*`` log records to the stderr console.

    With ``--verbose`` records at DEBUG and above are shown, otherwise only
    warnings and errors.  Calling this again replaces the previous handler.
    """
    logger = logging.getLogger("storefetch")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = RichHandler(
        console=output.stderr_console,
        show_time=False,
        show_path=False,
        markup=False,
    )
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if output.is_verbose else logging.WARNING)
    logger.propagate = False


# ------------------------------------------------------------------ #
# Global output instance (set during app startup)
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the global :class:`OutputManager`, creating a default one lazily."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    """Install *output* as the global :class:`OutputManager` instance."""
    global _output
    _output = output


def reset_output() -> None:
    """Reset the global :class:`OutputManager` to ``None``.

    Primarily useful in test suites to ensure a clean state between tests.
    """
    global _output
    _output = None


# ------------------------------------------------------------------ #
# Convenience functions that use the global instance
# ------------------------------------------------------------------ #


def format_response(data: Any) -> None:
    """Write a payload to stdout via the global OutputManager."""
    get_output().format_response(data)


def print_table(
    headers: list[str],
    rows: list[list[str]],
    title: Optional[str] = None,
) -> None:
    """Print tabular data to stdout via the global OutputManager."""
    get_output().print_table(headers, rows, title)


def info(message: str) -> None:
    """Print info message to stderr via the global OutputManager."""
    get_output().info(message)


def error(message: str) -> None:
    """Print error to stderr via the global OutputManager."""
    get_output().error(message)


def success(message: str) -> None:
    """Print success message to stderr via the global OutputManager."""
    get_output().success(message)


def warning(message: str) -> None:
    """Print warning to stderr via the global OutputManager."""
    get_output().warning(message)


def suggest(message: str) -> None:
    """Print next-step suggestion to stderr via the global OutputManager."""
    get_output().suggest(message)


def debug(message: str) -> None:
    """Print debug message to stderr via the global OutputManager."""
    get_output().debug(message)
