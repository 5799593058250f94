"""Console output formatting for the pydirsync CLI."""

import json
from typing import Any, Optional

from rich.console import Console

from .utils import format_size


class OutputFormatter:
    """Writes human-readable (rich) or JSON output.

    Informational output is suppressed in quiet mode; errors are always
    written to stderr.
    """

    def __init__(
        self,
        json_output: bool = False,
        quiet: bool = False,
        console: Optional[Console] = None,
        err_console: Optional[Console] = None,
    ):
        """Initialize output formatter.

        Args:
            json_output: Emit machine-readable JSON instead of text
            quiet: Suppress non-essential output
            console: Console for regular output (defaults to stdout)
            err_console: Console for errors (defaults to stderr)
        """
        self.json_output = json_output
        self.quiet = quiet
        self.console = console or Console(highlight=False)
        self.err_console = err_console or Console(stderr=True, highlight=False)

    def print(self, text: str = "", style: Optional[str] = None) -> None:
        """Print a line unless quiet."""
        if self.quiet:
            return
        self.console.print(text, style=style, markup=False, soft_wrap=True)

    def info(self, text: str) -> None:
        self.print(text)

    def success(self, text: str) -> None:
        self.print(f"✓ {text}", style="green")

    def warning(self, text: str) -> None:
        self.print(f"⚠ {text}", style="yellow")

    def error(self, text: str) -> None:
        self.err_console.print(
            f"✗ {text}", style="bold red", markup=False, soft_wrap=True
        )

    def format_size(self, size_bytes: int) -> str:
        return format_size(size_bytes)

    def output_json(self, data: Any) -> None:
        """Print data as indented JSON (ignores quiet mode)."""
        self.console.print(
            json.dumps(data, indent=2, default=str), markup=False, soft_wrap=True
        )

    def print_summary(self, title: str, counts: dict[str, int]) -> None:
        """Print a titled list of non-zero counters."""
        if self.quiet:
            return
        self.print(title, style="bold")
        for label, count in counts.items():
            if count:
                self.print(f"  {label}: {count}")
