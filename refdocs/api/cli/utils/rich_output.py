"""Rich-based output formatting utilities for refdocs CLI commands."""

import os
import sys

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table


class MessagePrefixes:
    """Constants for consistent message prefixes in fallback mode."""

    INFO = "[INFO]"
    SUCCESS = "[SUCCESS]"
    WARN = "[WARN]"
    ERROR = "[ERROR]"
    DEBUG = "[DEBUG]"


class RichOutputFormatter:
    """Terminal UI formatter using Rich, with a plain-text fallback."""

    def __init__(self, verbose: bool = False):
        """Initialize Rich output formatter.

        Args:
            verbose: Whether to enable verbose output
        """
        self.verbose = verbose
        self._terminal_compatible = self._check_terminal_compatibility()
        self.console = Console() if self._terminal_compatible else None

    def _check_terminal_compatibility(self) -> bool:
        """Check if terminal supports Rich formatting."""
        if os.environ.get("REFDOCS_NO_RICH"):
            return False

        try:
            if not sys.stdout.isatty():
                return False
        except (AttributeError, ValueError):
            return False

        return os.environ.get("TERM", "") not in ("dumb", "unknown")

    def _safe_print(self, styled_prefix: str, message: str, fallback_prefix: str) -> None:
        """Print with Rich or fall back to plain text."""
        if self._terminal_compatible and self.console is not None:
            self.console.print(f"{styled_prefix} {escape(message)}")
            return

        print(f"{fallback_prefix} {message}")

    def info(self, message: str) -> None:
        """Print an info message."""
        self._safe_print("[blue][INFO][/blue]", message, MessagePrefixes.INFO)

    def success(self, message: str) -> None:
        """Print a success message."""
        self._safe_print("[green][SUCCESS][/green]", message, MessagePrefixes.SUCCESS)

    def warning(self, message: str) -> None:
        """Print a warning message."""
        self._safe_print("[yellow][WARN][/yellow]", message, MessagePrefixes.WARN)

    def error(self, message: str) -> None:
        """Print an error message."""
        self._safe_print("[red][ERROR][/red]", message, MessagePrefixes.ERROR)

    def verbose_info(self, message: str) -> None:
        """Print a verbose info message if verbose mode is enabled."""
        if self.verbose:
            self._safe_print("[cyan][DEBUG][/cyan]", message, MessagePrefixes.DEBUG)

    def section_header(self, title: str) -> None:
        """Print a section header with consistent formatting."""
        if self._terminal_compatible and self.console is not None:
            self.console.print(Panel(title, style="bold cyan", padding=(0, 1)))
            return

        print(f"\n=== {title} ===\n")

    def box_section(self, title: str, content: list[tuple[str, str]]) -> None:
        """Print a bordered section with key-value pairs."""
        if self._terminal_compatible and self.console is not None:
            table = Table(show_header=False, box=None, padding=(0, 1))
            table.add_column("Key", style="cyan")
            table.add_column("Value")
            for key, value in content:
                table.add_row(key, escape(value))
            self.console.print(Panel(table, title=title, expand=False))
            return

        print(f"{title}:")
        for key, value in content:
            print(f"  {key}: {value}")
