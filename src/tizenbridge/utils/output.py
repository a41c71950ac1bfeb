"""Rich console helpers for terminal output.

The Console wrapper doubles as the logger handed to the Bridge: ``ok``,
``warn``, ``error`` and ``write`` are the methods it calls.
"""

from typing import Protocol

from rich.console import Console as RichConsole
from rich.markup import escape


class Logger(Protocol):
    """Logging capability injected into the Bridge."""

    def ok(self, message: str) -> None: ...

    def warn(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def write(self, text: str) -> None: ...


class Console:
    """Wrapper around rich.Console with convenience methods."""

    def __init__(self) -> None:
        self._console = RichConsole()

    def print_success(self, message: str) -> None:
        """Print a success message in green."""
        self._console.print(f"[green]✓[/green] {escape(message)}")

    def print_error(self, message: str) -> None:
        """Print an error message in red."""
        self._console.print(f"[red]✗[/red] {escape(message)}")

    def print_warning(self, message: str) -> None:
        """Print a warning message in yellow."""
        self._console.print(f"[yellow]⚠[/yellow] {escape(message)}")

    def write(self, text: str) -> None:
        """Echo raw tool output, skipping blank text."""
        if text and text.strip():
            self._console.print(text.rstrip(), markup=False, highlight=False)

    # Logger interface used by the Bridge
    def ok(self, message: str) -> None:
        self.print_success(message)

    def warn(self, message: str) -> None:
        self.print_warning(message)

    def error(self, message: str) -> None:
        self.print_error(message)


# Global console instance
console = Console()
