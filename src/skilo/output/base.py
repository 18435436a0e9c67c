"""
Output formatter interface and shared consoles.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from enum import Enum
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from skilo.skills.diagnostics import ValidationResult

# (skill path, result) pairs in display order
ValidationResults = Sequence[tuple[Path | str, ValidationResult]]

console = Console()
err_console = Console(stderr=True)


class OutputFormat(str, Enum):
    """Output format options."""

    TEXT = "text"
    JSON = "json"
    SARIF = "sarif"


class OutputFormatter(ABC):
    """Renders validation results and status messages."""

    # Status messages go to stderr unless a formatter prints human text.
    message_console: Console = err_console

    def __init__(self, quiet: bool = False):
        self.quiet = quiet

    @abstractmethod
    def format_validation(self, results: ValidationResults) -> str:
        """Render validation results as a string."""
        pass

    @abstractmethod
    def emit(self, output: str) -> None:
        """Write rendered output to stdout."""
        pass

    def message(self, text: str) -> None:
        """Informational message, suppressed by --quiet."""
        if not self.quiet:
            self.message_console.print(escape(text), highlight=False, soft_wrap=True)

    def success(self, text: str) -> None:
        if not self.quiet:
            self.message_console.print(f"[green]✓[/green] {escape(text)}", highlight=False, soft_wrap=True)

    def warning(self, text: str) -> None:
        self.message_console.print(f"[yellow]![/yellow] {escape(text)}", highlight=False, soft_wrap=True)

    def error(self, text: str) -> None:
        """Errors are never suppressed."""
        err_console.print(f"[red]✗[/red] {escape(text)}", highlight=False, soft_wrap=True)


def totals(results: ValidationResults) -> tuple[int, int]:
    """Total (errors, warnings) across results."""
    errors = sum(len(result.errors) for _, result in results)
    warnings = sum(len(result.warnings) for _, result in results)
    return errors, warnings
