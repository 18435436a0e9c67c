"""
Validation output renderers.

Usage:
    from skilo.output import get_formatter

    formatter = get_formatter("json")
    formatter.emit(formatter.format_validation(results))
"""

from skilo.output.base import OutputFormat, OutputFormatter, ValidationResults, console, err_console, totals
from skilo.output.json_output import JsonFormatter
from skilo.output.sarif import SarifFormatter
from skilo.output.text import TextFormatter

FORMATTERS: dict[OutputFormat, type[OutputFormatter]] = {
    OutputFormat.TEXT: TextFormatter,
    OutputFormat.JSON: JsonFormatter,
    OutputFormat.SARIF: SarifFormatter,
}


def get_formatter(format: OutputFormat | str = OutputFormat.TEXT, quiet: bool = False) -> OutputFormatter:
    """Build the formatter for an output format."""
    return FORMATTERS[OutputFormat(format)](quiet=quiet)


__all__ = [
    "OutputFormat",
    "OutputFormatter",
    "ValidationResults",
    "console",
    "err_console",
    "totals",
    "get_formatter",
    "JsonFormatter",
    "SarifFormatter",
    "TextFormatter",
]
