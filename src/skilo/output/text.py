"""
Human-readable validation output.
"""

from pathlib import Path

from rich.markup import escape

from skilo.output.base import OutputFormatter, ValidationResults, console, totals
from skilo.skills.diagnostics import Diagnostic


def format_location(diagnostic: Diagnostic) -> str:
    """``line:col``, ``line:`` or an empty string."""
    if diagnostic.line is None:
        return ""
    if diagnostic.column is None:
        return f"{diagnostic.line}:"
    return f"{diagnostic.line}:{diagnostic.column}"


def _format_diagnostic(diagnostic: Diagnostic, label: str, style: str) -> list[str]:
    location = format_location(diagnostic)
    prefix = f"  [bold {style}]{label}[/bold {style}] [dim]{escape(f'[{diagnostic.code}]')}[/dim]"
    if location:
        prefix += f" [dim]{location}[/dim]:"
    lines = [f"{prefix} {escape(diagnostic.message)}"]
    if diagnostic.fix_hint:
        lines.append(f"    [cyan]hint:[/cyan] {escape(diagnostic.fix_hint)}")
    return lines


class TextFormatter(OutputFormatter):
    """Colored text for terminals."""

    message_console = console

    def format_validation(self, results: ValidationResults) -> str:
        lines: list[str] = []

        for path, result in results:
            if result.is_ok_strict:
                continue
            lines.append(f"[bold]{escape(str(Path(path)))}[/bold]")
            for diagnostic in result.errors:
                lines.extend(_format_diagnostic(diagnostic, "error", "red"))
            for diagnostic in result.warnings:
                lines.extend(_format_diagnostic(diagnostic, "warning", "yellow"))
            lines.append("")

        checked = len(results)
        errors, warnings = totals(results)
        if errors == 0 and warnings == 0:
            lines.append(f"[green]✓[/green] {checked} skill(s) checked, no issues found")
        else:
            marker = "[red]✗[/red]" if errors else "[yellow]![/yellow]"
            lines.append(f"{marker} {checked} skill(s) checked: {errors} error(s), {warnings} warning(s)")

        return "\n".join(lines)

    def emit(self, output: str) -> None:
        if output:
            console.print(output, highlight=False, soft_wrap=True)
