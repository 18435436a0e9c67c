"""
skilo fmt - Rewrite SKILL.md files in canonical form.

Usage:
    skilo fmt
    skilo fmt ./skills --check
    skilo fmt --diff
"""

import difflib
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from skilo.cli.commands.lint import PathArgument
from skilo.cli.state import CliState, get_state, handle_errors
from skilo.errors import NoSkillsFoundError, SkiloIOError
from skilo.output import console
from skilo.skills import FormatResult, Formatter, ManifestError, find_skills


def unified_diff(result: FormatResult) -> str:
    """Unified diff between the file on disk and its formatted text."""
    name = str(result.path)
    lines = difflib.unified_diff(
        result.original.splitlines(),
        result.formatted.splitlines(),
        fromfile=name,
        tofile=name,
        lineterm="",
    )
    return "\n".join(lines)


def _print_diff(diff: str) -> None:
    for line in diff.splitlines():
        if line.startswith(("---", "+++")):
            style = "dim"
        elif line.startswith("@@"):
            style = "cyan"
        elif line.startswith("+"):
            style = "green"
        elif line.startswith("-"):
            style = "red"
        else:
            style = ""
        text = escape(line)
        console.print(f"[{style}]{text}[/{style}]" if style else text, highlight=False, soft_wrap=True)


def run_fmt(state: CliState, path: Path, check: bool = False, diff: bool = False) -> int:
    """
    Format every skill under ``path``.

    Returns:
        Exit code: 1 when ``check`` finds unformatted files or a manifest
        cannot be parsed, else 0.
    """
    output = state.formatter
    skill_formatter = Formatter(state.config.fmt)

    paths = sorted(find_skills(path, state.config.discovery.ignore))
    if not paths:
        raise NoSkillsFoundError(path)

    checked = 0
    changed = 0
    failed = 0

    for skill_path in paths:
        try:
            result = skill_formatter.format_file(skill_path)
        except ManifestError as e:
            output.error(str(e))
            failed += 1
            continue

        checked += 1
        if not result.changed:
            continue
        changed += 1

        if check:
            output.warning(f"{skill_path} needs formatting")
        elif diff:
            _print_diff(unified_diff(result))
        else:
            try:
                skill_path.write_text(result.formatted, encoding="utf-8")
            except OSError as e:
                raise SkiloIOError(f"Failed to write {skill_path}: {e}", skill_path) from e
            output.message(f"Formatted {skill_path}")

    if check:
        if changed:
            output.warning(f"{changed} file(s) need formatting")
        else:
            output.success(f"{checked} file(s) checked, all formatted correctly")
    elif not diff:
        if changed:
            output.success(f"Formatted {changed} file(s)")
        else:
            output.success(f"{checked} file(s) already formatted correctly")

    if failed or (check and changed):
        return 1
    return 0


def fmt(
    ctx: typer.Context,
    path: PathArgument = Path("."),
    check: Annotated[
        bool,
        typer.Option(
            "--check",
            help="Report files that need formatting without writing them.",
        ),
    ] = False,
    diff: Annotated[
        bool,
        typer.Option(
            "--diff",
            help="Show a diff instead of writing files.",
        ),
    ] = False,
) -> None:
    """Format SKILL.md files."""
    state = get_state(ctx)
    with handle_errors(state.formatter):
        code = run_fmt(state, path, check=check, diff=diff)
    if code:
        raise typer.Exit(code)
