"""
skilo check - Strict lint plus a formatting check, for CI.
"""

from pathlib import Path

import typer

from skilo.cli.commands.fmt import run_fmt
from skilo.cli.commands.lint import PathArgument, run_lint
from skilo.cli.state import get_state, handle_errors


def check(
    ctx: typer.Context,
    path: PathArgument = Path("."),
) -> None:
    """Run lint --strict and fmt --check."""
    state = get_state(ctx)
    output = state.formatter

    with handle_errors(output):
        output.message("Running lint...")
        lint_code = run_lint(state, path, strict=True)

        output.message("Running format check...")
        fmt_code = run_fmt(state, path, check=True)

    if lint_code or fmt_code:
        raise typer.Exit(1)
    output.success("All checks passed!")
