"""
skilo lint / skilo validate - Check skills against the validation rules.

Usage:
    skilo lint
    skilo lint ./skills --strict
    skilo --format sarif lint > results.sarif
    skilo validate ./my-skill
"""

from pathlib import Path
from typing import Annotated

import typer

from skilo.cli.state import CliState, get_state, handle_errors
from skilo.errors import NoSkillsFoundError
from skilo.output import totals
from skilo.skills import ValidationResult, Validator, discover, parse_failure_result

PathArgument = Annotated[
    Path,
    typer.Argument(
        help="Skill directory, SKILL.md file, or tree to search.",
    ),
]


def run_lint(state: CliState, path: Path, strict: bool = False) -> int:
    """
    Discover, validate and report skills under ``path``.

    Manifests that fail to parse are reported as E007 diagnostics alongside
    the other results rather than aborting the run.

    Returns:
        Exit code: 1 on errors (or warnings in strict mode), else 0.

    Raises:
        NoSkillsFoundError: If no SKILL.md exists under ``path``.
    """
    config = state.config
    strict = strict or config.lint.strict
    formatter = state.formatter

    loaded = discover(path, config.discovery.ignore)
    if not loaded:
        raise NoSkillsFoundError(path)

    validator = Validator(config.lint)
    results: list[tuple[Path, ValidationResult]] = []
    for item in loaded:
        if item.manifest is None:
            results.append((item.path, parse_failure_result(item.error)))
        else:
            results.append((item.path, validator.validate(item.manifest)))

    formatter.emit(formatter.format_validation(results))

    errors, warnings = totals(results)
    if errors or (strict and warnings):
        return 1
    return 0


def lint(
    ctx: typer.Context,
    path: PathArgument = Path("."),
    strict: Annotated[
        bool,
        typer.Option(
            "--strict",
            help="Treat warnings as errors.",
        ),
    ] = False,
) -> None:
    """Validate skills and report diagnostics."""
    state = get_state(ctx)
    with handle_errors(state.formatter):
        code = run_lint(state, path, strict=strict)
    if code:
        raise typer.Exit(code)


def validate(
    ctx: typer.Context,
    path: PathArgument = Path("."),
) -> None:
    """Validate skills, treating warnings as errors (lint --strict)."""
    state = get_state(ctx)
    with handle_errors(state.formatter):
        code = run_lint(state, path, strict=True)
    if code:
        raise typer.Exit(code)
