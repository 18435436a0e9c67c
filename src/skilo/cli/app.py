"""
Main Typer application for the skilo CLI.

This module defines the root CLI application, its global options, and
registers every command.
"""

from pathlib import Path
from typing import Annotated

import typer

from skilo import __version__
from skilo.cli.commands import add, agents, cache, check, config, fmt, lint, new, prompt, skills
from skilo.cli.state import CliState, handle_errors, setup_logging
from skilo.config import load_config
from skilo.output import OutputFormat, console, get_formatter

app = typer.Typer(
    name="skilo",
    help="Create, validate, format and install Agent Skills.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"skilo version [green]{__version__}[/green]", highlight=False)
        raise typer.Exit()


# noinspection PyUnusedLocal
@app.callback()
def main_callback(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            envvar="SKILO_CONFIG",
            help="Project config file (default: .skilo.yaml, skilo.yaml or .skilo/config.yaml).",
        ),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format for validation results.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TEXT,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Only print errors and results.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Show debug logging.",
        ),
    ] = False,
) -> None:
    """
    [bold blue]skilo[/bold blue] - Agent Skills toolkit

    Scaffold new skills, lint and format SKILL.md files, and install skills
    from git repositories into your coding agents.
    """
    setup_logging(verbose)

    with handle_errors(get_formatter(output_format, quiet)):
        loaded = load_config(config_path=config_path)

    ctx.obj = CliState(config=loaded, format=output_format, quiet=quiet, config_path=config_path)


# Register commands
app.command()(lint.lint)
app.command()(lint.validate)
app.command()(fmt.fmt)
app.command()(check.check)
app.command()(new.new)
app.command()(add.add)
app.command("list")(skills.list_installed)
app.command()(skills.remove)
app.command("read-properties")(prompt.read_properties)
app.command("to-prompt")(prompt.to_prompt)
app.command()(agents.agents)
app.add_typer(cache.app, name="cache")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
