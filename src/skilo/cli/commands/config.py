"""
skilo config - Configuration management commands.

Usage:
    skilo config show
    skilo config show lint.rules
    skilo config show --sources
    skilo config set lint.rules.body_length 300
    skilo config set add.default_agent cursor --project
"""

import json
from pathlib import Path
from typing import Annotated

import typer
import yaml
from pydantic import ValidationError
from rich.syntax import Syntax

from skilo.cli.output import print_table
from skilo.cli.state import get_state, handle_errors
from skilo.config import (
    Config,
    ConfigurationError,
    deep_merge,
    get_config_sources,
    get_nested_value,
    load_yaml_file,
    parse_value,
    save_yaml_file,
    set_nested_value,
)
from skilo.output import console
from skilo.storage import PROJECT_CONFIG_NAMES, find_project_config, get_global_config_path

app = typer.Typer(
    name="config",
    help="Configuration management.",
)


@app.command()
def show(
    ctx: typer.Context,
    section: Annotated[
        str | None,
        typer.Argument(
            help="Config section to show (e.g., 'lint', 'lint.rules').",
        ),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output as JSON.",
        ),
    ] = False,
    sources: Annotated[
        bool,
        typer.Option(
            "--sources",
            help="Show configuration source files.",
        ),
    ] = False,
) -> None:
    """Show the effective (merged) configuration."""
    state = get_state(ctx)

    if sources:
        rows = [
            [name, path or "-", "loaded" if path else "not found"]
            for name, path in get_config_sources(state.config_path).items()
        ]
        print_table(["Source", "Path", "Status"], rows, title="Configuration Sources")
        return

    config_dict = state.config.model_dump(mode="json")
    if section:
        value = get_nested_value(config_dict, section)
        if value is None:
            state.formatter.error(f"Section '{section}' not found or unset.")
            raise typer.Exit(1)
        config_dict = value

    if json_output:
        typer.echo(json.dumps(config_dict, indent=2))
        return

    output = yaml.safe_dump(config_dict, default_flow_style=False, sort_keys=False, allow_unicode=True)
    console.print(Syntax(output, "yaml", theme="monokai"))


@app.command("set")
def set_value(
    ctx: typer.Context,
    key: Annotated[
        str,
        typer.Argument(
            help="Configuration key (e.g., 'lint.strict').",
        ),
    ],
    value: Annotated[
        str,
        typer.Argument(
            help="Value to set.",
        ),
    ],
    project: Annotated[
        bool,
        typer.Option(
            "--project",
            help="Write the project config instead of the global one.",
        ),
    ] = False,
) -> None:
    """Set a configuration value."""
    state = get_state(ctx)
    formatter = state.formatter

    if project:
        config_path = find_project_config() or Path.cwd() / PROJECT_CONFIG_NAMES[0]
    else:
        config_path = get_global_config_path()

    with handle_errors(formatter):
        config_dict = load_yaml_file(config_path)
        parsed_value = parse_value(value)
        config_dict = set_nested_value(config_dict, key.split("."), parsed_value)

        try:
            Config.model_validate(deep_merge(Config().model_dump(), config_dict))
        except ValidationError as e:
            raise ConfigurationError(f"Invalid value for {key}: {e}") from e

        save_yaml_file(config_path, config_dict)

    formatter.success(f"Set {key} = {parsed_value!r} in {config_path}")
