"""
skilo new - Scaffold a skill from a template.

Usage:
    skilo new my-skill
    skilo new pdf-tools --template full --lang bash --license MIT
    skilo new my-skill --agent cursor --global
"""

from pathlib import Path
from typing import Annotated

import typer

from skilo.cli.state import get_state, handle_errors, resolve_agent
from skilo.config import Config
from skilo.errors import InvalidNameError
from skilo.skills import Scope, TemplateContext, render_skill, resolve_skills_dir
from skilo.skills.rules import DEFAULT_MAX_NAME_LENGTH, is_valid_name


def resolve_output_dir(
    config: Config,
    output: Path | None,
    agent: str | None,
    global_scope: bool,
    project_root: Path,
) -> Path:
    """
    Directory that receives the new skill.

    --output wins. Otherwise the agent skills directory is used (--agent or
    ``add.default_agent``); with no agent at all, the current directory.
    """
    if output is not None:
        return output

    resolved = resolve_agent(agent, config)
    if resolved is None and not global_scope:
        return project_root
    scope = Scope.GLOBAL if global_scope else Scope.PROJECT
    return resolve_skills_dir(resolved, scope, project_root)


def new(
    ctx: typer.Context,
    name: Annotated[
        str,
        typer.Argument(
            help="Skill name (lowercase letters, digits and single hyphens).",
        ),
    ],
    template: Annotated[
        str | None,
        typer.Option(
            "--template",
            "-t",
            help="Template: hello-world, minimal, full, or script-based.",
        ),
    ] = None,
    lang: Annotated[
        str | None,
        typer.Option(
            "--lang",
            "-l",
            help="Script language: python, bash, javascript, or typescript.",
        ),
    ] = None,
    license_name: Annotated[
        str | None,
        typer.Option(
            "--license",
            help="License for the skill (e.g. MIT, Apache-2.0).",
        ),
    ] = None,
    description: Annotated[
        str | None,
        typer.Option(
            "--description",
            "-d",
            help="Skill description.",
        ),
    ] = None,
    no_optional_dirs: Annotated[
        bool,
        typer.Option(
            "--no-optional-dirs",
            help="Do not create references/ and assets/.",
        ),
    ] = False,
    no_scripts: Annotated[
        bool,
        typer.Option(
            "--no-scripts",
            help="Do not create example scripts.",
        ),
    ] = False,
    agent: Annotated[
        str | None,
        typer.Option(
            "--agent",
            "-a",
            help="Create the skill in this agent's skills directory.",
        ),
    ] = None,
    global_scope: Annotated[
        bool,
        typer.Option(
            "--global",
            "-g",
            help="Use the agent's global skills directory.",
        ),
    ] = False,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Parent directory for the skill.",
        ),
    ] = None,
) -> None:
    """Create a new skill from a template."""
    state = get_state(ctx)
    config = state.config
    formatter = state.formatter

    with handle_errors(formatter):
        if not is_valid_name(name) or len(name) > DEFAULT_MAX_NAME_LENGTH:
            raise InvalidNameError(name)

        output_dir = resolve_output_dir(config, output, agent, global_scope, Path.cwd())
        context = TemplateContext(
            name=name,
            description=description or f"A {name.replace('-', ' ')} skill.",
            license=license_name or config.new.default_license,
            lang=lang or config.new.default_lang,
            include_optional_dirs=not no_optional_dirs,
            include_scripts=not no_scripts,
        )

        try:
            skill_dir = render_skill(template or config.new.default_template, context, output_dir)
        except ValueError as e:
            formatter.error(str(e))
            raise typer.Exit(1) from e

    formatter.success(f"Created skill '{name}' at {skill_dir}")
