"""
skilo list / skilo remove - Manage installed skills.

Usage:
    skilo list
    skilo list --all --agent cursor
    skilo remove pdf-tools --yes
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from skilo.cli.output import plural, print_table, truncate_description
from skilo.cli.state import confirm, get_state, handle_errors, resolve_agent
from skilo.errors import CancelledError
from skilo.output import console
from skilo.skills import InstalledSkill, Scope, list_skills, remove_skill, resolve_skills_dir, skill_exists

AgentOption = Annotated[
    str | None,
    typer.Option(
        "--agent",
        "-a",
        help="Agent whose skills directory to use (default: add.default_agent).",
    ),
]


def _print_skills(title: str, skills: list[InstalledSkill]) -> None:
    rows = [[skill.name, truncate_description(skill.description)] for skill in skills]
    print_table(["Name", "Description"], rows, title=title)


def list_installed(
    ctx: typer.Context,
    path: Annotated[
        Path,
        typer.Argument(
            help="Project root.",
        ),
    ] = Path("."),
    global_scope: Annotated[
        bool,
        typer.Option(
            "--global",
            "-g",
            help="List global skills only.",
        ),
    ] = False,
    all_scopes: Annotated[
        bool,
        typer.Option(
            "--all",
            help="List project and global skills.",
        ),
    ] = False,
    agent: AgentOption = None,
) -> None:
    """List installed skills."""
    state = get_state(ctx)
    formatter = state.formatter
    project_root = path.resolve()

    with handle_errors(formatter):
        resolved = resolve_agent(agent, state.config)

        if all_scopes:
            scopes = [Scope.PROJECT] if resolved is None else [Scope.PROJECT, Scope.GLOBAL]
        elif global_scope:
            scopes = [Scope.GLOBAL]
        else:
            scopes = [Scope.PROJECT]

        found = {scope: list_skills(resolve_skills_dir(resolved, scope, project_root)) for scope in scopes}

    if not any(found.values()):
        where = "at project or global level" if all_scopes else ("globally" if global_scope else "in project")
        owner = resolved.display_name if resolved else "skills/"
        formatter.message(f"No skills installed {where} for {owner}.")
        return

    for scope, skills in found.items():
        if skills:
            skills_dir = resolve_skills_dir(resolved, scope, project_root)
            _print_skills(f"{scope.value.title()} skills ({skills_dir})", skills)

    project_names = {skill.name for skill in found.get(Scope.PROJECT, [])}
    shadowed = [skill.name for skill in found.get(Scope.GLOBAL, []) if skill.name in project_names]
    if all_scopes and shadowed:
        console.print(
            f"[yellow]Note:[/yellow] {plural(len(shadowed), 'global skill')} shadowed by project skills: "
            f"{escape(', '.join(shadowed))}",
            highlight=False,
        )


def remove(
    ctx: typer.Context,
    names: Annotated[
        list[str],
        typer.Argument(
            help="Skill names to remove.",
        ),
    ],
    agent: AgentOption = None,
    global_scope: Annotated[
        bool,
        typer.Option(
            "--global",
            "-g",
            help="Remove from the agent's global skills directory.",
        ),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Skip confirmation.",
        ),
    ] = False,
) -> None:
    """Remove installed skills."""
    state = get_state(ctx)
    formatter = state.formatter

    with handle_errors(formatter):
        resolved = resolve_agent(agent, state.config)
        scope = Scope.GLOBAL if global_scope else Scope.PROJECT
        skills_dir = resolve_skills_dir(resolved, scope, Path.cwd())

        if not skills_dir.is_dir():
            formatter.error(f"Skills directory does not exist: {skills_dir}")
            raise typer.Exit(1)

        to_remove = []
        for name in names:
            if skill_exists(name, skills_dir):
                to_remove.append(name)
            else:
                formatter.warning(f"Skill '{name}' not found")

        if not to_remove:
            formatter.error("No skills to remove")
            raise typer.Exit(1)

        if not yes:
            print_table(["Name", "Path"], [[name, skills_dir / name] for name in to_remove], title="Skills to remove")
            if not confirm(f"Remove {plural(len(to_remove), 'skill')}?"):
                raise CancelledError()

        failed = 0
        removed = 0
        for name in to_remove:
            try:
                remove_skill(name, skills_dir)
            except OSError as e:
                formatter.error(f"Failed to remove '{name}': {e}")
                failed += 1
                continue
            formatter.message(f"Removed {name}")
            removed += 1

    formatter.success(f"Removed {plural(removed, 'skill')}")
    if failed:
        raise typer.Exit(1)
