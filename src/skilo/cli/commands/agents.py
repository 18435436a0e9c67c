"""
skilo agents - Show agent skills directories found on this machine.
"""

from pathlib import Path

import typer

from skilo.cli.output import plural, print_table
from skilo.cli.state import get_state, handle_errors, resolve_agent
from skilo.skills import detect_agents


def agents(ctx: typer.Context) -> None:
    """Detect coding agents with a project or global skills directory."""
    state = get_state(ctx)
    formatter = state.formatter

    with handle_errors(formatter):
        default = resolve_agent(None, state.config)

    detected = detect_agents(Path.cwd())
    if not detected:
        formatter.message("No agents detected.")
    else:
        for is_global, title in ((False, "Project agents"), (True, "Global agents")):
            rows = [
                [found.agent.display_name, found.skills_path, plural(found.skill_count, "skill")]
                for found in detected
                if found.is_global == is_global
            ]
            if rows:
                print_table(["Agent", "Skills directory", "Skills"], rows, title=title)

    if default is None:
        formatter.message("Default target: ./skills (set add.default_agent to change)")
    else:
        formatter.message(f"Default agent: {default.display_name} ({default.skills_dir})")
