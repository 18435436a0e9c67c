"""
skilo read-properties / skilo to-prompt - Expose skill metadata to agents.

Usage:
    skilo read-properties ./skills/pdf-tools
    skilo to-prompt ./skills > available_skills.xml
"""

import json
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Annotated, Any

import typer

from skilo.cli.state import CliState, get_state, handle_errors
from skilo.errors import NoSkillsFoundError
from skilo.skills import Manifest, discover

PathsArgument = Annotated[
    list[Path] | None,
    typer.Argument(
        help="Skill directories, SKILL.md files, or trees to search (default: .).",
    ),
]

OPTIONAL_PROPERTIES = ("license", "compatibility", "metadata", "allowed_tools")


def load_manifests(state: CliState, paths: list[Path]) -> tuple[list[Manifest], int]:
    """
    Parse every skill under ``paths``.

    Parse failures are reported and counted but do not stop the batch.

    Raises:
        NoSkillsFoundError: If no SKILL.md exists under any path.
    """
    loaded = []
    for path in paths:
        loaded.extend(discover(path, state.config.discovery.ignore))

    if not loaded:
        raise NoSkillsFoundError(", ".join(str(path) for path in paths))

    manifests = []
    failures = 0
    for item in loaded:
        if item.manifest is None:
            state.formatter.error(str(item.error))
            failures += 1
        else:
            manifests.append(item.manifest)
    return manifests, failures


def skill_properties(manifest: Manifest) -> dict[str, Any]:
    """Frontmatter properties plus the manifest path, omitting unset fields."""
    frontmatter = manifest.frontmatter
    properties: dict[str, Any] = {"name": frontmatter.name, "description": frontmatter.description}
    for key in OPTIONAL_PROPERTIES:
        value = getattr(frontmatter, key)
        if value is not None:
            properties[key] = value
    properties["path"] = str(manifest.path)
    return properties


def render_prompt(manifests: list[Manifest]) -> str:
    """``<available_skills>`` block for a system prompt."""
    root = ET.Element("available_skills")
    for manifest in manifests:
        entry = ET.SubElement(root, "skill")
        ET.SubElement(entry, "name").text = manifest.name
        ET.SubElement(entry, "description").text = manifest.description
        ET.SubElement(entry, "location").text = str(manifest.path)
    ET.indent(root, space="  ")
    return ET.tostring(root, encoding="unicode")


def read_properties(
    ctx: typer.Context,
    paths: PathsArgument = None,
) -> None:
    """Print skill properties as JSON (an object for one skill, else an array)."""
    state = get_state(ctx)
    with handle_errors(state.formatter):
        manifests, failures = load_manifests(state, paths or [Path(".")])

    properties = [skill_properties(manifest) for manifest in manifests]
    document: Any = properties[0] if len(properties) == 1 else properties
    if not state.quiet:
        typer.echo(json.dumps(document, indent=2, ensure_ascii=False))

    if failures:
        raise typer.Exit(1)


def to_prompt(
    ctx: typer.Context,
    paths: PathsArgument = None,
) -> None:
    """Print an <available_skills> XML block for agent system prompts."""
    state = get_state(ctx)
    with handle_errors(state.formatter):
        manifests, failures = load_manifests(state, paths or [Path(".")])

    if not state.quiet:
        typer.echo(render_prompt(manifests))

    if failures:
        raise typer.Exit(1)
