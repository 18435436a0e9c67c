"""
skilo add - Install skills from a git repository or a local directory.

Usage:
    skilo add owner/repo
    skilo add https://github.com/owner/repo/tree/main/skills --skill pdf-tools
    skilo add git@github.com:owner/repo.git --tag v1.0 --agent claude --agent cursor
    skilo add ./my-skills --output ./vendor/skills --yes
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Annotated

import typer

from skilo.cli.output import plural, print_table, truncate_description
from skilo.cli.state import CliState, confirm, get_state, handle_errors, resolve_agents
from skilo.errors import CancelledError, NoSkillsFoundError
from skilo.git import GitSource, fetch, parse_source
from skilo.output import OutputFormatter
from skilo.skills import (
    Agent,
    Manifest,
    Scope,
    Validator,
    collect_skills,
    install_skill,
    resolve_skills_dir,
    select_skills,
)
from skilo.storage import expand_path

logger = logging.getLogger(__name__)


@dataclass
class InstallTarget:
    """A skills directory to install into."""

    path: Path
    scope: Scope
    agent: Agent | None = None

    @property
    def description(self) -> str:
        label = self.agent.display_name if self.agent else "skills"
        suffix = " (global)" if self.scope is Scope.GLOBAL else ""
        return f"{label}{suffix}: {self.path}"


@dataclass
class SkillCandidate:
    """A discovered skill and the outcome of validating it."""

    manifest: Manifest
    errors: list[str] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.manifest.name

    @property
    def valid(self) -> bool:
        return not self.errors


def resolve_targets(
    state: CliState,
    agents: list[str],
    global_scope: bool,
    output: Path | None,
    project_root: Path,
) -> list[InstallTarget]:
    """Install targets from --output, --agent and --global."""
    if output is not None:
        return [InstallTarget(path=output, scope=Scope.PROJECT)]

    scope = Scope.GLOBAL if global_scope else Scope.PROJECT
    return [
        InstallTarget(path=resolve_skills_dir(agent, scope, project_root), scope=scope, agent=agent)
        for agent in resolve_agents(agents, state.config, project_root, global_scope)
    ]


def load_candidates(state: CliState, root: Path, names: list[str]) -> list[SkillCandidate]:
    """
    Discover, filter and validate skills in a source tree.

    Manifests that fail to parse are skipped with a warning.

    Raises:
        NoSkillsFoundError: If nothing is found, or a requested name is missing.
    """
    config = state.config
    validator = Validator(config.lint) if config.add.validate_skills else None

    candidates = []
    for result in select_skills(collect_skills(root, config.discovery.ignore), names):
        if result.manifest is None:
            state.formatter.warning(f"Skipping {result.path}: {result.error}")
            continue
        candidate = SkillCandidate(manifest=result.manifest)
        if validator is not None:
            candidate.errors = [d.message for d in validator.validate(result.manifest).errors]
        candidates.append(candidate)

    if not candidates:
        raise NoSkillsFoundError(root)

    candidates.sort(key=lambda candidate: candidate.name)
    return candidates


def print_candidates(candidates: list[SkillCandidate]) -> None:
    rows = [
        [
            candidate.name,
            truncate_description(candidate.manifest.description),
            "valid" if candidate.valid else "invalid",
        ]
        for candidate in candidates
    ]
    print_table(["Name", "Description", "Status"], rows, title=f"Found {plural(len(candidates), 'skill')}")


def install_candidates(
    candidates: list[SkillCandidate],
    target: InstallTarget,
    overwrite: bool,
    formatter: OutputFormatter,
) -> int:
    """Copy valid skills into a target; returns how many were installed."""
    installed = 0

    for candidate in candidates:
        if not candidate.valid:
            formatter.warning(f"Skipping {candidate.name} (validation failed: {', '.join(candidate.errors)})")
            continue

        replace = overwrite
        if (target.path / candidate.name).exists() and not overwrite:
            if not confirm(f"Skill '{candidate.name}' already exists. Overwrite?"):
                formatter.message(f"Skipping {candidate.name}")
                continue
            replace = True

        destination = install_skill(candidate.manifest, target.path, overwrite=replace)
        formatter.message(f"Installed {candidate.name} to {destination}")
        installed += 1

    return installed


def install_from(
    state: CliState,
    root: Path,
    names: list[str],
    targets: list[InstallTarget],
    list_only: bool,
    yes: bool,
) -> int:
    """Install skills from a resolved source root. Returns the number installed."""
    formatter = state.formatter
    candidates = load_candidates(state, root, names)

    if list_only:
        print_candidates(candidates)
        return len(candidates)

    if not (yes or not state.config.add.confirm):
        print_candidates(candidates)
        for target in targets:
            formatter.message(f"  {target.description}")
        prompt = f"Install {plural(len(candidates), 'skill')} to {plural(len(targets), 'target')}?"
        if not confirm(prompt):
            raise CancelledError()

    total = 0
    for target in targets:
        installed = install_candidates(candidates, target, overwrite=yes, formatter=formatter)
        formatter.success(f"Installed {plural(installed, 'skill')} to {target.path}")
        total += installed
    return total


def add(
    ctx: typer.Context,
    source: Annotated[
        str,
        typer.Argument(
            help="owner/repo, a git URL, or a local path.",
        ),
    ],
    skill: Annotated[
        list[str] | None,
        typer.Option(
            "--skill",
            "-s",
            help="Only install this skill (repeatable).",
        ),
    ] = None,
    list_only: Annotated[
        bool,
        typer.Option(
            "--list",
            "-l",
            help="List the skills in the source without installing.",
        ),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Skip confirmation prompts and overwrite existing skills.",
        ),
    ] = False,
    branch: Annotated[
        str | None,
        typer.Option(
            "--branch",
            "-b",
            help="Git branch to install from.",
        ),
    ] = None,
    tag: Annotated[
        str | None,
        typer.Option(
            "--tag",
            help="Git tag to install from.",
        ),
    ] = None,
    agent: Annotated[
        list[str] | None,
        typer.Option(
            "--agent",
            "-a",
            help="Target agent (repeatable, or 'all' for every detected agent).",
        ),
    ] = None,
    global_scope: Annotated[
        bool,
        typer.Option(
            "--global",
            "-g",
            help="Install into the agent's global skills directory.",
        ),
    ] = False,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Install into this directory instead of an agent directory.",
        ),
    ] = None,
) -> None:
    """Install skills from a repository or local directory."""
    state = get_state(ctx)
    formatter = state.formatter

    with handle_errors(formatter):
        targets = resolve_targets(state, agent or [], global_scope, output, Path.cwd())
        parsed = parse_source(source, branch=branch, tag=tag)

        if isinstance(parsed, GitSource):
            formatter.message(f"Fetching skills from {parsed.display_name}...")
            with fetch(parsed) as fetched:
                if fetched.commit:
                    logger.debug(f"Using commit {fetched.commit} (cached: {fetched.from_cache})")
                installed = install_from(state, fetched.root, skill or [], targets, list_only, yes)
        else:
            installed = install_from(state, expand_path(parsed.path), skill or [], targets, list_only, yes)

    if installed == 0:
        raise typer.Exit(1)
