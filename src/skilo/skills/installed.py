"""
Installed skills in an agent skills directory, at project or global scope.
"""

import logging
import shutil
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from skilo.errors import ConfigurationError
from skilo.skills.agents import SKILL_FILE, Agent
from skilo.skills.parser import ManifestError, parse_manifest

logger = logging.getLogger(__name__)

# Project skills directory used when no agent is configured.
DEFAULT_SKILLS_DIR = "skills"


class Scope(str, Enum):
    """Where a skill is installed."""

    PROJECT = "project"
    GLOBAL = "global"

    def __str__(self) -> str:
        return self.value


@dataclass
class InstalledSkill:
    name: str
    description: str
    path: Path


def resolve_skills_dir(agent: Agent | None, scope: Scope, project_root: Path) -> Path:
    """
    Skills directory for an agent at a scope.

    Without an agent, project skills live in ``<project_root>/skills``.

    Raises:
        ConfigurationError: If global scope is requested without an agent.
    """
    if agent is None:
        if scope is Scope.GLOBAL:
            raise ConfigurationError("Global scope requires an agent (use --agent)")
        return project_root / DEFAULT_SKILLS_DIR
    if scope is Scope.GLOBAL:
        return agent.resolve_global_skills_dir()
    return agent.resolve_project_skills_dir(project_root)


def list_skills(skills_dir: Path) -> list[InstalledSkill]:
    """Skills installed in ``skills_dir``, sorted by name.

    Directories whose SKILL.md cannot be parsed are skipped.
    """
    if not skills_dir.is_dir():
        return []

    skills = []
    for entry in skills_dir.iterdir():
        manifest_path = entry / SKILL_FILE
        if not entry.is_dir() or not manifest_path.is_file():
            continue
        try:
            manifest = parse_manifest(manifest_path)
        except ManifestError as e:
            logger.debug(f"Skipping unreadable skill {entry}: {e}")
            continue
        skills.append(InstalledSkill(name=manifest.name, description=manifest.description, path=entry))

    skills.sort(key=lambda skill: skill.name)
    return skills


def skill_exists(name: str, skills_dir: Path) -> bool:
    return (skills_dir / name / SKILL_FILE).is_file()


def remove_skill(name: str, skills_dir: Path) -> Path | None:
    """Delete an installed skill directory.

    Returns:
        The removed path, or None if the skill was not installed.
    """
    if not skill_exists(name, skills_dir):
        return None
    skill_dir = skills_dir / name
    shutil.rmtree(skill_dir)
    logger.info(f"Removed {skill_dir}")
    return skill_dir
