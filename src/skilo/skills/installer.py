"""
Installing skills from a fetched or local source.
"""

import logging
import shutil
from collections.abc import Iterable
from pathlib import Path

from skilo.errors import NoSkillsFoundError, SkillExistsError, SkiloIOError
from skilo.skills.agents import agent_skill_dirs
from skilo.skills.discovery import SkillLoadResult, discover
from skilo.skills.models import Manifest

logger = logging.getLogger(__name__)

# Never copied into an installed skill.
COPY_IGNORE = shutil.ignore_patterns(".git", "__pycache__", "*.pyc", ".DS_Store")


def collect_skills(root: Path, ignore_patterns: Iterable[str] = ()) -> list[SkillLoadResult]:
    """Discover skills in a source tree.

    Falls back to the conventional ``skills/`` directory and to agent skills
    directories (``.claude/skills`` and friends) when a plain walk finds
    nothing.

    Raises:
        NoSkillsFoundError: If no SKILL.md exists anywhere.
    """
    patterns = list(ignore_patterns)
    results = discover(root, patterns)
    if results:
        return results

    for candidate in [root / "skills", *agent_skill_dirs(root)]:
        if candidate.is_dir():
            results = discover(candidate, patterns)
            if results:
                logger.debug(f"Found skills under {candidate}")
                return results

    raise NoSkillsFoundError(root)


def select_skills(results: list[SkillLoadResult], names: Iterable[str]) -> list[SkillLoadResult]:
    """Keep only the requested skills (all when ``names`` is empty).

    Raises:
        NoSkillsFoundError: If a requested name is not among the results.
    """
    wanted = list(names)
    if not wanted:
        return results

    by_name = {result.manifest.name: result for result in results if result.manifest is not None}
    missing = [name for name in wanted if name not in by_name]
    if missing:
        raise NoSkillsFoundError(f"source (requested: {', '.join(missing)})")
    return [by_name[name] for name in wanted]


def install_skill(manifest: Manifest, target_dir: Path, overwrite: bool = False) -> Path:
    """Copy a skill directory into ``target_dir/<name>``.

    Raises:
        SkillExistsError: Destination exists and ``overwrite`` is False.
        SkiloIOError: The copy failed.
    """
    destination = target_dir / manifest.name
    if destination.exists() and not overwrite:
        raise SkillExistsError(manifest.name, destination)

    try:
        if destination.exists():
            shutil.rmtree(destination)
        target_dir.mkdir(parents=True, exist_ok=True)
        shutil.copytree(manifest.skill_dir, destination, ignore=COPY_IGNORE)
    except OSError as e:
        shutil.rmtree(destination, ignore_errors=True)
        raise SkiloIOError(f"Failed to install {manifest.name}: {e}", destination) from e

    logger.info(f"Installed {manifest.name} to {destination}")
    return destination
