"""
Skill discovery for Skilo.

Finds SKILL.md files under a path, pruning ignored directories with
.gitignore-style patterns.
"""

import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

import pathspec

from skilo.skills.models import Manifest
from skilo.skills.parser import ManifestError, parse_manifest

logger = logging.getLogger(__name__)

SKILL_FILE = "SKILL.md"


@dataclass
class SkillLoadResult:
    """A discovered manifest, parsed or failed."""

    path: Path
    manifest: Manifest | None = None
    error: ManifestError | None = None

    @property
    def ok(self) -> bool:
        return self.manifest is not None


def compile_ignore(patterns: Iterable[str]) -> pathspec.GitIgnoreSpec | None:
    """Compile ignore globs, skipping (and logging) invalid ones."""
    valid: list[str] = []
    for pattern in patterns:
        if not pattern or not pattern.strip():
            continue
        try:
            pathspec.GitIgnoreSpec.from_lines([pattern])
        except ValueError as e:
            logger.warning(f"Ignoring invalid discovery pattern '{pattern}': {e}")
            continue
        valid.append(pattern)

    if not valid:
        return None
    return pathspec.GitIgnoreSpec.from_lines(valid)


def is_ignored(spec: pathspec.PathSpec | None, directory: Path, root: Path) -> bool:
    """Check a directory against the compiled ignore patterns.

    Both the path relative to ``root`` and the bare directory name are
    tested, so ``target`` prunes every directory named target while
    ``target/debug`` prunes only that path.
    """
    if spec is None:
        return False

    relative = directory.relative_to(root).as_posix()
    return (
        spec.match_file(relative)
        or spec.match_file(relative + "/")
        or spec.match_file(directory.name)
        or spec.match_file(directory.name + "/")
    )


def find_skills(root: Path, ignore_patterns: Iterable[str] = ()) -> list[Path]:
    """
    Find SKILL.md files.

    - ``root`` is a SKILL.md file: return it.
    - ``root`` directly contains SKILL.md: return only that one.
    - Otherwise walk ``root`` recursively (following symlinks), pruning
      ignored directories.

    Args:
        root: File or directory to search.
        ignore_patterns: .gitignore-style globs for directories to skip.

    Returns:
        Paths in filesystem walk order. Sort at the call site if needed.
    """
    if root.is_file():
        return [root] if root.name == SKILL_FILE else []

    direct = root / SKILL_FILE
    if direct.is_file():
        return [direct]

    if not root.is_dir():
        return []

    spec = compile_ignore(ignore_patterns)
    found: list[Path] = []
    visited: set[str] = set()

    for dirpath, dirnames, filenames in os.walk(root, followlinks=True):
        current = Path(dirpath)
        real = os.path.realpath(dirpath)
        if real in visited:
            # symlink cycle
            dirnames[:] = []
            continue
        visited.add(real)

        if SKILL_FILE in filenames:
            found.append(current / SKILL_FILE)

        dirnames[:] = [name for name in dirnames if not is_ignored(spec, current / name, root)]

    return found


def load_skills(paths: Iterable[Path]) -> list[SkillLoadResult]:
    """Parse each manifest; a failure is recorded and the batch continues."""
    results: list[SkillLoadResult] = []
    for path in paths:
        try:
            results.append(SkillLoadResult(path=path, manifest=parse_manifest(path)))
        except ManifestError as e:
            logger.debug(f"Failed to parse {path}: {e}")
            results.append(SkillLoadResult(path=path, error=e))
    return results


def discover(root: Path, ignore_patterns: Iterable[str] = ()) -> list[SkillLoadResult]:
    """Find and parse every skill under ``root``, sorted by path."""
    return load_skills(sorted(find_skills(root, ignore_patterns)))
