"""
Pytest configuration and fixtures for skilo tests.
"""

import os
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from git import Actor, Repo
from typer.testing import CliRunner

SKILL_MD = """---
name: {name}
description: {description}
---

# {title}

Instructions for the agent.
"""


def write_skill(
    parent: Path,
    name: str,
    description: str = "A test skill for unit tests.",
    content: str | None = None,
    dir_name: str | None = None,
) -> Path:
    """Create ``parent/<dir_name or name>/SKILL.md`` and return the skill directory."""
    skill_dir = parent / (dir_name or name)
    skill_dir.mkdir(parents=True, exist_ok=True)
    if content is None:
        title = " ".join(part.capitalize() for part in name.split("-"))
        content = SKILL_MD.format(name=name, description=description, title=title)
    (skill_dir / "SKILL.md").write_text(content, encoding="utf-8")
    return skill_dir


@pytest.fixture(autouse=True)
def isolated_env(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME and SKILO_HOME at a fresh directory and drop SKILO_* overrides."""
    home = tmp_path_factory.mktemp("home")
    for key in list(os.environ):
        if key.startswith("SKILO_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("SKILO_HOME", str(home / ".skilo"))
    return home


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def temp_dir(tmp_path: Path) -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    yield tmp_path.resolve()


@pytest.fixture
def make_skill(temp_dir: Path) -> Callable[..., Path]:
    """Factory creating skills under the temporary directory (or a given parent)."""

    def factory(name: str, parent: Path | None = None, **kwargs) -> Path:
        return write_skill(parent or temp_dir, name, **kwargs)

    return factory


@pytest.fixture
def sample_skill_md() -> str:
    """Provide sample SKILL.md content."""
    return """---
name: test-skill
description: A test skill for unit tests
license: MIT
---

# Test Skill

This is a test skill for unit testing.

## Instructions

1. Do something
2. Do something else
"""


# =============================================================================
# Git Fixtures
# =============================================================================

GIT_AUTHOR = Actor("Skilo Tests", "tests@example.com")

UPSTREAM_SKILL_MD = """---
name: {name}
description: Skill served from the upstream repository.
---

# {name}
"""


def _commit(repo: Repo, relative: str, content: str, message: str) -> str:
    path = Path(repo.working_tree_dir) / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    repo.index.add([relative])
    return repo.index.commit(message, author=GIT_AUTHOR, committer=GIT_AUTHOR).hexsha


@pytest.fixture
def upstream(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Repo, None, None]:
    """A local repository standing in for github.com/acme/skills-repo.

    git's ``url.<base>.insteadOf`` setting, passed through the environment,
    redirects https://github.com/ to a local directory.
    """
    base = tmp_path / "remote"
    repo = Repo.init(base / "acme" / "skills-repo.git", initial_branch="main")
    _commit(repo, "skills/pdf-tools/SKILL.md", UPSTREAM_SKILL_MD.format(name="pdf-tools"), "Add pdf-tools")

    monkeypatch.setenv("GIT_CONFIG_COUNT", "2")
    monkeypatch.setenv("GIT_CONFIG_KEY_0", f"url.file://{base.as_posix()}/.insteadOf")
    monkeypatch.setenv("GIT_CONFIG_VALUE_0", "https://github.com/")
    monkeypatch.setenv("GIT_CONFIG_KEY_1", "protocol.file.allow")
    monkeypatch.setenv("GIT_CONFIG_VALUE_1", "always")

    yield repo
    repo.close()


@pytest.fixture
def upstream_commit(upstream: Repo) -> Callable[[str, str, str], str]:
    """Commit a file to the upstream repository and return the commit id."""

    def commit(relative: str, content: str, message: str) -> str:
        return _commit(upstream, relative, content, message)

    return commit
