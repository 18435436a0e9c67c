"""
Path utilities for Skilo.

Provides consistent path resolution for configuration and the git cache.
"""

import os
from pathlib import Path

PROJECT_CONFIG_NAMES = (".skilo.yaml", "skilo.yaml", ".skilo/config.yaml")


def get_skilo_home() -> Path:
    """
    Get the Skilo home directory.

    Resolution order:
    1. SKILO_HOME environment variable
    2. Default: ~/.skilo

    Returns:
        Path to the Skilo home directory.
    """
    env_home = os.environ.get("SKILO_HOME")
    if env_home:
        return Path(env_home).expanduser().resolve()
    return Path.home() / ".skilo"


def get_global_config_path() -> Path:
    """
    Get the path to the global configuration file.

    Returns:
        Path to ~/.skilo/config.yaml
    """
    return get_skilo_home() / "config.yaml"


def get_git_cache_dir() -> Path:
    """
    Get the root of the git cache.

    Returns:
        Path to ~/.skilo/git/
    """
    return get_skilo_home() / "git"


def get_git_db_dir() -> Path:
    """Bare mirrors live here, one per owner/repo."""
    return get_git_cache_dir() / "db"


def get_git_checkouts_dir() -> Path:
    """Commit-addressed working trees live here."""
    return get_git_cache_dir() / "checkouts"


def find_project_config(start_path: Path | None = None) -> Path | None:
    """
    Find the project configuration file in a directory.

    Checks, in order, .skilo.yaml, skilo.yaml and .skilo/config.yaml in the
    given directory (or the current directory).

    Args:
        start_path: Directory to look in. Defaults to cwd.

    Returns:
        Path to the first config file found, None otherwise.
    """
    base = Path.cwd() if start_path is None else Path(start_path).resolve()

    for name in PROJECT_CONFIG_NAMES:
        candidate = base / name
        if candidate.is_file():
            return candidate

    return None


def expand_path(path: str | Path) -> Path:
    """
    Expand a path string, handling ~ and environment variables.

    Args:
        path: Path string or Path object.

    Returns:
        Expanded and resolved Path.
    """
    expanded = os.path.expanduser(os.path.expandvars(str(path)))
    return Path(expanded).resolve()


def ensure_directory(path: Path, mode: int = 0o755) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path.
        mode: Permission mode for new directories.

    Returns:
        The directory path.
    """
    path.mkdir(parents=True, exist_ok=True, mode=mode)
    return path
