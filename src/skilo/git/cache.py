"""
On-disk git cache.

Layout under ``~/.skilo/git`` (or ``$SKILO_HOME/git``)::

    db/<owner>-<repo>/                     bare mirror
    checkouts/<owner>-<repo>-<commit>/     working tree at a full commit id

Keys are case-sensitive and not normalized. Checkouts are immutable once
created; a newer commit gets a new checkout directory.
"""

import logging
import os
import re
import shutil
import time
from dataclasses import dataclass
from pathlib import Path

from skilo.storage.paths import ensure_directory, get_git_checkouts_dir, get_git_db_dir

logger = logging.getLogger(__name__)

OFFLINE_ENV = "SKILO_OFFLINE"

_GITHUB_HTTPS = re.compile(r"^https://github\.com/([^/]+)/([^/]+?)(?:\.git)?/?$")
_GITHUB_SSH = re.compile(r"^git@github\.com:([^/]+)/([^/]+?)(?:\.git)?$")


@dataclass(frozen=True)
class CacheConfig:
    """Where the cache lives and whether the network may be used."""

    db_dir: Path
    checkouts_dir: Path
    offline: bool = False

    @classmethod
    def from_env(cls) -> "CacheConfig":
        """Resolve cache locations and offline mode from the environment."""
        return cls(
            db_dir=get_git_db_dir(),
            checkouts_dir=get_git_checkouts_dir(),
            offline=is_offline(),
        )


def is_offline() -> bool:
    """True when SKILO_OFFLINE is set to a truthy value."""
    return os.environ.get(OFFLINE_ENV, "").strip().lower() in ("1", "true", "yes", "on")


def parse_owner_repo(url: str) -> tuple[str, str] | None:
    """Extract ``(owner, repo)`` from a GitHub HTTPS or SSH URL.

    Other hosts, and URLs with extra path segments, return None and are
    fetched without caching.
    """
    for pattern in (_GITHUB_HTTPS, _GITHUB_SSH):
        match = pattern.match(url)
        if match:
            owner, repo = match.groups()
            return owner, repo
    return None


def db_name(owner: str, repo: str) -> str:
    return f"{owner}-{repo}"


def checkout_name(owner: str, repo: str, commit: str) -> str:
    return f"{owner}-{repo}-{commit}"


def _dir_size(path: Path) -> int:
    total = 0
    for dirpath, _dirnames, filenames in os.walk(path):
        for filename in filenames:
            try:
                total += os.lstat(os.path.join(dirpath, filename)).st_size
            except OSError:
                continue
    return total


class CacheStore:
    """Paths and housekeeping for the git cache."""

    def __init__(self, config: CacheConfig):
        self.config = config

    @property
    def offline(self) -> bool:
        return self.config.offline

    def db_path(self, owner: str, repo: str) -> Path:
        return self.config.db_dir / db_name(owner, repo)

    def checkout_path(self, owner: str, repo: str, commit: str) -> Path:
        return self.config.checkouts_dir / checkout_name(owner, repo, commit)

    def has_mirror(self, owner: str, repo: str) -> bool:
        return self.db_path(owner, repo).is_dir()

    def has_checkout(self, owner: str, repo: str, commit: str) -> bool:
        return self.checkout_path(owner, repo, commit).is_dir()

    def ensure_dirs(self) -> None:
        ensure_directory(self.config.db_dir)
        ensure_directory(self.config.checkouts_dir)

    def size(self) -> int:
        """Total size of the cache in bytes."""
        return sum(
            _dir_size(path)
            for path in (self.config.db_dir, self.config.checkouts_dir)
            if path.exists()
        )

    def clean(self, all: bool = False, max_age_days: int = 30) -> int:
        """Remove stale cache entries.

        Args:
            all: Remove every mirror and checkout.
            max_age_days: Without ``all``, remove checkouts not modified
                within this many days.

        Returns:
            Number of directories removed.
        """
        removed = 0

        if all:
            for root in (self.config.db_dir, self.config.checkouts_dir):
                if not root.exists():
                    continue
                for entry in root.iterdir():
                    if entry.is_dir():
                        shutil.rmtree(entry)
                        removed += 1
            logger.info(f"Removed {removed} cache entries")
            return removed

        if not self.config.checkouts_dir.exists():
            return 0

        cutoff = time.time() - max_age_days * 86400
        for entry in self.config.checkouts_dir.iterdir():
            if entry.is_dir() and entry.stat().st_mtime < cutoff:
                logger.debug(f"Removing stale checkout {entry.name}")
                shutil.rmtree(entry)
                removed += 1

        return removed
