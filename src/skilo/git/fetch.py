"""
Git fetcher with a persistent mirror cache.

GitHub repositories are cloned once as bare mirrors and updated with fetch;
each resolved commit is materialized into its own checkout directory which
is reused on later runs. Other hosts are cloned into a temporary directory
that is removed when the FetchResult is closed.
"""

import logging
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from types import TracebackType
from typing import Callable, TypeVar

from git import GitCommandError, InvalidGitRepositoryError, NoSuchPathError, Repo
from git.exc import CommandError

from skilo.errors import (
    AuthenticationFailedError,
    GitError,
    InvalidSourceError,
    NetworkError,
    RepoNotFoundError,
    SkiloError,
)
from skilo.git.cache import CacheConfig, CacheStore, parse_owner_repo
from skilo.git.source import GitSource, https_to_ssh_url

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Fail instead of blocking on a credential prompt.
GIT_ENV = {"GIT_TERMINAL_PROMPT": "0"}

SHORT_COMMIT_LENGTH = 7
BRANCH_REFSPEC = "+refs/heads/*:refs/heads/*"
TAG_REFSPEC = "+refs/tags/*:refs/tags/*"
DEFAULT_HEAD_CANDIDATES = ("HEAD", "refs/heads/main", "refs/heads/master")

AUTH_MARKERS = (
    "authentication failed",
    "authentication required",
    "could not read username",
    "could not read password",
    "failed to acquire username/password",
    "terminal prompts disabled",
    "permission denied (publickey)",
    "invalid username or password",
)
NETWORK_MARKERS = (
    "could not resolve host",
    "could not resolve hostname",
    "failed to connect",
    "connection refused",
    "connection timed out",
    "connection reset",
    "network is unreachable",
    "operation timed out",
)
NOT_FOUND_MARKERS = (
    "repository not found",
    "not found",
    "does not appear to be a git repository",
    "does not exist",
)


# =============================================================================
# Result
# =============================================================================


@dataclass
class FetchResult:
    """Outcome of a successful fetch.

    Exactly one of ``checkout_dir`` and ``temp_dir`` is set. Checkouts are
    part of the cache and persist; a temporary directory is deleted by
    ``close()`` or on leaving the ``with`` block.
    """

    root: Path
    from_cache: bool
    commit: str | None = None
    checkout_dir: Path | None = None
    temp_dir: tempfile.TemporaryDirectory | None = None

    @property
    def temp_path(self) -> Path | None:
        return Path(self.temp_dir.name) if self.temp_dir is not None else None

    def close(self) -> None:
        if self.temp_dir is not None:
            self.temp_dir.cleanup()
            self.temp_dir = None

    def __enter__(self) -> "FetchResult":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


# =============================================================================
# Error classification
# =============================================================================


def _stderr_text(error: CommandError) -> str:
    text = (error.stderr or "").strip()
    if text.startswith("stderr:"):
        text = text[len("stderr:") :].strip().strip("'").strip()
    return text or str(error)


def classify_git_error(error: CommandError, url: str) -> SkiloError:
    """
    Map a failed git command onto the Skilo error taxonomy.

    Markers are checked in order: authentication, then network, then
    not-found. Git messages often contain several of them at once
    (e.g. "Repository not found ... Authentication failed"), so the order
    decides the outcome.

    Args:
        error: The GitPython command error.
        url: Remote URL the command was talking to.

    Returns:
        The classified exception (not raised).
    """
    message = _stderr_text(error)
    lowered = message.lower()

    if any(marker in lowered for marker in AUTH_MARKERS):
        return AuthenticationFailedError(message)
    if any(marker in lowered for marker in NETWORK_MARKERS):
        return NetworkError(message)
    if any(marker in lowered for marker in NOT_FOUND_MARKERS):
        return RepoNotFoundError(url)
    return GitError(message)


def _with_ssh_retry(
    url: str,
    operation: Callable[[str], T],
    cleanup: Callable[[], None],
    first: str | None = None,
) -> T:
    """Run ``operation(first or url)``; on an auth failure retry once over SSH.

    ``cleanup`` runs before the retry and before a failure propagates, so a
    half-written directory never survives.
    """
    try:
        return operation(first or url)
    except CommandError as e:
        error = classify_git_error(e, url)
        ssh_url = https_to_ssh_url(url)
        if not isinstance(error, AuthenticationFailedError) or ssh_url is None:
            cleanup()
            raise error from e

        logger.warning(f"HTTPS auth failed, retrying {url} with SSH")
        cleanup()

    try:
        return operation(ssh_url)
    except CommandError as e:
        cleanup()
        raise classify_git_error(e, ssh_url) from e


# =============================================================================
# Fetcher
# =============================================================================


class GitFetcher:
    """Fetches git sources through the mirror cache."""

    def __init__(self, cache_config: CacheConfig):
        self.cache = CacheStore(cache_config)

    @property
    def offline(self) -> bool:
        return self.cache.offline

    def fetch(self, source: GitSource) -> FetchResult:
        """Fetch a source and return the directory holding its files.

        Raises:
            NetworkError: Offline without a usable cache, or a connection failure.
            AuthenticationFailedError: Credentials rejected over HTTPS and SSH.
            RepoNotFoundError: The remote does not exist.
            InvalidSourceError: The requested subdirectory is missing.
            GitError: Any other git failure, including unknown references.
        """
        key = parse_owner_repo(source.url)
        if key is None:
            logger.debug(f"No cache key for {source.url}, using a temporary clone")
            return self._fetch_to_temp(source)

        owner, repo = key
        return self._fetch_cached(source, owner, repo)

    # -------------------------------------------------------------------------
    # Cached path
    # -------------------------------------------------------------------------

    def _fetch_cached(self, source: GitSource, owner: str, repo: str) -> FetchResult:
        mirror = self._ensure_mirror(source.url, owner, repo)
        try:
            commit = self._resolve_commit(mirror, source.reference)
        finally:
            mirror.close()

        checkout_dir = self.cache.checkout_path(owner, repo, commit)

        if checkout_dir.is_dir():
            logger.debug(f"Reusing checkout {checkout_dir.name}")
        else:
            self._materialize(self.cache.db_path(owner, repo), checkout_dir, commit)

        root = self._resolve_root(checkout_dir, source)
        return FetchResult(
            root=root, from_cache=True, commit=commit[:SHORT_COMMIT_LENGTH], checkout_dir=checkout_dir
        )

    def _ensure_mirror(self, url: str, owner: str, repo: str) -> Repo:
        path = self.cache.db_path(owner, repo)

        if path.exists():
            try:
                mirror = Repo(path)
            except (InvalidGitRepositoryError, NoSuchPathError) as e:
                if self.offline:
                    raise GitError(f"Cached mirror at {path} is corrupt and offline mode is enabled") from e
                logger.warning(f"Cached mirror at {path} is corrupt, re-cloning")
                shutil.rmtree(path, ignore_errors=True)
            else:
                if self.offline:
                    logger.debug(f"Offline mode: using cached mirror {path.name}")
                else:
                    self._update_mirror(mirror, url)
                return mirror

        if self.offline:
            raise NetworkError("Repository not in cache and offline mode is enabled")

        self.cache.ensure_dirs()
        logger.info(f"Cloning {url} into cache")

        def clone(remote: str) -> Repo:
            return Repo.clone_from(remote, str(path), bare=True, env=GIT_ENV)

        return _with_ssh_retry(url, clone, lambda: shutil.rmtree(path, ignore_errors=True))

    def _update_mirror(self, mirror: Repo, url: str) -> None:
        remote_names = [remote.name for remote in mirror.remotes]
        target = "origin" if "origin" in remote_names else url
        logger.debug(f"Fetching updates for {url}")

        def fetch(remote: str) -> None:
            mirror.git.fetch(remote, BRANCH_REFSPEC, TAG_REFSPEC, env=GIT_ENV)

        try:
            _with_ssh_retry(url, fetch, lambda: None, first=target)
        except SkiloError:
            mirror.close()
            raise

    def _resolve_commit(self, mirror: Repo, reference: str | None) -> str:
        """Resolve a branch, tag, ref name or commit id to a full commit hash."""
        if reference is None:
            for candidate in DEFAULT_HEAD_CANDIDATES:
                commit = _rev_parse(mirror, candidate)
                if commit:
                    return commit
            raise GitError("Failed to find HEAD")

        candidates = (f"refs/heads/{reference}", f"refs/tags/{reference}", reference)
        for candidate in candidates:
            commit = _rev_parse(mirror, candidate)
            if commit:
                logger.debug(f"Resolved {reference} via {candidate} to {commit[:SHORT_COMMIT_LENGTH]}")
                return commit

        raise GitError(f"Reference '{reference}' not found")

    def _materialize(self, mirror_path: Path, checkout_dir: Path, commit: str) -> None:
        logger.debug(f"Checking out {commit[:SHORT_COMMIT_LENGTH]} into {checkout_dir.name}")
        self.cache.ensure_dirs()
        try:
            checkout = Repo.clone_from(str(mirror_path), str(checkout_dir), no_checkout=True, env=GIT_ENV)
            try:
                checkout.git.checkout("--detach", commit)
            finally:
                checkout.close()
        except CommandError as e:
            shutil.rmtree(checkout_dir, ignore_errors=True)
            raise GitError(f"Failed to check out {commit[:SHORT_COMMIT_LENGTH]}: {_stderr_text(e)}") from e

    # -------------------------------------------------------------------------
    # Temporary path
    # -------------------------------------------------------------------------

    def _fetch_to_temp(self, source: GitSource) -> FetchResult:
        if self.offline:
            raise NetworkError("Cannot fetch non-cached repository in offline mode")

        temp_dir = tempfile.TemporaryDirectory(prefix="skilo-")
        target = Path(temp_dir.name) / "repo"

        reference = source.reference
        # A shallow clone cannot reach arbitrary history.
        options = {"depth": 1} if reference is None else {"branch": reference}

        def clone(remote: str) -> Repo:
            return Repo.clone_from(remote, str(target), env=GIT_ENV, **options)

        logger.info(f"Cloning {source.url} into a temporary directory")
        try:
            repo = _with_ssh_retry(source.url, clone, lambda: shutil.rmtree(target, ignore_errors=True))
        except SkiloError:
            temp_dir.cleanup()
            raise

        try:
            commit = repo.head.commit.hexsha[:SHORT_COMMIT_LENGTH]
        except ValueError:
            commit = None
        finally:
            repo.close()

        try:
            root = self._resolve_root(target, source)
        except InvalidSourceError:
            temp_dir.cleanup()
            raise

        return FetchResult(root=root, from_cache=False, commit=commit, temp_dir=temp_dir)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _resolve_root(base: Path, source: GitSource) -> Path:
        if not source.subdir:
            return base
        root = base / source.subdir
        if not root.exists():
            raise InvalidSourceError(source.url, f"Subdirectory '{source.subdir}' not found in repository")
        return root


def _rev_parse(repo: Repo, rev: str) -> str | None:
    try:
        return repo.git.rev_parse("--verify", "--quiet", f"{rev}^{{commit}}").strip() or None
    except GitCommandError:
        return None


def fetch(source: GitSource, cache_config: CacheConfig | None = None) -> FetchResult:
    """Fetch a git source using the cache configured by the environment."""
    return GitFetcher(cache_config or CacheConfig.from_env()).fetch(source)
