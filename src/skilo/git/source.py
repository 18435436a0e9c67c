"""
Skill source resolution.

Turns the SOURCE argument of ``skilo add`` into either a git remote or a
local directory.

Accepted forms:
    ./path, ../path, /abs/path, ~/path        local directory
    git@github.com:owner/repo[.git]           SSH remote
    https://github.com/owner/repo             HTTPS remote
    https://github.com/owner/repo/tree/main/skills/x
                                              HTTPS remote, branch and subdir
    owner/repo                                GitHub shorthand
"""

import re
from pathlib import Path
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict

from skilo.errors import InvalidSourceError

LOCAL_PREFIXES = ("/", "./", "../", "~")

_SHORTHAND_SEGMENT = re.compile(r"^[A-Za-z0-9._-]+$")
_GITHUB_HTTPS = re.compile(r"^https://github\.com/([^/]+)/([^/]+?)(?:\.git)?/?$")

EXPECTED_FORMS = (
    "Expected: owner/repo, https://github.com/owner/repo, "
    "git@github.com:owner/repo.git, or local path"
)


class GitSource(BaseModel):
    """A remote git repository, optionally pinned to a branch or tag."""

    model_config = ConfigDict(frozen=True)

    url: str
    branch: str | None = None
    tag: str | None = None
    subdir: str | None = None

    @property
    def reference(self) -> str | None:
        """Reference to resolve. A branch wins over a tag."""
        return self.branch or self.tag

    @property
    def display_name(self) -> str:
        """Human-readable ``owner/repo`` form of the URL."""
        url = self.url.removesuffix(".git")
        if "://" in url:
            path = url.split("://", 1)[1]
            if "/" in path:
                return path.split("/", 1)[1]
        if url.startswith("git@") and ":" in url:
            return url.split(":", 1)[1]
        return url


class LocalSource(BaseModel):
    """A skill directory (or tree of skills) on the local filesystem."""

    model_config = ConfigDict(frozen=True)

    path: Path

    @property
    def display_name(self) -> str:
        return str(self.path)


Source = GitSource | LocalSource


def parse_source(raw: str, branch: str | None = None, tag: str | None = None) -> Source:
    """Parse a source string.

    Explicit ``branch``/``tag`` arguments replace anything parsed from the
    URL itself.

    Raises:
        InvalidSourceError: If the input matches none of the accepted forms.
    """
    source = _parse(raw.strip())

    if isinstance(source, GitSource) and (branch or tag):
        updates = {}
        if branch:
            updates["branch"] = branch
        if tag:
            updates["tag"] = tag
        source = source.model_copy(update=updates)

    return source


def _parse(raw: str) -> Source:
    if raw.startswith(LOCAL_PREFIXES):
        return LocalSource(path=Path(raw))

    if raw.startswith("git@"):
        return _parse_ssh(raw)

    if raw.startswith(("http://", "https://")):
        return _parse_http(raw)

    if is_github_shorthand(raw):
        return GitSource(url=f"https://github.com/{raw}.git")

    raise InvalidSourceError(raw, EXPECTED_FORMS)


def is_github_shorthand(value: str) -> bool:
    """Exactly ``owner/repo`` with both segments non-empty and URL-safe."""
    parts = value.split("/")
    return len(parts) == 2 and all(_SHORTHAND_SEGMENT.match(part) for part in parts)


def _parse_ssh(raw: str) -> GitSource:
    rest = raw[len("git@") :]
    host, sep, path = rest.partition(":")
    if not sep or not host or not path:
        raise InvalidSourceError(raw, "SSH URL must be in format git@host:owner/repo.git")

    path = path.removesuffix(".git")
    return GitSource(url=f"git@{host}:{path}.git")


def _parse_http(raw: str) -> GitSource:
    try:
        parsed = urlparse(raw)
        host = parsed.hostname
    except ValueError as e:
        raise InvalidSourceError(raw, "Invalid URL format") from e

    if not host:
        raise InvalidSourceError(raw, "URL must have a host")

    path = parsed.path.lstrip("/").removesuffix("/").removesuffix(".git")
    if not path:
        raise InvalidSourceError(raw, "URL must include a repository path")

    if "/tree/" in path:
        repo_path, _, rest = path.partition("/tree/")
        ref, _, subdir = rest.partition("/")
        return GitSource(
            url=f"https://{host}/{repo_path}.git",
            branch=ref or None,
            subdir=subdir or None,
        )

    return GitSource(url=f"https://{host}/{path}.git")


def https_to_ssh_url(url: str) -> str | None:
    """Rewrite a GitHub HTTPS URL to its SSH form.

    Only ``https://github.com/owner/repo[.git]`` is rewritten; anything else
    returns None.
    """
    match = _GITHUB_HTTPS.match(url)
    if not match:
        return None
    owner, repo = match.groups()
    return f"git@github.com:{owner}/{repo}.git"
