"""
Skilo git layer.

Source parsing, the mirror/checkout cache, and the fetcher.

Usage:
    from skilo.git import CacheConfig, GitFetcher, parse_source

    source = parse_source("owner/repo", branch="main")
    with GitFetcher(CacheConfig.from_env()).fetch(source) as result:
        print(result.root)
"""

from skilo.git.cache import (
    CacheConfig,
    CacheStore,
    checkout_name,
    db_name,
    is_offline,
    parse_owner_repo,
)
from skilo.git.fetch import FetchResult, GitFetcher, classify_git_error, fetch
from skilo.git.source import (
    GitSource,
    LocalSource,
    Source,
    https_to_ssh_url,
    is_github_shorthand,
    parse_source,
)

__all__ = [
    # Source
    "GitSource",
    "LocalSource",
    "Source",
    "https_to_ssh_url",
    "is_github_shorthand",
    "parse_source",
    # Cache
    "CacheConfig",
    "CacheStore",
    "checkout_name",
    "db_name",
    "is_offline",
    "parse_owner_repo",
    # Fetch
    "FetchResult",
    "GitFetcher",
    "classify_git_error",
    "fetch",
]
