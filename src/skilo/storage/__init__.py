"""
Skilo storage module.

Path resolution for the Skilo home directory, config files and git cache.
"""

from skilo.storage.paths import (
    PROJECT_CONFIG_NAMES,
    ensure_directory,
    expand_path,
    find_project_config,
    get_git_cache_dir,
    get_git_checkouts_dir,
    get_git_db_dir,
    get_global_config_path,
    get_skilo_home,
)

__all__ = [
    "PROJECT_CONFIG_NAMES",
    "ensure_directory",
    "expand_path",
    "find_project_config",
    "get_git_cache_dir",
    "get_git_checkouts_dir",
    "get_git_db_dir",
    "get_global_config_path",
    "get_skilo_home",
]
