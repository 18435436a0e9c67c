"""CLI command modules."""

from skilo.cli.commands import (
    add,
    agents,
    cache,
    check,
    config,
    fmt,
    lint,
    new,
    prompt,
    skills,
)

__all__ = ["add", "agents", "cache", "check", "config", "fmt", "lint", "new", "prompt", "skills"]
