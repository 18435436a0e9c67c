"""
skilo cache - Inspect and clean the git cache.

Usage:
    skilo cache path
    skilo cache clean --max-age 7
    skilo cache clean --all
"""

from typing import Annotated

import typer

from skilo.cli.state import get_state
from skilo.git import CacheConfig, CacheStore
from skilo.storage import get_git_cache_dir

app = typer.Typer(
    name="cache",
    help="Git cache management.",
)


def _human_size(size: int) -> str:
    value = float(size)
    for unit in ("B", "KB", "MB"):
        if value < 1024:
            return f"{value:.0f} {unit}" if unit == "B" else f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} GB"


@app.command("path")
def show_path(ctx: typer.Context) -> None:
    """Print the cache directory and its size."""
    formatter = get_state(ctx).formatter
    typer.echo(str(get_git_cache_dir()))
    formatter.message(f"Size: {_human_size(CacheStore(CacheConfig.from_env()).size())}")


@app.command()
def clean(
    ctx: typer.Context,
    all_entries: Annotated[
        bool,
        typer.Option(
            "--all",
            help="Remove every mirror and checkout.",
        ),
    ] = False,
    max_age: Annotated[
        int,
        typer.Option(
            "--max-age",
            min=0,
            help="Remove checkouts not used for this many days.",
        ),
    ] = 30,
) -> None:
    """Remove old checkouts (or everything with --all)."""
    formatter = get_state(ctx).formatter
    removed = CacheStore(CacheConfig.from_env()).clean(all=all_entries, max_age_days=max_age)
    formatter.success(f"Removed {removed} cache entr{'y' if removed == 1 else 'ies'}")
