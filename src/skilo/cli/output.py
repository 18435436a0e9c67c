"""
Output formatting utilities for the CLI.

Provides consistent tables and text shaping across commands. Status
messages go through the active OutputFormatter so that they respect
--quiet and the selected --format.
"""

from typing import Any

from rich.markup import escape
from rich.table import Table

from skilo.output import console

DESCRIPTION_WIDTH = 50


def truncate_description(description: str, max_len: int = DESCRIPTION_WIDTH) -> str:
    """First sentence of a description, cut to ``max_len`` characters."""
    if not description:
        return "(no description)"

    first_sentence = description.split(". ", 1)[0]
    if len(first_sentence) <= max_len:
        return first_sentence
    return first_sentence[: max(max_len - 3, 0)] + "..."


def print_table(
    headers: list[str],
    rows: list[list[Any]],
    title: str | None = None,
) -> None:
    """Print a table."""
    table = Table(title=title)

    for index, header in enumerate(headers):
        table.add_column(header, style="cyan" if index == 0 else None, overflow="fold")

    for row in rows:
        table.add_row(*[escape(str(cell)) for cell in row])

    console.print(table)


def plural(count: int, word: str) -> str:
    """``1 skill`` / ``2 skills``."""
    return f"{count} {word}{'' if count == 1 else 's'}"
