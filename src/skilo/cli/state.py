"""
Per-invocation CLI state and error handling.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

import typer
from rich.logging import RichHandler

from skilo.config import Config
from skilo.errors import CancelledError, SkiloError
from skilo.output import OutputFormat, OutputFormatter, err_console, get_formatter
from skilo.skills import Agent, detect_agents

# Exit code for a declined prompt (matches SIGINT convention).
EXIT_CANCELLED = 130


@dataclass
class CliState:
    """Global options and configuration shared with every command."""

    config: Config
    format: OutputFormat = OutputFormat.TEXT
    quiet: bool = False
    config_path: Path | None = None

    @property
    def formatter(self) -> OutputFormatter:
        return get_formatter(self.format, self.quiet)


def get_state(ctx: typer.Context) -> CliState:
    """State stored by the root callback, or defaults when run standalone."""
    state = ctx.find_root().obj
    if isinstance(state, CliState):
        return state
    return CliState(config=Config())


def setup_logging(verbose: bool = False) -> None:
    """Route package logs to stderr through rich."""
    handler = RichHandler(console=err_console, show_time=False, show_path=verbose, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger("skilo")
    logger.handlers = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


@contextmanager
def handle_errors(formatter: OutputFormatter) -> Iterator[None]:
    """Report SkiloError through the formatter and exit non-zero."""
    try:
        yield
    except CancelledError as e:
        formatter.error(str(e))
        raise typer.Exit(EXIT_CANCELLED) from e
    except SkiloError as e:
        formatter.error(str(e))
        raise typer.Exit(1) from e


def confirm(prompt: str) -> bool:
    """Yes/no prompt defaulting to no; end of input counts as no."""
    try:
        return typer.confirm(prompt, default=False)
    except typer.Abort:
        return False


def parse_agent(value: str) -> Agent:
    try:
        return Agent.parse(value)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="'--agent'") from e


def resolve_agent(value: str | None, config: Config) -> Agent | None:
    """Agent from --agent, falling back to ``add.default_agent``.

    ``all`` is accepted and means the configured default here.
    """
    if value is not None and value.lower() != "all":
        return parse_agent(value)
    if config.add.default_agent:
        return parse_agent(config.add.default_agent)
    return None


def resolve_agents(values: list[str], config: Config, project_root: Path, global_scope: bool) -> list[Agent | None]:
    """Agents for --agent given several times.

    ``all`` expands to every agent detected at the requested scope, or the
    default agent when none is detected. Order is kept and duplicates
    dropped.
    """
    if not values:
        return [resolve_agent(None, config)]

    agents: list[Agent | None] = []
    for value in values:
        if value.lower() == "all":
            detected = [d.agent for d in detect_agents(project_root) if d.is_global == global_scope]
            agents.extend(detected or [resolve_agent(None, config)])
        else:
            agents.append(parse_agent(value))

    unique: list[Agent | None] = []
    for agent in agents:
        if agent not in unique:
            unique.append(agent)
    return unique
