"""
Supported coding agents and where they look for skills.

Each agent has a project-level skills directory (relative to the project
root) and a global one (under the user's home).
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

SKILL_FILE = "SKILL.md"


class Agent(str, Enum):
    """Coding agents that load Agent Skills."""

    OPENCODE = "opencode"
    CLAUDE = "claude"
    CODEX = "codex"
    CURSOR = "cursor"
    AMP = "amp"
    KILO_CODE = "kilo-code"
    ROO_CODE = "roo-code"
    GOOSE = "goose"
    GEMINI = "gemini"
    ANTIGRAVITY = "antigravity"
    COPILOT = "copilot"
    CLAWDBOT = "clawdbot"
    DROID = "droid"
    WINDSURF = "windsurf"

    @property
    def display_name(self) -> str:
        return AGENT_INFO[self][0]

    @property
    def skills_dir(self) -> str:
        """Project-level skills directory, relative to the project root."""
        return AGENT_INFO[self][1]

    @property
    def global_skills_dir(self) -> str:
        """User-level skills directory, with a leading ~."""
        return AGENT_INFO[self][2]

    def resolve_project_skills_dir(self, project_root: Path) -> Path:
        return project_root / self.skills_dir

    def resolve_global_skills_dir(self) -> Path:
        return Path(self.global_skills_dir).expanduser()

    @classmethod
    def parse(cls, value: str) -> "Agent":
        """Look up an agent by value or display name, case-insensitively."""
        normalized = value.strip().lower().replace(" ", "-").replace("_", "-")
        for agent in cls:
            if normalized in (agent.value, agent.display_name.lower().replace(" ", "-")):
                return agent
        choices = ", ".join(agent.value for agent in cls)
        raise ValueError(f"Unknown agent '{value}' (choose from {choices})")


# display name, project dir, global dir
AGENT_INFO: dict[Agent, tuple[str, str, str]] = {
    Agent.OPENCODE: ("OpenCode", ".opencode/skill", "~/.config/opencode/skill"),
    Agent.CLAUDE: ("Claude", ".claude/skills", "~/.claude/skills"),
    Agent.CODEX: ("Codex", ".codex/skills", "~/.codex/skills"),
    Agent.CURSOR: ("Cursor", ".cursor/skills", "~/.cursor/skills"),
    Agent.AMP: ("Amp", ".agents/skills", "~/.config/agents/skills"),
    Agent.KILO_CODE: ("Kilo Code", ".kilocode/skills", "~/.kilocode/skills"),
    Agent.ROO_CODE: ("Roo Code", ".roo/skills", "~/.roo/skills"),
    Agent.GOOSE: ("Goose", ".goose/skills", "~/.config/goose/skills"),
    Agent.GEMINI: ("Gemini CLI", ".gemini/skills", "~/.gemini/skills"),
    Agent.ANTIGRAVITY: ("Antigravity", ".agent/skills", "~/.gemini/antigravity/skills"),
    Agent.COPILOT: ("GitHub Copilot", ".github/skills", "~/.copilot/skills"),
    Agent.CLAWDBOT: ("Clawdbot", "skills", "~/.clawdbot/skills"),
    Agent.DROID: ("Droid", ".factory/skills", "~/.factory/skills"),
    Agent.WINDSURF: ("Windsurf", ".windsurf/skills", "~/.codeium/windsurf/skills"),
}


@dataclass
class DetectedAgent:
    """An agent whose skills directory exists on this machine."""

    agent: Agent
    skills_path: Path
    is_global: bool
    skill_count: int


def count_skills(skills_dir: Path) -> int:
    if not skills_dir.is_dir():
        return 0
    return sum(1 for entry in skills_dir.iterdir() if (entry / SKILL_FILE).is_file())


def detect_agents(project_root: Path) -> list[DetectedAgent]:
    """Find agents with an existing project or global skills directory."""
    detected = []
    for agent in Agent:
        project_dir = agent.resolve_project_skills_dir(project_root)
        if project_dir.is_dir():
            detected.append(DetectedAgent(agent, project_dir, False, count_skills(project_dir)))

        global_dir = agent.resolve_global_skills_dir()
        if global_dir.is_dir():
            detected.append(DetectedAgent(agent, global_dir, True, count_skills(global_dir)))
    return detected


def agent_skill_dirs(root: Path) -> list[Path]:
    """Existing agent skills directories inside a repository checkout."""
    seen: set[str] = set()
    found = []
    for agent in Agent:
        if agent.skills_dir in seen:
            continue
        seen.add(agent.skills_dir)
        candidate = root / agent.skills_dir
        if candidate.is_dir():
            found.append(candidate)
    return found
