"""
Skilo Skills System.

A skill is a directory with a SKILL.md manifest (YAML frontmatter plus a
markdown body) and optional scripts/, references/ and assets/ directories.

Usage:
    from skilo.skills import Validator, discover

    validator = Validator()
    for result in discover(Path("skills")):
        if result.manifest is not None:
            print(validator.validate(result.manifest).is_ok)
"""

# Models
from skilo.skills.models import KEY_ORDER, Frontmatter, Manifest

# Parser
from skilo.skills.parser import (
    InvalidYamlError,
    ManifestError,
    ManifestIOError,
    MissingFrontmatterError,
    UnclosedFrontmatterError,
    count_lines,
    parse_frontmatter,
    parse_manifest,
    parse_manifest_content,
    split_content,
)

# Discovery
from skilo.skills.discovery import (
    SKILL_FILE,
    SkillLoadResult,
    compile_ignore,
    discover,
    find_skills,
    is_ignored,
    load_skills,
)

# Validation
from skilo.skills.diagnostics import CODE_DESCRIPTIONS, Diagnostic, DiagnosticCode, ValidationResult
from skilo.skills.validator import Validator, build_rules, parse_failure_result

# Formatting and scaffolding
from skilo.skills.formatter import FormatResult, Formatter, format_tables
from skilo.skills.templates import LANGUAGES, TEMPLATES, TemplateContext, render_skill, to_title_case

# Agents and installation
from skilo.skills.agents import Agent, DetectedAgent, agent_skill_dirs, detect_agents
from skilo.skills.installed import (
    DEFAULT_SKILLS_DIR,
    InstalledSkill,
    Scope,
    list_skills,
    remove_skill,
    resolve_skills_dir,
    skill_exists,
)
from skilo.skills.installer import collect_skills, install_skill, select_skills

__all__ = [
    # Models
    "KEY_ORDER",
    "Frontmatter",
    "Manifest",
    # Parser
    "InvalidYamlError",
    "ManifestError",
    "ManifestIOError",
    "MissingFrontmatterError",
    "UnclosedFrontmatterError",
    "count_lines",
    "parse_frontmatter",
    "parse_manifest",
    "parse_manifest_content",
    "split_content",
    # Discovery
    "SKILL_FILE",
    "SkillLoadResult",
    "compile_ignore",
    "discover",
    "find_skills",
    "is_ignored",
    "load_skills",
    # Validation
    "CODE_DESCRIPTIONS",
    "Diagnostic",
    "DiagnosticCode",
    "ValidationResult",
    "Validator",
    "build_rules",
    "parse_failure_result",
    # Formatting and scaffolding
    "FormatResult",
    "Formatter",
    "format_tables",
    "LANGUAGES",
    "TEMPLATES",
    "TemplateContext",
    "render_skill",
    "to_title_case",
    # Agents and installation
    "Agent",
    "DetectedAgent",
    "agent_skill_dirs",
    "detect_agents",
    "DEFAULT_SKILLS_DIR",
    "InstalledSkill",
    "Scope",
    "list_skills",
    "remove_skill",
    "resolve_skills_dir",
    "skill_exists",
    "collect_skills",
    "install_skill",
    "select_skills",
]
