"""
Templates for scaffolding new skills.

Templates:
    hello-world   SKILL.md plus a greeting script
    minimal       SKILL.md only
    full          SKILL.md, scripts/, references/ and assets/
    script-based  SKILL.md built around a runnable script
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from skilo.errors import SkillExistsError
from skilo.skills.models import Frontmatter

logger = logging.getLogger(__name__)

TEMPLATES = ("hello-world", "minimal", "full", "script-based")

# (extension, shebang) per script language
LANGUAGES: dict[str, tuple[str, str]] = {
    "python": ("py", "#!/usr/bin/env python3"),
    "bash": ("sh", "#!/usr/bin/env bash"),
    "javascript": ("js", "#!/usr/bin/env node"),
    "typescript": ("ts", "#!/usr/bin/env -S npx ts-node"),
}

HELLO_WORLD_BODY = """# {title}

A simple greeting skill to start from.

## Usage

Run the greeting script with an optional name.
{scripts_section}"""

HELLO_WORLD_SCRIPTS = """
## Scripts

- `scripts/greet.{ext}` - Prints a greeting

## Example

```bash
./scripts/greet.{ext} World
# Hello, World!
```
"""

MINIMAL_BODY = """# {title}

{description}

## Instructions

Describe, step by step, what the agent should do when this skill applies.
"""

FULL_BODY = """# {title}

{description}

## Usage

Detailed documentation lives in `references/REFERENCE.md`.
{scripts_section}
## References

- `references/REFERENCE.md` - Detailed documentation

## Assets

Templates, images and other static files go in `assets/`.
"""

FULL_SCRIPTS = """
## Scripts

- `scripts/main.{ext}` - Main entry point
"""

SCRIPT_BASED_BODY = """# {title}

{description}

## Running

```bash
./scripts/run.{ext} --help
```

## Scripts

- `scripts/run.{ext}` - Entry point; pass `--verbose` for more output

## Notes

Keep scripts self-contained and print results to stdout so the agent can
read them.
"""

REFERENCE_TEMPLATE = """# {title} Reference

## Overview

{description}

## Configuration

This skill needs no configuration.

## Exit codes

- `0`: success
- `1`: error
"""

SCRIPTS: dict[str, str] = {
    "python": '''{shebang}
"""{purpose}"""

import sys


def main() -> int:
    args = sys.argv[1:]
    verbose = "--verbose" in args or "-v" in args
    names = [arg for arg in args if not arg.startswith("-")]
    if verbose:
        print("Verbose mode enabled", file=sys.stderr)
    print(f"Hello, {{names[0] if names else 'World'}}!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
''',
    "bash": """{shebang}
# {purpose}

set -euo pipefail

name="World"
for arg in "$@"; do
    case "$arg" in
        -v|--verbose) echo "Verbose mode enabled" >&2 ;;
        -*) ;;
        *) name="$arg" ;;
    esac
done

echo "Hello, ${{name}}!"
""",
    "javascript": """{shebang}
// {purpose}

const args = process.argv.slice(2);
if (args.includes("-v") || args.includes("--verbose")) {{
    console.error("Verbose mode enabled");
}}
const name = args.find((arg) => !arg.startsWith("-")) || "World";
console.log(`Hello, ${{name}}!`);
""",
    "typescript": """{shebang}
// {purpose}

const args: string[] = process.argv.slice(2);
if (args.includes("-v") || args.includes("--verbose")) {{
    console.error("Verbose mode enabled");
}}
const name: string = args.find((arg) => !arg.startsWith("-")) ?? "World";
console.log(`Hello, ${{name}}!`);
""",
}


@dataclass
class TemplateContext:
    """Everything a template needs to render a skill."""

    name: str
    description: str
    license: str | None = None
    lang: str = "python"
    include_optional_dirs: bool = True
    include_scripts: bool = True

    @property
    def title(self) -> str:
        return to_title_case(self.name)

    @property
    def extension(self) -> str:
        return LANGUAGES[self.lang][0]

    @property
    def shebang(self) -> str:
        return LANGUAGES[self.lang][1]


def to_title_case(name: str) -> str:
    """Convert kebab-case to Title Case ("my-skill" -> "My Skill")."""
    return " ".join(part[:1].upper() + part[1:] for part in name.split("-"))


def render_frontmatter(ctx: TemplateContext) -> str:
    frontmatter = Frontmatter(
        name=ctx.name,
        description=" ".join(ctx.description.split()),
        license=ctx.license,
    )
    return f"---\n{frontmatter.to_yaml()}---\n\n"


def render_script(ctx: TemplateContext, purpose: str) -> str:
    return SCRIPTS[ctx.lang].format(shebang=ctx.shebang, purpose=purpose)


def _write_script(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    if os.name != "nt":
        path.chmod(0o755)


def render_skill(template: str, ctx: TemplateContext, output_dir: Path) -> Path:
    """
    Create a new skill directory from a template.

    Args:
        template: One of TEMPLATES.
        ctx: Template context.
        output_dir: Parent directory; the skill goes in output_dir/<name>.

    Returns:
        Path to the created skill directory.

    Raises:
        SkillExistsError: If the skill directory already exists.
        ValueError: If the template or language is unknown.
    """
    if template not in TEMPLATES:
        raise ValueError(f"Unknown template: {template} (choose from {', '.join(TEMPLATES)})")
    if ctx.lang not in LANGUAGES:
        raise ValueError(f"Unknown language: {ctx.lang} (choose from {', '.join(LANGUAGES)})")

    skill_dir = output_dir / ctx.name
    if skill_dir.exists():
        raise SkillExistsError(ctx.name, skill_dir)

    skill_dir.mkdir(parents=True)
    ext = ctx.extension
    frontmatter = render_frontmatter(ctx)

    if template == "hello-world":
        scripts_section = HELLO_WORLD_SCRIPTS.format(ext=ext) if ctx.include_scripts else ""
        body = HELLO_WORLD_BODY.format(title=ctx.title, scripts_section=scripts_section)
        if ctx.include_scripts:
            _write_script(skill_dir / "scripts" / f"greet.{ext}", render_script(ctx, "A simple greeting script."))

    elif template == "minimal":
        body = MINIMAL_BODY.format(title=ctx.title, description=ctx.description)

    elif template == "full":
        scripts_section = FULL_SCRIPTS.format(ext=ext) if ctx.include_scripts else ""
        body = FULL_BODY.format(title=ctx.title, description=ctx.description, scripts_section=scripts_section)
        if ctx.include_scripts:
            _write_script(skill_dir / "scripts" / f"main.{ext}", render_script(ctx, f"Main entry point for {ctx.name}."))
        references = skill_dir / "references"
        references.mkdir()
        (references / "REFERENCE.md").write_text(
            REFERENCE_TEMPLATE.format(title=ctx.title, description=ctx.description), encoding="utf-8"
        )
        (skill_dir / "assets").mkdir()
        (skill_dir / "assets" / ".gitkeep").write_text("", encoding="utf-8")

    else:
        body = SCRIPT_BASED_BODY.format(title=ctx.title, description=ctx.description, ext=ext)
        _write_script(skill_dir / "scripts" / f"run.{ext}", render_script(ctx, f"Entry point for {ctx.name}."))

    if ctx.include_optional_dirs and template != "full":
        for optional in ("references", "assets"):
            directory = skill_dir / optional
            directory.mkdir(exist_ok=True)
            (directory / ".gitkeep").write_text("", encoding="utf-8")

    (skill_dir / "SKILL.md").write_text(frontmatter + body, encoding="utf-8")
    logger.debug(f"Rendered {template} template into {skill_dir}")
    return skill_dir
