"""
SKILL.md parser for Skilo.

Splits a manifest into YAML frontmatter and markdown body and decodes the
frontmatter into a Frontmatter model.
"""

from pathlib import Path

import yaml
from pydantic import ValidationError

from skilo.errors import SkiloError
from skilo.skills.models import Frontmatter, Manifest

MARKER = "---"
CLOSING = "\n---"


class ManifestError(SkiloError):
    """A SKILL.md file could not be parsed."""

    def __init__(self, message: str, path: Path | None = None):
        self.message = message
        self.path = path
        super().__init__(message)

    def __str__(self) -> str:
        return self.message + (f" (at {self.path})" if self.path else "")


class MissingFrontmatterError(ManifestError):
    """File does not start with a '---' marker."""

    def __init__(self, path: Path | None = None):
        super().__init__("Missing frontmatter: SKILL.md must start with '---'", path)


class UnclosedFrontmatterError(ManifestError):
    """Opening marker has no matching closing marker."""

    def __init__(self, path: Path | None = None):
        super().__init__("Unclosed frontmatter: missing closing '---'", path)


class InvalidYamlError(ManifestError):
    """Frontmatter is not valid YAML or lacks required fields."""

    def __init__(self, detail: str, path: Path | None = None):
        self.detail = detail
        super().__init__(f"Invalid YAML in frontmatter: {detail}", path)


class ManifestIOError(ManifestError):
    """The manifest file could not be read."""

    def __init__(self, error: Exception, path: Path | None = None):
        self.error = error
        super().__init__(f"Cannot read manifest: {error}", path)


def count_lines(text: str) -> int:
    """Number of lines, not counting a trailing newline as an extra empty line."""
    if not text:
        return 0
    return text.count("\n") + (0 if text.endswith("\n") else 1)


def split_content(content: str) -> tuple[str, str, int]:
    """Split SKILL.md content into frontmatter text, body and body start line.

    Leading whitespace is ignored. The frontmatter ends at the first line
    beginning with ``---`` after the opening marker.

    Args:
        content: Full file content.

    Returns:
        Tuple of (trimmed frontmatter text, left-trimmed body, body_start_line)
        where body_start_line counts the lines up to and including the
        closing marker, plus one.

    Raises:
        MissingFrontmatterError: Content does not start with ``---``.
        UnclosedFrontmatterError: No closing marker.
    """
    content = content.lstrip()
    if not content.startswith(MARKER):
        raise MissingFrontmatterError()

    after_open = content[len(MARKER) :]
    close = after_open.find(CLOSING)
    if close == -1:
        raise UnclosedFrontmatterError()

    frontmatter = after_open[:close].strip()
    body_start = len(MARKER) + close + len(CLOSING)
    body = content[body_start:].lstrip()
    body_start_line = count_lines(content[:body_start]) + 1

    return frontmatter, body, body_start_line


def parse_frontmatter(text: str) -> Frontmatter:
    """Decode frontmatter YAML.

    Raises:
        InvalidYamlError: Malformed YAML, a non-mapping document, or
            missing/ill-typed required fields.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise InvalidYamlError(str(e)) from e

    if not isinstance(data, dict):
        raise InvalidYamlError("frontmatter must be a mapping")

    try:
        return Frontmatter.model_validate(data)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'frontmatter'}: {err['msg']}" for err in e.errors()
        )
        raise InvalidYamlError(problems) from e


def parse_manifest_content(path: Path, content: str) -> Manifest:
    """Parse SKILL.md content that has already been read."""
    try:
        frontmatter_raw, body, body_start_line = split_content(content)
        frontmatter = parse_frontmatter(frontmatter_raw)
    except ManifestError as e:
        e.path = path
        raise

    return Manifest(
        path=path,
        frontmatter=frontmatter,
        frontmatter_raw=frontmatter_raw,
        body=body,
        body_start_line=body_start_line,
    )


def parse_manifest(path: Path) -> Manifest:
    """Read and parse a SKILL.md file.

    Raises:
        ManifestIOError: The file cannot be read.
        ManifestError: Any parse failure (see split_content/parse_frontmatter).
    """
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestIOError(e, path) from e

    return parse_manifest_content(path, content)
