"""Rules for the ``name`` field (E001, E002, E003)."""

import re

from skilo.skills.diagnostics import Diagnostic, DiagnosticCode
from skilo.skills.models import Manifest
from skilo.skills.rules.base import Rule

NAME_REGEX = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")

DEFAULT_MAX_NAME_LENGTH = 64

# `name:` is expected on line 2, value starting at column 7.
NAME_LINE = 2
NAME_COLUMN = 7


def is_valid_name(name: str) -> bool:
    """Lowercase alphanumeric segments joined by single hyphens."""
    return NAME_REGEX.fullmatch(name) is not None


class NameFormatRule(Rule):
    """E001: name must be lowercase alphanumeric with single hyphens."""

    @property
    def name(self) -> str:
        return "name-format"

    def check(self, manifest: Manifest) -> list[Diagnostic]:
        name = manifest.frontmatter.name
        if is_valid_name(name):
            return []

        return [
            self.diagnostic(
                manifest,
                DiagnosticCode.INVALID_NAME_FORMAT,
                f"Invalid name '{name}': must be lowercase alphanumeric with single hyphens",
                line=NAME_LINE,
                column=NAME_COLUMN,
                fix_hint="Use only lowercase letters, numbers, and single hyphens",
            )
        ]


class NameLengthRule(Rule):
    """E002: name must not exceed the configured length."""

    def __init__(self, max_length: int = DEFAULT_MAX_NAME_LENGTH):
        self.max_length = max_length

    @property
    def name(self) -> str:
        return "name-length"

    def check(self, manifest: Manifest) -> list[Diagnostic]:
        length = len(manifest.frontmatter.name)
        if length <= self.max_length:
            return []

        return [
            self.diagnostic(
                manifest,
                DiagnosticCode.NAME_TOO_LONG,
                f"Name too long ({length} chars, max {self.max_length})",
                line=NAME_LINE,
                column=NAME_COLUMN,
            )
        ]


class NameDirectoryRule(Rule):
    """E003: name must equal the directory holding SKILL.md."""

    @property
    def name(self) -> str:
        return "name-directory"

    def check(self, manifest: Manifest) -> list[Diagnostic]:
        name = manifest.frontmatter.name
        dir_name = manifest.path.absolute().parent.name
        if not dir_name or dir_name == name:
            return []

        return [
            self.diagnostic(
                manifest,
                DiagnosticCode.NAME_DIRECTORY_MISMATCH,
                f"Name '{name}' does not match directory name '{dir_name}'",
                line=NAME_LINE,
                column=NAME_COLUMN,
                fix_hint=f"Rename to '{dir_name}' or move to '{name}/SKILL.md'",
            )
        ]
