"""
Validation diagnostics.

Every problem found by a rule carries a stable code. Codes starting with E
are errors, codes starting with W are warnings; the split decides whether a
diagnostic lands in ValidationResult.errors or .warnings.
"""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class DiagnosticCode(str, Enum):
    """Stable identifiers for validation findings."""

    INVALID_NAME_FORMAT = "E001"
    NAME_TOO_LONG = "E002"
    NAME_DIRECTORY_MISMATCH = "E003"
    MISSING_DESCRIPTION = "E004"
    DESCRIPTION_TOO_LONG = "E005"
    COMPATIBILITY_TOO_LONG = "E006"
    INVALID_YAML = "E007"
    MISSING_SKILL_MD = "E008"
    REFERENCE_NOT_FOUND = "E009"

    BODY_TOO_LONG = "W001"
    SCRIPT_NOT_EXECUTABLE = "W002"
    SCRIPT_MISSING_SHEBANG = "W003"
    EMPTY_OPTIONAL_DIR = "W004"

    @property
    def is_error(self) -> bool:
        return self.value.startswith("E")

    @property
    def description(self) -> str:
        return CODE_DESCRIPTIONS[self]

    def __str__(self) -> str:
        return self.value


CODE_DESCRIPTIONS: dict[DiagnosticCode, str] = {
    DiagnosticCode.INVALID_NAME_FORMAT: "Invalid skill name format",
    DiagnosticCode.NAME_TOO_LONG: "Skill name exceeds maximum length",
    DiagnosticCode.NAME_DIRECTORY_MISMATCH: "Skill name does not match directory name",
    DiagnosticCode.MISSING_DESCRIPTION: "Missing skill description",
    DiagnosticCode.DESCRIPTION_TOO_LONG: "Skill description exceeds maximum length",
    DiagnosticCode.COMPATIBILITY_TOO_LONG: "Compatibility field exceeds maximum length",
    DiagnosticCode.INVALID_YAML: "Invalid YAML in frontmatter",
    DiagnosticCode.MISSING_SKILL_MD: "Missing SKILL.md file",
    DiagnosticCode.REFERENCE_NOT_FOUND: "Referenced file not found",
    DiagnosticCode.BODY_TOO_LONG: "Skill body exceeds recommended length",
    DiagnosticCode.SCRIPT_NOT_EXECUTABLE: "Script is not executable",
    DiagnosticCode.SCRIPT_MISSING_SHEBANG: "Script missing shebang line",
    DiagnosticCode.EMPTY_OPTIONAL_DIR: "Empty optional directory",
}


class Diagnostic(BaseModel):
    """A single finding at an optional source location."""

    path: Path
    code: DiagnosticCode
    message: str
    line: int | None = None
    column: int | None = None
    fix_hint: str | None = Field(default=None, description="Suggested fix shown as a hint")

    @property
    def is_error(self) -> bool:
        return self.code.is_error


class ValidationResult(BaseModel):
    """Errors and warnings for one manifest."""

    errors: list[Diagnostic] = Field(default_factory=list)
    warnings: list[Diagnostic] = Field(default_factory=list)

    def add(self, diagnostic: Diagnostic) -> None:
        """Route a diagnostic by its code."""
        if diagnostic.is_error:
            self.errors.append(diagnostic)
        else:
            self.warnings.append(diagnostic)

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        """Concatenate two results, keeping order."""
        return ValidationResult(
            errors=[*self.errors, *other.errors],
            warnings=[*self.warnings, *other.warnings],
        )

    @property
    def is_ok(self) -> bool:
        return not self.errors

    @property
    def is_ok_strict(self) -> bool:
        return not self.errors and not self.warnings
