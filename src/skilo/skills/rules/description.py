"""Rules for the ``description`` field (E004, E005)."""

from skilo.skills.diagnostics import Diagnostic, DiagnosticCode
from skilo.skills.models import Manifest
from skilo.skills.rules.base import Rule

DEFAULT_MAX_DESCRIPTION_LENGTH = 1024

DESCRIPTION_LINE = 3
DESCRIPTION_COLUMN = 14


class DescriptionRequiredRule(Rule):
    """E004: description must not be empty."""

    @property
    def name(self) -> str:
        return "description-required"

    def check(self, manifest: Manifest) -> list[Diagnostic]:
        if manifest.frontmatter.description:
            return []

        return [
            self.diagnostic(
                manifest,
                DiagnosticCode.MISSING_DESCRIPTION,
                "Description cannot be empty",
                line=DESCRIPTION_LINE,
                column=DESCRIPTION_COLUMN,
            )
        ]


class DescriptionLengthRule(Rule):
    """E005: description must not exceed the configured length."""

    def __init__(self, max_length: int = DEFAULT_MAX_DESCRIPTION_LENGTH):
        self.max_length = max_length

    @property
    def name(self) -> str:
        return "description-length"

    def check(self, manifest: Manifest) -> list[Diagnostic]:
        length = len(manifest.frontmatter.description)
        if length <= self.max_length:
            return []

        return [
            self.diagnostic(
                manifest,
                DiagnosticCode.DESCRIPTION_TOO_LONG,
                f"Description too long ({length} chars, max {self.max_length})",
                line=DESCRIPTION_LINE,
                column=DESCRIPTION_COLUMN,
            )
        ]
