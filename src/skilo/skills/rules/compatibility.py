"""Rule for the optional ``compatibility`` field (E006)."""

from skilo.skills.diagnostics import Diagnostic, DiagnosticCode
from skilo.skills.models import Manifest
from skilo.skills.rules.base import Rule

DEFAULT_MAX_COMPATIBILITY_LENGTH = 500


class CompatibilityLengthRule(Rule):
    def __init__(self, max_length: int = DEFAULT_MAX_COMPATIBILITY_LENGTH):
        self.max_length = max_length

    @property
    def name(self) -> str:
        return "compatibility-length"

    def check(self, manifest: Manifest) -> list[Diagnostic]:
        compatibility = manifest.frontmatter.compatibility
        if compatibility is None or len(compatibility) <= self.max_length:
            return []

        return [
            self.diagnostic(
                manifest,
                DiagnosticCode.COMPATIBILITY_TOO_LONG,
                f"Compatibility too long ({len(compatibility)} chars, max {self.max_length})",
            )
        ]
