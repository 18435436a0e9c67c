"""Rule warning about long skill bodies (W001)."""

from skilo.skills.diagnostics import Diagnostic, DiagnosticCode
from skilo.skills.models import Manifest
from skilo.skills.parser import count_lines
from skilo.skills.rules.base import Rule

DEFAULT_MAX_BODY_LINES = 500


class BodyLengthRule(Rule):
    """Long bodies should move detail into references/.

    The diagnostic points at the first line past the limit.
    """

    def __init__(self, max_lines: int = DEFAULT_MAX_BODY_LINES):
        self.max_lines = max_lines

    @property
    def name(self) -> str:
        return "body-length"

    def check(self, manifest: Manifest) -> list[Diagnostic]:
        line_count = count_lines(manifest.body)
        if line_count <= self.max_lines:
            return []

        return [
            self.diagnostic(
                manifest,
                DiagnosticCode.BODY_TOO_LONG,
                f"Body exceeds recommended {self.max_lines} lines ({line_count} lines). "
                "Consider using references/",
                line=manifest.body_start_line + self.max_lines,
                fix_hint="Move detailed content to references/ directory",
            )
        ]
