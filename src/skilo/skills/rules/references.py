"""Rule checking that files referenced from the body exist (E009)."""

import re

from skilo.skills.diagnostics import Diagnostic, DiagnosticCode
from skilo.skills.models import Manifest
from skilo.skills.rules.base import Rule

# Backtick-quoted paths into the skill's bundled directories.
REFERENCE_REGEX = re.compile(r"`((?:scripts|references|assets)/[^`]+)`")


class ReferencesExistRule(Rule):
    @property
    def name(self) -> str:
        return "references-exist"

    def check(self, manifest: Manifest) -> list[Diagnostic]:
        skill_dir = manifest.skill_dir
        diagnostics = []

        for match in REFERENCE_REGEX.finditer(manifest.body):
            reference = match.group(1)
            if (skill_dir / reference).exists():
                continue
            diagnostics.append(
                self.diagnostic(
                    manifest,
                    DiagnosticCode.REFERENCE_NOT_FOUND,
                    f"Referenced file not found: {reference}",
                    fix_hint=f"Create {reference} or remove the reference",
                )
            )

        return diagnostics
