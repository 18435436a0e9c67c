"""Base class for validation rules."""

from abc import ABC, abstractmethod
from pathlib import Path

from skilo.skills.diagnostics import Diagnostic, DiagnosticCode
from skilo.skills.models import Manifest


class Rule(ABC):
    """A single check run against a parsed manifest.

    Rules are stateless apart from their configured limit. They may read
    the filesystem around the skill but never modify it.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Rule name, kebab-case (e.g. name-format)."""
        pass

    @abstractmethod
    def check(self, manifest: Manifest) -> list[Diagnostic]:
        """Return the diagnostics for this manifest (empty when it passes)."""
        pass

    def diagnostic(
        self,
        manifest: Manifest,
        code: DiagnosticCode,
        message: str,
        line: int | None = None,
        column: int | None = None,
        fix_hint: str | None = None,
        path: Path | None = None,
    ) -> Diagnostic:
        """Build a diagnostic located in ``manifest`` (or ``path``)."""
        return Diagnostic(
            path=path or manifest.path,
            code=code,
            message=message,
            line=line,
            column=column,
            fix_hint=fix_hint,
        )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"
