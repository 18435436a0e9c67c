"""Rules for files in a skill's scripts/ directory (W002, W003)."""

import os
import stat
from pathlib import Path

from skilo.skills.diagnostics import Diagnostic, DiagnosticCode
from skilo.skills.models import Manifest
from skilo.skills.rules.base import Rule

SCRIPTS_DIR = "scripts"
SHEBANG = b"#!"


def list_scripts(manifest: Manifest) -> list[Path]:
    """Regular files directly under scripts/, sorted by name."""
    scripts_dir = manifest.skill_dir / SCRIPTS_DIR
    if not scripts_dir.is_dir():
        return []
    try:
        return sorted(path for path in scripts_dir.iterdir() if path.is_file())
    except OSError:
        return []


class ScriptExecutableRule(Rule):
    """W002: scripts need at least one execute bit.

    Windows has no execute bits, so the rule reports nothing there.
    """

    @property
    def name(self) -> str:
        return "script-executable"

    def check(self, manifest: Manifest) -> list[Diagnostic]:
        if os.name == "nt":
            return []

        diagnostics = []
        for script in list_scripts(manifest):
            try:
                mode = script.stat().st_mode
            except OSError:
                continue
            if mode & (stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH):
                continue
            diagnostics.append(
                self.diagnostic(
                    manifest,
                    DiagnosticCode.SCRIPT_NOT_EXECUTABLE,
                    "Script is not executable",
                    fix_hint=f"Run: chmod +x {script}",
                    path=script,
                )
            )
        return diagnostics


class ScriptShebangRule(Rule):
    """W003: scripts must start with ``#!``."""

    @property
    def name(self) -> str:
        return "script-shebang"

    def check(self, manifest: Manifest) -> list[Diagnostic]:
        diagnostics = []
        for script in list_scripts(manifest):
            try:
                with open(script, "rb") as f:
                    head = f.read(len(SHEBANG))
            except OSError:
                continue
            if head == SHEBANG:
                continue
            diagnostics.append(
                self.diagnostic(
                    manifest,
                    DiagnosticCode.SCRIPT_MISSING_SHEBANG,
                    "Script missing shebang line",
                    line=1,
                    column=1,
                    fix_hint="Add #!/usr/bin/env <interpreter> as first line",
                    path=script,
                )
            )
        return diagnostics
