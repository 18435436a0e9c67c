"""
JSON validation output for scripts and editors.
"""

import json
from pathlib import Path
from typing import Any

import typer

from skilo.output.base import OutputFormatter, ValidationResults, totals
from skilo.skills.diagnostics import Diagnostic


def diagnostic_to_dict(diagnostic: Diagnostic) -> dict[str, Any]:
    """Serialize a diagnostic, omitting unknown location and hint."""
    data: dict[str, Any] = {"code": str(diagnostic.code), "message": diagnostic.message}
    if diagnostic.line is not None:
        data["line"] = diagnostic.line
    if diagnostic.column is not None:
        data["column"] = diagnostic.column
    if diagnostic.fix_hint is not None:
        data["fix_hint"] = diagnostic.fix_hint
    return data


class JsonFormatter(OutputFormatter):
    def format_validation(self, results: ValidationResults) -> str:
        errors, warnings = totals(results)
        document = {
            "skills": [
                {
                    "path": str(Path(path)),
                    "errors": [diagnostic_to_dict(d) for d in result.errors],
                    "warnings": [diagnostic_to_dict(d) for d in result.warnings],
                }
                for path, result in results
            ],
            "summary": {
                "skills_checked": len(results),
                "total_errors": errors,
                "total_warnings": warnings,
                "success": errors == 0,
            },
        }
        return json.dumps(document, indent=2, ensure_ascii=False)

    def emit(self, output: str) -> None:
        typer.echo(output)
