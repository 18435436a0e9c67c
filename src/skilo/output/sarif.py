"""
SARIF 2.1.0 output for code scanning integrations.

One run per invocation; the rules table lists every diagnostic code so that
viewers can show descriptions for codes that did not fire.
"""

import json
from pathlib import Path
from typing import Any

import typer

from skilo import __version__
from skilo.output.base import OutputFormatter, ValidationResults
from skilo.skills.diagnostics import Diagnostic, DiagnosticCode

SARIF_SCHEMA = "https://raw.githubusercontent.com/oasis-tcs/sarif-spec/master/Schemata/sarif-schema-2.1.0.json"
SARIF_VERSION = "2.1.0"


def _level(code: DiagnosticCode) -> str:
    return "error" if code.is_error else "warning"


def _rule(code: DiagnosticCode) -> dict[str, Any]:
    return {
        "id": code.value,
        "shortDescription": {"text": code.description},
        "defaultConfiguration": {"level": _level(code)},
    }


def _uri(path: Path) -> str:
    return path.as_posix()


def _result(diagnostic: Diagnostic) -> dict[str, Any]:
    physical: dict[str, Any] = {"artifactLocation": {"uri": _uri(diagnostic.path)}}
    if diagnostic.line is not None:
        region: dict[str, Any] = {"startLine": diagnostic.line}
        if diagnostic.column is not None:
            region["startColumn"] = diagnostic.column
        physical["region"] = region

    return {
        "ruleId": diagnostic.code.value,
        "level": _level(diagnostic.code),
        "message": {"text": diagnostic.message},
        "locations": [{"physicalLocation": physical}],
    }


class SarifFormatter(OutputFormatter):
    def format_validation(self, results: ValidationResults) -> str:
        sarif_results = []
        for _, result in results:
            for diagnostic in [*result.errors, *result.warnings]:
                sarif_results.append(_result(diagnostic))

        log = {
            "$schema": SARIF_SCHEMA,
            "version": SARIF_VERSION,
            "runs": [
                {
                    "tool": {
                        "driver": {
                            "name": "skilo",
                            "version": __version__,
                            "rules": [_rule(code) for code in DiagnosticCode],
                        }
                    },
                    "results": sarif_results,
                }
            ],
        }
        return json.dumps(log, indent=2, ensure_ascii=False)

    def emit(self, output: str) -> None:
        typer.echo(output)
