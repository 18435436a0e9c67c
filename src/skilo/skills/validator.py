"""
Rule-based validator for SKILL.md manifests.

Usage:
    validator = Validator(config.lint)
    result = validator.validate(manifest)
    if not result.is_ok:
        ...
"""

from pathlib import Path

from skilo.config.schema import LintConfig
from skilo.skills.diagnostics import Diagnostic, DiagnosticCode, ValidationResult
from skilo.skills.models import Manifest
from skilo.skills.parser import ManifestError
from skilo.skills.rules import (
    DEFAULT_MAX_BODY_LINES,
    DEFAULT_MAX_COMPATIBILITY_LENGTH,
    DEFAULT_MAX_DESCRIPTION_LENGTH,
    DEFAULT_MAX_NAME_LENGTH,
    BodyLengthRule,
    CompatibilityLengthRule,
    DescriptionLengthRule,
    DescriptionRequiredRule,
    NameDirectoryRule,
    NameFormatRule,
    NameLengthRule,
    ReferencesExistRule,
    Rule,
    ScriptExecutableRule,
    ScriptShebangRule,
)


def build_rules(config: LintConfig) -> list[Rule]:
    """Build the enabled rules in registration order.

    A disabled threshold drops its rule entirely.
    """
    rules_config = config.rules
    rules: list[Rule] = []

    if rules_config.name_format:
        rules.append(NameFormatRule())

    max_name = rules_config.name_length.resolve(DEFAULT_MAX_NAME_LENGTH)
    if max_name is not None:
        rules.append(NameLengthRule(max_name))

    if rules_config.name_directory:
        rules.append(NameDirectoryRule())

    if rules_config.description_required:
        rules.append(DescriptionRequiredRule())

    max_description = rules_config.description_length.resolve(DEFAULT_MAX_DESCRIPTION_LENGTH)
    if max_description is not None:
        rules.append(DescriptionLengthRule(max_description))

    max_compatibility = rules_config.compatibility_length.resolve(DEFAULT_MAX_COMPATIBILITY_LENGTH)
    if max_compatibility is not None:
        rules.append(CompatibilityLengthRule(max_compatibility))

    if rules_config.references_exist:
        rules.append(ReferencesExistRule())

    max_body = rules_config.body_length.resolve(DEFAULT_MAX_BODY_LINES)
    if max_body is not None:
        rules.append(BodyLengthRule(max_body))

    if rules_config.script_executable:
        rules.append(ScriptExecutableRule())

    if rules_config.script_shebang:
        rules.append(ScriptShebangRule())

    return rules


class Validator:
    """Runs the configured rules against manifests."""

    def __init__(self, config: LintConfig | None = None):
        self.rules = build_rules(config or LintConfig())

    @property
    def rule_names(self) -> list[str]:
        return [rule.name for rule in self.rules]

    def validate(self, manifest: Manifest) -> ValidationResult:
        """Run every enabled rule and sort findings into errors and warnings."""
        result = ValidationResult()
        for rule in self.rules:
            for diagnostic in rule.check(manifest):
                result.add(diagnostic)
        return result


def parse_failure_result(error: ManifestError) -> ValidationResult:
    """Report a manifest that could not be parsed as an E007 error."""
    result = ValidationResult()
    result.add(
        Diagnostic(
            path=error.path or Path("SKILL.md"),
            code=DiagnosticCode.INVALID_YAML,
            message=error.message,
            line=1,
            fix_hint="SKILL.md must start with '---', contain valid YAML with name and description, "
            "and close with '---'",
        )
    )
    return result
