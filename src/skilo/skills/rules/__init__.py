"""
Validation rules for SKILL.md manifests.

The rule set is fixed; skilo.skills.validator decides which of these run
and with which limits.
"""

from skilo.skills.rules.base import Rule
from skilo.skills.rules.body_length import DEFAULT_MAX_BODY_LINES, BodyLengthRule
from skilo.skills.rules.compatibility import DEFAULT_MAX_COMPATIBILITY_LENGTH, CompatibilityLengthRule
from skilo.skills.rules.description import (
    DEFAULT_MAX_DESCRIPTION_LENGTH,
    DescriptionLengthRule,
    DescriptionRequiredRule,
)
from skilo.skills.rules.name import (
    DEFAULT_MAX_NAME_LENGTH,
    NAME_REGEX,
    NameDirectoryRule,
    NameFormatRule,
    NameLengthRule,
    is_valid_name,
)
from skilo.skills.rules.references import REFERENCE_REGEX, ReferencesExistRule
from skilo.skills.rules.scripts import ScriptExecutableRule, ScriptShebangRule, list_scripts

__all__ = [
    "Rule",
    # Name
    "DEFAULT_MAX_NAME_LENGTH",
    "NAME_REGEX",
    "NameDirectoryRule",
    "NameFormatRule",
    "NameLengthRule",
    "is_valid_name",
    # Description
    "DEFAULT_MAX_DESCRIPTION_LENGTH",
    "DescriptionLengthRule",
    "DescriptionRequiredRule",
    # Compatibility
    "DEFAULT_MAX_COMPATIBILITY_LENGTH",
    "CompatibilityLengthRule",
    # Body
    "DEFAULT_MAX_BODY_LINES",
    "BodyLengthRule",
    "REFERENCE_REGEX",
    "ReferencesExistRule",
    # Scripts
    "ScriptExecutableRule",
    "ScriptShebangRule",
    "list_scripts",
]
