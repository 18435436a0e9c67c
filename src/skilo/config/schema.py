"""
Pydantic configuration schema for Skilo.

This module defines all configuration models with validation.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_serializer, model_validator

TemplateName = Literal["hello-world", "minimal", "full", "script-based"]
ScriptLang = Literal["python", "bash", "javascript", "typescript"]

# =============================================================================
# Threshold
# =============================================================================


class Threshold(BaseModel):
    """Tri-state limit for a length rule.

    In YAML a threshold is written as ``true`` (use the rule's default),
    ``false`` (disable the rule) or a non-negative integer (custom limit).
    """

    model_config = ConfigDict(frozen=True)

    enabled: bool = True
    value: int | None = Field(default=None, ge=0)

    @model_validator(mode="before")
    @classmethod
    def _coerce(cls, data: Any) -> Any:
        # bool first: bool is a subclass of int
        if isinstance(data, bool):
            return {"enabled": data}
        if isinstance(data, int):
            return {"value": data}
        return data

    @model_serializer
    def _serialize(self) -> bool | int:
        if not self.enabled:
            return False
        if self.value is None:
            return True
        return self.value

    @classmethod
    def default(cls) -> "Threshold":
        return cls()

    @classmethod
    def disabled(cls) -> "Threshold":
        return cls(enabled=False)

    @classmethod
    def of(cls, value: int) -> "Threshold":
        return cls(value=value)

    @property
    def is_disabled(self) -> bool:
        return not self.enabled

    def resolve(self, default: int) -> int | None:
        """Resolve against a rule default; None means the rule is off."""
        if not self.enabled:
            return None
        if self.value is None:
            return default
        return self.value


# =============================================================================
# Lint Configuration
# =============================================================================


class RulesConfig(BaseModel):
    """Per-rule enable flags and thresholds."""

    model_config = ConfigDict(extra="forbid")

    name_format: bool = True
    name_length: Threshold = Field(default_factory=Threshold)
    name_directory: bool = True
    description_required: bool = True
    description_length: Threshold = Field(default_factory=Threshold)
    compatibility_length: Threshold = Field(default_factory=Threshold)
    references_exist: bool = True
    body_length: Threshold = Field(default_factory=Threshold)
    script_executable: bool = True
    script_shebang: bool = True


class LintConfig(BaseModel):
    """Configuration for lint, validate and check."""

    model_config = ConfigDict(extra="allow")

    strict: bool = False
    rules: RulesConfig = Field(default_factory=RulesConfig)


# =============================================================================
# Command Configuration
# =============================================================================


class FmtConfig(BaseModel):
    """Configuration for the fmt command."""

    model_config = ConfigDict(extra="allow")

    sort_frontmatter: bool = True
    format_tables: bool = True


class NewConfig(BaseModel):
    """Defaults for scaffolding new skills."""

    model_config = ConfigDict(extra="allow")

    default_license: str | None = None
    default_template: TemplateName = "hello-world"
    default_lang: ScriptLang = "python"


class AddConfig(BaseModel):
    """Configuration for the add command.

    With no default agent, skills are installed into ./skills/.
    """

    model_config = ConfigDict(extra="allow")

    default_agent: str | None = None
    confirm: bool = True
    validate_skills: bool = Field(default=True, description="Validate skills before installing")


class DiscoveryConfig(BaseModel):
    """Skill discovery configuration.

    Ignore patterns use .gitignore glob syntax and are matched against both
    the path relative to the search root and the bare directory name.
    """

    model_config = ConfigDict(extra="allow")

    ignore: list[str] = Field(default_factory=list)

    @field_validator("ignore", mode="before")
    @classmethod
    def _single_pattern(cls, value: Any) -> Any:
        # a lone pattern from the environment or `config set` arrives as a str
        if isinstance(value, str):
            return [value] if value.strip() else []
        return value


# =============================================================================
# Root Configuration
# =============================================================================


class Config(BaseModel):
    """Root configuration model for Skilo."""

    model_config = ConfigDict(extra="allow")

    lint: LintConfig = Field(default_factory=LintConfig)
    fmt: FmtConfig = Field(default_factory=FmtConfig)
    new: NewConfig = Field(default_factory=NewConfig)
    add: AddConfig = Field(default_factory=AddConfig)
    discovery: DiscoveryConfig = Field(default_factory=DiscoveryConfig)
