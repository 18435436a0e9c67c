"""
Skill models for Skilo.

Defines the SKILL.md frontmatter and the parsed manifest.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Canonical key order used when writing frontmatter back out.
KEY_ORDER = ("name", "description", "license", "compatibility", "metadata", "allowed-tools")

YAML_WIDTH = 4096


class Frontmatter(BaseModel):
    """YAML frontmatter of a SKILL.md file.

    ``name`` and ``description`` are required but may be empty; emptiness
    is reported by validation, not by parsing. Unknown keys are kept so
    that formatting never drops data.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str = Field(..., description="Skill identifier, matches the directory name")
    description: str = Field(..., description="What the skill does and when to use it")
    license: str | None = Field(default=None, description="License identifier or file")
    compatibility: str | None = Field(default=None, description="Environment requirements")
    metadata: dict[str, str] | None = Field(default=None, description="Arbitrary string pairs")
    allowed_tools: str | None = Field(
        default=None,
        alias="allowed-tools",
        description="Space-delimited list of pre-approved tools",
    )

    @field_validator("name", "description", "license", "compatibility", "allowed_tools", mode="before")
    @classmethod
    def _scalar_to_str(cls, value: Any) -> Any:
        if isinstance(value, (bool, int, float)):
            return str(value).lower() if isinstance(value, bool) else str(value)
        return value

    @field_validator("metadata", mode="before")
    @classmethod
    def _metadata_values_to_str(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {
                str(k): (str(v).lower() if isinstance(v, bool) else str(v))
                if isinstance(v, (bool, int, float))
                else v
                for k, v in value.items()
            }
        return value

    def to_dict(self) -> dict[str, Any]:
        """Frontmatter as a dict in canonical key order, without unset fields."""
        dumped = self.model_dump(by_alias=True, exclude_none=True)
        data = {key: dumped.pop(key) for key in KEY_ORDER if key in dumped}
        # unknown keys keep their original relative order
        data.update(dumped)
        return data

    def to_yaml(self, key_order: list[str] | None = None) -> str:
        """Serialize to YAML (no document markers, trailing newline).

        Keys follow the canonical order unless ``key_order`` is given.
        """
        data = self.to_dict()
        if key_order is not None:
            ordered = {key: data.pop(key) for key in key_order if key in data}
            ordered.update(data)
            data = ordered
        return yaml.safe_dump(
            data,
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
            width=YAML_WIDTH,
        )


class Manifest(BaseModel):
    """A parsed SKILL.md file."""

    path: Path = Field(..., description="Path to the SKILL.md file")
    frontmatter: Frontmatter
    frontmatter_raw: str = Field(..., description="Frontmatter text between the markers")
    body: str = Field(..., description="Markdown after the closing marker")
    body_start_line: int = Field(..., description="1-based line where the body region starts")

    @property
    def name(self) -> str:
        return self.frontmatter.name

    @property
    def description(self) -> str:
        return self.frontmatter.description

    @property
    def skill_dir(self) -> Path:
        """Directory that contains the SKILL.md file."""
        return self.path.parent

    def render(self) -> str:
        """Reassemble the file using the original frontmatter text."""
        return f"---\n{self.frontmatter_raw}\n---\n\n{self.body}"
