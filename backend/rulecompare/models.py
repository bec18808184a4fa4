"""
Configuration and rule models.

Pydantic models for comparison settings and rule files, loadable from YAML.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _load_yaml(path: Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top of {path}")
    return data


class ComparisonConfig(BaseModel):
    """Settings for an equivalence check."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    max_variables: Optional[int] = Field(
        default=None,
        ge=1,
        description="Reject comparisons with more distinct variables (2^n assignments)",
    )
    strategy: Literal["recursive", "iterative"] = Field(
        default="recursive",
        description="Truth table traversal",
    )

    @classmethod
    def from_yaml(cls, path: Path) -> "ComparisonConfig":
        """Load configuration from a YAML file. An empty file gives defaults."""
        return cls.model_validate(_load_yaml(Path(path)))


class Rule(BaseModel):
    """A targeting rule: an identifier and its boolean expression."""

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., min_length=1)
    when: str = Field(..., description="Expression such as 'a == 1 && b == 0'")

    @field_validator("when")
    @classmethod
    def validate_when(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Rule expression must not be empty")
        return v


class RuleSet(BaseModel):
    """A collection of rules with the settings used to compare them."""

    config: ComparisonConfig = Field(default_factory=ComparisonConfig)
    rules: List[Rule] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_unique_ids(self) -> "RuleSet":
        seen = set()
        for rule in self.rules:
            if rule.id in seen:
                raise ValueError(f"Duplicate rule id: {rule.id}")
            seen.add(rule.id)
        return self

    @classmethod
    def from_yaml(cls, path: Path) -> "RuleSet":
        """
        Load a rule file.

        Expected layout:
            config:
              max_variables: 12
            rules:
              - id: promo-eu
                when: "country.eu == 1 && opt_in == 1"
        """
        return cls.model_validate(_load_yaml(Path(path)))
