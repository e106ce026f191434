"""Data models for the skill catalog."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any


class SkillCategory(str, Enum):
    CORPORATE = "corporate"
    FRONTEND = "frontend"
    TESTING = "testing"
    AI_SDK = "ai-sdk"
    UTILITIES = "utilities"
    CUSTOM = "custom"

    @property
    def priority(self) -> int:
        """Listing position of the category (corporate first, custom last)."""
        return _CATEGORY_PRIORITY[self]


_CATEGORY_PRIORITY = {category: index for index, category in enumerate(SkillCategory)}


@dataclass(frozen=True)
class SkillFrontmatter:
    name: str
    description: str


@dataclass(frozen=True)
class Skill:
    id: str
    name: str
    description: str
    content: str
    category: SkillCategory
    enabled: bool
    is_custom: bool
    path: Path
    created_at: str | None = None


@dataclass(frozen=True)
class CreateSkillInput:
    id: str
    name: str
    description: str
    content: str


@dataclass(frozen=True)
class UpdateSkillInput:
    """Partial update; fields left as None are not touched."""

    name: str | None = None
    description: str | None = None
    content: str | None = None
    enabled: bool | None = None


@dataclass
class SkillsConfig:
    """Persisted disabled/custom id sets.

    This is the only mutable state of the catalog. It is loaded at the start of
    each store operation and passed explicitly to whatever derives enabled/custom.
    """

    disabled: list[str] = field(default_factory=list)
    custom: list[str] = field(default_factory=list)

    def is_enabled(self, skill_id: str) -> bool:
        return skill_id not in self.disabled

    def is_custom(self, skill_id: str) -> bool:
        return skill_id in self.custom

    def to_dict(self) -> dict[str, list[str]]:
        return {"disabled": list(self.disabled), "custom": list(self.custom)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SkillsConfig:
        disabled = data.get("disabled") or []
        custom = data.get("custom") or []
        if not isinstance(disabled, list) or not isinstance(custom, list):
            raise ValueError("'disabled' and 'custom' must be lists")
        return cls(
            disabled=[str(item) for item in disabled],
            custom=[str(item) for item in custom],
        )
