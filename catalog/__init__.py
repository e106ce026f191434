"""Skill catalog: SKILL.md documents plus their enabled/custom state."""

from .categories import builtin_category, builtin_skill_ids, is_builtin
from .frontmatter import generate_skill_document, parse_skill_document
from .store import SkillStore, validate_skill_id
from .types import (
    CreateSkillInput,
    Skill,
    SkillCategory,
    SkillFrontmatter,
    SkillsConfig,
    UpdateSkillInput,
)

__all__ = [
    "CreateSkillInput",
    "Skill",
    "SkillCategory",
    "SkillFrontmatter",
    "SkillStore",
    "SkillsConfig",
    "UpdateSkillInput",
    "builtin_category",
    "builtin_skill_ids",
    "generate_skill_document",
    "is_builtin",
    "parse_skill_document",
    "validate_skill_id",
]
