"""Built-in skill ids and their categories."""

from __future__ import annotations

from .types import SkillCategory

CORPORATE_SKILLS = ("company-standards", "company-architecture", "company-security")
FRONTEND_SKILLS = (
    "react-patterns",
    "typescript-best-practices",
    "tailwind-4",
    "zod-4",
    "zustand-5",
)
TESTING_SKILLS = ("testing-strategies", "playwright")
AI_SDK_SKILLS = ("ai-sdk-core", "ai-sdk-react", "nextjs-integration")
UTILITIES_SKILLS = ("skill-creator",)

_BUILTIN_CATEGORIES: dict[str, SkillCategory] = {
    skill_id: category
    for category, ids in (
        (SkillCategory.CORPORATE, CORPORATE_SKILLS),
        (SkillCategory.FRONTEND, FRONTEND_SKILLS),
        (SkillCategory.TESTING, TESTING_SKILLS),
        (SkillCategory.AI_SDK, AI_SDK_SKILLS),
        (SkillCategory.UTILITIES, UTILITIES_SKILLS),
    )
    for skill_id in ids
}


def builtin_category(skill_id: str) -> SkillCategory:
    """Category of a built-in id; ids outside the tables are CUSTOM."""
    return _BUILTIN_CATEGORIES.get(skill_id, SkillCategory.CUSTOM)


def is_builtin(skill_id: str) -> bool:
    return skill_id in _BUILTIN_CATEGORIES


def resolve_category(skill_id: str, is_custom: bool) -> SkillCategory:
    if is_custom:
        return SkillCategory.CUSTOM
    return builtin_category(skill_id)


def builtin_skill_ids() -> list[str]:
    return list(_BUILTIN_CATEGORIES)
