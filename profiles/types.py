"""Data models for profiles and install results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any


class ProfileType(str, Enum):
    USER = "user"  # installs into the user-global agent directory
    PROJECT = "project"  # installs as a plugin scaffold inside a project


@dataclass
class Profile:
    """An ordered bundle of skill ids that can be installed together."""

    id: str
    name: str
    profile_type: ProfileType
    description: str = ""
    skills: list[str] = field(default_factory=list)
    created_at: str = ""
    updated_at: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "type": self.profile_type.value,
            "skills": list(self.skills),
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, profile_id: str, data: dict[str, Any]) -> Profile:
        skills = data.get("skills") or []
        if not isinstance(skills, list):
            raise ValueError("'skills' must be a list")
        return cls(
            id=profile_id,
            name=str(data.get("name") or profile_id),
            description=str(data.get("description") or ""),
            profile_type=ProfileType(data.get("type", ProfileType.PROJECT.value)),
            skills=[str(s) for s in skills],
            created_at=str(data.get("created_at") or ""),
            updated_at=str(data.get("updated_at") or ""),
        )


@dataclass(frozen=True)
class CreateProfileInput:
    id: str
    name: str
    profile_type: ProfileType
    description: str = ""
    skills: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class UpdateProfileInput:
    name: str | None = None
    description: str | None = None
    profile_type: ProfileType | None = None
    skills: list[str] | None = None


@dataclass(frozen=True)
class SkillInstallError:
    skill_id: str
    error: str


@dataclass
class InstallResult:
    """Outcome of installing or updating a profile.

    Every skill id of the profile ends up in exactly one of skills_installed
    or skills_failed, in profile order.
    """

    target_path: Path
    skills_installed: list[str] = field(default_factory=list)
    skills_failed: list[SkillInstallError] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.skills_failed

    @property
    def partial(self) -> bool:
        return bool(self.skills_installed) and bool(self.skills_failed)

    @property
    def nothing_to_do(self) -> bool:
        return not self.skills_installed and not self.skills_failed


@dataclass
class UninstallResult:
    target_path: Path
    removed: list[Path] = field(default_factory=list)

    @property
    def nothing_to_do(self) -> bool:
        return not self.removed
