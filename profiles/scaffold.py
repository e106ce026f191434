"""Plugin scaffold written into project targets."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import aiofiles
import aiofiles.os

from config import Config
from errors import ConfigError, StorageError
from utils import get_logger
from utils.paths import (
    project_descriptor_path,
    project_instructions_path,
    project_skills_dir,
)

from .types import Profile

logger = get_logger(__name__)

GENERATED_MARKER = "<!-- generated by skillbox -->"


@dataclass
class PluginAuthor:
    name: str


@dataclass
class PluginDescriptor:
    name: str
    description: str
    version: str = "1.0.0"
    author: PluginAuthor = field(default_factory=lambda: PluginAuthor(name="skillbox"))

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "version": self.version,
            "author": {"name": self.author.name},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PluginDescriptor:
        author = data.get("author") or {}
        return cls(
            name=str(data["name"]),
            description=str(data.get("description") or ""),
            version=str(data.get("version") or "1.0.0"),
            author=PluginAuthor(name=str(author.get("name") or "")),
        )

    @classmethod
    def for_profile(cls, profile: Profile) -> PluginDescriptor:
        return cls(
            name=profile.id,
            description=profile.description or f"{profile.name} skills",
            version=Config.PLUGIN_VERSION,
            author=PluginAuthor(name=Config.PLUGIN_AUTHOR),
        )


async def read_descriptor(path: Path) -> PluginDescriptor:
    try:
        async with aiofiles.open(path, encoding="utf-8") as f:
            content = await f.read()
    except OSError as e:
        raise StorageError("read", path, e) from e
    try:
        return PluginDescriptor.from_dict(json.loads(content))
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        raise ConfigError(f"Invalid plugin descriptor {path}: {e}") from e


async def write_descriptor(path: Path, descriptor: PluginDescriptor) -> None:
    try:
        await aiofiles.os.makedirs(path.parent, exist_ok=True)
        async with aiofiles.open(path, "w", encoding="utf-8") as f:
            await f.write(json.dumps(descriptor.to_dict(), indent=2) + "\n")
    except OSError as e:
        raise StorageError("write", path, e) from e


def render_instructions(profile: Profile) -> str:
    lines = [GENERATED_MARKER, f"# {profile.name}", ""]
    if profile.description:
        lines += [profile.description, ""]
    lines.append("## Skills")
    lines.append("")
    lines.append("Skills for this project live in `.claude/skills/`:")
    lines.append("")
    lines += [f"- {skill_id}" for skill_id in profile.skills]
    return "\n".join(lines) + "\n"


def is_generated_instructions(text: str) -> bool:
    return text.lstrip().startswith(GENERATED_MARKER)


async def ensure_project_scaffold(target: Path, profile: Profile) -> list[Path]:
    """Create whatever part of the plugin scaffold is missing at target.

    Existing files are never overwritten.

    Returns:
        The artifacts created by this call
    """
    created: list[Path] = []

    descriptor_path = project_descriptor_path(target)
    if not await aiofiles.os.path.exists(descriptor_path):
        await write_descriptor(descriptor_path, PluginDescriptor.for_profile(profile))
        created.append(descriptor_path)

    skills_dir = project_skills_dir(target)
    if not await aiofiles.os.path.exists(skills_dir):
        try:
            await aiofiles.os.makedirs(skills_dir, exist_ok=True)
        except OSError as e:
            raise StorageError("create", skills_dir, e) from e
        created.append(skills_dir)
    elif not await aiofiles.os.path.isdir(skills_dir):
        raise ConfigError(f"{skills_dir} exists but is not a directory")

    instructions_path = project_instructions_path(target)
    if not await aiofiles.os.path.exists(instructions_path):
        try:
            async with aiofiles.open(instructions_path, "w", encoding="utf-8") as f:
                await f.write(render_instructions(profile))
        except OSError as e:
            raise StorageError("write", instructions_path, e) from e
        created.append(instructions_path)

    if created:
        logger.info(f"Scaffold at {target}: created {', '.join(p.name for p in created)}")
    return created
