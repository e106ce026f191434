"""On-disk skill catalog."""

from __future__ import annotations

import asyncio
import json
import os
import shutil
from datetime import datetime, timezone
from pathlib import Path

import aiofiles
import aiofiles.os

from errors import (
    AlreadyExistsError,
    ConfigError,
    MalformedDocumentError,
    NotFoundError,
    PermissionDeniedError,
    SkillboxError,
    StorageError,
)
from utils import get_logger
from utils.paths import SKILL_FILENAME, get_skills_config_path, get_skills_dir, validate_id

from .categories import resolve_category
from .frontmatter import (
    generate_skill_document,
    list_skill_dirs,
    parse_skill_document,
    read_text,
    write_text,
)
from .types import CreateSkillInput, Skill, SkillsConfig, UpdateSkillInput

logger = get_logger(__name__)


def validate_skill_id(skill_id: str) -> str:
    return validate_id(skill_id, "skill")


def _created_at(path: Path) -> str | None:
    try:
        stat = path.stat()
    except OSError:
        return None
    timestamp = getattr(stat, "st_birthtime", None) or stat.st_ctime
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).isoformat()


class SkillStore:
    """Create, read, update and delete skills under the skills directory.

    Skill documents only hold name, description and body. Enabled and custom
    state comes from the sidecar SkillsConfig, which every operation loads
    fresh and saves back when it changes something.
    """

    def __init__(self, skills_dir: Path | None = None, config_path: Path | None = None) -> None:
        self.skills_dir = Path(skills_dir) if skills_dir else get_skills_dir()
        self.config_path = Path(config_path) if config_path else get_skills_config_path()

    # -- sidecar -----------------------------------------------------------

    async def load_config(self) -> SkillsConfig:
        if not await aiofiles.os.path.exists(self.config_path):
            return SkillsConfig()
        try:
            text = await read_text(self.config_path)
        except OSError as e:
            raise StorageError("read", self.config_path, e) from e
        try:
            data = json.loads(text) if text.strip() else {}
            if not isinstance(data, dict):
                raise ValueError("expected a JSON object")
            return SkillsConfig.from_dict(data)
        except ValueError as e:
            raise ConfigError(f"Invalid skills config {self.config_path}: {e}") from e

    async def save_config(self, config: SkillsConfig) -> None:
        tmp_path = self.config_path.with_name(self.config_path.name + ".tmp")
        content = json.dumps(config.to_dict(), indent=2)
        try:
            await aiofiles.os.makedirs(self.config_path.parent, exist_ok=True)
            async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
                await f.write(content)
            await asyncio.to_thread(os.replace, tmp_path, self.config_path)
        except OSError as e:
            raise StorageError("write", self.config_path, e) from e

    # -- helpers -----------------------------------------------------------

    def _skill_dir(self, skill_id: str) -> Path:
        return self.skills_dir / validate_skill_id(skill_id)

    async def _write_document(
        self, skill_dir: Path, name: str, description: str, body: str
    ) -> None:
        skill_file = skill_dir / SKILL_FILENAME
        try:
            await write_text(skill_file, generate_skill_document(name, description, body))
        except OSError as e:
            raise StorageError("write", skill_file, e) from e

    async def _load_from_dir(self, skill_dir: Path, config: SkillsConfig) -> Skill:
        skill_file = skill_dir / SKILL_FILENAME
        if not await aiofiles.os.path.isfile(skill_file):
            raise MalformedDocumentError(f"{SKILL_FILENAME} not found in {skill_dir}")

        try:
            text = await read_text(skill_file)
        except UnicodeDecodeError as e:
            raise MalformedDocumentError(f"{skill_file} is not valid UTF-8") from e
        except OSError as e:
            raise StorageError("read", skill_file, e) from e

        frontmatter, body = parse_skill_document(text)

        skill_id = skill_dir.name
        is_custom = config.is_custom(skill_id)
        return Skill(
            id=skill_id,
            name=frontmatter.name,
            description=frontmatter.description,
            content=body,
            category=resolve_category(skill_id, is_custom),
            enabled=config.is_enabled(skill_id),
            is_custom=is_custom,
            path=skill_file,
            created_at=_created_at(skill_file) if is_custom else None,
        )

    async def _require_dir(self, skill_id: str) -> Path:
        skill_dir = self._skill_dir(skill_id)
        if not await aiofiles.os.path.isdir(skill_dir):
            raise NotFoundError(f"Skill '{skill_id}' not found")
        return skill_dir

    # -- queries -----------------------------------------------------------

    async def list(self) -> list[Skill]:
        """List every loadable skill, corporate first, custom last, then by name.

        Directories whose document is missing or malformed are left out.
        """
        config = await self.load_config()
        skills: list[Skill] = []
        for skill_dir in await list_skill_dirs(self.skills_dir):
            try:
                skills.append(await self._load_from_dir(skill_dir, config))
            except SkillboxError as e:
                logger.debug(f"Skipping {skill_dir}: {e}")

        skills.sort(key=lambda s: (s.category.priority, s.name))
        logger.info(f"Loaded {len(skills)} skills from {self.skills_dir}")
        return skills

    async def get(self, skill_id: str) -> Skill | None:
        skill_dir = self._skill_dir(skill_id)
        if not await aiofiles.os.path.exists(skill_dir):
            return None
        config = await self.load_config()
        return await self._load_from_dir(skill_dir, config)

    # -- mutations ---------------------------------------------------------

    async def create(self, data: CreateSkillInput) -> Skill:
        """Create a custom skill.

        The folder and document are written before the id is registered as
        custom, and the two writes are not transactional. A crash in between
        leaves a folder that is listed but not marked custom, so it cannot be
        deleted. Nothing reconciles it.
        """
        skill_dir = self._skill_dir(data.id)
        if await aiofiles.os.path.exists(skill_dir):
            raise AlreadyExistsError(f"Skill '{data.id}' already exists")

        await self._write_document(skill_dir, data.name, data.description, data.content)

        config = await self.load_config()
        if data.id not in config.custom:
            config.custom.append(data.id)
        await self.save_config(config)

        logger.info(f"Created custom skill '{data.id}' at {skill_dir}")
        return await self._load_from_dir(skill_dir, config)

    async def update(self, skill_id: str, data: UpdateSkillInput) -> Skill:
        skill_dir = await self._require_dir(skill_id)

        config = await self.load_config()
        skill = await self._load_from_dir(skill_dir, config)

        await self._write_document(
            skill_dir,
            data.name if data.name is not None else skill.name,
            data.description if data.description is not None else skill.description,
            data.content if data.content is not None else skill.content,
        )

        if data.enabled is not None:
            await self.toggle(skill_id, data.enabled)
            config = await self.load_config()

        logger.info(f"Updated skill '{skill_id}'")
        return await self._load_from_dir(skill_dir, config)

    async def toggle(self, skill_id: str, enabled: bool) -> None:
        await self._require_dir(skill_id)

        config = await self.load_config()
        if enabled:
            config.disabled = [s for s in config.disabled if s != skill_id]
        elif skill_id not in config.disabled:
            config.disabled.append(skill_id)
        await self.save_config(config)

        logger.info(f"Skill '{skill_id}' {'enabled' if enabled else 'disabled'}")

    async def delete(self, skill_id: str) -> None:
        config = await self.load_config()
        if not config.is_custom(skill_id):
            raise PermissionDeniedError(
                f"Cannot delete built-in skill '{skill_id}'. You can only disable it."
            )

        skill_dir = await self._require_dir(skill_id)
        try:
            await asyncio.to_thread(shutil.rmtree, skill_dir)
        except OSError as e:
            raise StorageError("remove", skill_dir, e) from e

        config.custom = [s for s in config.custom if s != skill_id]
        config.disabled = [s for s in config.disabled if s != skill_id]
        await self.save_config(config)

        logger.info(f"Deleted custom skill '{skill_id}'")
