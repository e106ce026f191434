"""Install, refresh and remove a profile's skills at a target location."""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path

import aiofiles
import aiofiles.os

from catalog import SkillStore, generate_skill_document
from catalog.frontmatter import write_text
from errors import NotFoundError, SkillboxError, StorageError
from utils import get_logger
from utils.paths import (
    SKILL_FILENAME,
    get_user_agent_dir,
    get_user_skills_dir,
    project_agent_dir,
    project_descriptor_dir,
    project_instructions_path,
    project_skills_dir,
)

from .registry import ProfileRegistry
from .scaffold import ensure_project_scaffold, is_generated_instructions
from .types import (
    InstallResult,
    Profile,
    ProfileType,
    SkillInstallError,
    UninstallResult,
)

logger = get_logger(__name__)


async def remove_tree(path: Path) -> None:
    if not await aiofiles.os.path.exists(path):
        return
    try:
        await asyncio.to_thread(shutil.rmtree, path)
    except OSError as e:
        raise StorageError("remove", path, e) from e


async def remove_file(path: Path) -> None:
    try:
        await aiofiles.os.remove(path)
    except OSError as e:
        raise StorageError("remove", path, e) from e


class ProfileInstaller:
    """Materialize profiles at their install target.

    User profiles always go to the user-global skills directory. Project
    profiles go to a caller-supplied directory (default: the current working
    directory) and get a plugin scaffold the first time.

    Each skill is its own unit of work: a skill that cannot be read or written
    is recorded in InstallResult.skills_failed and the rest still install.
    """

    def __init__(
        self,
        registry: ProfileRegistry | None = None,
        store: SkillStore | None = None,
    ) -> None:
        self.registry = registry if registry is not None else ProfileRegistry()
        self.store = store if store is not None else SkillStore()

    def _require_profile(self, profile_id: str) -> Profile:
        profile = self.registry.get(profile_id)
        if profile is None:
            raise NotFoundError(f"Profile '{profile_id}' not found")
        return profile

    async def resolve_target(
        self, profile: Profile, target: str | Path | None
    ) -> tuple[Path, Path, list[str]]:
        """Work out where a profile installs.

        Returns:
            (install root, skills directory, warnings)
        """
        warnings: list[str] = []

        if profile.profile_type is ProfileType.USER:
            if target is not None:
                warning = (
                    f"User profiles ignore the target path and install to {get_user_agent_dir()}"
                )
                logger.warning(f"{warning} (ignored: {target})")
                warnings.append(warning)
            return get_user_agent_dir(), get_user_skills_dir(), warnings

        root = Path(target) if target is not None else Path.cwd()
        if not await aiofiles.os.path.isdir(root):
            raise NotFoundError(f"Target path does not exist: {root}")
        return root, project_skills_dir(root), warnings

    async def install(self, profile_id: str, target: str | Path | None = None) -> InstallResult:
        profile = self._require_profile(profile_id)
        root, skills_dir, warnings = await self.resolve_target(profile, target)
        result = InstallResult(target_path=root, warnings=warnings)

        if not profile.skills:
            self._warn_empty(profile, result)
            return result

        if profile.profile_type is ProfileType.PROJECT:
            await ensure_project_scaffold(root, profile)

        await self._install_skills(profile, skills_dir, result)
        logger.info(
            f"Installed profile '{profile.id}' to {root}: "
            f"{len(result.skills_installed)} ok, {len(result.skills_failed)} failed"
        )
        return result

    async def update(self, profile_id: str, target: str | Path | None = None) -> InstallResult:
        """Rewrite every skill of an installed profile with its current content.

        This is a full overwrite, not a diff, and the scaffold is left alone.
        """
        profile = self._require_profile(profile_id)
        root, skills_dir, warnings = await self.resolve_target(profile, target)
        result = InstallResult(target_path=root, warnings=warnings)

        if not profile.skills:
            self._warn_empty(profile, result)
            return result

        await self._install_skills(profile, skills_dir, result)
        logger.info(
            f"Updated profile '{profile.id}' at {root}: "
            f"{len(result.skills_installed)} ok, {len(result.skills_failed)} failed"
        )
        return result

    async def uninstall(self, target: str | Path) -> UninstallResult:
        """Remove the artifacts a project install creates, and nothing else.

        The instructions file is only removed when it was generated by an
        install, and the agent directory only when nothing else is left in it.
        """
        root = Path(target)
        if not await aiofiles.os.path.exists(root):
            raise NotFoundError(f"Target path does not exist: {root}")

        result = UninstallResult(target_path=root)
        skills_dir = project_skills_dir(root)
        descriptor_dir = project_descriptor_dir(root)
        if not (
            await aiofiles.os.path.exists(skills_dir)
            or await aiofiles.os.path.exists(descriptor_dir)
        ):
            logger.info(f"No profile installation found at {root}")
            return result

        for path in (skills_dir, descriptor_dir):
            if await aiofiles.os.path.exists(path):
                await remove_tree(path)
                result.removed.append(path)

        instructions_path = project_instructions_path(root)
        if await aiofiles.os.path.isfile(instructions_path):
            try:
                async with aiofiles.open(
                    instructions_path, encoding="utf-8", errors="replace"
                ) as f:
                    text = await f.read()
            except OSError as e:
                raise StorageError("read", instructions_path, e) from e
            if is_generated_instructions(text):
                await remove_file(instructions_path)
                result.removed.append(instructions_path)
            else:
                logger.info(f"Keeping {instructions_path}: not generated by skillbox")

        agent_dir = project_agent_dir(root)
        if await aiofiles.os.path.isdir(agent_dir) and not await aiofiles.os.listdir(agent_dir):
            try:
                await aiofiles.os.rmdir(agent_dir)
            except OSError as e:
                raise StorageError("remove", agent_dir, e) from e
            result.removed.append(agent_dir)

        logger.info(f"Uninstalled from {root}: removed {len(result.removed)} artifacts")
        return result

    def _warn_empty(self, profile: Profile, result: InstallResult) -> None:
        warning = f"Profile '{profile.id}' has no skills assigned; nothing was installed"
        logger.warning(warning)
        result.warnings.append(warning)

    async def _install_skills(
        self, profile: Profile, skills_dir: Path, result: InstallResult
    ) -> None:
        for skill_id in dict.fromkeys(profile.skills):
            try:
                await self._install_skill(skill_id, skills_dir)
            except (SkillboxError, OSError, ValueError) as e:
                logger.warning(f"Failed to install skill '{skill_id}': {e}")
                result.skills_failed.append(SkillInstallError(skill_id=skill_id, error=str(e)))
            else:
                result.skills_installed.append(skill_id)

    async def _install_skill(self, skill_id: str, skills_dir: Path) -> None:
        skill = await self.store.get(skill_id)
        if skill is None:
            raise NotFoundError(f"Skill '{skill_id}' not found")

        dest = skills_dir / skill_id / SKILL_FILENAME
        try:
            document = generate_skill_document(skill.name, skill.description, skill.content)
            await write_text(dest, document)
        except OSError as e:
            raise StorageError("write", dest, e) from e
