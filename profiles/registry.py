"""Profile registry with YAML persistence."""

from __future__ import annotations

import os
import tempfile
from contextlib import suppress
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import yaml

from errors import (
    AlreadyExistsError,
    ConfigError,
    NotFoundError,
    PermissionDeniedError,
    StorageError,
)
from utils import get_logger
from utils.paths import get_profiles_path, validate_id

from .types import CreateProfileInput, Profile, ProfileType, UpdateProfileInput

logger = get_logger(__name__)

MAIN_PROFILE_ID = "main"

_HEADER = (
    "# skillbox profiles\n# Managed by `skillbox profile ...`; comments are not preserved.\n\n"
)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class ProfileRegistry:
    """Owns profile identity and the default user profile.

    The file looks like::

        profiles:
          main:
            name: Main Profile
            type: user
            skills: [company-standards]
        default_user_profile: main
    """

    def __init__(self, config_path: str | Path | None = None):
        self.config_path = Path(config_path) if config_path else get_profiles_path()
        self.profiles: dict[str, Profile] = {}
        self.default_user_profile_id: str | None = None
        self._load()

    def _atomic_write(self, content: str) -> None:
        directory = self.config_path.parent
        directory.mkdir(parents=True, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(prefix=".profiles.", suffix=".tmp", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(tmp_path, self.config_path)
        finally:
            with suppress(OSError):
                os.unlink(tmp_path)

    def _load(self) -> None:
        if not self.config_path.exists():
            return

        try:
            with open(self.config_path, encoding="utf-8") as f:
                config = yaml.safe_load(f) or {}
        except OSError as e:
            raise StorageError("read", self.config_path, e) from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid profiles file {self.config_path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Invalid profiles file {self.config_path}: expected a mapping")

        profiles = config.get("profiles") or {}
        if not isinstance(profiles, dict):
            logger.warning("Invalid profiles.yaml format: 'profiles' should be a mapping")
            profiles = {}

        for profile_id, data in profiles.items():
            if not isinstance(profile_id, str) or not profile_id.strip():
                continue
            if not isinstance(data, dict):
                logger.warning(f"Invalid profile config for '{profile_id}', skipping")
                continue
            try:
                self.profiles[profile_id] = Profile.from_dict(profile_id, data)
            except ValueError as e:
                logger.warning(f"Invalid profile config for '{profile_id}', skipping: {e}")

        default = config.get("default_user_profile")
        self.default_user_profile_id = default if isinstance(default, str) else None
        logger.info(f"Loaded {len(self.profiles)} profiles from {self.config_path}")

    def _save(self) -> None:
        config: dict[str, Any] = {
            "profiles": {pid: profile.to_dict() for pid, profile in self.profiles.items()},
            "default_user_profile": self.default_user_profile_id,
        }
        body = yaml.safe_dump(config, sort_keys=False, allow_unicode=True)
        try:
            self._atomic_write(_HEADER + body)
        except OSError as e:
            raise StorageError("write", self.config_path, e) from e

    def _require(self, profile_id: str) -> Profile:
        profile = self.profiles.get(profile_id)
        if profile is None:
            raise NotFoundError(f"Profile '{profile_id}' not found")
        return profile

    def list(self) -> list[Profile]:
        return list(self.profiles.values())

    def get(self, profile_id: str) -> Profile | None:
        return self.profiles.get(profile_id)

    def get_default_user_profile(self) -> Profile | None:
        if not self.default_user_profile_id:
            return None
        profile = self.profiles.get(self.default_user_profile_id)
        if profile is None or profile.profile_type is not ProfileType.USER:
            return None
        return profile

    def create(self, data: CreateProfileInput) -> Profile:
        validate_id(data.id, "profile")
        if data.id in self.profiles:
            raise AlreadyExistsError(f"Profile '{data.id}' already exists")

        now = _now()
        profile = Profile(
            id=data.id,
            name=data.name,
            description=data.description,
            profile_type=data.profile_type,
            skills=list(data.skills),
            created_at=now,
            updated_at=now,
        )
        self.profiles[data.id] = profile
        self._save()
        logger.info(f"Created {profile.profile_type.value} profile '{data.id}'")
        return profile

    def update(self, profile_id: str, data: UpdateProfileInput) -> Profile:
        profile = self._require(profile_id)

        if data.name is not None:
            profile.name = data.name
        if data.description is not None:
            profile.description = data.description
        if data.profile_type is not None:
            profile.profile_type = data.profile_type
            if (
                profile.profile_type is not ProfileType.USER
                and self.default_user_profile_id == profile_id
            ):
                self.default_user_profile_id = None
        if data.skills is not None:
            profile.skills = list(data.skills)
        profile.updated_at = _now()

        self._save()
        return profile

    def assign_skills(self, profile_id: str, skill_ids: list[str]) -> Profile:
        return self.update(profile_id, UpdateProfileInput(skills=skill_ids))

    def delete(self, profile_id: str) -> None:
        self._require(profile_id)
        if profile_id == MAIN_PROFILE_ID:
            raise PermissionDeniedError(f"The '{MAIN_PROFILE_ID}' profile cannot be deleted")

        del self.profiles[profile_id]
        if self.default_user_profile_id == profile_id:
            self.default_user_profile_id = None
        self._save()
        logger.info(f"Deleted profile '{profile_id}'")

    def set_default_user_profile(self, profile_id: str) -> Profile:
        profile = self._require(profile_id)
        if profile.profile_type is not ProfileType.USER:
            raise ConfigError(
                f"Only user profiles can be the default; '{profile_id}' is a project profile"
            )

        self.default_user_profile_id = profile_id
        self._save()
        return profile
