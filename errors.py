"""Exception hierarchy for skillbox."""

from __future__ import annotations

from pathlib import Path


class SkillboxError(Exception):
    """Base class for all skillbox errors."""


class ConfigError(SkillboxError):
    """Configuration or invariant violation."""


class NotFoundError(ConfigError):
    """A profile, skill or target path is absent when it is required."""


class AlreadyExistsError(ConfigError):
    """An entity with the same id already exists."""


class PermissionDeniedError(ConfigError):
    """The operation is not allowed on this entity (e.g. deleting a built-in skill)."""


class MalformedDocumentError(ConfigError):
    """A skill document is missing its front matter or it cannot be decoded."""


class StorageError(SkillboxError):
    """An underlying filesystem operation failed."""

    def __init__(self, action: str, path: Path | str, cause: OSError):
        self.action = action
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Failed to {action} {self.path}: {cause.strerror or cause}")
