"""Profiles: named bundles of skills and the installer that materializes them."""

from .installer import ProfileInstaller
from .registry import MAIN_PROFILE_ID, ProfileRegistry
from .scaffold import (
    GENERATED_MARKER,
    PluginAuthor,
    PluginDescriptor,
    ensure_project_scaffold,
    read_descriptor,
    render_instructions,
    write_descriptor,
)
from .types import (
    CreateProfileInput,
    InstallResult,
    Profile,
    ProfileType,
    SkillInstallError,
    UninstallResult,
    UpdateProfileInput,
)

__all__ = [
    "CreateProfileInput",
    "GENERATED_MARKER",
    "InstallResult",
    "MAIN_PROFILE_ID",
    "PluginAuthor",
    "PluginDescriptor",
    "Profile",
    "ProfileInstaller",
    "ProfileRegistry",
    "ProfileType",
    "SkillInstallError",
    "UninstallResult",
    "UpdateProfileInput",
    "ensure_project_scaffold",
    "read_descriptor",
    "render_instructions",
    "write_descriptor",
]
