"""Filesystem locations used by skillbox.

Runtime data lives under ~/.skillbox/ unless SKILLBOX_CONFIG_DIR says otherwise:
- config: Configuration file (created by the CLI on first run)
- profiles.yaml: Profile definitions and the default user profile
- plugin/skills/: The skill catalog, one directory per skill
- plugin/.skills-config.json: Disabled and custom skill ids
- logs/: Log files (only created with --verbose)

User profiles install into ~/.claude/skills/. Project profiles install into a
plugin scaffold rooted at the project directory.

Everything here is a pure function of the environment except ensure_runtime_dirs().
"""

import os
import re
from pathlib import Path

from config import Config
from errors import ConfigError

CONFIG_DIR_ENV = "SKILLBOX_CONFIG_DIR"
PLUGIN_DIR_ENV = "SKILLBOX_PLUGIN_DIR"
AGENT_DIR_ENV = "SKILLBOX_AGENT_DIR"

SKILL_FILENAME = "SKILL.md"
SKILLS_CONFIG_FILENAME = ".skills-config.json"
DESCRIPTOR_DIRNAME = ".claude-plugin"
DESCRIPTOR_FILENAME = "plugin.json"
AGENT_DIRNAME = ".claude"
INSTRUCTIONS_FILENAME = "CLAUDE.md"


def _expand(value: str) -> Path:
    expanded = os.path.expanduser(value)
    if expanded.startswith("~"):
        raise ConfigError(f"Cannot resolve home directory for '{value}'")
    return Path(expanded)


def get_home_dir() -> Path:
    """Get the current user's home directory.

    Raises:
        ConfigError: If the home directory cannot be determined
    """
    return _expand("~")


def get_config_dir() -> Path:
    """Get the runtime directory path.

    Returns:
        $SKILLBOX_CONFIG_DIR, or ~/.skillbox
    """
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return _expand(override)
    return get_home_dir() / ".skillbox"


def get_log_dir() -> Path:
    return get_config_dir() / "logs"


def get_profiles_path() -> Path:
    return get_config_dir() / "profiles.yaml"


def get_plugin_dir() -> Path:
    """Get the plugin root that holds the skill catalog.

    Returns:
        $SKILLBOX_PLUGIN_DIR, else PLUGIN_DIR from the config file, else <config dir>/plugin
    """
    override = os.environ.get(PLUGIN_DIR_ENV) or Config.PLUGIN_DIR
    if override:
        return _expand(override)
    return get_config_dir() / "plugin"


def get_skills_dir() -> Path:
    return get_plugin_dir() / "skills"


def get_skills_config_path() -> Path:
    return get_plugin_dir() / SKILLS_CONFIG_FILENAME


def get_user_agent_dir() -> Path:
    """Get the user-global agent directory.

    Returns:
        $SKILLBOX_AGENT_DIR, else AGENT_DIR from the config file, else ~/.claude
    """
    override = os.environ.get(AGENT_DIR_ENV) or Config.AGENT_DIR
    if override:
        return _expand(override)
    return get_home_dir() / AGENT_DIRNAME


def get_user_skills_dir() -> Path:
    """Get the fixed install location for user profiles."""
    return get_user_agent_dir() / "skills"


def project_agent_dir(target: Path) -> Path:
    return target / AGENT_DIRNAME


def project_skills_dir(target: Path) -> Path:
    return project_agent_dir(target) / "skills"


def project_descriptor_dir(target: Path) -> Path:
    return target / DESCRIPTOR_DIRNAME


def project_descriptor_path(target: Path) -> Path:
    return project_descriptor_dir(target) / DESCRIPTOR_FILENAME


def project_instructions_path(target: Path) -> Path:
    return target / INSTRUCTIONS_FILENAME


def ensure_runtime_dirs(create_logs: bool = False) -> None:
    """Ensure runtime directories exist.

    Creates:
    - <config dir>/
    - <plugin dir>/skills/
    - <config dir>/logs/ (only if create_logs=True)

    Args:
        create_logs: Whether to create the logs directory (for --verbose mode)
    """
    get_config_dir().mkdir(parents=True, exist_ok=True)
    get_skills_dir().mkdir(parents=True, exist_ok=True)

    if create_logs:
        get_log_dir().mkdir(parents=True, exist_ok=True)


_SAFE_ID_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


def validate_id(value: str, kind: str = "skill") -> str:
    """Return the id if it can be used as a directory name, raise ConfigError otherwise."""
    if not _SAFE_ID_RE.match(value or ""):
        raise ConfigError(
            f"Invalid {kind} id '{value}': use letters, digits, '.', '_' or '-' "
            "and start with a letter or digit"
        )
    return value
