"""Configuration management for skillbox."""

import os

# Define path constants directly to avoid circular imports with utils
# (utils.paths reads Config for its optional directory overrides)
_CONFIG_DIR_ENV = "SKILLBOX_CONFIG_DIR"
_DEFAULT_RUNTIME_DIR = os.path.join("~", ".skillbox")

# Default configuration template
_DEFAULT_CONFIG = """\
# skillbox configuration

# Where the skill catalog lives (skills/ and .skills-config.json).
# Empty means <config dir>/plugin
PLUGIN_DIR=

# User-global agent directory that user profiles install into.
# Empty means ~/.claude
AGENT_DIR=

# Values written into generated plugin descriptors
PLUGIN_AUTHOR=skillbox
PLUGIN_VERSION=1.0.0

# Output
LOG_LEVEL=INFO
TUI_THEME=dark
"""


def _config_file() -> str:
    runtime_dir = os.environ.get(_CONFIG_DIR_ENV) or os.path.expanduser(_DEFAULT_RUNTIME_DIR)
    return os.path.join(runtime_dir, "config")


def _load_config(path: str) -> dict[str, str]:
    """Parse a KEY=VALUE config file, skipping comments and blank lines."""
    cfg: dict[str, str] = {}
    if not os.path.isfile(path):
        return cfg
    with open(path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue
            key, _, value = line.partition("=")
            # Strip inline comments (# ...) from the value
            if "#" in value:
                value = value[: value.index("#")]
            cfg[key.strip()] = value.strip()
    return cfg


def ensure_config() -> str:
    """Ensure the config file exists, create it with defaults if not.

    Returns:
        Path to the config file
    """
    path = _config_file()
    if not os.path.exists(path):
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(_DEFAULT_CONFIG)
    return path


_cfg = _load_config(_config_file())


class Config:
    """Configuration for skillbox.

    All configuration is centralized here. Access config values directly via Config.XXX.
    Directory overrides are optional; environment variables read by utils.paths win over them.
    """

    # Directory overrides
    PLUGIN_DIR = _cfg.get("PLUGIN_DIR") or None
    AGENT_DIR = _cfg.get("AGENT_DIR") or None

    # Plugin descriptor defaults for project installs
    PLUGIN_AUTHOR = _cfg.get("PLUGIN_AUTHOR") or "skillbox"
    PLUGIN_VERSION = _cfg.get("PLUGIN_VERSION") or "1.0.0"

    # Logging Configuration
    # Note: Logging is only written to disk with --verbose
    LOG_LEVEL = (_cfg.get("LOG_LEVEL") or "INFO").upper()

    # Terminal output
    TUI_THEME = _cfg.get("TUI_THEME") or "dark"  # "dark" or "light"

    @classmethod
    def validate(cls):
        """Validate configuration.

        Raises:
            ValueError: If a configured value is not supported
        """
        if cls.TUI_THEME not in {"dark", "light"}:
            raise ValueError(
                f"TUI_THEME '{cls.TUI_THEME}' is not supported. Use 'dark' or 'light'."
            )
