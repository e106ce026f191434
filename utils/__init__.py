"""Utility modules for skillbox."""

from . import terminal_ui
from .logger import get_log_file_path, get_logger, setup_logger

# Note: Path functions are NOT exported here to keep imports explicit.
# Import directly from utils.paths when needed:
#   from utils.paths import get_skills_dir, get_user_skills_dir, etc.

__all__ = [
    "setup_logger",
    "get_logger",
    "get_log_file_path",
    "terminal_ui",
]
