"""Terminal UI utilities using Rich library for beautiful output.

This module provides a unified interface for terminal output, integrating
with the TUI theme system for consistent styling.
"""

from typing import Any, Dict, Iterable, Optional

from rich import box
from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from config import Config
from utils.tui.theme import Theme, set_theme

# Initialize theme from config
set_theme(Config.TUI_THEME if Config.TUI_THEME in {"dark", "light"} else "dark")

# Global console instance with theme support
console = Console(theme=Theme.get_rich_theme())


def _get_colors():
    """Get current theme colors."""
    return Theme.get_colors()


def print_header(title: str, subtitle: Optional[str] = None) -> None:
    """Print a formatted header panel.

    Args:
        title: Main title text
        subtitle: Optional subtitle text
    """
    colors = _get_colors()
    content = f"[bold {colors.primary}]{title}[/bold {colors.primary}]"
    if subtitle:
        content += f"\n[{colors.text_secondary}]{subtitle}[/{colors.text_secondary}]"

    console.print(Panel(content, border_style=colors.primary, box=box.DOUBLE, padding=(0, 2)))


def print_section(title: str) -> None:
    colors = _get_colors()
    console.print()
    console.print(f"[bold {colors.secondary}]{title}[/bold {colors.secondary}]")


def print_config(config: Dict[str, Any]) -> None:
    """Print configuration in a formatted table.

    Args:
        config: Dictionary of configuration key-value pairs
    """
    colors = _get_colors()
    table = Table(show_header=False, box=box.SIMPLE, border_style=colors.text_muted, padding=(0, 2))
    table.add_column("Key", style=f"{colors.primary} bold")
    table.add_column("Value", style=colors.success)

    for key, value in config.items():
        table.add_row(key, str(value))

    console.print(table)


def print_skills_table(skills: Iterable[Any]) -> None:
    """Print skills grouped by category order.

    Args:
        skills: Skill objects (already sorted by the store)
    """
    colors = _get_colors()
    table = Table(
        show_header=True,
        header_style=f"bold {colors.primary}",
        box=box.ROUNDED,
        border_style=colors.text_muted,
        padding=(0, 1),
    )
    table.add_column("ID", style=colors.primary)
    table.add_column("Name")
    table.add_column("Category", style=colors.secondary)
    table.add_column("Enabled", justify="center")
    table.add_column("Description", style=colors.text_secondary, overflow="fold")

    for skill in skills:
        enabled = (
            f"[{colors.success}]✓[/{colors.success}]"
            if skill.enabled
            else f"[{colors.error}]✗[/{colors.error}]"
        )
        category = skill.category.value + (" *" if skill.is_custom else "")
        table.add_row(skill.id, skill.name, category, enabled, skill.description)

    console.print(table)


def print_skill(skill: Any) -> None:
    """Print one skill's metadata followed by its markdown body."""
    info = {
        "ID": skill.id,
        "Name": skill.name,
        "Description": skill.description,
        "Category": skill.category.value,
        "Enabled": "yes" if skill.enabled else "no",
        "Custom": "yes" if skill.is_custom else "no",
        "Path": skill.path,
    }
    if skill.created_at:
        info["Created"] = skill.created_at
    print_config(info)
    print_divider()
    print_markdown(skill.content)


def print_profiles(profiles: Iterable[Any], default_id: Optional[str] = None) -> None:
    colors = _get_colors()
    for profile in profiles:
        type_label = escape(f"[{profile.profile_type.value}]")
        badge = f"[{colors.text_muted}]{type_label}[/{colors.text_muted}]"
        default = ""
        if profile.id == default_id:
            default = f" [{colors.success}](default)[/{colors.success}]"
        bullet = f"[{colors.primary}]•[/{colors.primary}]"
        console.print()
        console.print(f"  {bullet} [bold]{escape(profile.name)}[/bold] {badge}{default}")
        console.print(f"    ID: {profile.id}")
        console.print(f"    Skills: {len(profile.skills)}")
        if profile.description:
            muted = colors.text_secondary
            console.print(f"    [{muted}]{profile.description}[/{muted}]")
    console.print()


def print_profile(profile: Any, is_default: bool = False) -> None:
    print_config(
        {
            "ID": profile.id,
            "Name": profile.name,
            "Type": profile.profile_type.value + (" (default)" if is_default else ""),
            "Description": profile.description,
            "Created": profile.created_at,
            "Updated": profile.updated_at,
        }
    )
    if not profile.skills:
        print_info("No skills assigned to this profile.")
        return
    print_section("Assigned Skills")
    for skill_id in profile.skills:
        console.print(f"  • {skill_id}")


def print_install_result(result: Any, title: str = "Skills Installed") -> None:
    """Print what an install/update did, including per-skill failures.

    Args:
        result: InstallResult
        title: Heading for the successful skills
    """
    colors = _get_colors()
    for warning in result.warnings:
        print_warning(warning)

    if result.skills_installed:
        print_section(title)
        for skill_id in result.skills_installed:
            console.print(f"  [{colors.success}]✓[/{colors.success}] {skill_id}")

    if result.skills_failed:
        print_section("Failed Skills")
        for failure in result.skills_failed:
            console.print(
                f"  [{colors.error}]✗[/{colors.error}] {failure.skill_id} - {failure.error}"
            )


def print_error(message: str, title: str = "Error") -> None:
    """Print an error message.

    Args:
        message: Error message
        title: Error title (default: "Error")
    """
    colors = _get_colors()
    console.print(
        Panel(
            f"[{colors.error}]{message}[/{colors.error}]",
            title=f"[bold {colors.error}]{title}[/bold {colors.error}]",
            border_style=colors.error,
            box=box.ROUNDED,
        )
    )


def print_warning(message: str) -> None:
    """Print a warning message.

    Args:
        message: Warning message
    """
    colors = _get_colors()
    console.print(f"[{colors.warning}]{message}[/{colors.warning}]")


def print_success(message: str) -> None:
    """Print a success message.

    Args:
        message: Success message
    """
    colors = _get_colors()
    console.print(f"[{colors.success}]✓ {message}[/{colors.success}]")


def print_info(message: str) -> None:
    """Print an info message.

    Args:
        message: Info message
    """
    colors = _get_colors()
    console.print(f"[{colors.primary}]ℹ {message}[/{colors.primary}]")


def print_log_location(log_file: str) -> None:
    """Print log file location.

    Args:
        log_file: Path to log file
    """
    colors = _get_colors()
    console.print()
    console.print(f"[{colors.text_muted}]Detailed logs: {log_file}[/{colors.text_muted}]")


def print_markdown(markdown_text: str) -> None:
    """Print formatted markdown.

    Args:
        markdown_text: Markdown text to render
    """
    md = Markdown(markdown_text)
    console.print(md)


def print_divider(width: int = 60) -> None:
    """Print a horizontal divider.

    Args:
        width: Width of the divider in characters
    """
    colors = _get_colors()
    console.print(Text("─" * width, style=colors.text_muted))
