"""Main entry point for skillbox."""

import argparse
import asyncio
import importlib.metadata
from pathlib import Path

from catalog import CreateSkillInput, SkillStore, UpdateSkillInput
from config import Config, ensure_config
from errors import NotFoundError, SkillboxError
from profiles import (
    CreateProfileInput,
    ProfileInstaller,
    ProfileRegistry,
    ProfileType,
)
from utils import get_log_file_path, setup_logger, terminal_ui
from utils.paths import ensure_runtime_dirs


def _read_body(args: argparse.Namespace) -> str | None:
    if getattr(args, "file", None):
        return Path(args.file).read_text(encoding="utf-8")
    return getattr(args, "content", None)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="skillbox",
        description="Manage a local skill catalog and install skill profiles",
    )

    try:
        version = importlib.metadata.version("skillbox")
    except importlib.metadata.PackageNotFoundError:
        version = "dev"
    parser.add_argument("--version", "-V", action="version", version=f"skillbox {version}")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging to ~/.skillbox/logs/",
    )

    groups = parser.add_subparsers(dest="group", required=True)

    # skills
    skills = groups.add_parser("skills", help="Manage the skill catalog")
    skill_cmds = skills.add_subparsers(dest="command", required=True)

    skill_cmds.add_parser("list", help="List all skills")

    show = skill_cmds.add_parser("show", help="Show one skill")
    show.add_argument("skill_id")

    create = skill_cmds.add_parser("create", help="Create a custom skill")
    create.add_argument("skill_id")
    create.add_argument("--name", required=True)
    create.add_argument("--description", required=True)
    body = create.add_mutually_exclusive_group()
    body.add_argument("--file", help="Read the skill body from a markdown file")
    body.add_argument("--content", default="", help="Skill body text")

    edit = skill_cmds.add_parser("edit", help="Update a skill's name, description or body")
    edit.add_argument("skill_id")
    edit.add_argument("--name")
    edit.add_argument("--description")
    edit_body = edit.add_mutually_exclusive_group()
    edit_body.add_argument("--file", help="Read the new body from a markdown file")
    edit_body.add_argument("--content", help="New body text")

    for command, help_text in (("enable", "Enable a skill"), ("disable", "Disable a skill")):
        toggle = skill_cmds.add_parser(command, help=help_text)
        toggle.add_argument("skill_id")

    delete = skill_cmds.add_parser("delete", help="Delete a custom skill")
    delete.add_argument("skill_id")

    # profile
    profile = groups.add_parser("profile", help="Manage and install profiles")
    profile_cmds = profile.add_subparsers(dest="command", required=True)

    profile_cmds.add_parser("list", help="List all profiles")

    pshow = profile_cmds.add_parser("show", help="Show one profile")
    pshow.add_argument("profile_id")

    pcreate = profile_cmds.add_parser("create", help="Create a profile")
    pcreate.add_argument("profile_id")
    pcreate.add_argument("--name", required=True)
    pcreate.add_argument("--description", default="")
    pcreate.add_argument(
        "--type",
        dest="profile_type",
        choices=[t.value for t in ProfileType],
        default=ProfileType.PROJECT.value,
    )
    pcreate.add_argument("--skill", dest="skills", action="append", default=[])

    assign = profile_cmds.add_parser("assign", help="Replace the skills of a profile")
    assign.add_argument("profile_id")
    assign.add_argument("skills", nargs="*")

    default = profile_cmds.add_parser("set-default", help="Mark a user profile as the default")
    default.add_argument("profile_id")

    pdelete = profile_cmds.add_parser("delete", help="Delete a profile")
    pdelete.add_argument("profile_id")

    for command, help_text in (
        ("install", "Install a profile (default: the default user profile)"),
        ("update", "Rewrite an installed profile's skills with their current content"),
    ):
        cmd = profile_cmds.add_parser(command, help=help_text)
        cmd.add_argument("profile_id", nargs="?")
        cmd.add_argument("--path", help="Project directory (project profiles only)")

    uninstall = profile_cmds.add_parser("uninstall", help="Remove an installed project profile")
    uninstall.add_argument("--path", help="Project directory (default: current directory)")

    return parser


async def _run_skills(args: argparse.Namespace) -> int:
    store = SkillStore()

    if args.command == "list":
        skills = await store.list()
        if not skills:
            terminal_ui.print_info(f"No skills found in {store.skills_dir}")
            return 0
        terminal_ui.print_header("Skills", f"{len(skills)} in {store.skills_dir}")
        terminal_ui.print_skills_table(skills)
        return 0

    if args.command == "show":
        skill = await store.get(args.skill_id)
        if skill is None:
            raise NotFoundError(f"Skill '{args.skill_id}' not found")
        terminal_ui.print_header(f"Skill: {skill.name}")
        terminal_ui.print_skill(skill)
        return 0

    if args.command == "create":
        skill = await store.create(
            CreateSkillInput(
                id=args.skill_id,
                name=args.name,
                description=args.description,
                content=_read_body(args) or "",
            )
        )
        terminal_ui.print_success(f"Created skill '{skill.id}' at {skill.path}")
        return 0

    if args.command == "edit":
        skill = await store.update(
            args.skill_id,
            UpdateSkillInput(
                name=args.name,
                description=args.description,
                content=_read_body(args),
            ),
        )
        terminal_ui.print_success(f"Updated skill '{skill.id}'")
        return 0

    if args.command in ("enable", "disable"):
        await store.toggle(args.skill_id, args.command == "enable")
        terminal_ui.print_success(f"Skill '{args.skill_id}' {args.command}d")
        return 0

    if args.command == "delete":
        await store.delete(args.skill_id)
        terminal_ui.print_success(f"Deleted skill '{args.skill_id}'")
        return 0

    return 2


async def _run_install(args: argparse.Namespace, registry: ProfileRegistry) -> int:
    installer = ProfileInstaller(registry=registry, store=SkillStore())

    profile_id = args.profile_id
    if profile_id is None:
        default = registry.get_default_user_profile()
        if default is None:
            terminal_ui.print_error(
                "No profile given and no default user profile is set. "
                "Use `skillbox profile set-default <id>` or pass a profile id.",
                title="Profile Required",
            )
            return 1
        profile_id = default.id

    if args.command == "install":
        terminal_ui.print_header("Installing Profile", profile_id)
        result = await installer.install(profile_id, args.path)
        if result.nothing_to_do:
            terminal_ui.print_install_result(result)
            return 0
        terminal_ui.print_success(f"Installed to: {result.target_path}")
        terminal_ui.print_install_result(result)
    else:
        terminal_ui.print_header("Updating Profile", profile_id)
        result = await installer.update(profile_id, args.path)
        terminal_ui.print_install_result(result, title="Skills Updated")

    return 0 if result.ok else 1


async def _run_profile(args: argparse.Namespace) -> int:
    registry = ProfileRegistry()

    if args.command == "list":
        profiles = registry.list()
        if not profiles:
            terminal_ui.print_info("No profiles configured yet.")
            return 0
        default = registry.get_default_user_profile()
        terminal_ui.print_header("Profiles")
        terminal_ui.print_profiles(profiles, default.id if default else None)
        return 0

    if args.command == "show":
        profile = registry.get(args.profile_id)
        if profile is None:
            raise NotFoundError(f"Profile '{args.profile_id}' not found")
        default = registry.get_default_user_profile()
        terminal_ui.print_header(f"Profile: {profile.name}")
        is_default = default is not None and default.id == profile.id
        terminal_ui.print_profile(profile, is_default=is_default)
        return 0

    if args.command == "create":
        profile = registry.create(
            CreateProfileInput(
                id=args.profile_id,
                name=args.name,
                description=args.description,
                profile_type=ProfileType(args.profile_type),
                skills=args.skills,
            )
        )
        terminal_ui.print_success(f"Created {profile.profile_type.value} profile '{profile.id}'")
        return 0

    if args.command == "assign":
        profile = registry.assign_skills(args.profile_id, args.skills)
        terminal_ui.print_success(f"Profile '{profile.id}' now has {len(profile.skills)} skills")
        return 0

    if args.command == "set-default":
        registry.set_default_user_profile(args.profile_id)
        terminal_ui.print_success(f"'{args.profile_id}' is now the default user profile")
        return 0

    if args.command == "delete":
        registry.delete(args.profile_id)
        terminal_ui.print_success(f"Deleted profile '{args.profile_id}'")
        return 0

    if args.command in ("install", "update"):
        return await _run_install(args, registry)

    if args.command == "uninstall":
        installer = ProfileInstaller(registry=registry, store=SkillStore())
        target = Path(args.path) if args.path else Path.cwd()
        terminal_ui.print_header("Uninstalling Profile", str(target))
        result = await installer.uninstall(target)
        if result.nothing_to_do:
            terminal_ui.print_warning("No profile installation found at this location.")
            return 0
        for path in result.removed:
            terminal_ui.console.print(f"  • removed {path}")
        terminal_ui.print_success("Profile uninstalled!")
        return 0

    return 2


def main() -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args()

    try:
        Config.validate()
    except ValueError as e:
        terminal_ui.print_error(str(e), title="Configuration Error")
        return 1

    try:
        ensure_config()
        ensure_runtime_dirs(create_logs=args.verbose)
    except (OSError, SkillboxError) as e:
        terminal_ui.print_error(str(e), title="Setup Error")
        return 1

    if args.verbose:
        setup_logger()

    handler = _run_skills if args.group == "skills" else _run_profile
    try:
        code = asyncio.run(handler(args))
    except SkillboxError as e:
        terminal_ui.print_error(str(e), title=type(e).__name__)
        code = 1
    except OSError as e:
        terminal_ui.print_error(str(e), title="File Error")
        code = 1

    if args.verbose and get_log_file_path():
        terminal_ui.print_log_location(get_log_file_path())
    return code


if __name__ == "__main__":
    raise SystemExit(main())
