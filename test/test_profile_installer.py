import json
import os

import pytest

from catalog import SkillStore, parse_skill_document
from errors import NotFoundError
from profiles import (
    GENERATED_MARKER,
    CreateProfileInput,
    ProfileInstaller,
    ProfileRegistry,
    ProfileType,
    ensure_project_scaffold,
    read_descriptor,
)


def _installer(profile_id: str, skills: list[str], profile_type=ProfileType.PROJECT):
    registry = ProfileRegistry()
    registry.create(
        CreateProfileInput(
            id=profile_id,
            name=profile_id.title(),
            description=f"{profile_id} profile",
            profile_type=profile_type,
            skills=skills,
        )
    )
    return ProfileInstaller(registry=registry, store=SkillStore())


@pytest.fixture
def project(tmp_path):
    path = tmp_path / "project"
    path.mkdir()
    return path


@pytest.mark.asyncio
async def test_install_records_missing_skill_and_continues(write_skill, project) -> None:
    write_skill("a", "Skill A", body="A body")
    installer = _installer("web", ["a", "b"])

    result = await installer.install("web", project)

    assert result.skills_installed == ["a"]
    assert [f.skill_id for f in result.skills_failed] == ["b"]
    assert "not found" in result.skills_failed[0].error
    assert result.partial
    assert not result.ok
    ids = result.skills_installed + [f.skill_id for f in result.skills_failed]
    assert sorted(ids) == ["a", "b"]

    _, body = parse_skill_document(
        (project / ".claude" / "skills" / "a" / "SKILL.md").read_text(encoding="utf-8")
    )
    assert body == "A body"
    assert not (project / ".claude" / "skills" / "b").exists()


@pytest.mark.asyncio
async def test_install_keeps_going_after_malformed_skill(write_skill, skillbox_home, project):
    broken = skillbox_home.skills_dir / "broken"
    broken.mkdir(parents=True)
    (broken / "SKILL.md").write_text("no frontmatter", encoding="utf-8")
    write_skill("good", "Good")
    installer = _installer("web", ["broken", "good"])

    result = await installer.install("web", project)

    assert result.skills_installed == ["good"]
    assert [f.skill_id for f in result.skills_failed] == ["broken"]


@pytest.mark.asyncio
async def test_install_project_defaults_to_cwd_and_scaffolds_once(
    write_skill, project, monkeypatch
) -> None:
    write_skill("react-patterns", "React Patterns", body="v1")
    installer = _installer("web", ["react-patterns"])
    monkeypatch.chdir(project)

    result = await installer.install("web")

    assert result.target_path.resolve() == project.resolve()
    assert result.ok
    assert sorted(p.name for p in project.iterdir()) == [".claude", ".claude-plugin", "CLAUDE.md"]

    descriptor_path = project / ".claude-plugin" / "plugin.json"
    descriptor = await read_descriptor(descriptor_path)
    assert descriptor.name == "web"
    assert descriptor.description == "web profile"
    assert descriptor.version == "1.0.0"
    assert descriptor.author.name == "skillbox"

    instructions = (project / "CLAUDE.md").read_text(encoding="utf-8")
    assert instructions.startswith(GENERATED_MARKER)
    assert "- react-patterns" in instructions

    stamp = 1_000_000_000
    os.utime(descriptor_path, (stamp, stamp))
    skill_file = project / ".claude" / "skills" / "react-patterns" / "SKILL.md"
    write_skill("react-patterns", "React Patterns", body="v2")

    updated = await installer.update("web")

    assert updated.skills_installed == ["react-patterns"]
    assert descriptor_path.stat().st_mtime == stamp
    _, body = parse_skill_document(skill_file.read_text(encoding="utf-8"))
    assert body == "v2"


@pytest.mark.asyncio
async def test_scaffold_does_not_overwrite_existing_files(project) -> None:
    registry = ProfileRegistry()
    profile = registry.create(
        CreateProfileInput(id="web", name="Web", profile_type=ProfileType.PROJECT)
    )
    (project / "CLAUDE.md").write_text("# My own notes\n", encoding="utf-8")

    created = await ensure_project_scaffold(project, profile)

    assert [p.name for p in created] == ["plugin.json", "skills"]
    assert (project / "CLAUDE.md").read_text(encoding="utf-8") == "# My own notes\n"
    assert await ensure_project_scaffold(project, profile) == []


@pytest.mark.asyncio
async def test_install_project_requires_existing_target(tmp_path, write_skill) -> None:
    write_skill("a", "A")
    installer = _installer("web", ["a"])

    with pytest.raises(NotFoundError):
        await installer.install("web", tmp_path / "missing")


@pytest.mark.asyncio
async def test_install_unknown_profile_fails() -> None:
    installer = ProfileInstaller(registry=ProfileRegistry(), store=SkillStore())

    with pytest.raises(NotFoundError):
        await installer.install("ghost")


@pytest.mark.asyncio
async def test_install_empty_profile_writes_nothing(project) -> None:
    installer = _installer("empty", [])

    result = await installer.install("empty", project)

    assert result.nothing_to_do
    assert result.warnings
    assert list(project.iterdir()) == []


@pytest.mark.asyncio
async def test_user_profile_ignores_target_path(write_skill, skillbox_home, project) -> None:
    write_skill("company-standards", "Company Standards")
    installer = _installer("main", ["company-standards"], ProfileType.USER)

    result = await installer.install("main", project)

    assert result.target_path == skillbox_home.agent_dir
    assert result.skills_installed == ["company-standards"]
    assert any("ignore the target path" in w for w in result.warnings)
    assert (skillbox_home.agent_dir / "skills" / "company-standards" / "SKILL.md").is_file()
    assert list(project.iterdir()) == []
    assert not (skillbox_home.agent_dir.parent / ".claude-plugin").exists()


@pytest.mark.asyncio
async def test_install_dedupes_repeated_skill_ids(write_skill, project) -> None:
    write_skill("a", "A")
    installer = _installer("web", ["a", "a"])

    result = await installer.install("web", project)

    assert result.skills_installed == ["a"]


@pytest.mark.asyncio
async def test_uninstall_without_artifacts_is_a_no_op(project) -> None:
    (project / "README.md").write_text("hello", encoding="utf-8")
    installer = ProfileInstaller(registry=ProfileRegistry(), store=SkillStore())

    result = await installer.uninstall(project)

    assert result.nothing_to_do
    assert sorted(p.name for p in project.iterdir()) == ["README.md"]


@pytest.mark.asyncio
async def test_uninstall_removes_exactly_the_install_artifacts(write_skill, project) -> None:
    write_skill("a", "A")
    installer = _installer("web", ["a"])
    await installer.install("web", project)
    (project / "src").mkdir()
    (project / "src" / "app.py").write_text("print('hi')\n", encoding="utf-8")
    (project / ".claude" / "settings.json").write_text("{}", encoding="utf-8")

    result = await installer.uninstall(project)

    assert sorted(p.name for p in result.removed) == [".claude-plugin", "CLAUDE.md", "skills"]
    assert sorted(p.name for p in project.iterdir()) == [".claude", "src"]
    assert [p.name for p in (project / ".claude").iterdir()] == ["settings.json"]
    assert (project / "src" / "app.py").is_file()


@pytest.mark.asyncio
async def test_uninstall_removes_empty_agent_dir(write_skill, project) -> None:
    write_skill("a", "A")
    installer = _installer("web", ["a"])
    await installer.install("web", project)

    await installer.uninstall(project)

    assert list(project.iterdir()) == []


@pytest.mark.asyncio
async def test_uninstall_keeps_hand_written_instructions(project) -> None:
    (project / ".claude-plugin").mkdir()
    (project / ".claude-plugin" / "plugin.json").write_text(
        json.dumps({"name": "x"}), encoding="utf-8"
    )
    (project / "CLAUDE.md").write_text("# Team rules\n", encoding="utf-8")
    installer = ProfileInstaller(registry=ProfileRegistry(), store=SkillStore())

    result = await installer.uninstall(project)

    assert [p.name for p in result.removed] == [".claude-plugin"]
    assert (project / "CLAUDE.md").read_text(encoding="utf-8") == "# Team rules\n"


@pytest.mark.asyncio
async def test_uninstall_missing_target_fails(tmp_path) -> None:
    installer = ProfileInstaller(registry=ProfileRegistry(), store=SkillStore())

    with pytest.raises(NotFoundError):
        await installer.uninstall(tmp_path / "missing")
