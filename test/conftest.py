from pathlib import Path
from types import SimpleNamespace

import pytest

from catalog import generate_skill_document


@pytest.fixture(autouse=True)
def skillbox_home(tmp_path, monkeypatch):
    """Point every skillbox location at a fresh tmp_path tree."""
    home = tmp_path / "home"
    home.mkdir()
    config_dir = home / ".skillbox"
    plugin_dir = tmp_path / "plugin"
    agent_dir = home / ".claude"

    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("SKILLBOX_CONFIG_DIR", str(config_dir))
    monkeypatch.setenv("SKILLBOX_PLUGIN_DIR", str(plugin_dir))
    monkeypatch.setenv("SKILLBOX_AGENT_DIR", str(agent_dir))

    return SimpleNamespace(
        home=home,
        config_dir=config_dir,
        plugin_dir=plugin_dir,
        skills_dir=plugin_dir / "skills",
        agent_dir=agent_dir,
    )


@pytest.fixture
def write_skill(skillbox_home):
    """Drop a SKILL.md straight into the catalog, like a shipped built-in."""

    def _write(skill_id: str, name: str, description: str = "", body: str = "") -> Path:
        skill_dir = skillbox_home.skills_dir / skill_id
        skill_dir.mkdir(parents=True, exist_ok=True)
        path = skill_dir / "SKILL.md"
        path.write_text(
            generate_skill_document(name, description or f"{name} skill", body),
            encoding="utf-8",
        )
        return path

    return _write
