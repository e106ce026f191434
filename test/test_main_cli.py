import sys

import main as skillbox_main


class _DummyConsole:
    def __init__(self):
        self.lines: list[str] = []

    def print(self, *args, **kwargs):  # noqa: ARG002
        self.lines.append(" ".join(str(a) for a in args))


def _setup_common(monkeypatch, argv: list[str]):
    calls = {"error": [], "info": [], "success": [], "warning": []}
    console = _DummyConsole()

    monkeypatch.setattr(sys, "argv", ["skillbox", *argv])
    monkeypatch.setattr(skillbox_main, "ensure_runtime_dirs", lambda create_logs=False: None)
    monkeypatch.setattr(skillbox_main, "setup_logger", lambda: None)

    monkeypatch.setattr(
        skillbox_main.terminal_ui,
        "print_error",
        lambda msg, title="Error": calls["error"].append((title, msg)),
    )
    monkeypatch.setattr(
        skillbox_main.terminal_ui,
        "print_info",
        lambda msg: calls["info"].append(msg),
    )
    monkeypatch.setattr(
        skillbox_main.terminal_ui,
        "print_success",
        lambda msg: calls["success"].append(msg),
    )
    monkeypatch.setattr(
        skillbox_main.terminal_ui,
        "print_warning",
        lambda msg: calls["warning"].append(msg),
    )
    monkeypatch.setattr(skillbox_main.terminal_ui, "console", console)

    return calls, console


def _run(monkeypatch, argv: list[str]):
    calls, console = _setup_common(monkeypatch, argv)
    code = skillbox_main.main()
    return code, calls, console


def test_skills_create_then_list(monkeypatch, skillbox_home, tmp_path) -> None:
    body_file = tmp_path / "body.md"
    body_file.write_text("Write small components.", encoding="utf-8")

    code, calls, _ = _run(
        monkeypatch,
        [
            "skills",
            "create",
            "ui-kit",
            "--name",
            "UI Kit",
            "--description",
            "Our kit",
            "--file",
            str(body_file),
        ],
    )

    assert code == 0
    assert calls["error"] == []
    assert "ui-kit" in calls["success"][0]
    document = (skillbox_home.skills_dir / "ui-kit" / "SKILL.md").read_text(encoding="utf-8")
    assert document.endswith("Write small components.")

    code, calls, console = _run(monkeypatch, ["skills", "list"])

    assert code == 0
    assert calls["info"] == []
    assert console.lines


def test_skills_list_empty(monkeypatch) -> None:
    code, calls, _ = _run(monkeypatch, ["skills", "list"])

    assert code == 0
    assert calls["info"][0].startswith("No skills found")


def test_deleting_builtin_skill_reports_permission_error(monkeypatch, write_skill) -> None:
    path = write_skill("company-standards", "Company Standards")

    code, calls, _ = _run(monkeypatch, ["skills", "delete", "company-standards"])

    assert code == 1
    assert calls["error"][0][0] == "PermissionDeniedError"
    assert "You can only disable it" in calls["error"][0][1]
    assert path.exists()


def test_skills_disable_and_show_missing(monkeypatch, write_skill) -> None:
    write_skill("playwright", "Playwright")

    code, calls, _ = _run(monkeypatch, ["skills", "disable", "playwright"])
    assert code == 0
    assert calls["success"] == ["Skill 'playwright' disabled"]

    code, calls, _ = _run(monkeypatch, ["skills", "show", "nope"])
    assert code == 1
    assert calls["error"][0][0] == "NotFoundError"


def test_profile_create_and_install_into_project(monkeypatch, write_skill, tmp_path) -> None:
    write_skill("react-patterns", "React Patterns")
    project = tmp_path / "app"
    project.mkdir()

    code, calls, _ = _run(
        monkeypatch,
        ["profile", "create", "web", "--name", "Web", "--skill", "react-patterns"],
    )
    assert code == 0
    assert calls["success"] == ["Created project profile 'web'"]

    code, calls, _ = _run(monkeypatch, ["profile", "install", "web", "--path", str(project)])

    assert code == 0
    assert calls["error"] == []
    assert (project / ".claude" / "skills" / "react-patterns" / "SKILL.md").is_file()
    assert (project / ".claude-plugin" / "plugin.json").is_file()


def test_profile_install_with_failures_exits_non_zero(monkeypatch, tmp_path) -> None:
    project = tmp_path / "app"
    project.mkdir()
    _run(monkeypatch, ["profile", "create", "web", "--name", "Web", "--skill", "missing"])

    code, _, console = _run(monkeypatch, ["profile", "install", "web", "--path", str(project)])

    assert code == 1
    assert any("missing" in line for line in console.lines)


def test_profile_install_without_id_needs_default(monkeypatch) -> None:
    code, calls, _ = _run(monkeypatch, ["profile", "install"])

    assert code == 1
    assert calls["error"][0][0] == "Profile Required"


def test_profile_install_uses_default_user_profile(monkeypatch, write_skill, skillbox_home):
    write_skill("company-standards", "Company Standards")
    _run(
        monkeypatch,
        [
            "profile",
            "create",
            "main",
            "--name",
            "Main Profile",
            "--type",
            "user",
            "--skill",
            "company-standards",
        ],
    )
    code, calls, _ = _run(monkeypatch, ["profile", "set-default", "main"])
    assert code == 0

    code, calls, _ = _run(monkeypatch, ["profile", "install"])

    assert code == 0
    assert (skillbox_home.agent_dir / "skills" / "company-standards" / "SKILL.md").is_file()


def test_profile_set_default_rejects_project_profile(monkeypatch) -> None:
    _run(monkeypatch, ["profile", "create", "web", "--name", "Web"])

    code, calls, _ = _run(monkeypatch, ["profile", "set-default", "web"])

    assert code == 1
    assert calls["error"][0][0] == "ConfigError"


def test_profile_uninstall_nothing_installed(monkeypatch, tmp_path) -> None:
    code, calls, _ = _run(monkeypatch, ["profile", "uninstall", "--path", str(tmp_path)])

    assert code == 0
    assert calls["warning"] == ["No profile installation found at this location."]


def test_invalid_theme_is_reported(monkeypatch) -> None:
    monkeypatch.setattr(skillbox_main.Config, "TUI_THEME", "neon")

    code, calls, _ = _run(monkeypatch, ["skills", "list"])

    assert code == 1
    assert calls["error"][0][0] == "Configuration Error"
