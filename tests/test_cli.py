import json
import sys
from pathlib import Path

import pytest

from rulesync.__main__ import cli, main


@pytest.fixture(autouse=True)
def in_project(project: Path, monkeypatch) -> Path:
    monkeypatch.chdir(project)
    return project


def test_init_creates_overview_and_config(in_project: Path, cli_runner) -> None:
    result = cli_runner.invoke(cli, ["init"])

    assert result.exit_code == 0
    overview = in_project / ".rulesync" / "rules" / "overview.md"
    assert overview.read_text(encoding="utf-8").startswith("---\nroot: true\n")
    config = json.loads((in_project / "rulesync.json").read_text(encoding="utf-8"))
    assert config["delete"] is True
    assert config["targets"] == ["*"]

    again = cli_runner.invoke(cli, ["init"])
    assert again.exit_code == 0
    assert "exists" in again.output


def test_generate_writes_selected_targets(sample_rules: Path, cli_runner) -> None:
    result = cli_runner.invoke(
        cli,
        ["generate", "-t", "claudecode", "-t", "cursor", "--base-dir", str(sample_rules)],
    )

    assert result.exit_code == 0, result.output
    assert (sample_rules / ".claude" / "CLAUDE.md").exists()
    assert (sample_rules / ".cursor" / "rules" / "overview.mdc").exists()
    assert not (sample_rules / "AGENTS.md").exists()


def test_generate_reads_config_file(
    sample_rules: Path, cli_runner, write_json
) -> None:
    write_json(sample_rules / "rulesync.json", {"targets": ["copilot"]})

    result = cli_runner.invoke(cli, ["generate"])

    assert result.exit_code == 0, result.output
    assert (sample_rules / ".github" / "copilot-instructions.md").exists()
    assert not (sample_rules / ".claude").exists()


def test_plan_writes_nothing(sample_rules: Path, cli_runner) -> None:
    result = cli_runner.invoke(
        cli, ["plan", "-t", "cursor", "--base-dir", str(sample_rules)]
    )

    assert result.exit_code == 0, result.output
    assert "cursor" in result.output
    assert "create" in result.output
    assert not (sample_rules / ".cursor").exists()


def test_generate_with_broken_rule_fails_without_writing(
    project: Path, write_rule, cli_runner
) -> None:
    write_rule(project, "overview.md", "---\nroot: [\n---\nBody\n")

    result = cli_runner.invoke(
        cli, ["generate", "-t", "cursor", "--base-dir", str(project)]
    )

    assert result.exit_code != 0
    assert not (project / ".cursor").exists()


def test_conflicting_targets_are_fatal(sample_rules: Path, cli_runner) -> None:
    result = cli_runner.invoke(
        cli,
        [
            "generate",
            "-t",
            "claudecode",
            "-t",
            "claudecode-legacy",
            "--base-dir",
            str(sample_rules),
        ],
    )

    assert result.exit_code != 0
    assert "Conflicting targets" in result.output


def test_invalid_config_json_is_fatal(in_project: Path, cli_runner) -> None:
    (in_project / "rulesync.json").write_text("{bad", encoding="utf-8")

    result = cli_runner.invoke(cli, ["generate"])

    assert result.exit_code != 0
    assert "Invalid JSON format" in result.output


def test_import_from_cursor(project: Path, cli_runner) -> None:
    rules_dir = project / ".cursor" / "rules"
    rules_dir.mkdir(parents=True)
    (rules_dir / "style.mdc").write_text(
        "---\ndescription: Style\nglobs: '*.ts'\nalwaysApply: false\n---\n\nUse strict mode.\n",
        encoding="utf-8",
    )

    result = cli_runner.invoke(
        cli, ["import", "-t", "cursor", "--base-dir", str(project)]
    )

    assert result.exit_code == 0, result.output
    imported = project / ".rulesync" / "rules" / "style.md"
    assert "Use strict mode." in imported.read_text(encoding="utf-8")


def test_import_dry_run_writes_nothing(project: Path, cli_runner) -> None:
    (project / ".claude").mkdir()
    (project / ".claude" / "CLAUDE.md").write_text("Root\n", encoding="utf-8")

    result = cli_runner.invoke(
        cli, ["import", "-t", "claudecode", "--base-dir", str(project), "--dry-run"]
    )

    assert result.exit_code == 0, result.output
    assert not (project / ".rulesync").exists()


def test_targets_lists_tools(cli_runner) -> None:
    result = cli_runner.invoke(cli, ["targets"], env={"COLUMNS": "200"})
    assert result.exit_code == 0
    assert "cursor" in result.output
    assert "windsurf" in result.output


def test_global_targets_hide_local_only_tools(cli_runner) -> None:
    result = cli_runner.invoke(
        cli, ["targets", "--global"], env={"COLUMNS": "200"}
    )
    assert result.exit_code == 0
    assert "claudecode" in result.output
    assert "windsurf" not in result.output


def test_main_returns_2_on_fatal_error(in_project: Path, monkeypatch) -> None:
    (in_project / "rulesync.json").write_text("{bad", encoding="utf-8")
    monkeypatch.setattr(sys, "argv", ["rulesync", "generate"])

    assert main() == 2


def test_main_returns_1_when_a_file_fails(
    project: Path, write_rule, monkeypatch
) -> None:
    write_rule(project, "overview.md", "---\nroot: true\n---\nRoot\n")
    write_rule(
        project,
        "api.md",
        "---\nagentsmd:\n  subprojectPath: ../../../elsewhere\n---\nAPI\n",
    )
    monkeypatch.setattr(
        sys,
        "argv",
        ["rulesync", "generate", "-t", "agentsmd", "--base-dir", str(project), "-s"],
    )

    assert main() == 1
    assert (project / "AGENTS.md").exists()


def test_main_help_exits_cleanly(monkeypatch, capsys) -> None:
    monkeypatch.setattr(sys, "argv", ["rulesync", "--help"])

    assert main() == 0
    assert "generate" in capsys.readouterr().out


def test_import_global_reads_home_and_writes_project(
    in_project: Path, home_dir: Path, cli_runner
) -> None:
    (home_dir / ".claude").mkdir(parents=True)
    (home_dir / ".claude" / "CLAUDE.md").write_text("Global rules\n", encoding="utf-8")

    result = cli_runner.invoke(cli, ["import", "-t", "claudecode", "--global"])

    assert result.exit_code == 0, result.output
    assert (in_project / ".rulesync" / "rules" / "overview.md").exists()
    assert not (home_dir / ".rulesync").exists()
