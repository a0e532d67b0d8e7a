from pathlib import Path
from typing import Any, Callable, Optional

import click
from rich.console import Console

from rulesync.config import Config, ConfigResolver, default_config_payload
from rulesync.constants import (
    CONFIG_FILENAME,
    ROOT_RULE_FILENAME,
    RULESYNC_RULES_DIR,
    WILDCARD_TARGET,
)
from rulesync.errors import RulesyncError
from rulesync.generate import RunResult, generate, import_rules
from rulesync.log import configure_logging
from rulesync.rules.models import CanonicalRule, RuleFrontmatter
from rulesync.rules.parser import serialize_canonical_rule
from rulesync.rules.registry import TOOL_CATALOG, get_descriptor
from rulesync.rules.tool_id import TOOL_ID_VALUES
from rulesync.tui import SyncConsoleUI
from rulesync.utils import LocalFileSystem, add_trailing_newline, write_json

TARGET_VALUES = [WILDCARD_TARGET, *TOOL_ID_VALUES]

OVERVIEW_BODY = """# Project Overview

## General Guidelines

- Follow the existing code style and naming conventions.
- Keep changes small and focused, and explain the reasoning in commit messages.
- Add or update tests alongside behaviour changes."""


def _generate_options(func: Callable) -> Callable:
    options = [
        click.option(
            "-t",
            "--targets",
            "targets",
            multiple=True,
            type=click.Choice(TARGET_VALUES, case_sensitive=False),
            help="Tools to generate for; repeat the option or use '*' for all.",
        ),
        click.option(
            "--global/--no-global",
            "global_mode",
            default=None,
            help="Write user-level files under the home directory.",
        ),
        click.option(
            "--delete/--no-delete",
            default=None,
            help="Remove tool rule files that are no longer generated.",
        ),
        click.option(
            "--simulate-commands/--no-simulate-commands",
            default=None,
            help="Describe custom commands for tools without native support.",
        ),
        click.option(
            "--simulate-subagents/--no-simulate-subagents",
            default=None,
            help="Describe subagents for tools without native support.",
        ),
        click.option(
            "--simulate-skills/--no-simulate-skills",
            default=None,
            help="List skills for tools without native support.",
        ),
        click.option(
            "--base-dir",
            "base_dirs",
            multiple=True,
            type=click.Path(file_okay=False, path_type=Path),
            help="Project directory to process; may be repeated.",
        ),
        click.option(
            "--config",
            "config_path",
            type=click.Path(dir_okay=False, path_type=Path),
            default=None,
            help=f"Path to {CONFIG_FILENAME}.",
        ),
        click.option("-v", "--verbose/--no-verbose", default=None),
        click.option("-s", "--silent/--no-silent", default=None),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _resolve_config(config_path: Optional[Path], **overrides: Any) -> Config:
    try:
        config = ConfigResolver().resolve(config_path, **overrides)
    except RulesyncError as exc:
        raise click.ClickException(f"Fatal: {exc}")
    configure_logging(verbose=config.verbose, silent=config.silent)
    return config


def _mode_label(command: str, config: Config) -> str:
    return f"{command}:{'global' if config.global_mode else 'local'}"


def _target_labels(config: Config) -> list[str]:
    try:
        return [tool_id.value for tool_id in config.tool_ids()]
    except RulesyncError:
        return list(config.targets)


def _finish(ui: SyncConsoleUI, result: RunResult, aborted_message: str) -> None:
    plan = result.plan
    if plan.errors:
        raise click.ClickException(aborted_message)
    ui.render_apply_result(
        result.applied, result.failed, result.failures, skipped=len(plan.failures)
    )
    if not result.ok:
        raise click.exceptions.Exit(1)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
def cli() -> None:
    """Keep AI coding tool rules in sync with one canonical source."""


@cli.command("generate", help="Write rule files for every configured tool.")
@_generate_options
def generate_command(config_path: Optional[Path], **options: Any) -> None:
    config = _resolve_config(config_path, **options)
    ui = SyncConsoleUI(Console(quiet=config.silent))

    try:
        result = generate(config)
    except RulesyncError as exc:
        raise click.ClickException(f"Fatal: {exc}")

    ui.render_plan(
        result.plan,
        mode=_mode_label("generate", config),
        targets=_target_labels(config),
        verbose=config.verbose,
    )
    _finish(ui, result, "Generate aborted due to errors above.")


@cli.command("plan", help="Show what generate would change without writing anything.")
@_generate_options
def plan(config_path: Optional[Path], **options: Any) -> None:
    config = _resolve_config(config_path, **options)
    ui = SyncConsoleUI(Console(quiet=config.silent))

    try:
        result = generate(config, dry_run=True)
    except RulesyncError as exc:
        raise click.ClickException(f"Fatal: {exc}")

    ui.render_plan(
        result.plan,
        mode=_mode_label("plan", config),
        targets=_target_labels(config),
        verbose=config.verbose,
        next_hint="Write the planned files with:\n- rulesync generate",
    )
    if result.plan.errors:
        raise click.ClickException("Plan has errors; fix them before generating.")
    if result.plan.failures:
        raise click.exceptions.Exit(1)


@cli.command("import", help="Convert one tool's existing rule files into canonical rules.")
@click.option(
    "-t",
    "--target",
    required=True,
    type=click.Choice(list(TOOL_ID_VALUES), case_sensitive=False),
    help="Tool to import from.",
)
@click.option("--global", "global_mode", is_flag=True, default=False)
@click.option(
    "--base-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
)
@click.option("--dry-run", is_flag=True, default=False, help="Only show the plan.")
@click.option("-v", "--verbose", is_flag=True, default=False)
@click.option("-s", "--silent", is_flag=True, default=False)
def import_command(
    target: str,
    global_mode: bool,
    base_dir: Optional[Path],
    dry_run: bool,
    verbose: bool,
    silent: bool,
) -> None:
    configure_logging(verbose=verbose, silent=silent)
    ui = SyncConsoleUI(Console(quiet=silent))
    root = base_dir or Path.cwd()

    try:
        result = import_rules(target, base_dir=root, global_mode=global_mode, dry_run=dry_run)
    except RulesyncError as exc:
        raise click.ClickException(f"Fatal: {exc}")

    mode = f"import:{'global' if global_mode else 'local'}"
    ui.render_plan(result.plan, mode=mode, targets=[target], verbose=verbose)
    if dry_run:
        if result.plan.errors:
            raise click.ClickException("Import plan has errors.")
        return
    _finish(ui, result, "Import aborted due to errors above.")


@cli.command("init", help="Create a starter rule and config file.")
@click.option(
    "--base-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
)
def init(base_dir: Optional[Path]) -> None:
    configure_logging()
    ui = SyncConsoleUI(Console())
    root = base_dir or Path.cwd()
    filesystem = LocalFileSystem()

    overview = CanonicalRule(
        relative_file_path=ROOT_RULE_FILENAME,
        frontmatter=RuleFrontmatter(
            root=True,
            targets=[WILDCARD_TARGET],
            description="Project overview and general development guidelines",
            globs=["**/*"],
        ),
        body=OVERVIEW_BODY,
        relative_dir_path=RULESYNC_RULES_DIR,
        base_dir=root,
    )

    created: list[Path] = []
    existing: list[Path] = []
    try:
        overview_path = overview.output_path
        if filesystem.exists(overview_path):
            existing.append(overview_path)
        else:
            filesystem.write_file(
                overview_path, add_trailing_newline(serialize_canonical_rule(overview))
            )
            created.append(overview_path)

        config_path = root / CONFIG_FILENAME
        if filesystem.exists(config_path):
            existing.append(config_path)
        else:
            write_json(config_path, default_config_payload())
            created.append(config_path)
    except (RulesyncError, OSError) as exc:
        raise click.ClickException(f"Fatal: {exc}")

    ui.render_init(created, existing)


@cli.command("targets", help="List supported tools and where their rules live.")
@click.option("--global", "global_mode", is_flag=True, default=False)
def targets(global_mode: bool) -> None:
    ui = SyncConsoleUI(Console())
    descriptors = [
        get_descriptor(tool_id)
        for tool_id in TOOL_CATALOG
        if not global_mode or get_descriptor(tool_id).supports_global_mode
    ]
    ui.render_targets(descriptors, global_mode=global_mode)


def main() -> int:
    try:
        # Without standalone mode click returns the code of an Exit it caught.
        code = cli(standalone_mode=False)
    except click.exceptions.Exit as exc:
        code = exc.exit_code
    except click.ClickException as exc:
        exc.show()
        return 2
    return code if isinstance(code, int) else 0


if __name__ == "__main__":
    raise SystemExit(main())
