from pathlib import Path

from rich.console import Console

from rulesync.models import SyncPlan
from rulesync.rules.registry import ToolAdapterDescriptor
from rulesync.tui.enums import PlanIssue, UIStyle
from rulesync.tui.sections import UISection
from rulesync.tui.tables import ApplyTable, PlanTable, TargetsTable
from rulesync.utils import compact_home_path


class SyncConsoleUI:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_plan(
        self,
        plan: SyncPlan,
        mode: str,
        targets: list[str],
        verbose: bool = False,
        next_hint: str | None = None,
    ) -> None:
        self.console.print(
            UISection.wrap(
                "plan overview",
                PlanTable.summary_block(plan, mode=mode, targets=targets),
                style=UIStyle.BLUE.value,
            )
        )

        for app, actions in PlanTable.group_by_app(plan).items():
            self.console.print(
                UISection.tool_actions(
                    app, PlanTable.actions_table(actions, verbose=verbose), actions
                )
            )
        state = UISection.sync_state(plan)
        if state is not None:
            self.console.print(state)
        for panel in UISection.plan_issues(plan):
            self.console.print(panel)

        if next_hint:
            self.console.print(
                UISection.note("next", next_hint, style=UIStyle.DIM.value)
            )

    def render_apply_result(
        self, applied: int, failed: int, failures: list[str], skipped: int = 0
    ) -> None:
        self.console.print(
            ApplyTable.stats_panel(applied=applied, failed=failed, skipped=skipped)
        )
        if failures:
            self.console.print(UISection.issue(PlanIssue.FAILURES, failures))

    def render_targets(
        self, descriptors: list[ToolAdapterDescriptor], global_mode: bool = False
    ) -> None:
        title = "global targets" if global_mode else "targets"
        self.console.print(
            UISection.wrap(
                title,
                TargetsTable.targets_table(descriptors, global_mode=global_mode),
                style=UIStyle.BLUE.value,
            )
        )

    def render_init(self, created: list[Path], existing: list[Path]) -> None:
        lines = [f"[green]created[/green] {compact_home_path(path)}" for path in created]
        lines.extend(
            f"[dim]exists[/dim]  {compact_home_path(path)}" for path in existing
        )
        self.console.print(
            UISection.note(
                "init",
                "\n".join(lines) if lines else "Nothing to do.",
                style=UIStyle.GREEN.value if created else UIStyle.DIM.value,
            )
        )
        self.console.print(
            UISection.note(
                "next",
                "Edit your rules, then write them out for every tool.\n"
                "- rulesync plan\n"
                "- rulesync generate",
                style=UIStyle.DIM.value,
            )
        )

