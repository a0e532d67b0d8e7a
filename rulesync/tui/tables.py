from rich.panel import Panel
from rich.table import Column, Table

from rulesync.models import Action, ActionStatus, SyncPlan
from rulesync.rules.registry import ToolAdapterDescriptor
from rulesync.tui.enums import UIStyle, status_markup
from rulesync.utils import compact_home_path


def display_path(action: Action) -> str:
    if action.base_dir is not None:
        try:
            return action.path.relative_to(action.base_dir).as_posix()
        except ValueError:
            pass
    return compact_home_path(action.path)


class PlanTable:
    @staticmethod
    def summary_block(plan: SyncPlan, mode: str, targets: list[str]):
        counts = plan.summary()
        chips = [
            f"{status.value}={counts[status.value]}"
            for status in ActionStatus
            if counts[status.value] > 0
        ]
        if not chips:
            chips = ["none"]

        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Mode", mode)
        table.add_row("Targets", ", ".join(targets) if targets else "none")
        table.add_row("Actions", str(counts["actions"]))
        table.add_row("Statuses", "  ".join(chips))
        return table

    @staticmethod
    def group_by_app(plan: SyncPlan) -> dict[str, list[Action]]:
        groups: dict[str, list[Action]] = {}
        for action in plan.actions:
            groups.setdefault(action.app or "rulesync", []).append(action)
        return groups

    @staticmethod
    def actions_table(actions: list[Action], verbose: bool = False) -> Table:
        table = Table(
            Column(header="Type", width=12),
            Column(header="Status", width=10),
            Column(header="Target", overflow="ellipsis", max_width=64),
            Column(header="Reason", overflow="ellipsis"),
            expand=True,
            header_style="bold",
        )

        for action in actions:
            status_text = status_markup(action.status)
            target = str(action.path) if verbose else display_path(action)
            table.add_row(action.kind.value, status_text, target, action.detail)
        return table


class ApplyTable:
    @staticmethod
    def stats_panel(applied: int, failed: int, skipped: int = 0) -> Panel:
        stats: dict[str, str] = {
            "applied": str(applied),
            "failed": str(failed),
            "skipped": str(skipped),
        }
        table = Table(show_header=False, box=None)
        for key, value in stats.items():
            table.add_row(f"[bold]{key}[/bold]", value)
        return Panel(
            table,
            title="apply",
            border_style=UIStyle.GREEN.value if failed == 0 else UIStyle.RED.value,
        )


class TargetsTable:
    @staticmethod
    def targets_table(descriptors: list[ToolAdapterDescriptor], global_mode: bool) -> Table:
        table = Table(
            Column(header="Target", width=20),
            Column(header="Name", width=24),
            Column(header="Root file", overflow="ellipsis"),
            Column(header="Rules dir", overflow="ellipsis"),
            Column(header="Discovery", width=16),
            Column(header="Global", width=7),
            expand=True,
            header_style="bold",
        )
        for descriptor in descriptors:
            paths = descriptor.adapter.get_settable_paths(global_mode=global_mode)
            global_style = (
                UIStyle.GREEN.value if descriptor.supports_global_mode else UIStyle.DIM.value
            )
            global_text = "yes" if descriptor.supports_global_mode else "no"
            name = descriptor.label
            if descriptor.legacy:
                name = f"{name} [{UIStyle.DIM.value}](legacy)[/{UIStyle.DIM.value}]"
            table.add_row(
                descriptor.tool_id.value,
                name,
                paths.root_path or "",
                paths.non_root_dir or "",
                descriptor.discovery_mode.value,
                f"[{global_style}]{global_text}[/{global_style}]",
            )
        return table
