from typing import Iterable, Optional, Sequence

from rich.panel import Panel

from rulesync.models import Action, ActionStatus, SyncPlan
from rulesync.tui.enums import PlanIssue, UIStyle
from rulesync.utils import compact_home_paths_in_text


class UISection:
    @staticmethod
    def wrap(title: str, body, style: str = UIStyle.BLUE.value, subtitle: Optional[str] = None) -> Panel:
        return Panel(body, title=title, subtitle=subtitle, border_style=style, padding=(0, 1))

    @staticmethod
    def note(title: str, body: str, style: str = UIStyle.DIM.value) -> Panel:
        return Panel(body, title=title, border_style=style, padding=(0, 1))

    @staticmethod
    def bullets(title: str, items: Iterable[object], style: str) -> Panel:
        text = "\n".join(f"- {compact_home_paths_in_text(str(item))}" for item in items)
        return UISection.note(title, text, style=style)

    @staticmethod
    def tool_actions(app: str, table, actions: Sequence[Action]) -> Panel:
        changed = sum(1 for action in actions if action.status != ActionStatus.NOOP)
        return UISection.wrap(
            app,
            table,
            style=UIStyle.CYAN.value if changed else UIStyle.DIM.value,
            subtitle=f"{changed} changed",
        )

    @staticmethod
    def issue(kind: PlanIssue, items: Sequence[object]) -> Panel:
        return UISection.bullets(kind.title(len(items)), items, style=kind.style)

    @staticmethod
    def plan_issues(plan: SyncPlan) -> list[Panel]:
        found = (
            (PlanIssue.ERRORS, plan.errors),
            (PlanIssue.FAILURES, plan.failures),
            (PlanIssue.SKIPPED, plan.skipped),
        )
        return [UISection.issue(kind, items) for kind, items in found if items]

    @staticmethod
    def sync_state(plan: SyncPlan) -> Optional[Panel]:
        if not plan.actions:
            return UISection.note("actions", "No actions required.")
        if not plan.changed_actions():
            return UISection.note("actions", "All files already in sync.")
        return None
