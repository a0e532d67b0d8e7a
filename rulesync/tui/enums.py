from enum import Enum

from rulesync.models import ActionStatus


class UIStyle(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    CYAN = "cyan"
    MAGENTA = "magenta"
    DIM = "dim"
    WHITE = "white"


class PlanIssue(str, Enum):
    """Lists printed under the per-tool tables when a plan is not clean."""

    ERRORS = "errors"
    FAILURES = "failures"
    SKIPPED = "skipped"

    @property
    def style(self) -> str:
        if self is PlanIssue.SKIPPED:
            return UIStyle.YELLOW.value
        return UIStyle.RED.value

    def title(self, count: int) -> str:
        if self is PlanIssue.FAILURES:
            return f"{count} files failed"
        return self.value


_STATUS_STYLES = {
    ActionStatus.CREATE: UIStyle.GREEN,
    ActionStatus.UPDATE: UIStyle.CYAN,
    ActionStatus.REMOVE: UIStyle.MAGENTA,
    ActionStatus.NOOP: UIStyle.DIM,
}


def status_markup(status: ActionStatus) -> str:
    style = _STATUS_STYLES.get(status, UIStyle.WHITE).value
    return f"[{style}]{status.value}[/{style}]"
