from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional


class ActionKind(str, Enum):
    WRITE_TEXT = "write_text"
    REMOVE_FILE = "remove_file"


class ActionStatus(str, Enum):
    NOOP = "noop"
    CREATE = "create"
    UPDATE = "update"
    REMOVE = "remove"


@dataclass
class Action:
    kind: ActionKind
    path: Path
    status: ActionStatus
    detail: str
    payload: Optional[Any] = None
    app: Optional[str] = None
    base_dir: Optional[Path] = None


@dataclass
class SyncPlan:
    actions: list[Action]
    errors: list[Exception]
    skipped: list[str]
    failures: list[str] = field(default_factory=list)

    def is_valid(self) -> bool:
        return not self.errors

    def summary(self) -> dict[str, int]:
        counts = {status.value: 0 for status in ActionStatus}
        for action in self.actions:
            counts[action.status.value] += 1
        counts["actions"] = len(self.actions)
        counts["errors"] = len(self.errors)
        counts["skipped"] = len(self.skipped)
        counts["failures"] = len(self.failures)
        return counts

    def changed_actions(self) -> list[Action]:
        return [action for action in self.actions if action.status != ActionStatus.NOOP]

