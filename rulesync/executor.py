import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from rulesync.models import Action, ActionKind, ActionStatus, SyncPlan
from rulesync.utils import FileSystem, LocalFileSystem

logger = logging.getLogger(__name__)


@dataclass
class ExecutionContext:
    filesystem: FileSystem


class ActionHandler(Protocol):
    def handle(
        self, action: Action, context: ExecutionContext
    ) -> tuple[bool, Optional[str]]: ...


class WriteTextHandler:
    def handle(
        self, action: Action, context: ExecutionContext
    ) -> tuple[bool, Optional[str]]:
        if action.status == ActionStatus.NOOP:
            return False, None
        if not isinstance(action.payload, str):
            return False, f"Missing text payload for write action: {action.path}"

        context.filesystem.write_file(action.path, action.payload)
        return True, None


class RemoveFileHandler:
    def handle(
        self, action: Action, context: ExecutionContext
    ) -> tuple[bool, Optional[str]]:
        if action.status == ActionStatus.NOOP:
            return False, None
        if not context.filesystem.exists(action.path):
            return False, None
        context.filesystem.remove_file(action.path)
        return True, None


class SyncExecutor:
    """Apply plan actions in order; later writes to a path replace earlier ones."""

    def __init__(self, filesystem: Optional[FileSystem] = None) -> None:
        self.context = ExecutionContext(filesystem=filesystem or LocalFileSystem())
        self.handlers: dict[ActionKind, ActionHandler] = {
            ActionKind.WRITE_TEXT: WriteTextHandler(),
            ActionKind.REMOVE_FILE: RemoveFileHandler(),
        }

    def execute(self, plan: SyncPlan) -> tuple[int, int, list[str]]:
        applied = 0
        failed = 0
        failures: list[str] = []

        for action in plan.actions:
            try:
                handler = self.handlers.get(action.kind)
                if handler is None:
                    failed += 1
                    failures.append(f"Unknown action kind: {action.kind.value}")
                    continue

                changed, failure = handler.handle(action, self.context)
                if failure is not None:
                    failed += 1
                    failures.append(failure)
                    continue
                if changed:
                    applied += 1
            except Exception as exc:
                failed += 1
                failures.append(f"{action.kind.value} failed for {action.path}: {exc}")
                logger.error("%s failed for %s: %s", action.kind.value, action.path, exc)

        logger.debug("Applied %d actions, %d failed", applied, failed)
        return applied, failed, failures


def execute_plan(
    plan: SyncPlan, filesystem: Optional[FileSystem] = None
) -> tuple[int, int, list[str]]:
    return SyncExecutor(filesystem=filesystem).execute(plan)
