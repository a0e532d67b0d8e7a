"""Entry points that plan and apply a whole generate or import run.

Both drivers stop before touching disk when the plan carries errors, so a
broken canonical rule never leaves half of the targets regenerated.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from rulesync.config import Config
from rulesync.executor import execute_plan
from rulesync.models import SyncPlan
from rulesync.planner import build_generate_plan, build_import_plan
from rulesync.rules.tool_id import ToolId
from rulesync.utils import FileSystem

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    plan: SyncPlan
    applied: int = 0
    failed: int = 0
    failures: list[str] = field(default_factory=list)
    executed: bool = False

    @property
    def ok(self) -> bool:
        return self.plan.is_valid() and not self.plan.failures and self.failed == 0


def _run(plan: SyncPlan, dry_run: bool, filesystem: Optional[FileSystem]) -> RunResult:
    if dry_run or not plan.is_valid():
        return RunResult(plan=plan)
    applied, failed, failures = execute_plan(plan, filesystem=filesystem)
    return RunResult(
        plan=plan, applied=applied, failed=failed, failures=failures, executed=True
    )


def generate(
    config: Config,
    filesystem: Optional[FileSystem] = None,
    dry_run: bool = False,
) -> RunResult:
    logger.debug("Generating for targets: %s", ", ".join(config.targets))
    plan = build_generate_plan(config, filesystem=filesystem)
    return _run(plan, dry_run, filesystem)


def import_rules(
    tool_id: ToolId | str,
    base_dir: Path,
    global_mode: bool = False,
    filesystem: Optional[FileSystem] = None,
    dry_run: bool = False,
) -> RunResult:
    logger.debug("Importing rules from %s", tool_id)
    plan = build_import_plan(
        tool_id, base_dir=base_dir, global_mode=global_mode, filesystem=filesystem
    )
    return _run(plan, dry_run, filesystem)
