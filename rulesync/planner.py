import logging
from fnmatch import fnmatchcase
from pathlib import Path, PurePosixPath
from typing import Optional

from rulesync.config import Config
from rulesync.errors import FileAccessError, RulesyncError
from rulesync.models import Action, ActionKind, ActionStatus, SyncPlan
from rulesync.rules.models import CanonicalRule
from rulesync.rules.paths import supports_mode
from rulesync.rules.processor import DescriptorLookup, RulesProcessor, load_canonical_rules
from rulesync.rules.registry import get_descriptor
from rulesync.rules.tool_id import ToolId
from rulesync.skills.parser import load_skills
from rulesync.utils import FileSystem, LocalFileSystem

logger = logging.getLogger(__name__)

_MISSING = object()


def _glob_match(relative: PurePosixPath, pattern: str) -> bool:
    if pattern.startswith("**/"):
        return fnmatchcase(relative.name, pattern[3:])
    parts = pattern.split("/")
    return len(relative.parts) == len(parts) and all(
        fnmatchcase(part, glob) for part, glob in zip(relative.parts, parts)
    )


class _PlannedFiles:
    """Disk view that includes writes and removals already queued in the plan.

    Implements the FileSystem protocol so processors enumerate files for
    deletion against the disk as it will be when earlier actions have run.
    """

    def __init__(self, filesystem: FileSystem) -> None:
        self.filesystem = filesystem
        self._pending: dict[Path, Optional[str]] = {}

    def current(self, path: Path) -> Optional[str]:
        pending = self._pending.get(path, _MISSING)
        if pending is not _MISSING:
            return pending
        if not self.filesystem.exists(path):
            return None
        try:
            return self.filesystem.read_file(path)
        except RulesyncError:
            # Unreadable content never matches, so the file is rewritten.
            return ""

    def record(self, path: Path, content: Optional[str]) -> None:
        self._pending[path] = content

    def read_file(self, path: Path) -> str:
        pending = self._pending.get(path, _MISSING)
        if pending is None:
            raise FileAccessError(path, "removed earlier in this plan")
        if pending is not _MISSING:
            return pending
        return self.filesystem.read_file(path)

    def write_file(self, path: Path, content: str) -> None:
        self.record(path, content)

    def exists(self, path: Path) -> bool:
        pending = self._pending.get(path, _MISSING)
        if pending is not _MISSING:
            return pending is not None
        return self.filesystem.exists(path)

    def list_files(self, root: Path, pattern: str) -> list[Path]:
        found = {
            path
            for path in self.filesystem.list_files(root, pattern)
            if self._pending.get(path, _MISSING) is not None
        }
        for path, content in self._pending.items():
            if content is None or root not in path.parents:
                continue
            if _glob_match(PurePosixPath(path.relative_to(root).as_posix()), pattern):
                found.add(path)
        return sorted(found)

    def ensure_dir(self, path: Path) -> None:
        return None

    def remove_file(self, path: Path) -> None:
        self.record(path, None)

    def write_action(
        self, path: Path, content: str, detail: str, app: str, base_dir: Path
    ) -> Action:
        current = self.current(path)
        self.record(path, content)
        if current == content:
            status = ActionStatus.NOOP
            detail = "already in sync"
        elif current is None:
            status = ActionStatus.CREATE
        else:
            status = ActionStatus.UPDATE
        return Action(
            ActionKind.WRITE_TEXT,
            path,
            status,
            detail,
            payload=content,
            app=app,
            base_dir=base_dir,
        )


class _PlanCollector:
    def __init__(self, filesystem: Optional[FileSystem] = None) -> None:
        self.filesystem = filesystem or LocalFileSystem()
        self._files = _PlannedFiles(self.filesystem)

        self.actions: list[Action] = []
        self.errors: list[Exception] = []
        self.skipped: list[str] = []
        self.failures: list[str] = []

    def _result(self) -> SyncPlan:
        return SyncPlan(
            actions=self.actions,
            errors=self.errors,
            skipped=self.skipped,
            failures=self.failures,
        )


class GeneratePlanner(_PlanCollector):
    def __init__(
        self,
        config: Config,
        filesystem: Optional[FileSystem] = None,
        descriptor_lookup: DescriptorLookup = get_descriptor,
    ) -> None:
        super().__init__(filesystem)
        self.config = config
        self.descriptor_lookup = descriptor_lookup

    def build(self) -> SyncPlan:
        try:
            tool_ids = self.config.tool_ids()
        except RulesyncError as exc:
            self.errors.append(exc)
            return self._result()

        for base_dir in self.config.base_dirs:
            self._plan_base_dir(base_dir, tool_ids)
        return self._result()

    def _plan_base_dir(self, base_dir: Path, tool_ids: list[ToolId]) -> None:
        try:
            rules = load_canonical_rules(
                base_dir, global_mode=self.config.global_mode, filesystem=self.filesystem
            )
        except RulesyncError as exc:
            self.errors.append(exc)
            return

        skills = (
            load_skills(base_dir, filesystem=self.filesystem)
            if self.config.simulate_skills
            else []
        )

        for tool_id in tool_ids:
            if not supports_mode(tool_id, self.config.global_mode):
                mode = "global" if self.config.global_mode else "local"
                message = f"{tool_id.value} does not support {mode} mode"
                logger.warning("Skipping %s", message)
                self.skipped.append(message)
                continue

            processor = RulesProcessor(
                tool_id,
                base_dir=self.config.output_dir(base_dir),
                source_dir=base_dir,
                global_mode=self.config.global_mode,
                simulate_commands=self.config.simulate_commands,
                simulate_subagents=self.config.simulate_subagents,
                simulate_skills=self.config.simulate_skills,
                skills=skills,
                descriptor_lookup=self.descriptor_lookup,
                filesystem=self._files,
            )
            self._plan_tool(processor, rules)

    def _plan_tool(
        self, processor: RulesProcessor, rules: list[CanonicalRule]
    ) -> None:
        app = processor.tool_id.value
        tool_rules = processor.convert(rules)
        for exc in processor.errors:
            self.failures.append(f"{app}: {exc}")

        desired: set[Path] = set()
        for tool_rule in tool_rules:
            try:
                path = tool_rule.output_path
            except RulesyncError as exc:
                logger.error("Skipping %s for %s: %s", tool_rule.relative_path, app, exc)
                self.failures.append(f"{app}: {exc}")
                continue
            desired.add(path)
            self.actions.append(
                self._files.write_action(
                    path,
                    processor.render(tool_rule),
                    detail="root rule" if tool_rule.root else "rule",
                    app=app,
                    base_dir=processor.base_dir,
                )
            )

        if not self.config.delete:
            return
        for marker in processor.load_for_deletion():
            path = marker.output_path
            if path in desired or self._files.current(path) is None:
                continue
            self._files.record(path, None)
            self.actions.append(
                Action(
                    ActionKind.REMOVE_FILE,
                    path,
                    ActionStatus.REMOVE,
                    "no longer generated",
                    app=app,
                    base_dir=processor.base_dir,
                )
            )


class ImportPlanner(_PlanCollector):
    """Plan canonical rule files recovered from one tool's existing files."""

    def __init__(
        self,
        tool_id: ToolId | str,
        base_dir: Path,
        global_mode: bool = False,
        filesystem: Optional[FileSystem] = None,
    ) -> None:
        super().__init__(filesystem)
        self.processor = RulesProcessor(
            tool_id,
            base_dir=Path.home() if global_mode else base_dir,
            source_dir=base_dir,
            global_mode=global_mode,
            filesystem=self.filesystem,
        )

    def build(self) -> SyncPlan:
        processor = self.processor
        app = processor.tool_id.value
        try:
            tool_rules = processor.load_tool_rules()
            rules = processor.convert_to_canonical(tool_rules)
        except RulesyncError as exc:
            self.errors.append(exc)
            return self._result()

        for exc in processor.errors:
            self.failures.append(f"{app}: {exc}")

        for rule in rules:
            path = rule.output_path
            content = processor.render(rule)
            self.actions.append(
                self._files.write_action(
                    path,
                    content,
                    detail=f"import from {app}",
                    app=app,
                    base_dir=processor.base_dir,
                )
            )
        return self._result()


def build_generate_plan(
    config: Config, filesystem: Optional[FileSystem] = None
) -> SyncPlan:
    return GeneratePlanner(config=config, filesystem=filesystem).build()


def build_import_plan(
    tool_id: ToolId | str,
    base_dir: Path,
    global_mode: bool = False,
    filesystem: Optional[FileSystem] = None,
) -> SyncPlan:
    return ImportPlanner(
        tool_id, base_dir=base_dir, global_mode=global_mode, filesystem=filesystem
    ).build()
