"""Drive one tool target through load, convert and write/delete."""

from __future__ import annotations

import logging
from dataclasses import replace
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Callable, Optional, Sequence, Union

from rulesync.constants import (
    ADDITIONAL_CONVENTIONS_STEM,
    DEFAULT_ROOT_GLOBS,
    RULESYNC_DIRNAME,
    RULESYNC_RULES_DIR,
)
from rulesync.errors import MultipleRootRulesError, RulesyncError
from rulesync.rules.models import CanonicalRule, DeletionMarker, RuleFrontmatter, ToolRule
from rulesync.rules.parser import load_canonical_rule
from rulesync.rules.references import (
    generate_additional_conventions,
    generate_reference_section,
)
from rulesync.rules.registry import (
    ToolAdapterDescriptor,
    all_tool_ids,
    get_descriptor,
    global_tool_ids,
)
from rulesync.rules.tool_id import ToolId
from rulesync.skills.models import Skill
from rulesync.utils import FileSystem, LocalFileSystem, add_trailing_newline

logger = logging.getLogger(__name__)

DescriptorLookup = Callable[[Union[ToolId, str]], ToolAdapterDescriptor]
OutputFile = Union[ToolRule, CanonicalRule]


class ProcessorState(str, Enum):
    IDLE = "idle"
    LOADED = "loaded"
    CONVERTED = "converted"
    WRITTEN = "written"
    DELETED = "deleted"


def _relative_posix(path: Path, base_dir: Path) -> str:
    return PurePosixPath(path.relative_to(base_dir)).as_posix()


def _ensure_single_root(rules: Sequence[CanonicalRule]) -> None:
    roots = [rule for rule in rules if rule.root]
    if len(roots) > 1:
        raise MultipleRootRulesError([rule.base_dir / rule.relative_path for rule in roots])


def load_canonical_rules(
    base_dir: Path,
    global_mode: bool = False,
    filesystem: Optional[FileSystem] = None,
) -> list[CanonicalRule]:
    """Read every rule under ``.rulesync/rules``, recursively.

    Falls back to the flat ``.rulesync/*.md`` layout when the rules directory
    holds nothing. Any unreadable or invalid rule aborts the load, as does a
    second root rule. In global mode only the root rule is kept.
    """
    fs = filesystem or LocalFileSystem()
    rules_dir = base_dir / RULESYNC_RULES_DIR
    paths = fs.list_files(rules_dir, "**/*.md")
    logger.debug("Found %d rule files in %s", len(paths), rules_dir)

    if paths:
        rules = [
            load_canonical_rule(
                base_dir,
                _relative_posix(path, rules_dir),
                relative_dir_path=RULESYNC_RULES_DIR,
                filesystem=fs,
            )
            for path in paths
        ]
    else:
        rules = load_legacy_canonical_rules(base_dir, filesystem=fs)

    _ensure_single_root(rules)

    if global_mode:
        non_root = [rule for rule in rules if not rule.root]
        if non_root:
            logger.warning(
                "%d non-root rules found, but global mode only uses the root rule; ignoring them",
                len(non_root),
            )
        return [rule for rule in rules if rule.root]
    return rules


def load_legacy_canonical_rules(
    base_dir: Path, filesystem: Optional[FileSystem] = None
) -> list[CanonicalRule]:
    fs = filesystem or LocalFileSystem()
    legacy_dir = base_dir / RULESYNC_DIRNAME
    paths = fs.list_files(legacy_dir, "*.md")
    if not paths:
        return []
    logger.warning(
        "Rules found directly under %s/; move them to %s/ (the flat layout is deprecated)",
        RULESYNC_DIRNAME,
        RULESYNC_RULES_DIR,
    )
    return [
        load_canonical_rule(
            base_dir,
            path.name,
            relative_dir_path=RULESYNC_DIRNAME,
            filesystem=fs,
        )
        for path in paths
    ]


class RulesProcessor:
    """Convert canonical rules for a single tool and put the results on disk.

    State moves IDLE -> LOADED -> CONVERTED -> WRITTEN (or DELETED). Writes
    overwrite unconditionally, so when two targets share an output path the
    one processed last wins.
    """

    def __init__(
        self,
        tool_id: ToolId | str,
        base_dir: Path = Path("."),
        global_mode: bool = False,
        simulate_commands: bool = False,
        simulate_subagents: bool = False,
        simulate_skills: bool = False,
        skills: Optional[Sequence[Skill]] = None,
        descriptor_lookup: DescriptorLookup = get_descriptor,
        filesystem: Optional[FileSystem] = None,
        source_dir: Optional[Path] = None,
    ) -> None:
        self.descriptor = descriptor_lookup(tool_id)
        self.tool_id = self.descriptor.tool_id
        self.base_dir = base_dir
        # Canonical rules are read from the project even in global mode.
        self.source_dir = source_dir or base_dir
        self.global_mode = global_mode
        self.simulate_commands = simulate_commands
        self.simulate_subagents = simulate_subagents
        self.simulate_skills = simulate_skills
        self.skills = list(skills or [])
        self.filesystem = filesystem or LocalFileSystem()

        self.state = ProcessorState.IDLE
        self.errors: list[Exception] = []

    @property
    def adapter(self):
        return self.descriptor.adapter

    @property
    def simulated(self) -> bool:
        return self.simulate_commands or self.simulate_subagents or self.simulate_skills

    def load_canonical(self) -> list[CanonicalRule]:
        rules = load_canonical_rules(
            self.source_dir, global_mode=self.global_mode, filesystem=self.filesystem
        )
        self.state = ProcessorState.LOADED
        return rules

    def convert(self, rules: Sequence[CanonicalRule]) -> list[ToolRule]:
        tool_rules: list[ToolRule] = []
        for rule in rules:
            if not self.adapter.is_targeted(rule):
                continue
            try:
                tool_rules.append(
                    self.adapter.from_canonical(
                        rule, self.base_dir, global_mode=self.global_mode
                    )
                )
            except Exception as exc:
                logger.error(
                    "Failed to convert %s for %s: %s",
                    rule.relative_path,
                    self.tool_id.value,
                    exc,
                )
                self.errors.append(exc)

        if self.simulated and self.descriptor.emits_separate_conventions_file:
            conventions_rule = self._conventions_rule()
            if conventions_rule is not None:
                tool_rules.append(conventions_rule)

        root = next((rule for rule in tool_rules if rule.root), None)
        if root is not None:
            reference = generate_reference_section(
                self.descriptor.discovery_mode, tool_rules
            )
            conventions = (
                ""
                if self.descriptor.emits_separate_conventions_file
                else self._conventions()
            )
            root.prepend_content(reference + conventions)

        self.state = ProcessorState.CONVERTED
        return tool_rules

    def render(self, output: OutputFile) -> str:
        return add_trailing_newline(output.file_content)

    def write(self, outputs: Sequence[OutputFile]) -> int:
        written = 0
        for output in outputs:
            self.filesystem.write_file(output.output_path, self.render(output))
            written += 1
        self.state = ProcessorState.WRITTEN
        logger.debug("Wrote %d files for %s", written, self.tool_id.value)
        return written

    def load_for_deletion(self) -> list[DeletionMarker]:
        markers = [
            self.adapter.build_deletion_marker(
                self.base_dir, relative, global_mode=self.global_mode
            )
            for relative in self._existing_tool_paths()
        ]
        return [marker for marker in markers if self.adapter.is_deletable(marker)]

    def remove(self, markers: Sequence[DeletionMarker]) -> int:
        removed = 0
        for marker in markers:
            self.filesystem.remove_file(marker.output_path)
            removed += 1
        self.state = ProcessorState.DELETED
        return removed

    def load_tool_rules(self) -> list[ToolRule]:
        tool_rules: list[ToolRule] = []
        for relative in self._existing_tool_paths():
            try:
                tool_rules.append(
                    self.adapter.load_from_file(
                        self.base_dir,
                        relative,
                        global_mode=self.global_mode,
                        filesystem=self.filesystem,
                    )
                )
            except RulesyncError as exc:
                logger.warning("Skipping %s: %s", relative, exc)
                self.errors.append(exc)
        self.state = ProcessorState.LOADED
        return tool_rules

    def convert_to_canonical(
        self, tool_rules: Sequence[ToolRule]
    ) -> list[CanonicalRule]:
        rules = [
            replace(self.adapter.to_canonical(tool_rule), base_dir=self.source_dir)
            for tool_rule in tool_rules
        ]
        self.state = ProcessorState.CONVERTED
        return rules

    def _existing_tool_paths(self) -> list[str]:
        paths = self.adapter.get_settable_paths(global_mode=self.global_mode)
        found: list[str] = []
        root_path = paths.root_path
        if root_path is not None and self.filesystem.exists(self.base_dir / root_path):
            found.append(root_path)
        if paths.non_root_dir is not None:
            pattern = f"**/*.{self.descriptor.file_extension}"
            for path in self.filesystem.list_files(
                self.base_dir / paths.non_root_dir, pattern
            ):
                relative = _relative_posix(path, self.base_dir)
                if relative != root_path:
                    found.append(relative)
        logger.debug("Found %d existing %s rule files", len(found), self.tool_id.value)
        return found

    def _conventions(self) -> str:
        return generate_additional_conventions(
            self.descriptor,
            global_mode=self.global_mode,
            simulate_commands=self.simulate_commands,
            simulate_subagents=self.simulate_subagents,
            simulate_skills=self.simulate_skills,
            skills=self.skills,
        )

    def _conventions_rule(self) -> Optional[ToolRule]:
        content = self._conventions()
        if not content:
            return None
        paths = self.adapter.get_settable_paths(global_mode=self.global_mode)
        if paths.non_root_dir is None:
            return None
        rule = CanonicalRule(
            relative_file_path=f"{ADDITIONAL_CONVENTIONS_STEM}.md",
            frontmatter=RuleFrontmatter(
                root=False,
                targets=[self.tool_id.value],
                description="",
                globs=list(DEFAULT_ROOT_GLOBS),
            ),
            body=content.strip(),
            relative_dir_path=paths.non_root_dir,
            base_dir=self.source_dir,
        )
        return self.adapter.from_canonical(
            rule, self.base_dir, global_mode=self.global_mode
        )

    @staticmethod
    def tool_targets(global_mode: bool = False) -> list[ToolId]:
        return global_tool_ids() if global_mode else all_tool_ids()
