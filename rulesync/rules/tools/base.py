"""Shared conversion contract between canonical rules and one tool's files."""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath
from typing import Any, ClassVar, Optional

from jsonschema import Draft202012Validator

from rulesync.constants import (
    DEFAULT_ROOT_GLOBS,
    ROOT_RULE_FILENAME,
    RULESYNC_RULES_DIR,
    WILDCARD_TARGET,
)
from rulesync.errors import UnsupportedModeError, ValidationError
from rulesync.rules.frontmatter import split_frontmatter
from rulesync.rules.models import (
    CanonicalRule,
    DeletionMarker,
    RuleFrontmatter,
    ToolRule,
    resolve_within,
)
from rulesync.rules.paths import SettablePaths, resolve_paths
from rulesync.rules.schema import OPAQUE_OVERRIDE_SCHEMA
from rulesync.rules.tool_id import ToolId
from rulesync.utils import FileSystem, LocalFileSystem

logger = logging.getLogger(__name__)


def split_globs(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, list):
        return [str(item).strip() for item in value if str(item).strip()]
    return [part.strip() for part in str(value).split(",") if part.strip()]


class ToolRuleAdapter:
    """Plain Markdown adapter; subclasses override the metadata hooks.

    The default dialect writes the rule body with no frontmatter. Root rules go
    to the tool's root file, or into the rule directory under their own name
    when the tool has no dedicated root file.
    """

    TOOL_ID: ClassVar[ToolId]
    FILE_EXTENSION: ClassVar[str] = "md"
    HAS_FRONTMATTER: ClassVar[bool] = False
    ROOT_ONLY: ClassVar[bool] = False
    OVERRIDE_SCHEMA: ClassVar[dict[str, Any]] = OPAQUE_OVERRIDE_SCHEMA
    NATIVE_SCHEMA: ClassVar[dict[str, Any]] = {"type": "object"}

    @property
    def tool_id(self) -> ToolId:
        return self.TOOL_ID

    def is_targeted(self, rule: CanonicalRule) -> bool:
        if self.ROOT_ONLY and not rule.root:
            return False
        targets = rule.frontmatter.targets
        if targets is None:
            return True
        if not targets:
            return False
        return WILDCARD_TARGET in targets or self.TOOL_ID.value in targets

    def get_settable_paths(
        self, global_mode: bool = False, exclude_tool_dir: bool = False
    ) -> SettablePaths:
        return resolve_paths(
            self.TOOL_ID, global_mode=global_mode, exclude_tool_dir=exclude_tool_dir
        )

    def from_canonical(
        self, rule: CanonicalRule, base_dir: Path, global_mode: bool = False
    ) -> ToolRule:
        paths = self.get_settable_paths(global_mode=global_mode)
        relative_dir_path, relative_file_path = self.output_location(
            rule, paths, global_mode
        )
        frontmatter = rule.frontmatter
        override = frontmatter.override_for(self.TOOL_ID)
        metadata = self.apply_overrides(self.build_metadata(rule), override)
        return ToolRule(
            tool_id=self.TOOL_ID,
            relative_dir_path=relative_dir_path,
            relative_file_path=relative_file_path,
            body=rule.body,
            base_dir=base_dir,
            root=rule.root,
            metadata=metadata,
            description=frontmatter.description,
            globs=list(frontmatter.globs) if frontmatter.globs is not None else None,
            global_mode=global_mode,
            extra=override,
        )

    def to_canonical(self, tool_rule: ToolRule) -> CanonicalRule:
        root = tool_rule.root
        description = tool_rule.description
        globs = tool_rule.globs
        if description is None or globs is None:
            native_description, native_globs = self.canonical_fields(
                tool_rule.metadata, root
            )
            description = native_description if description is None else description
            globs = native_globs if globs is None else globs
        override = dict(tool_rule.extra)
        override.update(self.native_only_fields(tool_rule.metadata, root))
        overrides = {self.TOOL_ID.value: override} if override else {}

        return CanonicalRule(
            relative_file_path=self.canonical_filename(tool_rule),
            frontmatter=RuleFrontmatter(
                root=root,
                targets=[WILDCARD_TARGET],
                description=description,
                globs=list(globs),
                overrides=overrides,
            ),
            body=tool_rule.body,
            relative_dir_path=RULESYNC_RULES_DIR,
            base_dir=tool_rule.base_dir,
        )

    def load_from_file(
        self,
        base_dir: Path,
        relative_path: str,
        global_mode: bool = False,
        filesystem: Optional[FileSystem] = None,
    ) -> ToolRule:
        path = resolve_within(base_dir, relative_path)
        text = (filesystem or LocalFileSystem()).read_file(path)
        paths = self.get_settable_paths(global_mode=global_mode)
        relative = str(PurePosixPath(relative_path))
        root = self.is_root_path(relative, paths)
        metadata, body = self.parse_file(text, path, root)

        description, globs = self.canonical_fields(metadata, root)
        directory, _, filename = relative.rpartition("/")
        logger.debug("Loaded %s rule %s", self.TOOL_ID.value, relative)
        return ToolRule(
            tool_id=self.TOOL_ID,
            relative_dir_path=directory or ".",
            relative_file_path=filename,
            body=body.strip(),
            base_dir=base_dir,
            root=root,
            metadata=metadata,
            description=description,
            globs=globs,
            global_mode=global_mode,
        )

    def parse_file(
        self, text: str, path: Path, root: bool
    ) -> tuple[dict[str, Any], str]:
        if not self.HAS_FRONTMATTER:
            return {}, text
        metadata, body = split_frontmatter(text, path)
        self.validate_metadata(metadata, path)
        return metadata, body

    def build_deletion_marker(
        self, base_dir: Path, relative_path: str, global_mode: bool = False
    ) -> DeletionMarker:
        directory, _, filename = str(PurePosixPath(relative_path)).rpartition("/")
        return DeletionMarker(
            tool_id=self.TOOL_ID,
            relative_dir_path=directory or ".",
            relative_file_path=filename,
            base_dir=base_dir,
            global_mode=global_mode,
        )

    def is_deletable(self, marker: DeletionMarker) -> bool:
        relative = marker.relative_path
        try:
            own = self.get_settable_paths(global_mode=marker.global_mode)
        except UnsupportedModeError:
            return False
        if relative == own.root_path:
            return True
        try:
            other = self.get_settable_paths(global_mode=not marker.global_mode)
        except UnsupportedModeError:
            other = None
        if other is not None and relative == other.root_path:
            return False
        if own.non_root_dir is None:
            return False
        prefix = own.non_root_dir.rstrip("/") + "/"
        return relative.startswith(prefix) and relative.endswith(
            f".{self.FILE_EXTENSION}"
        )

    def validate_metadata(self, metadata: dict[str, Any], path: Path) -> None:
        validator = Draft202012Validator(self.NATIVE_SCHEMA)
        errors = sorted(validator.iter_errors(metadata), key=lambda e: e.json_path)
        if errors:
            raise ValidationError(
                path, [f"{error.json_path}: {error.message}" for error in errors]
            )

    def output_location(
        self, rule: CanonicalRule, paths: SettablePaths, global_mode: bool
    ) -> tuple[str, str]:
        if rule.root and paths.root_filename is not None:
            return paths.root_dir or ".", paths.root_filename
        if paths.non_root_dir is None:
            raise UnsupportedModeError(self.TOOL_ID.value, global_mode)
        return paths.non_root_dir, self.tool_filename(rule.stem)

    def tool_filename(self, stem: str) -> str:
        return f"{stem}.{self.FILE_EXTENSION}"

    def canonical_filename(self, tool_rule: ToolRule) -> str:
        if tool_rule.root:
            return ROOT_RULE_FILENAME
        return str(PurePosixPath(tool_rule.relative_file_path).with_suffix(".md"))

    def is_root_path(self, relative_path: str, paths: SettablePaths) -> bool:
        return paths.root_path is not None and relative_path == paths.root_path

    def build_metadata(self, rule: CanonicalRule) -> dict[str, Any]:
        return {}

    def apply_overrides(
        self, metadata: dict[str, Any], override: dict[str, Any]
    ) -> dict[str, Any]:
        return metadata

    def canonical_fields(
        self, metadata: dict[str, Any], root: bool
    ) -> tuple[str, list[str]]:
        return "", list(DEFAULT_ROOT_GLOBS) if root else []

    def native_only_fields(
        self, metadata: dict[str, Any], root: bool
    ) -> dict[str, Any]:
        return {}
