"""Rule data models."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path, PurePosixPath
from typing import Any, Optional

from rulesync.constants import RULESYNC_RULES_DIR, WILDCARD_TARGET
from rulesync.errors import PathTraversalError
from rulesync.rules.frontmatter import stringify_frontmatter
from rulesync.rules.tool_id import ToolId

CANONICAL_FIELDS: tuple[str, ...] = ("root", "targets", "description", "globs")


def join_relative(directory: str, filename: str) -> str:
    if not directory or directory == ".":
        return str(PurePosixPath(filename))
    return str(PurePosixPath(directory) / filename)


def resolve_within(base_dir: Path, relative: str) -> Path:
    """Join ``relative`` onto ``base_dir``, refusing paths that climb out of it."""
    candidate = (base_dir / relative).resolve()
    root = base_dir.resolve()
    if candidate != root and root not in candidate.parents:
        raise PathTraversalError(base_dir / relative, base_dir)
    return base_dir / relative


@dataclass(frozen=True)
class RuleFrontmatter:
    root: bool = False
    targets: Optional[list[str]] = None
    description: Optional[str] = None
    globs: Optional[list[str]] = None
    overrides: dict[str, dict[str, Any]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RuleFrontmatter:
        overrides = {
            str(key): dict(value)
            for key, value in data.items()
            if key not in CANONICAL_FIELDS and isinstance(value, dict)
        }
        targets = data.get("targets")
        globs = data.get("globs")
        description = data.get("description")
        return cls(
            root=bool(data.get("root", False)),
            targets=[str(item) for item in targets] if targets is not None else None,
            description=str(description) if description is not None else None,
            globs=[str(item) for item in globs] if globs is not None else None,
            overrides=overrides,
        )

    def normalized(self) -> RuleFrontmatter:
        return replace(
            self,
            targets=list(self.targets) if self.targets is not None else [WILDCARD_TARGET],
            description=self.description if self.description is not None else "",
            globs=list(self.globs) if self.globs is not None else [],
        )

    def override_for(self, tool_id: ToolId | str) -> dict[str, Any]:
        key = tool_id.value if isinstance(tool_id, ToolId) else str(tool_id)
        return dict(self.overrides.get(key, {}))

    def as_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"root": self.root}
        if self.targets is not None:
            data["targets"] = list(self.targets)
        if self.description is not None:
            data["description"] = self.description
        if self.globs is not None:
            data["globs"] = list(self.globs)
        for key, value in self.overrides.items():
            data[key] = dict(value)
        return data


@dataclass(frozen=True)
class CanonicalRule:
    relative_file_path: str
    frontmatter: RuleFrontmatter
    body: str
    relative_dir_path: str = RULESYNC_RULES_DIR
    base_dir: Path = Path(".")

    @property
    def root(self) -> bool:
        return self.frontmatter.root

    @property
    def stem(self) -> str:
        return str(PurePosixPath(self.relative_file_path).with_suffix(""))

    @property
    def relative_path(self) -> str:
        return join_relative(self.relative_dir_path, self.relative_file_path)

    @property
    def output_path(self) -> Path:
        return resolve_within(self.base_dir, self.relative_path)

    @property
    def file_content(self) -> str:
        return stringify_frontmatter(self.frontmatter.as_dict(), self.body)


@dataclass
class ToolRule:
    """One tool-native rule file, produced from a canonical rule or read from disk."""

    tool_id: ToolId
    relative_dir_path: str
    relative_file_path: str
    body: str
    base_dir: Path = Path(".")
    root: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)
    description: Optional[str] = None
    globs: Optional[list[str]] = None
    global_mode: bool = False
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def relative_path(self) -> str:
        return join_relative(self.relative_dir_path, self.relative_file_path)

    @property
    def output_path(self) -> Path:
        return resolve_within(self.base_dir, self.relative_path)

    @property
    def file_content(self) -> str:
        return stringify_frontmatter(self.metadata, self.body)

    def prepend_content(self, text: str) -> None:
        if text:
            self.body = text + self.body


@dataclass(frozen=True)
class DeletionMarker:
    """Identifies a tool file for removal without ever reading it."""

    tool_id: ToolId
    relative_dir_path: str
    relative_file_path: str
    base_dir: Path = Path(".")
    global_mode: bool = False

    @property
    def relative_path(self) -> str:
        return join_relative(self.relative_dir_path, self.relative_file_path)

    @property
    def output_path(self) -> Path:
        return resolve_within(self.base_dir, self.relative_path)
