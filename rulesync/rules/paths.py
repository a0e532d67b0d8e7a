"""Where each tool keeps its rule files, locally and globally."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from rulesync.errors import UnsupportedModeError
from rulesync.rules.tool_id import ToolId, parse_tool_id


@dataclass(frozen=True)
class SettablePaths:
    root_dir: Optional[str] = None
    root_filename: Optional[str] = None
    non_root_dir: Optional[str] = None
    tool_dir: Optional[str] = field(default=None, compare=False)

    @property
    def root_path(self) -> Optional[str]:
        if self.root_filename is None:
            return None
        if not self.root_dir or self.root_dir == ".":
            return self.root_filename
        return f"{self.root_dir}/{self.root_filename}"


@dataclass(frozen=True)
class _Layout:
    local: Optional[SettablePaths]
    global_: Optional[SettablePaths] = None


def _root(path: str) -> tuple[str, str]:
    if "/" not in path:
        return ".", path
    directory, _, filename = path.rpartition("/")
    return directory, filename


def _default_tool_dir(*candidates: Optional[str]) -> Optional[str]:
    for candidate in candidates:
        if candidate and candidate != "." and candidate.startswith("."):
            return candidate.split("/", 1)[0]
    return None


def _paths(
    root: Optional[str] = None,
    non_root: Optional[str] = None,
    tool_dir: Optional[str] = None,
) -> SettablePaths:
    if root is None:
        return SettablePaths(
            non_root_dir=non_root, tool_dir=tool_dir or _default_tool_dir(non_root)
        )
    root_dir, root_filename = _root(root)
    return SettablePaths(
        root_dir=root_dir,
        root_filename=root_filename,
        non_root_dir=non_root,
        tool_dir=tool_dir or _default_tool_dir(non_root, root_dir),
    )


_LAYOUTS: dict[ToolId, _Layout] = {
    ToolId.AGENTSMD: _Layout(local=_paths("AGENTS.md", ".agents/memories")),
    ToolId.AMAZONQCLI: _Layout(local=_paths(non_root=".amazonq/rules")),
    ToolId.ANTIGRAVITY: _Layout(local=_paths(non_root=".agent/rules")),
    ToolId.AUGMENTCODE: _Layout(local=_paths(non_root=".augment/rules")),
    ToolId.AUGMENTCODE_LEGACY: _Layout(
        local=_paths(".augment-guidelines", ".augment/rules")
    ),
    ToolId.CLAUDECODE: _Layout(
        local=_paths(".claude/CLAUDE.md", ".claude/rules"),
        global_=_paths(".claude/CLAUDE.md"),
    ),
    ToolId.CLAUDECODE_LEGACY: _Layout(
        local=_paths("CLAUDE.md", ".claude/memories"),
        global_=_paths(".claude/CLAUDE.md"),
    ),
    ToolId.CLINE: _Layout(local=_paths(non_root=".clinerules")),
    ToolId.CODEXCLI: _Layout(
        local=_paths("AGENTS.md", ".codex/memories"),
        global_=_paths(".codex/AGENTS.md"),
    ),
    ToolId.COPILOT: _Layout(
        local=_paths(".github/copilot-instructions.md", ".github/instructions")
    ),
    ToolId.CURSOR: _Layout(local=_paths(non_root=".cursor/rules")),
    ToolId.FACTORYDROID: _Layout(
        local=_paths(".factory/AGENTS.md", ".factory/memories"),
        global_=_paths(".factory/AGENTS.md"),
    ),
    ToolId.GEMINICLI: _Layout(
        local=_paths("GEMINI.md", ".gemini/memories"),
        global_=_paths(".gemini/GEMINI.md"),
    ),
    ToolId.GOOSE: _Layout(
        local=_paths(".goosehints", ".goose/memories"),
        global_=_paths(".config/goose/.goosehints", tool_dir=".config/goose"),
    ),
    ToolId.JUNIE: _Layout(local=_paths(".junie/guidelines.md", ".junie/memories")),
    ToolId.KILO: _Layout(local=_paths(non_root=".kilocode/rules")),
    ToolId.KIRO: _Layout(local=_paths(".kiro/steering/product.md", ".kiro/steering")),
    ToolId.OPENCODE: _Layout(
        local=_paths("AGENTS.md", ".opencode/memories"),
        global_=_paths(".config/opencode/AGENTS.md", tool_dir=".config/opencode"),
    ),
    ToolId.QWENCODE: _Layout(local=_paths("QWEN.md", ".qwen/memories")),
    # Replit only reads a project-level replit.md; there is no user-level file.
    ToolId.REPLIT: _Layout(local=_paths("replit.md")),
    ToolId.ROO: _Layout(local=_paths(non_root=".roo/rules")),
    ToolId.WARP: _Layout(local=_paths("WARP.md", ".warp/memories")),
    ToolId.WINDSURF: _Layout(local=_paths(non_root=".windsurf/rules")),
}


def _strip_tool_dir(path: Optional[str], tool_dir: Optional[str]) -> Optional[str]:
    if path is None or tool_dir is None:
        return path
    if path == tool_dir:
        return "."
    prefix = f"{tool_dir}/"
    return path[len(prefix) :] if path.startswith(prefix) else path


def resolve_paths(
    tool_id: ToolId | str,
    global_mode: bool = False,
    exclude_tool_dir: bool = False,
) -> SettablePaths:
    """Return the rule locations for ``tool_id`` in the requested mode.

    ``exclude_tool_dir`` drops the leading tool directory (``.claude/rules``
    becomes ``rules``) for callers whose base directory already is the tool
    directory. Raises UnsupportedModeError when the tool has no location in
    that mode.
    """
    tool = parse_tool_id(tool_id)
    layout = _LAYOUTS[tool]
    paths = layout.global_ if global_mode else layout.local
    if paths is None:
        raise UnsupportedModeError(tool.value, global_mode)
    if not exclude_tool_dir:
        return paths
    return SettablePaths(
        root_dir=_strip_tool_dir(paths.root_dir, paths.tool_dir),
        root_filename=paths.root_filename,
        non_root_dir=_strip_tool_dir(paths.non_root_dir, paths.tool_dir),
        tool_dir=paths.tool_dir,
    )


def supports_mode(tool_id: ToolId | str, global_mode: bool) -> bool:
    try:
        resolve_paths(tool_id, global_mode=global_mode)
    except UnsupportedModeError:
        return False
    return True
