"""Tool catalog: one descriptor per supported tool, in a fixed order."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from rulesync.constants import WILDCARD_TARGET
from rulesync.rules.paths import supports_mode
from rulesync.rules.tool_id import ToolId, parse_tool_id
from rulesync.rules.tools import (
    AgentsMdRuleAdapter,
    AmazonQCliRuleAdapter,
    AntigravityRuleAdapter,
    AugmentCodeLegacyRuleAdapter,
    AugmentCodeRuleAdapter,
    ClaudeCodeLegacyRuleAdapter,
    ClaudeCodeRuleAdapter,
    ClineRuleAdapter,
    CodexCliRuleAdapter,
    CopilotRuleAdapter,
    CursorRuleAdapter,
    FactoryDroidRuleAdapter,
    GeminiCliRuleAdapter,
    GooseRuleAdapter,
    JunieRuleAdapter,
    KiloRuleAdapter,
    KiroRuleAdapter,
    OpenCodeRuleAdapter,
    QwenCodeRuleAdapter,
    ReplitRuleAdapter,
    RooRuleAdapter,
    ToolRuleAdapter,
    WarpRuleAdapter,
    WindsurfRuleAdapter,
)


class DiscoveryMode(str, Enum):
    AUTO = "auto"
    STRUCTURED_INDEX = "structured-index"
    LEGACY_INLINE = "legacy-inline"


class SimulatedConvention(str, Enum):
    COMMANDS = "commands"
    SUBAGENTS = "subagents"
    SKILLS = "skills"


@dataclass(frozen=True)
class AdditionalConventions:
    commands: bool = False
    subagents: bool = False
    skills_dir: Optional[str] = None
    skills_global_only: bool = False

    def supports(self, convention: SimulatedConvention) -> bool:
        if convention == SimulatedConvention.COMMANDS:
            return self.commands
        if convention == SimulatedConvention.SUBAGENTS:
            return self.subagents
        return self.skills_dir is not None


@dataclass(frozen=True)
class ToolAdapterDescriptor:
    tool_id: ToolId
    label: str
    adapter: ToolRuleAdapter
    file_extension: str
    supports_global_mode: bool
    discovery_mode: DiscoveryMode = DiscoveryMode.AUTO
    additional_conventions: Optional[AdditionalConventions] = None
    emits_separate_conventions_file: bool = False
    legacy: bool = False

    def simulates(self, convention: SimulatedConvention) -> bool:
        if self.additional_conventions is None:
            return False
        return self.additional_conventions.supports(convention)


def _descriptor(
    adapter: ToolRuleAdapter,
    label: str,
    discovery_mode: DiscoveryMode = DiscoveryMode.AUTO,
    additional_conventions: Optional[AdditionalConventions] = None,
    emits_separate_conventions_file: bool = False,
    legacy: bool = False,
) -> ToolAdapterDescriptor:
    return ToolAdapterDescriptor(
        tool_id=adapter.tool_id,
        label=label,
        adapter=adapter,
        file_extension=adapter.FILE_EXTENSION,
        supports_global_mode=supports_mode(adapter.tool_id, global_mode=True),
        discovery_mode=discovery_mode,
        additional_conventions=additional_conventions,
        emits_separate_conventions_file=emits_separate_conventions_file,
        legacy=legacy,
    )


_INDEX = DiscoveryMode.STRUCTURED_INDEX

TOOL_CATALOG: dict[ToolId, ToolAdapterDescriptor] = {
    descriptor.tool_id: descriptor
    for descriptor in (
        _descriptor(
            AgentsMdRuleAdapter(),
            "AGENTS.md",
            discovery_mode=_INDEX,
            additional_conventions=AdditionalConventions(
                commands=True, subagents=True, skills_dir=".agents/skills"
            ),
        ),
        _descriptor(AmazonQCliRuleAdapter(), "Amazon Q Developer CLI"),
        _descriptor(AntigravityRuleAdapter(), "Google Antigravity"),
        _descriptor(AugmentCodeRuleAdapter(), "AugmentCode"),
        _descriptor(
            AugmentCodeLegacyRuleAdapter(),
            "AugmentCode (legacy)",
            discovery_mode=_INDEX,
            legacy=True,
        ),
        _descriptor(ClaudeCodeRuleAdapter(), "Claude Code"),
        _descriptor(
            ClaudeCodeLegacyRuleAdapter(),
            "Claude Code (legacy)",
            discovery_mode=DiscoveryMode.LEGACY_INLINE,
            legacy=True,
        ),
        _descriptor(ClineRuleAdapter(), "Cline"),
        _descriptor(
            CodexCliRuleAdapter(),
            "OpenAI Codex CLI",
            discovery_mode=_INDEX,
            additional_conventions=AdditionalConventions(
                subagents=True, skills_dir=".codex/skills", skills_global_only=True
            ),
        ),
        _descriptor(
            CopilotRuleAdapter(),
            "GitHub Copilot",
            additional_conventions=AdditionalConventions(
                commands=True, subagents=True, skills_dir=".github/skills"
            ),
        ),
        _descriptor(
            CursorRuleAdapter(),
            "Cursor",
            additional_conventions=AdditionalConventions(
                commands=True, subagents=True, skills_dir=".cursor/skills"
            ),
            emits_separate_conventions_file=True,
        ),
        _descriptor(FactoryDroidRuleAdapter(), "Factory Droid", discovery_mode=_INDEX),
        _descriptor(
            GeminiCliRuleAdapter(),
            "Gemini CLI",
            discovery_mode=_INDEX,
            additional_conventions=AdditionalConventions(
                commands=True, subagents=True, skills_dir=".gemini/skills"
            ),
        ),
        _descriptor(GooseRuleAdapter(), "Goose", discovery_mode=_INDEX),
        _descriptor(JunieRuleAdapter(), "JetBrains Junie", discovery_mode=_INDEX),
        _descriptor(KiloRuleAdapter(), "Kilo Code"),
        _descriptor(KiroRuleAdapter(), "Kiro", discovery_mode=_INDEX),
        _descriptor(OpenCodeRuleAdapter(), "OpenCode", discovery_mode=_INDEX),
        _descriptor(QwenCodeRuleAdapter(), "Qwen Code", discovery_mode=_INDEX),
        _descriptor(ReplitRuleAdapter(), "Replit"),
        _descriptor(
            RooRuleAdapter(),
            "Roo Code",
            additional_conventions=AdditionalConventions(commands=True, subagents=True),
            emits_separate_conventions_file=True,
        ),
        _descriptor(WarpRuleAdapter(), "Warp", discovery_mode=_INDEX),
        _descriptor(WindsurfRuleAdapter(), "Windsurf"),
    )
}

CONFLICTING_TOOL_IDS: tuple[tuple[ToolId, ToolId], ...] = (
    (ToolId.AUGMENTCODE, ToolId.AUGMENTCODE_LEGACY),
    (ToolId.CLAUDECODE, ToolId.CLAUDECODE_LEGACY),
)


def get_descriptor(tool: ToolId | str) -> ToolAdapterDescriptor:
    return TOOL_CATALOG[parse_tool_id(tool)]


def tool_ids_by_capability(
    *,
    supports_global: bool | None = None,
    discovery_mode: DiscoveryMode | None = None,
    legacy: bool | None = None,
) -> list[ToolId]:
    ids: list[ToolId] = []
    for tool_id, descriptor in TOOL_CATALOG.items():
        if (
            supports_global is not None
            and descriptor.supports_global_mode != supports_global
        ):
            continue
        if discovery_mode is not None and descriptor.discovery_mode != discovery_mode:
            continue
        if legacy is not None and descriptor.legacy != legacy:
            continue
        ids.append(tool_id)
    return ids


def all_tool_ids() -> list[ToolId]:
    return list(TOOL_CATALOG)


def global_tool_ids() -> list[ToolId]:
    return tool_ids_by_capability(supports_global=True)


def legacy_tool_ids() -> list[ToolId]:
    return tool_ids_by_capability(legacy=True)


def tool_ids_simulating(convention: SimulatedConvention | str) -> list[ToolId]:
    wanted = SimulatedConvention(convention)
    return [
        tool_id
        for tool_id, descriptor in TOOL_CATALOG.items()
        if descriptor.simulates(wanted)
    ]


def expand_targets(targets: list[str]) -> list[ToolId]:
    """Resolve ``*`` and tool names to ids, keeping legacy tools out of ``*``."""
    if WILDCARD_TARGET in targets:
        ids = tool_ids_by_capability(legacy=False)
    else:
        ids = [parse_tool_id(target) for target in targets]
    return list(dict.fromkeys(ids))


def override_schemas() -> dict[str, dict[str, Any]]:
    return {
        tool_id.value: descriptor.adapter.OVERRIDE_SCHEMA
        for tool_id, descriptor in TOOL_CATALOG.items()
    }
