"""Tools whose rule files are plain Markdown with no frontmatter."""

from __future__ import annotations

from typing import Any

from rulesync.rules.models import CanonicalRule
from rulesync.rules.paths import SettablePaths
from rulesync.rules.schema import OPAQUE_OVERRIDE_SCHEMA
from rulesync.rules.tool_id import ToolId
from rulesync.rules.tools.base import ToolRuleAdapter

SUBPROJECT_RULE_FILENAME = "AGENTS.md"


class AmazonQCliRuleAdapter(ToolRuleAdapter):
    TOOL_ID = ToolId.AMAZONQCLI


class AugmentCodeRuleAdapter(ToolRuleAdapter):
    TOOL_ID = ToolId.AUGMENTCODE


class AugmentCodeLegacyRuleAdapter(ToolRuleAdapter):
    TOOL_ID = ToolId.AUGMENTCODE_LEGACY


class ClaudeCodeLegacyRuleAdapter(ToolRuleAdapter):
    TOOL_ID = ToolId.CLAUDECODE_LEGACY


class ClineRuleAdapter(ToolRuleAdapter):
    TOOL_ID = ToolId.CLINE


class FactoryDroidRuleAdapter(ToolRuleAdapter):
    TOOL_ID = ToolId.FACTORYDROID


class GeminiCliRuleAdapter(ToolRuleAdapter):
    TOOL_ID = ToolId.GEMINICLI


class GooseRuleAdapter(ToolRuleAdapter):
    TOOL_ID = ToolId.GOOSE


class JunieRuleAdapter(ToolRuleAdapter):
    TOOL_ID = ToolId.JUNIE


class KiloRuleAdapter(ToolRuleAdapter):
    TOOL_ID = ToolId.KILO


class KiroRuleAdapter(ToolRuleAdapter):
    TOOL_ID = ToolId.KIRO


class OpenCodeRuleAdapter(ToolRuleAdapter):
    TOOL_ID = ToolId.OPENCODE


class QwenCodeRuleAdapter(ToolRuleAdapter):
    TOOL_ID = ToolId.QWENCODE


class ReplitRuleAdapter(ToolRuleAdapter):
    """Replit reads a single replit.md, so only the root rule applies."""

    TOOL_ID = ToolId.REPLIT
    ROOT_ONLY = True


class RooRuleAdapter(ToolRuleAdapter):
    TOOL_ID = ToolId.ROO


class WarpRuleAdapter(ToolRuleAdapter):
    TOOL_ID = ToolId.WARP


class AgentsMdRuleAdapter(ToolRuleAdapter):
    """AGENTS.md dialect; ``agentsmd.subprojectPath`` relocates a non-root rule.

    A non-root rule carrying a subproject path becomes ``<path>/AGENTS.md``
    instead of a memory file, so nested projects get their own instructions.
    """

    TOOL_ID = ToolId.AGENTSMD
    OVERRIDE_SCHEMA: dict[str, Any] = {
        "type": "object",
        "properties": {"subprojectPath": {"type": "string"}},
    }

    def output_location(
        self, rule: CanonicalRule, paths: SettablePaths, global_mode: bool
    ) -> tuple[str, str]:
        subproject = rule.frontmatter.override_for(ToolId.AGENTSMD).get(
            "subprojectPath"
        )
        if not rule.root and subproject:
            return str(subproject).strip("/") or ".", SUBPROJECT_RULE_FILENAME
        return super().output_location(rule, paths, global_mode)


class CodexCliRuleAdapter(AgentsMdRuleAdapter):
    TOOL_ID = ToolId.CODEXCLI
    OVERRIDE_SCHEMA = OPAQUE_OVERRIDE_SCHEMA
