from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import Any

from rulesync.constants import DEFAULT_ROOT_GLOBS
from rulesync.rules.models import CanonicalRule, ToolRule
from rulesync.rules.tool_id import ToolId
from rulesync.rules.tools.base import ToolRuleAdapter, split_globs

INSTRUCTIONS_SUFFIX = ".instructions.md"
EXCLUDE_AGENT_VALUES: tuple[str, ...] = ("code-review", "coding-agent")


class CopilotRuleAdapter(ToolRuleAdapter):
    """GitHub Copilot custom instructions.

    ``.github/copilot-instructions.md`` holds the root rule as plain Markdown;
    every other rule becomes ``<name>.instructions.md`` scoped by ``applyTo``.
    """

    TOOL_ID = ToolId.COPILOT
    HAS_FRONTMATTER = True
    OVERRIDE_SCHEMA: dict[str, Any] = {
        "type": "object",
        "properties": {
            "excludeAgent": {"type": "string", "enum": list(EXCLUDE_AGENT_VALUES)}
        },
    }
    NATIVE_SCHEMA: dict[str, Any] = {
        "type": "object",
        "properties": {
            "applyTo": {"type": "string"},
            "description": {"type": "string"},
            "excludeAgent": {"type": "string", "enum": list(EXCLUDE_AGENT_VALUES)},
        },
    }

    def build_metadata(self, rule: CanonicalRule) -> dict[str, Any]:
        if rule.root:
            return {}
        metadata: dict[str, Any] = {}
        if rule.frontmatter.description:
            metadata["description"] = rule.frontmatter.description
        globs = rule.frontmatter.globs or []
        metadata["applyTo"] = ",".join(globs) if globs else "**"
        return metadata

    def apply_overrides(
        self, metadata: dict[str, Any], override: dict[str, Any]
    ) -> dict[str, Any]:
        if metadata and override.get("excludeAgent"):
            metadata["excludeAgent"] = override["excludeAgent"]
        return metadata

    def tool_filename(self, stem: str) -> str:
        return f"{stem}{INSTRUCTIONS_SUFFIX}"

    def canonical_filename(self, tool_rule: ToolRule) -> str:
        if tool_rule.root:
            return super().canonical_filename(tool_rule)
        name = tool_rule.relative_file_path
        if name.endswith(INSTRUCTIONS_SUFFIX):
            return f"{name[: -len(INSTRUCTIONS_SUFFIX)]}.md"
        return str(PurePosixPath(name).with_suffix(".md"))

    def parse_file(
        self, text: str, path: Path, root: bool
    ) -> tuple[dict[str, Any], str]:
        if root:
            return {}, text
        return super().parse_file(text, path, root)

    def canonical_fields(
        self, metadata: dict[str, Any], root: bool
    ) -> tuple[str, list[str]]:
        if root:
            return "", list(DEFAULT_ROOT_GLOBS)
        return str(metadata.get("description") or ""), split_globs(
            metadata.get("applyTo")
        )

    def native_only_fields(
        self, metadata: dict[str, Any], root: bool
    ) -> dict[str, Any]:
        if "excludeAgent" not in metadata:
            return {}
        return {"excludeAgent": metadata["excludeAgent"]}
