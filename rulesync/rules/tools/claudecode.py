from __future__ import annotations

from pathlib import Path
from typing import Any

from rulesync.constants import DEFAULT_ROOT_GLOBS
from rulesync.rules.models import CanonicalRule
from rulesync.rules.tool_id import ToolId
from rulesync.rules.tools.base import ToolRuleAdapter, split_globs


class ClaudeCodeRuleAdapter(ToolRuleAdapter):
    """CLAUDE.md plus path-scoped rules under ``.claude/rules``.

    The root file is plain Markdown. Non-root rules carry a ``paths``
    frontmatter field; a ``claudecode.paths`` override replaces the globs.
    """

    TOOL_ID = ToolId.CLAUDECODE
    HAS_FRONTMATTER = True
    OVERRIDE_SCHEMA: dict[str, Any] = {
        "type": "object",
        "properties": {"paths": {"type": "string"}},
    }
    NATIVE_SCHEMA = OVERRIDE_SCHEMA

    def build_metadata(self, rule: CanonicalRule) -> dict[str, Any]:
        if rule.root:
            return {}
        override = rule.frontmatter.override_for(self.TOOL_ID)
        paths = override.get("paths")
        if paths is None and rule.frontmatter.globs:
            paths = ", ".join(rule.frontmatter.globs)
        return {"paths": str(paths)} if paths else {}

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
        return "", split_globs(metadata.get("paths"))
