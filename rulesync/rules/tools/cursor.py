from __future__ import annotations

from typing import Any

from rulesync.constants import DEFAULT_ROOT_GLOBS
from rulesync.rules.models import CanonicalRule
from rulesync.rules.tool_id import ToolId
from rulesync.rules.tools.base import ToolRuleAdapter, split_globs


class CursorRuleAdapter(ToolRuleAdapter):
    """Compile to Cursor .mdc format with camelCase frontmatter."""

    TOOL_ID = ToolId.CURSOR
    FILE_EXTENSION = "mdc"
    HAS_FRONTMATTER = True
    OVERRIDE_SCHEMA: dict[str, Any] = {
        "type": "object",
        "properties": {
            "alwaysApply": {"type": "boolean"},
            "description": {"type": "string"},
            "globs": {"type": "array", "items": {"type": "string"}},
        },
    }
    NATIVE_SCHEMA: dict[str, Any] = {
        "type": "object",
        "properties": {
            "alwaysApply": {"type": "boolean"},
            "description": {"type": ["string", "null"]},
            "globs": {"type": ["string", "null"]},
        },
    }

    def build_metadata(self, rule: CanonicalRule) -> dict[str, Any]:
        globs = list(rule.frontmatter.globs or [])
        return {
            "description": rule.frontmatter.description or "",
            "globs": ",".join(globs),
            "alwaysApply": rule.root or globs == list(DEFAULT_ROOT_GLOBS),
        }

    def apply_overrides(
        self, metadata: dict[str, Any], override: dict[str, Any]
    ) -> dict[str, Any]:
        if "description" in override:
            metadata["description"] = override["description"]
        if "globs" in override:
            metadata["globs"] = ",".join(override["globs"])
        if "alwaysApply" in override:
            metadata["alwaysApply"] = bool(override["alwaysApply"])
        return metadata

    def canonical_fields(
        self, metadata: dict[str, Any], root: bool
    ) -> tuple[str, list[str]]:
        globs = split_globs(metadata.get("globs"))
        if not globs and metadata.get("alwaysApply"):
            globs = list(DEFAULT_ROOT_GLOBS)
        return str(metadata.get("description") or ""), globs

    def native_only_fields(
        self, metadata: dict[str, Any], root: bool
    ) -> dict[str, Any]:
        if "alwaysApply" not in metadata:
            return {}
        return {"alwaysApply": bool(metadata["alwaysApply"])}
