"""Tools that activate a rule through a ``trigger`` frontmatter field."""

from __future__ import annotations

from enum import Enum
from typing import Any

from rulesync.constants import DEFAULT_ROOT_GLOBS
from rulesync.rules.models import CanonicalRule
from rulesync.rules.tool_id import ToolId
from rulesync.rules.tools.base import ToolRuleAdapter, split_globs


class RuleTrigger(str, Enum):
    ALWAYS_ON = "always_on"
    GLOB = "glob"
    MODEL_DECISION = "model_decision"
    MANUAL = "manual"


TRIGGER_VALUES: list[str] = [trigger.value for trigger in RuleTrigger]


class TriggerRuleAdapter(ToolRuleAdapter):
    HAS_FRONTMATTER = True
    OVERRIDE_SCHEMA: dict[str, Any] = {
        "type": "object",
        "properties": {
            "trigger": {"type": "string", "enum": TRIGGER_VALUES},
            "globs": {"type": "string"},
            "description": {"type": "string"},
        },
    }
    NATIVE_SCHEMA = OVERRIDE_SCHEMA

    def build_metadata(self, rule: CanonicalRule) -> dict[str, Any]:
        globs = list(rule.frontmatter.globs or [])
        description = rule.frontmatter.description or ""
        if rule.root or globs == list(DEFAULT_ROOT_GLOBS):
            return {"trigger": RuleTrigger.ALWAYS_ON.value}
        if globs:
            return {"trigger": RuleTrigger.GLOB.value, "globs": ",".join(globs)}
        if description:
            return {
                "trigger": RuleTrigger.MODEL_DECISION.value,
                "description": description,
            }
        return {"trigger": RuleTrigger.MANUAL.value}

    def apply_overrides(
        self, metadata: dict[str, Any], override: dict[str, Any]
    ) -> dict[str, Any]:
        for key in ("trigger", "globs", "description"):
            if key in override:
                metadata[key] = override[key]
        return metadata

    def canonical_fields(
        self, metadata: dict[str, Any], root: bool
    ) -> tuple[str, list[str]]:
        description = str(metadata.get("description") or "")
        trigger = metadata.get("trigger")
        if trigger == RuleTrigger.GLOB.value:
            return description, split_globs(metadata.get("globs"))
        if trigger == RuleTrigger.ALWAYS_ON.value:
            return description, list(DEFAULT_ROOT_GLOBS)
        return description, []

    def native_only_fields(
        self, metadata: dict[str, Any], root: bool
    ) -> dict[str, Any]:
        if "trigger" not in metadata:
            return {}
        return {"trigger": metadata["trigger"]}


class AntigravityRuleAdapter(TriggerRuleAdapter):
    TOOL_ID = ToolId.ANTIGRAVITY


class WindsurfRuleAdapter(TriggerRuleAdapter):
    TOOL_ID = ToolId.WINDSURF
