"""Tests for per-tool conversion between canonical and native rule files."""

from pathlib import Path
from typing import Any, Optional

import pytest

from rulesync.errors import ValidationError
from rulesync.rules.frontmatter import split_frontmatter
from rulesync.rules.models import CanonicalRule, RuleFrontmatter
from rulesync.rules.registry import get_descriptor
from rulesync.rules.tool_id import ToolId
from rulesync.rules.tools import (
    AgentsMdRuleAdapter,
    AntigravityRuleAdapter,
    ClaudeCodeRuleAdapter,
    CodexCliRuleAdapter,
    CopilotRuleAdapter,
    CursorRuleAdapter,
    ReplitRuleAdapter,
    WindsurfRuleAdapter,
)


def _rule(
    name: str,
    root: bool = False,
    description: str = "",
    globs: Optional[list[str]] = None,
    targets: Optional[list[str]] = None,
    overrides: Optional[dict[str, dict[str, Any]]] = None,
    body: str = "Body",
) -> CanonicalRule:
    frontmatter = RuleFrontmatter(
        root=root,
        targets=targets,
        description=description,
        globs=globs,
        overrides=overrides or {},
    )
    return CanonicalRule(
        relative_file_path=name,
        frontmatter=frontmatter.normalized() if targets is None else frontmatter,
        body=body,
    )


def _write(base: Path, relative: str, text: str) -> None:
    path = base / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


# -- targeting ---------------------------------------------------------------


def test_empty_targets_match_no_tool() -> None:
    rule = _rule("a.md", targets=[])
    for tool_id in ToolId:
        assert not get_descriptor(tool_id).adapter.is_targeted(rule)


@pytest.mark.parametrize("targets", [None, ["*"]])
def test_absent_or_wildcard_targets_match_every_tool(targets) -> None:
    frontmatter = RuleFrontmatter(root=True, targets=targets)
    rule = CanonicalRule(relative_file_path="overview.md", frontmatter=frontmatter, body="")
    for tool_id in ToolId:
        assert get_descriptor(tool_id).adapter.is_targeted(rule)


def test_named_targets_match_only_those_tools() -> None:
    rule = _rule("a.md", targets=["cursor"])
    assert CursorRuleAdapter().is_targeted(rule)
    assert not ClaudeCodeRuleAdapter().is_targeted(rule)


def test_replit_only_takes_the_root_rule() -> None:
    adapter = ReplitRuleAdapter()
    assert adapter.is_targeted(_rule("overview.md", root=True))
    assert not adapter.is_targeted(_rule("python.md"))


# -- trigger dialect -----------------------------------------------------------


def test_trigger_for_root_rule_is_always_on(tmp_path: Path) -> None:
    tool_rule = AntigravityRuleAdapter().from_canonical(
        _rule("overview.md", root=True, globs=["**/*"]), tmp_path
    )
    assert tool_rule.relative_path == ".agent/rules/overview.md"
    assert tool_rule.file_content == "---\ntrigger: always_on\n---\n\nBody"


def test_trigger_for_globs_is_glob(tmp_path: Path) -> None:
    tool_rule = AntigravityRuleAdapter().from_canonical(
        _rule("ts.md", globs=["src/**/*.ts", "lib/*.ts"]), tmp_path
    )
    assert tool_rule.metadata == {"trigger": "glob", "globs": "src/**/*.ts,lib/*.ts"}


def test_trigger_for_description_only_is_model_decision(tmp_path: Path) -> None:
    tool_rule = WindsurfRuleAdapter().from_canonical(
        _rule("review.md", description="Use when reviewing"), tmp_path
    )
    assert tool_rule.relative_path == ".windsurf/rules/review.md"
    assert tool_rule.metadata == {
        "trigger": "model_decision",
        "description": "Use when reviewing",
    }


def test_trigger_without_scope_is_manual(tmp_path: Path) -> None:
    tool_rule = AntigravityRuleAdapter().from_canonical(_rule("misc.md"), tmp_path)
    assert tool_rule.metadata == {"trigger": "manual"}


def test_trigger_override_wins(tmp_path: Path) -> None:
    tool_rule = AntigravityRuleAdapter().from_canonical(
        _rule(
            "ts.md",
            globs=["*.ts"],
            overrides={"antigravity": {"trigger": "manual"}},
        ),
        tmp_path,
    )
    assert tool_rule.metadata["trigger"] == "manual"


def test_trigger_import_recovers_globs(tmp_path: Path) -> None:
    _write(
        tmp_path,
        ".agent/rules/ts.md",
        "---\ntrigger: glob\nglobs: a.ts,b.ts\n---\n\nBody\n",
    )
    adapter = AntigravityRuleAdapter()
    tool_rule = adapter.load_from_file(tmp_path, ".agent/rules/ts.md")
    canonical = adapter.to_canonical(tool_rule)

    assert canonical.relative_file_path == "ts.md"
    assert canonical.frontmatter.globs == ["a.ts", "b.ts"]
    assert canonical.frontmatter.overrides == {"antigravity": {"trigger": "glob"}}
    assert canonical.body == "Body"


def test_trigger_import_always_on_means_all_files(tmp_path: Path) -> None:
    _write(tmp_path, ".windsurf/rules/base.md", "---\ntrigger: always_on\n---\nBody\n")
    adapter = WindsurfRuleAdapter()
    canonical = adapter.to_canonical(
        adapter.load_from_file(tmp_path, ".windsurf/rules/base.md")
    )
    assert canonical.frontmatter.globs == ["**/*"]


# -- claude code -----------------------------------------------------------------


def test_claudecode_root_is_plain_markdown(tmp_path: Path) -> None:
    tool_rule = ClaudeCodeRuleAdapter().from_canonical(
        _rule("overview.md", root=True, description="Overview", globs=["**/*"]),
        tmp_path,
    )
    assert tool_rule.relative_path == ".claude/CLAUDE.md"
    assert tool_rule.file_content == "Body"


def test_claudecode_non_root_carries_paths(tmp_path: Path) -> None:
    tool_rule = ClaudeCodeRuleAdapter().from_canonical(
        _rule("python.md", globs=["**/*.py", "tests/**"]), tmp_path
    )
    metadata, body = split_frontmatter(tool_rule.file_content)
    assert tool_rule.relative_path == ".claude/rules/python.md"
    assert metadata == {"paths": "**/*.py, tests/**"}
    assert body.strip() == "Body"


def test_claudecode_non_root_without_globs_has_no_header(tmp_path: Path) -> None:
    tool_rule = ClaudeCodeRuleAdapter().from_canonical(_rule("notes.md"), tmp_path)
    assert tool_rule.file_content == "Body"


def test_claudecode_paths_override(tmp_path: Path) -> None:
    tool_rule = ClaudeCodeRuleAdapter().from_canonical(
        _rule("python.md", globs=["**/*.py"], overrides={"claudecode": {"paths": "src/**"}}),
        tmp_path,
    )
    assert tool_rule.metadata == {"paths": "src/**"}


def test_claudecode_rejects_invalid_native_metadata(tmp_path: Path) -> None:
    _write(tmp_path, ".claude/rules/bad.md", "---\npaths: 3\n---\nBody\n")
    with pytest.raises(ValidationError):
        ClaudeCodeRuleAdapter().load_from_file(tmp_path, ".claude/rules/bad.md")


def test_claudecode_root_import_is_read_as_plain_text(tmp_path: Path) -> None:
    _write(tmp_path, ".claude/CLAUDE.md", "# Memory\n\nRemember things.\n")
    adapter = ClaudeCodeRuleAdapter()
    canonical = adapter.to_canonical(adapter.load_from_file(tmp_path, ".claude/CLAUDE.md"))

    assert canonical.root is True
    assert canonical.relative_file_path == "overview.md"
    assert canonical.frontmatter.globs == ["**/*"]
    assert canonical.body == "# Memory\n\nRemember things."


# -- cursor ------------------------------------------------------------------------


def test_cursor_root_rule_always_applies(tmp_path: Path) -> None:
    tool_rule = CursorRuleAdapter().from_canonical(
        _rule("overview.md", root=True, description="Project overview", globs=["**/*"]),
        tmp_path,
    )
    assert tool_rule.relative_path == ".cursor/rules/overview.mdc"
    assert tool_rule.metadata == {
        "description": "Project overview",
        "globs": "**/*",
        "alwaysApply": True,
    }


def test_cursor_scoped_rule(tmp_path: Path) -> None:
    tool_rule = CursorRuleAdapter().from_canonical(
        _rule("ts.md", description="TS", globs=["*.ts", "*.tsx"]), tmp_path
    )
    assert tool_rule.metadata == {
        "description": "TS",
        "globs": "*.ts,*.tsx",
        "alwaysApply": False,
    }


def test_cursor_overrides(tmp_path: Path) -> None:
    tool_rule = CursorRuleAdapter().from_canonical(
        _rule(
            "ts.md",
            globs=["*.ts"],
            overrides={"cursor": {"alwaysApply": True, "globs": ["src/*.ts"]}},
        ),
        tmp_path,
    )
    assert tool_rule.metadata["alwaysApply"] is True
    assert tool_rule.metadata["globs"] == "src/*.ts"


def test_cursor_import_always_apply_without_globs(tmp_path: Path) -> None:
    _write(
        tmp_path,
        ".cursor/rules/always.mdc",
        "---\ndescription: Always\nglobs:\nalwaysApply: true\n---\n\nBody\n",
    )
    adapter = CursorRuleAdapter()
    canonical = adapter.to_canonical(
        adapter.load_from_file(tmp_path, ".cursor/rules/always.mdc")
    )
    assert canonical.relative_file_path == "always.md"
    assert canonical.frontmatter.description == "Always"
    assert canonical.frontmatter.globs == ["**/*"]
    assert canonical.frontmatter.overrides == {"cursor": {"alwaysApply": True}}


# -- copilot -----------------------------------------------------------------------


def test_copilot_root_file(tmp_path: Path) -> None:
    tool_rule = CopilotRuleAdapter().from_canonical(
        _rule("overview.md", root=True, globs=["**/*"]), tmp_path
    )
    assert tool_rule.relative_path == ".github/copilot-instructions.md"
    assert tool_rule.file_content == "Body"


def test_copilot_instructions_file(tmp_path: Path) -> None:
    tool_rule = CopilotRuleAdapter().from_canonical(
        _rule(
            "python.md",
            description="Python style",
            globs=["**/*.py"],
            overrides={"copilot": {"excludeAgent": "code-review"}},
        ),
        tmp_path,
    )
    assert tool_rule.relative_path == ".github/instructions/python.instructions.md"
    assert tool_rule.metadata == {
        "description": "Python style",
        "applyTo": "**/*.py",
        "excludeAgent": "code-review",
    }


def test_copilot_applies_everywhere_without_globs(tmp_path: Path) -> None:
    tool_rule = CopilotRuleAdapter().from_canonical(_rule("misc.md"), tmp_path)
    assert tool_rule.metadata == {"applyTo": "**"}


def test_copilot_import_strips_instructions_suffix(tmp_path: Path) -> None:
    _write(
        tmp_path,
        ".github/instructions/python.instructions.md",
        "---\napplyTo: '**/*.py'\ndescription: Python\n---\n\nBody\n",
    )
    adapter = CopilotRuleAdapter()
    canonical = adapter.to_canonical(
        adapter.load_from_file(tmp_path, ".github/instructions/python.instructions.md")
    )
    assert canonical.relative_file_path == "python.md"
    assert canonical.frontmatter.description == "Python"
    assert canonical.frontmatter.globs == ["**/*.py"]


# -- agents.md -----------------------------------------------------------------------


def test_agentsmd_subproject_rule_gets_its_own_agents_file(tmp_path: Path) -> None:
    tool_rule = AgentsMdRuleAdapter().from_canonical(
        _rule("api.md", overrides={"agentsmd": {"subprojectPath": "packages/api/"}}),
        tmp_path,
    )
    assert tool_rule.relative_path == "packages/api/AGENTS.md"


def test_agentsmd_plain_rule_goes_to_memories(tmp_path: Path) -> None:
    tool_rule = AgentsMdRuleAdapter().from_canonical(_rule("api.md"), tmp_path)
    assert tool_rule.relative_path == ".agents/memories/api.md"
    assert tool_rule.file_content == "Body"


# -- deletion ------------------------------------------------------------------------


def test_deletion_marker_scope(tmp_path: Path) -> None:
    adapter = ClaudeCodeRuleAdapter()
    rule_file = adapter.build_deletion_marker(tmp_path, ".claude/rules/old.md")
    other_ext = adapter.build_deletion_marker(tmp_path, ".claude/rules/notes.txt")
    root = adapter.build_deletion_marker(tmp_path, ".claude/CLAUDE.md")

    assert adapter.is_deletable(rule_file)
    assert not adapter.is_deletable(other_ext)
    assert adapter.is_deletable(root)


def test_other_mode_root_file_is_never_deletable(tmp_path: Path) -> None:
    adapter = CodexCliRuleAdapter()
    global_root_in_local_mode = adapter.build_deletion_marker(
        tmp_path, ".codex/AGENTS.md", global_mode=False
    )
    local_root_in_global_mode = adapter.build_deletion_marker(
        tmp_path, "AGENTS.md", global_mode=True
    )
    assert not adapter.is_deletable(global_root_in_local_mode)
    assert not adapter.is_deletable(local_root_in_global_mode)


def test_deletion_marker_ignores_file_content(tmp_path: Path) -> None:
    path = tmp_path / ".cursor" / "rules" / "broken.mdc"
    path.parent.mkdir(parents=True)
    path.write_bytes(b"---\n\xff\xfe\x00 truncated")

    marker = CursorRuleAdapter().build_deletion_marker(tmp_path, ".cursor/rules/broken.mdc")
    assert marker.output_path == path
    assert CursorRuleAdapter().is_deletable(marker)


# -- round trip ----------------------------------------------------------------------


@pytest.mark.parametrize("tool_id", list(ToolId), ids=lambda tool: tool.value)
def test_round_trip_keeps_description_globs_and_overrides(
    tool_id: ToolId, tmp_path: Path
) -> None:
    adapter = get_descriptor(tool_id).adapter
    rule = _rule(
        "style.md",
        root=adapter.ROOT_ONLY,
        description="Style guide",
        globs=["src/**/*.ts"],
        overrides={tool_id.value: {"custom": "kept"}},
    )

    canonical = adapter.to_canonical(adapter.from_canonical(rule, tmp_path))

    assert canonical.root == rule.root
    assert canonical.body == rule.body
    assert canonical.frontmatter.description == "Style guide"
    assert canonical.frontmatter.globs == ["src/**/*.ts"]
    assert canonical.frontmatter.overrides[tool_id.value]["custom"] == "kept"
