"""Tests for the tool catalog and its derived views."""

import pytest

from rulesync.errors import UnsupportedToolError
from rulesync.rules.registry import (
    TOOL_CATALOG,
    DiscoveryMode,
    SimulatedConvention,
    all_tool_ids,
    expand_targets,
    get_descriptor,
    global_tool_ids,
    legacy_tool_ids,
    tool_ids_by_capability,
    tool_ids_simulating,
)
from rulesync.rules.tool_id import ToolId


def test_catalog_covers_every_tool_in_fixed_order() -> None:
    assert list(TOOL_CATALOG) == list(ToolId)
    assert all_tool_ids() == list(ToolId)


def test_descriptor_matches_its_adapter() -> None:
    for tool_id, descriptor in TOOL_CATALOG.items():
        assert descriptor.tool_id == tool_id
        assert descriptor.adapter.tool_id == tool_id
        assert descriptor.file_extension == descriptor.adapter.FILE_EXTENSION


def test_unknown_tool_lookup_fails() -> None:
    with pytest.raises(UnsupportedToolError):
        get_descriptor("notepad")


def test_global_tools() -> None:
    ids = global_tool_ids()
    assert ToolId.CLAUDECODE in ids
    assert ToolId.CODEXCLI in ids
    assert ToolId.OPENCODE in ids
    assert ToolId.CURSOR not in ids
    assert ToolId.REPLIT not in ids


def test_discovery_modes() -> None:
    structured = tool_ids_by_capability(discovery_mode=DiscoveryMode.STRUCTURED_INDEX)
    inline = tool_ids_by_capability(discovery_mode=DiscoveryMode.LEGACY_INLINE)
    assert inline == [ToolId.CLAUDECODE_LEGACY]
    assert set(structured) == {
        ToolId.AGENTSMD,
        ToolId.AUGMENTCODE_LEGACY,
        ToolId.CODEXCLI,
        ToolId.FACTORYDROID,
        ToolId.GEMINICLI,
        ToolId.GOOSE,
        ToolId.JUNIE,
        ToolId.KIRO,
        ToolId.OPENCODE,
        ToolId.QWENCODE,
        ToolId.WARP,
    }
    assert get_descriptor(ToolId.CURSOR).discovery_mode == DiscoveryMode.AUTO


def test_simulated_conventions() -> None:
    assert tool_ids_simulating("commands") == [
        ToolId.AGENTSMD,
        ToolId.COPILOT,
        ToolId.CURSOR,
        ToolId.GEMINICLI,
        ToolId.ROO,
    ]
    assert ToolId.CODEXCLI in tool_ids_simulating(SimulatedConvention.SUBAGENTS)
    assert ToolId.ROO not in tool_ids_simulating(SimulatedConvention.SKILLS)


def test_separate_conventions_file_tools() -> None:
    separate = [
        tool_id
        for tool_id, descriptor in TOOL_CATALOG.items()
        if descriptor.emits_separate_conventions_file
    ]
    assert separate == [ToolId.CURSOR, ToolId.ROO]


def test_wildcard_expansion_skips_legacy_tools() -> None:
    expanded = expand_targets(["*"])
    assert set(legacy_tool_ids()) == {
        ToolId.AUGMENTCODE_LEGACY,
        ToolId.CLAUDECODE_LEGACY,
    }
    assert ToolId.CLAUDECODE_LEGACY not in expanded
    assert ToolId.CLAUDECODE in expanded
    assert len(expanded) == len(ToolId) - 2


def test_explicit_targets_keep_order_and_drop_duplicates() -> None:
    assert expand_targets(["cursor", "claudecode-legacy", "cursor"]) == [
        ToolId.CURSOR,
        ToolId.CLAUDECODE_LEGACY,
    ]
