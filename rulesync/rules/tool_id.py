from enum import Enum

from rulesync.errors import UnsupportedToolError


class ToolId(str, Enum):
    AGENTSMD = "agentsmd"
    AMAZONQCLI = "amazonqcli"
    ANTIGRAVITY = "antigravity"
    AUGMENTCODE = "augmentcode"
    AUGMENTCODE_LEGACY = "augmentcode-legacy"
    CLAUDECODE = "claudecode"
    CLAUDECODE_LEGACY = "claudecode-legacy"
    CLINE = "cline"
    CODEXCLI = "codexcli"
    COPILOT = "copilot"
    CURSOR = "cursor"
    FACTORYDROID = "factorydroid"
    GEMINICLI = "geminicli"
    GOOSE = "goose"
    JUNIE = "junie"
    KILO = "kilo"
    KIRO = "kiro"
    OPENCODE = "opencode"
    QWENCODE = "qwencode"
    REPLIT = "replit"
    ROO = "roo"
    WARP = "warp"
    WINDSURF = "windsurf"


TOOL_ID_VALUES: tuple[str, ...] = tuple(tool.value for tool in ToolId)


def parse_tool_id(value: ToolId | str) -> ToolId:
    """Coerce ``value`` to a ToolId, raising UnsupportedToolError when unknown."""
    if isinstance(value, ToolId):
        return value
    try:
        return ToolId(str(value).lower())
    except ValueError as exc:
        raise UnsupportedToolError(str(value)) from exc
