from rulesync.rules.tools.base import ToolRuleAdapter
from rulesync.rules.tools.claudecode import ClaudeCodeRuleAdapter
from rulesync.rules.tools.copilot import CopilotRuleAdapter
from rulesync.rules.tools.cursor import CursorRuleAdapter
from rulesync.rules.tools.markdown import (
    AgentsMdRuleAdapter,
    AmazonQCliRuleAdapter,
    AugmentCodeLegacyRuleAdapter,
    AugmentCodeRuleAdapter,
    ClaudeCodeLegacyRuleAdapter,
    ClineRuleAdapter,
    CodexCliRuleAdapter,
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
    WarpRuleAdapter,
)
from rulesync.rules.tools.trigger import (
    AntigravityRuleAdapter,
    RuleTrigger,
    WindsurfRuleAdapter,
)

__all__ = [
    "ToolRuleAdapter",
    "AgentsMdRuleAdapter",
    "AmazonQCliRuleAdapter",
    "AntigravityRuleAdapter",
    "AugmentCodeLegacyRuleAdapter",
    "AugmentCodeRuleAdapter",
    "ClaudeCodeLegacyRuleAdapter",
    "ClaudeCodeRuleAdapter",
    "ClineRuleAdapter",
    "CodexCliRuleAdapter",
    "CopilotRuleAdapter",
    "CursorRuleAdapter",
    "FactoryDroidRuleAdapter",
    "GeminiCliRuleAdapter",
    "GooseRuleAdapter",
    "JunieRuleAdapter",
    "KiloRuleAdapter",
    "KiroRuleAdapter",
    "OpenCodeRuleAdapter",
    "QwenCodeRuleAdapter",
    "ReplitRuleAdapter",
    "RooRuleAdapter",
    "RuleTrigger",
    "WarpRuleAdapter",
    "WindsurfRuleAdapter",
]
