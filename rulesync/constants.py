from typing import Final


RULESYNC_DIRNAME: Final[str] = ".rulesync"
RULES_DIRNAME: Final[str] = "rules"
SKILLS_DIRNAME: Final[str] = "skills"
RULESYNC_RULES_DIR: Final[str] = f"{RULESYNC_DIRNAME}/{RULES_DIRNAME}"
RULESYNC_SKILLS_DIR: Final[str] = f"{RULESYNC_DIRNAME}/{SKILLS_DIRNAME}"

ROOT_RULE_FILENAME: Final[str] = "overview.md"
SKILL_FILENAME: Final[str] = "SKILL.md"
CONFIG_FILENAME: Final[str] = "rulesync.json"

ADDITIONAL_CONVENTIONS_STEM: Final[str] = "additional-conventions"

WILDCARD_TARGET: Final[str] = "*"
DEFAULT_ROOT_GLOBS: Final[tuple[str, ...]] = ("**/*",)

COMMANDS_DIRNAME: Final[str] = "commands"
SUBAGENTS_DIRNAME: Final[str] = "subagents"
RULESYNC_COMMANDS_DIR: Final[str] = f"{RULESYNC_DIRNAME}/{COMMANDS_DIRNAME}"
RULESYNC_SUBAGENTS_DIR: Final[str] = f"{RULESYNC_DIRNAME}/{SUBAGENTS_DIRNAME}"
