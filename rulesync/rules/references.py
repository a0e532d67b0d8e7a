"""Generated text that points a tool's root rule at everything else.

Tools that scan their rule directory need nothing. Tools that only read the
root file get an index of the other rules, either as a YAML listing or, for
the legacy Claude Code layout, as ``@path`` lines in the exact form that
layout has always used.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from rulesync.constants import RULESYNC_COMMANDS_DIR, RULESYNC_SUBAGENTS_DIR, SKILL_FILENAME
from rulesync.rules.frontmatter import dump_yaml
from rulesync.rules.models import ToolRule, join_relative
from rulesync.rules.registry import (
    DiscoveryMode,
    SimulatedConvention,
    ToolAdapterDescriptor,
)
from rulesync.skills.models import Skill

STRUCTURED_INDEX_PREAMBLE = (
    "Please also reference the following rules as needed. The list below is "
    "provided in YAML format, and `@` stands for the project root directory."
)
LEGACY_INLINE_PREAMBLE = "Please also reference the following rules as needed:"
UNDEFINED = "undefined"

CONVENTIONS_OVERVIEW = """# Additional Conventions Beyond the Built-in Functions

As this project's AI coding tool, you must follow the additional conventions below, in addition to the built-in functions."""

COMMANDS_SECTION = f"""## Simulated Custom Slash Commands

Custom slash commands allow you to define frequently-used prompts as Markdown files that you can execute.

### Syntax

Users can use following syntax to invoke a custom command.

```txt
s/<command> [arguments]
```

This syntax employs a double slash (`s/`) to prevent conflicts with built-in slash commands.
The `s` in `s/` stands for *simulate*. Because custom slash commands are not built-in, this syntax provides a pseudo way to invoke them.

When users call a custom slash command, you have to look for the markdown file, `{RULESYNC_COMMANDS_DIR}/{{command}}.md`, then execute the contents of that file as the block of operations."""

SUBAGENTS_SECTION = f"""## Simulated Subagents

Simulated subagents are specialized AI assistants that can be invoked to handle specific types of tasks. They behave much like custom slash commands, and custom slash commands can call them.

When users call a simulated subagent, it will look for the corresponding markdown file, `{RULESYNC_SUBAGENTS_DIR}/{{subagent}}.md`, and execute its contents as the block of operations.

For example, if the user instructs `Call planner subagent to plan the refactoring`, you have to look for the markdown file, `{RULESYNC_SUBAGENTS_DIR}/planner.md`, and execute its contents as the block of operations."""

SKILLS_SECTION_HEADER = """## Simulated Skills

Simulated skills are specialized capabilities that can be invoked to handle specific types of tasks. When you determine that a skill would be helpful for the current task, read the corresponding SKILL.md file and execute its instructions."""


def _non_root(tool_rules: Iterable[ToolRule]) -> list[ToolRule]:
    return [rule for rule in tool_rules if not rule.root]


def structured_index_section(tool_rules: Iterable[ToolRule]) -> str:
    rules = _non_root(tool_rules)
    if not rules:
        return ""

    entries: list[dict[str, Any]] = []
    for rule in rules:
        entry: dict[str, Any] = {"path": f"@{rule.relative_path}"}
        if rule.description:
            entry["description"] = rule.description
        if rule.globs:
            entry["applyTo"] = list(rule.globs)
        entries.append(entry)

    lines = [STRUCTURED_INDEX_PREAMBLE, "", dump_yaml({"rules": entries}).rstrip("\n")]
    return "\n".join(lines) + "\n\n"


def legacy_inline_section(tool_rules: Iterable[ToolRule]) -> str:
    rules = _non_root(tool_rules)
    if not rules:
        return ""

    lines = [LEGACY_INLINE_PREAMBLE, ""]
    for rule in rules:
        description = (
            rule.description.replace('"', '\\"')
            if rule.description is not None
            else UNDEFINED
        )
        globs = ",".join(rule.globs) if rule.globs is not None else UNDEFINED
        lines.append(
            f'@{rule.relative_path} description: "{description}" applyTo: "{globs}"'
        )
    return "\n".join(lines) + "\n\n"


def generate_reference_section(
    mode: DiscoveryMode, tool_rules: Iterable[ToolRule]
) -> str:
    if mode == DiscoveryMode.STRUCTURED_INDEX:
        return structured_index_section(tool_rules)
    if mode == DiscoveryMode.LEGACY_INLINE:
        return legacy_inline_section(tool_rules)
    return ""


def skills_section(skill_list: list[dict[str, str]]) -> str:
    if not skill_list:
        return ""
    listing = dump_yaml({"skillList": skill_list}).rstrip("\n")
    return f"{SKILLS_SECTION_HEADER}\n\n{listing}"


def build_skill_list(
    descriptor: ToolAdapterDescriptor, skills: Iterable[Skill]
) -> list[dict[str, str]]:
    conventions = descriptor.additional_conventions
    if conventions is None or conventions.skills_dir is None:
        return []
    return [
        {
            "name": skill.metadata.name,
            "description": skill.metadata.description,
            "path": "@"
            + join_relative(
                conventions.skills_dir, f"{skill.dir_name}/{SKILL_FILENAME}"
            ),
        }
        for skill in skills
        if skill.is_targeted(descriptor.tool_id.value)
    ]


def generate_additional_conventions(
    descriptor: ToolAdapterDescriptor,
    *,
    global_mode: bool = False,
    simulate_commands: bool = False,
    simulate_subagents: bool = False,
    simulate_skills: bool = False,
    skills: Optional[Iterable[Skill]] = None,
) -> str:
    """Describe the simulated commands, subagents and skills a tool should honour.

    Returns an empty string when no enabled convention applies to the tool.
    """
    conventions = descriptor.additional_conventions
    if conventions is None:
        return ""

    sections: list[str] = []
    if simulate_commands and descriptor.simulates(SimulatedConvention.COMMANDS):
        sections.append(COMMANDS_SECTION)
    if simulate_subagents and descriptor.simulates(SimulatedConvention.SUBAGENTS):
        sections.append(SUBAGENTS_SECTION)
    if (
        simulate_skills
        and descriptor.simulates(SimulatedConvention.SKILLS)
        and (global_mode or not conventions.skills_global_only)
    ):
        section = skills_section(build_skill_list(descriptor, skills or []))
        if section:
            sections.append(section)

    if not sections:
        return ""
    return "\n\n".join([CONVENTIONS_OVERVIEW, *sections]) + "\n\n"
