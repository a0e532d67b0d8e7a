"""Skill data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from rulesync.constants import WILDCARD_TARGET


@dataclass(frozen=True)
class SkillMetadata:
    name: str = ""
    description: str = ""
    targets: list[str] = field(default_factory=lambda: [WILDCARD_TARGET])


@dataclass(frozen=True)
class Skill:
    dir_name: str
    source_path: Path
    metadata: SkillMetadata
    content: str

    def is_targeted(self, tool_id: str) -> bool:
        targets = self.metadata.targets
        if not targets:
            return False
        return WILDCARD_TARGET in targets or tool_id in targets
