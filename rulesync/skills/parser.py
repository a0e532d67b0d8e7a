"""Parse canonical skills stored as ``.rulesync/skills/<name>/SKILL.md``."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from rulesync.constants import RULESYNC_SKILLS_DIR, SKILL_FILENAME, WILDCARD_TARGET
from rulesync.errors import RuleFileError
from rulesync.rules.frontmatter import split_frontmatter
from rulesync.skills.models import Skill, SkillMetadata
from rulesync.utils import FileSystem, LocalFileSystem

logger = logging.getLogger(__name__)


def parse_skill(path: Path, filesystem: Optional[FileSystem] = None) -> Skill:
    text = (filesystem or LocalFileSystem()).read_file(path)
    dir_name = path.parent.name if path.name == SKILL_FILENAME else path.stem

    raw, content = split_frontmatter(text, path)

    targets = raw.get("targets", [WILDCARD_TARGET])
    if not isinstance(targets, list):
        targets = [WILDCARD_TARGET]

    metadata = SkillMetadata(
        name=str(raw.get("name", dir_name)),
        description=str(raw.get("description", "")),
        targets=[str(target) for target in targets],
    )
    return Skill(
        dir_name=dir_name, source_path=path, metadata=metadata, content=content.strip()
    )


def load_skills(base_dir: Path, filesystem: Optional[FileSystem] = None) -> list[Skill]:
    fs = filesystem or LocalFileSystem()
    skills: list[Skill] = []
    for path in fs.list_files(base_dir / RULESYNC_SKILLS_DIR, f"*/{SKILL_FILENAME}"):
        try:
            skills.append(parse_skill(path, fs))
        except RuleFileError as exc:
            logger.warning("Skipping skill: %s", exc)
    logger.debug("Found %d skills", len(skills))
    return skills
