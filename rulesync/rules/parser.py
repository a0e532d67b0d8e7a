"""Parse and serialize canonical rules with YAML frontmatter."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from rulesync.constants import RULESYNC_RULES_DIR
from rulesync.rules.frontmatter import split_frontmatter
from rulesync.rules.models import CanonicalRule, RuleFrontmatter, resolve_within
from rulesync.rules.registry import override_schemas
from rulesync.rules.schema import ensure_valid_frontmatter
from rulesync.utils import FileSystem, LocalFileSystem


def parse_canonical_rule(
    text: str,
    relative_file_path: str,
    relative_dir_path: str = RULESYNC_RULES_DIR,
    base_dir: Path = Path("."),
    path: Optional[Path] = None,
) -> CanonicalRule:
    """Split, validate and normalize one canonical rule document.

    Missing ``root``/``targets``/``description``/``globs`` are filled in here,
    so every loaded rule carries concrete values.
    """
    raw, body = split_frontmatter(text, path)
    ensure_valid_frontmatter(raw, path=path, override_schemas=override_schemas())
    return CanonicalRule(
        relative_file_path=relative_file_path,
        frontmatter=RuleFrontmatter.from_dict(raw).normalized(),
        body=body.strip(),
        relative_dir_path=relative_dir_path,
        base_dir=base_dir,
    )


def load_canonical_rule(
    base_dir: Path,
    relative_file_path: str,
    relative_dir_path: str = RULESYNC_RULES_DIR,
    filesystem: Optional[FileSystem] = None,
) -> CanonicalRule:
    rule_dir = "." if relative_dir_path in ("", ".") else relative_dir_path
    path = resolve_within(base_dir, f"{rule_dir}/{relative_file_path}")
    text = (filesystem or LocalFileSystem()).read_file(path)
    return parse_canonical_rule(
        text,
        relative_file_path,
        relative_dir_path=relative_dir_path,
        base_dir=base_dir,
        path=path,
    )


def serialize_canonical_rule(rule: CanonicalRule) -> str:
    return rule.file_content
